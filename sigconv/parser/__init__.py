"""Signal expression language.

Turns textual notation such as ``u[n-2]``, ``0.8^n*u[n]``, ``sin[cos[n]]``
or ``[1, 2, 1]`` into sampled signals over a time grid.
"""

from .evaluate import apply_primitive, evaluate
from .expression import parse_expression
from .nodes import (
    BinaryOp,
    BinaryOperator,
    Constant,
    Exponential,
    Identity,
    Literal,
    Node,
    Primitive,
    PrimitiveKind,
)
from .signal_parser import parse_signal
from .tokens import Token, TokenKind, tokenize

__all__ = [
    # Entry points
    "parse_signal",
    "parse_expression",
    "evaluate",
    "apply_primitive",
    # Tokens
    "Token",
    "TokenKind",
    "tokenize",
    # Expression tree
    "Node",
    "Literal",
    "Identity",
    "Constant",
    "Exponential",
    "Primitive",
    "PrimitiveKind",
    "BinaryOp",
    "BinaryOperator",
]
