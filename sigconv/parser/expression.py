"""Recursive parser for signal expressions.

Rules are tried in a fixed order and the first one that matches wins:

1. Direct vector ``[v1, v2, ...]`` (whole input only).
2. Compound expression, split at a top-level operator:

   a. ``+``, scanning right to left, skipping a ``+`` that directly
      follows a number;
   b. ``-``, scanning right to left, skipping a ``-`` that directly
      follows a number;
   c. ``*``, scanning left to right.

   A split point is accepted only when both sides parse on their own;
   otherwise the scan moves on to the next candidate.
3. Single function ``name[arg]`` with the restricted argument grammar
   ``n | -n | n+k | n-k | c*n | c``, or the composition
   ``outer[inner[arg]]``.
4. Simple terminal: ``n``, ``c*n``, ``c^n`` or a constant ``c``.

Because multiplication is tried after both additive operators,
``u[n] + 0.5*sin[0.2*n]`` splits on ``+`` first and leaves
``0.5*sin[0.2*n]`` for the multiplicative rule. Skipping operators that
follow a number means ``2-n`` is rejected rather than read as ``2 - n``.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from sigconv.errors import ParseError, ParseErrorCode
from sigconv.logging import get_logger
from sigconv.signals.timegrid import parse_bracket_numbers

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
from .tokens import (
    Token,
    TokenKind,
    bracket_depths,
    compact,
    is_balanced,
    matching_bracket,
    tokenize,
)

logger = get_logger(__name__)

_PRIMITIVES = {kind.value: kind for kind in PrimitiveKind}

_ADDITIVE = (
    (TokenKind.PLUS, BinaryOperator.ADD),
    (TokenKind.MINUS, BinaryOperator.SUB),
)


def parse_expression(text: str) -> Node:
    """
    Parse a signal expression into an expression tree.

    Whitespace is removed before tokenizing, so it never separates tokens:
    ``"1 2"`` reads as the constant 12 and ``"u [n]"`` as ``u[n]``. Inside
    a direct vector such as ``"[1 2]"`` whitespace still separates values.

    Parameters
    ----------
    text : str
        Expression such as ``"0.8^n*u[n]"`` or ``"[1, 2, 1]"``.

    Returns
    -------
    Node
        Root of the parsed expression tree.

    Raises
    ------
    ParseError
        ``EMPTY_INPUT`` for blank input, a lexical code from
        :func:`sigconv.parser.tokens.tokenize`, or
        ``UNPARSEABLE_EXPRESSION`` when no rule matches.
    """
    if text is None or not text.strip():
        raise ParseError("Input string is empty", ParseErrorCode.EMPTY_INPUT, text)

    stripped = text.strip()
    if _is_direct_vector(stripped):
        return Literal(tuple(float(v) for v in parse_bracket_numbers(stripped)))

    tokens = tokenize(stripped)
    if not is_balanced(tokens):
        raise ParseError(
            f"Unbalanced brackets in {text!r}",
            ParseErrorCode.UNPARSEABLE_EXPRESSION,
            text,
        )

    node = _parse_node(tokens)
    if node is None:
        raise ParseError(
            f"Unable to parse expression {compact(text)!r}",
            ParseErrorCode.UNPARSEABLE_EXPRESSION,
            text,
        )
    logger.debug("Parsed %r as %s", text, node)
    return node


def _is_direct_vector(text: str) -> bool:
    if not (text.startswith("[") and text.endswith("]")):
        return False
    # "[1,2]*u[n]" also starts and ends with a bracket but is not a vector.
    inner = text[1:-1]
    return "[" not in inner and "]" not in inner


def _parse_node(tokens: Sequence[Token]) -> Optional[Node]:
    if not tokens:
        return None
    for rule in (_parse_compound, _parse_function, _parse_simple):
        node = rule(tokens)
        if node is not None:
            return node
    return None


def _top_level_positions(tokens: Sequence[Token], kind: TokenKind) -> List[int]:
    depths = bracket_depths(tokens)
    return [i for i, tok in enumerate(tokens) if tok.kind is kind and depths[i] == 0]


def _split(tokens: Sequence[Token], index: int, op: BinaryOperator) -> Optional[Node]:
    left = _parse_node(tokens[:index])
    if left is None:
        return None
    right = _parse_node(tokens[index + 1 :])
    if right is None:
        return None
    return BinaryOp(op, left, right)


def _parse_compound(tokens: Sequence[Token]) -> Optional[Node]:
    for kind, op in _ADDITIVE:
        # A leading sign disables this operator for the whole expression.
        if tokens[0].kind is kind:
            continue
        for index in reversed(_top_level_positions(tokens, kind)):
            if index == 0 or tokens[index - 1].kind is TokenKind.NUMBER:
                continue
            node = _split(tokens, index, op)
            if node is not None:
                return node

    for index in _top_level_positions(tokens, TokenKind.STAR):
        node = _split(tokens, index, BinaryOperator.MUL)
        if node is not None:
            return node
    return None


def _function_call(tokens: Sequence[Token]) -> Optional[tuple]:
    """Split ``name[...]`` into its kind and bracket contents."""
    if len(tokens) < 3:
        return None
    head, bracket = tokens[0], tokens[1]
    if head.kind is not TokenKind.IDENT or head.text not in _PRIMITIVES:
        return None
    if bracket.kind is not TokenKind.LBRACKET:
        return None
    if matching_bracket(tokens, 1) != len(tokens) - 1:
        return None
    return _PRIMITIVES[head.text], tokens[2:-1]


def _parse_function(tokens: Sequence[Token]) -> Optional[Node]:
    call = _function_call(tokens)
    if call is None:
        return None
    kind, inner = call

    inner_call = _function_call(inner)
    if inner_call is not None:
        inner_kind, inner_arg = inner_call
        argument = _parse_argument(inner_arg)
        if argument is None:
            return None
        return Primitive(kind, Primitive(inner_kind, argument))

    argument = _parse_argument(inner)
    if argument is None:
        return None
    return Primitive(kind, argument)


def _signed_number(tokens: Sequence[Token]) -> Optional[float]:
    """Value of ``[+|-] NUMBER``, or None."""
    if len(tokens) == 1 and tokens[0].kind is TokenKind.NUMBER:
        return float(tokens[0].text)
    if (
        len(tokens) == 2
        and tokens[0].kind in (TokenKind.PLUS, TokenKind.MINUS)
        and tokens[1].kind is TokenKind.NUMBER
    ):
        value = float(tokens[1].text)
        return -value if tokens[0].kind is TokenKind.MINUS else value
    return None


def _is_variable(token: Token) -> bool:
    return token.kind is TokenKind.IDENT and token.text == "n"


def _parse_argument(tokens: Sequence[Token]) -> Optional[Node]:
    """Restricted argument grammar: ``n``, ``-n``, ``n+k``, ``n-k``, ``c*n``, ``c``."""
    if not tokens:
        return None

    if len(tokens) == 1 and _is_variable(tokens[0]):
        return Identity()

    if len(tokens) == 2 and tokens[0].kind is TokenKind.MINUS and _is_variable(tokens[1]):
        return BinaryOp(BinaryOperator.MUL, Constant(-1.0), Identity())

    if (
        len(tokens) == 3
        and _is_variable(tokens[0])
        and tokens[1].kind in (TokenKind.PLUS, TokenKind.MINUS)
        and tokens[2].kind is TokenKind.NUMBER
    ):
        op = BinaryOperator.ADD if tokens[1].kind is TokenKind.PLUS else BinaryOperator.SUB
        return BinaryOp(op, Identity(), Constant(float(tokens[2].text)))

    if len(tokens) >= 3 and tokens[-2].kind is TokenKind.STAR and _is_variable(tokens[-1]):
        coeff = _signed_number(tokens[:-2])
        if coeff is not None:
            return BinaryOp(BinaryOperator.MUL, Constant(coeff), Identity())
        return None

    value = _signed_number(tokens)
    if value is not None:
        return Constant(value)
    return None


def _parse_simple(tokens: Sequence[Token]) -> Optional[Node]:
    if len(tokens) == 1 and _is_variable(tokens[0]):
        return Identity()

    if len(tokens) >= 3 and _is_variable(tokens[-1]):
        value = _signed_number(tokens[:-2])
        if value is not None:
            if tokens[-2].kind is TokenKind.STAR:
                return BinaryOp(BinaryOperator.MUL, Constant(value), Identity())
            if tokens[-2].kind is TokenKind.CARET:
                return Exponential(value)
        return None

    value = _signed_number(tokens)
    if value is not None:
        return Constant(value)
    return None


__all__ = ["parse_expression"]
