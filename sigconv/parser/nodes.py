"""Expression tree produced by the signal expression parser.

The grammar has no division and no nested literal vectors, so the node set
is closed: literal vectors, the time variable ``n``, constants,
exponentials ``base^n``, primitive applications and binary ``+ - *``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union


class PrimitiveKind(Enum):
    """Named signal primitives usable as ``name[arg]``."""

    U = "u"
    DELTA = "delta"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    GAUSS = "gauss"
    ABS = "abs"


class BinaryOperator(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"


def _format_number(value: float) -> str:
    return f"{value:g}"


@dataclass(frozen=True)
class Literal:
    """Direct vector ``[v1, v2, ...]``, left-aligned onto the grid."""

    values: Tuple[float, ...]

    def __str__(self) -> str:
        return "[" + ", ".join(_format_number(v) for v in self.values) + "]"


@dataclass(frozen=True)
class Identity:
    """The time variable ``n``."""

    def __str__(self) -> str:
        return "n"


@dataclass(frozen=True)
class Constant:
    value: float

    def __str__(self) -> str:
        return _format_number(self.value)


@dataclass(frozen=True)
class Exponential:
    """``base^n``."""

    base: float

    def __str__(self) -> str:
        return f"{_format_number(self.base)}^n"


@dataclass(frozen=True)
class Primitive:
    """Application ``kind[argument]`` of a named primitive."""

    kind: PrimitiveKind
    argument: "Node"

    def __str__(self) -> str:
        return f"{self.kind.value}[{self.argument}]"


@dataclass(frozen=True)
class BinaryOp:
    op: BinaryOperator
    left: "Node"
    right: "Node"

    def __str__(self) -> str:
        return f"{self.left}{self.op.value}{self.right}"


Node = Union[Literal, Identity, Constant, Exponential, Primitive, BinaryOp]

__all__ = [
    "PrimitiveKind",
    "BinaryOperator",
    "Literal",
    "Identity",
    "Constant",
    "Exponential",
    "Primitive",
    "BinaryOp",
    "Node",
]
