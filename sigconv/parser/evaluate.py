"""Evaluation of expression trees over a time grid."""

from __future__ import annotations

import numpy as np

from sigconv.config import DEFAULT_TOLERANCES, Tolerances
from sigconv.logging import get_logger

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

logger = get_logger(__name__)


def apply_primitive(
    kind: PrimitiveKind,
    arg: np.ndarray,
    tolerances: Tolerances = DEFAULT_TOLERANCES,
) -> np.ndarray:
    """Apply a named primitive element-wise.

    Args:
        kind: Primitive to apply.
        arg: Argument values.
        tolerances: ``delta_width`` sets the half-width of ``delta``.

    Returns:
        ``u``: 1 where arg >= 0; ``delta``: 1 where |arg| < delta_width;
        ``sin``/``cos``/``tan``; ``gauss``: exp(-arg^2 / 2); ``abs``: |arg|.
    """
    if kind is PrimitiveKind.U:
        return (arg >= 0).astype(float)
    if kind is PrimitiveKind.DELTA:
        return (np.abs(arg) < tolerances.delta_width).astype(float)
    if kind is PrimitiveKind.SIN:
        return np.sin(arg)
    if kind is PrimitiveKind.COS:
        return np.cos(arg)
    if kind is PrimitiveKind.TAN:
        return np.tan(arg)
    if kind is PrimitiveKind.GAUSS:
        return np.exp(-(arg**2) / 2.0)
    if kind is PrimitiveKind.ABS:
        return np.abs(arg)
    raise ValueError(f"Unsupported primitive: {kind!r}")


def evaluate(
    node: Node,
    n: np.ndarray,
    tolerances: Tolerances = DEFAULT_TOLERANCES,
) -> np.ndarray:
    """Evaluate an expression tree at every position of ``n``.

    Literal vectors are left-aligned: shorter vectors are zero-padded on the
    right and longer ones are truncated with a warning. Numeric overflow and
    invalid operations are not trapped here; callers decide what to do with
    non-finite results.

    Args:
        node: Expression tree from :func:`sigconv.parser.parse_expression`.
        n: Grid positions (1D array).
        tolerances: Numeric tolerances for the primitives.

    Returns:
        Float array with one value per grid position.
    """
    n = np.asarray(n, dtype=float)

    if isinstance(node, Literal):
        values = np.asarray(node.values, dtype=float)
        out = np.zeros(n.shape, dtype=float)
        if len(values) > len(n):
            logger.warning(
                "Input vector has %d elements but time grid has only %d; truncating",
                len(values),
                len(n),
            )
            values = values[: len(n)]
        out[: len(values)] = values
        return out

    if isinstance(node, Identity):
        return n.copy()

    if isinstance(node, Constant):
        return np.full(n.shape, node.value, dtype=float)

    if isinstance(node, Exponential):
        with np.errstate(all="ignore"):
            return np.power(node.base, n)

    if isinstance(node, Primitive):
        arg = evaluate(node.argument, n, tolerances)
        with np.errstate(all="ignore"):
            return apply_primitive(node.kind, arg, tolerances)

    if isinstance(node, BinaryOp):
        left = evaluate(node.left, n, tolerances)
        right = evaluate(node.right, n, tolerances)
        with np.errstate(all="ignore"):
            if node.op is BinaryOperator.ADD:
                return left + right
            if node.op is BinaryOperator.SUB:
                return left - right
            if node.op is BinaryOperator.MUL:
                return left * right
        raise ValueError(f"Unsupported operator: {node.op!r}")

    raise TypeError(f"Unsupported expression node: {type(node).__name__}")


__all__ = ["apply_primitive", "evaluate"]
