"""Tests for expression tree evaluation."""

import numpy as np
import pytest

from sigconv.config import Tolerances
from sigconv.parser import (
    BinaryOp,
    BinaryOperator,
    Constant,
    Exponential,
    Identity,
    Literal,
    Primitive,
    PrimitiveKind,
    apply_primitive,
    evaluate,
)

N = np.arange(-3.0, 4.0)


@pytest.mark.parametrize(
    "kind, expected",
    [
        (PrimitiveKind.U, (N >= 0).astype(float)),
        (PrimitiveKind.DELTA, (N == 0).astype(float)),
        (PrimitiveKind.SIN, np.sin(N)),
        (PrimitiveKind.COS, np.cos(N)),
        (PrimitiveKind.TAN, np.tan(N)),
        (PrimitiveKind.GAUSS, np.exp(-(N**2) / 2.0)),
        (PrimitiveKind.ABS, np.abs(N)),
    ],
)
def test_apply_primitive(kind, expected):
    np.testing.assert_allclose(apply_primitive(kind, N), expected)


def test_delta_width_tolerance():
    arg = np.array([-1e-11, 0.0, 1e-9])
    np.testing.assert_array_equal(apply_primitive(PrimitiveKind.DELTA, arg), [1.0, 1.0, 0.0])
    wide = Tolerances(delta_width=1e-8)
    np.testing.assert_array_equal(
        apply_primitive(PrimitiveKind.DELTA, arg, wide), [1.0, 1.0, 1.0]
    )


def test_evaluate_terminals():
    np.testing.assert_array_equal(evaluate(Identity(), N), N)
    np.testing.assert_array_equal(evaluate(Constant(2.0), N), np.full(7, 2.0))
    np.testing.assert_allclose(evaluate(Exponential(0.5), N), 0.5**N)


def test_evaluate_shifted_step():
    node = Primitive(PrimitiveKind.U, BinaryOp(BinaryOperator.SUB, Identity(), Constant(2.0)))
    np.testing.assert_array_equal(evaluate(node, N), [0, 0, 0, 0, 0, 1, 1])


def test_evaluate_time_reversal():
    node = Primitive(
        PrimitiveKind.U, BinaryOp(BinaryOperator.MUL, Constant(-1.0), Identity())
    )
    np.testing.assert_array_equal(evaluate(node, N), [1, 1, 1, 1, 0, 0, 0])


def test_evaluate_binary_ops():
    n = Identity()
    np.testing.assert_array_equal(
        evaluate(BinaryOp(BinaryOperator.ADD, n, Constant(1.0)), N), N + 1
    )
    np.testing.assert_array_equal(
        evaluate(BinaryOp(BinaryOperator.SUB, n, Constant(1.0)), N), N - 1
    )
    np.testing.assert_array_equal(evaluate(BinaryOp(BinaryOperator.MUL, n, n), N), N * N)


def test_evaluate_composition():
    node = Primitive(PrimitiveKind.SIN, Primitive(PrimitiveKind.COS, Identity()))
    np.testing.assert_allclose(evaluate(node, N), np.sin(np.cos(N)))


def test_literal_is_left_aligned_and_padded():
    np.testing.assert_array_equal(
        evaluate(Literal((1.0, 2.0, 3.0)), N), [1, 2, 3, 0, 0, 0, 0]
    )


def test_literal_truncated_with_warning(log_stream):
    out = evaluate(Literal((1.0, 2.0, 3.0)), np.array([0.0, 1.0]))
    np.testing.assert_array_equal(out, [1.0, 2.0])
    assert "truncating" in log_stream.getvalue()


def test_non_finite_results_are_not_trapped():
    out = evaluate(Exponential(0.0), N)
    assert np.isinf(out[0])
    assert out[3] == 1.0
    assert out[4] == 0.0


def test_unknown_node_type():
    with pytest.raises(TypeError):
        evaluate("n", N)
