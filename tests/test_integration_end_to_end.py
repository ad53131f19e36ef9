"""End-to-end tests: text in, stepped convolution and theory report out."""

import numpy as np
import pytest

from sigconv import (
    ConvolutionEngine,
    ParseError,
    parse_signal,
    parse_time_grid,
)


def test_classic_example_on_wide_grid():
    """x = [1, 2, 1, 1], h = [1, 1, 1] on n = -3:8."""
    n = parse_time_grid("-3:8")
    engine = ConvolutionEngine()
    engine.initialize([1, 2, 1, 1], [1, 1, 1], n, n)

    out_n, y = engine.get_complete_output()
    assert len(y) == 6
    np.testing.assert_array_equal(y, [1, 3, 4, 4, 2, 1])
    # Samples occupy n = -3..0 and n = -3..-1 of the longer grid
    np.testing.assert_array_equal(out_n.values, np.arange(-6.0, 0.0))
    assert out_n.step == 1.0
    assert engine.verify_compliance().time_indexing.passed
    assert engine.verify_compliance().is_valid


def test_step_times_step():
    """u[n] * u[n] over n = -5:5 ramps up from n = 0."""
    n = parse_time_grid("-5:5")
    x = parse_signal("u[n]", n)
    h = parse_signal("u[n]", n)

    engine = ConvolutionEngine()
    engine.initialize(x, h)
    out_n, y = engine.get_complete_output()

    assert len(y) == 21
    assert out_n.start == -10.0
    assert out_n.end == 10.0
    np.testing.assert_array_equal(y[:10], np.zeros(10))
    np.testing.assert_array_equal(y[10:16], np.arange(1.0, 7.0))

    report = engine.verify_compliance()
    assert report.commutativity.passed
    assert report.length.passed
    assert report.time_indexing.passed


def test_unit_impulse_reproduces_h():
    """x = [1] against h = delta[n-2] over n = 0:4."""
    n = parse_time_grid("0:4")
    h = parse_signal("delta[n-2]", n)

    engine = ConvolutionEngine()
    engine.initialize([1.0], h.samples, n, n)
    report = engine.verify_compliance()

    assert report.impulse_response.passed
    np.testing.assert_array_equal(engine.reference, h.samples)
    assert report.is_valid

    out_n, y = engine.get_complete_output()
    np.testing.assert_array_equal(out_n.values, n.values)
    assert out_n.values[np.argmax(y)] == 2.0
    assert engine.compute_step_for_index(2).y_n == 1.0


@pytest.mark.parametrize("text", ["1/2", "[[1,2]]", "1+2i"])
def test_rejected_expressions_never_reach_the_engine(text):
    engine = ConvolutionEngine()
    with pytest.raises(ParseError):
        engine.initialize(parse_signal(text, parse_time_grid("0:3")), [1.0], [0, 1, 2, 3])
    assert not engine.is_initialized


def test_commutativity_on_random_sequences(rng):
    engine = ConvolutionEngine()
    swapped = ConvolutionEngine()
    for _ in range(20):
        x = rng.standard_normal(rng.integers(1, 30))
        h = rng.standard_normal(rng.integers(1, 30))
        nx = np.arange(len(x), dtype=float)
        nh = np.arange(len(h), dtype=float)

        engine.initialize(x, h, nx, nh)
        swapped.initialize(h, x, nh, nx)

        assert engine.verify_compliance().commutativity.passed
        np.testing.assert_allclose(engine.reference, swapped.reference, atol=1e-10)


def test_stepping_reconstructs_parsed_convolution():
    n = parse_time_grid("-4:6")
    x = parse_signal("0.8^n*u[n]", n)
    h = parse_signal("u[n]-u[n-3]", n)

    engine = ConvolutionEngine()
    engine.initialize(x, h)
    collected = []
    while not engine.is_complete():
        step = engine.compute_step()
        collected.append(step.y_n)
        assert step.product.sum() == pytest.approx(step.y_n)

    np.testing.assert_array_equal(collected, np.convolve(x.samples, h.samples))
    assert engine.get_convolution_comparison().status == "PERFECT MATCH"
    assert engine.verify_compliance().status == "THEORY COMPLIANT"


def test_parsing_is_idempotent():
    n = parse_time_grid("-2:0.5:2")
    text = "u[n] + 0.5*sin[0.2*n]"
    assert parse_signal(text, n) == parse_signal(text, n)
