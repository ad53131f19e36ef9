"""Tests for theory verification and output comparison."""

import numpy as np
import pytest

from sigconv.config import Tolerances
from sigconv.engine import (
    CheckStatus,
    ConvolutionEngine,
    compare_outputs,
    verify_compliance,
)


def _report(x, h, nx, nh, **overrides):
    reference = np.convolve(x, h)
    args = dict(
        x=np.asarray(x, dtype=float),
        h=np.asarray(h, dtype=float),
        nx=np.asarray(nx, dtype=float),
        nh=np.asarray(nh, dtype=float),
        reference=reference,
        output_range=np.linspace(nx[0] + nh[0], nx[-1] + nh[-1], len(reference)),
        y_output=reference.copy(),
        revealed=len(reference),
    )
    args.update(overrides)
    return verify_compliance(**args)


def test_valid_result_is_compliant():
    report = _report([1.0, 2.0, 1.0], [1.0, -1.0], [0, 1, 2], [0, 1])
    assert report.is_valid
    assert report.status == "THEORY COMPLIANT"
    assert report.length.passed
    assert report.commutativity.passed
    assert report.time_indexing.passed
    assert report.self_consistency.passed
    assert report.impulse_response.status is CheckStatus.NOT_APPLICABLE
    assert len(report.checks) == 5


def test_impulse_response_check():
    h = [0.5, 1.0, -2.0]
    report = _report([1.0], h, [0], [0, 1, 2])
    assert report.impulse_response.passed
    assert report.is_valid


def test_impulse_response_failure_breaks_compliance():
    reference = np.array([0.5, 1.0, -1.0])
    report = _report(
        [1.0], [0.5, 1.0, -2.0], [0], [0, 1, 2],
        reference=reference, y_output=reference.copy(),
    )
    assert report.impulse_response.status is CheckStatus.FAIL
    assert not report.is_valid


def test_length_failure():
    report = _report(
        [1.0, 2.0], [1.0, 1.0], [0, 1], [0, 1],
        reference=np.array([1.0, 3.0]), y_output=np.array([1.0, 3.0]),
        output_range=np.array([0.0, 2.0]),
    )
    assert report.length.status is CheckStatus.FAIL
    assert "expected: 3" in report.length.detail
    assert not report.is_valid


def test_time_indexing_reported_but_not_in_verdict():
    report = _report(
        [1.0, 2.0], [1.0, 1.0], [0, 1], [0, 1],
        output_range=np.array([1.0, 2.0, 3.0]),
    )
    assert report.time_indexing.status is CheckStatus.FAIL
    assert report.is_valid


def test_self_consistency_failure():
    report = _report(
        [1.0, 2.0], [1.0, 1.0], [0, 1], [0, 1],
        y_output=np.array([1.0, 3.5, 2.0]),
    )
    assert report.self_consistency.status is CheckStatus.FAIL
    assert report.status == "THEORY VIOLATION"
    assert report.summary_lines()[-1] == "THEORY VIOLATION"


def test_self_consistency_only_checks_revealed_samples():
    report = _report(
        [1.0, 2.0], [1.0, 1.0], [0, 1], [0, 1],
        y_output=np.array([1.0, 0.0, 0.0]), revealed=1,
    )
    assert report.self_consistency.passed
    assert "1/3" in report.self_consistency.detail


def test_summary_lines():
    lines = _report([1.0], [1.0], [0], [0]).summary_lines()
    assert len(lines) == 6
    assert lines[0].startswith("Output length: PASS")
    assert lines[-1] == "THEORY COMPLIANT"


def test_engine_compliance_before_and_after_stepping():
    engine = ConvolutionEngine()
    engine.initialize([1.0, 2.0, 1.0, 1.0], [1.0, 1.0, 1.0], np.arange(4.0), np.arange(3.0))
    assert engine.verify_compliance().is_valid
    while not engine.is_complete():
        engine.compute_step()
    report = engine.verify_compliance()
    assert report.is_valid
    assert "6/6" in report.self_consistency.detail


def test_engine_compliance_detects_corrupted_output(log_stream):
    engine = ConvolutionEngine()
    engine.initialize([1.0, 2.0], [1.0, 1.0], [0, 1])
    engine.compute_step()
    engine._session.y_output[0] = 42.0
    report = engine.verify_compliance()
    assert not report.is_valid
    assert "THEORY VIOLATION" in log_stream.getvalue()


def test_compliance_tolerance_is_configurable():
    engine = ConvolutionEngine(Tolerances(compliance=1.0))
    engine.initialize([1.0, 2.0], [1.0, 1.0], [0, 1])
    engine.compute_step()
    engine._session.y_output[0] += 0.5
    assert engine.verify_compliance().self_consistency.passed


@pytest.mark.parametrize(
    "error, status",
    [
        (0.0, "PERFECT MATCH"),
        (1e-8, "EXCELLENT"),
        (1e-4, "GOOD"),
        (0.1, "ERROR"),
    ],
)
def test_compare_outputs_grading(error, status):
    reference = np.array([1.0, 2.0, 3.0])
    comparison = compare_outputs(reference + np.array([0.0, error, 0.0]), reference)
    assert comparison.length_match
    assert comparison.status.startswith(status)
    assert comparison.max_error == pytest.approx(error)
    assert comparison.values_match == (status == "PERFECT MATCH")


def test_compare_outputs_length_mismatch():
    comparison = compare_outputs(np.ones(2), np.ones(3))
    assert not comparison.length_match
    assert not comparison.values_match
    assert comparison.max_error == float("inf")
    assert comparison.status.startswith("ERROR")


def test_compare_outputs_all_zero():
    comparison = compare_outputs(np.zeros(3), np.zeros(3))
    assert comparison.values_match
    assert comparison.relative_error == 0.0


def test_engine_comparison():
    engine = ConvolutionEngine()
    engine.initialize([1.0, 2.0], [3.0], [0, 1])
    assert engine.get_convolution_comparison().status.startswith("ERROR")
    engine.compute_step()
    engine.compute_step()
    assert engine.get_convolution_comparison().status == "PERFECT MATCH"
