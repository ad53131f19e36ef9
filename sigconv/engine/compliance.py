"""
Verification of a convolution result against convolution theory.

The checks are independent and always all reported:

* length: the full convolution of ``Lx`` and ``Lh`` samples has
  ``Lx + Lh - 1`` samples;
* commutativity: ``x * h == h * x``;
* impulse response: ``delta * h == h`` (only when x is the unit impulse);
* time indexing: the output support is ``[nx[0]+nh[0], nx[-1]+nh[-1]]``;
* self-consistency: the samples revealed by stepping equal the reference.

A failed check is data in the report, never an exception.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

import numpy as np

from sigconv.config import DEFAULT_TOLERANCES, Tolerances
from sigconv.diagnostics.core import is_unit_impulse, max_abs_error
from sigconv.dsp import convolve


class CheckStatus(Enum):
    PASS = "PASS"
    FAIL = "FAIL"
    NOT_APPLICABLE = "N/A"


@dataclass(frozen=True)
class ComplianceCheck:
    """
    Outcome of one theory check.

    Attributes:
        name: Human-readable check name.
        status: PASS, FAIL or NOT_APPLICABLE.
        detail: Short explanation (measured values, reason for N/A).
    """

    name: str
    status: CheckStatus
    detail: str = ""

    @property
    def passed(self) -> bool:
        return self.status is CheckStatus.PASS

    @property
    def applicable(self) -> bool:
        return self.status is not CheckStatus.NOT_APPLICABLE

    def __str__(self) -> str:
        text = f"{self.name}: {self.status.value}"
        return f"{text} ({self.detail})" if self.detail else text


@dataclass(frozen=True)
class ComplianceReport:
    """
    Snapshot of all theory checks for one convolution session.

    ``is_valid`` is the conjunction of the length, commutativity and
    self-consistency checks, plus the impulse-response check when it
    applies. Time indexing is reported but not part of the verdict.
    """

    length: ComplianceCheck
    commutativity: ComplianceCheck
    impulse_response: ComplianceCheck
    time_indexing: ComplianceCheck
    self_consistency: ComplianceCheck

    @property
    def checks(self) -> Tuple[ComplianceCheck, ...]:
        return (
            self.length,
            self.commutativity,
            self.impulse_response,
            self.time_indexing,
            self.self_consistency,
        )

    @property
    def is_valid(self) -> bool:
        verdict = [self.length, self.commutativity, self.self_consistency]
        if self.impulse_response.applicable:
            verdict.append(self.impulse_response)
        return all(check.passed for check in verdict)

    @property
    def status(self) -> str:
        return "THEORY COMPLIANT" if self.is_valid else "THEORY VIOLATION"

    def summary_lines(self) -> List[str]:
        return [str(check) for check in self.checks] + [self.status]


@dataclass(frozen=True)
class ConvolutionComparison:
    """
    Element-wise comparison of an engine output with the reference.

    Attributes:
        length_match: Both outputs have the same number of samples.
        values_match: Maximum error is below the compliance tolerance.
        max_error: Maximum absolute error (inf on length mismatch).
        relative_error: ``max_error`` over the largest magnitude in either
            output (0 when both are all-zero).
        status: Graded text: PERFECT MATCH, EXCELLENT, GOOD or ERROR.
    """

    length_match: bool
    values_match: bool
    max_error: float
    relative_error: float
    status: str


def _status(ok: bool) -> CheckStatus:
    return CheckStatus.PASS if ok else CheckStatus.FAIL


def compare_outputs(
    y: np.ndarray,
    reference: np.ndarray,
    tolerances: Tolerances = DEFAULT_TOLERANCES,
) -> ConvolutionComparison:
    """Grade how closely ``y`` reproduces ``reference``."""
    y = np.asarray(y, dtype=float)
    reference = np.asarray(reference, dtype=float)

    length_match = y.shape == reference.shape
    max_error = float("inf")
    relative_error = float("inf")
    values_match = False
    if length_match and y.size > 0:
        max_error = max_abs_error(y, reference)
        peak = max(float(np.max(np.abs(y))), float(np.max(np.abs(reference))))
        relative_error = max_error / peak if peak > 0 else 0.0
        values_match = max_error < tolerances.compliance

    if values_match:
        status = "PERFECT MATCH"
    elif max_error < 1e-6:
        status = f"EXCELLENT (max error: {max_error:.2e})"
    elif max_error < 1e-3:
        status = f"GOOD (max error: {max_error:.2e})"
    else:
        status = f"ERROR (max error: {max_error:.2e})"

    return ConvolutionComparison(
        length_match=length_match,
        values_match=values_match,
        max_error=max_error,
        relative_error=relative_error,
        status=status,
    )


def verify_compliance(
    x: np.ndarray,
    h: np.ndarray,
    nx: np.ndarray,
    nh: np.ndarray,
    reference: np.ndarray,
    output_range: np.ndarray,
    y_output: np.ndarray,
    revealed: int,
    tolerances: Tolerances = DEFAULT_TOLERANCES,
) -> ComplianceReport:
    """
    Run every theory check on one convolution result.

    Args:
        x: Original (unpadded) first signal.
        h: Original (unpadded) second signal.
        nx: Grid positions of ``x``.
        nh: Grid positions of ``h``.
        reference: Authoritative convolution of ``x`` and ``h``.
        output_range: Time positions assigned to ``reference``.
        y_output: Buffer filled by stepping.
        revealed: Number of leading ``y_output`` samples revealed so far.
        tolerances: ``compliance`` bounds every numeric comparison.

    Returns:
        The full ComplianceReport.
    """
    atol = tolerances.compliance
    x = np.asarray(x, dtype=float)
    h = np.asarray(h, dtype=float)
    reference = np.asarray(reference, dtype=float)
    output_range = np.asarray(output_range, dtype=float)
    y_output = np.asarray(y_output, dtype=float)

    expected_length = len(x) + len(h) - 1
    length = ComplianceCheck(
        "Output length",
        _status(len(reference) == expected_length),
        f"{len(reference)} (expected: {expected_length})",
    )

    commutative_error = max_abs_error(reference, convolve(h, x))
    commutativity = ComplianceCheck(
        "Commutativity",
        _status(commutative_error < atol),
        f"max error {commutative_error:.2e}",
    )

    if is_unit_impulse(x, atol):
        impulse_error = max_abs_error(reference, h)
        impulse_response = ComplianceCheck(
            "Impulse response",
            _status(impulse_error < atol),
            f"max error {impulse_error:.2e}",
        )
    else:
        impulse_response = ComplianceCheck(
            "Impulse response", CheckStatus.NOT_APPLICABLE, "not delta input"
        )

    if output_range.size:
        expected_start = nx[0] + nh[0]
        expected_end = nx[-1] + nh[-1]
        time_ok = (
            abs(output_range[0] - expected_start) < atol
            and abs(output_range[-1] - expected_end) < atol
        )
        time_indexing = ComplianceCheck(
            "Time indexing",
            _status(time_ok),
            f"[{output_range[0]:g}, {output_range[-1]:g}] "
            f"(expected: [{expected_start:g}, {expected_end:g}])",
        )
    else:
        time_indexing = ComplianceCheck(
            "Time indexing", CheckStatus.NOT_APPLICABLE, "no output range"
        )

    revealed = max(0, min(int(revealed), len(reference)))
    consistency_error = max_abs_error(y_output[:revealed], reference[:revealed])
    if len(y_output) != len(reference):
        consistency_error = float("inf")
    self_consistency = ComplianceCheck(
        "Self-consistency",
        _status(consistency_error < atol),
        f"{revealed}/{len(reference)} samples revealed, "
        f"max error {consistency_error:.2e}",
    )

    return ComplianceReport(
        length=length,
        commutativity=commutativity,
        impulse_response=impulse_response,
        time_indexing=time_indexing,
        self_consistency=self_consistency,
    )


__all__ = [
    "CheckStatus",
    "ComplianceCheck",
    "ComplianceReport",
    "ConvolutionComparison",
    "compare_outputs",
    "verify_compliance",
]
