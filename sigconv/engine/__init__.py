"""Convolution engine: materialisation, stepping and theory verification."""

from .compliance import (
    CheckStatus,
    ComplianceCheck,
    ComplianceReport,
    ConvolutionComparison,
    compare_outputs,
    verify_compliance,
)
from .core import ConvolutionEngine
from .materialize import MaterializedPair, materialize, unified_grid
from .session import ConvolutionSession, EngineInfo, EngineState, StepResult

__all__ = [
    "ConvolutionEngine",
    "ConvolutionSession",
    "EngineState",
    "EngineInfo",
    "StepResult",
    "MaterializedPair",
    "materialize",
    "unified_grid",
    "CheckStatus",
    "ComplianceCheck",
    "ComplianceReport",
    "ConvolutionComparison",
    "compare_outputs",
    "verify_compliance",
]
