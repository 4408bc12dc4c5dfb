"""Diagnostics package.

Provides the step data model, step registries, the aggregate status
projection, the verification checks and the sequential orchestrator.
"""

from sdkprobe.diagnostics.models import (
    DiagnosticStep,
    RunContext,
    RunStatus,
    StepDefinition,
    StepOutcome,
    StepStatus,
)
from sdkprobe.diagnostics.errors import (
    ConfigError,
    DiagnosticError,
    InitializationError,
    ProbeError,
    StepTimeoutError,
    SubCapabilityError,
)
from sdkprobe.diagnostics.registry import FIREBASE_STEPS, GEMINI_STEPS, StepRegistry
from sdkprobe.diagnostics.status import aggregate

__all__ = [
    "DiagnosticStep",
    "RunContext",
    "RunStatus",
    "StepDefinition",
    "StepOutcome",
    "StepStatus",
    "ConfigError",
    "DiagnosticError",
    "InitializationError",
    "ProbeError",
    "StepTimeoutError",
    "SubCapabilityError",
    "FIREBASE_STEPS",
    "GEMINI_STEPS",
    "StepRegistry",
    "aggregate",
]
