"""Error taxonomy for diagnostic steps.

SDK-specific exceptions are translated into these types at the provider
boundary; the orchestrator only ever sees DiagnosticError subclasses or
unexpected programming errors.
"""

from __future__ import annotations


class DiagnosticError(Exception):
    """Base class for failures reported as a step's error detail."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConfigError(DiagnosticError):
    """Malformed or incomplete configuration input."""


class InitializationError(DiagnosticError):
    """The provider could not produce a usable client handle."""


class SubCapabilityError(DiagnosticError):
    """The expected sub-capability of the handle is absent or unreachable."""


class StepTimeoutError(DiagnosticError):
    """A verification did not settle within the configured bound."""


class ProbeError(DiagnosticError):
    """A capability probe against an initialized handle failed."""
