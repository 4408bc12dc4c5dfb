"""Data model for diagnostic runs.

Steps are immutable values; every transition produces a new DiagnosticStep
that replaces the previous one by id.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional


class StepStatus(str, Enum):
    """Lifecycle state of a single diagnostic step."""
    IDLE = "idle"
    RUNNING = "running"
    SUCCESS = "success"
    ERROR = "error"

    @property
    def is_settled(self) -> bool:
        return self in (StepStatus.SUCCESS, StepStatus.ERROR)


class RunStatus(str, Enum):
    """Aggregate status of a run, derived from its steps."""
    PENDING = "pending"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class StepDefinition:
    """Registry entry: static display data for one step."""
    id: str
    title: str
    description: str


@dataclass(frozen=True)
class DiagnosticStep:
    """Observable state of one step within the current run."""

    id: str
    title: str
    description: str
    status: StepStatus = StepStatus.IDLE
    detail: Optional[str] = None

    @classmethod
    def from_definition(cls, definition: StepDefinition) -> DiagnosticStep:
        return cls(
            id=definition.id,
            title=definition.title,
            description=definition.description,
        )

    def transition(self, status: StepStatus, detail: Optional[str] = None) -> DiagnosticStep:
        """Return a copy of this step with a new status and detail."""
        return replace(self, status=status, detail=detail)


@dataclass(frozen=True)
class StepOutcome:
    """Result of a successful check.

    ``detail`` is the rendered summary shown for the step; ``produces`` holds
    values made available to every later step of the same run.
    """
    detail: str
    produces: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RunContext:
    """State owned by a single run.

    The generation tags every update the run makes so that updates from an
    abandoned run can be discarded.
    """

    generation: int
    raw_input: str
    values: Dict[str, Any] = field(default_factory=dict)

    def require(self, key: str) -> Any:
        """Return a value produced by an earlier step.

        Raises:
            KeyError: If no earlier step produced ``key``.
        """
        try:
            return self.values[key]
        except KeyError:
            raise KeyError(
                f"'{key}' was not produced by an earlier step; "
                "check the step registry order"
            ) from None
