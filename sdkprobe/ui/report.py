"""Console presentation of diagnostic runs.

StepReporter subscribes to an orchestrator and prints each step transition
as it happens; the render helpers print a full step list and the summary
banner for a finished run.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

from sdkprobe.diagnostics.models import DiagnosticStep, RunStatus, StepStatus
from sdkprobe.diagnostics.orchestrator import RunSnapshot
from sdkprobe.ui.prompts import PromptStyle, print_separator, ui_print

STATUS_MARKERS: Dict[StepStatus, Tuple[str, str]] = {
    StepStatus.IDLE: ("[ ]", PromptStyle.DIM),
    StepStatus.RUNNING: ("[~]", PromptStyle.INFO),
    StepStatus.SUCCESS: ("[OK]", PromptStyle.SUCCESS),
    StepStatus.ERROR: ("[X]", PromptStyle.ERROR),
}

SUMMARY_BANNERS: Dict[RunStatus, Tuple[str, str, str]] = {
    RunStatus.ERROR: (
        "Connection Error",
        "Problems were found during initialization.",
        PromptStyle.ERROR,
    ),
    RunStatus.SUCCESS: (
        "System Operational",
        "All services initialized correctly.",
        PromptStyle.SUCCESS,
    ),
    RunStatus.PENDING: (
        "Verifying...",
        "Running diagnostic tests...",
        PromptStyle.INFO,
    ),
}


def _indent(text: str, prefix: str = "      ") -> str:
    return "\n".join(prefix + line for line in text.splitlines())


def render_step(step: DiagnosticStep, index: Optional[int] = None) -> None:
    """Print one step with its status marker and, once settled, its detail."""
    marker, style = STATUS_MARKERS[step.status]
    number = f"{index}. " if index is not None else ""
    ui_print(f"  {marker:<5}{number}{step.title}", style)
    if not step.status.is_settled:
        ui_print(f"      {step.description}", PromptStyle.DIM)
    if step.detail:
        ui_print(_indent(step.detail), PromptStyle.ERROR if step.status is StepStatus.ERROR else "")


def render_steps(steps: Iterable[DiagnosticStep]) -> None:
    for index, step in enumerate(steps, 1):
        render_step(step, index)


def render_summary(status: RunStatus) -> None:
    """Print the banner for an aggregate run status."""
    title, message, style = SUMMARY_BANNERS[status]
    print_separator()
    ui_print(f"  {title}", style)
    ui_print(f"  {message}", style)
    print_separator()


class StepReporter:
    """Prints step transitions of the run it is attached to.

    Steps returning to idle during a reset are not echoed; the reporter only
    shows a step when it starts and when it settles.
    """

    def __init__(self) -> None:
        self.generation: Optional[int] = None
        self.last_snapshot: Optional[RunSnapshot] = None

    def __call__(self, snapshot: RunSnapshot) -> None:
        self.last_snapshot = snapshot
        if snapshot.generation != self.generation:
            self.generation = snapshot.generation
            ui_print(f"\nRun #{snapshot.generation}", PromptStyle.HIGHLIGHT)
        if snapshot.changed_step is None:
            return
        ids = [step.id for step in snapshot.steps]
        step = snapshot.step(snapshot.changed_step)
        render_step(step, ids.index(step.id) + 1)
