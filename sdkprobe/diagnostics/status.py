"""Aggregate status projection."""

from __future__ import annotations

from typing import Iterable

from sdkprobe.diagnostics.models import DiagnosticStep, RunStatus, StepStatus


def aggregate(steps: Iterable[DiagnosticStep]) -> RunStatus:
    """Derive the run status from per-step statuses.

    ``error`` if any step errored, ``success`` if every step succeeded,
    ``pending`` otherwise. An empty sequence counts as ``success``.
    """
    statuses = [step.status for step in steps]
    if any(status is StepStatus.ERROR for status in statuses):
        return RunStatus.ERROR
    if all(status is StepStatus.SUCCESS for status in statuses):
        return RunStatus.SUCCESS
    return RunStatus.PENDING
