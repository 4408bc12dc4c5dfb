"""Sequential diagnostic-step orchestrator.

Runs the steps of a suite one at a time in registry order, threading the
values each step produces into the next, and stops at the first failure.
Every state change is published to subscribers as an immutable snapshot.

Runs are tagged with a generation number. Starting a run resets all steps,
bumps the generation and cancels the run in flight, if any; updates carrying
an older generation are discarded, so an abandoned run can never overwrite
the state of a newer one. Provider access is serialized by a lock, and the
previous handle is disposed (awaited) before the first step of the new run.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from sdkprobe.diagnostics.errors import DiagnosticError, StepTimeoutError
from sdkprobe.diagnostics.models import (
    DiagnosticStep,
    RunContext,
    RunStatus,
    StepOutcome,
    StepStatus,
)
from sdkprobe.diagnostics.status import aggregate
from sdkprobe.diagnostics.suites import DiagnosticSuite
from sdkprobe.providers.base import VerificationProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunSnapshot:
    """Published view of the orchestrator state after one change."""
    generation: int
    steps: Tuple[DiagnosticStep, ...]
    status: RunStatus
    changed_step: Optional[str] = None

    def step(self, step_id: str) -> DiagnosticStep:
        for step in self.steps:
            if step.id == step_id:
                return step
        raise KeyError(step_id)


Listener = Callable[[RunSnapshot], None]


class DiagnosticOrchestrator:
    """Drives one diagnostic suite against one verification provider."""

    def __init__(
        self,
        suite: DiagnosticSuite,
        provider: VerificationProvider,
        *,
        step_pause_seconds: float = 0.0,
        step_timeout_seconds: Optional[float] = None,
    ) -> None:
        self.suite = suite
        self.provider = provider
        self.step_pause_seconds = max(0.0, step_pause_seconds)
        self.step_timeout_seconds = step_timeout_seconds
        self._steps: Dict[str, DiagnosticStep] = {
            definition.id: DiagnosticStep.from_definition(definition)
            for definition in suite.registry
        }
        self._generation = 0
        self._context: Optional[RunContext] = None
        self._active_task: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def steps(self) -> Tuple[DiagnosticStep, ...]:
        return tuple(self._steps.values())

    @property
    def status(self) -> RunStatus:
        return aggregate(self._steps.values())

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def context(self) -> Optional[RunContext]:
        """Context of the most recent run, or None before the first run."""
        return self._context

    def get_step(self, step_id: str) -> DiagnosticStep:
        return self._steps[step_id]

    def snapshot(self, changed_step: Optional[str] = None) -> RunSnapshot:
        return RunSnapshot(
            generation=self._generation,
            steps=self.steps,
            status=self.status,
            changed_step=changed_step,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called after every state change.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, changed_step: Optional[str]) -> None:
        snapshot = self.snapshot(changed_step)
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Diagnostic listener failed; continuing run")

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    def _is_current(self, context: RunContext) -> bool:
        return context.generation == self._generation

    def _reset(self, raw_input: str) -> RunContext:
        self._generation += 1
        context = RunContext(generation=self._generation, raw_input=raw_input)
        self._context = context
        self._steps = {
            step_id: step.transition(StepStatus.IDLE)
            for step_id, step in self._steps.items()
        }
        self._notify(None)
        return context

    def _update(
        self,
        context: RunContext,
        step_id: str,
        status: StepStatus,
        detail: Optional[str] = None,
    ) -> bool:
        """Apply a transition if ``context`` still belongs to the current run."""
        if not self._is_current(context):
            logger.debug(
                f"Discarding stale update for step '{step_id}' "
                f"(run {context.generation}, current {self._generation})"
            )
            return False
        self._steps[step_id] = self._steps[step_id].transition(status, detail)
        self._notify(step_id)
        return True

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def run(self, raw_input: str) -> None:
        """Run every step of the suite against ``raw_input``.

        Never raises for step failures; the outcome is observable through
        ``steps``, ``status`` and subscriber snapshots.
        """
        previous = self._active_task
        task = asyncio.current_task()
        if previous is not None and previous is not task and not previous.done():
            previous.cancel()
        self._active_task = task

        context = self._reset(raw_input)
        logger.info(f"Starting {self.suite.name} diagnostics (run {context.generation})")

        try:
            async with self._lock:
                if not self._is_current(context):
                    return
                await self._dispose_previous_handle()
                for step_id in self.suite.registry.ids:
                    if not await self._run_step(context, step_id):
                        break
        except asyncio.CancelledError:
            if self._is_current(context):
                raise
            # Superseded by a newer run: the new run owns the state now.
            if task is not None and hasattr(task, "uncancel"):
                task.uncancel()
            logger.info(f"Run {context.generation} superseded by run {self._generation}")
            return
        finally:
            if self._active_task is task:
                self._active_task = None

        if self._is_current(context):
            logger.info(
                f"{self.suite.name} diagnostics finished with status "
                f"{self.status.value} (run {context.generation})"
            )

    async def _dispose_previous_handle(self) -> None:
        try:
            await self.provider.dispose()
        except Exception:
            logger.exception("Disposing the previous handle failed")

    async def _run_step(self, context: RunContext, step_id: str) -> bool:
        """Run one step; return True if the run should continue."""
        if not self._update(context, step_id, StepStatus.RUNNING):
            return False

        if self.step_pause_seconds:
            await asyncio.sleep(self.step_pause_seconds)
            if not self._is_current(context):
                return False

        check = self.suite.checks[step_id]
        try:
            outcome = await self._await_check(check(self.provider, context))
        except DiagnosticError as e:
            logger.warning(f"Step '{step_id}' failed: {e.message}")
            self._update(context, step_id, StepStatus.ERROR, e.message)
            return False
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.exception(f"Unexpected error in step '{step_id}'")
            self._update(context, step_id, StepStatus.ERROR, f"Unexpected error: {e}")
            return False

        if not self._is_current(context):
            return False
        context.values.update(outcome.produces)
        return self._update(context, step_id, StepStatus.SUCCESS, outcome.detail)

    async def _await_check(self, pending) -> StepOutcome:
        if self.step_timeout_seconds is None:
            return await pending
        try:
            return await asyncio.wait_for(pending, timeout=self.step_timeout_seconds)
        except asyncio.TimeoutError:
            raise StepTimeoutError(
                f"No response after {self.step_timeout_seconds:g} seconds."
            ) from None

    async def close(self) -> None:
        """Dispose the provider's handle; the last run's state stays readable."""
        await self._dispose_previous_handle()

    async def __aenter__(self) -> "DiagnosticOrchestrator":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> bool:
        await self.close()
        return False
