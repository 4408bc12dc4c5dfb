"""In-memory verification providers used across the test suite."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, List, Optional

from sdkprobe.providers.base import (
    InitResult,
    ParsedConfig,
    SubCapabilityReport,
    VerificationProvider,
)


@dataclass(frozen=True)
class StubHandle:
    """Opaque handle handed out by StubProvider."""
    number: int
    name: str = "stub-app"


class StubProvider(VerificationProvider):
    """Provider that records every call made into it.

    Args:
        init_result: Fixed InitResult to return instead of a fresh handle.
        report: SubCapabilityReport returned by inspect_sub_capability.
        inspect_error: Exception raised by inspect_sub_capability.
        init_gate: Event the first initialize() waits on before returning.
    """

    required_keys = ("apiKey", "projectId")
    sub_capability_name = "Auth"

    def __init__(
        self,
        *,
        init_result: Optional[InitResult] = None,
        report: Optional[SubCapabilityReport] = None,
        inspect_error: Optional[BaseException] = None,
        init_gate: Optional[asyncio.Event] = None,
    ) -> None:
        super().__init__()
        self.init_result = init_result
        self.report = report or SubCapabilityReport(present=True, summary="", session=None)
        self.inspect_error = inspect_error
        self.init_gate = init_gate
        self.init_entered = asyncio.Event()
        self.events: List[str] = []
        self.created: List[StubHandle] = []
        self.inspected: List[Any] = []
        self.configs: List[ParsedConfig] = []

    @property
    def provider_name(self) -> str:
        return "stub"

    async def initialize(self, config: ParsedConfig) -> InitResult:
        await self.dispose()
        self.events.append("initialize")
        self.configs.append(config)
        self.init_entered.set()
        if self.init_gate is not None:
            gate, self.init_gate = self.init_gate, None
            await gate.wait()
        if self.init_result is not None:
            return self.init_result
        handle = StubHandle(number=len(self.created) + 1)
        self.created.append(handle)
        self._handle = handle
        return InitResult(handle=handle, summary='App name: "stub-app"')

    async def inspect_sub_capability(self, handle: Any) -> SubCapabilityReport:
        self.events.append("inspect")
        self.inspected.append(handle)
        if self.inspect_error is not None:
            raise self.inspect_error
        return self.report

    async def dispose(self) -> None:
        self.events.append("dispose")
        self._handle = None


class HangingProvider(StubProvider):
    """Provider whose initialize() never settles."""

    async def initialize(self, config: ParsedConfig) -> InitResult:
        self.events.append("initialize")
        self.init_entered.set()
        await asyncio.Event().wait()
        raise AssertionError("unreachable")
