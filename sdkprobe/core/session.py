# sdkprobe/core/session.py

from __future__ import annotations

from typing import Any, Dict, Optional

from sdkprobe.config.service import ConfigService, get_config_service
from sdkprobe.diagnostics.models import RunStatus
from sdkprobe.diagnostics.orchestrator import DiagnosticOrchestrator, Listener
from sdkprobe.diagnostics.suites import DiagnosticSuite, build_suite
from sdkprobe.infra.logger import configure_logging, setup_logger
from sdkprobe.providers.base import VerificationProvider
from sdkprobe.providers.factory import get_provider

logger = setup_logger(__name__)


class DiagnosticSession:
    """
    Operator-facing state around one orchestrator: the selected suite, the
    configuration text being edited, and the run-again/restore actions.
    """

    def __init__(
        self,
        suite: DiagnosticSuite,
        provider: VerificationProvider,
        *,
        step_pause_seconds: float = 0.0,
        step_timeout_seconds: Optional[float] = None,
        config_text: Optional[str] = None,
    ) -> None:
        self.suite = suite
        self.orchestrator = DiagnosticOrchestrator(
            suite,
            provider,
            step_pause_seconds=step_pause_seconds,
            step_timeout_seconds=step_timeout_seconds,
        )
        self.config_text = config_text if config_text is not None else suite.default_config_text()

    @classmethod
    def from_config(
        cls,
        suite_name: Optional[str] = None,
        *,
        config_service: Optional[ConfigService] = None,
        step_pause_seconds: Optional[float] = None,
        step_timeout_seconds: Optional[float] = None,
    ) -> DiagnosticSession:
        """
        Build a session from app_config.yaml, with optional overrides.
        A timeout override of 0 disables the bounded wait.
        """
        service = config_service or get_config_service()
        diagnostics: Dict[str, Any] = service.get_diagnostics_config()
        name = suite_name or diagnostics["suite"]
        configure_logging(name)
        provider_config = service.get_provider_config(name)

        suite = build_suite(name, provider_config.get("default_config"))
        provider = get_provider(name, provider_config)

        pause = diagnostics["step_pause_seconds"] if step_pause_seconds is None else step_pause_seconds
        if step_timeout_seconds is None:
            timeout = diagnostics["step_timeout_seconds"]
        else:
            timeout = step_timeout_seconds or None

        logger.info(f"Diagnostic session for suite '{name}' (pause={pause}, timeout={timeout})")
        return cls(suite, provider, step_pause_seconds=pause, step_timeout_seconds=timeout)

    @property
    def provider(self) -> VerificationProvider:
        return self.orchestrator.provider

    @property
    def status(self) -> RunStatus:
        return self.orchestrator.status

    def subscribe(self, listener: Listener):
        return self.orchestrator.subscribe(listener)

    def set_config_text(self, text: str) -> None:
        self.config_text = text

    def restore_default_config(self) -> str:
        """Replace the edited configuration with the suite default."""
        self.config_text = self.suite.default_config_text()
        logger.info(f"Restored default {self.suite.name} configuration")
        return self.config_text

    async def run(self) -> RunStatus:
        """Run the suite against the current configuration text."""
        await self.orchestrator.run(self.config_text)
        return self.orchestrator.status

    async def close(self) -> None:
        await self.orchestrator.close()
