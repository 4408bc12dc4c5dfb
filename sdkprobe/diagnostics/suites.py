"""Diagnostic suites: a step registry paired with the checks bound to it."""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from sdkprobe.config.constants import (
    DEFAULT_FIREBASE_CONFIG,
    DEFAULT_GEMINI_CONFIG,
    FIREBASE_SUITE,
    GEMINI_SUITE,
    SUPPORTED_SUITES,
)
from sdkprobe.diagnostics import checks
from sdkprobe.diagnostics.checks import Check
from sdkprobe.diagnostics.registry import FIREBASE_STEPS, GEMINI_STEPS, StepRegistry


@dataclass(frozen=True)
class DiagnosticSuite:
    """A named registry whose every step has a bound check."""

    name: str
    registry: StepRegistry
    checks: Mapping[str, Check]
    default_config: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        unbound = [step_id for step_id in self.registry.ids if step_id not in self.checks]
        if unbound:
            raise ValueError(
                f"Suite '{self.name}' has steps without a check: {', '.join(unbound)}"
            )
        extra = [step_id for step_id in self.checks if step_id not in self.registry]
        if extra:
            raise ValueError(
                f"Suite '{self.name}' binds checks to unknown steps: {', '.join(extra)}"
            )
        object.__setattr__(self, "checks", MappingProxyType(dict(self.checks)))

    def default_config_text(self) -> str:
        """Return the default configuration as the text an operator would paste."""
        return json.dumps(self.default_config, indent=2, ensure_ascii=False)


def build_firebase_suite(default_config: Optional[Dict[str, Any]] = None) -> DiagnosticSuite:
    return DiagnosticSuite(
        name=FIREBASE_SUITE,
        registry=FIREBASE_STEPS,
        checks={
            "config": checks.check_config,
            "init": checks.check_initialization,
            "auth_module": checks.check_auth_module,
        },
        default_config=copy.deepcopy(default_config or DEFAULT_FIREBASE_CONFIG),
    )


def build_gemini_suite(default_config: Optional[Dict[str, Any]] = None) -> DiagnosticSuite:
    return DiagnosticSuite(
        name=GEMINI_SUITE,
        registry=GEMINI_STEPS,
        checks={
            "config": checks.check_config,
            "connect": checks.check_initialization,
            "capabilities": checks.check_model_capabilities,
            "generate_text": checks.check_text_generation,
            "stream_text": checks.check_streaming,
            "count_tokens": checks.check_token_count,
            "vision": checks.check_vision,
        },
        default_config=copy.deepcopy(default_config or DEFAULT_GEMINI_CONFIG),
    )


def build_suite(name: str, default_config: Optional[Dict[str, Any]] = None) -> DiagnosticSuite:
    """Build a suite by name.

    Raises:
        ValueError: If the suite name is unknown.
    """
    key = name.strip().lower()
    if key == FIREBASE_SUITE:
        return build_firebase_suite(default_config)
    if key == GEMINI_SUITE:
        return build_gemini_suite(default_config)
    raise ValueError(f"Unknown suite '{name}'. Expected one of: {', '.join(SUPPORTED_SUITES)}")
