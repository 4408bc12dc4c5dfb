"""Base provider abstraction for verification providers.

Defines the common interface the orchestrator's checks call into. Providers
wrap a concrete SDK and translate its exceptions into the diagnostic error
taxonomy, so nothing above this layer depends on an SDK's error shapes.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from sdkprobe.config.constants import SECRET_CONFIG_KEYS
from sdkprobe.diagnostics.errors import ConfigError

logger = logging.getLogger(__name__)


def mask_secret(value: Any) -> str:
    """Mask a secret for display, keeping a short recognizable prefix."""
    text = str(value)
    return text[:8] + "..." if len(text) > 8 else "***"


@dataclass(frozen=True)
class ParsedConfig:
    """Validated configuration.

    ``values`` is the full parsed document, ``display`` a copy that is safe to
    show (secrets masked).
    """
    values: Dict[str, Any]
    display: Dict[str, Any]

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def render(self) -> str:
        """Render the display projection as indented JSON."""
        return json.dumps(self.display, indent=2, ensure_ascii=False)


@dataclass
class InitResult:
    """Outcome of provider initialization.

    Either ``handle`` is set (optionally with a ``sub_capability`` reference),
    or ``error`` describes what went wrong. ``message`` is the provider's
    fallback text when the error carries no message of its own.
    """
    handle: Any = None
    sub_capability: Any = None
    error: Optional[BaseException] = None
    message: str = ""
    summary: str = ""

    @property
    def success(self) -> bool:
        return self.handle is not None and self.error is None

    def failure_message(self) -> str:
        """Return the error's own message, or the fallback message."""
        if self.error is not None:
            text = getattr(self.error, "message", None) or str(self.error)
            if text:
                return text
        return self.message or "Initialization failed."


@dataclass(frozen=True)
class SubCapabilityReport:
    """What a provider found when inspecting the handle's sub-capability."""
    present: bool
    summary: str = ""
    session: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)


class VerificationProvider(ABC):
    """Abstract base class for all verification providers.

    A provider owns at most one live client handle at a time. ``initialize``
    must dispose a handle left over from an earlier run before creating a new
    one, and ``dispose`` must be safe to call repeatedly.
    """

    required_keys: Tuple[str, ...] = ()
    sub_capability_name: str = "sub-capability"

    def __init__(self) -> None:
        self._handle: Any = None

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name (e.g., 'firebase', 'gemini')."""
        pass

    @property
    def handle(self) -> Any:
        """The handle produced by the last successful initialization."""
        return self._handle

    def validate_config(self, raw: str) -> ParsedConfig:
        """Parse and validate a JSON configuration payload.

        Args:
            raw: Configuration text as entered by the operator.

        Returns:
            ParsedConfig with the full values and a display-safe projection.

        Raises:
            ConfigError: If the text cannot be decoded (including nesting too
                deep for the parser), is not a JSON object, or a required key
                is missing or empty.
        """
        try:
            parsed = json.loads(raw)
        except (TypeError, ValueError, RecursionError) as e:
            raise ConfigError(f"Invalid JSON: {e}") from e

        if not isinstance(parsed, dict):
            raise ConfigError(
                "Invalid configuration: expected a JSON object, "
                f"got {type(parsed).__name__}"
            )

        missing = [key for key in self.required_keys if not parsed.get(key)]
        if missing:
            expected = " and ".join(f"'{key}'" for key in self.required_keys)
            raise ConfigError(
                f"Invalid configuration: the JSON must contain at least {expected} "
                f"(missing: {', '.join(missing)})"
            )

        return ParsedConfig(values=parsed, display=self.display_config(parsed))

    def display_config(self, values: Dict[str, Any]) -> Dict[str, Any]:
        """Return a copy of ``values`` with secret entries masked."""
        return {
            key: mask_secret(value) if key in SECRET_CONFIG_KEYS else value
            for key, value in values.items()
        }

    @abstractmethod
    async def initialize(self, config: ParsedConfig) -> InitResult:
        """Materialize a client handle from a validated configuration.

        Implementations dispose any previously held handle first and report
        SDK failures through ``InitResult.error`` rather than raising.
        """
        pass

    @abstractmethod
    async def inspect_sub_capability(self, handle: Any) -> SubCapabilityReport:
        """Query the sub-capability of ``handle``.

        Raises:
            SubCapabilityError: If the sub-capability cannot be retrieved.
        """
        pass

    @abstractmethod
    async def dispose(self) -> None:
        """Release the held handle, if any. Idempotent."""
        pass

    async def __aenter__(self) -> "VerificationProvider":
        """Async context manager entry."""
        return self

    async def __aexit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[Any],
    ) -> bool:
        """Async context manager exit."""
        await self.dispose()
        return False
