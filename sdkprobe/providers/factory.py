"""Provider factory for verification provider selection.

Creates provider instances for a diagnostic suite from configuration.
"""

from __future__ import annotations

import importlib
import logging
from enum import Enum
from typing import Any, Dict, Optional, Type

from sdkprobe.config.constants import DEFAULT_GEMINI_MODEL
from sdkprobe.config.service import get_config_service
from sdkprobe.providers.base import VerificationProvider

logger = logging.getLogger(__name__)


class ProviderType(str, Enum):
    """Supported verification provider types."""
    FIREBASE = "firebase"
    GEMINI = "gemini"


# Dotted paths, imported on first use
_PROVIDER_CLASSES: Dict[ProviderType, str] = {
    ProviderType.FIREBASE: "sdkprobe.providers.firebase_provider.FirebaseProvider",
    ProviderType.GEMINI: "sdkprobe.providers.gemini_provider.GeminiProvider",
}


def _import_provider_class(provider_type: ProviderType) -> Type[VerificationProvider]:
    """Dynamically import a provider class."""
    module_path = _PROVIDER_CLASSES[provider_type]
    module_name, class_name = module_path.rsplit(".", 1)
    module = importlib.import_module(module_name)
    return getattr(module, class_name)


def get_provider(
    provider: str | ProviderType,
    provider_config: Optional[Dict[str, Any]] = None,
) -> VerificationProvider:
    """Create a verification provider.

    Args:
        provider: Provider name or ProviderType.
        provider_config: Provider section from app_config.yaml. Loaded from the
            configuration service when omitted.

    Returns:
        A new provider instance holding no handle.

    Raises:
        ValueError: If the provider name is unknown.
    """
    try:
        if isinstance(provider, ProviderType):
            provider_type = provider
        else:
            provider_type = ProviderType(str(provider).lower().strip())
    except ValueError:
        valid = ", ".join(p.value for p in ProviderType)
        raise ValueError(f"Unknown provider '{provider}'. Expected one of: {valid}") from None

    if provider_config is None:
        provider_config = get_config_service().get_provider_config(provider_type.value)

    provider_cls = _import_provider_class(provider_type)
    if provider_type is ProviderType.FIREBASE:
        kwargs: Dict[str, Any] = {}
        if provider_config.get("app_name"):
            kwargs["app_name"] = str(provider_config["app_name"])
        if provider_config.get("credentials"):
            kwargs["credentials_path"] = str(provider_config["credentials"])
        instance = provider_cls(**kwargs)
    else:
        timeout = provider_config.get("timeout")
        instance = provider_cls(
            model=str(provider_config.get("model") or DEFAULT_GEMINI_MODEL),
            timeout=float(timeout) if timeout else None,
            max_retries=int(provider_config.get("max_retries", 2)),
        )
    logger.info(f"Created {provider_type.value} verification provider")
    return instance
