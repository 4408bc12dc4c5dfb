"""Verification provider layer.

Providers wrap a backend SDK behind the interface the diagnostic checks use:
- Firebase (firebase_admin)
- Google Gemini (LangChain ChatGoogleGenerativeAI)

All providers:
- Validate JSON configuration and mask secrets for display
- Own at most one client handle and dispose it before re-initializing
- Normalize SDK errors into the diagnostic error taxonomy
"""

from sdkprobe.providers.base import (
    InitResult,
    ParsedConfig,
    SubCapabilityReport,
    VerificationProvider,
)
from sdkprobe.providers.factory import (
    ProviderType,
    get_provider,
)

__all__ = [
    "InitResult",
    "ParsedConfig",
    "SubCapabilityReport",
    "VerificationProvider",
    "ProviderType",
    "get_provider",
]
