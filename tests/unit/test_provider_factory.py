"""Unit tests for sdkprobe/providers/factory.py.

Tests provider selection and construction from configuration sections.
"""

from __future__ import annotations

import pytest

from sdkprobe.config.constants import DEFAULT_GEMINI_MODEL
from sdkprobe.providers.factory import ProviderType, get_provider
from sdkprobe.providers.firebase_provider import FirebaseProvider
from sdkprobe.providers.gemini_provider import GeminiProvider


class TestGetProvider:
    """Tests for get_provider function."""

    @pytest.mark.unit
    def test_firebase_provider(self):
        """Test creating the Firebase provider with a custom app name."""
        provider = get_provider("firebase", {"app_name": "custom-app"})
        assert isinstance(provider, FirebaseProvider)
        assert provider.app_name == "custom-app"
        assert provider.handle is None

    @pytest.mark.unit
    def test_firebase_provider_default_app_name(self):
        provider = get_provider("firebase", {})
        assert provider.app_name == "sdkprobe-diagnostics"
        assert provider.credentials_path is None

    @pytest.mark.unit
    def test_firebase_credentials_forwarded(self):
        provider = get_provider("firebase", {"credentials": "/secrets/service-account.json"})
        assert provider.credentials_path == "/secrets/service-account.json"

    @pytest.mark.unit
    def test_gemini_provider(self):
        """Test creating the Gemini provider from its section."""
        provider = get_provider(
            ProviderType.GEMINI,
            {"model": "gemini-2.0-flash", "timeout": 12, "max_retries": 4},
        )
        assert isinstance(provider, GeminiProvider)
        assert provider.model == "gemini-2.0-flash"
        assert provider.timeout == 12.0
        assert provider.max_retries == 4

    @pytest.mark.unit
    def test_gemini_without_timeout(self):
        provider = get_provider("Gemini ", {"timeout": None})
        assert provider.timeout is None
        assert provider.model == DEFAULT_GEMINI_MODEL

    @pytest.mark.unit
    def test_section_loaded_from_config_service(self, mock_config_service, monkeypatch):
        """Without an explicit section, the config service supplies it."""
        monkeypatch.setattr(
            "sdkprobe.providers.factory.get_config_service",
            lambda: mock_config_service,
        )
        provider = get_provider("firebase")

        mock_config_service.get_provider_config.assert_called_once_with("firebase")
        assert provider.app_name == "sdkprobe-test"

    @pytest.mark.unit
    def test_unknown_provider(self):
        """Test that unknown providers raise ValueError."""
        with pytest.raises(ValueError, match="Unknown provider 'supabase'"):
            get_provider("supabase", {})
