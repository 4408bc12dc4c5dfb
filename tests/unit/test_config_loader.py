"""Unit tests for sdkprobe/config/config_loader.py.

Tests YAML loading, section normalization and provider defaults.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from sdkprobe.config.config_loader import PROJECT_ROOT, ConfigLoader
from sdkprobe.config.constants import DEFAULT_FIREBASE_CONFIG


def _loader(path: Path) -> ConfigLoader:
    loader = ConfigLoader(path)
    loader.load_configs()
    return loader


class TestLoading:
    """Tests for reading the YAML file."""

    @pytest.mark.unit
    def test_missing_file(self, temp_dir):
        loader = ConfigLoader(temp_dir / "absent.yaml")
        with pytest.raises(FileNotFoundError):
            loader.load_configs()

    @pytest.mark.unit
    def test_invalid_yaml(self, write_app_config):
        path = write_app_config("general: [unclosed\n")
        with pytest.raises(ValueError, match="YAML parsing error"):
            _loader(path)

    @pytest.mark.unit
    def test_top_level_must_be_mapping(self, write_app_config):
        path = write_app_config("- a\n- b\n")
        with pytest.raises(ValueError, match="mapping"):
            _loader(path)

    @pytest.mark.unit
    def test_empty_file_uses_defaults(self, write_app_config):
        loader = _loader(write_app_config(""))
        assert loader.get_diagnostics_config()["suite"] == "firebase"
        assert loader.get_general_config()["interactive_mode"] is True

    @pytest.mark.unit
    def test_shipped_config_is_valid(self):
        """The app_config.yaml in the repository loads cleanly."""
        loader = _loader(PROJECT_ROOT / "config" / "app_config.yaml")
        diagnostics = loader.get_diagnostics_config()
        assert diagnostics["suite"] in ("firebase", "gemini")
        assert diagnostics["step_timeout_seconds"] is None


class TestGeneralConfig:
    """Tests for the general section."""

    @pytest.mark.unit
    def test_relative_logs_dir_resolved_against_project_root(self, write_app_config):
        loader = _loader(write_app_config("general:\n  logs_dir: my_logs\n"))
        assert loader.get_general_config()["logs_dir"] == str((PROJECT_ROOT / "my_logs").resolve())

    @pytest.mark.unit
    def test_absolute_logs_dir_kept(self, write_app_config, temp_dir):
        loader = _loader(write_app_config(f"general:\n  logs_dir: '{temp_dir}'\n"))
        assert loader.get_general_config()["logs_dir"] == str(temp_dir.resolve())


class TestDiagnosticsConfig:
    """Tests for the diagnostics section."""

    @pytest.mark.unit
    def test_values_normalized(self, write_app_config):
        loader = _loader(write_app_config(
            "diagnostics:\n"
            "  suite: Gemini\n"
            "  step_pause_seconds: -2\n"
            "  step_timeout_seconds: 15\n"
            "  auto_run: false\n"
        ))
        assert loader.get_diagnostics_config() == {
            "suite": "gemini",
            "step_pause_seconds": 0.0,
            "step_timeout_seconds": 15.0,
            "auto_run": False,
        }

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["0", "null", "-5"])
    def test_non_positive_timeout_disables(self, write_app_config, value):
        loader = _loader(write_app_config(f"diagnostics:\n  step_timeout_seconds: {value}\n"))
        assert loader.get_diagnostics_config()["step_timeout_seconds"] is None

    @pytest.mark.unit
    def test_unknown_suite(self, write_app_config):
        loader = _loader(write_app_config("diagnostics:\n  suite: supabase\n"))
        with pytest.raises(ValueError, match="Unknown diagnostics suite"):
            loader.get_diagnostics_config()

    @pytest.mark.unit
    def test_result_is_a_copy(self, write_app_config):
        loader = _loader(write_app_config(""))
        loader.get_diagnostics_config()["suite"] = "changed"
        assert loader.get_diagnostics_config()["suite"] == "firebase"


class TestProviderConfig:
    """Tests for provider sections."""

    @pytest.mark.unit
    def test_firebase_defaults(self, write_app_config):
        section = _loader(write_app_config("")).get_provider_config("firebase")
        assert section["app_name"] == "sdkprobe-diagnostics"
        assert section["default_config"] == DEFAULT_FIREBASE_CONFIG
        assert section["credentials"] is None

    @pytest.mark.unit
    def test_firebase_credentials_resolved_against_project_root(self, write_app_config):
        section = _loader(write_app_config(
            "firebase:\n  credentials: secrets/service-account.json\n"
        )).get_provider_config("firebase")
        expected = (PROJECT_ROOT / "secrets" / "service-account.json").resolve()
        assert section["credentials"] == str(expected)

    @pytest.mark.unit
    def test_firebase_credentials_absolute_path_kept(self, write_app_config, temp_dir):
        key_file = temp_dir / "service-account.json"
        section = _loader(write_app_config(
            f"firebase:\n  credentials: '{key_file}'\n"
        )).get_provider_config("firebase")
        assert section["credentials"] == str(key_file.resolve())

    @pytest.mark.unit
    def test_gemini_section_overrides_defaults(self, write_app_config):
        section = _loader(write_app_config(
            "gemini:\n  model: gemini-2.0-flash\n  max_retries: 0\n"
        )).get_provider_config("gemini")
        assert section["model"] == "gemini-2.0-flash"
        assert section["max_retries"] == 0
        assert section["timeout"] == 30.0

    @pytest.mark.unit
    def test_env_references_expanded(self, write_app_config, monkeypatch):
        monkeypatch.setenv("SDKPROBE_TEST_KEY", "secret-from-env")
        section = _loader(write_app_config(
            "gemini:\n  default_config:\n    apiKey: ${SDKPROBE_TEST_KEY}\n    temperature: 0\n"
        )).get_provider_config("gemini")
        assert section["default_config"] == {"apiKey": "secret-from-env", "temperature": 0}

    @pytest.mark.unit
    def test_default_config_must_be_mapping(self, write_app_config):
        loader = _loader(write_app_config("firebase:\n  default_config: [1, 2]\n"))
        with pytest.raises(ValueError, match="default_config"):
            loader.get_provider_config("firebase")
