"""Pytest configuration and shared fixtures for SDKProbe tests.

This module provides reusable fixtures for:
- Configuration management
- Temporary file/directory creation
- Stub verification providers
- Sample configuration payloads
"""

from __future__ import annotations

import json
import shutil
import sys
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator
from unittest.mock import MagicMock

import pytest

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from tests.stubs import StubProvider


# =============================================================================
# Provider and Suite Fixtures
# =============================================================================

@pytest.fixture
def stub_provider() -> StubProvider:
    """Provide a StubProvider that always initializes."""
    return StubProvider()


@pytest.fixture
def firebase_suite():
    """Provide the Firebase suite with its shipped registry and checks."""
    from sdkprobe.diagnostics.suites import build_firebase_suite
    return build_firebase_suite()


@pytest.fixture
def orchestrator(firebase_suite, stub_provider):
    """Provide an orchestrator wired to the Firebase suite and a StubProvider."""
    from sdkprobe.diagnostics.orchestrator import DiagnosticOrchestrator
    return DiagnosticOrchestrator(firebase_suite, stub_provider)


# =============================================================================
# Sample Payloads
# =============================================================================

@pytest.fixture
def valid_config_text() -> str:
    """Minimal valid Firebase configuration payload."""
    return json.dumps({"apiKey": "X", "projectId": "Y"})


@pytest.fixture
def full_config_text() -> str:
    """Complete Firebase web configuration payload."""
    return json.dumps({
        "apiKey": "AIzaSyTestKey1234567890",
        "authDomain": "demo-project.firebaseapp.com",
        "projectId": "demo-project",
        "storageBucket": "demo-project.firebasestorage.app",
        "messagingSenderId": "123456789012",
        "appId": "1:123456789012:web:abcdef",
    }, indent=2)


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def mock_general_config() -> Dict[str, Any]:
    """Provide a mock general configuration dictionary."""
    return {
        "interactive_mode": False,
        "logs_dir": str(PROJECT_ROOT / "logs"),
    }


@pytest.fixture
def mock_diagnostics_config() -> Dict[str, Any]:
    """Provide a mock diagnostics configuration dictionary."""
    return {
        "suite": "firebase",
        "step_pause_seconds": 0.0,
        "step_timeout_seconds": None,
        "auto_run": True,
    }


@pytest.fixture
def mock_provider_configs() -> Dict[str, Dict[str, Any]]:
    """Provide mock provider sections keyed by provider name."""
    return {
        "firebase": {
            "app_name": "sdkprobe-test",
            "default_config": {"apiKey": "default-key", "projectId": "default-project"},
        },
        "gemini": {
            "model": "gemini-2.5-flash",
            "timeout": 5,
            "max_retries": 0,
            "default_config": {"apiKey": "gemini-key", "model": "gemini-2.5-flash"},
        },
    }


@pytest.fixture
def mock_config_service(
    mock_general_config,
    mock_diagnostics_config,
    mock_provider_configs,
):
    """Provide a mock ConfigService with all configurations."""
    mock_service = MagicMock()
    mock_service.get_general_config.return_value = mock_general_config
    mock_service.get_diagnostics_config.return_value = mock_diagnostics_config
    mock_service.get_provider_config.side_effect = lambda name: dict(mock_provider_configs[name])
    return mock_service


# =============================================================================
# Temporary Directory Fixtures
# =============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory that is cleaned up after test."""
    temp_path = Path(tempfile.mkdtemp(prefix="sdkprobetest_"))
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def write_app_config(temp_dir: Path):
    """Return a helper that writes an app_config.yaml into temp_dir."""
    def _write(content: str) -> Path:
        path = temp_dir / "app_config.yaml"
        path.write_text(content, encoding="utf-8")
        return path
    return _write


# =============================================================================
# Skip Markers
# =============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow tests")
    config.addinivalue_line("markers", "api: Tests requiring API keys")
