"""Integration tests for complete diagnostic runs.

Tests the shipped suites end to end through the real providers, with the
SDK entry points mocked.
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from google.auth.exceptions import DefaultCredentialsError

from sdkprobe.diagnostics.models import RunStatus, StepStatus
from sdkprobe.diagnostics.orchestrator import DiagnosticOrchestrator
from sdkprobe.diagnostics.suites import build_firebase_suite, build_gemini_suite
from sdkprobe.providers.firebase_provider import FirebaseProvider
from sdkprobe.providers.gemini_provider import GeminiProvider


class TestFirebaseSuite:
    """Firebase suite against FirebaseProvider with firebase_admin mocked."""

    @pytest.fixture
    def mock_sdk(self):
        with (
            patch("sdkprobe.providers.firebase_provider.firebase_admin") as mock_fa,
            patch("sdkprobe.providers.firebase_provider.auth") as mock_auth,
        ):
            mock_fa.get_app.side_effect = ValueError("no app")
            app = MagicMock()
            app.name = "sdkprobe-diagnostics"
            app.project_id = "demo-project"
            mock_fa.initialize_app.return_value = app
            mock_auth.Client.return_value = MagicMock(tenant_id=None)
            yield mock_fa, mock_auth

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_operational(self, mock_sdk, full_config_text):
        orchestrator = DiagnosticOrchestrator(build_firebase_suite(), FirebaseProvider())

        await orchestrator.run(full_config_text)

        assert orchestrator.status is RunStatus.SUCCESS
        assert "Project ID: demo-project" in orchestrator.get_step("init").detail
        assert "no active session" in orchestrator.get_step("auth_module").detail

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_web_config_alone_without_credentials(self, mock_sdk, valid_config_text):
        """No service account and no default credentials: every step still passes."""
        _, mock_auth = mock_sdk
        mock_auth.Client.side_effect = DefaultCredentialsError(
            "Your default credentials were not found."
        )
        orchestrator = DiagnosticOrchestrator(build_firebase_suite(), FirebaseProvider())

        await orchestrator.run(valid_config_text)
        await orchestrator.run(valid_config_text)

        assert orchestrator.status is RunStatus.SUCCESS
        detail = orchestrator.get_step("auth_module").detail
        assert "Auth SDK loaded successfully." in detail
        assert "no service credentials" in detail
        assert "Current user: none (no active session)" in detail

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_repeated_runs_recreate_app(self, mock_sdk, full_config_text):
        mock_fa, _ = mock_sdk
        orchestrator = DiagnosticOrchestrator(build_firebase_suite(), FirebaseProvider())

        await orchestrator.run(full_config_text)
        await orchestrator.run(full_config_text)

        assert mock_fa.initialize_app.call_count == 2
        assert mock_fa.delete_app.call_count == 1
        assert orchestrator.status is RunStatus.SUCCESS

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_init_failure(self, mock_sdk, valid_config_text):
        mock_fa, mock_auth = mock_sdk
        mock_fa.initialize_app.side_effect = ValueError("Illegal Firebase app name.")
        orchestrator = DiagnosticOrchestrator(build_firebase_suite(), FirebaseProvider())

        await orchestrator.run(valid_config_text)

        assert orchestrator.get_step("init").detail == "Illegal Firebase app name."
        assert orchestrator.get_step("auth_module").status is StepStatus.IDLE
        mock_auth.Client.assert_not_called()


class TestGeminiSuite:
    """Gemini suite against GeminiProvider with the chat model mocked."""

    @pytest.fixture
    def mock_llm(self):
        async def stream(prompt):
            for piece in ["1, 2, ", "3, 4, 5"]:
                yield MagicMock(content=piece)

        llm = MagicMock()
        llm.ainvoke = AsyncMock(return_value=MagicMock(content="Works"))
        llm.astream = stream
        llm.get_num_tokens.return_value = 6
        with patch("sdkprobe.providers.gemini_provider.ChatGoogleGenerativeAI", return_value=llm):
            yield llm

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_all_probes_succeed(self, mock_llm):
        orchestrator = DiagnosticOrchestrator(build_gemini_suite(), GeminiProvider())

        await orchestrator.run(json.dumps({"apiKey": "AIzaSyTestKey1234"}))

        assert [step.status for step in orchestrator.steps] == [StepStatus.SUCCESS] * 7
        assert "Streaming completed in 2 chunks." in orchestrator.get_step("stream_text").detail
        assert "Total tokens: 6" in orchestrator.get_step("count_tokens").detail
        assert '"apiKey": "AIzaSyTe..."' in orchestrator.get_step("config").detail

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_text_only_model_stops_at_capabilities(self, mock_llm):
        orchestrator = DiagnosticOrchestrator(build_gemini_suite(), GeminiProvider())

        await orchestrator.run(json.dumps({"apiKey": "k", "model": "gemini-pro"}))

        assert orchestrator.get_step("capabilities").status is StepStatus.ERROR
        assert orchestrator.get_step("generate_text").status is StepStatus.IDLE
        assert orchestrator.status is RunStatus.ERROR

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_probe_failure(self, mock_llm):
        mock_llm.get_num_tokens.side_effect = RuntimeError("countTokens not supported")
        orchestrator = DiagnosticOrchestrator(build_gemini_suite(), GeminiProvider())

        await orchestrator.run(json.dumps({"apiKey": "k"}))

        count = orchestrator.get_step("count_tokens")
        assert count.status is StepStatus.ERROR
        assert count.detail == "countTokens not supported"
        assert orchestrator.get_step("vision").status is StepStatus.IDLE
