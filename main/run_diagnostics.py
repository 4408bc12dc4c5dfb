# run_diagnostics.py
"""
Script for verifying that a backend SDK is reachable and correctly configured.

Supports two execution modes:
1. Interactive Mode: the suite runs once at start-up, then a menu offers
   run again, edit configuration, restore default configuration and switch
   suite.
2. CLI Mode: command-line arguments for automation and scripting.

The mode is controlled by the 'interactive_mode' setting in
config/app_config.yaml or by providing command-line arguments.

Workflow:
 1. Load configuration and build the selected suite and provider
 2. Validate the JSON configuration payload
 3. Initialize the SDK client
 4. Probe the dependent services of the client
 5. Display per-step results and the overall status
"""

from __future__ import annotations

import sys
from argparse import ArgumentParser, Namespace
from typing import Optional

from sdkprobe.config.constants import SUPPORTED_SUITES
from sdkprobe.core.cli_args import create_diagnostics_parser, read_config_payload
from sdkprobe.core.execution_framework import AsyncDualModeScript
from sdkprobe.core.session import DiagnosticSession
from sdkprobe.diagnostics.models import RunStatus
from sdkprobe.ui import (
    NavigationAction,
    PromptStyle,
    StepReporter,
    print_header,
    print_info,
    print_success,
    prompt_multiline,
    prompt_select,
    prompt_yes_no,
    render_steps,
    render_summary,
    ui_print,
)

MENU_OPTIONS = [
    ("run", "Run diagnostics again"),
    ("edit", "Edit configuration (JSON)"),
    ("show", "Show current configuration"),
    ("results", "Show last results"),
    ("restore", "Restore default configuration"),
    ("suite", "Switch diagnostic suite"),
    ("quit", "Quit"),
]


class RunDiagnosticsScript(AsyncDualModeScript):
    """Script to run connection diagnostics against a backend SDK."""

    def __init__(self):
        super().__init__("run_diagnostics")
        self.session: Optional[DiagnosticSession] = None

    def create_argument_parser(self) -> ArgumentParser:
        """Create argument parser for CLI mode."""
        return create_diagnostics_parser()

    def _open_session(self, suite_name: Optional[str] = None, **overrides) -> DiagnosticSession:
        session = DiagnosticSession.from_config(suite_name, **overrides)
        session.subscribe(StepReporter())
        return session

    async def _run_once(self, session: DiagnosticSession) -> RunStatus:
        print_header(
            f"{session.suite.name.capitalize()} Connection Test",
            "Diagnostic tool to verify the SDK integration.",
        )
        status = await session.run()
        ui_print("")
        render_summary(status)
        self.logger.info(f"{session.suite.name} run finished: {status.value}")
        return status

    async def run_interactive(self) -> None:
        """Run diagnostics with a guided menu."""
        self.session = self._open_session()
        try:
            if self.diagnostics_config.get("auto_run", True):
                await self._run_once(self.session)

            while True:
                result = prompt_select("What would you like to do?", MENU_OPTIONS)
                if result.action != NavigationAction.CONTINUE or result.value == "quit":
                    break

                if result.value == "run":
                    await self._run_once(self.session)
                elif result.value == "edit":
                    await self._edit_config()
                elif result.value == "show":
                    ui_print(self.session.config_text, PromptStyle.DIM)
                elif result.value == "results":
                    render_steps(self.session.orchestrator.steps)
                    render_summary(self.session.status)
                elif result.value == "restore":
                    self._restore_default()
                elif result.value == "suite":
                    await self._switch_suite()
        finally:
            await self.session.close()
        print_info("Goodbye.")

    async def _edit_config(self) -> None:
        result = prompt_multiline(
            f"Paste your {self.session.suite.name} configuration object (JSON).",
            allow_back=True,
        )
        if result.action == NavigationAction.CONTINUE:
            self.session.set_config_text(result.value)
            print_success("Configuration updated. Choose 'Run diagnostics again' to test it.")

    def _restore_default(self) -> None:
        if self.session.config_text != self.session.suite.default_config_text():
            answer = prompt_yes_no("Discard the edited configuration?", default=True)
            if answer.action != NavigationAction.CONTINUE or not answer.value:
                return
        self.session.restore_default_config()
        self.print_or_log(f"Default {self.session.suite.name} configuration restored.", "success")

    async def _switch_suite(self) -> None:
        options = [(name, name.capitalize()) for name in SUPPORTED_SUITES]
        result = prompt_select("Select a diagnostic suite:", options, allow_back=True)
        if result.action != NavigationAction.CONTINUE:
            return
        if result.value == self.session.suite.name:
            print_info(f"Suite '{result.value}' is already selected.")
            return
        await self.session.close()
        self.session = self._open_session(result.value)
        await self._run_once(self.session)

    async def run_cli(self, args: Namespace) -> None:
        """Run diagnostics in CLI mode with command-line arguments."""
        self.session = self._open_session(
            args.suite,
            step_pause_seconds=args.pause,
            step_timeout_seconds=args.timeout,
        )
        self.session.set_config_text(read_config_payload(args, self.session.config_text))

        status = RunStatus.PENDING
        try:
            for _ in range(args.runs):
                status = await self._run_once(self.session)
        finally:
            await self.session.close()

        if status is RunStatus.ERROR:
            sys.exit(1)


def main() -> None:
    """Main entry point."""
    RunDiagnosticsScript().execute()


if __name__ == "__main__":
    main()
