"""
Execution framework for dual-mode (Interactive/CLI) scripts.

This module provides the base classes entry point scripts build on to support
both an interactive menu and command-line argument mode.

Classes:
    _DualModeBase: Shared configuration, logging and error handling
    AsyncDualModeScript: Base class for async scripts (uses asyncio.run)
"""

import asyncio
import sys
from abc import ABC, abstractmethod
from argparse import ArgumentParser, Namespace
from typing import Any, Dict, List, Optional

from sdkprobe.config.service import ConfigService, get_config_service
from sdkprobe.infra.logger import setup_logger
from sdkprobe.ui import print_error, print_info, print_success, print_warning


class _DualModeBase:
    """
    Shared state and helpers for dual-mode scripts.

    This class handles:
    - Configuration loading
    - Logger setup
    - Common error handling
    """

    def __init__(self, script_name: str):
        """
        Initialize the dual-mode script.

        Args:
            script_name: Name of the script for logging purposes
        """
        self.script_name = script_name
        self.logger = setup_logger(script_name)
        self.config_service: Optional[ConfigService] = None
        self.is_interactive: bool = False

        # Configuration dictionaries (loaded on demand)
        self.general_config: Dict[str, Any] = {}
        self.diagnostics_config: Dict[str, Any] = {}

    def initialize_config(self) -> None:
        """Load all configuration resources."""
        self.config_service = get_config_service()
        self.general_config = self.config_service.get_general_config()
        self.diagnostics_config = self.config_service.get_diagnostics_config()

    def detect_interactive(self, argv: List[str]) -> bool:
        """
        Decide the execution mode.

        Command-line arguments always select CLI mode; otherwise
        general.interactive_mode decides.
        """
        if argv:
            return False
        return bool(self.general_config.get("interactive_mode", True))

    def _handle_interrupt(self) -> None:
        """Handle keyboard interrupt gracefully."""
        print_info("\nOperation cancelled by user.")
        self.logger.info(f"{self.script_name} cancelled by user")
        sys.exit(0)

    def _handle_error(self, error: Exception) -> None:
        """
        Handle unexpected errors gracefully.

        Args:
            error: The exception that was raised
        """
        error_msg = f"Unexpected error: {error}"
        print_error(error_msg)
        self.logger.error(f"{self.script_name} failed", exc_info=error)
        sys.exit(1)

    def print_or_log(self, message: str, level: str = "info") -> None:
        """
        Print message using UI utilities and log it.

        Args:
            message: Message to display/log
            level: Log level (info, warning, error, success)
        """
        if level == "error":
            print_error(message)
        elif level == "warning":
            print_warning(message)
        elif level == "success":
            print_success(message)
        else:
            print_info(message)

        # Always log; "success" has no logging level of its own
        log_method = getattr(self.logger, level.lower(), self.logger.info)
        log_method(message)


class AsyncDualModeScript(_DualModeBase, ABC):
    """
    Base class for async scripts that support both interactive and CLI modes.

    Subclasses must implement:
    - create_argument_parser(): Return configured ArgumentParser
    - run_interactive(): Execute async interactive workflow
    - run_cli(): Execute async CLI workflow
    """

    @abstractmethod
    def create_argument_parser(self) -> ArgumentParser:
        """
        Create and configure the argument parser for CLI mode.

        Returns:
            Configured ArgumentParser instance
        """
        pass

    @abstractmethod
    async def run_interactive(self) -> None:
        """
        Execute the async interactive workflow with UI prompts.
        """
        pass

    @abstractmethod
    async def run_cli(self, args: Namespace) -> None:
        """
        Execute the async CLI workflow with parsed arguments.

        Args:
            args: Parsed command-line arguments
        """
        pass

    def execute(self, argv: Optional[List[str]] = None) -> None:
        """
        Main entry point that orchestrates mode detection and async execution.

        This method wraps the async execution in asyncio.run().
        """
        try:
            asyncio.run(self._execute_async(sys.argv[1:] if argv is None else argv))
        except KeyboardInterrupt:
            self._handle_interrupt()

    async def _execute_async(self, argv: List[str]) -> None:
        """
        Internal async execution handler.

        This method:
        1. Loads configuration
        2. Detects execution mode (interactive vs CLI)
        3. Calls the appropriate async run method
        4. Handles common error scenarios
        """
        try:
            self.initialize_config()
            self.is_interactive = self.detect_interactive(argv)

            if self.is_interactive:
                self.logger.info(f"Starting {self.script_name} (Interactive Mode)")
                await self.run_interactive()
            else:
                self.logger.info(f"Starting {self.script_name} (CLI Mode)")
                parser = self.create_argument_parser()
                args = parser.parse_args(argv)
                await self.run_cli(args)

        except KeyboardInterrupt:
            self._handle_interrupt()
        except Exception as e:
            self._handle_error(e)
