"""CLI argument parsing utilities for non-interactive script execution.

This module provides the argument parser for run_diagnostics.py in CLI mode
and the helpers that turn parsed arguments into a configuration payload.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional

from sdkprobe.config.constants import SUPPORTED_SUITES


def _positive_int(value: str) -> int:
    parsed = int(value)
    if parsed < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return parsed


def _non_negative_float(value: str) -> float:
    parsed = float(value)
    if parsed < 0:
        raise argparse.ArgumentTypeError("must not be negative")
    return parsed


def create_diagnostics_parser() -> argparse.ArgumentParser:
    """Create argument parser for run_diagnostics.py in CLI mode.

    Returns:
        Configured ArgumentParser for diagnostic runs
    """
    parser = argparse.ArgumentParser(
        description="SDKProbe - Backend SDK Connection Diagnostics (CLI Mode)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check the Firebase configuration from app_config.yaml
  python main/run_diagnostics.py --suite firebase

  # Check an inline Firebase configuration
  python main/run_diagnostics.py --config-json '{"apiKey": "...", "projectId": "my-project"}'

  # Check the Gemini API with a configuration file, twice
  python main/run_diagnostics.py --suite gemini --config-file gemini.json --runs 2
        """
    )

    parser.add_argument(
        "--suite", "-s",
        choices=list(SUPPORTED_SUITES),
        default=None,
        help="Diagnostic suite to run. Defaults to diagnostics.suite in app_config.yaml."
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--config-json", "-j",
        type=str,
        default=None,
        help="Configuration payload as a JSON string."
    )
    source.add_argument(
        "--config-file", "-f",
        type=str,
        default=None,
        help="Path to a file containing the JSON configuration payload."
    )

    parser.add_argument(
        "--runs", "-n",
        type=_positive_int,
        default=1,
        help="Number of consecutive runs (default: 1)."
    )

    parser.add_argument(
        "--pause",
        type=_non_negative_float,
        default=None,
        help="Pause in seconds before each verification. Overrides step_pause_seconds."
    )

    parser.add_argument(
        "--timeout",
        type=_non_negative_float,
        default=None,
        help="Bounded wait per verification in seconds (0 disables). Overrides step_timeout_seconds."
    )

    return parser


def resolve_path(path_str: str, base_path: Optional[Path] = None) -> Path:
    """Resolve a path string to an absolute Path.

    Args:
        path_str: Path string (relative or absolute)
        base_path: Base path for relative paths (defaults to cwd)

    Returns:
        Resolved absolute Path
    """
    path = Path(path_str).expanduser()
    if path.is_absolute():
        return path.resolve()
    return ((base_path or Path.cwd()) / path).resolve()


def read_config_payload(args: argparse.Namespace, default_text: str) -> str:
    """Return the configuration text selected by the CLI arguments.

    Args:
        args: Parsed arguments from create_diagnostics_parser()
        default_text: Payload used when neither --config-json nor --config-file is given

    Returns:
        Raw configuration text (validated later by the config step)

    Raises:
        FileNotFoundError: If --config-file points to a missing file
    """
    if args.config_json is not None:
        return args.config_json
    if args.config_file is not None:
        path = resolve_path(args.config_file)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found: {path}")
        return path.read_text(encoding="utf-8")
    return default_text
