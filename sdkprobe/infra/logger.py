"""Logging infrastructure for the application.

Handlers live on the ``sdkprobe`` package logger, so every module logger
created with ``logging.getLogger(__name__)`` inside the package reaches them
by propagation. Each diagnostic suite writes to its own file
(``sdkprobe-<suite>.log``) in the configured logs directory; before a suite is
selected, records go to ``sdkprobe.log``.

The console only receives errors. Expected verification failures are logged
at WARNING and reach the file only.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from sdkprobe.config.config_loader import PROJECT_ROOT
from sdkprobe.config.service import get_config_service

PACKAGE_LOGGER_NAME = "sdkprobe"
LOG_FILE_PREFIX = "sdkprobe"

FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_FORMAT = "%(levelname)s: %(message)s"


def resolve_log_file(suite: Optional[str] = None) -> Path:
    """Return the log file for ``suite`` (or the shared file when None).

    ``general.logs_dir`` may name a directory or a single ``.log`` file; a
    single file is used for every suite.
    """
    file_name = f"{LOG_FILE_PREFIX}-{suite}.log" if suite else f"{LOG_FILE_PREFIX}.log"
    try:
        logs_dir_value = get_config_service().get_general_config().get("logs_dir")
    except (OSError, ValueError):
        logs_dir_value = None

    if not logs_dir_value:
        return PROJECT_ROOT / "logs" / file_name
    logs_path = Path(logs_dir_value)
    if logs_path.suffix == ".log":
        return logs_path
    return logs_path / file_name


def _file_handlers(logger: logging.Logger) -> list:
    return [h for h in logger.handlers if isinstance(h, logging.FileHandler)]


def _console_handlers(logger: logging.Logger) -> list:
    return [
        h for h in logger.handlers
        if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
    ]


def configure_logging(suite: Optional[str] = None) -> logging.Logger:
    """
    Attach the file and console handlers to the package logger.

    Calling again with another suite moves the file handler to that suite's
    log file; the console handler is attached once.

    Args:
        suite: Diagnostic suite name, or None for the shared log file.

    Returns:
        The configured package logger.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(logging.INFO)

    log_file = resolve_log_file(suite)
    current = _file_handlers(package_logger)
    if not any(h.baseFilename == os.path.abspath(log_file) for h in current):
        for handler in current:
            package_logger.removeHandler(handler)
            handler.close()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        package_logger.addHandler(file_handler)

    if not _console_handlers(package_logger):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.ERROR)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        package_logger.addHandler(console_handler)
    return package_logger


def setup_logger(name: str) -> logging.Logger:
    """
    Return a logger under the package logger, configuring handlers on first use.

    Names outside the package (script names such as ``run_diagnostics``) are
    placed under it so their records reach the same handlers.

    Args:
        name: Name of the logger (typically __name__ from the calling module).

    Returns:
        Logger instance without handlers of its own.
    """
    if not logging.getLogger(PACKAGE_LOGGER_NAME).handlers:
        configure_logging()
    if name != PACKAGE_LOGGER_NAME and not name.startswith(f"{PACKAGE_LOGGER_NAME}."):
        name = f"{PACKAGE_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
