# sdkprobe/config/config_loader.py

from __future__ import annotations

import copy
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from sdkprobe.config.constants import (
    DEFAULT_FIREBASE_APP_NAME,
    DEFAULT_FIREBASE_CONFIG,
    DEFAULT_GEMINI_CONFIG,
    DEFAULT_GEMINI_MODEL,
    FIREBASE_SUITE,
    SUPPORTED_SUITES,
)


PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


def _expand_path_str(p: str) -> Path:
    """
    Expand ~ and environment variables in a path string and return a Path.
    """
    return Path(os.path.expandvars(os.path.expanduser(p)))


def _compute_config_dir() -> Path:
    """
    Resolve SDKPROBE_CONFIG_DIR robustly:
    - If absolute: use it.
    - If relative: resolve against PROJECT_ROOT.
    - If unset: default to PROJECT_ROOT/config.
    """
    raw = os.environ.get("SDKPROBE_CONFIG_DIR")
    if raw:
        expanded = _expand_path_str(raw)
        return (expanded if expanded.is_absolute()
                else (PROJECT_ROOT / expanded)).resolve()
    return (PROJECT_ROOT / "config").resolve()


CONFIG_DIR = _compute_config_dir()
DEFAULT_CONFIG_PATH = CONFIG_DIR / "app_config.yaml"


@dataclass(slots=True)
class _DiagnosticsSettings:
    suite: str = FIREBASE_SUITE
    step_pause_seconds: float = 0.0
    step_timeout_seconds: Optional[float] = None
    auto_run: bool = True


class ConfigLoader:
    """
    Loads the application configuration file and exposes normalized
    dictionaries to callers.
    """

    def __init__(self, config_path: Optional[Path] = None) -> None:
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self._raw: Dict[str, Any] = {}
        self._diagnostics: Optional[Dict[str, Any]] = None

    @staticmethod
    def _load_yaml_file(path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise FileNotFoundError(f"Missing configuration file: {path}")
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(
                f"YAML parsing error in {path}.\nOriginal error: {e}"
            ) from e
        if not isinstance(data, dict):
            raise ValueError(
                f"Configuration file {path} must contain a mapping at the top level."
            )
        return data

    def load_configs(self) -> None:
        """
        Load YAML configuration into memory.
        """
        self._raw = self._load_yaml_file(self.config_path)
        self._diagnostics = None

    def get_general_config(self) -> Dict[str, Any]:
        """
        Return the general section with logs_dir resolved against PROJECT_ROOT.
        """
        general = dict(self._raw.get("general", {}) or {})
        general["interactive_mode"] = bool(general.get("interactive_mode", True))
        logs_dir = general.get("logs_dir")
        if logs_dir:
            cand = _expand_path_str(str(logs_dir))
            if not cand.is_absolute():
                cand = PROJECT_ROOT / cand
            general["logs_dir"] = str(cand.resolve())
        return general

    def get_diagnostics_config(self) -> Dict[str, Any]:
        """
        Load, validate, and return the diagnostics section (cached).
        - suite must be one of the shipped suites.
        - step_pause_seconds is clamped to >= 0.
        - step_timeout_seconds is None (disabled) or a positive float.
        """
        if self._diagnostics is None:
            raw = dict(self._raw.get("diagnostics", {}) or {})
            settings = _DiagnosticsSettings(
                suite=str(raw.get("suite", FIREBASE_SUITE)).strip().lower(),
                step_pause_seconds=max(0.0, float(raw.get("step_pause_seconds") or 0.0)),
                step_timeout_seconds=self._positive_or_none(raw.get("step_timeout_seconds")),
                auto_run=bool(raw.get("auto_run", True)),
            )
            if settings.suite not in SUPPORTED_SUITES:
                raise ValueError(
                    f"Unknown diagnostics suite '{settings.suite}'. "
                    f"Expected one of: {', '.join(SUPPORTED_SUITES)}"
                )
            self._diagnostics = {
                "suite": settings.suite,
                "step_pause_seconds": settings.step_pause_seconds,
                "step_timeout_seconds": settings.step_timeout_seconds,
                "auto_run": settings.auto_run,
            }
        return self._diagnostics.copy()

    def get_provider_config(self, name: str) -> Dict[str, Any]:
        """
        Return the section for a verification provider merged over its defaults.
        """
        section = dict(self._raw.get(name, {}) or {})
        if name == "firebase":
            defaults: Dict[str, Any] = {
                "app_name": DEFAULT_FIREBASE_APP_NAME,
                "credentials": None,
                "default_config": copy.deepcopy(DEFAULT_FIREBASE_CONFIG),
            }
        elif name == "gemini":
            defaults = {
                "model": DEFAULT_GEMINI_MODEL,
                "timeout": 30.0,
                "max_retries": 2,
                "default_config": copy.deepcopy(DEFAULT_GEMINI_CONFIG),
            }
        else:
            defaults = {}
        merged = {**defaults, **section}
        default_config = merged.get("default_config", {})
        if not isinstance(default_config, dict):
            raise ValueError(f"{name}.default_config must be a mapping")
        # Allow ${ENV_VAR} references so keys stay out of the file
        merged["default_config"] = {
            key: os.path.expandvars(value) if isinstance(value, str) else value
            for key, value in default_config.items()
        }
        if merged.get("credentials"):
            credentials_path = _expand_path_str(str(merged["credentials"]))
            if not credentials_path.is_absolute():
                credentials_path = PROJECT_ROOT / credentials_path
            merged["credentials"] = str(credentials_path.resolve())
        return merged

    # -------- Internal helpers --------

    @staticmethod
    def _positive_or_none(value: Any) -> Optional[float]:
        if value in (None, "", 0, "0"):
            return None
        parsed = float(value)
        return parsed if parsed > 0 else None
