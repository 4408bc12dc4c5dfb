"""Centralized configuration service with caching and singleton pattern.

Provides a single point of access to all configuration dictionaries, eliminating
redundant ConfigLoader instantiations and ensuring consistent configuration state
across the application.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Dict, Optional

from sdkprobe.config.config_loader import ConfigLoader


class ConfigService:
    """Thread-safe singleton configuration service with lazy loading and caching."""
    
    _instance: Optional[ConfigService] = None
    _lock = threading.Lock()
    
    def __new__(cls) -> ConfigService:
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance
    
    def __init__(self) -> None:
        # Prevent re-initialization
        if self._initialized:
            return
        
        self._loader: Optional[ConfigLoader] = None
        self._general_config: Optional[Dict[str, Any]] = None
        self._diagnostics_config: Optional[Dict[str, Any]] = None
        self._provider_configs: Dict[str, Dict[str, Any]] = {}
        self._initialized = True
    
    def load(self, config_path: Optional[Path] = None) -> None:
        """Load all configurations.
        
        Args:
            config_path: Optional path to app_config.yaml. If None, uses default.
        """
        with self._lock:
            self._loader = ConfigLoader(config_path)
            self._loader.load_configs()
            # Clear cached configs to force reload
            self._general_config = None
            self._diagnostics_config = None
            self._provider_configs = {}
    
    def _ensure_loaded(self) -> None:
        """Ensure configuration is loaded, loading with defaults if necessary."""
        if self._loader is None:
            self.load()
    
    def get_general_config(self) -> Dict[str, Any]:
        """Get the general configuration (cached).
        
        Returns:
            General configuration dictionary with a resolved logs_dir.
        """
        self._ensure_loaded()
        if self._general_config is None:
            with self._lock:
                if self._general_config is None:
                    self._general_config = self._loader.get_general_config()
        return self._general_config.copy()
    
    def get_diagnostics_config(self) -> Dict[str, Any]:
        """Get the diagnostics configuration (cached).
        
        Returns:
            Diagnostics configuration dictionary.
        """
        self._ensure_loaded()
        if self._diagnostics_config is None:
            with self._lock:
                if self._diagnostics_config is None:
                    self._diagnostics_config = self._loader.get_diagnostics_config()
        return self._diagnostics_config.copy()
    
    def get_provider_config(self, name: str) -> Dict[str, Any]:
        """Get a verification provider's configuration (cached per provider).
        
        Args:
            name: Provider section name ("firebase" or "gemini").
        
        Returns:
            Provider configuration dictionary merged over its defaults.
        """
        self._ensure_loaded()
        if name not in self._provider_configs:
            with self._lock:
                if name not in self._provider_configs:
                    self._provider_configs[name] = self._loader.get_provider_config(name)
        return self._provider_configs[name].copy()
    
    def reload(self, config_path: Optional[Path] = None) -> None:
        """Force reload of all configurations.
        
        Args:
            config_path: Optional path to app_config.yaml. If None, uses default.
        """
        self.load(config_path)
    
    @classmethod
    def reset(cls) -> None:
        """Reset the singleton instance (primarily for testing)."""
        with cls._lock:
            cls._instance = None


# Convenience functions for direct access
def get_config_service() -> ConfigService:
    """Get the singleton ConfigService instance.
    
    Returns:
        ConfigService singleton.
    """
    return ConfigService()


def get_general_config() -> Dict[str, Any]:
    """Get the general configuration."""
    return get_config_service().get_general_config()


def get_diagnostics_config() -> Dict[str, Any]:
    """Get the diagnostics configuration."""
    return get_config_service().get_diagnostics_config()


def get_provider_config(name: str) -> Dict[str, Any]:
    """Get a verification provider's configuration."""
    return get_config_service().get_provider_config(name)
