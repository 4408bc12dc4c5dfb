"""Configuration management package.

Provides configuration loading, constants and a centralized configuration
service.

Submodules:
- config_loader: YAML configuration loading (ConfigLoader, PROJECT_ROOT, CONFIG_DIR)
- constants: Application constants (DEFAULT_FIREBASE_CONFIG, SAMPLE_IMAGE_BASE64, ...)
- service: Configuration service singleton (ConfigService, get_config_service, etc.)

Note: Use direct imports from submodules:
    from sdkprobe.config.config_loader import ConfigLoader, PROJECT_ROOT
    from sdkprobe.config.constants import DEFAULT_FIREBASE_CONFIG
    from sdkprobe.config.service import get_config_service
"""
