"""Configuration management for Drillbook."""

from drillbook.core.config.loader import (
    configure_logging,
    detect_format,
    load_app_config,
    load_config,
)
from drillbook.core.config.models import (
    AppConfig,
    ConfigBase,
    EditorConfig,
    LoggingConfig,
    ScoringConfig,
    StorageConfig,
)

__all__ = [
    # Loaders
    "load_config",
    "load_app_config",
    "detect_format",
    "configure_logging",
    # Models
    "AppConfig",
    "ConfigBase",
    "EditorConfig",
    "LoggingConfig",
    "ScoringConfig",
    "StorageConfig",
]
