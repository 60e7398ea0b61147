"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError
import yaml

from drillbook.core.config.models import AppConfig, LoggingConfig
from drillbook.core.errors import ConfigError
from drillbook.core.utils.json import read_json
from drillbook.core.utils.logging import configure_logging as _configure_logging

logger = logging.getLogger(__name__)

ENV_LOG_LEVEL = "DRILLBOOK_LOG_LEVEL"
ENV_CHARTS_DIR = "DRILLBOOK_CHARTS_DIR"


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Args:
        file_path: Path to config file

    Returns:
        Format string: "json" or "yaml"

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("drillbook.json")
        'json'
        >>> detect_format("drillbook.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return raw configuration dictionary.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Raw configuration dictionary

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)

    if fmt == "json":
        try:
            return read_json(path)
        except Exception as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

    try:
        with path.open("r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    # safe_load returns None for empty files
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ValueError(f"Expected a mapping at the top of {path}, got {type(content).__name__}")
    return content


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration.

    An explicit ``path`` must exist. When ``path`` is None the default
    location is tried and defaults are used if it is absent. Environment
    overrides are applied last.

    Args:
        path: Path to app config file (.json, .yaml, or .yml)

    Returns:
        Validated AppConfig instance

    Raises:
        FileNotFoundError: If an explicit path does not exist
        ConfigError: If the file or an override fails validation
    """
    if path is None:
        default = AppConfig.default_path()
        raw = load_config(default) if default.exists() else {}
        source = str(default)
    else:
        raw = load_config(path)
        source = str(path)

    try:
        config = AppConfig.model_validate(raw)
        return _apply_env_overrides(config)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration ({source}): {e}") from e


def configure_logging(config: AppConfig | None = None) -> None:
    """Configure Python logging from app config.

    Args:
        config: AppConfig instance (loads default if None)
    """
    if config is None:
        config = load_app_config()

    _configure_logging(
        level=config.logging.level,
        format_string=config.logging.format,
        filename=config.logging.filename,
        structured=config.logging.structured,
    )


def _apply_env_overrides(config: AppConfig) -> AppConfig:
    """Return ``config`` with DRILLBOOK_* environment overrides applied."""
    level = os.getenv(ENV_LOG_LEVEL)
    if level:
        logger.debug("Log level overridden from %s", ENV_LOG_LEVEL)
        logging_cfg = LoggingConfig.model_validate(
            {**config.logging.model_dump(), "level": level.upper()}
        )
        config = config.model_copy(update={"logging": logging_cfg})

    charts_dir = os.getenv(ENV_CHARTS_DIR)
    if charts_dir:
        logger.debug("Charts directory overridden from %s", ENV_CHARTS_DIR)
        config = config.model_copy(
            update={"storage": config.storage.model_copy(update={"charts_dir": charts_dir})}
        )

    return config
