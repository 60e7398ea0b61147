"""Configuration models for Drillbook."""

from __future__ import annotations

from pathlib import Path
from typing import Self

from pydantic import BaseModel, ConfigDict, Field


class ConfigBase(BaseModel):
    """Base class for file-backed configurations.

    Subclasses must implement default_path() to specify their default location.
    """

    model_config = ConfigDict(extra="ignore")  # Forward compatibility

    @classmethod
    def default_path(cls) -> Path:
        """Return the default config file path for this config type."""
        raise NotImplementedError(f"{cls.__name__} must implement default_path()")

    @classmethod
    def load_or_default(cls, path: Path | str | None = None) -> Self:
        """Load config from path or use default path.

        Args:
            path: Path to config file, or None to use default

        Returns:
            Loaded config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValidationError: If config is invalid
        """
        from drillbook.core.config.loader import load_config

        if path is None:
            path = cls.default_path()
        raw = load_config(path)
        return cls.model_validate(raw)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = Field(default=False, description="Emit JSON lines instead of text")
    filename: str | None = Field(default=None, description="Log file path (None = stdout)")


class EditorConfig(BaseModel):
    """Editing behaviour."""

    history_capacity: int = Field(
        default=100, ge=1, description="Undo entries kept before the oldest are dropped"
    )
    snap_grid_yards: float = Field(
        default=0.625, gt=0.0, description="Grid used when snapping dropped members (one 8-to-5 step)"
    )


class ScoringConfig(BaseModel):
    """Scoring rubric: sub-score weights and error tolerances.

    Weights are expected to sum to 1.0; the scoring engine warns when they
    do not.
    """

    formation_weight: float = Field(default=0.4, ge=0.0, le=1.0)
    music_weight: float = Field(default=0.35, ge=0.0, le=1.0)
    showmanship_weight: float = Field(default=0.15, ge=0.0, le=1.0)
    difficulty_weight: float = Field(default=0.1, ge=0.0, le=1.0)

    position_error_threshold: float = Field(
        default=0.5, gt=0.0, description="Yards of drift tolerated before a member is off spot"
    )
    max_difficulty_bonus: float = Field(
        default=20.0, ge=0.0, description="Upper bound on the difficulty bonus"
    )

    @property
    def weight_total(self) -> float:
        return (
            self.formation_weight
            + self.music_weight
            + self.showmanship_weight
            + self.difficulty_weight
        )

    @property
    def weights_balanced(self) -> bool:
        return abs(self.weight_total - 1.0) <= 0.01


class StorageConfig(BaseModel):
    """Where charts are persisted."""

    charts_dir: str = Field(default="charts", description="Directory holding chart_<id>.json files")


class AppConfig(ConfigBase):
    """Application-level configuration."""

    model_config = ConfigDict(extra="ignore")

    default_bpm: float = Field(default=120.0, gt=0.0, description="Tempo used when a song is unknown")
    logging: LoggingConfig = LoggingConfig()
    editor: EditorConfig = EditorConfig()
    scoring: ScoringConfig = ScoringConfig()
    storage: StorageConfig = StorageConfig()

    @classmethod
    def default_path(cls) -> Path:
        """Default path for application config."""
        return Path("drillbook.yaml")

    @classmethod
    def load_or_default(cls, path: Path | str | None = None) -> Self:
        # Applies environment overrides and tolerates a missing default file
        from drillbook.core.config.loader import load_app_config

        return load_app_config(path)  # type: ignore[return-value]
