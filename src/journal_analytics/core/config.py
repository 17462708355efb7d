"""Configuration management.

Loads from an optional TOML config file + environment variables.
Uses pydantic-settings for validation and env var overriding.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator
from pydantic_settings import BaseSettings

from .errors import ConfigError


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class SimulatorConfig(BaseModel):
    short_duration_mins: float = 5.0  # Trades shorter than this are "impulsive"
    late_entry_hour: int = Field(default=14, ge=0, le=23)  # 14 = after 2 PM


class PatternConfig(BaseModel):
    market_open_hour: int = Field(default=9, ge=0, le=23)
    market_close_hour: int = Field(default=15, ge=0, le=23)
    top_setups: int = Field(default=5, ge=1)
    top_mistakes: int = Field(default=5, ge=1)

    @model_validator(mode="after")
    def open_before_close(self) -> "PatternConfig":
        if self.market_open_hour > self.market_close_hour:
            raise ValueError(
                f"market_open_hour {self.market_open_hour} is after "
                f"market_close_hour {self.market_close_hour}"
            )
        return self


class PsychologyConfig(BaseModel):
    disciplined_rating: int = Field(default=3, ge=1, le=5)  # <= this is an offense
    stable_emotions: list[str] = Field(
        default_factory=lambda: ["Neutral", "Focused", "Calm"]
    )
    recent_offenses: int = Field(default=5, ge=0)


class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_format: str = "json"  # "json" or "console"


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class AnalyticsSettings(BaseSettings):
    """Top-level analytics settings.

    Loaded from TOML config files, overridden by environment variables
    (``JOURNAL_SIMULATOR__LATE_ENTRY_HOUR=13`` and so on).
    """

    simulator: SimulatorConfig = Field(default_factory=SimulatorConfig)
    patterns: PatternConfig = Field(default_factory=PatternConfig)
    psychology: PsychologyConfig = Field(default_factory=PsychologyConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {"env_prefix": "JOURNAL_", "env_nested_delimiter": "__"}


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> AnalyticsSettings:
    """Load settings from TOML file + env vars.

    Args:
        config_path: Path to TOML config file (optional).  A path that
            does not exist is ignored.
        overrides: Dict of overrides to apply on top.

    Raises:
        ConfigError: The file cannot be read, is not valid TOML, or a
            value fails validation.
    """
    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            import tomli

            try:
                with open(path, "rb") as f:
                    data = tomli.load(f)
            except tomli.TOMLDecodeError as exc:
                raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
            except OSError as exc:
                raise ConfigError(f"Cannot read {path}: {exc}") from exc

    if overrides:
        data.update(overrides)

    try:
        return AnalyticsSettings(**data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid analytics settings: {exc}") from exc
