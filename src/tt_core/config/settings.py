"""Runtime configuration settings for tt-core.

This module uses Pydantic Settings for configuration that can be
overridden via environment variables. This provides:
- Type validation
- Environment variable support (TT_ prefix)
- Default values
- Easy testing via dependency injection
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tt_core.config.paths import default_db_path
from tt_core.constants import DEFAULT_PLAN_LIMIT, WORKDAY_MINUTES

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class TTSettings(BaseSettings):
    """tt-core settings.

    Can be overridden via environment variables with TT_ prefix,
    e.g. TT_DB_PATH=/tmp/work.db or TT_PLAN_LIMIT=10.
    """

    model_config = SettingsConfigDict(env_prefix="TT_")

    db_path: Path = Field(
        default_factory=default_db_path,
        description="SQLite database file",
    )
    plan_limit: int = Field(
        default=DEFAULT_PLAN_LIMIT,
        ge=1,
        description="Maximum number of entries in a daily plan",
    )
    workday_minutes: int = Field(
        default=WORKDAY_MINUTES,
        ge=0,
        description="Nominal workday length used for remaining minutes",
    )
    log_level: str = Field(
        default="WARNING",
        description="Log level for the tt_core logger",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


def get_settings() -> TTSettings:
    """Build settings from the current environment."""
    return TTSettings()
