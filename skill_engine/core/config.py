"""Engine configuration loaded via Pydantic settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration sourced from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    SKILL_LOG_LEVEL: str = Field(default="info")
    SKILL_LOG_DIR: Path | None = Field(default=None)
    SKILL_LOG_SCHEMA_VERSION: str = Field(default="1.0.0")
    DATA_DIR: Path = Field(default=Path("/data"))

    # Defaults applied to skills that do not declare their own options.
    # List values are read from the environment as JSON, e.g. '["amzn1.ask.skill.x"]'.
    SKILL_APPLICATION_IDS: list[str] = Field(default_factory=list)
    SKILL_RESPONSE_VERSION: str = Field(default="0.0.1")


settings = Settings()
config = settings  # Alias for backward compatibility


__all__ = ["Settings", "settings", "config"]
