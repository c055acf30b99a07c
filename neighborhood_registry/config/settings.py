"""
Configuration Management for the Neighborhood Registry

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here. The registry core
itself takes no configuration; only the storage defaults and logging do.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RegistrySettings(BaseSettings):
    """
    Registry settings.

    Loads configuration from NEIGHBORHOOD_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="NEIGHBORHOOD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    data_file: Path = Field(
        default=Path("neighborhood.txt"),
        description="Default file used by load/save when no path is given"
    )
    file_encoding: str = Field(
        default="utf-8",
        description="Text encoding of the data file"
    )
    log_level: str = Field(
        default="INFO",
        description="Minimum level for the structured log"
    )
    json_logs: bool = Field(
        default=True,
        description="Render logs as JSON (False: human-readable console output)"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Unsupported log level: {v}. Allowed: {sorted(allowed)}")
        return v.upper()


@lru_cache()
def get_settings() -> RegistrySettings:
    """
    Get registry settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return RegistrySettings()
