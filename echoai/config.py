#!/usr/bin/env python3
"""
Centralized configuration management for echoai.

Provider credentials live in the config store (see ``echoai.config_store``);
this module only holds process-wide settings read from the environment.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_PATH = Path.home() / ".echoai" / "config.yaml"


class EchoConfig(BaseSettings):
    """Main configuration for echoai."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Provider Configuration
    config_path: Path = Field(
        default=DEFAULT_CONFIG_PATH, validation_alias="ECHOAI_CONFIG_PATH"
    )
    default_provider: Optional[str] = Field(
        default=None, validation_alias="ECHOAI_DEFAULT_PROVIDER"
    )

    # Logging Configuration
    log_level: str = Field(default="WARNING", validation_alias="ECHOAI_LOG_LEVEL")
    log_format: str = Field(default="console", validation_alias="ECHOAI_LOG_FORMAT")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        valid_formats = {"console", "json"}
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of: {valid_formats}")
        return v.lower()

    @field_validator("default_provider")
    @classmethod
    def normalize_default_provider(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v else v


# Global config instance
_config: Optional[EchoConfig] = None


def get_config() -> EchoConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = EchoConfig()
    return _config


def reset_config() -> None:
    """Reset the global configuration (mainly for testing)."""
    global _config
    _config = None
