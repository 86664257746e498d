"""Environment-based settings for geoqc."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from geoqc.lib.errors import ConfigurationError

__all__ = ["GeoQCSettings", "LoggingConfig", "load_settings"]


class LoggingConfig(BaseModel):
    """Pydantic model for logging configuration.

    Example:
        >>> config = LoggingConfig(level="debug", format="json")
        >>> from geoqc.lib.observability import setup_logging
        >>> setup_logging(json_format=(config.format == "json"), level=config.level)
    """

    level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    format: str = Field(default="console", description="Output format: 'json' or 'console'")
    file: Optional[str] = Field(default=None, description="Optional log file path")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level is a known value."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate format is a known value."""
        valid_formats = ["json", "console"]
        if v.lower() not in valid_formats:
            raise ValueError(f"format must be one of: {valid_formats}")
        return v.lower()


class GeoQCSettings(BaseSettings):
    """Settings loaded from environment variables with the GEOQC_ prefix.

    Example:
        >>> # GEOQC_LOG_LEVEL=DEBUG
        >>> # GEOQC_PROJECT_NAME="Road survey 2025"
        >>> settings = GeoQCSettings()
        >>> settings.logging_config().level
        'DEBUG'
    """

    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="console", description="Log format: 'json' or 'console'")
    log_file: Optional[str] = Field(default=None, description="Optional log file path")
    project_name: Optional[str] = Field(default=None, description="Project name when the standards file has none")

    model_config = SettingsConfigDict(
        env_prefix="GEOQC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def logging_config(self) -> LoggingConfig:
        """Validated logging configuration.

        Raises:
            ConfigurationError: If a GEOQC_LOG_* value is not recognized
        """
        try:
            return LoggingConfig(level=self.log_level, format=self.log_format, file=self.log_file)
        except ValidationError as e:
            raise _settings_error(e) from e


def _settings_error(error: ValidationError) -> ConfigurationError:
    first = error.errors()[0] if error.errors() else {}
    field = ".".join(str(part) for part in first.get("loc", ()))
    return ConfigurationError(
        f"Invalid geoqc settings: {first.get('msg', error)}",
        field=field or None,
        value=first.get("input"),
        suggestion="Check the GEOQC_ environment variables and the .env file.",
    )


def load_settings() -> GeoQCSettings:
    """Read GeoQCSettings, reporting bad values as ConfigurationError."""
    try:
        return GeoQCSettings()
    except ValidationError as e:
        raise _settings_error(e) from e
