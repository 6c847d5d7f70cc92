"""Configuration system for the change checksum engine."""

import logging

from pydantic import Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings

from change_checksum.core.errors import ConfigurationError


class Settings(BaseSettings):
    """Change Checksum Configuration.

    The checksum algorithm version and digest primitive are deliberately not
    settings: changing either requires a new algorithm version.
    """

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON structured log lines",
    )

    # Streaming
    stream_chunk_size: int = Field(
        default=65536,
        ge=1,
        description="Bytes pulled from a stream per read while digesting",
    )
    standardize_line_endings: bool = Field(
        default=True,
        description="Collapse CRLF and CR to LF when checksumming files from the CLI",
    )

    model_config = {
        "env_prefix": "CHANGE_CHECKSUM_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


# Settings singleton with dependency injection support
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the settings instance (lazy-loaded singleton).

    Returns:
        The Settings instance.

    Raises:
        ConfigurationError: If the environment or .env file holds invalid values.

    Example:
        from change_checksum.config import get_settings
        settings = get_settings()
        print(settings.stream_chunk_size)
    """
    global _settings
    if _settings is None:
        try:
            _settings = Settings()
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid change-checksum settings: {e}") from e
    return _settings


def override_settings(new_settings: Settings) -> None:
    """Override the settings instance (for testing).

    Args:
        new_settings: The new Settings instance to use.
    """
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    """Reset settings to None (forces reload on next get_settings call)."""
    global _settings
    _settings = None
