"""Custom exceptions for the change checksum engine."""

from typing import Any


class ChecksumError(Exception):
    """Base exception for all checksum engine errors."""

    pass


class ValidationError(ChecksumError):
    """Raised when input validation fails."""

    pass


class InvalidValueError(ValidationError):
    """Raised when a value cannot be converted to the type an operation needs.

    Carries the offending value and the underlying cause so the caller can
    report both and ask for a new value.
    """

    def __init__(self, value: Any, cause: str | BaseException) -> None:
        self.value = value
        self.cause = cause
        super().__init__(f"Invalid value: '{value}': {cause}")


class ConfigurationError(ChecksumError):
    """Raised when configuration is invalid."""

    pass
