"""Core components for the change checksum engine."""

from change_checksum.core.checksum import (
    CURRENT_CHECKSUM_ALGORITHM_VERSION,
    DELIMITER,
    LEGACY_CHECKSUM_VERSION,
    Checksum,
    compute,
    current_version,
    parse,
)
from change_checksum.core.digest import DIGEST_ALGORITHM, digest_bytes, digest_stream
from change_checksum.core.errors import (
    ChecksumError,
    ConfigurationError,
    InvalidValueError,
    ValidationError,
)
from change_checksum.core.line_endings import LineEndingNormalizingReader
from change_checksum.core.normalization import (
    normalize,
    normalize_text,
    standardize_line_endings,
)

__all__ = [
    # Checksum value
    "Checksum",
    "CURRENT_CHECKSUM_ALGORITHM_VERSION",
    "LEGACY_CHECKSUM_VERSION",
    "DELIMITER",
    "compute",
    "parse",
    "current_version",
    # Digest primitive
    "DIGEST_ALGORITHM",
    "digest_bytes",
    "digest_stream",
    # Normalization
    "normalize",
    "normalize_text",
    "standardize_line_endings",
    "LineEndingNormalizingReader",
    # Errors
    "ChecksumError",
    "ValidationError",
    "InvalidValueError",
    "ConfigurationError",
]
