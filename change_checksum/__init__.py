"""Change Checksum - versioned content fingerprints for change tracking."""

__version__ = "0.1.0"

# Re-export core components for convenience
from change_checksum.config import Settings, get_settings
from change_checksum.core import (
    CURRENT_CHECKSUM_ALGORITHM_VERSION,
    Checksum,
    ChecksumError,
    ConfigurationError,
    InvalidValueError,
    LineEndingNormalizingReader,
    ValidationError,
    compute,
    current_version,
    parse,
)

__all__ = [
    # Version info
    "__version__",
    # Configuration
    "Settings",
    "get_settings",
    # Errors
    "ChecksumError",
    "ValidationError",
    "InvalidValueError",
    "ConfigurationError",
    # Checksums
    "Checksum",
    "CURRENT_CHECKSUM_ALGORITHM_VERSION",
    "LineEndingNormalizingReader",
    "compute",
    "parse",
    "current_version",
]
