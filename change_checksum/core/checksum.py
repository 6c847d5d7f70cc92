"""Versioned content checksums.

A checksum records whether a unit of work (such as a migration step) has
changed since it was last applied. Each checksum carries the version of the
algorithm that produced it, so checksums stored under an older normalization
or digest scheme stay distinguishable from current ones instead of being
reported as content changes.

Canonical text form: ``<version>:<digest>``, for example
``8:2cdf9876e74347162401315d34b83746``. Strings without a version prefix
were stored before versioning existed and parse as version 1.

This module only hashes what it is given. Deciding what to checksum, storing
checksums and acting on a version mismatch belong to the caller.
"""

from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass
from typing import IO, Union

from change_checksum.core.digest import digest_bytes, digest_stream
from change_checksum.core.errors import InvalidValueError, ValidationError
from change_checksum.core.line_endings import LineEndingNormalizingReader
from change_checksum.core.normalization import normalize

logger = logging.getLogger(__name__)

CURRENT_CHECKSUM_ALGORITHM_VERSION = 8
"""Bump whenever normalization or the digest primitive changes."""

LEGACY_CHECKSUM_VERSION = 1
"""Version assigned to stored checksums without a version prefix."""

DELIMITER = ":"

CHECKSUM_PATTERN = re.compile(r"^(\d)" + DELIMITER + r"([a-zA-Z0-9]+)", re.ASCII)

ChecksumSource = Union[str, bytes, bytearray, IO[bytes]]


@dataclass(frozen=True, eq=False)
class Checksum:
    """Immutable (version, digest) pair.

    Equality and hashing use the canonical string form, so two checksums
    with the same digest but different versions are not equal.

    Attributes:
        version: Algorithm version that produced (or is claimed for) the digest.
        digest: Opaque digest token. Not validated or re-hashed.
    """

    version: int
    digest: str

    def __post_init__(self) -> None:
        if isinstance(self.version, bool) or not isinstance(self.version, int):
            raise ValidationError(f"Checksum version must be an integer, got {self.version!r}")
        if self.version < 0:
            raise ValidationError(f"Checksum version must be non-negative, got {self.version}")
        if not isinstance(self.digest, str):
            raise ValidationError(f"Checksum digest must be a string, got {type(self.digest).__name__}")

    @staticmethod
    def current_version() -> int:
        """Return the algorithm version stamped on freshly computed checksums."""
        return CURRENT_CHECKSUM_ALGORITHM_VERSION

    @property
    def is_current_version(self) -> bool:
        """Whether this checksum was produced by the current algorithm."""
        return self.version == CURRENT_CHECKSUM_ALGORITHM_VERSION

    @classmethod
    def parse(cls, value: str | None) -> Checksum | None:
        """Parse a stored checksum string.

        The layout is one version digit, the delimiter, then one or more
        alphanumeric digest characters; anything after that run is ignored.
        A string that does not match is a legacy checksum: the whole string
        becomes the digest and the version is 1. Parsing never fails.

        Args:
            value: Stored checksum, or None when nothing was recorded.

        Returns:
            The parsed checksum, or None if ``value`` is None.
        """
        if value is None:
            return None

        match = CHECKSUM_PATTERN.match(value)
        if match:
            return cls(version=int(match.group(1)), digest=match.group(2))

        checksum = cls(version=LEGACY_CHECKSUM_VERSION, digest=value)
        logger.debug(
            "No version prefix in stored checksum, treating as legacy",
            extra={"checksum": str(checksum), "checksum_source": "legacy"},
        )
        return checksum

    @classmethod
    def compute_text(cls, text: str) -> Checksum:
        """Checksum a string after full text normalization.

        Line endings are standardized, U+FFFD is removed and the result is
        NFC-normalized before hashing.
        """
        checksum = cls(
            version=CURRENT_CHECKSUM_ALGORITHM_VERSION,
            digest=digest_bytes(normalize(text)),
        )
        logger.debug(
            "Computed checksum",
            extra={"checksum": str(checksum), "checksum_source": "text"},
        )
        return checksum

    @classmethod
    def compute_stream(
        cls,
        stream: IO[bytes],
        standardize_line_endings: bool,
        chunk_size: int | None = None,
    ) -> Checksum:
        """Checksum a binary stream without loading it into memory.

        Only line endings are normalized, and only when requested. No Unicode
        normalization happens on this path, so the result can differ from
        ``compute_text`` on the decoded content.

        Args:
            stream: Readable binary stream, consumed to the end. The caller
                keeps ownership and closes it.
            standardize_line_endings: Collapse CRLF and CR to LF while reading.
            chunk_size: Bytes requested per read (defaults to settings).

        Returns:
            Checksum tagged with the current algorithm version.

        Raises:
            OSError: If reading the stream fails.
            BlockingIOError: If a non-blocking stream has no data ready.
        """
        source: IO[bytes] = stream
        if standardize_line_endings:
            source = LineEndingNormalizingReader(stream)  # type: ignore[assignment]
        checksum = cls(
            version=CURRENT_CHECKSUM_ALGORITHM_VERSION,
            digest=digest_stream(source, chunk_size),
        )
        logger.debug(
            "Computed checksum",
            extra={
                "checksum": str(checksum),
                "checksum_source": "stream",
                "standardize_line_endings": standardize_line_endings,
            },
        )
        return checksum

    @classmethod
    def compute(
        cls,
        source: ChecksumSource,
        standardize_line_endings: bool = False,
    ) -> Checksum:
        """Checksum a string or a byte source.

        Strings always go through ``compute_text`` and ignore
        ``standardize_line_endings``. Bytes and binary streams go through
        ``compute_stream``.

        Raises:
            InvalidValueError: If ``source`` is neither text nor bytes.
            OSError: If reading a stream fails.
        """
        if isinstance(source, str):
            return cls.compute_text(source)
        elif isinstance(source, (bytes, bytearray)):
            return cls.compute_stream(io.BytesIO(source), standardize_line_endings)
        elif isinstance(source, io.TextIOBase):
            raise InvalidValueError(
                type(source).__name__, "text streams must be opened in binary mode"
            )
        elif hasattr(source, "read"):
            return cls.compute_stream(source, standardize_line_endings)
        else:
            raise InvalidValueError(
                type(source).__name__, "expected a string, bytes or a binary stream"
            )

    def __str__(self) -> str:
        return f"{self.version}{DELIMITER}{self.digest}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Checksum):
            return NotImplemented
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(str(self))


def current_version() -> int:
    """Return the current checksum algorithm version."""
    return CURRENT_CHECKSUM_ALGORITHM_VERSION


compute = Checksum.compute
parse = Checksum.parse
