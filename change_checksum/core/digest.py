"""Digest primitive used to fingerprint normalized content.

Both entry points produce the same lowercase hex digest for the same logical
byte sequence, regardless of how a stream happens to be chunked.
"""

from __future__ import annotations

import errno
import hashlib
from typing import IO

DIGEST_ALGORITHM = "md5"


def _new_hash() -> hashlib._Hash:
    return hashlib.new(DIGEST_ALGORITHM, usedforsecurity=False)


def digest_bytes(data: bytes) -> str:
    """Compute the hex digest of an in-memory byte string.

    Args:
        data: Bytes to hash.

    Returns:
        Lowercase hex digest string.
    """
    hasher = _new_hash()
    hasher.update(data)
    return hasher.hexdigest()


def digest_stream(stream: IO[bytes], chunk_size: int | None = None) -> str:
    """Compute the hex digest of a binary stream, reading it to the end once.

    Args:
        stream: Readable binary stream. It is not closed.
        chunk_size: Bytes requested per read. Defaults to the
            ``stream_chunk_size`` setting.

    Returns:
        Lowercase hex digest string.

    Raises:
        OSError: If reading the stream fails.
        BlockingIOError: If a non-blocking stream has no data ready. Partial
            content is never digested.
    """
    if chunk_size is None:
        from change_checksum.config import get_settings

        chunk_size = get_settings().stream_chunk_size

    hasher = _new_hash()
    while True:
        chunk = stream.read(chunk_size)
        if chunk is None:
            raise BlockingIOError(errno.EAGAIN, "Stream has no data available yet")
        if not chunk:
            break
        hasher.update(chunk)
    return hasher.hexdigest()
