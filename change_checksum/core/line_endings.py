"""Streaming line-ending normalization for binary sources.

``LineEndingNormalizingReader`` rewrites ``\\r\\n`` and lone ``\\r`` to ``\\n``
while bytes are pulled through it, so a stream can be digested without
loading it into memory. Its only state is whether the previous byte was a
carriage return.

Only line endings are touched. Unlike the text path, no Unicode normalization
or replacement-character stripping happens here, and checksums already stored
depend on that difference.
"""

from __future__ import annotations

import errno
import io
from typing import IO

CR = 0x0D
LF = 0x0A


class LineEndingNormalizingReader(io.RawIOBase):
    """Read-only binary stream that collapses CRLF and CR into LF.

    Transition rule per source byte:

    - ``\\r``: remember it and emit ``\\n``.
    - ``\\n`` directly after ``\\r``: forget the ``\\r`` and emit nothing,
      since the ``\\n`` was already emitted for the ``\\r``.
    - anything else: forget the ``\\r`` and emit the byte unchanged.

    The reader must have a single consumer. Closing it leaves the wrapped
    source open; the caller owns the source.

    Example:
        reader = LineEndingNormalizingReader(io.BytesIO(b"X\\r\\nY"))
        reader.read()  # b"X\\nY"
    """

    def __init__(self, source: IO[bytes]) -> None:
        """Wrap a binary source.

        Args:
            source: Readable binary stream to normalize.
        """
        super().__init__()
        self._source = source
        self._prev_was_cr = False

    @property
    def prev_was_cr(self) -> bool:
        """Whether the last byte pulled from the source was ``\\r``."""
        return self._prev_was_cr

    def _pull(self, size: int) -> bytes:
        data = self._source.read(size)
        if data is None:
            # Only b"" marks the end of the source.
            raise BlockingIOError(errno.EAGAIN, "Source has no data available yet")
        return data

    def _step(self, byte: int) -> int | None:
        if byte == CR:
            self._prev_was_cr = True
            return LF
        if byte == LF and self._prev_was_cr:
            self._prev_was_cr = False
            return None
        self._prev_was_cr = False
        return byte

    def read_byte(self) -> int | None:
        """Pull the next normalized byte.

        Returns:
            The byte value, or None once the source is exhausted.

        Raises:
            OSError: If reading the source fails.
            BlockingIOError: If a non-blocking source has no data ready.
        """
        self._checkClosed()
        while True:
            data = self._pull(1)
            if not data:
                return None
            byte = self._step(data[0])
            if byte is not None:
                return byte

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:  # type: ignore[no-untyped-def]
        """Fill ``buffer`` with normalized bytes.

        Returns 0 only at the end of the source, even when a whole chunk
        collapses to nothing.
        """
        self._checkClosed()
        view = memoryview(buffer).cast("B")
        size = len(view)
        if size == 0:
            return 0

        while True:
            chunk = self._pull(size)
            if not chunk:
                return 0
            out = bytearray()
            for byte in chunk:
                emitted = self._step(byte)
                if emitted is not None:
                    out.append(emitted)
            if out:
                # Never longer than the chunk, so it fits the buffer.
                view[: len(out)] = out
                return len(out)
