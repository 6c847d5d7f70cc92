"""Text normalization applied before a string is checksummed.

Content that differs only in platform line endings, in stray U+FFFD
replacement characters left behind by a bad decode, or in how Unicode
sequences are composed must produce the same bytes. The order of the steps
is part of the checksum algorithm and must not change without a new
algorithm version.
"""

from __future__ import annotations

import unicodedata

REPLACEMENT_CHARACTER = "\ufffd"
TEXT_ENCODING = "utf-8"


def standardize_line_endings(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def normalize_text(text: str) -> str:
    """Return the canonical text form of ``text``.

    Args:
        text: Raw content.

    Returns:
        Text with LF line endings, no replacement characters, in NFC.
    """
    text = standardize_line_endings(text)
    text = text.replace(REPLACEMENT_CHARACTER, "")
    return unicodedata.normalize("NFC", text)


def normalize(text: str) -> bytes:
    """Return the canonical bytes of ``text`` for hashing.

    Unencodable code points (lone surrogates) are written as ``?``.
    """
    return normalize_text(text).encode(TEXT_ENCODING, errors="replace")
