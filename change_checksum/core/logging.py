"""Logging setup for the change checksum engine.

Checksum log records carry their context as ``extra`` fields
(``checksum``, ``checksum_source``, ``standardize_line_endings``). Both
formatters render those fields when a record has them.

Features:
    - Plain console format with a ``[checksum=... source=...]`` suffix
    - JSON structured logging format with the context as top-level keys
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
PLAIN_DATEFMT = "%Y-%m-%d %H:%M:%S"

CHECKSUM_CONTEXT_FIELDS = ("checksum", "checksum_source", "standardize_line_endings")
"""LogRecord attributes set through ``extra`` by the checksum engine."""

_PLAIN_LABELS = {
    "checksum": "checksum",
    "checksum_source": "source",
    "standardize_line_endings": "standardize",
}


def checksum_context(record: logging.LogRecord) -> dict[str, Any]:
    """Collect the checksum context fields present on a record."""
    return {
        name: getattr(record, name)
        for name in CHECKSUM_CONTEXT_FIELDS
        if hasattr(record, name)
    }


class ChecksumFormatter(logging.Formatter):
    """Plain formatter that appends the checksum context of a record."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = checksum_context(record)
        if not context:
            return message

        suffix = " ".join(f"{_PLAIN_LABELS[name]}={value}" for name, value in context.items())
        first_line, sep, rest = message.partition("\n")
        # Keep the context on the message line, ahead of any traceback.
        return f"{first_line} [{suffix}]{sep}{rest}"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as a single JSON line.

        Args:
            record: The log record to format.

        Returns:
            JSON-formatted log message including any checksum context.
        """
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(checksum_context(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def configure_logging(level: str = "INFO", json_format: bool = False) -> None:
    """Configure logging for the application.

    Only the ``change_checksum`` logger follows ``level``; other libraries
    stay at WARNING so ``--verbose`` shows checksum diagnostics only.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR).
        json_format: Use JSON format for structured logging.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.WARNING)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    logging.getLogger("change_checksum").setLevel(level)

    console_handler = logging.StreamHandler()

    if json_format:
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = ChecksumFormatter(fmt=PLAIN_FORMAT, datefmt=PLAIN_DATEFMT)

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)
