"""Logging for sheet_rows.

Modules log through ``get_logger(__name__)`` and attach importer context
with ``extra=`` using the ``LogEventFields`` keys. The library installs no
handler by itself; an application may call ``configure_logging`` to send the
``sheet_rows`` logger tree to a stream as JSON lines or text.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from typing import TextIO, TypedDict

from sheet_rows.config import LogFormat, LogLevel, SheetRowsSettings

_PACKAGE_LOGGER = "sheet_rows"
_HANDLER_NAME = "sheet_rows.configured"

_FieldValue = str | int | float | bool | None

# Keys of LogEventFields, in output order
_EVENT_FIELDS: tuple[str, ...] = (
    "target",
    "sheet_name",
    "row_index",
    "row_count",
    "column",
    "source",
    "error_kind",
)


class LogEventFields(TypedDict, total=False):
    """Optional structured fields attached to importer log events."""

    target: str
    sheet_name: str
    row_index: int
    row_count: int
    column: str
    source: str
    error_kind: str


def _event_fields(record: logging.LogRecord) -> dict[str, _FieldValue]:
    """Importer fields present on the record, skipping non-scalar values."""
    found: dict[str, _FieldValue] = {}
    for name in _EVENT_FIELDS:
        value: object = record.__dict__.get(name)
        if isinstance(value, (str, int, float, bool)):
            found[name] = value
    return found


class JsonFormatter(logging.Formatter):
    """One JSON object per line.

    Keys: timestamp (UTC), level, logger, message, any importer event
    fields on the record, and exc_info when an exception is attached.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, _FieldValue] = {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_event_fields(record))
        if record.exc_info is not None:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


class TextFormatter(logging.Formatter):
    """Format: [timestamp] [LEVEL] [logger] key=value ... message"""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, "%Y-%m-%d %H:%M:%S")
        parts = [f"[{timestamp}]", f"[{record.levelname}]", f"[{record.name}]"]
        parts.extend(f"{key}={value}" for key, value in _event_fields(record).items())
        parts.append(record.getMessage())
        line = " ".join(parts)
        if record.exc_info is not None:
            line = line + "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(
    *, level: LogLevel, format_mode: LogFormat, stream: TextIO | None = None
) -> logging.Logger:
    """Send sheet_rows log records to a stream.

    Only the ``sheet_rows`` logger is touched; root handlers are left alone.
    A repeated call replaces the handler installed by the previous one.

    Args:
        level: Minimum level for sheet_rows loggers.
        format_mode: "json" for JSON lines, "text" for human-readable lines.
        stream: Destination, stderr when None.

    Returns:
        The configured ``sheet_rows`` logger.
    """
    logger = logging.getLogger(_PACKAGE_LOGGER)
    for existing in list(logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logger.removeHandler(existing)

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.set_name(_HANDLER_NAME)
    if format_mode == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(TextFormatter())

    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def configure_logging_from_settings(
    settings: SheetRowsSettings, *, stream: TextIO | None = None
) -> logging.Logger:
    """Configure logging from SHEET_ROWS_LOG_LEVEL and SHEET_ROWS_LOG_FORMAT settings."""
    return configure_logging(
        level=settings["log_level"], format_mode=settings["log_format"], stream=stream
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


__all__ = [
    "JsonFormatter",
    "LogEventFields",
    "TextFormatter",
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
]
