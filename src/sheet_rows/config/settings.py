from __future__ import annotations

from typing import TypedDict

from ._utils import LogFormat, LogLevel, _parse_log_format, _parse_log_level


class SheetRowsSettings(TypedDict):
    """Logging settings an application may apply with configure_logging_from_settings.

    Importing never reads these; open options are keyword arguments.
    """

    log_level: LogLevel
    log_format: LogFormat


def load_settings() -> SheetRowsSettings:
    return {
        "log_level": _parse_log_level("SHEET_ROWS_LOG_LEVEL", "INFO"),
        "log_format": _parse_log_format("SHEET_ROWS_LOG_FORMAT", "text"),
    }


__all__ = ["SheetRowsSettings", "load_settings"]
