from __future__ import annotations

from ._utils import (
    LogFormat,
    LogLevel,
    _optional_env_str,
    _parse_log_format,
    _parse_log_level,
)
from .settings import SheetRowsSettings, load_settings

__all__ = [
    "LogFormat",
    "LogLevel",
    "SheetRowsSettings",
    "_optional_env_str",
    "_parse_log_format",
    "_parse_log_level",
    "load_settings",
]
