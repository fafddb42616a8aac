from __future__ import annotations

from typing import Literal

from . import _test_hooks

# Level names accepted by logging.Logger.setLevel
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["json", "text"]

_LOG_LEVELS: dict[str, LogLevel] = {
    "DEBUG": "DEBUG",
    "INFO": "INFO",
    "WARNING": "WARNING",
    "ERROR": "ERROR",
    "CRITICAL": "CRITICAL",
}
_LOG_FORMATS: dict[str, LogFormat] = {"json": "json", "text": "text"}


def _optional_env_str(key: str) -> str | None:
    """Trimmed value of an environment variable; None when unset or blank."""
    raw = _test_hooks.get_env(key)
    if raw is None or raw.strip() == "":
        return None
    return raw.strip()


def _parse_log_level(key: str, default: LogLevel) -> LogLevel:
    """Unknown level names fall back to the default."""
    raw = _optional_env_str(key)
    if raw is None:
        return default
    return _LOG_LEVELS.get(raw.upper(), default)


def _parse_log_format(key: str, default: LogFormat) -> LogFormat:
    raw = _optional_env_str(key)
    if raw is None:
        return default
    fmt = _LOG_FORMATS.get(raw.lower())
    if fmt is None:
        raise ValueError(f"Invalid log format for {key}: {raw!r}")
    return fmt


__all__ = [
    "LogFormat",
    "LogLevel",
    "_optional_env_str",
    "_parse_log_format",
    "_parse_log_level",
]
