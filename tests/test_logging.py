from __future__ import annotations

import io
import json
import logging
import sys
from collections.abc import Generator

import pytest

from sheet_rows.logging import (
    JsonFormatter,
    LogEventFields,
    TextFormatter,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)


@pytest.fixture(autouse=True)
def _restore_package_logger() -> Generator[None, None, None]:
    logger = logging.getLogger("sheet_rows")
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


def _record(msg: str, level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name="sheet_rows.importer",
        level=level,
        pathname="importer.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


def _parse(line: str) -> dict[str, object]:
    parsed: dict[str, object] = json.loads(line)
    return parsed


def test_json_formatter_basic() -> None:
    """Test JsonFormatter produces valid JSON with required fields."""
    parsed = _parse(JsonFormatter().format(_record("Imported sheet rows")))

    assert parsed["level"] == "INFO"
    assert parsed["logger"] == "sheet_rows.importer"
    assert parsed["message"] == "Imported sheet rows"
    assert "timestamp" in parsed


def test_json_formatter_includes_event_fields() -> None:
    record = _record("Imported sheet rows")
    record.sheet_name = "Staff"
    record.row_count = 2
    record.target = "Employee"

    parsed = _parse(JsonFormatter().format(record))
    assert parsed["sheet_name"] == "Staff"
    assert parsed["row_count"] == 2
    assert parsed["target"] == "Employee"
    assert "row_index" not in parsed


def test_json_formatter_skips_non_scalar_fields() -> None:
    record = _record("x")
    record.source = object()
    parsed = _parse(JsonFormatter().format(record))
    assert "source" not in parsed


def test_json_formatter_with_exception() -> None:
    try:
        raise ValueError("bad cell")
    except ValueError:
        exc_info = sys.exc_info()
    record = logging.LogRecord(
        name="test",
        level=logging.ERROR,
        pathname="t.py",
        lineno=1,
        msg="failed",
        args=(),
        exc_info=exc_info,
    )
    exc_text = _parse(JsonFormatter().format(record))["exc_info"]
    assert isinstance(exc_text, str)
    assert "ValueError: bad cell" in exc_text


def test_text_formatter() -> None:
    record = _record("Sheet not found", logging.INFO)
    record.sheet_name = "Staff"
    output = TextFormatter().format(record)
    assert "[INFO]" in output
    assert "[sheet_rows.importer]" in output
    assert "sheet_name=Staff" in output
    assert output.endswith("Sheet not found")


def test_configure_logging_json() -> None:
    stream = io.StringIO()
    logger = configure_logging(level="INFO", format_mode="json", stream=stream)
    assert logger.name == "sheet_rows"
    assert logger.level == logging.INFO

    fields: LogEventFields = {"sheet_name": "Staff", "row_count": 3}
    get_logger("sheet_rows.importer").info("Imported sheet rows", extra=fields)
    parsed = _parse(stream.getvalue().strip())
    assert parsed["message"] == "Imported sheet rows"
    assert parsed["row_count"] == 3


def test_configure_logging_leaves_root_handlers() -> None:
    root = logging.getLogger()
    before = list(root.handlers)
    configure_logging(level="DEBUG", format_mode="text", stream=io.StringIO())
    assert root.handlers == before


def test_configure_logging_replaces_own_handler() -> None:
    first = io.StringIO()
    second = io.StringIO()
    configure_logging(level="INFO", format_mode="text", stream=first)
    logger = configure_logging(level="INFO", format_mode="text", stream=second)

    get_logger("sheet_rows.importer").info("Sheet not found")
    assert first.getvalue() == ""
    assert "Sheet not found" in second.getvalue()
    configured = [h for h in logger.handlers if h.get_name() == "sheet_rows.configured"]
    assert len(configured) == 1
    assert isinstance(configured[0].formatter, TextFormatter)


def test_configure_logging_from_settings() -> None:
    stream = io.StringIO()
    logger = configure_logging_from_settings(
        {"log_level": "ERROR", "log_format": "json"}, stream=stream
    )
    assert logger.level == logging.ERROR

    get_logger("sheet_rows.importer").info("Imported sheet rows")
    assert stream.getvalue() == ""


def test_get_logger() -> None:
    assert get_logger("sheet_rows.coercion").name == "sheet_rows.coercion"
