"""Cell rendering and field value coercion.

Every cell is first rendered to text, then the text is parsed into the
column's semantic type. Unparsable text never raises: it yields None and
the importer leaves the attribute at its default.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation
from enum import Enum

from sheet_rows._protocols.openpyxl import CellValue
from sheet_rows.logging import get_logger
from sheet_rows.schema import ColumnSpec

CoercedValue = str | int | float | bool | Decimal | datetime | date | time | Enum

_TRUE_TEXT = frozenset({"true", "yes", "1", "y"})
_FALSE_TEXT = frozenset({"false", "no", "0", "n"})

_logger = get_logger(__name__)


def render_cell(value: CellValue) -> str | None:
    """Render a raw cell value as text.

    Args:
        value: Cell value from openpyxl.

    Returns:
        Text form of the value, or None for an empty cell.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, Decimal):
        return format(value.normalize(), "f")
    # datetime before date: datetime is a date subclass
    if isinstance(value, datetime):
        return value.isoformat(sep=" ")
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, timedelta):
        return str(value)
    return str(value)


def _parse_bool_or_none(text: str) -> bool | None:
    lower = text.lower()
    if lower in _TRUE_TEXT:
        return True
    if lower in _FALSE_TEXT:
        return False
    return None


def _parse_int_or_none(text: str) -> int | None:
    try:
        return int(text)
    except ValueError:
        return None


def _parse_float_or_none(text: str) -> float | None:
    try:
        return float(text)
    except ValueError:
        return None


def _parse_decimal_or_none(text: str) -> Decimal | None:
    try:
        return Decimal(text)
    except InvalidOperation:
        return None


def _parse_datetime_or_none(text: str, pattern: str | None) -> datetime | None:
    if pattern is not None:
        try:
            return datetime.strptime(text, pattern)
        except ValueError:
            pass
    # Native date cells render as ISO text whatever the column pattern
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def _parse_date_or_none(text: str, pattern: str | None) -> date | None:
    if pattern is not None:
        try:
            return datetime.strptime(text, pattern).date()
        except ValueError:
            pass
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    # Date cells stored with a time part render as "YYYY-MM-DD HH:MM:SS"
    parsed = _parse_datetime_or_none(text, None)
    return parsed.date() if parsed is not None else None


def _parse_time_or_none(text: str, pattern: str | None) -> time | None:
    if pattern is not None:
        try:
            return datetime.strptime(text, pattern).time()
        except ValueError:
            pass
    try:
        return time.fromisoformat(text)
    except ValueError:
        return None


def _parse_enum_or_none(text: str, kind: type[Enum]) -> Enum | None:
    for member in kind:
        if str(member.value) == text:
            return member
    try:
        return kind[text]
    except KeyError:
        return None


def _parse_text(text: str, column: ColumnSpec) -> CoercedValue | None:
    kind = column["kind"]
    if kind is str:
        return text
    stripped = text.strip()
    if kind is bool:
        return _parse_bool_or_none(stripped)
    if kind is int:
        return _parse_int_or_none(stripped)
    if kind is float:
        return _parse_float_or_none(stripped)
    if kind is Decimal:
        return _parse_decimal_or_none(stripped)
    if kind is datetime:
        return _parse_datetime_or_none(stripped, column["date_format"])
    if kind is date:
        return _parse_date_or_none(stripped, column["date_format"])
    if kind is time:
        return _parse_time_or_none(stripped, column["date_format"])
    if issubclass(kind, Enum):
        return _parse_enum_or_none(stripped, kind)
    return None


def coerce_value(text: str, column: ColumnSpec) -> CoercedValue | None:
    """Coerce a cell's text into the column's semantic type.

    Blank text is "no value" for every type, including str. Text that does
    not parse as the column's type is also "no value".

    Args:
        text: Rendered cell text.
        column: Column receiving the value.

    Returns:
        The parsed value, or None when there is no value to assign.
    """
    if text.strip() == "":
        return None
    value = _parse_text(text, column)
    if value is None:
        _logger.debug(
            "Cell text not parsable as %s, leaving default",
            column["kind"].__name__,
            extra={"column": column["name"]},
        )
    return value


__all__ = [
    "CoercedValue",
    "coerce_value",
    "render_cell",
]
