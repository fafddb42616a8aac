"""Import spreadsheet rows as record instances.

The sheet is chosen by the schema's effective name, row 0 is the header,
and every later row becomes one instance built by the schema's factory.
Cell ``i`` is coerced into the column at index ``i``; absent, blank and
unparsable cells leave the attribute at its default.

Entry points differ only in where the workbook comes from:

- ``import_rows`` / ``import_from_workbook``: an already opened workbook.
- ``import_from_path``: a path string.
- ``import_from_file``: a path object.
- ``import_from_stream``: a binary stream or raw bytes.

Each has an ``import_result*`` twin that returns a tagged ``ImportResult``
instead of raising.

Workbooks opened here are closed on every exit path. Streams stay owned
by the caller. Concurrent imports from one workbook handle are only safe
if openpyxl's row iteration is; callers must not assume it.
"""

from __future__ import annotations

import io
import os
import zipfile
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import BinaryIO, TypeVar
from xml.etree.ElementTree import ParseError

from sheet_rows._exceptions import (
    ConstructionError,
    ErrorKind,
    SchemaError,
    SheetRowsError,
    SourceOpenError,
)
from sheet_rows._protocols.openpyxl import (
    CellValue,
    WorkbookProtocol,
    WorkbookSource,
    WorksheetProtocol,
    _invalid_file_exception,
    _load_workbook,
)
from sheet_rows.coercion import coerce_value, render_cell
from sheet_rows.logging import LogEventFields, get_logger
from sheet_rows.schema import RowSchema, effective_sheet_name, schema_for
from sheet_rows.types import ImportResult, make_failed, make_imported, make_sheet_not_found

T = TypeVar("T")

_logger = get_logger(__name__)

# Failures openpyxl surfaces for unreadable or malformed documents
_DECODE_ERRORS: tuple[type[Exception], ...] = (
    OSError,
    ValueError,
    KeyError,
    TypeError,
    zipfile.BadZipFile,
    ParseError,
)


def _as_schema(target: type[T] | RowSchema[T]) -> RowSchema[T]:
    if isinstance(target, type):
        return schema_for(target)
    if not target["columns"]:
        raise SchemaError(target["type_name"], "data field can not be empty")
    return target


def _is_blank_row(row: tuple[CellValue, ...]) -> bool:
    """True when openpyxl materialized a row that holds no values."""
    return all(value is None for value in row)


def _new_instance(schema: RowSchema[T], row_index: int) -> T:
    try:
        return schema["factory"]()
    except Exception as exc:
        fields: LogEventFields = {
            "target": schema["type_name"],
            "row_index": row_index,
            "error_kind": ErrorKind.CONSTRUCTION.value,
        }
        _logger.error("Row instance construction failed", extra=fields)
        raise ConstructionError(
            schema["type_name"], row_index, f"Cannot construct instance ({exc})"
        ) from exc


def _populate(
    instance: T, schema: RowSchema[T], row: tuple[CellValue, ...], row_index: int
) -> None:
    for column in schema["columns"]:
        index = column["index"]
        if index >= len(row):
            continue
        text = render_cell(row[index])
        if text is None:
            continue
        value = coerce_value(text, column)
        if value is None:
            continue
        try:
            setattr(instance, column["name"], value)
        except Exception as exc:
            fields: LogEventFields = {
                "target": schema["type_name"],
                "row_index": row_index,
                "column": column["name"],
                "error_kind": ErrorKind.CONSTRUCTION.value,
            }
            _logger.error("Row instance attribute assignment failed", extra=fields)
            raise ConstructionError(
                schema["type_name"], row_index, f"Cannot set '{column['name']}' ({exc})"
            ) from exc


def _decode_failed(source: str, exc: Exception) -> SourceOpenError:
    fields: LogEventFields = {"source": source, "error_kind": ErrorKind.SOURCE_OPEN.value}
    _logger.error("Workbook decode failed", extra=fields)
    return SourceOpenError(source, f"Cannot decode workbook ({exc})")


def _iter_sheet_rows(ws: WorksheetProtocol, source: str) -> Iterator[tuple[CellValue, ...]]:
    """Yield the sheet's rows as value tuples.

    Read-only workbooks parse sheet XML while rows are pulled, so decode
    failures can surface here long after the workbook was opened. Only the
    pull itself is guarded; errors raised while populating a row are not.
    """
    try:
        rows = ws.iter_rows(values_only=True)
    except _DECODE_ERRORS as exc:
        raise _decode_failed(source, exc) from exc
    while True:
        try:
            row = next(rows)
        except StopIteration:
            return
        except _DECODE_ERRORS as exc:
            raise _decode_failed(source, exc) from exc
        yield row


def _read_sheet(ws: WorksheetProtocol, schema: RowSchema[T], source: str) -> list[T]:
    rows: list[T] = []
    row_index = 0
    for row in _iter_sheet_rows(ws, source):
        if _is_blank_row(row):
            continue
        if row_index > 0:
            instance = _new_instance(schema, row_index)
            _populate(instance, schema, row, row_index)
            rows.append(instance)
        row_index += 1
    return rows


def _import_rows(workbook: WorkbookProtocol, schema: RowSchema[T], source: str) -> list[T] | None:
    sheet_name = effective_sheet_name(schema)

    fields: LogEventFields = {"target": schema["type_name"], "sheet_name": sheet_name}
    if sheet_name not in workbook.sheetnames:
        _logger.info("Sheet not found", extra=fields)
        return None

    rows = _read_sheet(workbook[sheet_name], schema, source)
    fields["row_count"] = len(rows)
    _logger.info("Imported sheet rows", extra=fields)
    return rows


def import_rows(workbook: WorkbookProtocol, target: type[T] | RowSchema[T]) -> list[T] | None:
    """Map the data rows of a sheet onto instances of the target type.

    Args:
        workbook: Opened workbook.
        target: Record class (dataclass or annotated class) or a RowSchema.

    Returns:
        One instance per data row in sheet order, or None when the workbook
        has no sheet with the resolved name. A sheet holding only a header
        yields an empty list.

    Raises:
        SchemaError: If the target has no mappable columns.
        SourceOpenError: If a lazily loaded sheet cannot be decoded.
        ConstructionError: If any row instance cannot be built or populated.
    """
    return _import_rows(workbook, _as_schema(target), "<workbook>")


def import_from_workbook(
    workbook: WorkbookProtocol, target: type[T] | RowSchema[T]
) -> list[T] | None:
    """Same as import_rows; named for symmetry with the source-based entry points."""
    return import_rows(workbook, target)


def _open_workbook(
    source: WorkbookSource, description: str, read_only: bool, data_only: bool
) -> WorkbookProtocol:
    errors = (*_DECODE_ERRORS, _invalid_file_exception())
    try:
        return _load_workbook(source, read_only=read_only, data_only=data_only)
    except errors as exc:
        fields: LogEventFields = {"source": description, "error_kind": ErrorKind.SOURCE_OPEN.value}
        _logger.error("Workbook open failed", extra=fields)
        raise SourceOpenError(description, f"Cannot open workbook ({exc})") from exc


def _import_from_source(
    source: WorkbookSource,
    description: str,
    target: type[T] | RowSchema[T],
    read_only: bool,
    data_only: bool,
) -> list[T] | None:
    # Schema problems surface before any I/O
    schema = _as_schema(target)
    workbook = _open_workbook(source, description, read_only, data_only)
    try:
        return _import_rows(workbook, schema, description)
    finally:
        workbook.close()


def import_from_path(
    path: str,
    target: type[T] | RowSchema[T],
    *,
    read_only: bool = True,
    data_only: bool = True,
) -> list[T] | None:
    """Open the workbook at a path string and import rows from it.

    Args:
        path: Filesystem path of an .xlsx/.xlsm workbook.
        target: Record class or RowSchema.
        read_only: Stream the workbook instead of loading every sheet.
        data_only: Read cached formula results instead of formula text.

    Returns:
        Instances in row order, or None when the sheet is missing.

    Raises:
        SchemaError: If the target has no mappable columns.
        SourceOpenError: If the workbook cannot be opened or decoded.
        ConstructionError: If any row instance cannot be built or populated.
    """
    return _import_from_source(path, path, target, read_only, data_only)


def import_from_file(
    file: os.PathLike[str],
    target: type[T] | RowSchema[T],
    *,
    read_only: bool = True,
    data_only: bool = True,
) -> list[T] | None:
    """Open the workbook at a path object and import rows from it.

    See import_from_path for arguments, return value and errors.
    """
    path = Path(file)
    return _import_from_source(path, str(path), target, read_only, data_only)


def import_from_stream(
    stream: BinaryIO | bytes,
    target: type[T] | RowSchema[T],
    *,
    read_only: bool = True,
    data_only: bool = True,
) -> list[T] | None:
    """Read a workbook from a binary stream or bytes and import rows from it.

    The stream must be seekable and is left open.

    See import_from_path for arguments, return value and errors.
    """
    source: BinaryIO = io.BytesIO(stream) if isinstance(stream, bytes) else stream
    return _import_from_source(source, "<stream>", target, read_only, data_only)


def _as_result(
    target: type[T] | RowSchema[T], run: Callable[[RowSchema[T]], list[T] | None]
) -> ImportResult[T]:
    try:
        schema = _as_schema(target)
        rows = run(schema)
    except SheetRowsError as exc:
        return make_failed(exc.kind, str(exc))
    sheet_name = effective_sheet_name(schema)
    if rows is None:
        return make_sheet_not_found(sheet_name)
    return make_imported(sheet_name, rows)


def import_result(
    workbook: WorkbookProtocol, target: type[T] | RowSchema[T]
) -> ImportResult[T]:
    """Tagged-result variant of import_rows; never raises SheetRowsError."""
    return _as_result(target, lambda schema: import_rows(workbook, schema))


def import_result_from_path(
    path: str,
    target: type[T] | RowSchema[T],
    *,
    read_only: bool = True,
    data_only: bool = True,
) -> ImportResult[T]:
    """Tagged-result variant of import_from_path."""
    return _as_result(
        target,
        lambda schema: import_from_path(path, schema, read_only=read_only, data_only=data_only),
    )


def import_result_from_file(
    file: os.PathLike[str],
    target: type[T] | RowSchema[T],
    *,
    read_only: bool = True,
    data_only: bool = True,
) -> ImportResult[T]:
    """Tagged-result variant of import_from_file."""
    return _as_result(
        target,
        lambda schema: import_from_file(file, schema, read_only=read_only, data_only=data_only),
    )


def import_result_from_stream(
    stream: BinaryIO | bytes,
    target: type[T] | RowSchema[T],
    *,
    read_only: bool = True,
    data_only: bool = True,
) -> ImportResult[T]:
    """Tagged-result variant of import_from_stream."""
    return _as_result(
        target,
        lambda schema: import_from_stream(
            stream, schema, read_only=read_only, data_only=data_only
        ),
    )


__all__ = [
    "import_from_file",
    "import_from_path",
    "import_from_stream",
    "import_from_workbook",
    "import_result",
    "import_result_from_file",
    "import_result_from_path",
    "import_result_from_stream",
    "import_rows",
]
