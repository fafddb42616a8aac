"""Map spreadsheet rows onto typed record instances.

Each data row of a sheet becomes one instance of a caller-supplied record
type. The type's attributes, in declaration order, are the columns; the
first row is a header and is skipped. Workbooks are decoded by openpyxl.

Example:
    >>> from dataclasses import dataclass
    >>> from sheet_rows import import_from_path
    >>> @dataclass
    ... class Employee:
    ...     name: str = ""
    ...     age: int = 0
    >>> rows = import_from_path("staff.xlsx", Employee)  # doctest: +SKIP
"""

from __future__ import annotations

from sheet_rows._exceptions import (
    ConstructionError,
    ErrorKind,
    SchemaError,
    SheetRowsError,
    SourceOpenError,
)
from sheet_rows.coercion import CoercedValue, coerce_value, render_cell
from sheet_rows.config import SheetRowsSettings, load_settings
from sheet_rows.importer import (
    import_from_file,
    import_from_path,
    import_from_stream,
    import_from_workbook,
    import_result,
    import_result_from_file,
    import_result_from_path,
    import_result_from_stream,
    import_rows,
)
from sheet_rows.logging import configure_logging, configure_logging_from_settings
from sheet_rows.schema import (
    ColumnSpec,
    DateFormat,
    RowSchema,
    build_schema,
    effective_sheet_name,
    excel_sheet,
    schema_for,
)
from sheet_rows.types import ImportedRows, ImportFailed, ImportResult, SheetNotFound

__all__ = [
    "CoercedValue",
    "ColumnSpec",
    "ConstructionError",
    "DateFormat",
    "ErrorKind",
    "ImportFailed",
    "ImportResult",
    "ImportedRows",
    "RowSchema",
    "SchemaError",
    "SheetNotFound",
    "SheetRowsError",
    "SheetRowsSettings",
    "SourceOpenError",
    "build_schema",
    "coerce_value",
    "configure_logging",
    "configure_logging_from_settings",
    "effective_sheet_name",
    "excel_sheet",
    "import_from_file",
    "import_from_path",
    "import_from_stream",
    "import_from_workbook",
    "import_result",
    "import_result_from_file",
    "import_result_from_path",
    "import_result_from_stream",
    "import_rows",
    "load_settings",
    "render_cell",
    "schema_for",
]
