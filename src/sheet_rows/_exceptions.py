"""Exception hierarchy for sheet_rows library.

All exceptions propagate without recovery. Each carries an ``ErrorKind`` so
callers can branch on the failure kind instead of on the exception class.
A missing sheet is not an error; importers return ``None`` for it.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Failure kinds raised by the importer."""

    SCHEMA = "SCHEMA"  # target type has no mappable columns
    SOURCE_OPEN = "SOURCE_OPEN"  # workbook could not be opened or decoded
    CONSTRUCTION = "CONSTRUCTION"  # row instance could not be created


class SheetRowsError(Exception):
    """Base exception for sheet_rows library.

    Attributes:
        kind: The failure kind.
        message: Description of the failure.
    """

    kind: ErrorKind

    def __init__(self, kind: ErrorKind, message: str) -> None:
        self.kind = kind
        self.message = message
        super().__init__(message)


class SchemaError(SheetRowsError):
    """Raised when a target type cannot be turned into a column schema.

    Detected before any workbook I/O.

    Attributes:
        target: Name of the target type.
        message: Description of the failure.
    """

    def __init__(self, target: str, message: str) -> None:
        self.target = target
        super().__init__(ErrorKind.SCHEMA, f"{message}: {target}")
        self.message = message


class SourceOpenError(SheetRowsError):
    """Raised when a workbook cannot be opened or decoded.

    Attributes:
        source: Path or stream description of the workbook.
        message: Description of the failure.
    """

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__(ErrorKind.SOURCE_OPEN, f"{message}: {source}")
        self.message = message


class ConstructionError(SheetRowsError):
    """Raised when a data row's target instance cannot be created.

    The whole import fails; rows built before the failure are discarded.

    Attributes:
        target: Name of the target type.
        row_index: 0-based index of the row within the sheet (header is 0).
        message: Description of the failure.
    """

    def __init__(self, target: str, row_index: int, message: str) -> None:
        self.target = target
        self.row_index = row_index
        super().__init__(ErrorKind.CONSTRUCTION, f"{message}: {target} (row {row_index})")
        self.message = message


__all__ = [
    "ConstructionError",
    "ErrorKind",
    "SchemaError",
    "SheetRowsError",
    "SourceOpenError",
]
