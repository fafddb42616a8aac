"""Tagged result types for callers that branch instead of catching.

``ImportResult`` is a union discriminated by ``status``:

- ``"ok"``: the sheet was found; ``rows`` may be empty.
- ``"sheet_not_found"``: no sheet carries the resolved name.
- ``"error"``: a fatal failure; ``kind`` names which one.
"""

from __future__ import annotations

from typing import Generic, Literal, TypedDict, TypeVar

from sheet_rows._exceptions import ErrorKind

T = TypeVar("T")


class ImportedRows(TypedDict, Generic[T]):
    """Result wrapper for a sheet that was found and mapped."""

    status: Literal["ok"]
    sheet_name: str
    rows: list[T]


class SheetNotFound(TypedDict):
    """Result wrapper for a workbook without the resolved sheet."""

    status: Literal["sheet_not_found"]
    sheet_name: str


class ImportFailed(TypedDict):
    """Result wrapper for failed imports.

    Attributes:
        status: Always "error".
        kind: Which fatal condition occurred.
        message: Human-readable error description.
    """

    status: Literal["error"]
    kind: ErrorKind
    message: str


ImportResult = ImportedRows[T] | SheetNotFound | ImportFailed


def make_imported(sheet_name: str, rows: list[T]) -> ImportedRows[T]:
    """Create an ok result."""
    return ImportedRows(status="ok", sheet_name=sheet_name, rows=rows)


def make_sheet_not_found(sheet_name: str) -> SheetNotFound:
    """Create a sheet-not-found result."""
    return SheetNotFound(status="sheet_not_found", sheet_name=sheet_name)


def make_failed(kind: ErrorKind, message: str) -> ImportFailed:
    """Create an error result.

    Args:
        kind: The failure kind.
        message: Human-readable description.

    Returns:
        ImportFailed TypedDict.
    """
    return ImportFailed(status="error", kind=kind, message=message)


__all__ = [
    "ImportFailed",
    "ImportResult",
    "ImportedRows",
    "SheetNotFound",
    "make_failed",
    "make_imported",
    "make_sheet_not_found",
]
