"""Protocol definitions for openpyxl library.

Provides type-safe interfaces to openpyxl Workbook and Worksheet classes
without importing openpyxl directly.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from pathlib import Path
from typing import BinaryIO, Literal, Protocol

# Every value openpyxl can hand back for a cell
CellValue = str | int | float | bool | Decimal | datetime | date | time | timedelta | None

WorkbookSource = str | Path | BinaryIO


class WorksheetProtocol(Protocol):
    """Protocol for openpyxl Worksheet (regular or read-only)."""

    def iter_rows(self, *, values_only: Literal[True]) -> Iterator[tuple[CellValue, ...]]:
        """Iterate rows from A1 as tuples of cell values."""
        ...


class WorkbookProtocol(Protocol):
    """Protocol for openpyxl Workbook: named sheets, lookup by name, close."""

    @property
    def sheetnames(self) -> list[str]:
        """Return list of sheet names."""
        ...

    def __getitem__(self, name: str) -> WorksheetProtocol:
        """Get worksheet by name."""
        ...

    def close(self) -> None:
        """Close workbook."""
        ...


class _LoadWorkbookFn(Protocol):
    """Protocol for openpyxl load_workbook function."""

    def __call__(
        self, filename: WorkbookSource, read_only: bool = False, data_only: bool = False
    ) -> WorkbookProtocol: ...


def _load_workbook(
    source: WorkbookSource, read_only: bool = False, data_only: bool = False
) -> WorkbookProtocol:
    """Load workbook with proper typing via Protocol.

    Args:
        source: Path to an .xlsx/.xlsm file or a binary file object.
        read_only: Open in read-only (streaming) mode.
        data_only: Read cached cell values only, not formulas.

    Returns:
        WorkbookProtocol for the loaded workbook.
    """
    openpyxl_mod = __import__("openpyxl")
    load_fn: _LoadWorkbookFn = openpyxl_mod.load_workbook
    return load_fn(source, read_only=read_only, data_only=data_only)


def _invalid_file_exception() -> type[Exception]:
    """Return openpyxl's InvalidFileException class.

    Raised by load_workbook for unsupported extensions such as legacy .xls.
    """
    exc_mod = __import__("openpyxl.utils.exceptions", fromlist=["InvalidFileException"])
    exc_type: type[Exception] = exc_mod.InvalidFileException
    return exc_type


__all__ = [
    "CellValue",
    "WorkbookProtocol",
    "WorkbookSource",
    "WorksheetProtocol",
    "_invalid_file_exception",
    "_load_workbook",
]
