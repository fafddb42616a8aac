"""Protocol definitions for external library abstraction.

Internal protocols used to provide type-safe interfaces to openpyxl
without importing it directly at module load time.
"""

from __future__ import annotations

from sheet_rows._protocols.openpyxl import (
    CellValue,
    WorkbookProtocol,
    WorkbookSource,
    WorksheetProtocol,
    _invalid_file_exception,
    _load_workbook,
)

__all__ = [
    "CellValue",
    "WorkbookProtocol",
    "WorkbookSource",
    "WorksheetProtocol",
    "_invalid_file_exception",
    "_load_workbook",
]
