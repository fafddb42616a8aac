"""Tests for _exceptions module."""

from __future__ import annotations

from sheet_rows._exceptions import (
    ConstructionError,
    ErrorKind,
    SchemaError,
    SheetRowsError,
    SourceOpenError,
)


def test_schema_error() -> None:
    err = SchemaError("Employee", "data field can not be empty")
    assert str(err) == "data field can not be empty: Employee"
    assert err.target == "Employee"
    assert err.message == "data field can not be empty"
    assert err.kind is ErrorKind.SCHEMA
    assert isinstance(err, SheetRowsError)


def test_source_open_error() -> None:
    err = SourceOpenError("/data/staff.xlsx", "Cannot open workbook")
    assert "/data/staff.xlsx" in str(err)
    assert "Cannot open workbook" in str(err)
    assert err.source == "/data/staff.xlsx"
    assert err.kind is ErrorKind.SOURCE_OPEN


def test_construction_error() -> None:
    err = ConstructionError("Employee", 3, "Cannot construct instance")
    assert str(err) == "Cannot construct instance: Employee (row 3)"
    assert err.row_index == 3
    assert err.kind is ErrorKind.CONSTRUCTION


def test_error_kind_is_string_valued() -> None:
    assert ErrorKind.SCHEMA == "SCHEMA"
    assert ErrorKind("SOURCE_OPEN") is ErrorKind.SOURCE_OPEN
