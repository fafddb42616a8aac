"""Tests for schema module."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Annotated, ClassVar, Optional

import pytest

from sheet_rows._exceptions import ErrorKind, SchemaError
from sheet_rows.schema import (
    DateFormat,
    RowSchema,
    build_schema,
    effective_sheet_name,
    excel_sheet,
    schema_for,
)


class Grade(Enum):
    JUNIOR = "junior"
    SENIOR = "senior"


@dataclass
class Employee:
    registry: ClassVar[int] = 0
    name: str = ""
    age: int = 0


@dataclass
class Everything:
    text: str = ""
    count: int = 0
    ratio: float = 0.0
    flag: bool = False
    amount: Decimal = Decimal(0)
    day: date | None = None
    stamp: Optional[datetime] = None  # noqa: UP007
    clock: time | None = None
    grade: Grade = Grade.JUNIOR
    hired: Annotated[date | None, DateFormat("%d/%m/%Y")] = None


@dataclass
class Base:
    ident: int = 0


@dataclass
class Derived(Base):
    label: str = ""


@dataclass
class WithTags:
    tags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Frozen:
    name: str = ""


@dataclass
class Empty:
    pass


class Product:
    category: ClassVar[str] = "hardware"
    sku: str = ""
    price: float = 0.0


@excel_sheet("Staff")
@dataclass
class StaffMember:
    name: str = ""


@excel_sheet("Staff")
@dataclass
class Parent:
    name: str = ""


@dataclass
class Child(Parent):
    note: str = ""


def test_dataclass_columns_in_declaration_order() -> None:
    schema = schema_for(Employee)
    assert [c["name"] for c in schema["columns"]] == ["name", "age"]
    assert [c["index"] for c in schema["columns"]] == [0, 1]
    assert [c["kind"] for c in schema["columns"]] == [str, int]
    assert schema["type_name"] == "Employee"
    assert schema["sheet_name"] is None
    assert schema["factory"] is Employee


def test_classvar_is_not_a_column() -> None:
    schema = schema_for(Employee)
    assert "registry" not in [c["name"] for c in schema["columns"]]


def test_all_supported_kinds() -> None:
    schema = schema_for(Everything)
    kinds = {c["name"]: c["kind"] for c in schema["columns"]}
    assert kinds == {
        "text": str,
        "count": int,
        "ratio": float,
        "flag": bool,
        "amount": Decimal,
        "day": date,
        "stamp": datetime,
        "clock": time,
        "grade": Grade,
        "hired": date,
    }


def test_date_format_metadata() -> None:
    schema = schema_for(Everything)
    formats = {c["name"]: c["date_format"] for c in schema["columns"]}
    assert formats["hired"] == "%d/%m/%Y"
    assert formats["day"] is None


def test_inherited_dataclass_fields_come_first() -> None:
    schema = schema_for(Derived)
    assert [c["name"] for c in schema["columns"]] == ["ident", "label"]


def test_plain_annotated_class() -> None:
    schema = schema_for(Product)
    assert [(c["name"], c["kind"]) for c in schema["columns"]] == [
        ("sku", str),
        ("price", float),
    ]


def test_unsupported_type_raises() -> None:
    with pytest.raises(SchemaError) as exc_info:
        schema_for(WithTags)
    assert exc_info.value.kind is ErrorKind.SCHEMA
    assert "tags" in str(exc_info.value)


def test_frozen_dataclass_raises() -> None:
    with pytest.raises(SchemaError):
        schema_for(Frozen)


def test_empty_type_raises() -> None:
    with pytest.raises(SchemaError) as exc_info:
        schema_for(Empty)
    assert exc_info.value.message == "data field can not be empty"
    assert exc_info.value.target == "Empty"


def test_excel_sheet_override() -> None:
    schema = schema_for(StaffMember)
    assert schema["sheet_name"] == "Staff"
    assert effective_sheet_name(schema) == "Staff"


def test_excel_sheet_override_is_not_inherited() -> None:
    assert schema_for(Parent)["sheet_name"] == "Staff"
    assert schema_for(Child)["sheet_name"] is None
    assert effective_sheet_name(schema_for(Child)) == "Child"


def test_effective_sheet_name_trims_override() -> None:
    schema: RowSchema[Employee] = build_schema(
        "Employee", Employee, [("name", str)], sheet_name="  Staff "
    )
    assert effective_sheet_name(schema) == "Staff"


def test_effective_sheet_name_blank_override_uses_type_name() -> None:
    schema = build_schema("Employee", Employee, [("name", str)], sheet_name="   ")
    assert effective_sheet_name(schema) == "Employee"


def test_build_schema() -> None:
    schema = build_schema(
        "Shift",
        Employee,
        [("name", str), ("start", datetime)],
        date_formats={"start": "%d.%m.%Y %H:%M"},
    )
    assert schema["columns"] == [
        {"name": "name", "kind": str, "index": 0, "date_format": None},
        {"name": "start", "kind": datetime, "index": 1, "date_format": "%d.%m.%Y %H:%M"},
    ]


def test_build_schema_requires_columns() -> None:
    with pytest.raises(SchemaError):
        build_schema("Nothing", Employee, [])


def test_build_schema_rejects_unsupported_kind() -> None:
    with pytest.raises(SchemaError):
        build_schema("Bad", Employee, [("payload", dict)])
