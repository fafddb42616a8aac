"""Column schemas describing how sheet columns bind to record attributes.

A ``RowSchema`` is the explicit mapping description used by the importer:
the type name, an optional sheet-name override, the ordered columns and a
zero-argument factory. Column ``i`` of every data row binds to the
attribute at declaration index ``i``.

Schemas are derived from dataclasses or annotated classes with
``schema_for`` or declared directly with ``build_schema``.
"""

from __future__ import annotations

import dataclasses
import inspect
import types
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import (
    Annotated,
    ClassVar,
    Generic,
    TypedDict,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from sheet_rows._exceptions import SchemaError

T = TypeVar("T")

_SHEET_ATTR = "__excel_sheet__"

_SCALAR_KINDS: frozenset[type] = frozenset({str, int, float, bool, Decimal, date, datetime, time})


@dataclass(frozen=True)
class DateFormat:
    """strptime pattern for a date, datetime or time column.

    Text that does not match falls back to ISO-8601, which is how native
    date cells render.

    Used as ``Annotated`` metadata::

        hired: Annotated[date | None, DateFormat("%d/%m/%Y")] = None
    """

    pattern: str


class ColumnSpec(TypedDict):
    """One mapped column.

    Attributes:
        name: Attribute name on the target instance.
        kind: Semantic type the cell text is coerced to.
        index: 0-based column index in the sheet.
        date_format: strptime pattern tried before ISO-8601 for temporal kinds.
    """

    name: str
    kind: type
    index: int
    date_format: str | None


class RowSchema(TypedDict, Generic[T]):
    """Explicit mapping description for a target type.

    Attributes:
        type_name: Simple name of the target type; the default sheet name.
        sheet_name: Sheet-name override, None when not declared.
        columns: Columns in declaration order.
        factory: Zero-argument constructor for one row instance.
    """

    type_name: str
    sheet_name: str | None
    columns: list[ColumnSpec]
    factory: Callable[[], T]


def excel_sheet(name: str) -> Callable[[type[T]], type[T]]:
    """Class decorator declaring the sheet a record type is read from.

    Blank names are ignored and the class name is used instead.
    """

    def decorate(cls: type[T]) -> type[T]:
        setattr(cls, _SHEET_ATTR, name)
        return cls

    return decorate


def effective_sheet_name(schema: RowSchema[T]) -> str:
    """Return the override when it is non-blank after trimming, else the type name."""
    override = schema["sheet_name"]
    if override is not None and override.strip() != "":
        return override.strip()
    return schema["type_name"]


def _is_supported_kind(kind: type) -> bool:
    if kind in _SCALAR_KINDS:
        return True
    return issubclass(kind, Enum)


def _unwrap_optional(hint: object) -> object:
    """Reduce ``X | None`` and ``Optional[X]`` to ``X``."""
    origin = get_origin(hint)
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(hint) if arg is not type(None)]
        if len(members) == 1:
            return members[0]
    return hint


def _resolve_column(target: str, name: str, index: int, hint: object) -> ColumnSpec:
    date_format: str | None = None
    hint = _unwrap_optional(hint)
    if get_origin(hint) is Annotated:
        base, *metadata = get_args(hint)
        for item in metadata:
            if isinstance(item, DateFormat):
                date_format = item.pattern
        hint = base

    kind = _unwrap_optional(hint)
    # list[str] and friends are not classes even where isinstance says so
    if get_origin(kind) is not None or not isinstance(kind, type) or not _is_supported_kind(kind):
        raise SchemaError(target, f"Unsupported type {kind!r} for column '{name}'")

    return {"name": name, "kind": kind, "index": index, "date_format": date_format}


def _instance_hints(cls: type) -> list[tuple[str, object]]:
    """Ordered (name, annotation) pairs for the instance attributes of cls."""
    target = cls.__name__
    try:
        if dataclasses.is_dataclass(cls):
            hints = get_type_hints(cls, include_extras=True)
            return [(f.name, hints.get(f.name, f.type)) for f in dataclasses.fields(cls)]
        own = inspect.get_annotations(cls, eval_str=True)
    except NameError as exc:
        raise SchemaError(target, f"Cannot resolve annotations ({exc})") from exc

    pairs: list[tuple[str, object]] = []
    for name, hint in own.items():
        if hint is ClassVar or get_origin(hint) is ClassVar:
            continue
        pairs.append((name, hint))
    return pairs


def _sheet_override(cls: type) -> str | None:
    raw: object = cls.__dict__.get(_SHEET_ATTR)
    if isinstance(raw, str):
        return raw
    return None


def schema_for(cls: type[T]) -> RowSchema[T]:
    """Derive a RowSchema from a dataclass or an annotated class.

    Dataclass columns follow ``dataclasses.fields`` order (base fields
    first). Other classes use their own annotations in declaration order.
    ClassVar attributes are never columns.

    Args:
        cls: Target record type. Must be constructible without arguments.

    Returns:
        RowSchema whose factory is ``cls``.

    Raises:
        SchemaError: If the type has no instance attributes, a frozen
            dataclass is given, or an attribute type is unsupported.
    """
    target = cls.__name__
    if dataclasses.is_dataclass(cls):
        params: object = getattr(cls, "__dataclass_params__", None)
        if getattr(params, "frozen", False) is True:
            raise SchemaError(target, "Frozen dataclasses cannot be populated")

    hints = _instance_hints(cls)
    if not hints:
        raise SchemaError(target, "data field can not be empty")

    columns = [_resolve_column(target, name, i, hint) for i, (name, hint) in enumerate(hints)]
    return {
        "type_name": target,
        "sheet_name": _sheet_override(cls),
        "columns": columns,
        "factory": cls,
    }


def build_schema(
    type_name: str,
    factory: Callable[[], T],
    columns: Sequence[tuple[str, type]],
    *,
    sheet_name: str | None = None,
    date_formats: Mapping[str, str] | None = None,
) -> RowSchema[T]:
    """Declare a RowSchema explicitly.

    Args:
        type_name: Name used as the sheet name when no override is given.
        factory: Zero-argument constructor for one row instance.
        columns: (attribute name, semantic type) pairs in column order.
        sheet_name: Optional sheet-name override.
        date_formats: Optional strptime patterns keyed by attribute name.

    Returns:
        RowSchema ready for the importer.

    Raises:
        SchemaError: If no columns are given or a type is unsupported.
    """
    if not columns:
        raise SchemaError(type_name, "data field can not be empty")

    formats = date_formats if date_formats is not None else {}
    specs: list[ColumnSpec] = []
    for index, (name, kind) in enumerate(columns):
        spec = _resolve_column(type_name, name, index, kind)
        spec["date_format"] = formats.get(name)
        specs.append(spec)

    return {
        "type_name": type_name,
        "sheet_name": sheet_name,
        "columns": specs,
        "factory": factory,
    }


__all__ = [
    "ColumnSpec",
    "DateFormat",
    "RowSchema",
    "build_schema",
    "effective_sheet_name",
    "excel_sheet",
    "schema_for",
]
