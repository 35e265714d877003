"""
Module to decode raw values into typed records.

A record type is one of:

1. a dataclass, built using `dacite.from_dict`;

2. a `typing.NamedTuple`;

3. any class implementing one or more of the following classmethods,
which take precedence over the automatic decoding:

    from_record(values: list[str]) -> Self         # headerless rows
    from_named_record(row: dict[str, str]) -> Self  # headered rows
    from_document(value: object) -> Self           # JSON values

When decoding JSON documents, plain scalar types (e.g., `int`) are
also accepted as record types.

Delimited text only contains strings, so we convert each field to the
annotated type using `read_field`. An `Optional[X]` field maps the empty
string to None.
"""

from __future__ import annotations

import dataclasses
import functools
import types
import typing
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any

import dacite

from .errors import DatasetError, ParseError
from .preprocess import read_field

_DECODE_ERRORS = (DatasetError, dacite.DaciteError, KeyError, TypeError, ValueError)


def record_fields(record_type: type) -> list[tuple[str, Any]]:
    """
    Return the (name, type) pairs of the fields of the given record type.

    Raises:
        TypeError: if the record type is neither a dataclass nor a NamedTuple.
    """
    if dataclasses.is_dataclass(record_type):
        hints = typing.get_type_hints(record_type)
        return [(fld.name, hints[fld.name]) for fld in dataclasses.fields(record_type) if fld.init]
    if _is_namedtuple(record_type):
        hints = typing.get_type_hints(record_type)
        return [(name, hints.get(name, str)) for name in record_type._fields]
    raise TypeError(f"unsupported record type: {record_type!r}")


def _is_namedtuple(record_type: Any) -> bool:
    return (
        isinstance(record_type, type)
        and issubclass(record_type, tuple)
        and hasattr(record_type, "_fields")
    )


def _optional_inner(field_type: Any) -> Any | None:
    """Return X when field_type is Optional[X], otherwise None."""
    if typing.get_origin(field_type) not in (typing.Union, types.UnionType):
        return None
    args = [arg for arg in typing.get_args(field_type) if arg is not type(None)]
    if len(args) != 1 or len(args) == len(typing.get_args(field_type)):
        return None
    return args[0]


def decode_field(name: str, field_type: Any, text: str) -> Any:
    """Decode a single textual field into the given type."""
    inner = _optional_inner(field_type)
    if inner is not None:
        if text == "":
            return None
        field_type = inner
    try:
        return read_field(field_type, text)
    except ParseError as exc:
        raise ParseError(f"field {name!r} ({text!r}): {exc}") from exc


def _build(record_type: Any, data: dict[str, Any]) -> Any:
    if dataclasses.is_dataclass(record_type):
        return dacite.from_dict(record_type, data)
    return record_type(**data)


def decode_record(record_type: Any, values: Sequence[str]) -> Any:
    """
    Decode a headerless row, mapping fields to the record by position.

    Raises:
        ParseError: if the row cannot be decoded.
    """
    hook = getattr(record_type, "from_record", None)
    try:
        if hook is not None:
            return hook(list(values))
        fields = record_fields(record_type)
        if len(values) != len(fields):
            raise ParseError(f"expected {len(fields)} fields, got {len(values)}")
        data = {
            name: decode_field(name, field_type, text)
            for (name, field_type), text in zip(fields, values)
        }
        return _build(record_type, data)
    except ParseError:
        raise
    except _DECODE_ERRORS as exc:
        raise ParseError(str(exc)) from exc


def decode_named_record(record_type: Any, row: Mapping[str, str]) -> Any:
    """
    Decode a headered row, mapping fields to the record by name.

    Columns not declared by the record are ignored. Missing columns are
    only accepted for fields that have a default value.

    Raises:
        ParseError: if the row cannot be decoded.
    """
    hook = getattr(record_type, "from_named_record", None)
    try:
        if hook is not None:
            return hook(dict(row))
        data = {
            name: decode_field(name, field_type, row[name])
            for name, field_type in record_fields(record_type)
            if name in row
        }
        return _build(record_type, data)
    except ParseError:
        raise
    except _DECODE_ERRORS as exc:
        raise ParseError(str(exc)) from exc


def _int_to_float(value: Any) -> Any:
    # JSON does not distinguish 1 from 1.0
    if isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    return value


_DOCUMENT_CONFIG = dacite.Config(
    type_hooks={float: _int_to_float},
    cast=[Enum],
)


@functools.cache
def _namedtuple_as_dataclass(record_type: type) -> type:
    """Return a dataclass with the fields (and defaults) of a NamedTuple."""
    defaults = record_type._field_defaults
    spec: list[tuple[Any, ...]] = []
    for name, field_type in record_fields(record_type):
        if name in defaults:
            spec.append((name, field_type, dataclasses.field(default=defaults[name])))
        else:
            spec.append((name, field_type))
    return dataclasses.make_dataclass(record_type.__name__, spec)


def _decode_namedtuple_document(record_type: Any, value: Any) -> Any:
    # JSON arrays map to the fields by position, objects by name
    fields = record_fields(record_type)
    if isinstance(value, list):
        if len(value) > len(fields):
            raise ParseError(f"expected {len(fields)} fields, got {len(value)}")
        value = {name: item for (name, _), item in zip(fields, value)}
    if not isinstance(value, dict):
        raise ParseError(f"expected an object or an array, got {type(value).__name__}")
    shadow = _namedtuple_as_dataclass(record_type)
    checked = dacite.from_dict(shadow, value, config=_DOCUMENT_CONFIG)
    return record_type(**{name: getattr(checked, name) for name, _ in fields})


def decode_document(record_type: Any, value: Any) -> Any:
    """
    Decode a JSON value into the given record type.

    Raises:
        ParseError: if the value does not match the record shape.
    """
    hook = getattr(record_type, "from_document", None)
    try:
        if hook is not None:
            return hook(value)
        if dataclasses.is_dataclass(record_type):
            if not isinstance(value, dict):
                raise ParseError(f"expected an object, got {type(value).__name__}")
            return dacite.from_dict(record_type, value, config=_DOCUMENT_CONFIG)
        if _is_namedtuple(record_type):
            return _decode_namedtuple_document(record_type, value)
        if record_type is float:
            value = _int_to_float(value)
        if isinstance(value, bool) and record_type is not bool:
            raise ParseError(f"expected {record_type.__name__}, got bool")
        if not isinstance(value, record_type):
            raise ParseError(f"expected {record_type.__name__}, got {type(value).__name__}")
        return value
    except ParseError:
        raise
    except _DECODE_ERRORS as exc:
        raise ParseError(str(exc)) from exc
