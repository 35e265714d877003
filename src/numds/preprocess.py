"""
Text preprocessing helpers.

The byte-level helpers (`drop_lines`, `fix_american_decimals`,
`fixed_width_to_csv`) are meant to be used as preprocessing hooks,
i.e., pure `bytes -> bytes` functions applied to the raw content
before parsing it. For example:

    from functools import partial

    dataset = from_delimited(
        Row,
        URL("https://example.com/data.txt"),
        preprocess=partial(drop_lines, 3),
    )

The field-level helpers (`read_field`, `read_field_after_dash_to_camel`)
parse a single textual value into a scalar Python type.
"""

from __future__ import annotations

import re
from datetime import date, time
from enum import Enum
from typing import Any

from .errors import FieldDecodeError

_DASH_RE = re.compile(r"-(.)", re.DOTALL)
_SPACES_RE = re.compile(rb" +")

_BOOL_VALUES = {
    "True": True,
    "False": False,
    "true": True,
    "false": False,
}


def dashes_to_camel_case(value: str) -> str:
    """Turn dashes into camel case (e.g., `foo-bar-baz` => `fooBarBaz`)."""
    return _DASH_RE.sub(lambda m: m.group(1).upper(), value)


def read_field(field_type: Any, value: str | bytes) -> Any:
    """
    Parse the given textual value as an instance of field_type.

    Supported types are `str`, `bool` (`True`, `False`, `true`, `false`),
    `int`, `float`, `Enum` subclasses (looked up by member name first and
    then by member value), `date`/`datetime`/`time` (ISO 8601), and any
    other type whose constructor accepts a single string argument.

    Raises:
        FieldDecodeError: if the value cannot be parsed.
    """
    text = value.decode("utf-8") if isinstance(value, bytes) else value
    try:
        return _read(field_type, text)
    except (KeyError, TypeError, ValueError) as exc:
        raise FieldDecodeError() from exc


def _read(field_type: Any, text: str) -> Any:
    if field_type is str:
        return text
    if field_type is bool:
        return _BOOL_VALUES[text.strip()]
    if isinstance(field_type, type) and issubclass(field_type, Enum):
        try:
            return field_type[text.strip()]
        except KeyError:
            return field_type(text.strip())
    if isinstance(field_type, type) and issubclass(field_type, (date, time)):
        return field_type.fromisoformat(text.strip())
    return field_type(text)


def read_field_after_dash_to_camel(field_type: Any, value: str | bytes) -> Any:
    """Like `read_field` but first turns dashes into camel case."""
    text = value.decode("utf-8") if isinstance(value, bytes) else value
    return read_field(field_type, dashes_to_camel_case(text))


def drop_lines(count: int, data: bytes) -> bytes:
    """
    Drop the first `count` newline-terminated lines.

    Raises:
        ValueError: if count is negative or the data contains
            fewer than `count` newline-terminated lines.
    """
    if count < 0:
        raise ValueError(f"cannot drop a negative number of lines: {count}")
    offset = 0
    for dropped in range(count):
        newline = data.find(b"\n", offset)
        if newline < 0:
            raise ValueError(f"cannot drop {count} lines: input only contains {dropped}")
        offset = newline + 1
    return data[offset:]


def fix_american_decimals(data: bytes) -> bytes:
    """Turn decimals starting with a period (e.g., `,.2`) into `,0.2`."""
    return data.replace(b",.", b",0.")


def fixed_width_to_csv(data: bytes) -> bytes:
    """
    Convert fixed-width columns into comma separated values.

    On each line, we strip the leading spaces and collapse every
    other run of spaces into a single comma.
    """
    lines = data.split(b"\n")
    return b"\n".join(_SPACES_RE.sub(b",", line.lstrip(b" ")) for line in lines)
