"""Module implementing the format parsers.

Every parser converts (preprocessed) raw bytes into a list of records,
or raises ParseError. Parsing is all-or-nothing: the first row that
cannot be decoded aborts the whole load and no partial result is
returned to the caller.

Delimited text is tokenized using `pandas.read_csv`, keeping every
value as the raw string (no NA detection, no type inference), so
that decoding into typed fields is entirely driven by the record type
(see the `decode` module). Every row must have as many fields as the
first one (the header, when there is one): pandas silently pads short
rows, so the field counts are checked before building the frame.
"""

from __future__ import annotations

import csv
import io
import json
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Generic, TypeVar

import pandas as pd

from .decode import decode_document, decode_named_record, decode_record
from .errors import ParseError

T = TypeVar("T")

Preprocess = Callable[[bytes], bytes]
"""A pure bytes-to-bytes transform applied before parsing."""

log = logging.getLogger("parsers")


def identity(data: bytes) -> bytes:
    """The preprocess hook that does nothing."""
    return data


class Parser(ABC, Generic[T]):
    """Convert raw bytes into a list of records."""

    def __init__(self, record_type: type[T], preprocess: Preprocess | None = None):
        self.record_type = record_type
        self.preprocess = preprocess if preprocess is not None else identity

    def parse(self, data: bytes) -> list[T]:
        """
        Preprocess and parse data.

        Raises:
            ParseError: if preprocessing or parsing fails.
        """
        try:
            data = self.preprocess(data)
        except Exception as exc:
            raise ParseError(f"preprocessing failed: {exc}") from exc
        records = self._parse(data)
        log.debug("parsed %d %s records", len(records), self.record_type.__name__)
        return records

    @abstractmethod
    def _parse(self, data: bytes) -> list[T]: ...


def _read_table(data: bytes, *, separator: str, header: bool) -> pd.DataFrame:
    return pd.read_csv(
        io.BytesIO(data),
        sep=separator,
        header=0 if header else None,
        dtype=str,
        na_filter=False,
        skip_blank_lines=True,
        encoding="utf-8",
    )


def _check_separator(separator: str) -> str:
    if len(separator) != 1:
        raise ValueError(f"separator must be a single character, got: {separator!r}")
    return separator


def _scan_rows(data: bytes, separator: str) -> list[list[str]]:
    """
    Tokenize data into rows, skipping blank lines as `_read_table` does.

    With NA detection disabled, pandas pads short rows with empty strings,
    so we use the rows returned by this function to check the number of
    fields before building the frame.
    """
    try:
        reader = csv.reader(io.StringIO(data.decode("utf-8"), newline=""), delimiter=separator)
        return [row for row in reader if not _is_blank(row)]
    except (csv.Error, UnicodeDecodeError) as exc:
        raise ParseError(str(exc)) from exc


def _is_blank(row: list[str]) -> bool:
    return not row or (len(row) == 1 and not row[0].strip())


def _check_widths(rows: list[list[str]], width: int, *, first_rownum: int) -> None:
    for rownum, row in enumerate(rows, start=first_rownum):
        if len(row) < width:
            raise ParseError(f"row {rownum}: not enough fields (expected {width}, got {len(row)})")
        if len(row) > width:
            raise ParseError(f"row {rownum}: too many fields (expected {width}, got {len(row)})")


def _check_header(names: list[str]) -> None:
    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise ParseError(f"duplicate column name in header: {name!r}")
        seen.add(name)


class DelimitedParser(Parser[T]):
    """Parse delimited text without a header, decoding rows by position."""

    def __init__(
        self,
        record_type: type[T],
        preprocess: Preprocess | None = None,
        separator: str = ",",
    ):
        super().__init__(record_type, preprocess)
        self.separator = _check_separator(separator)

    def _parse(self, data: bytes) -> list[T]:
        rows = _scan_rows(data, self.separator)
        if not rows:
            return []
        _check_widths(rows, len(rows[0]), first_rownum=1)
        try:
            frame = _read_table(data, separator=self.separator, header=False)
        except ValueError as exc:
            raise ParseError(str(exc)) from exc

        records: list[T] = []
        for rownum, values in enumerate(frame.itertuples(index=False, name=None), start=1):
            values = list(values)
            try:
                records.append(decode_record(self.record_type, values))
            except ParseError as exc:
                raise ParseError(f"row {rownum}: {exc}") from exc
        return records


class DelimitedHeaderedParser(Parser[T]):
    """Parse delimited text whose first row names the columns."""

    def __init__(
        self,
        record_type: type[T],
        separator: str = ",",
        preprocess: Preprocess | None = None,
    ):
        super().__init__(record_type, preprocess)
        self.separator = _check_separator(separator)

    def _parse(self, data: bytes) -> list[T]:
        rows = _scan_rows(data, self.separator)
        if not rows:
            raise ParseError("no header row")
        columns = rows[0]
        _check_header(columns)
        _check_widths(rows[1:], len(columns), first_rownum=1)
        try:
            frame = _read_table(data, separator=self.separator, header=True)
        except ValueError as exc:
            raise ParseError(str(exc)) from exc

        records: list[T] = []
        for rownum, values in enumerate(frame.itertuples(index=False, name=None), start=1):
            try:
                records.append(decode_named_record(self.record_type, dict(zip(columns, values))))
            except ParseError as exc:
                raise ParseError(f"row {rownum}: {exc}") from exc
        return records


class DocumentParser(Parser[T]):
    """Parse a JSON document containing an array of records."""

    def _parse(self, data: bytes) -> list[T]:
        try:
            document = json.loads(data)
        except ValueError as exc:
            raise ParseError(f"failed to parse json: {exc}") from exc

        if not isinstance(document, list):
            kind = type(document).__name__
            raise ParseError(f"failed to parse json: expected an array, got {kind}")

        records: list[T] = []
        for index, value in enumerate(document):
            try:
                records.append(decode_document(self.record_type, value))
            except ParseError as exc:
                raise ParseError(f"failed to parse json: item {index}: {exc}") from exc
        return records
