"""Exceptions raised while loading a dataset."""

from __future__ import annotations


class DatasetError(Exception):
    """Base class for all the errors raised by this library."""


class FetchError(DatasetError):
    """Error emitted when we cannot fetch a remote source."""

    def __init__(self, url: str, reason: object) -> None:
        super().__init__(f"cannot fetch {url}: {reason}")
        self.url = url


class CacheIOError(DatasetError, OSError):
    """Error emitted when we cannot read or write a cache file."""


class ParseError(DatasetError, ValueError):
    """Error emitted when the raw bytes cannot be decoded into records."""


class FieldDecodeError(ParseError):
    """Error emitted when a single scalar field cannot be parsed."""

    def __init__(self, message: str = "unknown") -> None:
        super().__init__(message)
