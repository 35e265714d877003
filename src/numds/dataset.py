"""Module implementing the Dataset abstraction and its constructors."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Generic, TypeVar

from .cache import cache_dir_or_default
from .config import DatasetsConfig
from .parsers import (
    DelimitedHeaderedParser,
    DelimitedParser,
    DocumentParser,
    Parser,
    Preprocess,
)
from .source import Source, SourceResolver

T = TypeVar("T")

log = logging.getLogger("dataset")


class Dataset(Generic[T]):
    """
    Deferred computation loading a list of records from a source.

    A dataset owns no resources: calling `load` (or the dataset itself)
    with a cache directory fetches the source (or reads it from the
    cache), and parses it into records.
    """

    def __init__(self, source: Source, parser: Parser[T]):
        self.source = source
        self.parser = parser

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(source={self.source!r}, "
            f"parser={type(self.parser).__name__}, "
            f"record_type={self.parser.record_type.__name__})"
        )

    def load(self, cache_dir: str | Path, *, resolver: SourceResolver | None = None) -> list[T]:
        """
        Load the dataset using cache_dir to cache the raw source.

        Arguments:
            cache_dir: directory where to cache downloaded sources.
            resolver: optional resolver (e.g., with a custom config).

        Raises:
            FetchError: if we cannot fetch the source.
            CacheIOError: if we cannot read or write the cache.
            ParseError: if we cannot parse the raw bytes.
        """
        resolver = resolver if resolver is not None else SourceResolver()
        data = resolver.resolve(cache_dir, self.source)
        return self.parser.parse(data)

    def __call__(self, cache_dir: str | Path, *, resolver: SourceResolver | None = None) -> list[T]:
        return self.load(cache_dir, resolver=resolver)


def from_delimited(
    record_type: type[T],
    source: Source,
    *,
    preprocess: Preprocess | None = None,
    separator: str = ",",
) -> Dataset[T]:
    """Define a dataset from a source of delimited text without a header."""
    return Dataset(source, DelimitedParser(record_type, preprocess=preprocess, separator=separator))


def from_delimited_headered(
    record_type: type[T],
    source: Source,
    *,
    separator: str = ",",
    preprocess: Preprocess | None = None,
) -> Dataset[T]:
    """Define a dataset from a source of delimited text with a header."""
    return Dataset(
        source,
        DelimitedHeaderedParser(record_type, separator=separator, preprocess=preprocess),
    )


def from_structured_document(
    record_type: type[T],
    source: Source,
    *,
    preprocess: Preprocess | None = None,
) -> Dataset[T]:
    """Define a dataset from a source containing a JSON array."""
    return Dataset(source, DocumentParser(record_type, preprocess=preprocess))


def get_dataset(
    dataset: Dataset[T],
    *,
    cache_dir: str | Path | None = None,
    config: DatasetsConfig | None = None,
) -> list[T]:
    """
    Load a dataset, caching its source in the given cache directory.

    When cache_dir is None, we use the directory named by the config
    or, if that is also missing, $TMPDIR/haskds.
    """
    config = config if config is not None else DatasetsConfig()
    resolved = cache_dir_or_default(cache_dir if cache_dir is not None else config.cache_dir)
    try:
        log.info("loading %s... start", dataset.source)
        records = dataset.load(resolved, resolver=SourceResolver(config))
        log.info("loading %s... ok (%d records)", dataset.source, len(records))
        return records
    except Exception as exc:
        log.warning("loading %s... failure: %s", dataset.source, exc)
        raise
