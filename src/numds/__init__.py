"""Numeric datasets (numds) library.

This library allows to declare datasets that are fetched lazily from a
remote source, cached in a local directory, and parsed into lists of
typed records. For example:

    from dataclasses import dataclass

    from numds import URL, from_delimited_headered, get_dataset

    @dataclass
    class Row:
        a: int
        b: float

    rows = get_dataset(
        from_delimited_headered(Row, URL("https://example.com/data.csv"))
    )

See the `preprocess` module for helpers to clean the raw bytes before
parsing them (e.g., dropping leading lines, fixing decimals).
"""

from .analysis import year_to_datetime
from .cache import CacheStore, cache_dir_or_default, resolve_path
from .config import DatasetsConfig, load_config
from .dataset import (
    Dataset,
    from_delimited,
    from_delimited_headered,
    from_structured_document,
    get_dataset,
)
from .errors import (
    CacheIOError,
    DatasetError,
    FetchError,
    FieldDecodeError,
    ParseError,
)
from .preprocess import (
    dashes_to_camel_case,
    drop_lines,
    fix_american_decimals,
    fixed_width_to_csv,
    read_field,
    read_field_after_dash_to_camel,
)
from .source import URL, Source, SourceResolver

__version__ = "0.1.0"

__all__ = [
    "CacheIOError",
    "CacheStore",
    "Dataset",
    "DatasetError",
    "DatasetsConfig",
    "FetchError",
    "FieldDecodeError",
    "ParseError",
    "Source",
    "SourceResolver",
    "URL",
    "cache_dir_or_default",
    "dashes_to_camel_case",
    "drop_lines",
    "fix_american_decimals",
    "fixed_width_to_csv",
    "from_delimited",
    "from_delimited_headered",
    "from_structured_document",
    "get_dataset",
    "load_config",
    "read_field",
    "read_field_after_dash_to_camel",
    "resolve_path",
    "year_to_datetime",
    "__version__",
]
