"""Package implementing the local, content-addressed download cache.

The `CacheStore` class maps a source identifier (e.g., a URL) to a file
inside the cache directory and reads/writes its raw bytes.

Cache Directory Convention
--------------------------

If a cache directory is specified, we use it. Otherwise, we use the
`haskds` subdirectory of the system temporary directory (as returned
by `tempfile.gettempdir()`). The directory is created on the first write.

On-Disk Format
--------------

We store one flat file per cached source:

    $cachedir/ds{hash}

where `{hash}` is the first 16 hexadecimal digits (i.e., 64 bits) of the
SHA-256 digest of the UTF-8 encoded identifier. For example, a URL is
stored in a file named `ds` followed by 16 lowercase hex digits. We do
not store any metadata (fetch time, size, or origin) alongside the file,
and there are no subdirectories.

The hash function is part of the cache format: changing it would silently
orphan every file previously cached.

Cached files are never updated or deleted by this library. An entry is
considered valid as long as the file exists. There is no locking: two
concurrent loads of the same source may both download it and both write
the file. Writes are atomic (we write into a temporary file inside the
cache directory and `os.replace()` it into place), so the last writer
wins and readers never see a partially written file.
"""

from .store import (
    CACHE_DIR_NAME,
    CACHE_FILE_PREFIX,
    CacheEntryInfo,
    CacheStore,
    cache_dir_or_default,
    resolve_path,
)

__all__ = [
    "CACHE_DIR_NAME",
    "CACHE_FILE_PREFIX",
    "CacheEntryInfo",
    "CacheStore",
    "cache_dir_or_default",
    "resolve_path",
]
