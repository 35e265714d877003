"""Module to manage the on-disk download cache."""

from __future__ import annotations

import hashlib
import logging
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Final

from ..errors import CacheIOError

CACHE_DIR_NAME: Final[str] = "haskds"
CACHE_FILE_PREFIX: Final[str] = "ds"

# Number of hex digits of the SHA-256 digest we keep (64 bits)
_HASH_DIGITS: Final[int] = 16

log = logging.getLogger("cache/store")


@dataclass(frozen=True, kw_only=True)
class CacheEntryInfo:
    """
    Information about a file inside the cache directory.

    Attributes:
        path: full path of the cached file
        size: size in bytes
        mtime: last modification time (local timezone)
    """

    path: Path
    size: int
    mtime: datetime


def cache_dir_or_default(cache_dir: str | Path | None) -> Path:
    """
    Return cache_dir as a Path if not empty. Otherwise return the
    default value for the cache_dir (i.e., `$TMPDIR/haskds`).
    """
    if cache_dir is None:
        return Path(tempfile.gettempdir()) / CACHE_DIR_NAME
    return Path(cache_dir)


def resolve_path(cache_dir: str | Path, identifier: str) -> Path:
    """Return the path where the given identifier is cached inside cache_dir."""
    digest = hashlib.sha256(identifier.encode("utf-8")).hexdigest()
    return Path(cache_dir) / f"{CACHE_FILE_PREFIX}{digest[:_HASH_DIGITS]}"


class CacheStore:
    """Read and write raw cached files inside a cache directory."""

    def __init__(self, cache_dir: str | Path | None = None):
        """
        Initialize the store.

        Parameters:
            cache_dir: Path to the directory containing cached files.
                If None, defaults to $TMPDIR/haskds.
        """
        self.cache_dir = cache_dir_or_default(cache_dir)

    def resolve_path(self, identifier: str) -> Path:
        """Return the path of the cache file for the given identifier."""
        return resolve_path(self.cache_dir, identifier)

    def exists(self, path: Path) -> bool:
        """Return True if the given cache file exists, False otherwise."""
        return path.is_file()

    def read(self, path: Path) -> bytes:
        """
        Read the whole content of the given cache file.

        Raises:
            CacheIOError: if the file is missing or unreadable.
        """
        try:
            return path.read_bytes()
        except OSError as exc:
            raise CacheIOError(f"cannot read cache file {path}: {exc}") from exc

    def write(self, path: Path, data: bytes) -> None:
        """
        Atomically write data into the given cache file, creating the
        parent directory when needed.

        Raises:
            CacheIOError: if we cannot create the directory or write the file.
        """
        log.debug("writing %s... start", path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            # Write a temporary file in the destination directory so that
            # `os.replace()` is atomic and we avoid cross-filesystem moves.
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
            try:
                with os.fdopen(fd, "wb") as filep:
                    filep.write(data)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            log.debug("writing %s... failure: %s", path, exc)
            raise CacheIOError(f"cannot write cache file {path}: {exc}") from exc
        log.debug("writing %s... ok", path)

    def entries(self) -> list[CacheEntryInfo]:
        """Return information about all the files in the cache directory."""
        if not self.cache_dir.is_dir():
            return []
        result: list[CacheEntryInfo] = []
        for path in sorted(self.cache_dir.glob(f"{CACHE_FILE_PREFIX}*")):
            if not path.is_file():
                continue
            stat = path.stat()
            result.append(
                CacheEntryInfo(
                    path=path,
                    size=stat.st_size,
                    mtime=datetime.fromtimestamp(stat.st_mtime).astimezone(),
                )
            )
        return result
