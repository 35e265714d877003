"""Module describing data sources and resolving them into raw bytes."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

import requests
from tqdm import tqdm

from .cache import CacheStore
from .config import DatasetsConfig
from .errors import FetchError

log = logging.getLogger("source")


class Source(ABC):
    """Describe where the raw bytes of a dataset originate."""

    @property
    @abstractmethod
    def identifier(self) -> str:
        """Return the string we use as the cache key."""


@dataclass(frozen=True)
class URL(Source):
    """Source fetched over HTTP or HTTPS with a plain GET."""

    url: str

    @property
    def identifier(self) -> str:
        return self.url

    def __str__(self) -> str:
        return self.url


class SourceResolver:
    """
    Resolve a Source into raw bytes, consulting the cache first.

    Cache lookup order:
    1. Local cache file (fast, free)
    2. Remote GET (slow), whose body is then written to the cache

    Network failures are not retried and raise FetchError.
    """

    def __init__(
        self,
        config: DatasetsConfig | None = None,
        *,
        session: requests.Session | None = None,
    ) -> None:
        """
        Initialize the resolver.

        Parameters:
            config: Optional configuration (timeout, progress bar).
            session: Optional requests session to use for fetching.
        """
        self.config = config if config is not None else DatasetsConfig()
        self.session = session if session is not None else requests.Session()

    def resolve(self, cache_dir: str | Path, source: Source) -> bytes:
        """
        Return the raw bytes of the given source.

        Raises:
            TypeError: if the source kind is not supported.
            FetchError: if we cannot fetch the source.
            CacheIOError: if we cannot read or write the cache file.
        """
        if not isinstance(source, URL):
            raise TypeError(f"unsupported source: {source!r}")

        store = CacheStore(cache_dir)
        path = store.resolve_path(source.identifier)
        if store.exists(path):
            log.info("fetching %s... skipped (cached at %s)", source, path)
            return store.read(path)

        body = self._fetch(source.url)
        store.write(path, body)
        return body

    def _fetch(self, url: str) -> bytes:
        log.info("fetching %s... start", url)
        try:
            body = self._download(url)
        except requests.RequestException as exc:
            log.warning("fetching %s... failure: %s", url, exc)
            raise FetchError(url, exc) from exc
        log.info("fetching %s... ok (%d bytes)", url, len(body))
        return body

    def _download(self, url: str) -> bytes:
        resp = self.session.get(url, stream=True, timeout=self.config.timeout)
        resp.raise_for_status()

        total = resp.headers.get("Content-Length")
        total = int(total) if total is not None and total.isdigit() else None

        chunks: list[bytes] = []
        with tqdm(
            total=total,
            unit="B",
            unit_scale=True,
            unit_divisor=1024,
            desc=url.rsplit("/", 1)[-1] or url,
            leave=True,
            disable=not self.config.progress,
        ) as pbar:
            for chunk in resp.iter_content(chunk_size=8192):
                chunks.append(chunk)
                pbar.update(len(chunk))

        return b"".join(chunks)
