"""Tests for the numds.source module."""

import logging
from unittest.mock import MagicMock, patch

import pytest
import requests

from numds.cache import resolve_path
from numds.config import DatasetsConfig
from numds.errors import CacheIOError, FetchError
from numds.source import URL, Source, SourceResolver

_URL = "https://example.com/data.csv"
_CONTENT = b"a,b\n1,2\n"


class _LocalFile(Source):
    @property
    def identifier(self) -> str:
        return "/tmp/file"


class TestURL:
    """Tests for the URL source."""

    def test_identifier(self):
        assert URL(_URL).identifier == _URL

    def test_str(self):
        assert str(URL(_URL)) == _URL

    def test_immutable_and_hashable(self):
        source = URL(_URL)
        with pytest.raises(AttributeError):
            source.url = "other"  # type: ignore[misc]
        assert {source, URL(_URL)} == {source}


class TestSourceResolver:
    """Tests for SourceResolver.resolve."""

    def test_default_config(self):
        resolver = SourceResolver()
        assert resolver.config.timeout == 30.0
        assert isinstance(resolver.session, requests.Session)

    def test_cache_miss_fetches_and_writes(self, cache_dir, fake_session):
        session = fake_session({_URL: _CONTENT})
        resolver = SourceResolver(session=session)

        data = resolver.resolve(cache_dir, URL(_URL))

        assert data == _CONTENT
        assert resolve_path(cache_dir, _URL).read_bytes() == _CONTENT
        session.get.assert_called_once_with(_URL, stream=True, timeout=30.0)

    def test_cache_hit_does_not_fetch(self, cache_dir, fake_session, caplog):
        path = resolve_path(cache_dir, _URL)
        path.parent.mkdir(parents=True)
        path.write_bytes(b"cached")
        session = fake_session({})

        with caplog.at_level(logging.INFO):
            data = SourceResolver(session=session).resolve(cache_dir, URL(_URL))

        assert data == b"cached"
        session.get.assert_not_called()
        assert "skipped (cached" in caplog.text

    def test_second_resolve_is_cache_hit(self, cache_dir, fake_session):
        session = fake_session({_URL: _CONTENT})
        resolver = SourceResolver(session=session)

        first = resolver.resolve(cache_dir, URL(_URL))
        second = resolver.resolve(cache_dir, URL(_URL))

        assert first == second == _CONTENT
        assert session.get.call_count == 1

    def test_configured_timeout(self, cache_dir, fake_session):
        session = fake_session({_URL: _CONTENT})
        resolver = SourceResolver(DatasetsConfig(timeout=5), session=session)
        resolver.resolve(cache_dir, URL(_URL))
        session.get.assert_called_once_with(_URL, stream=True, timeout=5)

    def test_https_json_source(self, cache_dir, fake_session):
        """JSON documents are fetched over secure transport too."""
        url = "https://example.com/data.json"
        session = fake_session({url: b"[1, 2]"})
        assert SourceResolver(session=session).resolve(cache_dir, URL(url)) == b"[1, 2]"

    def test_transport_error(self, cache_dir, caplog):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("connection refused")

        with caplog.at_level(logging.WARNING):
            with pytest.raises(FetchError, match=f"cannot fetch {_URL}") as excinfo:
                SourceResolver(session=session).resolve(cache_dir, URL(_URL))

        assert excinfo.value.url == _URL
        assert isinstance(excinfo.value.__cause__, requests.ConnectionError)
        assert "failure" in caplog.text
        assert not resolve_path(cache_dir, _URL).exists()

    def test_http_error_status(self, cache_dir):
        resp = MagicMock()
        resp.raise_for_status.side_effect = requests.HTTPError("404 Client Error")
        session = MagicMock()
        session.get.return_value = resp

        with pytest.raises(FetchError, match="404"):
            SourceResolver(session=session).resolve(cache_dir, URL(_URL))

        assert session.get.call_count == 1
        assert not resolve_path(cache_dir, _URL).exists()

    def test_unsupported_source(self, cache_dir):
        with pytest.raises(TypeError, match="unsupported source"):
            SourceResolver(session=MagicMock()).resolve(cache_dir, _LocalFile())

    def test_cache_write_failure(self, tmp_path, fake_session):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        session = fake_session({_URL: _CONTENT})

        with pytest.raises(CacheIOError):
            SourceResolver(session=session).resolve(blocker, URL(_URL))

    def test_progress_bar(self, cache_dir, fake_session):
        session = fake_session({_URL: _CONTENT})
        config = DatasetsConfig(progress=True)

        with patch("numds.source.tqdm") as mock_tqdm:
            pbar = mock_tqdm.return_value.__enter__.return_value
            SourceResolver(config, session=session).resolve(cache_dir, URL(_URL))

        assert mock_tqdm.call_args.kwargs["disable"] is False
        assert mock_tqdm.call_args.kwargs["total"] == len(_CONTENT)
        assert sum(call.args[0] for call in pbar.update.call_args_list) == len(_CONTENT)
