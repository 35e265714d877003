"""Shared pytest fixtures for numds tests."""

from unittest.mock import MagicMock

import pytest


def _fake_response(content: bytes) -> MagicMock:
    """Create a mock requests response that yields content in chunks."""
    resp = MagicMock()
    resp.raise_for_status = MagicMock()
    resp.headers = {"Content-Length": str(len(content))}
    resp.iter_content = MagicMock(return_value=iter([content[:3], content[3:]]))
    return resp


@pytest.fixture
def fake_session():
    """Return a factory creating a mock requests session serving the given bodies."""

    def _make(bodies: dict[str, bytes]) -> MagicMock:
        session = MagicMock()
        session.get.side_effect = lambda url, **kwargs: _fake_response(bodies[url])
        return session

    return _make


@pytest.fixture
def cache_dir(tmp_path):
    """Return a not-yet-existing cache directory below tmp_path."""
    return tmp_path / "haskds"
