"""Tests for the numds.cli.cache_usage module."""

from pathlib import Path

from click.testing import CliRunner

from numds.cache import CacheStore
from numds.cli import cli
from numds.cli.cache_usage import _format_bytes


class TestFormatBytes:
    """Tests for _format_bytes."""

    def test_zero(self):
        assert _format_bytes(0) == "0 B"

    def test_bytes(self):
        assert _format_bytes(512) == "512 B"

    def test_kilobytes(self):
        assert _format_bytes(1536) == "1.5 KB"

    def test_megabytes(self):
        assert _format_bytes(1024 * 1024) == "1 MB"


class TestCacheUsageEmpty:
    """No cache directory at all."""

    def test_no_cached_data(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["cache", "-d", str(tmp_path / "missing"), "usage"])
        assert result.exit_code == 0
        assert "No cached data found." in result.output


class TestCacheUsageEntries:
    """Cached files are listed with their size."""

    def test_lists_files(self, tmp_path: Path):
        store = CacheStore(tmp_path)
        first = store.resolve_path("https://example.com/a.csv")
        second = store.resolve_path("https://example.com/b.json")
        store.write(first, b"x" * 2048)
        store.write(second, b"[]")

        runner = CliRunner()
        result = runner.invoke(cli, ["cache", "-d", str(tmp_path), "usage"])

        assert result.exit_code == 0
        assert first.name in result.output
        assert second.name in result.output
        assert "2 KB" in result.output
        assert "2 B" in result.output
        assert "Total (2 files)" in result.output
