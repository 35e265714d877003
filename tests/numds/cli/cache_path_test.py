"""Tests for the numds.cli.cache_path module."""

import tempfile
from pathlib import Path

from click.testing import CliRunner

from numds.cache import resolve_path
from numds.cli import cli

_URL = "https://example.com/data.csv"


class TestCacheDir:
    """numds cache dir prints the resolved cache directory."""

    def test_default(self, monkeypatch):
        monkeypatch.delenv("NUMDS_CONFIG", raising=False)
        runner = CliRunner()
        result = runner.invoke(cli, ["cache", "dir"])
        assert result.exit_code == 0
        assert result.output.strip() == str(Path(tempfile.gettempdir()) / "haskds")

    def test_explicit(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["cache", "-d", str(tmp_path), "dir"])
        assert result.exit_code == 0
        assert result.output.strip() == str(tmp_path)

    def test_from_config(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(f"cache_dir: {tmp_path / 'configured'}\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["-c", str(config_file), "cache", "dir"])

        assert result.exit_code == 0
        assert result.output.strip() == str(tmp_path / "configured")

    def test_explicit_wins_over_config(self, tmp_path: Path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(f"cache_dir: {tmp_path / 'configured'}\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["-c", str(config_file), "cache", "-d", str(tmp_path), "dir"])

        assert result.exit_code == 0
        assert result.output.strip() == str(tmp_path)


class TestCachePath:
    """numds cache path prints where a URL is cached."""

    def test_path(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["cache", "-d", str(tmp_path), "path", _URL])
        assert result.exit_code == 0
        assert result.output.strip() == str(resolve_path(tmp_path, _URL))
        assert not resolve_path(tmp_path, _URL).exists()

    def test_missing_url(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["cache", "path"])
        assert result.exit_code == 2
