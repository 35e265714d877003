"""numds command-line interface.

The options of the `numds` and `numds cache` groups are collected in a
`CliState` object stored in the click context, which the subcommands
receive using `pass_state`:

    numds [-c CONFIG] [-v] cache [-d DIR] fetch URL
"""

from __future__ import annotations

from dataclasses import dataclass
from importlib.metadata import version
from pathlib import Path

import click

from ..cache import cache_dir_or_default
from ..config import DatasetsConfig, load_config
from .logger import configure_logging

_PACKAGE_NAME = "numds"


@dataclass
class CliState:
    """Options shared by every numds subcommand."""

    config_file: str | None = None
    cache_dir: str | None = None
    _config: DatasetsConfig | None = None

    def config(self) -> DatasetsConfig:
        """Load the config file on first use (see `load_config`)."""
        if self._config is None:
            try:
                self._config = load_config(self.config_file)
            except ValueError as exc:
                raise click.ClickException(str(exc)) from exc
        return self._config

    def resolved_cache_dir(self) -> Path:
        """Return -d/--dir, otherwise the configured cache_dir, otherwise the default."""
        if self.cache_dir is not None:
            return cache_dir_or_default(self.cache_dir)
        return cache_dir_or_default(self.config().cache_dir)


pass_state = click.make_pass_decorator(CliState, ensure=True)


def _get_version() -> str:
    """Return the installed package version string."""
    return version(_PACKAGE_NAME)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(message="%(version)s", package_name=_PACKAGE_NAME)
@click.option(
    "-c",
    "--config",
    "config_file",
    default=None,
    metavar="CONFIG",
    help="Path to YAML config file (default: $NUMDS_CONFIG)",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose mode.")
@pass_state
def cli(state: CliState, config_file: str | None, verbose: bool) -> None:
    """Fetch remote datasets into the local cache and inspect it."""
    configure_logging(verbose)
    state.config_file = config_file


@cli.command(hidden=True)
def help() -> None:
    """Show usage information."""
    click.echo('Use "numds --help" for usage information.')
    click.echo('Use "numds <command> --help" for help on a specific command.')


@cli.command("version")
def version_cmd() -> None:
    """Print the version number."""
    click.echo(_get_version())


# Register subcommands (must be after cli is defined)
from . import cache as _cache  # noqa: E402, F401
from . import cache_fetch as _cache_fetch  # noqa: E402, F401
from . import cache_path as _cache_path  # noqa: E402, F401
from . import cache_usage as _cache_usage  # noqa: E402, F401
