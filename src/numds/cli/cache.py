"""Cache command group.

Every `numds cache` subcommand operates on the same directory, chosen
with `-d/--dir` before the subcommand name.
"""

from __future__ import annotations

import click

from . import CliState, cli, pass_state


@cli.group()
@click.option(
    "-d",
    "--dir",
    "cache_dir",
    default=None,
    metavar="DIR",
    help="Cache directory (default: cache_dir from the config, then $TMPDIR/haskds)",
)
@pass_state
def cache(state: CliState, cache_dir: str | None) -> None:
    """Inspect and populate the local download cache."""
    state.cache_dir = cache_dir
