"""Cache dir and path commands."""

import click

from ..cache import resolve_path
from . import CliState, pass_state
from .cache import cache


@cache.command("dir")
@pass_state
def dir_cmd(state: CliState) -> None:
    """Print the cache directory."""
    click.echo(str(state.resolved_cache_dir()))


@cache.command()
@click.argument("url")
@pass_state
def path(state: CliState, url: str) -> None:
    """Print the path where URL is cached (the file may not exist)."""
    click.echo(str(resolve_path(state.resolved_cache_dir(), url)))
