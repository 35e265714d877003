"""Cache fetch command."""

import click

from ..cache import resolve_path
from ..errors import DatasetError
from ..source import URL, SourceResolver
from . import CliState, pass_state
from .cache import cache


@cache.command()
@click.argument("url")
@pass_state
def fetch(state: CliState, url: str) -> None:
    """Download URL into the cache unless it is already cached."""
    config = state.config()
    cache_dir = state.resolved_cache_dir()
    resolver = SourceResolver(config)
    try:
        data = resolver.resolve(cache_dir, URL(url))
    except DatasetError as exc:
        click.echo(f"error: {exc}", err=True)
        raise SystemExit(1) from exc

    click.echo(f"{resolve_path(cache_dir, url)} ({len(data)} bytes)")
