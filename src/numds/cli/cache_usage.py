"""Cache usage command."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from ..cache import CacheEntryInfo, CacheStore
from . import CliState, pass_state
from .cache import cache


def _format_bytes(n: float) -> str:
    """Format a byte count using SI-like suffixes."""
    if n == 0:
        return "0 B"
    for unit in ("B", "KB", "MB", "GB", "TB"):
        if abs(n) < 1024:
            if n == int(n):
                return f"{int(n)} {unit}"
            return f"{n:.1f} {unit}"
        n = n / 1024
    return f"{n:.1f} PB"


def _build_table(entries: list[CacheEntryInfo]) -> Table:
    """Construct a Rich Table from the cache entries."""
    table = Table()
    table.add_column("File", style="cyan")
    table.add_column("Size", justify="right")
    table.add_column("Modified", justify="right")

    for entry in entries:
        table.add_row(
            entry.path.name,
            _format_bytes(entry.size),
            entry.mtime.strftime("%Y-%m-%d %H:%M:%S"),
        )

    table.add_section()
    table.add_row(
        f"[bold]Total ({len(entries)} files)[/bold]",
        f"[bold]{_format_bytes(sum(e.size for e in entries))}[/bold]",
        "",
    )

    return table


@cache.command()
@pass_state
def usage(state: CliState) -> None:
    """Show the cached files and their disk usage."""
    entries = CacheStore(state.resolved_cache_dir()).entries()
    if not entries:
        click.echo("No cached data found.")
        return
    console = Console()
    console.print(_build_table(entries))
