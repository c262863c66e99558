"""state command — show the state saved by the setup command."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

console = Console()


@click.command("state")
@click.pass_context
def state_cmd(ctx):
    """Show the state saved by `reviewreq setup`.

    Useful for diagnosing a failed `request` run. Reads from the configured
    store (the local state file by default).
    """
    store = ctx.obj.get("store") if ctx.obj else None
    if store is None:
        raise click.UsageError("No state store configured.")

    snapshot = store.load()
    if snapshot.empty:
        console.print("[yellow]No saved state.[/yellow]")
        return

    title = "Saved State" + (f" — {snapshot.saved_at[:19].replace('T', ' ')}" if snapshot.saved_at else "")
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Key", style="bold")
    table.add_column("Value")

    for key in snapshot.keys:
        table.add_row(key, snapshot.values[key])

    console.print(table)
