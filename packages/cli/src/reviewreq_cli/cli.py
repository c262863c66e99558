"""CLI entry point for reviewreq.

Commands:
  setup    — verify the release and prepare the review branch
  request  — build, lint and open the code review pull request
  state    — show the state saved by setup
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from reviewreq_cli.commands.request import request_cmd
from reviewreq_cli.commands.setup import setup_cmd
from reviewreq_cli.commands.state import state_cmd

console = Console()


def _build_store(config: dict):
    """Instantiate the configured state store from .reviewreq.yml settings.

    Store selection:
      store: actions → ActionsStateStore (GITHUB_ENV / REVIEWREQ_STATE_* variables)
      (default)      → FileStateStore (store_path or .reviewreq-state.json)
    """
    store_type = config.get("store", "file")

    if store_type == "actions":
        from reviewreq_store.actions import ActionsStateStore

        return ActionsStateStore()

    if store_type != "file":
        console.print(f"[yellow]Unknown store {store_type!r}. Falling back to the file store.[/yellow]")

    from reviewreq_store.file import FileStateStore

    return FileStateStore(path=config.get("store_path", ".reviewreq-state.json"))


@click.group()
@click.version_option(
    version=importlib.metadata.version("reviewreq"),
    prog_name="reviewreq",
)
@click.option(
    "--config",
    "config_path",
    default=".reviewreq.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="REVIEWREQ_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Request a project code review on GitHub."""
    from reviewreq_core.config import load_config
    from reviewreq_cli.auth import resolve_github_token

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[RichHandler(show_path=False)])

    ctx.ensure_object(dict)

    config = load_config(config_path)

    # Resolve token early so all subcommands share the same resolution.
    token = resolve_github_token()
    if token:
        config["github_token"] = token

    store = _build_store(config)
    ctx.obj["store"] = store
    ctx.obj["config"] = config
    ctx.call_on_close(store.close)


main.add_command(setup_cmd)
main.add_command(request_cmd)
main.add_command(state_cmd)
