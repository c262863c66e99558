"""Shared wiring for the setup and request commands.

The CLI owns the bridge between reviewreq_core and reviewreq_store: core
sequences only see plain callables that save or return a string mapping.
"""

from __future__ import annotations

import click

from reviewreq_core.errors import StateError
from reviewreq_core.pipeline import RunContext
from reviewreq_core.utils.command import CommandRunner
from reviewreq_core.utils.console import Reporter
from reviewreq_store.base import StoreError
from reviewreq_store.models import StateSnapshot


def build_run_context(ctx: click.Context, repo: str | None, actor: str | None) -> RunContext:
    config = ctx.obj["config"]

    if not repo or "/" not in repo:
        raise click.UsageError("Repository must be given as owner/name (--repo or GITHUB_REPOSITORY).")

    token = config.get("github_token")
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set INPUT_TOKEN or GITHUB_TOKEN, or run `gh auth login` first."
        )

    reporter = Reporter()
    runner = CommandRunner(reporter)
    runner.add_secret(token)

    return RunContext(config=config, reporter=reporter, runner=runner, repo_name=repo, token=token, actor=actor)


def state_saver(store):
    def save(values: dict[str, str]) -> None:
        try:
            store.save(StateSnapshot(values=dict(values)))
        except StoreError as e:
            raise StateError(str(e)) from e

    return save


def state_restorer(store):
    def restore() -> dict[str, str]:
        return store.load().values

    return restore
