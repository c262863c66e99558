"""request command — build, lint and open the code review pull request."""

from __future__ import annotations

import click

from reviewreq_cli.session import build_run_context, state_restorer
from reviewreq_core.request_sequence import run_request


@click.command("request")
@click.option("--repo", envvar="GITHUB_REPOSITORY", default=None, help="GitHub repository in owner/name format.")
@click.option("--actor", envvar="GITHUB_ACTOR", default=None, help="GitHub login of the student.")
@click.pass_context
def request_cmd(ctx, repo: str | None, actor: str | None):
    """Open a draft code review pull request for the prepared release.

    Requires the state saved by `reviewreq setup`. Compiles the project with
    all warnings as errors, rejects leftover TODO comments and extra main
    methods, pushes the review branch and opens the pull request.
    """
    run_ctx = build_run_context(ctx, repo, actor)
    result = run_request(run_ctx, state_restorer(ctx.obj["store"]))
    if not result.ok:
        ctx.exit(1)
    click.echo(run_ctx.pull_url)
