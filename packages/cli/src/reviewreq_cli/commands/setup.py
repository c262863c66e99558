"""setup command — verify the release and prepare the review branch."""

from __future__ import annotations

import os

import click

from reviewreq_cli.session import build_run_context, state_saver
from reviewreq_core.setup_sequence import run_setup


@click.command("setup")
@click.option(
    "--release",
    default=None,
    envvar="INPUT_RELEASE",
    help="Release tag or ref, e.g. v1.2.0 or refs/tags/v1.2.0. Defaults to GITHUB_REF.",
)
@click.option(
    "--type",
    "type_flag",
    default=None,
    envvar="INPUT_TYPE",
    help='Review type: "s" for synchronous or "a" for pre-approved asynchronous.',
)
@click.option("--repo", envvar="GITHUB_REPOSITORY", default=None, help="GitHub repository in owner/name format.")
@click.option("--actor", envvar="GITHUB_ACTOR", default=None, help="GitHub login of the student.")
@click.pass_context
def setup_cmd(ctx, release: str | None, type_flag: str | None, repo: str | None, actor: str | None):
    """Verify a release and prepare its review branch.

    Checks that the release passed its test run, that functionality is
    approved and no review is in flight, then clones the repository and
    creates review/<release>. The collected state is saved for `request`.
    """
    release = release or os.environ.get("GITHUB_REF")
    if not release:
        raise click.UsageError("No release given. Pass --release or set INPUT_RELEASE.")

    run_ctx = build_run_context(ctx, repo, actor)
    result = run_setup(run_ctx, release, type_flag, state_saver(ctx.obj["store"]))
    if not result.ok:
        ctx.exit(1)
