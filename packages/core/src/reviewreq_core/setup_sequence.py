"""Setup sequence: validate the release and prepare the review branch.

Runs before the request sequence and hands over everything it learned through
the saved state.
"""

from __future__ import annotations

from typing import Callable

from reviewreq_core.gh.issues import check_issues
from reviewreq_core.gh.release import verify_release
from reviewreq_core.pipeline import Pipeline, PipelineResult, RunContext, Step
from reviewreq_core.reference import parse_reference
from reviewreq_core.repository import clone_project, inspect_maven_cache, prepare_branch

SaveState = Callable[[dict[str, str]], None]


def _parse(release: str, type_flag: str | None) -> Callable[[RunContext], None]:
    def run(ctx: RunContext) -> None:
        parsed = parse_reference(release, ctx.repo_name, type_flag, ctx.config["test_dir"], ctx.reporter)
        ctx.state.update(
            type=parsed.request_type.value,
            owner=parsed.owner,
            main_repo=parsed.main_repo,
            test_repo=parsed.test_repo,
            project=parsed.project,
            reviews=parsed.reviews,
            patches=parsed.patches,
            version=parsed.version,
        )

    return run


def _verify_release(ctx: RunContext) -> None:
    config = ctx.config
    verified = verify_release(
        ctx.open_repo(),
        ctx.state.version,
        workflow_name=config["workflow_name"],
        event=config["workflow_event"],
        run_limit=config["workflow_run_limit"],
        reporter=ctx.reporter,
    )
    ctx.state.update(
        release_url=verified.release_url,
        release_tag=verified.release_tag,
        release_date=verified.release_created_at,
        run_number=verified.run_number,
        run_id=verified.run_id,
        run_url=verified.run_url,
    )


def _check_issues(ctx: RunContext) -> None:
    approval = check_issues(ctx.open_repo(), ctx.state.project, ctx.reporter)
    ctx.state.update(issue_number=approval.number, issue_url=approval.url)


def _clone(ctx: RunContext) -> None:
    owner, _, name = ctx.repo_name.partition("/")
    clone_project(ctx.runner, owner, name, ctx.token or "", ctx.config)


def _prepare_branch(ctx: RunContext) -> None:
    ctx.state.branch = prepare_branch(ctx.runner, ctx.state.version, ctx.config)


def _cache(ctx: RunContext) -> None:
    cache = inspect_maven_cache(ctx.config)
    ctx.reporter.info(f"Cache key: {cache['cache_key']} (hit: {str(cache['cache_hit']).lower()})")
    ctx.state.update(**cache)


def _save(save_state: SaveState) -> Callable[[RunContext], None]:
    def run(ctx: RunContext) -> None:
        mapping = ctx.state.to_mapping()
        save_state(mapping)
        for key, value in mapping.items():
            ctx.reporter.info(f"Saved value {value} for state {key}.")

    return run


def setup_pipeline(release: str, type_flag: str | None, save_state: SaveState) -> Pipeline:
    return Pipeline(
        name="setup",
        failure_prefix="Setup failed.",
        phase="Pre Request Review",
        steps=[
            Step("parse", "Parsing project details...", _parse(release, type_flag)),
            Step("release", "Checking release details...", _verify_release),
            Step("issues", "Checking issues...", _check_issues),
            Step("clone", "Cloning project repository...", _clone),
            Step("branch", "Preparing review branch...", _prepare_branch),
            Step("cache", "Checking Maven cache...", _cache),
            Step("save", "Saving state...", _save(save_state)),
        ],
    )


def run_setup(ctx: RunContext, release: str, type_flag: str | None, save_state: SaveState) -> PipelineResult:
    """Run the setup sequence; ``save_state`` persists the final state mapping."""
    return setup_pipeline(release, type_flag, save_state).run(ctx)
