"""Request sequence: build and lint the clone, then open the review pull request."""

from __future__ import annotations

from typing import Callable

from reviewreq_core.checks import StaticCheck, default_checks
from reviewreq_core.composer import (
    build_instructions,
    build_pull_body,
    build_pull_row,
    build_review_table,
    pull_title,
)
from reviewreq_core.config import project_name
from reviewreq_core.gh.pull_request import (
    add_comment,
    create_pull,
    get_approvals,
    get_milestone,
    get_pull_requests,
    request_reviewers,
    update_pull,
)
from reviewreq_core.pipeline import Pipeline, PipelineResult, RunContext, Step
from reviewreq_core.repository import push_branch
from reviewreq_core.state import RequestState

RestoreState = Callable[[], dict[str, str]]

REQUIRED_STATE = (
    "type",
    "project",
    "version",
    "release_tag",
    "release_url",
    "release_date",
    "run_number",
    "run_id",
    "run_url",
    "issue_number",
    "issue_url",
    "branch",
)

COMPILE_ARGS = [
    "-ntp",
    "-DcompileOptionXlint=-Xlint:all",
    "-DcompileOptionXdoclint=-Xdoclint:all/private",
    "-DcompileOptionFail=true",
    "-Dmaven.compiler.failOnWarning=true",
    "-Dmaven.compiler.showWarnings=true",
    "clean",
    "compile",
]


def _restore(restore_state: RestoreState) -> Callable[[RunContext], None]:
    def run(ctx: RunContext) -> None:
        mapping = restore_state()
        if mapping:
            ctx.reporter.info(f"Loaded keys: {','.join(mapping)}")
            for key, value in mapping.items():
                ctx.reporter.info(f"Restored value {value} for state {key}.")
        else:
            ctx.reporter.info("No saved state.")

        ctx.state = RequestState.from_mapping(mapping)
        ctx.state.require(*REQUIRED_STATE)

    return run


def _environment(ctx: RunContext) -> None:
    runner = ctx.runner
    runner.check_exec(
        "java",
        ["--version"],
        title="Displaying Java runtime version",
        error="Unable to display Java runtime version",
    )
    runner.check_exec(
        "javac",
        ["--version"],
        title="Displaying Java compiler version",
        error="Unable to display Java compiler version",
    )
    runner.check_exec(
        "mvn",
        ["--version"],
        title="Displaying Maven version",
        error="Unable to display Maven version",
    )


def _compile(ctx: RunContext) -> None:
    main_dir = ctx.config["main_dir"]
    ctx.status["main_compile"] = ctx.runner.check_exec(
        "mvn",
        COMPILE_ARGS,
        title="Compiling project code",
        error="Unable to compile code without warnings. Please address all warnings before requesting code review",
        cwd=main_dir,
    )
    ctx.runner.check_exec(
        "ls",
        ["-m", f"{main_dir}/target/classes"],
        title="Listing main class files",
        error="Unable to list main class directory",
    )


def _cleanup(checks: list[StaticCheck]) -> Callable[[RunContext], None]:
    def run(ctx: RunContext) -> None:
        root = f"{ctx.config['main_dir']}/{ctx.config['source_dir']}"
        for check in checks:
            ctx.status[f"{check.name}_check"] = check.verify(ctx.runner, root)

    return run


def _push(ctx: RunContext) -> None:
    push_branch(ctx.runner, ctx.state.branch, ctx.config)


def _pull_request(ctx: RunContext) -> None:
    repo = ctx.open_repo()
    reporter = ctx.reporter
    config = ctx.config
    state = ctx.state

    milestone = get_milestone(repo, state.project, project_name(config, state.project), reporter)

    reporter.info()
    pulls = get_pull_requests(repo, state.project, reporter)
    rows = [build_pull_row(p, get_approvals(p, reporter), config["timezone"]) for p in pulls]

    reporter.info()
    reporter.info("Creating pull request...")
    body = build_pull_body(state, build_review_table(rows), config)
    pull = create_pull(repo, pull_title(state), state.branch, config["base_branch"], body, reporter)
    ctx.status["pull_number"] = pull.number
    ctx.pull_url = pull.html_url
    reporter.info(f"Pull request created at: {pull.html_url}")

    reporter.info()
    reporter.info(f"Updating pull request {pull.number}...")
    labels = [f"project{state.project}", state.type.lower(), state.release_tag]
    update_pull(pull, milestone, labels, [ctx.actor] if ctx.actor else [], reporter)
    reporter.info(f"Added labels: {', '.join(labels)}")

    reviewers = list(config["reviewers"])
    request_reviewers(pull, reviewers, reporter)
    reporter.info(f"Added reviewers: {', '.join(reviewers)}")

    add_comment(pull, build_instructions(ctx.actor or "", state), reporter)
    reporter.info(f"Added instructions for: {ctx.actor}")


def request_pipeline(restore_state: RestoreState, checks: list[StaticCheck]) -> Pipeline:
    return Pipeline(
        name="request",
        failure_prefix="Code review request failed.",
        phase="Request Review",
        steps=[
            Step("restore", "Restoring state...", _restore(restore_state), phase="Request Setup Phase"),
            Step("environment", "Displaying environment setup...", _environment),
            Step("compile", "Checking code for warnings...", _compile, phase="Request Verify Phase"),
            Step("cleanup", "Checking code for cleanup...", _cleanup(checks)),
            Step("branch", "Creating code review branch...", _push, phase="Request Approve Phase"),
            Step("pull_request", "Creating pull request...", _pull_request),
        ],
    )


def run_request(
    ctx: RunContext,
    restore_state: RestoreState,
    checks: list[StaticCheck] | None = None,
) -> PipelineResult:
    """Run the request sequence against the state saved by the setup sequence."""
    if checks is None:
        checks = default_checks(ctx.config)

    result = request_pipeline(restore_state, checks).run(ctx)

    if result.ok:
        state = ctx.state
        success = (
            f"{state.type} code review request #{ctx.status['pull_number']} for project {state.project} "
            f"release {state.release_tag} created. Visit the pull request for further instructions at: "
            f"{ctx.pull_url}"
        )
        ctx.reporter.success(success)
        ctx.reporter.notice(success)

    return result
