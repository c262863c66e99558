"""Tests for the step pipeline runner."""

from unittest.mock import MagicMock

import pytest
from github import GithubException

from reviewreq_core.errors import PolicyViolationError
from reviewreq_core.pipeline import Pipeline, RunContext, Step
from reviewreq_core.utils.command import CommandRunner


def make_ctx(reporter):
    return RunContext(config={}, reporter=reporter, runner=CommandRunner(reporter), repo_name="o/r", token="tok")


def make_pipeline(*steps):
    return Pipeline(name="setup", steps=list(steps), failure_prefix="Setup failed.", phase="Pre Request Review")


def test_runs_steps_in_order(reporter):
    calls = []
    pipeline = make_pipeline(
        Step("one", "First...", lambda ctx: calls.append("one")),
        Step("two", "Second...", lambda ctx: calls.append("two")),
    )

    result = pipeline.run(make_ctx(reporter))

    assert calls == ["one", "two"]
    assert result.ok
    assert result.failed_step is None
    assert [r.name for r in result.results] == ["one", "two"]


def test_aborts_at_first_failure(reporter):
    calls = []

    def fail(ctx):
        raise PolicyViolationError("main moved")

    pipeline = make_pipeline(
        Step("one", "First...", lambda ctx: calls.append("one")),
        Step("two", "Second...", fail),
        Step("three", "Third...", lambda ctx: calls.append("three")),
    )

    result = pipeline.run(make_ctx(reporter))

    assert calls == ["one"]
    assert not result.ok
    assert result.failed_step == "two"
    assert result.error == "main moved"
    lines = reporter.console.file.getvalue().splitlines()
    error_index = lines.index("::error::Setup failed. main moved")
    # The annotation comes after the failing step's group was closed.
    assert lines[error_index - 1] == "::endgroup::"
    assert any("Error: main moved" in line for line in lines[:error_index])


def test_github_errors_abort_the_sequence(reporter):
    def fail(ctx):
        raise GithubException(401, {"message": "Bad credentials"}, None)

    result = make_pipeline(Step("api", "Calling...", fail)).run(make_ctx(reporter))

    assert result.failed_step == "api"
    assert "Bad credentials" in result.error


def test_unexpected_errors_propagate_after_logging_status(reporter):
    def crash(ctx):
        raise ValueError("bug")

    with pytest.raises(ValueError):
        make_pipeline(Step("crash", "Crashing...", crash)).run(make_ctx(reporter))

    assert "::group::Logging setup status..." in reporter.console.file.getvalue()


def test_logs_status_and_state_at_end(reporter):
    def work(ctx):
        ctx.status["main_compile"] = 0
        ctx.state.update(project=2)

    make_pipeline(Step("work", "Working...", work)).run(make_ctx(reporter))

    text = reporter.console.file.getvalue()
    assert 'status: {"main_compile": 0}' in text
    assert 'states: {"project": "2"}' in text


def test_warning_summary_uses_phase(reporter):
    make_pipeline(Step("warn", "Warning...", lambda ctx: ctx.reporter.warning("heads up"))).run(make_ctx(reporter))
    assert 'There was 1 warning in the "Pre Request Review" phase' in reporter.console.file.getvalue()


def test_phase_heading_printed(reporter):
    make_pipeline(Step("one", "First...", lambda ctx: None, phase="Request Verify Phase")).run(make_ctx(reporter))
    assert "Request Verify Phase" in reporter.console.file.getvalue()


def test_open_repo_is_cached(mocker, reporter):
    get_repo = mocker.patch("reviewreq_core.pipeline.get_repo", return_value=MagicMock())
    ctx = make_ctx(reporter)

    assert ctx.open_repo() is ctx.open_repo()
    get_repo.assert_called_once_with("o/r", token="tok")
