"""Ordered execution of named steps with abort on the first failure."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from github import GithubException

from reviewreq_core.errors import ReviewRequestError
from reviewreq_core.gh.client import get_repo
from reviewreq_core.state import RequestState
from reviewreq_core.utils.command import CommandRunner
from reviewreq_core.utils.console import Reporter

logger = logging.getLogger(__name__)


@dataclass
class RunContext:
    """Everything a step can read or update while a sequence runs."""

    config: dict
    reporter: Reporter
    runner: CommandRunner
    repo_name: str
    token: Optional[str] = None
    actor: Optional[str] = None
    repo: Any = None  # PyGithub Repository, opened by the first step that needs it
    state: RequestState = field(default_factory=RequestState)
    status: dict = field(default_factory=dict)  # intermediate results, logged at the end
    pull_url: Optional[str] = None

    def open_repo(self):
        if self.repo is None:
            self.repo = get_repo(self.repo_name, token=self.token)
        return self.repo


@dataclass
class Step:
    name: str
    title: str  # log group title
    run: Callable[[RunContext], None]
    phase: Optional[str] = None  # printed as a heading before the step when set


@dataclass
class StepResult:
    name: str
    ok: bool
    error: Optional[str] = None


@dataclass
class PipelineResult:
    sequence: str
    results: list[StepResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(r.ok for r in self.results)

    @property
    def failed_step(self) -> Optional[str]:
        return next((r.name for r in self.results if not r.ok), None)

    @property
    def error(self) -> Optional[str]:
        return next((r.error for r in self.results if not r.ok), None)


@dataclass
class Pipeline:
    """A named sequence of steps.

    ``failure_prefix`` starts the error annotation emitted when a step fails
    (e.g. "Setup failed."); ``phase`` names the sequence in the warning summary.
    """

    name: str
    steps: list[Step]
    failure_prefix: str
    phase: str

    def run(self, ctx: RunContext) -> PipelineResult:
        reporter = ctx.reporter
        result = PipelineResult(sequence=self.name)

        try:
            for step in self.steps:
                if step.phase:
                    reporter.title(step.phase)
                logger.debug("Running step %s", step.name)
                try:
                    with reporter.group(step.title):
                        step.run(ctx)
                except (ReviewRequestError, GithubException) as e:
                    reporter.error(f"{e}\n")  # inside the group
                    reporter.end_group()
                    # outside of any group so it is always visible
                    reporter.fail(f"{self.failure_prefix} {e}")
                    result.results.append(StepResult(step.name, False, str(e)))
                    break
                result.results.append(StepResult(step.name, True))
        finally:
            with reporter.group(f"Logging {self.name} status..."):
                reporter.info(f"status: {json.dumps(ctx.status, default=str)}")
                reporter.info(f"states: {json.dumps(ctx.state.to_mapping())}")
            reporter.check_warnings(f'"{self.phase}"')

        return result
