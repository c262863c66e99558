"""Release verification: the tag exists and its test run passed."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from itertools import islice

from reviewreq_core.errors import NotFoundError, ReviewRequestError
from reviewreq_core.gh.client import expect_success
from reviewreq_core.utils.console import Reporter

logger = logging.getLogger(__name__)


@dataclass
class ReleaseVerification:
    release_url: str
    release_tag: str
    release_created_at: str  # ISO-8601
    run_number: int
    run_id: int
    run_url: str


def _isoformat(value) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value) if value is not None else ""


def find_workflow_run(runs, tag: str, workflow_name: str, event: str, reporter: Reporter | None = None):
    """Return the run of ``workflow_name`` triggered by ``event`` on the ``tag`` branch.

    Raises ReviewRequestError if no such run exists or it did not succeed.
    """
    candidates = [r for r in runs if r.event == event and r.name == workflow_name]
    if reporter is not None:
        reporter.info(f"Found Runs: {', '.join(str(r.head_branch) for r in candidates)}")

    found = next((r for r in candidates if r.head_branch == tag), None)
    if found is None:
        raise ReviewRequestError("Workflow run not found")

    if found.status != "completed" or found.conclusion != "success":
        if reporter is not None:
            reporter.info(f"Run: status={found.status} conclusion={found.conclusion} url={found.html_url}")
        raise ReviewRequestError(f"Run #{found.run_number} id {found.id} not successful")

    return found


def verify_release(
    repo,
    tag: str,
    workflow_name: str = "Run Project Tests",
    event: str = "release",
    run_limit: int = 100,
    reporter: Reporter | None = None,
) -> ReleaseVerification:
    """Check that release ``tag`` exists and exactly its test run completed successfully."""
    report = reporter.info if reporter is not None else logger.info

    try:
        report(f"Getting release {tag} from {repo.name}...")
        release = expect_success(f"Get release {tag}", lambda: repo.get_release(tag), reporter=reporter)
        report(f"Found Release: {release.html_url}")
    except ReviewRequestError as e:
        raise NotFoundError(f"Unable to fetch release {tag} ({str(e).rstrip('.').lower()}).") from e

    report("")

    try:
        report("Listing workflow runs...")
        runs = expect_success(
            "List workflow runs",
            lambda: list(islice(repo.get_workflow_runs(), run_limit)),
            reporter=reporter,
        )
        found = find_workflow_run(runs, tag, workflow_name, event, reporter)
        report(f"Found Run: {found.html_url}")
    except ReviewRequestError as e:
        raise NotFoundError(f"Unable to verify release {tag} ({str(e).rstrip('.').lower()}).") from e

    return ReleaseVerification(
        release_url=release.html_url,
        release_tag=release.tag_name,
        release_created_at=_isoformat(release.created_at),
        run_number=found.run_number,
        run_id=found.id,
        run_url=found.html_url,
    )
