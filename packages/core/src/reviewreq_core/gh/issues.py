"""Approval gatekeeping based on labelled issues and pull requests."""

from __future__ import annotations

from dataclasses import dataclass

from reviewreq_core.errors import NotFoundError, PolicyViolationError
from reviewreq_core.gh.client import expect_success
from reviewreq_core.utils.console import Reporter


@dataclass
class IssueApprovalRecord:
    number: int
    url: str


def is_approved(issue) -> bool:
    """An issue counts as approved once it is closed and locked as resolved."""
    return issue.state == "closed" and issue.locked is True and issue.active_lock_reason == "resolved"


def get_issues(repo, project: int, kind: str, reporter: Reporter) -> list:
    """List every issue (open or closed) labelled with both project<N> and ``kind``."""
    kind = kind.lower()
    reporter.info(f"Listing {kind} issues for project {project}...")
    issues = expect_success(
        f"Unable to list issues from: {repo.name}",
        lambda: list(repo.get_issues(state="all", labels=[f"project{project}", kind])),
        request={"labels": f"project{project},{kind}", "state": "all"},
        reporter=reporter,
    )
    reporter.info(f"Found Issues: {', '.join(str(i.number) for i in issues)}")
    return issues


def check_issues(repo, project: int, reporter: Reporter) -> IssueApprovalRecord:
    """Make sure the project is ready for a code review request.

    Requires an approved functionality issue, no approved design issue, and
    no open review pull request for the project.
    """
    functionality = get_issues(repo, project, "functionality", reporter)
    passed = next((i for i in functionality if is_approved(i)), None)
    if passed is None:
        raise NotFoundError(
            f"Unable to detect approved functionality issue for project {project}. "
            "You must pass functionality before requesting code review."
        )

    reporter.info(f"Passing functionality issue: {passed.html_url}")
    reporter.info()

    design = get_issues(repo, project, "design", reporter)
    design_passed = next((i for i in design if is_approved(i)), None)
    if design_passed is not None:
        reporter.info(f"Passing design issue: {design_passed.html_url}")
        raise PolicyViolationError(
            f"Detected approved design issue #{design_passed.number} for project {project}. "
            "Additional code reviews are not necessary."
        )

    reporter.info(f"No passing design issues for project {project} found.")

    pulls = get_issues(repo, project, "synchronous", reporter) + get_issues(repo, project, "asynchronous", reporter)

    # Review requests are pull requests; the issues endpoint returns both.
    open_pull = next((p for p in pulls if p.state == "open" and p.pull_request is not None), None)
    if open_pull is not None:
        reporter.info(f"Found open pull request: {open_pull.html_url}")
        raise PolicyViolationError(
            f"Detected open pull request #{open_pull.number} for project {project}. "
            "Please merge or close old pull requests before requesting code review."
        )

    return IssueApprovalRecord(number=passed.number, url=passed.html_url)
