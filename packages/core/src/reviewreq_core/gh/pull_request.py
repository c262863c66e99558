from __future__ import annotations

from github import GithubException

from reviewreq_core.errors import APIStatusError
from reviewreq_core.gh.client import CREATED, OK, expect_success
from reviewreq_core.utils.console import Reporter


def get_milestone(repo, project: int, name: str, reporter: Reporter):
    """Return the "Project <N>" milestone, creating it when it does not exist yet."""
    reporter.info("Listing milestones...")
    milestones = expect_success(
        f"Unable to list milestones in: {repo.name}",
        lambda: list(repo.get_milestones(state="all")),
        reporter=reporter,
    )

    title = f"Project {project}"
    found = next((m for m in milestones if m.title == title), None)
    if found is not None:
        reporter.info(f"Found {found.title} milestone.")
        return found

    request = {"title": title, "state": "open", "description": f"Project {project} {name}"}
    created = expect_success(
        f"Unable to create {title} milestone in: {repo.name}",
        lambda: repo.create_milestone(**request),
        expected=CREATED,
        request=request,
        reporter=reporter,
    )
    reporter.info(f"Created {created.title} milestone.")
    return created


def get_pull_requests(repo, project: int, reporter: Reporter) -> list:
    """Return every pull request (any state) labelled project<N>, oldest first.

    A 404 is reported as a warning and treated as no pull requests.
    """
    reporter.info(f"Listing pull requests for project {project}...")
    request = {"state": "all", "sort": "created"}
    try:
        pulls = list(repo.get_pulls(**request))
    except GithubException as e:
        if e.status == 404:
            reporter.warning(f"Pull requests not found for: {repo.name}")
            return []
        error = APIStatusError(f"Unable to list pull requests in: {repo.name}", OK, e.status, e.data, request)
        reporter.info(error.details())
        raise error from e

    reporter.info(f"Found {len(pulls)} pull requests before filtering.")

    label = f"project{project}"
    filtered = [p for p in pulls if any(x.name == label for x in (p.labels or []))]
    numbers = ", ".join(str(p.number) for p in filtered)
    reporter.info(f"Filtered Pull Requests: {numbers} ({len(filtered)} total)")
    return filtered


def get_approvals(pull, reporter: Reporter) -> list[str]:
    """Return the logins of everyone who approved ``pull``."""
    reviews = expect_success(
        f"Unable to list reviews for pull request #{pull.number}",
        lambda: list(pull.get_reviews()),
        reporter=reporter,
    )
    return [r.user.login for r in reviews if r.state == "APPROVED"]


def create_pull(repo, title: str, head: str, base: str, body: str, reporter: Reporter):
    request = {
        "title": title,
        "head": head,
        "base": base,
        "body": body,
        "draft": True,
        "maintainer_can_modify": True,
    }
    return expect_success(
        f"Unable to create pull request for: {repo.name}",
        lambda: repo.create_pull(**request),
        expected=CREATED,
        request=request,
        reporter=reporter,
    )


def update_pull(pull, milestone, labels: list[str], assignees: list[str], reporter: Reporter) -> None:
    """Set milestone, labels and assignees through the issues API."""
    request = {
        "issue_number": pull.number,
        "milestone": milestone.number,
        "labels": labels,
        "assignees": assignees,
    }
    expect_success(
        f"Unable to update labels for pull request at: {pull.html_url}",
        lambda: pull.as_issue().edit(milestone=milestone, labels=labels, assignees=assignees),
        request=request,
        reporter=reporter,
    )


def request_reviewers(pull, reviewers: list[str], reporter: Reporter) -> None:
    expect_success(
        f"Unable to request reviewers for pull request at: {pull.html_url}",
        lambda: pull.create_review_request(reviewers=reviewers),
        expected=CREATED,
        request={"pull_number": pull.number, "reviewers": reviewers},
        reporter=reporter,
    )


def add_comment(pull, body: str, reporter: Reporter):
    return expect_success(
        f"Unable to add comment for pull request at: {pull.html_url}",
        lambda: pull.create_issue_comment(body),
        expected=CREATED,
        reporter=reporter,
    )
