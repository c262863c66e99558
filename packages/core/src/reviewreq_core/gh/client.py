from __future__ import annotations

import logging
from typing import Callable, TypeVar

from github import Github, GithubException

from reviewreq_core.errors import APIStatusError
from reviewreq_core.utils.console import Reporter

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Success codes documented for each endpoint; PyGithub raises for anything
# outside 2xx, so these only label the failure.
OK = 200
CREATED = 201


def get_repo(repo_name: str, token: str):
    return Github(token).get_repo(repo_name)


def expect_success(
    action: str,
    call: Callable[[], T],
    expected: int = OK,
    request: dict | None = None,
    reporter: Reporter | None = None,
) -> T:
    """Run a GitHub API call, turning any error response into APIStatusError.

    ``call`` must fully evaluate its result (wrap paginated lists in list()),
    otherwise the request happens outside this check.
    """
    try:
        return call()
    except GithubException as e:
        error = APIStatusError(action, expected, e.status, e.data, request)
        logger.debug("GitHub call failed: %s", action, exc_info=True)
        if reporter is not None:
            reporter.info(error.details())
        raise error from e
