"""Tests for the GitHub status check helper."""

import pytest
from github import GithubException

from reviewreq_core.errors import APIStatusError, ReviewRequestError
from reviewreq_core.gh.client import CREATED, expect_success


def test_returns_call_result(reporter):
    assert expect_success("List things", lambda: [1, 2], reporter=reporter) == [1, 2]
    assert reporter.console.file.getvalue() == ""


def test_error_response_becomes_api_status_error(reporter):
    def call():
        raise GithubException(422, {"message": "Validation Failed"}, None)

    with pytest.raises(APIStatusError) as exc_info:
        expect_success("Create milestone", call, CREATED, request={"title": "Project 1"}, reporter=reporter)

    error = exc_info.value
    assert isinstance(error, ReviewRequestError)
    assert str(error) == "Create milestone (expected status 201, got 422)."
    assert error.status == 422
    assert isinstance(error.__cause__, GithubException)

    output = reporter.console.file.getvalue()
    assert 'Request: {"title": "Project 1"}' in output
    assert 'Result: {"status": 422, "data": {"message": "Validation Failed"}}' in output


def test_missing_status_reported_as_none():
    error = APIStatusError("Get release v1.0.0", 200, None)
    assert str(error) == "Get release v1.0.0 (expected status 200, got none)."
    assert error.details() == 'Result: {"status": null, "data": null}'
