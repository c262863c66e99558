"""Tests for pull request description composition."""

import types
from datetime import datetime

from reviewreq_core.composer import (
    PullRequestRow,
    build_instructions,
    build_pull_body,
    build_pull_row,
    build_review_table,
    format_timestamp,
    pull_title,
    sort_labels,
)
from reviewreq_core.config import DEFAULT_CONFIG
from reviewreq_core.state import RequestState

ZONE = "America/Los_Angeles"


def make_state(**overrides):
    values = dict(
        type="Synchronous",
        project=2,
        version="v2.3.1",
        release_tag="v2.3.1",
        release_url="https://github.com/o/r/releases/tag/v2.3.1",
        release_date="2021-10-14T20:30:00+00:00",
        run_number=17,
        run_id=99887,
        run_url="https://github.com/o/r/actions/runs/99887",
        issue_number=5,
        issue_url="https://github.com/o/r/issues/5",
        branch="review/v2.3.1",
    )
    values.update(overrides)
    return RequestState(**values)


class TestSortLabels:
    def test_project_then_version_then_rest(self):
        assert sort_labels(["v1.2.0", "project3", "zzz"]) == ["project3", "v1.2.0", "zzz"]

    def test_type_label_after_version(self):
        assert sort_labels(["synchronous", "v1.0.0", "project1"]) == ["project1", "v1.0.0", "synchronous"]

    def test_already_ordered(self):
        assert sort_labels(["project1", "v1.0.0", "asynchronous"]) == ["project1", "v1.0.0", "asynchronous"]

    def test_empty(self):
        assert sort_labels([]) == []


class TestFormatTimestamp:
    def test_daylight_time(self):
        assert format_timestamp("2021-10-14T20:30:00Z", ZONE) == "October 14, 2021 at 1:30 PM PDT"

    def test_standard_time_midnight(self):
        assert format_timestamp("2021-01-05T08:05:00+00:00", ZONE) == "January 5, 2021 at 12:05 AM PST"

    def test_naive_datetime_is_utc(self):
        assert format_timestamp(datetime(2021, 10, 14, 20, 30), ZONE) == "October 14, 2021 at 1:30 PM PDT"

    def test_missing(self):
        assert format_timestamp(None, ZONE) == "N/A"
        assert format_timestamp("", ZONE) == "N/A"


class TestReviewTable:
    def test_build_pull_row(self):
        pull = types.SimpleNamespace(
            number=3,
            html_url="https://github.com/o/r/pull/3",
            draft=False,
            state="closed",
            labels=[types.SimpleNamespace(name=n) for n in ["synchronous", "v2.1.0", "project2"]],
            created_at="2021-10-14T20:30:00Z",
            closed_at=None,
        )

        row = build_pull_row(pull, ["ta1", "prof"], ZONE)

        assert row.status == "closed"
        assert row.labels == ["project2", "v2.1.0", "synchronous"]
        assert row.created == "October 14, 2021 at 1:30 PM PDT"
        assert row.closed == "N/A"
        assert row.render() == (
            "| [#3](https://github.com/o/r/pull/3) | closed | project2, v2.1.0, synchronous | ta1, prof "
            "| October 14, 2021 at 1:30 PM PDT | N/A |"
        )

    def test_draft_status(self):
        pull = types.SimpleNamespace(
            number=4, html_url="u", draft=True, state="open", labels=[], created_at=None, closed_at=None
        )
        row = build_pull_row(pull, [], ZONE)
        assert row.status == "draft"
        assert "| N/A |  |" in row.render()

    def test_empty_table(self):
        assert build_review_table([]) == "N/A"

    def test_table_with_rows(self):
        row = PullRequestRow(1, "u", "open", ["project1"], [], "N/A", "N/A")
        table = build_review_table([row]).splitlines()
        assert table[0] == "| Pull | Status | Labels | Approvals | Created | Closed |"
        assert table[2] == "| [#1](u) | open | project1 |  | N/A | N/A |"


class TestPullBody:
    def test_contains_metadata(self):
        body = build_pull_body(make_state(), "N/A", dict(DEFAULT_CONFIG))

        assert "- **Full Name:** [FULL_NAME]" in body
        assert "[USF_EMAIL]" in body
        assert "[Project 2 Partial Search](https://usf-cs272-fall2021.github.io/guides/projects/project-2.html)" in body
        assert "[Issue #5](https://github.com/o/r/issues/5)" in body
        assert "[v2.3.1](https://github.com/o/r/releases/tag/v2.3.1)" in body
        assert "[Run 17 (99887)](https://github.com/o/r/actions/runs/99887)" in body
        assert "**Release Created:** October 14, 2021 at 1:30 PM PDT" in body
        assert "**Review Type:** Synchronous" in body
        assert body.rstrip().endswith("N/A")

    def test_includes_review_list(self):
        body = build_pull_body(make_state(), "| table |", dict(DEFAULT_CONFIG))
        assert "#### Previous Pull Requests\n\n| table |" in body


def test_pull_title():
    assert pull_title(make_state(type="Asynchronous")) == "Project v2.3.1 Asynchronous Code Review"


def test_instructions_mention_actor_and_request():
    text = build_instructions("student", make_state())
    assert "Hello @student!" in text
    assert "project v2.3.1 synchronous code review" in text
    assert "- [ ] **Mark this request as \"Ready to Review\"" in text
