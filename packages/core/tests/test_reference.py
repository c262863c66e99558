"""Tests for release reference and review type parsing."""

import pytest

from reviewreq_core.errors import ParseError, ValidationError
from reviewreq_core.reference import (
    RequestType,
    parse_reference,
    parse_request_type,
    parse_version,
    review_branch,
)


class TestParseReference:
    def test_end_to_end_synchronous(self):
        parsed = parse_reference("v2.3.1", "student/project-student", "s")
        assert parsed.project == 2
        assert parsed.reviews == 3
        assert parsed.patches == 1
        assert parsed.version == "v2.3.1"
        assert parsed.request_type is RequestType.SYNCHRONOUS
        assert parsed.branch == "review/v2.3.1"

    def test_repository_names(self):
        parsed = parse_reference("v1.0.0", "student/project-student", "a")
        assert parsed.owner == "student"
        assert parsed.main_repo == "student/project-student"
        assert parsed.test_repo == "student/project-tests"

    def test_custom_test_dir(self):
        parsed = parse_reference("v1.0.0", "student/project-student", "a", test_dir="tests-repo")
        assert parsed.test_repo == "student/tests-repo"

    def test_full_ref_uses_last_component(self):
        parsed = parse_reference("refs/tags/v4.12.0", "student/repo", "s")
        assert parsed.project == 4
        assert parsed.reviews == 12
        assert parsed.version == "v4.12.0"

    @pytest.mark.parametrize(
        "ref",
        [
            "v5.1.0",
            "v0.1.0",
            "1.2.3",
            "v1.2",
            "v1.2.3.4",
            "v1.a.0",
            "",
            "release-v1.2.3",
            "v1.2.3-beta",
            "V1.2.3",
            "v1.2.3\n",
            "refs/tags/v1.2.3\n",
            "v1.\u0663.1",
            "v2.\u0661.0",
        ],
    )
    def test_invalid_references_raise_parse_error(self, ref):
        with pytest.raises(ParseError, match="Unable to parse project information"):
            parse_reference(ref, "student/repo", "s")

    def test_type_is_checked_before_version(self):
        with pytest.raises(ValidationError):
            parse_reference("not-a-version", "student/repo", "")

    def test_logs_parsed_values(self, reporter):
        parse_reference("v2.3.1", "student/repo", "s", reporter=reporter)
        text = reporter.console.file.getvalue()
        assert "Project number : 2" in text
        assert "Request type   : Synchronous" in text


class TestParseRequestType:
    @pytest.mark.parametrize("value", ["s", "S", "sync", "Synchronous"])
    def test_synchronous(self, value):
        assert parse_request_type(value) is RequestType.SYNCHRONOUS

    @pytest.mark.parametrize("value", ["a", "A", "async", "Asynchronous"])
    def test_asynchronous(self, value):
        assert parse_request_type(value) is RequestType.ASYNCHRONOUS

    @pytest.mark.parametrize("value", ["", None])
    def test_missing_type(self, value):
        with pytest.raises(ValidationError, match="Missing required review request type"):
            parse_request_type(value)

    def test_invalid_type(self):
        with pytest.raises(ValidationError, match='"x" is not a valid code review type'):
            parse_request_type("x")


def test_parse_version_tuple():
    assert parse_version("v3.0.2") == (3, 0, 2, "v3.0.2")


def test_review_branch():
    assert review_branch("v1.2.0") == "review/v1.2.0"
