"""Parsing of release references and review request types."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from reviewreq_core.errors import ParseError, ValidationError
from reviewreq_core.utils.console import Reporter

_VERSION_RE = re.compile(r"v([1-4])\.(\d+)\.(\d+)", re.ASCII)

_TYPE_USAGE = (
    'Review request types must start with "s" for synchronous code reviews (default type) '
    'or "a" for pre-approved asynchronous code reviews.'
)


class RequestType(str, Enum):
    SYNCHRONOUS = "Synchronous"
    ASYNCHRONOUS = "Asynchronous"


@dataclass
class ParsedReference:
    request_type: RequestType
    owner: str
    main_repo: str  # owner/name
    test_repo: str  # owner/<test_dir>
    project: int
    reviews: int
    patches: int
    version: str

    @property
    def branch(self) -> str:
        return review_branch(self.version)


def review_branch(version: str) -> str:
    return f"review/{version}"


def parse_request_type(value: str | None) -> RequestType:
    if not value:
        raise ValidationError(f"Missing required review request type. {_TYPE_USAGE}")

    first = value[0].lower()
    if first == "s":
        return RequestType.SYNCHRONOUS
    if first == "a":
        return RequestType.ASYNCHRONOUS
    raise ValidationError(f'The value "{value}" is not a valid code review type. {_TYPE_USAGE}')


def parse_version(ref: str) -> tuple[int, int, int, str]:
    """Return (project, reviews, patches, version) from a tag or ref like refs/tags/v1.2.3."""
    version = ref.split("/")[-1]
    matched = _VERSION_RE.fullmatch(version)
    if matched is None:
        raise ParseError(f"Unable to parse project information from: {ref}")
    return int(matched.group(1)), int(matched.group(2)), int(matched.group(3)), version


def parse_reference(
    ref: str,
    repo: str,
    type_flag: str | None,
    test_dir: str = "project-tests",
    reporter: Reporter | None = None,
) -> ParsedReference:
    """Derive everything the sequences need from the release ref and review type."""
    request_type = parse_request_type(type_flag)

    owner = repo.split("/")[0]
    project, reviews, patches, version = parse_version(ref)

    parsed = ParsedReference(
        request_type=request_type,
        owner=owner,
        main_repo=repo,
        test_repo=f"{owner}/{test_dir}",
        project=project,
        reviews=reviews,
        patches=patches,
        version=version,
    )

    if reporter is not None:
        reporter.info(f"Request type   : {parsed.request_type.value}")
        reporter.info(f"Main repository: {parsed.main_repo}")
        reporter.info(f"Test repository: {parsed.test_repo}")
        reporter.info()
        reporter.info(f"Project version: {parsed.version}")
        reporter.info(f"Project number : {parsed.project}")
        reporter.info(f"Project reviews: {parsed.reviews}")
        reporter.info(f"Project patches: {parsed.patches}")

    return parsed
