"""Markdown for the review pull request: description, history table and instructions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from functools import cmp_to_key
from zoneinfo import ZoneInfo

from reviewreq_core.config import project_name
from reviewreq_core.state import RequestState

_TABLE_HEADER = [
    "| Pull | Status | Labels | Approvals | Created | Closed |",
    "|:----:|:------:|:-------|:----------|:--------|:-------|",
]


@dataclass
class PullRequestRow:
    number: int
    url: str
    status: str  # "draft" | "open" | "closed"
    labels: list[str]
    approvals: list[str]
    created: str
    closed: str

    def render(self) -> str:
        labels = ", ".join(self.labels) if self.labels else "N/A"
        approvals = ", ".join(self.approvals)
        return f"| [#{self.number}]({self.url}) | {self.status} | {labels} | {approvals} | {self.created} | {self.closed} |"


def _compare_labels(x: str, y: str) -> int:
    if x.startswith("project"):
        return -1
    if y.startswith("project"):
        return 1

    if x.startswith("v"):
        return -1
    if y.startswith("v"):
        return 1

    # Both orderings of unequal names answer -1, so ties between plain labels
    # depend on input order. Existing pull request tables were generated with
    # this ordering; keep it until the intended order is confirmed.
    if x < y:
        return -1
    if x > y:
        return -1
    return 0


def sort_labels(names: list[str]) -> list[str]:
    """Order labels as project first, then version tags, then everything else."""
    return sorted(names, key=cmp_to_key(_compare_labels))


def format_timestamp(value, zone: str) -> str:
    """Render a timestamp like "October 14, 2021 at 1:30 PM PDT" in ``zone``."""
    if not value:
        return "N/A"
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)

    local = value.astimezone(ZoneInfo(zone))
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{local:%B} {local.day}, {local.year} at {hour}:{local:%M} {meridiem} {local.tzname()}"


def build_pull_row(pull, approvals: list[str], zone: str) -> PullRequestRow:
    return PullRequestRow(
        number=pull.number,
        url=pull.html_url,
        status="draft" if pull.draft else pull.state,
        labels=sort_labels([label.name for label in pull.labels or []]),
        approvals=approvals,
        created=format_timestamp(pull.created_at, zone),
        closed=format_timestamp(pull.closed_at, zone),
    )


def build_review_table(rows: list[PullRequestRow]) -> str:
    if not rows:
        return "N/A"
    return "\n".join(_TABLE_HEADER + [row.render() for row in rows])


def pull_title(state: RequestState) -> str:
    return f"Project {state.release_tag} {state.type} Code Review"


def build_pull_body(state: RequestState, review_list: str, config: dict) -> str:
    zone = config["timezone"]
    name = project_name(config, state.project)
    guide = config["guide_url"].format(project=state.project)

    return f"""
## Student Information

- **Full Name:** [FULL_NAME]
- **USF Email:** [USF_EMAIL]@usfca.edu

## Project Information

- **Project:** [Project {state.project} {name}]({guide})
- **Project Functionality:** [Issue #{state.issue_number}]({state.issue_url})

## Release Information

- **Release:** [{state.release_tag}]({state.release_url})
- **Release Verified:** [Run {state.run_number} ({state.run_id})]({state.run_url})
- **Release Created:** {format_timestamp(state.release_date, zone)}

## Request Details

- **Review Type:** {state.type}

#### Previous Pull Requests

{review_list}
"""


def build_instructions(actor: str, state: RequestState) -> str:
    kind = (state.type or "").lower()
    return f"""
## Student Instructions

Hello @{actor}! Please follow these instructions to request your project {state.release_tag} {kind} code review:

- [ ] Replace `[FULL_NAME]` with your full name and `[USF_EMAIL]` with your USF username so we can enter your grade on Canvas.

- [ ] Double-check the [labels, assignee, and milestone](https://guides.github.com/features/issues/) are set properly.

- [ ] Double-check you are making the correct type of request. You can only request an asynchronous code review if you were pre-approved by the instructor!

- [ ] **Mark this request as "Ready to Review" when all of the above is complete.**

Click each of the above tasks as you complete them!

We will reply with further instructions. If we do not respond within 2 *business* days, please reach out on CampusWire.

:warning: **We will not see this request while it is in draft mode. You must mark it as ready to review first!**
"""
