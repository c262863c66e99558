"""Error taxonomy for the setup and request sequences.

Every failure that should abort a sequence derives from ReviewRequestError.
The pipeline runner catches it at step boundaries, so a step can raise any of
these and trust that the message reaches the user unchanged.
"""

from __future__ import annotations

import json


class ReviewRequestError(Exception):
    """Base class for all failures that abort a sequence."""


class ParseError(ReviewRequestError):
    """The release reference does not look like v<project>.<reviews>.<patches>."""


class ValidationError(ReviewRequestError):
    """An input value (such as the review type) is missing or invalid."""


class NotFoundError(ReviewRequestError):
    """A release, workflow run, or approval issue could not be found."""


class PolicyViolationError(ReviewRequestError):
    """The repository is not in a state that allows a review request."""


class StateError(ReviewRequestError):
    """Persisted state is missing fields or holds values of the wrong type."""


class SubprocessError(ReviewRequestError):
    """A command exited with a nonzero status where success was required."""

    def __init__(self, message: str, returncode: int):
        super().__init__(f"{message} ({returncode}).")
        self.returncode = returncode


class APIStatusError(ReviewRequestError):
    """A GitHub API call did not answer with the expected status code."""

    def __init__(self, action: str, expected: int, status: int | None, data=None, request: dict | None = None):
        self.action = action
        self.expected = expected
        self.status = status
        self.data = data
        self.request = request
        super().__init__(f"{action} (expected status {expected}, got {status if status is not None else 'none'}).")

    def details(self) -> str:
        """Serialized request and response, for the run log."""
        lines = []
        if self.request is not None:
            lines.append(f"Request: {json.dumps(self.request, default=str)}")
        lines.append(f"Result: {json.dumps({'status': self.status, 'data': self.data}, default=str)}")
        return "\n".join(lines)
