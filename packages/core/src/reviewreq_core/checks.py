"""Static checks run over the project source before a review is requested.

Checks are pluggable: anything implementing StaticCheck can be added to the
request sequence. The text scans shipped here are deliberately simple grep
counts and only look at the main source tree.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from reviewreq_core.errors import PolicyViolationError

if TYPE_CHECKING:
    from reviewreq_core.utils.command import CommandRunner

# grep exits 0 when a line matched, 1 when nothing matched and 2 on error.
GREP_NO_MATCH = 1


class StaticCheck(ABC):
    """A gate over the source tree that passes only on an exact result."""

    name: str
    message: str
    expected: int

    @abstractmethod
    def run(self, runner: CommandRunner, root: str) -> int:
        """Run the check in ``root`` and return its result."""

    def verify(self, runner: CommandRunner, root: str) -> int:
        result = self.run(runner, root)
        if result != self.expected:
            raise PolicyViolationError(self.message)
        return result


class TextScanCheck(StaticCheck):
    """Case-insensitive recursive grep; passes only when grep reports no match."""

    expected = GREP_NO_MATCH

    def __init__(self, name: str, pattern: str, message: str, title: str, exclude: str | None = None):
        self.name = name
        self.pattern = pattern
        self.message = message
        self.title = title
        self.exclude = exclude

    def run(self, runner: CommandRunner, root: str) -> int:
        args = ["-rnoiE"]
        if self.exclude:
            args.append(f"--exclude={self.exclude}")
        args.extend([self.pattern, "."])
        return runner.check_exec("grep", args, title=self.title, cwd=root)


def marker_check() -> TextScanCheck:
    return TextScanCheck(
        name="todo",
        pattern=r"^\s*[/*]{1,2}.*\bTODO\b",
        title="Checking for 1 line TODO comments",
        message="One or more TODO comments found. Please clean up the code before requesting code review.",
    )


def entry_point_check(allowed_file: str = "Driver.java") -> TextScanCheck:
    return TextScanCheck(
        name="main",
        pattern=r"\s*public\s+static\s+void\s+main\s*\(",
        exclude=allowed_file,
        title="Checking for extra main methods",
        message="More than one main method found. Please clean up old main methods before requesting code review.",
    )


def default_checks(config: dict) -> list[StaticCheck]:
    return [marker_check(), entry_point_check(config.get("entry_point_file", "Driver.java"))]
