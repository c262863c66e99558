"""Console output for GitHub Actions runs.

Plain log lines go through rich so colours survive in the Actions log viewer.
Workflow commands (``::group::``, ``::warning::`` ...) are written with
``Console.out`` so rich never wraps or re-styles them; the runner only
recognises them when they arrive as a single unmodified line.
"""

from __future__ import annotations

from contextlib import contextmanager

from rich.console import Console
from rich.markup import escape
from rich.text import Text


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class Reporter:
    """Writes log groups, styled status labels and workflow annotations.

    Also counts warnings so a sequence can summarise them once at the end
    without aborting.
    """

    def __init__(self, console: Console | None = None):
        self.console = console or Console(highlight=False)
        self.warnings = 0
        self._in_group = False

    def _command(self, name: str, value: str = "") -> None:
        self.console.out(f"::{name}::{_escape_data(value)}", highlight=False)

    def info(self, text: str = "") -> None:
        self.console.out(text, highlight=False)

    def title(self, text: str) -> None:
        self.console.print(f"\n[bold cyan]{escape(text)}[/bold cyan]")

    def start_group(self, title: str) -> None:
        if self._in_group:
            self.end_group()
        self._command("group", title)
        self._in_group = True

    def end_group(self) -> None:
        if self._in_group:
            self._command("endgroup")
            self._in_group = False

    @contextmanager
    def group(self, title: str):
        """Wrap a block of output in a collapsible log group.

        The group is left open when the block raises so the caller can print
        the error inside it before closing it.
        """
        self.start_group(title)
        self.info()
        yield
        self.info()
        self.end_group()

    def _label(self, label: str, colour: str, text: str) -> None:
        self.console.print(Text.assemble((f"{label}:", f"bold black on {colour}"), " ", (text, colour)))

    def error(self, text: str) -> None:
        self._label("Error", "red", text)

    def success(self, text: str) -> None:
        self._label("Success", "green", text)

    def warning(self, text: str) -> None:
        self.warnings += 1
        self._label("Warning", "yellow", text)

    def notice(self, text: str) -> None:
        self._command("notice", text)

    def fail(self, text: str) -> None:
        """Emit an error annotation; shown outside any group so it stays visible."""
        self._command("error", text)

    def mask(self, secret: str | None) -> None:
        if secret:
            self._command("add-mask", secret)

    def check_warnings(self, phase: str) -> None:
        if self.warnings > 1:
            self._command(
                "warning",
                f"There were {self.warnings} warnings in the {phase} phase. View the run log for details.",
            )
        elif self.warnings == 1:
            self._command(
                "warning",
                f"There was {self.warnings} warning in the {phase} phase. View the run log for details.",
            )
