from __future__ import annotations

import logging
import shlex
import subprocess
from typing import Sequence

from reviewreq_core.errors import SubprocessError
from reviewreq_core.utils.console import Reporter

logger = logging.getLogger(__name__)

_MASK = "***"


class CommandRunner:
    """Runs external commands and checks their exit codes.

    Commands inherit stdout/stderr so their output lands in the run log as it
    is produced. The echoed command line has every registered secret replaced
    by ``***``.
    """

    def __init__(self, reporter: Reporter):
        self.reporter = reporter
        self.secrets: list[str] = []

    def add_secret(self, secret: str | None) -> None:
        if secret and secret not in self.secrets:
            self.secrets.append(secret)
            self.reporter.mask(secret)

    def redact(self, text: str) -> str:
        for secret in self.secrets:
            text = text.replace(secret, _MASK)
        return text

    def check_exec(
        self,
        command: str,
        args: Sequence[str] = (),
        *,
        title: str | None = None,
        error: str | None = None,
        cwd: str | None = None,
    ) -> int:
        """Run ``command`` with ``args`` and return its exit code.

        If ``error`` is given, a nonzero exit code raises SubprocessError with
        that message; otherwise the exit code is returned for the caller to
        interpret.
        """
        if title:
            self.reporter.info(f"\n{title}...")

        argv = [command, *args]
        self.reporter.info(f"[command]{self.redact(shlex.join(argv))}")

        try:
            result = subprocess.run(argv, cwd=cwd, check=False)
        except FileNotFoundError:
            logger.debug("Command not found: %s", command)
            if error:
                raise SubprocessError(error, 127)
            return 127

        logger.debug("%s exited with %d", command, result.returncode)
        if error and result.returncode != 0:
            raise SubprocessError(error, result.returncode)
        return result.returncode
