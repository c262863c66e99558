"""ActionsStateStore: state shared between steps of one GitHub Actions job.

Saving appends ``REVIEWREQ_STATE_<name>=value`` entries to the file named by
``$GITHUB_ENV``; the runner exports each entry to every later step of the job,
including the sibling steps of a composite action. ``$GITHUB_STATE`` is not
used because the runner only hands it back to the pre/main/post phases of the
action that wrote it. A ``REVIEWREQ_STATE_KEYS`` entry holds the JSON list of
saved names so load() knows what to read back.
"""

from __future__ import annotations

import json
import logging
import os
import uuid
from typing import Mapping

from reviewreq_store.base import BaseStateStore, StoreError
from reviewreq_store.models import StateSnapshot

logger = logging.getLogger(__name__)

PREFIX = "REVIEWREQ_STATE_"
KEYS_VARIABLE = f"{PREFIX}KEYS"


def _file_entry(name: str, value: str) -> str:
    if "\n" not in value:
        return f"{name}={value}\n"
    # Multi-line values use the heredoc form with a delimiter that cannot
    # occur in the value.
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


class ActionsStateStore(BaseStateStore):
    def __init__(self, environ: Mapping[str, str] | None = None):
        self._environ = os.environ if environ is None else environ

    def save(self, snapshot: StateSnapshot) -> None:
        path = self._environ.get("GITHUB_ENV")
        if not path:
            raise StoreError("GITHUB_ENV is not set; the actions store only works inside a GitHub Actions job.")

        with open(path, "a", encoding="utf-8") as f:
            for key, value in snapshot.values.items():
                f.write(_file_entry(f"{PREFIX}{key}", value))
            f.write(_file_entry(KEYS_VARIABLE, json.dumps(snapshot.keys)))

    def load(self) -> StateSnapshot:
        saved = self._environ.get(KEYS_VARIABLE)
        if not saved:
            return StateSnapshot()

        try:
            keys = json.loads(saved)
        except json.JSONDecodeError as e:
            logger.warning("Saved state keys are not valid JSON: %s", e)
            return StateSnapshot()

        # The runner does not record when state was saved.
        return StateSnapshot(values={key: self._environ.get(f"{PREFIX}{key}", "") for key in keys}, saved_at="")
