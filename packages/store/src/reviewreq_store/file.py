"""FileStateStore: state kept in a local JSON file.

The default backend. Works for local runs and for GitHub Actions jobs that run
``reviewreq setup`` and ``reviewreq request`` as separate steps of one job,
since both steps share the workspace.

Data format::

    {"keys": ["type", "project", ...], "values": {"type": "Synchronous", ...}, "saved_at": "..."}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from reviewreq_store.base import BaseStateStore, StoreError
from reviewreq_store.models import StateSnapshot

logger = logging.getLogger(__name__)


class FileStateStore(BaseStateStore):
    def __init__(self, path: str = ".reviewreq-state.json"):
        self._path = Path(path)

    def save(self, snapshot: StateSnapshot) -> None:
        data = {"keys": snapshot.keys, "values": snapshot.values, "saved_at": snapshot.saved_at}
        try:
            self._path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        except OSError as e:
            raise StoreError(f"Unable to write state file {self._path}: {e}") from e

    def load(self) -> StateSnapshot:
        if not self._path.exists():
            return StateSnapshot()
        try:
            data = json.loads(self._path.read_text(encoding="utf-8")) or {}
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not read state file %s: %s", self._path, e)
            return StateSnapshot()

        values = data.get("values", {}) if isinstance(data, dict) else None
        if not isinstance(values, dict):
            logger.warning("State file %s does not hold a state object; ignoring it.", self._path)
            return StateSnapshot()

        # Restore exactly the saved key set, in saved order.
        keys = data.get("keys")
        if not isinstance(keys, list):
            keys = list(values)
        return StateSnapshot(
            values={key: str(values[key]) for key in keys if key in values},
            saved_at=data.get("saved_at", ""),
        )
