"""Abstract state store interface.

The CLI depends on BaseStateStore, not on a concrete backend, so the setup and
request commands work the same whether state travels through the GitHub
Actions state file or a local JSON file.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from reviewreq_store.models import StateSnapshot


class BaseStateStore(ABC):
    """Pluggable persistence for state carried between the two sequences."""

    @abstractmethod
    def save(self, snapshot: StateSnapshot) -> None:
        """Persist every value in the snapshot along with the list of its keys."""

    @abstractmethod
    def load(self) -> StateSnapshot:
        """Return the saved snapshot.

        Returns an empty snapshot when nothing was saved and never raises for
        missing state.
        """

    def close(self) -> None:
        """Release any resources held by the store.

        Default is a no-op so callers can always call close() safely.
        """


class StoreError(Exception):
    """Raised when state cannot be written to the configured backend."""
