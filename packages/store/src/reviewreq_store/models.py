"""Persisted state data model.

Decoupled from reviewreq_core: the store only knows a flat string mapping.
reviewreq_core.state.RequestState converts to and from it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class StateSnapshot:
    """State saved by the setup sequence for the request sequence."""

    values: dict[str, str] = field(default_factory=dict)
    saved_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    @property
    def keys(self) -> list[str]:
        return list(self.values)

    @property
    def empty(self) -> bool:
        return not self.values
