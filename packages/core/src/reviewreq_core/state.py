"""State carried from the setup sequence to the request sequence.

The store layer only sees a flat ``dict[str, str]``; RequestState converts to
and from that mapping and validates it on the way back in.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Optional

from reviewreq_core.errors import StateError

_INT_FIELDS = {"project", "reviews", "patches", "run_number", "run_id", "issue_number"}


@dataclass
class RequestState:
    type: Optional[str] = None
    owner: Optional[str] = None
    main_repo: Optional[str] = None
    test_repo: Optional[str] = None
    project: Optional[int] = None
    reviews: Optional[int] = None
    patches: Optional[int] = None
    version: Optional[str] = None
    release_url: Optional[str] = None
    release_tag: Optional[str] = None
    release_date: Optional[str] = None  # ISO-8601
    run_number: Optional[int] = None
    run_id: Optional[int] = None
    run_url: Optional[str] = None
    issue_number: Optional[int] = None
    issue_url: Optional[str] = None
    branch: Optional[str] = None
    cache_key: Optional[str] = None
    cache_hit: Optional[bool] = None

    def update(self, **values) -> None:
        known = {f.name for f in fields(self)}
        for key, value in values.items():
            if key not in known:
                raise StateError(f"Unknown state field: {key}")
            setattr(self, key, value)

    def to_mapping(self) -> dict[str, str]:
        mapping: dict[str, str] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, bool):
                mapping[f.name] = "true" if value else "false"
            else:
                mapping[f.name] = str(value)
        return mapping

    @classmethod
    def from_mapping(cls, mapping: dict[str, str]) -> RequestState:
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(mapping) - known)
        if unknown:
            raise StateError(f"Unknown keys in saved state: {', '.join(unknown)}")

        values: dict = {}
        for key, raw in mapping.items():
            if key in _INT_FIELDS:
                try:
                    values[key] = int(raw)
                except (TypeError, ValueError):
                    raise StateError(f"Saved state value for {key} is not an integer: {raw!r}")
            elif key == "cache_hit":
                values[key] = str(raw).lower() == "true"
            else:
                values[key] = raw
        return cls(**values)

    def require(self, *names: str) -> None:
        missing = [name for name in names if getattr(self, name) is None]
        if missing:
            raise StateError(
                f"Saved state is missing {', '.join(missing)}. Make sure the setup step ran successfully first."
            )
