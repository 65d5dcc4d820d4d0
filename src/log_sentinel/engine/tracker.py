"""Per-call identity tracking for cycle detection."""

from __future__ import annotations

from typing import Any


class CycleTracker:
    """Identity set scoped to a single redaction call.

    Entered objects are pinned until the tracker is discarded so that their
    ``id()`` cannot be recycled by a temporary created later in the same
    call (values produced by ``log_value()`` are often short-lived).

    Never share a tracker between calls or threads.
    """

    __slots__ = ("_seen", "_copies")

    def __init__(self) -> None:
        self._seen: dict[int, Any] = {}
        self._copies: dict[int, Any] = {}

    def enter(self, obj: Any) -> bool:
        """Record *obj* and return True, or return False if already seen."""
        key = id(obj)
        if key in self._seen:
            return False
        self._seen[key] = obj
        return True

    def remember(self, obj: Any, redacted: Any) -> None:
        """Store the finished redacted copy of an entered object."""
        self._copies[id(obj)] = redacted

    def copy_of(self, obj: Any, default: Any = None) -> Any:
        """Return the finished redacted copy of *obj*, or *default*."""
        return self._copies.get(id(obj), default)

    def __contains__(self, obj: object) -> bool:
        return id(obj) in self._seen

    def __len__(self) -> int:
        return len(self._seen)
