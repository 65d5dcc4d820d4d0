"""
Best-effort degradation records for log-sentinel.

Redaction never fails a log call. Whenever the walker has to fall back
(a cycle, an unreadable field, a value that cannot be placed back into its
container) it records a FallbackEvent in the call's RedactionReport instead
of raising. Events carry paths and type names only, never values.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FallbackReason(str, Enum):
    """Why part of a value was not redacted as usual."""

    CYCLE = "cycle"  # Identity already visited; original passed through
    UNREADABLE_FIELD = "unreadable_field"  # Field value could not be read
    INCOMPATIBLE_ELEMENT = "incompatible_element"  # Slot kept its original element
    DROPPED_ENTRY = "dropped_entry"  # Mapping entry could not be re-inserted
    REBUILD_FAILED = "rebuild_failed"  # Nearest builtin used instead of the subclass
    RESOLVE_FAILED = "resolve_failed"  # log_value() raised
    RESOLVE_LIMIT = "resolve_limit"  # Too many chained log_value() results
    ABORTED = "aborted"  # Whole attribute handled by the failure policy


@dataclass
class FallbackEvent:
    """Record of a single fallback during redaction."""

    reason: FallbackReason
    path: str
    type_name: str
    detail: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "reason": self.reason.value,
            "path": self.path,
            "type_name": self.type_name,
            "detail": self.detail[:200],
        }


@dataclass
class RedactionReport:
    """Summary of fallback events for one redaction call."""

    events: list[FallbackEvent] = field(default_factory=list)

    def add(self, event: FallbackEvent) -> None:
        """Record a fallback event."""
        self.events.append(event)

    @property
    def clean(self) -> bool:
        """True when nothing fell back."""
        return not self.events

    @property
    def aborted(self) -> bool:
        return any(e.reason == FallbackReason.ABORTED for e in self.events)

    def count(self, reason: FallbackReason) -> int:
        """Number of events with the given reason."""
        return sum(1 for e in self.events if e.reason == reason)

    def to_summary(self) -> str:
        """Generate human-readable summary."""
        if not self.events:
            return "No fallback events"

        counts = Counter(e.reason.value for e in self.events)
        lines = [f"Redaction: {len(self.events)} fallback(s)"]
        for reason, count in sorted(counts.items()):
            lines.append(f"  {reason}: {count}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "events": [e.to_dict() for e in self.events],
            "aborted": self.aborted,
        }
