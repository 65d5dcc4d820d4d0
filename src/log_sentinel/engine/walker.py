"""
Redaction Walker.

Recursively rebuilds a value with every sensitive record field replaced by
the zero value of its declared type. The original graph is never mutated:
records, sequences and mappings in the result are fresh copies.

Every identity-bearing value (records, groups, collections, mappings,
resolvables and each value produced by resolution) is checked against the
call's CycleTracker before it is entered. A repeated identity is returned as
the original, unredacted object, which guarantees termination on cyclic
graphs. Tuples and frozensets holding only leaves cannot close a cycle and
are not tracked.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from log_sentinel.config.models import DEFAULT_CONFIG, SentinelConfig, StructMode
from log_sentinel.engine.degradation import FallbackEvent, FallbackReason, RedactionReport
from log_sentinel.engine.fields import FieldSpec, rebuild_record, record_fields
from log_sentinel.engine.tracker import CycleTracker
from log_sentinel.engine.values import (
    classify,
    empty_mapping_like,
    holds_only_leaves,
    is_hashable,
    rebuild_sequence,
    requires_hashable,
    type_name,
)
from log_sentinel.protocol.types import Attr, GroupValue, ValueKind

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass
class RedactionContext:
    """State for one top-level redaction call.

    Holds the cycle tracker, the fallback report and the path of the value
    currently being walked. Create one per call; never share it.
    """

    tracker: CycleTracker = field(default_factory=CycleTracker)
    report: RedactionReport = field(default_factory=RedactionReport)
    path: list[str] = field(default_factory=list)

    def location(self) -> str:
        """Render the current path, e.g. ``data.nested.friends[1]``."""
        rendered = ""
        for segment in self.path:
            if segment.startswith("[") or not rendered:
                rendered += segment
            else:
                rendered += "." + segment
        return rendered or "<root>"

    def fallback(self, reason: FallbackReason, value: Any, detail: str = "") -> None:
        """Record a fallback at the current path."""
        event = FallbackEvent(
            reason=reason,
            path=self.location(),
            type_name=type_name(value),
            detail=detail,
        )
        self.report.add(event)
        logger.debug(
            "Redaction fallback (%s) at %s for %s%s",
            event.reason.value,
            event.path,
            event.type_name,
            f": {detail}" if detail else "",
        )


class Walker:
    """Recursive redaction over the value model.

    The walker holds only its frozen configuration; all per-call state lives
    in the RedactionContext, so one walker can serve concurrent calls.
    """

    def __init__(self, config: SentinelConfig | None = None) -> None:
        self._config = config or DEFAULT_CONFIG

    @property
    def config(self) -> SentinelConfig:
        return self._config

    def redact(self, value: Any, context: RedactionContext) -> Any:
        """Return a redacted copy of *value*."""
        kind = classify(value)
        if kind == ValueKind.NULL:
            return None
        if kind == ValueKind.LEAF:
            return value
        if kind == ValueKind.REFERENCE:
            return self._redact_reference(value, context)
        if kind == ValueKind.SEQUENCE and holds_only_leaves(value):
            return self._redact_sequence(value, context)

        if not context.tracker.enter(value):
            return self._revisit(value, context)

        if kind == ValueKind.RESOLVABLE:
            result = self._redact_resolvable(value, context)
        elif kind == ValueKind.GROUP:
            result = self._redact_group(value, context)
        elif kind == ValueKind.SEQUENCE:
            result = self._redact_sequence(value, context)
        else:
            result = self._redact_mapping(value, context)

        if self._config.reuse_shared_copies:
            context.tracker.remember(value, result)
        return result

    def _revisit(self, value: Any, context: RedactionContext) -> Any:
        if self._config.reuse_shared_copies:
            redacted = context.tracker.copy_of(value, _MISSING)
            if redacted is not _MISSING:
                return redacted
        context.fallback(FallbackReason.CYCLE, value)
        return value

    def _redact_reference(self, ref: Any, context: RedactionContext) -> Any:
        # A weak reference to a fresh copy would die with this call, so the
        # redacted referent replaces the reference.
        target = ref()
        if target is None:
            return None
        return self.redact(target, context)

    def _redact_resolvable(self, value: Any, context: RedactionContext) -> Any:
        current = value
        for _ in range(self._config.max_resolve_depth):
            try:
                current = current.log_value()
            except Exception as e:
                context.fallback(FallbackReason.RESOLVE_FAILED, current, type(e).__name__)
                return f"!ERROR: log_value() raised {type(e).__name__}"

            if classify(current) != ValueKind.RESOLVABLE:
                return self.redact(current, context)
            if not context.tracker.enter(current):
                return self._revisit(current, context)

        context.fallback(FallbackReason.RESOLVE_LIMIT, value)
        return (
            f"!ERROR: log_value() chain exceeded {self._config.max_resolve_depth} resolutions"
        )

    def _redact_group(self, value: Any, context: RedactionContext) -> Any:
        if isinstance(value, GroupValue):
            return GroupValue(tuple(self._redact_attr(attr, context) for attr in value.attrs))

        specs = record_fields(type(value), self._config.marker)
        updates = self._redact_fields(value, specs, context)
        if self._config.struct_mode == StructMode.FLATTEN:
            return _flatten(specs, updates)

        try:
            return rebuild_record(value, updates)
        except Exception as e:
            context.fallback(FallbackReason.REBUILD_FAILED, value, type(e).__name__)
            return _flatten(specs, updates)

    def _redact_attr(self, attr: Attr, context: RedactionContext) -> Attr:
        context.path.append(attr.key)
        try:
            return Attr(attr.key, self.redact(attr.value, context))
        finally:
            context.path.pop()

    def _redact_fields(
        self, record: Any, specs: tuple[FieldSpec, ...], context: RedactionContext
    ) -> dict[str, Any]:
        updates: dict[str, Any] = {}
        for spec in specs:
            if spec.sensitive:
                updates[spec.name] = spec.zero()
                continue

            context.path.append(spec.name)
            try:
                try:
                    current = getattr(record, spec.name)
                except AttributeError:
                    context.fallback(FallbackReason.UNREADABLE_FIELD, record, spec.name)
                    continue
                updates[spec.name] = self.redact(current, context)
            finally:
                context.path.pop()
        return updates

    def _redact_sequence(self, value: Any, context: RedactionContext) -> Any:
        hashed = requires_hashable(value)
        items: list[Any] = []
        for index, item in enumerate(value):
            context.path.append(f"[{index}]")
            try:
                redacted = self.redact(item, context)
                if hashed and not is_hashable(redacted):
                    context.fallback(FallbackReason.INCOMPATIBLE_ELEMENT, redacted, "unhashable")
                    redacted = item
            finally:
                context.path.pop()
            items.append(redacted)

        rebuilt, exact = rebuild_sequence(value, items)
        if not exact:
            context.fallback(FallbackReason.REBUILD_FAILED, value)
        return rebuilt

    def _redact_mapping(self, value: dict[Any, Any], context: RedactionContext) -> Any:
        rebuilt, exact = empty_mapping_like(value)
        if not exact:
            context.fallback(FallbackReason.REBUILD_FAILED, value)

        for index, (key, item) in enumerate(value.items()):
            context.path.append(f"[#{index}]")
            try:
                new_key = self.redact(key, context)
                new_item = self.redact(item, context)
                if not is_hashable(new_key):
                    context.fallback(FallbackReason.DROPPED_ENTRY, new_key, "unhashable key")
                    continue
            finally:
                context.path.pop()
            rebuilt[new_key] = new_item
        return rebuilt


def _flatten(specs: tuple[FieldSpec, ...], updates: dict[str, Any]) -> GroupValue:
    return GroupValue(tuple(Attr(s.name, updates[s.name]) for s in specs if s.name in updates))
