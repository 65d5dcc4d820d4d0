"""
Value model for the redaction engine.

Classifies any runtime value into one of the ValueKind members and provides
the container helpers the walker uses to build fresh copies (collection
rebuild, empty-like mapping clones).
"""

from __future__ import annotations

import copy
import dataclasses
import weakref
from collections import deque
from collections.abc import Hashable
from decimal import Decimal
from typing import Any

from pydantic import BaseModel

from log_sentinel.protocol.types import GroupValue, LogValuer, ValueKind

# Exact builtin types that are always leaves.
_SCALAR_TYPES: frozenset[type] = frozenset(
    {str, bytes, bytearray, int, float, complex, bool, Decimal, range, type(Ellipsis)}
)

_SEQUENCE_TYPES = (list, tuple, set, frozenset, deque)


def is_record(value: Any) -> bool:
    """Check if value is a dataclass or pydantic model instance."""
    if isinstance(value, type):
        return False
    return dataclasses.is_dataclass(value) or isinstance(value, BaseModel)


def classify(value: Any) -> ValueKind:
    """Classify a runtime value into its ValueKind."""
    if value is None:
        return ValueKind.NULL
    if type(value) in _SCALAR_TYPES or isinstance(value, type):
        return ValueKind.LEAF
    if isinstance(value, LogValuer) and callable(getattr(value, "log_value", None)):
        return ValueKind.RESOLVABLE
    if isinstance(value, GroupValue) or is_record(value):
        return ValueKind.GROUP
    if isinstance(value, dict):
        return ValueKind.MAPPING
    if isinstance(value, _SEQUENCE_TYPES):
        return ValueKind.SEQUENCE
    if isinstance(value, weakref.ReferenceType):
        return ValueKind.REFERENCE
    return ValueKind.LEAF


def holds_only_leaves(value: Any) -> bool:
    """Check if value is a tuple or frozenset whose elements are all leaves.

    The interpreter shares such objects between unrelated places (the empty
    tuple, constant tuples of one code object), so their identity says
    nothing about cycles.
    """
    if not isinstance(value, (tuple, frozenset)):
        return False
    return all(classify(item) in (ValueKind.LEAF, ValueKind.NULL) for item in value)


def is_hashable(value: Any) -> bool:
    """Check if value can be used as a set element or mapping key."""
    if not isinstance(value, Hashable):
        return False
    try:
        hash(value)
    except TypeError:
        return False
    return True


def requires_hashable(container: Any) -> bool:
    """Check if elements of a sequence-kind container must be hashable."""
    return isinstance(container, (set, frozenset))


def rebuild_sequence(original: Any, items: list[Any]) -> tuple[Any, bool]:
    """Build a container of the same type as *original* holding *items*.

    Returns:
        Tuple of (container, exact) where exact is False when the concrete
        subclass could not be rebuilt and the nearest builtin was used.
    """
    cls = type(original)
    if cls is list:
        return items, True
    if cls is tuple:
        return tuple(items), True
    if cls is set:
        return set(items), True
    if cls is frozenset:
        return frozenset(items), True

    try:
        if isinstance(original, tuple):
            make = getattr(original, "_make", None)
            if callable(make):
                return make(items), True
            return cls(items), True
        if isinstance(original, frozenset):
            return cls(items), True
        rebuilt = copy.copy(original)
        rebuilt.clear()
        if isinstance(original, set):
            rebuilt.update(items)
        else:
            rebuilt.extend(items)
        return rebuilt, True
    except Exception:
        return _builtin_sequence(original, items), False


def _builtin_sequence(original: Any, items: list[Any]) -> Any:
    if isinstance(original, tuple):
        return tuple(items)
    if isinstance(original, frozenset):
        return frozenset(items)
    if isinstance(original, set):
        return set(items)
    if isinstance(original, deque):
        return deque(items, maxlen=original.maxlen)
    return list(items)


def empty_mapping_like(original: dict[Any, Any]) -> tuple[dict[Any, Any], bool]:
    """Return an empty mapping of the same type as *original*.

    Clones keep subclass state such as ``defaultdict.default_factory``.
    Falls back to a plain dict (exact=False) when the clone fails.
    """
    if type(original) is dict:
        return {}, True
    try:
        clone = copy.copy(original)
        clone.clear()
    except Exception:
        return {}, False
    return clone, True


def type_name(value: Any) -> str:
    """Qualified type name used in reports and debug logs."""
    cls = type(value)
    module = cls.__module__
    if module == "builtins":
        return cls.__qualname__
    return f"{module}.{cls.__qualname__}"
