"""
Protocol types for log-sentinel.

Defines the value kinds the redaction engine understands, the attribute and
group containers handed to and returned by the attribute hook, the lazy
resolution protocol, and the helpers that put the sensitivity marker on a
field.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from pydantic import Field

# Metadata key that marks a field as sensitive.
SENTINEL_TAG = "sentinel"


class ValueKind(str, Enum):
    """Semantic kinds a runtime value is classified into."""

    NULL = "null"
    RESOLVABLE = "resolvable"  # implements log_value()
    GROUP = "group"  # GroupValue, dataclass or pydantic model
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    REFERENCE = "reference"  # explicit indirection (weakref.ref)
    LEAF = "leaf"


@runtime_checkable
class LogValuer(Protocol):
    """A value that produces its own loggable representation on demand."""

    def log_value(self) -> Any:
        """Return the value to log in place of this object."""
        ...


@dataclass(frozen=True)
class Attr:
    """A single named log attribute."""

    key: str
    value: Any = None

    def __str__(self) -> str:
        return f"{self.key}={self.value}"


@dataclass(frozen=True)
class GroupValue:
    """Ordered sequence of named sub-values."""

    attrs: tuple[Attr, ...] = ()

    @classmethod
    def of(cls, *attrs: Attr, **values: Any) -> GroupValue:
        """Build a group from attrs followed by keyword values."""
        items = list(attrs)
        items.extend(Attr(key, value) for key, value in values.items())
        return cls(tuple(items))

    def __iter__(self) -> Iterator[Attr]:
        return iter(self.attrs)

    def __len__(self) -> int:
        return len(self.attrs)

    def __str__(self) -> str:
        return "[" + " ".join(str(attr) for attr in self.attrs) + "]"

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value of the first attr named *key*."""
        for attr in self.attrs:
            if attr.key == key:
                return attr.value
        return default

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary, nested groups included."""
        return {
            attr.key: attr.value.to_dict() if isinstance(attr.value, GroupValue) else attr.value
            for attr in self.attrs
        }


def sensitive(*, marker: str = SENTINEL_TAG, value: str = "true", **kwargs: Any) -> Any:
    """Return a ``dataclasses.field`` carrying the sensitivity marker.

    Args:
        marker: Metadata key to set (must match SentinelConfig.marker)
        value: Marker value; any non-empty value marks the field
        **kwargs: Passed through to ``dataclasses.field``

    Example:
        >>> @dataclass
        ... class Login:
        ...     user: str
        ...     password: str = sensitive(default="")
    """
    if not marker or not value:
        raise ValueError("Sensitivity marker and value must be non-empty strings.")
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[marker] = value
    return dataclasses.field(metadata=metadata, **kwargs)


def sensitive_field(
    default: Any = ..., *, marker: str = SENTINEL_TAG, value: str = "true", **kwargs: Any
) -> Any:
    """Return a pydantic ``Field`` carrying the sensitivity marker.

    The marker is stored in ``json_schema_extra``, so it also shows up in the
    model's JSON schema.
    """
    if not marker or not value:
        raise ValueError("Sensitivity marker and value must be non-empty strings.")
    extra = kwargs.pop("json_schema_extra", None) or {}
    if not isinstance(extra, dict):
        raise TypeError("json_schema_extra must be a dict to carry the sensitivity marker.")
    return Field(default, json_schema_extra={**extra, marker: value}, **kwargs)
