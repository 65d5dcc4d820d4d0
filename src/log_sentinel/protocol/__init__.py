"""
Protocol definitions for log-sentinel.

Includes the attribute/group containers, value kinds, the LogValuer protocol
and the sensitivity marker helpers.
"""

from log_sentinel.protocol.types import (
    SENTINEL_TAG,
    Attr,
    GroupValue,
    LogValuer,
    ValueKind,
    sensitive,
    sensitive_field,
)

__all__ = [
    "SENTINEL_TAG",
    "Attr",
    "GroupValue",
    "LogValuer",
    "ValueKind",
    "sensitive",
    "sensitive_field",
]
