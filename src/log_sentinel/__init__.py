"""log-sentinel package."""

from .config.models import DEFAULT_CONFIG, FailurePolicy, SentinelConfig, StructMode
from .engine.degradation import FallbackEvent, FallbackReason, RedactionReport
from .engine.tracker import CycleTracker
from .engine.values import classify
from .engine.walker import RedactionContext, Walker
from .hook import AttributeHook, redact, redact_with_report, replace_attr
from .logging import SentinelFilter
from .protocol.types import (
    SENTINEL_TAG,
    Attr,
    GroupValue,
    LogValuer,
    ValueKind,
    sensitive,
    sensitive_field,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "DEFAULT_CONFIG",
    "SENTINEL_TAG",
    "Attr",
    "AttributeHook",
    "CycleTracker",
    "FailurePolicy",
    "FallbackEvent",
    "FallbackReason",
    "GroupValue",
    "LogValuer",
    "RedactionContext",
    "RedactionReport",
    "SentinelConfig",
    "SentinelFilter",
    "StructMode",
    "ValueKind",
    "Walker",
    "classify",
    "redact",
    "redact_with_report",
    "replace_attr",
    "sensitive",
    "sensitive_field",
]
