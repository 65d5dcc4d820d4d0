"""
Redaction Engine - value walking for log-sentinel.

The engine coordinates:
1. Classification of runtime values into a closed set of kinds
2. Per-field sensitivity plans read from declarative metadata
3. Recursive copy-and-redact with per-call cycle tracking
4. Best-effort fallback reporting instead of failures
"""

from log_sentinel.engine.degradation import (
    FallbackEvent,
    FallbackReason,
    RedactionReport,
)
from log_sentinel.engine.fields import (
    FieldSpec,
    Verdict,
    record_fields,
    zero_value,
)
from log_sentinel.engine.tracker import CycleTracker
from log_sentinel.engine.values import classify, is_record
from log_sentinel.engine.walker import RedactionContext, Walker

__all__ = [
    # Walker
    "Walker",
    "RedactionContext",
    "CycleTracker",
    # Value model
    "classify",
    "is_record",
    # Field classification
    "FieldSpec",
    "Verdict",
    "record_fields",
    "zero_value",
    # Degradation
    "FallbackEvent",
    "FallbackReason",
    "RedactionReport",
]
