"""
Redaction configuration for log-sentinel.

Configuration is passed programmatically to the attribute hook or the logging
filter; there is no environment or file based loading. Which fields are
sensitive is never configured here: that is read from each type's own field
metadata.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from log_sentinel.protocol.types import SENTINEL_TAG


class StructMode(str, Enum):
    """How records (dataclasses, pydantic models) are returned."""

    PRESERVE = "preserve"  # Copy of the same class, same reported kind
    FLATTEN = "flatten"  # GroupValue of field attrs


class FailurePolicy(str, Enum):
    """What the hook returns when redaction of an attribute aborts."""

    PASSTHROUGH = "passthrough"  # Original value, unredacted
    PLACEHOLDER = "placeholder"  # SentinelConfig.placeholder


class SentinelConfig(BaseModel):
    """Configuration for the redaction engine and its adapters."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    marker: str = Field(
        default=SENTINEL_TAG,
        min_length=1,
        description="Field metadata key whose non-empty value marks a field as sensitive",
    )
    struct_mode: StructMode = Field(
        default=StructMode.PRESERVE,
        description="Return records as copies of their own class or flattened into groups",
    )
    reuse_shared_copies: bool = Field(
        default=False,
        description=(
            "Return the finished redacted copy for repeated identities instead of "
            "the original. True cycles always pass the original through."
        ),
    )
    max_resolve_depth: int = Field(
        default=100,
        ge=1,
        le=10_000,
        description="Maximum chained log_value() resolutions per occurrence",
    )
    failure_policy: FailurePolicy = Field(
        default=FailurePolicy.PASSTHROUGH,
        description="Value returned by the hook when redaction aborts",
    )
    placeholder: str = Field(
        default="[REDACTION FAILED]",
        description="Replacement value under FailurePolicy.PLACEHOLDER",
    )
    redact_record_args: bool = Field(
        default=True,
        description="Let SentinelFilter redact LogRecord.args",
    )
    redact_record_msg: bool = Field(
        default=True,
        description="Let SentinelFilter redact a non-string LogRecord.msg",
    )


DEFAULT_CONFIG = SentinelConfig()
