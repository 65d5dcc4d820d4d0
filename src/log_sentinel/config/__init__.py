"""Configuration module for log-sentinel."""

from log_sentinel.config.models import (
    DEFAULT_CONFIG,
    FailurePolicy,
    SentinelConfig,
    StructMode,
)

__all__ = [
    "DEFAULT_CONFIG",
    "FailurePolicy",
    "SentinelConfig",
    "StructMode",
]
