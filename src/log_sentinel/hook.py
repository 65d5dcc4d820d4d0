"""
Attribute hook for log-sentinel.

The hook is what a logging framework calls once per attribute. It keeps the
framework-neutral contract ``hook(groups, attr) -> attr``; see
``log_sentinel.logging.SentinelFilter`` for the stdlib ``logging`` adapter.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

from log_sentinel.config.models import DEFAULT_CONFIG, FailurePolicy, SentinelConfig
from log_sentinel.engine.degradation import FallbackReason, RedactionReport
from log_sentinel.engine.walker import RedactionContext, Walker
from log_sentinel.protocol.types import Attr

logger = logging.getLogger(__name__)

ReportCallback = Callable[[Attr, RedactionReport], None]


class AttributeHook:
    """Redacts one log attribute per call.

    Every attribute value is walked: leaves come back unchanged, while
    groups, records, collections and LogValuer values are resolved and
    redacted. The group path is accepted for the framework's call contract
    but plays no part in redaction, which is per field, not per path.

    The hook never raises. If redaction aborts (for example a RecursionError
    on an extremely deep acyclic value) the configured FailurePolicy decides
    what is logged.
    """

    def __init__(
        self,
        config: SentinelConfig | None = None,
        *,
        on_report: ReportCallback | None = None,
    ) -> None:
        """Initialize the hook.

        Args:
            config: Redaction configuration (DEFAULT_CONFIG when omitted)
            on_report: Called with the attr and report when anything fell back
        """
        self._config = config or DEFAULT_CONFIG
        self._walker = Walker(self._config)
        self._on_report = on_report

    @property
    def config(self) -> SentinelConfig:
        return self._config

    def __call__(self, groups: Sequence[str], attr: Attr) -> Attr:
        value, report = self.redact_value(attr.value, key=attr.key)
        if not report.clean and self._on_report is not None:
            try:
                self._on_report(attr, report)
            except Exception:
                logger.debug("Report callback failed for attribute %r.", attr.key, exc_info=True)
        return Attr(attr.key, value)

    def redact_value(self, value: Any, *, key: str = "") -> tuple[Any, RedactionReport]:
        """Redact *value* with a fresh context and return it with its report."""
        context = RedactionContext()
        if key:
            context.path.append(key)
        try:
            return self._walker.redact(value, context), context.report
        except Exception as e:
            # RecursionError is an Exception subclass
            context.fallback(FallbackReason.ABORTED, value, type(e).__name__)
            logger.debug("Redaction of %r aborted.", key or "<value>", exc_info=True)
            if self._config.failure_policy == FailurePolicy.PLACEHOLDER:
                return self._config.placeholder, context.report
            return value, context.report


_default_hook = AttributeHook()


def replace_attr(groups: Sequence[str], attr: Attr) -> Attr:
    """Redact *attr* with the default configuration."""
    return _default_hook(groups, attr)


def redact(value: Any, config: SentinelConfig | None = None) -> Any:
    """Return a redacted copy of *value*."""
    hook = _default_hook if config is None else AttributeHook(config)
    return hook.redact_value(value)[0]


def redact_with_report(
    value: Any, config: SentinelConfig | None = None
) -> tuple[Any, RedactionReport]:
    """Return a redacted copy of *value* and the report of its fallbacks."""
    hook = _default_hook if config is None else AttributeHook(config)
    return hook.redact_value(value)
