"""
Secret-safe logging for log-sentinel.

Applies the attribute hook to stdlib ``logging`` records so that values
passed through ``extra=``, as format arguments, or as the message itself are
logged with their sensitive fields zeroed.

Example:
    >>> handler = logging.StreamHandler()
    >>> handler.addFilter(SentinelFilter())
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import Any

from log_sentinel.config.models import SentinelConfig
from log_sentinel.hook import AttributeHook
from log_sentinel.protocol.types import Attr

# Attributes every LogRecord carries; anything else came from ``extra=``.
RESERVED_RECORD_ATTRS: frozenset[str] = frozenset(vars(logging.makeLogRecord({}))) | {
    "message",
    "asctime",
    "taskName",
}

_ARGS_GROUP = ("args",)
_LIBRARY_LOGGER = "log_sentinel"

_state = threading.local()


class SentinelFilter(logging.Filter):
    """Logging filter that redacts record attributes in place.

    Always lets the record through. The library's own records (its debug
    logging) emitted on the same thread while a redaction is running are
    passed on untouched. Every other record is redacted, including records
    that user code emits from inside log_value().
    """

    def __init__(
        self,
        config: SentinelConfig | None = None,
        *,
        hook: AttributeHook | None = None,
    ) -> None:
        super().__init__()
        self._hook = hook or AttributeHook(config)

    @property
    def hook(self) -> AttributeHook:
        return self._hook

    def filter(self, record: logging.LogRecord) -> bool:
        active = getattr(_state, "active", False)
        if active and _is_own_record(record):
            return True
        _state.active = True
        try:
            self._redact_record(record)
        finally:
            _state.active = active
        return True

    def _redact_record(self, record: logging.LogRecord) -> None:
        config = self._hook.config

        for key, value in list(vars(record).items()):
            if key in RESERVED_RECORD_ATTRS or key.startswith("_"):
                continue
            setattr(record, key, self._hook((), Attr(key, value)).value)

        if config.redact_record_args and record.args:
            record.args = self._redact_args(record.args)

        if config.redact_record_msg and not isinstance(record.msg, str):
            record.msg = self._hook((), Attr("msg", record.msg)).value

    def _redact_args(self, args: Any) -> Any:
        if isinstance(args, Mapping):
            return {
                key: self._hook(_ARGS_GROUP, Attr(str(key), value)).value
                for key, value in args.items()
            }
        return tuple(
            self._hook(_ARGS_GROUP, Attr(str(index), value)).value
            for index, value in enumerate(args)
        )


def _is_own_record(record: logging.LogRecord) -> bool:
    name = record.name or ""
    return name == _LIBRARY_LOGGER or name.startswith(_LIBRARY_LOGGER + ".")


__all__ = ["RESERVED_RECORD_ATTRS", "SentinelFilter"]
