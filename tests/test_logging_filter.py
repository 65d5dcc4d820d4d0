"""Tests for the stdlib logging adapter."""

from __future__ import annotations

import io
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import pytest

from log_sentinel import AttributeHook, SentinelConfig, SentinelFilter, sensitive
from log_sentinel.logging import RESERVED_RECORD_ATTRS


@dataclass
class User:
    name: str = ""
    password: str = sensitive(default="")


class ListHandler(logging.Handler):
    """Collects records for inspection."""

    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def captured() -> Iterator[tuple[logging.Logger, ListHandler]]:
    logger = logging.getLogger("log_sentinel.tests.filter")
    logger.setLevel(logging.INFO)
    logger.propagate = False
    handler = ListHandler()
    handler.addFilter(SentinelFilter())
    logger.addHandler(handler)
    try:
        yield logger, handler
    finally:
        logger.removeHandler(handler)


class TestSentinelFilter:
    """Tests for SentinelFilter."""

    def test_extra_attributes_redacted(self, captured):
        logger, handler = captured
        user = User(name="alice", password="pw")

        logger.info("login", extra={"user": user, "attempt": 3})

        record = handler.records[0]
        assert record.user == User(name="alice", password="")
        assert record.attempt == 3
        assert user.password == "pw"

    def test_positional_args_redacted(self, captured):
        logger, handler = captured

        logger.info("user %s logged in", User(name="bob", password="pw"))

        record = handler.records[0]
        assert record.args == (User(name="bob", password=""),)
        assert "pw" not in record.getMessage()

    def test_mapping_args_redacted(self, captured):
        logger, handler = captured

        logger.info("user %(user)s", {"user": User(name="bob", password="pw")})

        assert handler.records[0].args == {"user": User(name="bob", password="")}

    def test_non_string_message_redacted(self, captured):
        logger, handler = captured

        logger.info(User(name="carol", password="pw"))

        assert handler.records[0].msg == User(name="carol", password="")

    def test_reserved_attributes_untouched(self, captured):
        logger, handler = captured

        logger.info("plain message")

        record = handler.records[0]
        assert record.msg == "plain message"
        assert record.levelname == "INFO"

    def test_args_redaction_can_be_disabled(self):
        config = SentinelConfig(redact_record_args=False, redact_record_msg=False)
        record = logging.makeLogRecord(
            {"msg": User(password="m"), "args": (User(password="a"),)}
        )

        assert SentinelFilter(config).filter(record)

        assert record.msg.password == "m"
        assert record.args[0].password == "a"

    def test_uses_given_hook(self):
        hook = AttributeHook()
        assert SentinelFilter(hook=hook).hook is hook

    def test_formatted_output(self):
        stream = io.StringIO()
        handler = logging.StreamHandler(stream)
        handler.addFilter(SentinelFilter())
        handler.setFormatter(logging.Formatter("%(message)s %(user)s"))
        record = logging.makeLogRecord(
            {"msg": "hello", "user": User(name="dave", password="hunter2")}
        )

        handler.handle(record)

        output = stream.getvalue()
        assert "dave" in output
        assert "hunter2" not in output

    def test_records_logged_inside_log_value_are_redacted(self):
        logger = logging.getLogger("app.audit")
        logger.setLevel(logging.INFO)
        logger.propagate = False
        handler = ListHandler()
        handler.addFilter(SentinelFilter())
        logger.addHandler(handler)

        try:
            logger.info("outer", extra={"thing": Audited(logger)})
        finally:
            logger.removeHandler(handler)

        nested, outer = handler.records
        assert nested.user == User(name="bob", password="")
        assert outer.thing == "audited"

    def test_library_records_pass_untouched_during_redaction(self, monkeypatch):
        inner_filter = SentinelFilter()
        nested_records: list[logging.LogRecord] = []

        def hook_logging_again(groups: Any, attr: Any) -> Any:
            for name in ("log_sentinel.engine.walker", "app"):
                nested = logging.makeLogRecord(
                    {"name": name, "msg": "inner", "user": User(password="inner")}
                )
                inner_filter.filter(nested)
                nested_records.append(nested)
            return attr

        outer_filter = SentinelFilter()
        monkeypatch.setattr(outer_filter, "_hook", _HookStub(hook_logging_again))
        record = logging.makeLogRecord({"msg": "outer", "user": User(password="outer")})

        outer_filter.filter(record)

        own, other = nested_records
        assert own.user.password == "inner"
        assert other.user.password == ""


class Audited:
    """Resolvable whose log_value() logs a record of its own."""

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def log_value(self) -> Any:
        self._logger.info("resolving", extra={"user": User(name="bob", password="pw-leak")})
        return "audited"


class _HookStub:
    def __init__(self, func: Any) -> None:
        self._func = func
        self.config = SentinelConfig()

    def __call__(self, groups: Any, attr: Any) -> Any:
        return self._func(groups, attr)


def test_reserved_attrs_cover_record_fields():
    record = logging.makeLogRecord({})
    assert set(vars(record)) <= RESERVED_RECORD_ATTRS
    assert {"message", "asctime"} <= RESERVED_RECORD_ATTRS
