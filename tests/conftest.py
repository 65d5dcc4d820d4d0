"""Pytest configuration and shared fixtures for log-sentinel tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

from log_sentinel.engine import RedactionContext, Walker
from log_sentinel.hook import AttributeHook
from log_sentinel.protocol.types import Attr, GroupValue, sensitive


@dataclass
class Nested:
    """Record with one sensitive and one public field."""

    Secret: str = field(default="", metadata={"sentinel": "true"})
    Data: str = ""


@dataclass
class Custom:
    """LogValuer that renders an enum-like number as a group."""

    Enum: int = 0
    calls: int = field(default=0, compare=False, repr=False)

    def log_value(self) -> Any:
        self.calls += 1
        name = {1: "One", 2: "Two"}.get(self.Enum, "Unknown")
        return GroupValue.of(Attr("enum", name))


@dataclass
class Example:
    """Record mixing leaves, a nested record and a sensitive list."""

    ID: int = 0
    Name: str = ""
    Nested: Nested | None = None
    Friends: list[str] | None = sensitive(default=None)


@dataclass
class Node:
    """Self-referential record for cycle tests."""

    name: str = ""
    token: str = sensitive(default="")
    next: Node | None = None


@pytest.fixture
def example_data() -> Example:
    """The canonical example record."""
    return Example(
        ID=123,
        Name="Alice",
        Nested=Nested(Secret="TopSecret", Data="PublicData"),
        Friends=["Bob", "Charlie"],
    )


@pytest.fixture
def custom_value() -> Custom:
    """A LogValuer resolving to {enum: "Two"}."""
    return Custom(Enum=2)


@pytest.fixture
def cyclic_pair() -> Node:
    """Two nodes pointing at each other."""
    first = Node(name="a", token="token-a")
    second = Node(name="b", token="token-b", next=first)
    first.next = second
    return first


@pytest.fixture
def walker() -> Walker:
    """A walker with the default configuration."""
    return Walker()


@pytest.fixture
def context() -> RedactionContext:
    """A fresh per-call redaction context."""
    return RedactionContext()


@pytest.fixture
def hook() -> AttributeHook:
    """An attribute hook with the default configuration."""
    return AttributeHook()
