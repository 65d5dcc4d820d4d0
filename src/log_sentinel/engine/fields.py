"""
Field classification for records.

A record is a dataclass or pydantic model instance. Each field of a record
type is classified once, from its declarative metadata, as SENSITIVE (its
value is replaced by the zero value of the declared type) or RECURSE (its
value is redacted recursively). Plans are cached per (type, marker).
"""

from __future__ import annotations

import collections.abc as abc
import copy
import dataclasses
import functools
import logging
import types
import typing
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Literal, TypeVar, Union

from pydantic import BaseModel

logger = logging.getLogger(__name__)

ZeroFactory = Callable[[], Any]


class Verdict(str, Enum):
    """How the walker treats a field."""

    SENSITIVE = "sensitive"  # Replace with zero value
    RECURSE = "recurse"  # Redact the value recursively


@dataclass(frozen=True)
class FieldSpec:
    """Static description of one record field."""

    name: str
    annotation: Any
    verdict: Verdict
    zero: ZeroFactory

    @property
    def sensitive(self) -> bool:
        return self.verdict == Verdict.SENSITIVE


def _none() -> None:
    return None


# Types whose no-argument constructor is their zero/empty value.
_CONSTRUCTIBLE: tuple[type, ...] = (
    str,
    bytes,
    bytearray,
    bool,
    int,
    float,
    complex,
    Decimal,
    list,
    tuple,
    dict,
    set,
    frozenset,
    deque,
)

# Abstract collection annotations and the concrete empty value they zero to.
_ABSTRACT_ZEROS: dict[Any, ZeroFactory] = {
    abc.Mapping: dict,
    abc.MutableMapping: dict,
    abc.Sequence: tuple,
    abc.MutableSequence: list,
    abc.Set: frozenset,
    abc.MutableSet: set,
    abc.Collection: tuple,
    abc.Iterable: tuple,
}

# Fallback for annotations left as strings.
_NAMED_ZEROS: dict[str, ZeroFactory] = {
    "str": str,
    "bytes": bytes,
    "bytearray": bytearray,
    "bool": bool,
    "int": int,
    "float": float,
    "complex": complex,
    "Decimal": Decimal,
    "list": list,
    "List": list,
    "tuple": tuple,
    "Tuple": tuple,
    "dict": dict,
    "Dict": dict,
    "set": set,
    "Set": set,
    "frozenset": frozenset,
    "FrozenSet": frozenset,
    "deque": deque,
    "Deque": deque,
    "Mapping": dict,
    "MutableMapping": dict,
    "Sequence": tuple,
    "MutableSequence": list,
}


def zero_factory(annotation: Any) -> ZeroFactory:
    """Return a callable producing the zero value of a declared type.

    Optional and unknown types zero to None; builtin scalars and containers
    to their empty instance. Each call of the factory returns a fresh
    object, so mutable empties are never shared between redacted copies.
    """
    if isinstance(annotation, str):
        return _zero_from_string(annotation)

    annotation = _unwrap(annotation)
    if annotation is Any or annotation is None or annotation is type(None):
        return _none
    if isinstance(annotation, TypeVar):
        return _none

    origin = typing.get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = typing.get_args(annotation)
        if type(None) in args:
            return _none
        return zero_factory(args[0])
    if origin is Literal:
        return _none

    target = origin if origin is not None else annotation
    if target in _ABSTRACT_ZEROS:
        return _ABSTRACT_ZEROS[target]
    if not isinstance(target, type) or issubclass(target, Enum):
        return _none
    if issubclass(target, _CONSTRUCTIBLE):
        try:
            target()
        except Exception:
            return _none
        return target
    return _none


def zero_value(annotation: Any) -> Any:
    """Return the zero value of a declared type."""
    return zero_factory(annotation)()


def _unwrap(annotation: Any) -> Any:
    while True:
        if typing.get_origin(annotation) is Annotated:
            annotation = typing.get_args(annotation)[0]
        elif hasattr(annotation, "__supertype__"):  # typing.NewType
            annotation = annotation.__supertype__
        else:
            return annotation


def _zero_from_string(text: str) -> ZeroFactory:
    text = text.replace(" ", "").strip("'\"")
    if text.startswith("Optional[") or "None" in text.split("|"):
        return _none
    base = text.split("[", 1)[0].rsplit(".", 1)[-1]
    return _NAMED_ZEROS.get(base, _none)


def is_marked(marker_value: Any) -> bool:
    """Check if a metadata marker value marks a field as sensitive."""
    return marker_value is not None and marker_value is not False and marker_value != ""


def _verdict(marker_value: Any) -> Verdict:
    return Verdict.SENSITIVE if is_marked(marker_value) else Verdict.RECURSE


@functools.lru_cache(maxsize=1024)
def record_fields(cls: type, marker: str) -> tuple[FieldSpec, ...]:
    """Return the field plan for a dataclass or pydantic model type."""
    if dataclasses.is_dataclass(cls):
        return _dataclass_fields(cls, marker)
    if issubclass(cls, BaseModel):
        return _model_fields(cls, marker)
    return ()


def _dataclass_fields(cls: type, marker: str) -> tuple[FieldSpec, ...]:
    try:
        hints = typing.get_type_hints(cls, include_extras=True)
    except Exception:
        logger.debug("Could not resolve annotations of %s; using raw ones.", cls.__qualname__)
        hints = {}

    specs = []
    for f in dataclasses.fields(cls):
        annotation = hints.get(f.name, f.type)
        verdict = _verdict(f.metadata.get(marker))
        zero = zero_factory(annotation) if verdict == Verdict.SENSITIVE else _none
        specs.append(FieldSpec(name=f.name, annotation=annotation, verdict=verdict, zero=zero))
    return tuple(specs)


def _model_fields(cls: type[BaseModel], marker: str) -> tuple[FieldSpec, ...]:
    specs = []
    for name, info in cls.model_fields.items():
        extra = info.json_schema_extra
        marker_value = extra.get(marker) if isinstance(extra, dict) else None
        verdict = _verdict(marker_value)
        zero = zero_factory(info.annotation) if verdict == Verdict.SENSITIVE else _none
        specs.append(FieldSpec(name=name, annotation=info.annotation, verdict=verdict, zero=zero))
    return tuple(specs)


def rebuild_record(original: Any, updates: dict[str, Any]) -> Any:
    """Return a shallow copy of a record with *updates* applied.

    Dataclasses are copied with ``copy.copy`` and updated through
    ``object.__setattr__`` (frozen and slotted classes included); pydantic
    models through ``model_copy``, which skips validation.
    """
    if isinstance(original, BaseModel):
        return original.model_copy(update=updates)

    clone = copy.copy(original)
    for name, value in updates.items():
        object.__setattr__(clone, name, value)
    return clone
