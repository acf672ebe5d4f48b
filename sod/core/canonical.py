"""Canonical Input Values

Every schema reasons about its input through one tagged variant:

    MapValue       string-keyed entries (dicts, association lists, adapted objects)
    SequenceValue  ordered items (lists, tuples, sets, generators are not accepted)
    ScalarValue    any other primitive (str, bytes, numbers, dates, enums...)
    NullValue      None

Normalization is shallow: a schema canonicalizes its own input and hands raw
child values to child schemas, which canonicalize them in turn.

Typed objects reach the Map variant through input adapters. Adapters for
dataclass instances and pydantic models are registered by default; hosts can
add more with ``register_adapter``.
"""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass
from typing import Any, Callable, Union, final

from pydantic import BaseModel

Reader = Callable[[Any], "Mapping[str, Any] | None"]


@final
@dataclass(frozen=True, slots=True)
class MapValue:
    entries: Mapping[Any, Any]
    raw: Any = None

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def get(self, key: Any, default: Any = None) -> Any:
        return self.entries.get(key, default)

    def keys(self) -> list[Any]:
        return list(self.entries.keys())


@final
@dataclass(frozen=True, slots=True)
class SequenceValue:
    items: tuple[Any, ...]
    raw: Any = None

    def __len__(self) -> int:
        return len(self.items)


@final
@dataclass(frozen=True, slots=True)
class ScalarValue:
    value: Any

    @property
    def raw(self) -> Any:
        return self.value


@final
@dataclass(frozen=True, slots=True)
class NullValue:
    @property
    def raw(self) -> None:
        return None


CanonicalValue = Union[MapValue, SequenceValue, ScalarValue, NullValue]

NULL = NullValue()

_SCALAR_SEQUENCES = (str, bytes, bytearray, memoryview)


# ============================================================================
# Input adapters (typed object -> mapping)
# ============================================================================

def _read_dataclass(value: Any) -> Mapping[str, Any] | None:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    return None


def _read_pydantic(value: Any) -> Mapping[str, Any] | None:
    if isinstance(value, BaseModel):
        data = {name: getattr(value, name) for name in type(value).model_fields}
        if value.model_extra:
            data.update(value.model_extra)
        return data
    return None


_ADAPTERS: list[Reader] = [_read_pydantic, _read_dataclass]


def register_adapter(reader: Reader) -> Reader:
    """Register a reader that turns a typed object into a mapping.

    Readers return ``None`` for values they do not handle. Usable as a decorator.
    """
    _ADAPTERS.append(reader)
    return reader


def unregister_adapter(reader: Reader) -> None:
    if reader in _ADAPTERS:
        _ADAPTERS.remove(reader)


def _adapt(value: Any) -> Mapping[str, Any] | None:
    for reader in _ADAPTERS:
        data = reader(value)
        if data is not None:
            return data
    return None


# ============================================================================
# Normalization
# ============================================================================

def canonicalize(value: Any) -> CanonicalValue:
    """Classify ``value`` into its canonical variant."""
    match value:
        case None:
            return NULL
        case MapValue() | SequenceValue() | ScalarValue() | NullValue():
            return value
        case Mapping():
            return MapValue(value, value)
        case str() | bytes() | bytearray() | memoryview():
            return ScalarValue(value)
        case Sequence() | Set():
            return SequenceValue(tuple(value), value)

    data = _adapt(value)
    if data is not None:
        return MapValue(data, value)
    return ScalarValue(value)


def _pairs_to_map(items: tuple[Any, ...]) -> dict[Any, Any] | None:
    """Association list ``[(k, v), ...]`` to a dict, or None if not pairs."""
    if not items:
        return None
    entries: dict[Any, Any] = {}
    for item in items:
        if isinstance(item, _SCALAR_SEQUENCES) or not isinstance(item, Sequence) or len(item) != 2:
            return None
        key, val = item
        entries[key] = val
    return entries


def as_map(node: CanonicalValue, reader: Reader | None = None) -> MapValue | None:
    """Interpret ``node`` as a Map, or return None if it has no map reading.

    A caller-supplied ``reader`` is consulted first. Sequences of key/value
    pairs are accepted as association lists.
    """
    if reader is not None and not isinstance(node, NullValue):
        data = reader(node.raw)
        if data is not None:
            return MapValue(data, node.raw)
    match node:
        case MapValue():
            return node
        case SequenceValue(items=items):
            entries = _pairs_to_map(items)
            if entries is not None:
                return MapValue(entries, node.raw)
    return None


def type_label(node: CanonicalValue) -> str:
    """Name of the source type for "Expected X, got Y" messages."""
    if isinstance(node, NullValue):
        return "null"
    return type(node.raw).__name__
