"""Deferred schemas for recursive shapes.

Two ways to refer to a schema that does not exist yet:

    lazy(factory)       the factory runs once, on first parse, and is cached
    registry.ref(name)  looked up in a SchemaRegistry on every parse

Usage:
    registry = SchemaRegistry()
    registry.register("Category", object_({
        "name": string(),
        "children": array(registry.ref("Category")).optional(),
    }))
"""
from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

from sod.core.base import Schema
from sod.core.canonical import CanonicalValue
from sod.errors import (
    ErrorCode,
    SchemaDefinitionError,
    ValidationResult,
    failure,
    unresolved_reference,
)
from sod.logging import registry_logger, schema_logger

log = schema_logger()
registry_log = registry_logger()


@dataclass(frozen=True, eq=False)
class LazySchema(Schema[Any]):
    factory: Callable[[], Schema[Any]] | None = None
    _cell: dict[str, Schema[Any]] = field(default_factory=dict, init=False, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False, repr=False)

    kind = "lazy"
    intercepts_null = False

    @property
    def is_resolved(self) -> bool:
        return "schema" in self._cell

    def resolve(self) -> Schema[Any]:
        """The factory's schema, built on first call."""
        schema = self._cell.get("schema")
        if schema is not None:
            return schema
        with self._lock:
            schema = self._cell.get("schema")
            if schema is None:
                schema = self.factory()
                self._cell["schema"] = schema
                log.debug("lazy_schema_resolved", schema=schema.kind)
        return schema

    def _parse(self, node: CanonicalValue) -> ValidationResult[Any]:
        try:
            schema = self.resolve()
        except Exception as e:
            return failure(f"Lazy schema factory failed: {e}", ErrorCode.E2013_UNRESOLVED_REFERENCE)
        return schema.parse(node.raw)


@dataclass(frozen=True, eq=False)
class RefSchema(Schema[Any]):
    registry: SchemaRegistry | None = None
    name: str = ""

    kind = "ref"
    intercepts_null = False

    def _parse(self, node: CanonicalValue) -> ValidationResult[Any]:
        schema = self.registry.resolve(self.name)
        if schema is None:
            return unresolved_reference(self.name)
        return schema.parse(node.raw)


class SchemaRegistry:
    """Named schemas that ``ref`` nodes resolve at parse time."""

    def __init__(self) -> None:
        self._schemas: dict[str, Schema[Any]] = {}
        self._lock = threading.Lock()

    def register(self, name: str, schema: Schema[Any]) -> Schema[Any]:
        """Add ``schema`` under ``name``. Names are registered once."""
        with self._lock:
            if name in self._schemas:
                raise SchemaDefinitionError(f"Schema '{name}' is already registered")
            self._schemas[name] = schema
        registry_log.debug("schema_registered", name=name, schema=schema.kind)
        return schema

    def resolve(self, name: str) -> Schema[Any] | None:
        return self._schemas.get(name)

    def ref(self, name: str) -> RefSchema:
        return RefSchema(self, name)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._schemas)

    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __len__(self) -> int:
        return len(self._schemas)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._schemas))


default_registry = SchemaRegistry()
