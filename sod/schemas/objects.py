"""Object schema.

An object schema is an ordered tuple of FieldDescriptors. Each descriptor
names an output field, the schema that parses it, whether it is required,
and optionally a different input key.

Field access is explicit on both sides:
- input: any Mapping, an association list of pairs, a dataclass or pydantic
  instance (through the canonical input adapters), or a per-schema ``reader``
- output: a dict in descriptor order, or ``model(**values)`` when a model
  constructor is supplied

Reshaping methods (partial, pick, omit, extend...) return new schemas and
never touch the descriptors of the schema they were called on.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from functools import cached_property
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping

from sod.core.base import MISSING, Schema
from sod.core.canonical import CanonicalValue, Reader, as_map, type_label
from sod.errors import (
    IssueCollector,
    SchemaDefinitionError,
    Success,
    ValidationResult,
    construction_fault,
    missing_required_field,
    read_fault,
    type_mismatch,
    unexpected_keys,
)


class UnknownKeys(str, Enum):
    """What to do with input keys no descriptor claims."""
    STRIP = "strip"
    STRICT = "strict"
    PASSTHROUGH = "passthrough"


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """One declared field.

    ``required`` defaults to ``not schema.is_optional``. ``key`` is the input
    key when it differs from the output ``name``.
    """
    name: str
    schema: Schema[Any]
    required: bool | None = None
    key: str | None = None

    def __post_init__(self) -> None:
        if self.required is None:
            object.__setattr__(self, "required", not self.schema.is_optional)

    @property
    def input_key(self) -> str:
        return self.key if self.key is not None else self.name

    def with_schema(self, schema: Schema[Any], required: bool) -> FieldDescriptor:
        return FieldDescriptor(self.name, schema, required, self.key)


ShapeInput = Mapping[str, "Schema[Any] | FieldDescriptor"] | Iterable[FieldDescriptor]


def to_descriptors(shape: ShapeInput) -> tuple[FieldDescriptor, ...]:
    """Normalize a ``{name: schema}`` mapping or descriptor iterable."""
    if isinstance(shape, Mapping):
        descriptors = []
        for name, entry in shape.items():
            if isinstance(entry, FieldDescriptor):
                descriptors.append(entry if entry.name == name else replace(entry, name=name))
            elif isinstance(entry, Schema):
                descriptors.append(FieldDescriptor(name, entry))
            else:
                raise SchemaDefinitionError(f"Field '{name}' must be a schema, got {type(entry).__name__}")
        return tuple(descriptors)
    return tuple(shape)


def _model_name(model: Callable[..., Any]) -> str:
    return getattr(model, "__name__", type(model).__name__)


@dataclass(frozen=True, eq=False)
class ObjectSchema(Schema[Any]):
    descriptors: tuple[FieldDescriptor, ...] = ()
    unknown_keys: UnknownKeys = UnknownKeys.STRIP
    model: Callable[..., Any] | None = None
    reader: Reader | None = None

    kind = "object"
    expected = "an object"

    def __post_init__(self) -> None:
        seen_names: set[str] = set()
        seen_keys: set[str] = set()
        for descriptor in self.descriptors:
            if descriptor.name in seen_names:
                raise SchemaDefinitionError(f"Duplicate field name '{descriptor.name}'")
            if descriptor.input_key in seen_keys:
                raise SchemaDefinitionError(f"Duplicate input key '{descriptor.input_key}'")
            seen_names.add(descriptor.name)
            seen_keys.add(descriptor.input_key)

    @cached_property
    def _known_keys(self) -> frozenset[str]:
        return frozenset(d.input_key for d in self.descriptors)

    # ========================================================================
    # Parsing
    # ========================================================================

    def _parse(self, node: CanonicalValue) -> ValidationResult[Any]:
        try:
            data = as_map(node, self.reader)
        except Exception as e:
            return read_fault(e)
        if data is None:
            return type_mismatch(self.expected, type_label(node))

        collector = IssueCollector()
        if self.unknown_keys is UnknownKeys.STRICT:
            unexpected = [k for k in data.keys() if k not in self._known_keys]
            if unexpected:
                collector.extend(unexpected_keys(unexpected).issues)

        values: dict[str, Any] = {}
        for descriptor in self.descriptors:
            raw = data.get(descriptor.input_key, MISSING)
            # Null for a schema that cannot take null counts as absent.
            if raw is None and not descriptor.schema.accepts_null:
                raw = MISSING

            if raw is MISSING:
                if descriptor.schema.has_default:
                    values[descriptor.name] = descriptor.schema.resolve_default()
                elif descriptor.required:
                    collector.extend(missing_required_field(descriptor.name).issues)
                continue

            result = descriptor.schema.parse(raw)
            if result.is_ok():
                values[descriptor.name] = result.unwrap()
            else:
                collector.nest(result, descriptor.name, f"Field '{descriptor.name}'")

        if collector:
            return collector.to_failure()

        extras: dict[str, Any] = {}
        if self.unknown_keys is UnknownKeys.PASSTHROUGH:
            extras = {
                k: data.get(k) for k in data.keys()
                if k not in self._known_keys and k not in values
            }
        return self._build(values, extras)

    def _build(self, values: dict[str, Any], extras: dict[str, Any]) -> ValidationResult[Any]:
        if self.model is None:
            return Success({**values, **extras})
        try:
            return Success(self.model(**values, **extras))
        except Exception as e:
            return construction_fault(_model_name(self.model), e)

    # ========================================================================
    # Introspection
    # ========================================================================

    @property
    def shape(self) -> Mapping[str, Schema[Any]]:
        return MappingProxyType({d.name: d.schema for d in self.descriptors})

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(d.name for d in self.descriptors)

    def descriptor(self, name: str) -> FieldDescriptor:
        for d in self.descriptors:
            if d.name == name:
                return d
        raise SchemaDefinitionError(f"Unknown field '{name}'")

    # ========================================================================
    # Unknown-key policy
    # ========================================================================

    def strict(self) -> ObjectSchema:
        return replace(self, unknown_keys=UnknownKeys.STRICT)

    def strip(self) -> ObjectSchema:
        return replace(self, unknown_keys=UnknownKeys.STRIP)

    def passthrough(self) -> ObjectSchema:
        return replace(self, unknown_keys=UnknownKeys.PASSTHROUGH)

    # ========================================================================
    # Reshaping
    # ========================================================================

    def _selected(self, names: tuple[str, ...]) -> set[str]:
        if not names:
            return set(self.keys)
        unknown = [n for n in names if n not in self.keys]
        if unknown:
            raise SchemaDefinitionError(f"Unknown fields: {', '.join(unknown)}")
        return set(names)

    def partial(self, *names: str) -> ObjectSchema:
        """Make the named fields (all fields when none are named) optional."""
        selected = self._selected(names)
        return replace(self, descriptors=tuple(
            d.with_schema(d.schema.optional(), False) if d.name in selected else d
            for d in self.descriptors
        ))

    def required(self, *names: str) -> ObjectSchema:
        """Make the named fields (all fields when none are named) required."""
        selected = self._selected(names)
        return replace(self, descriptors=tuple(
            d.with_schema(replace(d.schema, allow_missing=False), True) if d.name in selected else d
            for d in self.descriptors
        ))

    def pick(self, *names: str) -> ObjectSchema:
        selected = self._selected(names)
        return replace(self, descriptors=tuple(d for d in self.descriptors if d.name in selected))

    def omit(self, *names: str) -> ObjectSchema:
        dropped = self._selected(names) if names else set()
        return replace(self, descriptors=tuple(d for d in self.descriptors if d.name not in dropped))

    def extend(self, shape: ShapeInput) -> ObjectSchema:
        """Add fields. A field with an existing name replaces it in place."""
        incoming = {d.name: d for d in to_descriptors(shape)}
        merged = [incoming.pop(d.name, d) for d in self.descriptors]
        merged.extend(incoming.values())
        return replace(self, descriptors=tuple(merged))

    def merge(self, other: ObjectSchema) -> ObjectSchema:
        """Extend with another object's fields, adopting its unknown-key policy."""
        return replace(self.extend(other.descriptors), unknown_keys=other.unknown_keys)

    def field(self, name: str, schema: Schema[Any], *, key: str | None = None) -> ObjectSchema:
        return self.extend((FieldDescriptor(name, schema, key=key),))

    def into(self, model: Callable[..., Any]) -> ObjectSchema:
        """Build outputs with ``model(**values)`` instead of a dict."""
        return replace(self, model=model)

    def read_with(self, reader: Reader) -> ObjectSchema:
        """Consult ``reader`` first when turning input into a mapping."""
        return replace(self, reader=reader)
