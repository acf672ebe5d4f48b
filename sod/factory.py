"""Schema factory: one function per schema kind.

Names that would shadow a builtin carry a trailing underscore
(``float_``, ``set_``, ``tuple_``, ``object_``, ``map_``, ``any_``).
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Iterable, Mapping

from sod.core.base import Schema
from sod.core.canonical import Reader
from sod.schemas.booleans import BooleanSchema
from sod.schemas.collections import ArraySchema, SetSchema, TupleSchema
from sod.schemas.literals import EnumSchema, LiteralSchema, NativeEnumSchema
from sod.schemas.mappings import MapSchema, RecordSchema
from sod.schemas.numbers import DecimalSchema, FloatSchema, IntegerSchema
from sod.schemas.objects import FieldDescriptor, ObjectSchema, ShapeInput, UnknownKeys, to_descriptors
from sod.schemas.references import LazySchema, RefSchema, SchemaRegistry, default_registry
from sod.schemas.special import AnySchema, NeverSchema, NullSchema, UnknownSchema, VoidSchema
from sod.schemas.strings import StringSchema
from sod.schemas.temporal import DateSchema, DateTimeSchema, DurationSchema, TimeSchema
from sod.schemas.unions import DiscriminatedUnionSchema, IntersectionSchema, UnionSchema, to_branches
from sod.schemas.wrappers import BrandSchema, CatchSchema, PipelineSchema, TransformSchema


# =============================================================================
# Primitives
# =============================================================================

def string() -> StringSchema:
    return StringSchema()


def integer() -> IntegerSchema:
    return IntegerSchema()


def number() -> IntegerSchema:
    """Integer schema. Use ``float_()`` or ``decimal()`` for fractional numbers."""
    return IntegerSchema()


def float_() -> FloatSchema:
    return FloatSchema()


def decimal() -> DecimalSchema:
    return DecimalSchema()


def boolean() -> BooleanSchema:
    return BooleanSchema()


def datetime() -> DateTimeSchema:
    return DateTimeSchema()


def date() -> DateSchema:
    return DateSchema()


def time() -> TimeSchema:
    return TimeSchema()


def duration() -> DurationSchema:
    return DurationSchema()


# =============================================================================
# Literals and enumerations
# =============================================================================

def literal(value: Any) -> LiteralSchema:
    return LiteralSchema(value)


def enum(enum_class: type[Enum], *members: Enum) -> EnumSchema:
    return EnumSchema(enum_class, tuple(members) or None)


def native_enum(*values: str) -> NativeEnumSchema:
    return NativeEnumSchema(tuple(values))


# =============================================================================
# Special
# =============================================================================

def any_() -> AnySchema:
    return AnySchema()


def unknown() -> UnknownSchema:
    return UnknownSchema()


def never(message: str = "This value should never be provided") -> NeverSchema:
    return NeverSchema(message)


def null() -> NullSchema:
    return NullSchema()


def void() -> VoidSchema:
    return VoidSchema()


# =============================================================================
# Composites
# =============================================================================

def array(element: Schema[Any]) -> ArraySchema:
    return ArraySchema(element)


def set_(element: Schema[Any]) -> SetSchema:
    return SetSchema(element)


def tuple_(*items: Schema[Any]) -> TupleSchema:
    return TupleSchema(tuple(items))


def field(
    name: str,
    schema: Schema[Any],
    *,
    required: bool | None = None,
    key: str | None = None,
) -> FieldDescriptor:
    return FieldDescriptor(name, schema, required, key)


def object_(
    shape: ShapeInput = (),
    *,
    model: Callable[..., Any] | None = None,
    reader: Reader | None = None,
    unknown_keys: UnknownKeys | str = UnknownKeys.STRIP,
) -> ObjectSchema:
    """Object schema from ``{name: schema}`` or an iterable of ``field(...)`` descriptors.

    Args:
        shape: Declared fields, in output order
        model: Output constructor called as ``model(**values)``; a dict when omitted
        reader: Turns an input object into a mapping before the default adapters
        unknown_keys: "strip" (default), "strict" or "passthrough"
    """
    return ObjectSchema(
        to_descriptors(shape),
        UnknownKeys(unknown_keys),
        model,
        reader,
    )


def record(value: Schema[Any], key: Schema[Any] | None = None) -> RecordSchema:
    return RecordSchema(value, key)


def map_(key: Schema[Any], value: Schema[Any]) -> MapSchema:
    return MapSchema(key, value)


# =============================================================================
# Combinators
# =============================================================================

def union(*options: Schema[Any]) -> UnionSchema:
    return UnionSchema(tuple(options))


def discriminated_union(
    discriminator: str,
    options: Mapping[Any, Schema[Any]] | Iterable[tuple[Any, Schema[Any]]] = (),
) -> DiscriminatedUnionSchema:
    return DiscriminatedUnionSchema(discriminator, to_branches(options))


def intersection(*schemas: Schema[Any]) -> IntersectionSchema:
    return IntersectionSchema(tuple(schemas))


def transform(schema: Schema[Any], fn: Callable[[Any], Any]) -> TransformSchema:
    return TransformSchema(schema, fn)


def pipeline(*stages: Schema[Any]) -> PipelineSchema:
    return PipelineSchema(tuple(stages))


def lazy(factory: Callable[[], Schema[Any]]) -> LazySchema:
    return LazySchema(factory)


def ref(name: str, registry: SchemaRegistry | None = None) -> RefSchema:
    return RefSchema(registry if registry is not None else default_registry, name)


def catch(schema: Schema[Any], fallback: Any) -> CatchSchema:
    return CatchSchema(schema, fallback)


def brand(schema: Schema[Any], name: str) -> BrandSchema:
    return BrandSchema(schema, name)


# =============================================================================
# Modifiers as functions
# =============================================================================

def optional(schema: Schema[Any]) -> Schema[Any]:
    return schema.optional()


def nullable(schema: Schema[Any]) -> Schema[Any]:
    return schema.nullable()


def preprocess(fn: Callable[[Any], Any], schema: Schema[Any]) -> Schema[Any]:
    return schema.preprocess(fn)
