"""Concrete schema classes. Build them through ``sod.factory`` rather than directly."""
from .booleans import BooleanSchema
from .collections import ArraySchema, SetSchema, TupleSchema
from .literals import EnumSchema, LiteralSchema, NativeEnumSchema
from .mappings import MapSchema, RecordSchema
from .numbers import DecimalSchema, FloatSchema, IntegerSchema
from .objects import FieldDescriptor, ObjectSchema, UnknownKeys
from .references import LazySchema, RefSchema, SchemaRegistry, default_registry
from .special import AnySchema, NeverSchema, NullSchema, UnknownSchema, VoidSchema
from .strings import StringSchema
from .temporal import DateSchema, DateTimeSchema, DurationSchema, TimeSchema
from .unions import DiscriminatedUnionSchema, IntersectionSchema, UnionSchema
from .wrappers import BrandSchema, CatchSchema, PipelineSchema, TransformSchema

__all__ = [
    "AnySchema",
    "ArraySchema",
    "BooleanSchema",
    "BrandSchema",
    "CatchSchema",
    "DateSchema",
    "DateTimeSchema",
    "DecimalSchema",
    "DiscriminatedUnionSchema",
    "DurationSchema",
    "EnumSchema",
    "FieldDescriptor",
    "FloatSchema",
    "IntegerSchema",
    "IntersectionSchema",
    "LazySchema",
    "LiteralSchema",
    "MapSchema",
    "NativeEnumSchema",
    "NeverSchema",
    "NullSchema",
    "ObjectSchema",
    "PipelineSchema",
    "RecordSchema",
    "RefSchema",
    "SchemaRegistry",
    "SetSchema",
    "StringSchema",
    "TimeSchema",
    "TransformSchema",
    "TupleSchema",
    "UnionSchema",
    "UnknownKeys",
    "UnknownSchema",
    "VoidSchema",
    "default_registry",
]
