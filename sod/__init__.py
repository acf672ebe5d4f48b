"""sod: composable runtime schemas

Schemas turn loosely-typed input (dicts, lists, scalars, None, dataclass or
pydantic instances) into typed values. Failures are returned, not raised,
and every independent problem in one input is reported.

Key components:
- Factory functions: ``string()``, ``integer()``, ``object_({...})``, ``union(...)``...
- ``sod.coerce``: lenient variants of the primitive schemas
- Success / Failure: the result of every ``parse``
- ValidationError: raised by ``parse_or_throw``

Usage:
    import sod

    user = sod.object_({
        "name": sod.string().min(1),
        "age": sod.integer().non_negative(),
        "tags": sod.array(sod.string()).optional(),
    })

    match user.parse({"name": "Ada", "age": "36"}):
        case sod.Success(value):
            print(value)            # {'name': 'Ada', 'age': 36}
        case sod.Failure(issues):
            for issue in issues:
                print(issue.location, issue.message)

    user.parse_or_throw({"name": "", "age": -1})  # raises sod.ValidationError
"""
from sod import coerce
from sod.core.base import MISSING, Schema
from sod.core.canonical import register_adapter, unregister_adapter
from sod.errors import (
    ErrorCode,
    Failure,
    Issue,
    SchemaDefinitionError,
    Success,
    ValidationError,
    ValidationResult,
)
from sod.factory import (
    any_,
    array,
    boolean,
    brand,
    catch,
    date,
    datetime,
    decimal,
    discriminated_union,
    duration,
    enum,
    field,
    float_,
    integer,
    intersection,
    lazy,
    literal,
    map_,
    native_enum,
    never,
    null,
    nullable,
    number,
    object_,
    optional,
    pipeline,
    preprocess,
    record,
    ref,
    set_,
    string,
    time,
    transform,
    tuple_,
    union,
    unknown,
    void,
)
from sod.logging import configure_logging
from sod.schemas import FieldDescriptor, SchemaRegistry, UnknownKeys, default_registry

__version__ = "0.1.0"

__all__ = [
    # Results and errors
    "ValidationResult",
    "Success",
    "Failure",
    "Issue",
    "ErrorCode",
    "ValidationError",
    "SchemaDefinitionError",
    # Base
    "Schema",
    "MISSING",
    "FieldDescriptor",
    "UnknownKeys",
    "SchemaRegistry",
    "default_registry",
    "register_adapter",
    "unregister_adapter",
    # Primitives
    "string",
    "number",
    "integer",
    "float_",
    "decimal",
    "boolean",
    "datetime",
    "date",
    "time",
    "duration",
    # Literals and special
    "literal",
    "enum",
    "native_enum",
    "any_",
    "unknown",
    "never",
    "null",
    "void",
    # Composites
    "array",
    "set_",
    "tuple_",
    "object_",
    "field",
    "record",
    "map_",
    # Combinators
    "union",
    "discriminated_union",
    "intersection",
    "transform",
    "pipeline",
    "lazy",
    "ref",
    "catch",
    "brand",
    "optional",
    "nullable",
    "preprocess",
    # Coercion and logging
    "coerce",
    "configure_logging",
]
