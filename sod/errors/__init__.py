"""Validation Results and Errors

Every schema returns a ValidationResult: ``Success(value)`` or
``Failure(issues)``. Nothing inside the engine raises for bad input;
exceptions appear only at ``parse_or_throw`` and for invalid schema
configuration.

Key components:
- Success / Failure: result monad variants
- Issue: one path-tagged error message with its ErrorCode
- ErrorCode: error code taxonomy
- Builder functions: one constructor per error kind
- ValidationError: aggregate exception raised by ``parse_or_throw``

Usage:
    from sod.errors import Success, Failure

    match schema.parse(payload):
        case Success(value):
            handle(value)
        case Failure(issues):
            for issue in issues:
                log.info("rejected", location=issue.location, reason=issue.message)
"""
from .types import (
    # Core types
    ValidationResult,
    Success,
    Failure,
    Issue,
    IssueCollector,
    ErrorCode,
    PathSegment,
    # Constructors
    success,
    failure,
    from_exception,
    try_result,
    format_path,
)

from .builders import (
    type_name,
    type_mismatch,
    null_not_allowed,
    invalid_value,
    constraint_violation,
    length_mismatch,
    missing_required_field,
    unexpected_keys,
    construction_fault,
    discriminator_missing,
    discriminator_unrecognized,
    union_exhausted,
    transform_fault,
    preprocess_fault,
    read_fault,
    refinement_fault,
    unresolved_reference,
    unexpected_error,
)

from .exceptions import ValidationError, SchemaDefinitionError

__all__ = [
    # Core types
    "ValidationResult",
    "Success",
    "Failure",
    "Issue",
    "IssueCollector",
    "ErrorCode",
    "PathSegment",
    # Constructors
    "success",
    "failure",
    "from_exception",
    "try_result",
    "format_path",
    # Builders
    "type_name",
    "type_mismatch",
    "null_not_allowed",
    "invalid_value",
    "constraint_violation",
    "length_mismatch",
    "missing_required_field",
    "unexpected_keys",
    "construction_fault",
    "discriminator_missing",
    "discriminator_unrecognized",
    "union_exhausted",
    "transform_fault",
    "preprocess_fault",
    "read_fault",
    "refinement_fault",
    "unresolved_reference",
    "unexpected_error",
    # Exceptions
    "ValidationError",
    "SchemaDefinitionError",
]
