"""Validation Failure Builders

Ergonomic constructors for each error kind a schema can report.
Each builder returns a single-issue Failure with the appropriate code.
"""
from typing import Any, Iterable

from .types import ErrorCode, Failure, failure


# =============================================================================
# Shape / Type Errors
# =============================================================================

def type_name(value: Any) -> str:
    """Short type name used in messages (``int``, ``dict``, ``MyModel``)."""
    return type(value).__name__


def type_mismatch(expected: str, actual: str) -> Failure:
    """``expected`` is an article phrase such as "a string" or "an array"."""
    return failure(f"Expected {expected}, got {actual}", ErrorCode.E2001_TYPE_MISMATCH)


def null_not_allowed(expected: str) -> Failure:
    return failure(f"Expected {expected}, got null", ErrorCode.E2002_NULL_NOT_ALLOWED)


def invalid_value(message: str) -> Failure:
    """Value of the right kind that fails to convert (e.g. "12.5" for an integer)."""
    return failure(message, ErrorCode.E2001_TYPE_MISMATCH)


# =============================================================================
# Constraint Errors
# =============================================================================

def constraint_violation(message: str) -> Failure:
    return failure(message, ErrorCode.E2005_CONSTRAINT_VIOLATION)


def length_mismatch(message: str) -> Failure:
    return failure(message, ErrorCode.E2006_LENGTH_MISMATCH)


# =============================================================================
# Object Errors
# =============================================================================

def missing_required_field(name: str) -> Failure:
    return failure(
        f"Missing required field '{name}'",
        ErrorCode.E2003_MISSING_REQUIRED_FIELD,
        (name,),
    )


def unexpected_keys(keys: Iterable[str]) -> Failure:
    return failure(
        f"Unexpected keys: {', '.join(str(k) for k in keys)}",
        ErrorCode.E2004_UNEXPECTED_KEY,
    )


def construction_fault(target: str, exc: Exception) -> Failure:
    return failure(
        f"Failed to construct {target}: {exc}",
        ErrorCode.E2012_CONSTRUCTION_FAULT,
    )


# =============================================================================
# Union Errors
# =============================================================================

def discriminator_missing(key: str) -> Failure:
    return failure(
        f"Missing discriminator key '{key}'",
        ErrorCode.E2007_DISCRIMINATOR_MISSING,
        (key,),
    )


def discriminator_unrecognized(key: str, value: Any, options: Iterable[str]) -> Failure:
    expected = ", ".join(f"'{option}'" for option in options)
    return failure(
        f"Invalid discriminator value '{value}'. Expected one of: {expected}",
        ErrorCode.E2008_DISCRIMINATOR_UNRECOGNIZED,
        (key,),
    )


def union_exhausted(candidate_errors: Iterable[str]) -> Failure:
    from sod.config import get_settings

    joined = get_settings().UNION_SEPARATOR.join(candidate_errors)
    return failure(
        f"None of the union schemas matched. Errors: {joined}",
        ErrorCode.E2009_UNION_EXHAUSTED,
    )


# =============================================================================
# Faults in user-supplied callables
# =============================================================================

def transform_fault(exc: Exception) -> Failure:
    return failure(f"Transform failed: {exc}", ErrorCode.E2010_TRANSFORM_FAULT)


def preprocess_fault(exc: Exception) -> Failure:
    return failure(f"Preprocess failed: {exc}", ErrorCode.E2011_PREPROCESS_FAULT)


def read_fault(exc: Exception) -> Failure:
    return failure(f"Failed to read input: {exc}", ErrorCode.E2011_PREPROCESS_FAULT)


def refinement_fault(message: str, exc: Exception) -> Failure:
    return failure(f"{message}: {exc}", ErrorCode.E2005_CONSTRAINT_VIOLATION)


def unresolved_reference(name: str) -> Failure:
    return failure(
        f"Unresolved schema reference '{name}'",
        ErrorCode.E2013_UNRESOLVED_REFERENCE,
    )


def unexpected_error(exc: BaseException) -> Failure:
    return failure(f"Unexpected error: {exc}", ErrorCode.E9001_UNEXPECTED_ERROR)
