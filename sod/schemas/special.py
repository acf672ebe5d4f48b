"""Schemas that accept everything, nothing, or only null."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sod.core.base import Schema
from sod.core.canonical import CanonicalValue, NullValue, type_label
from sod.errors import ErrorCode, Success, ValidationResult, failure


@dataclass(frozen=True, eq=False)
class AnySchema(Schema[Any]):
    """Returns the input unchanged, null included. Refinements still apply."""
    kind = "any"
    intercepts_null = False

    def _parse(self, node: CanonicalValue) -> ValidationResult[Any]:
        return Success(node.raw)


@dataclass(frozen=True, eq=False)
class UnknownSchema(AnySchema):
    kind = "unknown"


@dataclass(frozen=True, eq=False)
class NeverSchema(Schema[Any]):
    message: str = "This value should never be provided"

    kind = "never"
    intercepts_null = False

    def _parse(self, node: CanonicalValue) -> ValidationResult[Any]:
        return failure(self.message, ErrorCode.E2005_CONSTRAINT_VIOLATION)


@dataclass(frozen=True, eq=False)
class NullSchema(Schema[None]):
    kind = "null"
    intercepts_null = False

    def _parse(self, node: CanonicalValue) -> ValidationResult[None]:
        if isinstance(node, NullValue):
            return Success(None)
        return failure(f"Expected null, got {type_label(node)}", ErrorCode.E2001_TYPE_MISMATCH)


@dataclass(frozen=True, eq=False)
class VoidSchema(Schema[None]):
    kind = "void"
    intercepts_null = False

    def _parse(self, node: CanonicalValue) -> ValidationResult[None]:
        if isinstance(node, NullValue):
            return Success(None)
        return failure("Expected void (null), got a value", ErrorCode.E2001_TYPE_MISMATCH)
