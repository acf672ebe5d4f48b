"""Schema Base and Modifier Layer

Every schema is a frozen dataclass. Configuration methods never mutate: each
returns a new schema built with ``dataclasses.replace``, so one configured
schema can be shared and parsed from many threads.

Parse pipeline, identical for every schema:
    1. preprocess (user callable; exceptions become failures)
    2. canonicalize the input (Map / Sequence / Scalar / Null)
    3. null handling: default, then optional/nullable, then "got null"
    4. ``_parse``: the schema's own type check, coercion and constraints
    5. refinements, in declaration order, stopping at the first failure

Combinators (unions, wrappers, references) and the special schemas let null
reach ``_parse`` unless a default or optional/nullable was set on them.
"""
from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Generic, TypeVar

from sod.core.canonical import CanonicalValue, NullValue, canonicalize
from sod.core.constraints import Constraint, Predicate, first_violation
from sod.errors import (
    Failure,
    Success,
    ValidationError,
    ValidationResult,
    null_not_allowed,
    preprocess_fault,
    read_fault,
    unexpected_error,
)
from sod.logging import schema_logger

if TYPE_CHECKING:
    from sod.schemas.collections import ArraySchema
    from sod.schemas.unions import IntersectionSchema, UnionSchema
    from sod.schemas.wrappers import BrandSchema, CatchSchema, PipelineSchema, TransformSchema

T = TypeVar("T")
U = TypeVar("U")

log = schema_logger()


class _Missing:
    """Sentinel for "no default configured"."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __copy__(self) -> _Missing:
        return self

    def __deepcopy__(self, memo: dict) -> _Missing:
        return self


MISSING: Any = _Missing()


@dataclass(frozen=True, eq=False, kw_only=True)
class Schema(ABC, Generic[T]):
    """A configured parser for one logical type."""
    description: str | None = None
    refinements: tuple[Constraint, ...] = ()
    preprocessor: Callable[[Any], Any] | None = None
    allow_missing: bool = False
    allow_null: bool = False
    default_value: Any = MISSING

    kind: ClassVar[str] = "schema"
    expected: ClassVar[str] = "a value"
    intercepts_null: ClassVar[bool] = True

    # ========================================================================
    # Entry points
    # ========================================================================

    def parse(self, value: Any) -> ValidationResult[T]:
        """Parse ``value``. Bad input yields a Failure; nothing is raised for it."""
        if self.preprocessor is not None:
            try:
                value = self.preprocessor(value)
            except Exception as e:
                return preprocess_fault(e)

        try:
            node = canonicalize(value)
        except Exception as e:
            return read_fault(e)
        if isinstance(node, NullValue) and self.handles_null:
            if self.has_default:
                return Success(self.resolve_default())
            if self.allow_missing or self.allow_null:
                return Success(None)
            return null_not_allowed(self.expected)

        return self._parse(node).flat_map(self._refine)

    def safe_parse(self, value: Any) -> ValidationResult[T]:
        """Like ``parse`` but also turns internal faults (RecursionError...) into a Failure."""
        try:
            return self.parse(value)
        except Exception as e:
            log.warning(
                "safe_parse_fault",
                schema=self.kind,
                exc_type=type(e).__name__,
                error=str(e),
            )
            return unexpected_error(e)

    def parse_or_throw(self, value: Any) -> T:
        """Return the parsed value or raise ValidationError with every issue."""
        match self.parse(value):
            case Success(parsed):
                return parsed
            case Failure(issues):
                log.debug("parse_rejected", schema=self.kind, issue_count=len(issues))
                raise ValidationError(issues=issues)

    @abstractmethod
    def _parse(self, node: CanonicalValue) -> ValidationResult[T]:
        """Type check, coerce and constrain a canonical input."""

    def _refine(self, value: T) -> ValidationResult[T]:
        failed = first_violation(self.refinements, value)
        return failed if failed is not None else Success(value)

    # ========================================================================
    # Introspection
    # ========================================================================

    @property
    def handles_null(self) -> bool:
        return self.intercepts_null or self.has_default or self.allow_missing or self.allow_null

    @property
    def accepts_null(self) -> bool:
        """False when null input could only produce "Expected X, got null"."""
        return not self.intercepts_null or self.has_default or self.allow_missing or self.allow_null

    @property
    def has_default(self) -> bool:
        return self.default_value is not MISSING

    @property
    def is_optional(self) -> bool:
        return self.allow_missing

    @property
    def is_nullable(self) -> bool:
        return self.allow_null

    def resolve_default(self) -> Any:
        """A fresh copy of the configured default value."""
        return copy.deepcopy(self.default_value)

    # ========================================================================
    # Modifiers
    # ========================================================================

    def describe(self, description: str) -> Schema[T]:
        return replace(self, description=description)

    def optional(self) -> Schema[T | None]:
        """Accept null and allow the key to be absent in an object."""
        return replace(self, allow_missing=True)

    def nullable(self) -> Schema[T | None]:
        """Accept null; the key is still required in an object."""
        return replace(self, allow_null=True)

    def nullish(self) -> Schema[T | None]:
        return replace(self, allow_missing=True, allow_null=True)

    def required(self) -> Schema[T]:
        """Undo ``optional``, ``nullable`` and ``default``."""
        return replace(self, allow_missing=False, allow_null=False, default_value=MISSING)

    def default(self, value: Any) -> Schema[T]:
        """Use ``value`` for null input and for absent object keys."""
        return replace(self, default_value=value)

    def refine(
        self,
        predicate: Callable[[T], bool],
        message: str = "Invalid value",
        name: str = "refine",
    ) -> Schema[T]:
        return replace(self, refinements=(*self.refinements, Predicate(predicate, message, name)))

    def preprocess(self, fn: Callable[[Any], Any]) -> Schema[T]:
        """Run ``fn`` on the raw input before anything else. Chains after an existing step."""
        existing = self.preprocessor
        if existing is None:
            return replace(self, preprocessor=fn)

        def chained(value: Any) -> Any:
            return fn(existing(value))

        return replace(self, preprocessor=chained)

    # ========================================================================
    # Combinators
    # ========================================================================

    def transform(self, fn: Callable[[T], U]) -> TransformSchema[U]:
        from sod.schemas.wrappers import TransformSchema
        return TransformSchema(self, fn)

    def pipe(self, *stages: Schema[Any]) -> PipelineSchema[Any]:
        from sod.schemas.wrappers import PipelineSchema
        return PipelineSchema((self, *stages))

    def catch(self, fallback: T) -> CatchSchema[T]:
        from sod.schemas.wrappers import CatchSchema
        return CatchSchema(self, fallback)

    def brand(self, name: str) -> BrandSchema[T]:
        from sod.schemas.wrappers import BrandSchema
        return BrandSchema(self, name)

    def or_(self, other: Schema[Any]) -> UnionSchema[Any]:
        from sod.schemas.unions import UnionSchema
        return UnionSchema((self, other))

    def and_(self, other: Schema[Any]) -> IntersectionSchema[Any]:
        from sod.schemas.unions import IntersectionSchema
        return IntersectionSchema((self, other))

    def array(self) -> ArraySchema[T]:
        from sod.schemas.collections import ArraySchema
        return ArraySchema(self)

    def __or__(self, other: Schema[Any]) -> UnionSchema[Any]:
        return self.or_(other)

    def __and__(self, other: Schema[Any]) -> IntersectionSchema[Any]:
        return self.and_(other)


def result_of(value: T, failed: Failure | None) -> ValidationResult[T]:
    """Success(value) unless a constraint reported a failure."""
    return failed if failed is not None else Success(value)
