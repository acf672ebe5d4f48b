"""Atomic Constraints

A constraint inspects one already-typed value and returns ``None`` when the
value satisfies it, or a single-issue Failure when it does not. Schemas keep
their constraints in a tuple and evaluate them in order, stopping at the
first failure.

Constraints carry the exact message they report, so the same class serves
strings, arrays and sets ("String must be at least 3 characters",
"Array must have at least 3 elements").
"""
from __future__ import annotations

import math
import operator
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Callable

from sod.errors import (
    Failure,
    SchemaDefinitionError,
    constraint_violation,
    length_mismatch,
    refinement_fault,
)


class Constraint(ABC):
    """Base class for atomic constraints."""

    @abstractmethod
    def check(self, value: Any) -> Failure | None:
        """Return a Failure if ``value`` violates the constraint."""

    @property
    @abstractmethod
    def constraint_name(self) -> str:
        """Short identifier used in logs and reprs."""

    def __call__(self, value: Any) -> Failure | None:
        return self.check(value)


# ============================================================================
# Size Constraints
# ============================================================================

@dataclass(frozen=True, slots=True)
class MinLength(Constraint):
    limit: int
    message: str

    @property
    def constraint_name(self) -> str:
        return f"min_length[{self.limit}]"

    def check(self, value: Any) -> Failure | None:
        if len(value) < self.limit:
            return constraint_violation(self.message)
        return None


@dataclass(frozen=True, slots=True)
class MaxLength(Constraint):
    limit: int
    message: str

    @property
    def constraint_name(self) -> str:
        return f"max_length[{self.limit}]"

    def check(self, value: Any) -> Failure | None:
        if len(value) > self.limit:
            return constraint_violation(self.message)
        return None


@dataclass(frozen=True, slots=True)
class ExactLength(Constraint):
    length: int
    message: str

    @property
    def constraint_name(self) -> str:
        return f"length[{self.length}]"

    def check(self, value: Any) -> Failure | None:
        if len(value) != self.length:
            return length_mismatch(self.message)
        return None


@dataclass(frozen=True, slots=True)
class NonEmpty(Constraint):
    """Rejects empty containers; with ``strip`` also whitespace-only strings."""
    message: str
    strip: bool = False

    @property
    def constraint_name(self) -> str:
        return "non_empty"

    def check(self, value: Any) -> Failure | None:
        content = value.strip() if self.strip else value
        if len(content) == 0:
            return constraint_violation(self.message)
        return None


# ============================================================================
# Pattern Constraints
# ============================================================================

@dataclass(frozen=True, slots=True)
class Pattern(Constraint):
    """Regex search against a string."""
    regex: re.Pattern
    message: str

    @classmethod
    def compile(cls, pattern: str | re.Pattern, message: str, flags: int = 0) -> Pattern:
        compiled = pattern if isinstance(pattern, re.Pattern) else re.compile(pattern, flags)
        return cls(compiled, message)

    @property
    def constraint_name(self) -> str:
        return f"pattern[{self.regex.pattern}]"

    def check(self, value: Any) -> Failure | None:
        if self.regex.search(value) is None:
            return constraint_violation(self.message)
        return None


# ============================================================================
# Numeric Constraints
# ============================================================================

_COMPARATORS: dict[str, Callable[[Any, Any], bool]] = {
    "ge": operator.ge,
    "gt": operator.gt,
    "le": operator.le,
    "lt": operator.lt,
}


@dataclass(frozen=True, slots=True)
class Bound(Constraint):
    """Ordered comparison against a limit: ``value <op> limit``.

    Works for numbers, dates and times alike. Values that cannot be compared
    with the limit (naive vs aware datetimes) fail with the same message.
    """
    limit: Any
    op: str
    message: str

    def __post_init__(self) -> None:
        if self.op not in _COMPARATORS:
            raise SchemaDefinitionError(f"Unknown comparison '{self.op}'")

    @property
    def constraint_name(self) -> str:
        return f"{self.op}[{self.limit}]"

    def check(self, value: Any) -> Failure | None:
        try:
            satisfied = _COMPARATORS[self.op](value, self.limit)
        except TypeError:
            satisfied = False
        if not satisfied:
            return constraint_violation(self.message)
        return None


@dataclass(frozen=True, slots=True)
class Finite(Constraint):
    message: str = "Number must be finite"

    @property
    def constraint_name(self) -> str:
        return "finite"

    def check(self, value: Any) -> Failure | None:
        if isinstance(value, Decimal):
            ok = value.is_finite()
        else:
            ok = math.isfinite(value)
        if not ok:
            return constraint_violation(self.message)
        return None


@dataclass(frozen=True, slots=True)
class MultipleOf(Constraint):
    """Exact for int and Decimal; floats allow a 1e-9 tolerance."""
    factor: int | float | Decimal
    message: str

    def __post_init__(self) -> None:
        if self.factor <= 0:
            raise SchemaDefinitionError(f"multiple_of factor must be positive, got {self.factor}")

    @property
    def constraint_name(self) -> str:
        return f"multiple_of[{self.factor}]"

    def check(self, value: Any) -> Failure | None:
        if self._is_multiple(value):
            return None
        return constraint_violation(self.message)

    def _is_multiple(self, value: Any) -> bool:
        if isinstance(value, int) and isinstance(self.factor, int):
            return value % self.factor == 0
        if isinstance(value, Decimal) or isinstance(self.factor, Decimal):
            try:
                return Decimal(str(value)) % Decimal(str(self.factor)) == 0
            except InvalidOperation:
                return False
        remainder = math.fmod(abs(float(value)), float(self.factor))
        return remainder < 1e-9 or float(self.factor) - remainder < 1e-9


# ============================================================================
# Custom Predicates
# ============================================================================

@dataclass(frozen=True, slots=True)
class Predicate(Constraint):
    """Wraps a user callable. Exceptions it raises become failures."""
    fn: Callable[[Any], bool]
    message: str
    name: str = "predicate"

    @property
    def constraint_name(self) -> str:
        return self.name

    def check(self, value: Any) -> Failure | None:
        try:
            passed = self.fn(value)
        except Exception as e:
            return refinement_fault(self.message, e)
        if not passed:
            return constraint_violation(self.message)
        return None


def first_violation(constraints: tuple[Constraint, ...], value: Any) -> Failure | None:
    """Evaluate constraints in order and return the first failure."""
    for constraint in constraints:
        failed = constraint.check(value)
        if failed is not None:
            return failed
    return None
