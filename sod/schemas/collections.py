"""Sequence schemas: array, set and tuple.

Every element is parsed, and each failing element contributes its own
issues tagged with its position. Size constraints on arrays and sets are
checked only when every element parsed.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from functools import cached_property
from typing import Any, TypeVar

from sod.core.base import Schema, result_of
from sod.core.canonical import CanonicalValue, SequenceValue, type_label
from sod.core.constraints import Constraint, ExactLength, MaxLength, MinLength, NonEmpty, first_violation
from sod.errors import (
    ErrorCode,
    Issue,
    IssueCollector,
    ValidationResult,
    length_mismatch,
    type_mismatch,
)

E = TypeVar("E")


def parse_elements(
    element: Schema[E],
    items: tuple[Any, ...],
    collector: IssueCollector,
) -> list[E]:
    """Parse every item, collecting ``[i]``-tagged issues for the failures."""
    values: list[E] = []
    for index, item in enumerate(items):
        result = element.parse(item)
        if result.is_ok():
            values.append(result.unwrap())
        else:
            collector.nest(result, index, f"[{index}]")
    return values


@dataclass(frozen=True, eq=False)
class _SizedSchema(Schema[Any]):
    element: Schema[Any] | None = None
    non_empty_check: NonEmpty | None = None
    exact_len: ExactLength | None = None
    min_len: MinLength | None = None
    max_len: MaxLength | None = None

    noun = "Array"
    unit = "elements"

    @cached_property
    def _checks(self) -> tuple[Constraint, ...]:
        ordered = (self.non_empty_check, self.exact_len, self.min_len, self.max_len)
        return tuple(c for c in ordered if c is not None)

    def non_empty(self, message: str | None = None):
        return replace(self, non_empty_check=NonEmpty(message or f"{self.noun} cannot be empty"))

    def length(self, n: int, message: str | None = None):
        return replace(self, exact_len=ExactLength(n, message or f"{self.noun} must have exactly {n} {self.unit}"))

    def min(self, n: int, message: str | None = None):
        return replace(self, min_len=MinLength(n, message or f"{self.noun} must have at least {n} {self.unit}"))

    def max(self, n: int, message: str | None = None):
        return replace(self, max_len=MaxLength(n, message or f"{self.noun} must have at most {n} {self.unit}"))


@dataclass(frozen=True, eq=False)
class ArraySchema(_SizedSchema):
    """Ordered list of elements, all parsed by one schema."""
    kind = "array"
    expected = "an array"

    def _parse(self, node: CanonicalValue) -> ValidationResult[list[Any]]:
        if not isinstance(node, SequenceValue):
            return type_mismatch(self.expected, type_label(node))

        collector = IssueCollector()
        values = parse_elements(self.element, node.items, collector)
        if collector:
            return collector.to_failure()
        return result_of(values, first_violation(self._checks, values))


@dataclass(frozen=True, eq=False)
class SetSchema(_SizedSchema):
    """Duplicate-free collection. Size checks count unique parsed elements."""
    kind = "set"
    expected = "a set"
    noun = "Set"
    unit = "unique elements"

    def _parse(self, node: CanonicalValue) -> ValidationResult[set[Any]]:
        if not isinstance(node, SequenceValue):
            return type_mismatch(self.expected, type_label(node))

        collector = IssueCollector()
        values = parse_elements(self.element, node.items, collector)
        if collector:
            return collector.to_failure()

        unique: set[Any] = set()
        for index, value in enumerate(values):
            try:
                hash(value)
            except TypeError:
                collector.add(Issue(
                    f"[{index}]: Set elements must be hashable, got {type(value).__name__}",
                    ErrorCode.E2001_TYPE_MISMATCH,
                    (index,),
                ))
                continue
            unique.add(value)
        if collector:
            return collector.to_failure()
        return result_of(unique, first_violation(self._checks, unique))


@dataclass(frozen=True, eq=False)
class TupleSchema(Schema[tuple]):
    """Fixed-length sequence parsed position by position."""
    items: tuple[Schema[Any], ...] = ()

    kind = "tuple"
    expected = "a tuple"

    def _parse(self, node: CanonicalValue) -> ValidationResult[tuple]:
        if not isinstance(node, SequenceValue):
            return type_mismatch(self.expected, type_label(node))
        if len(node.items) != len(self.items):
            return length_mismatch(f"Expected a tuple with exactly {len(self.items)} elements")

        collector = IssueCollector()
        values: list[Any] = []
        for index, (schema, item) in enumerate(zip(self.items, node.items)):
            result = schema.parse(item)
            if result.is_ok():
                values.append(result.unwrap())
            else:
                collector.nest(result, index, f"Item {index + 1}")
        return collector.result(tuple(values))
