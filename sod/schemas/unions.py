"""Union, discriminated union and intersection."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from functools import cached_property
from typing import Any, Iterable, Mapping

from sod.core.base import Schema
from sod.core.canonical import CanonicalValue, as_map, type_label
from sod.errors import (
    IssueCollector,
    SchemaDefinitionError,
    ValidationResult,
    discriminator_missing,
    discriminator_unrecognized,
    type_mismatch,
    union_exhausted,
)


@dataclass(frozen=True, eq=False)
class UnionSchema(Schema[Any]):
    """First matching option wins; option order is part of the contract."""
    options: tuple[Schema[Any], ...] = ()

    kind = "union"
    intercepts_null = False

    def __post_init__(self) -> None:
        if not self.options:
            raise SchemaDefinitionError("A union needs at least one option")

    def _parse(self, node: CanonicalValue) -> ValidationResult[Any]:
        candidate_errors: list[str] = []
        for option in self.options:
            result = option.parse(node.raw)
            if result.is_ok():
                return result
            candidate_errors.append(result.error)
        return union_exhausted(candidate_errors)


def _discriminator_text(value: Any) -> str:
    return str(value.value) if isinstance(value, Enum) else str(value)


@dataclass(frozen=True, eq=False)
class DiscriminatedUnionSchema(Schema[Any]):
    """Picks the branch registered for the discriminator's value.

    Branch lookup compares ``str(value)`` (an Enum's ``value`` for members)
    with the registered keys, then hands the whole input to that branch.
    """
    discriminator: str = "type"
    branches: tuple[tuple[str, Schema[Any]], ...] = ()

    kind = "discriminated_union"
    expected = "an object with discriminator"

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for value, _ in self.branches:
            if value in seen:
                raise SchemaDefinitionError(
                    f"Duplicate discriminator value '{value}' for key '{self.discriminator}'"
                )
            seen.add(value)

    @cached_property
    def _lookup(self) -> dict[str, Schema[Any]]:
        return dict(self.branches)

    @property
    def options(self) -> Mapping[str, Schema[Any]]:
        return dict(self.branches)

    def _parse(self, node: CanonicalValue) -> ValidationResult[Any]:
        data = as_map(node)
        if data is None:
            return type_mismatch("an object", type_label(node))

        value = data.get(self.discriminator)
        if value is None:
            return discriminator_missing(self.discriminator)

        branch = self._lookup.get(_discriminator_text(value))
        if branch is None:
            return discriminator_unrecognized(self.discriminator, value, self._lookup.keys())
        return branch.parse(node.raw)

    def option(self, value: Any, schema: Schema[Any]) -> DiscriminatedUnionSchema:
        """Register ``schema`` for discriminator ``value``."""
        return replace(self, branches=(*self.branches, (_discriminator_text(value), schema)))


def to_branches(options: Mapping[Any, Schema[Any]] | Iterable[tuple[Any, Schema[Any]]]) -> tuple[tuple[str, Schema[Any]], ...]:
    pairs = options.items() if isinstance(options, Mapping) else options
    return tuple((_discriminator_text(value), schema) for value, schema in pairs)


@dataclass(frozen=True, eq=False)
class IntersectionSchema(Schema[Any]):
    """Runs every stage, feeding each stage the previous stage's output.

    A failing stage leaves the value as it was; every stage's issues are
    reported together.
    """
    stages: tuple[Schema[Any], ...] = ()

    kind = "intersection"
    intercepts_null = False

    def __post_init__(self) -> None:
        if not self.stages:
            raise SchemaDefinitionError("An intersection needs at least one schema")

    def _parse(self, node: CanonicalValue) -> ValidationResult[Any]:
        collector = IssueCollector()
        current = node.raw
        for stage in self.stages:
            result = stage.parse(current)
            if result.is_ok():
                current = result.unwrap()
            else:
                collector.extend(result.issues)
        return collector.result(current)
