"""Schemas that wrap other schemas: transform, pipeline, catch and brand."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from sod.core.base import Schema
from sod.core.canonical import CanonicalValue
from sod.errors import (
    SchemaDefinitionError,
    Success,
    ValidationResult,
    transform_fault,
)
from sod.logging import schema_logger

log = schema_logger()


@dataclass(frozen=True, eq=False)
class TransformSchema(Schema[Any]):
    """Parses with ``inner`` then maps the value with ``fn``."""
    inner: Schema[Any] | None = None
    fn: Callable[[Any], Any] | None = None

    kind = "transform"
    intercepts_null = False

    def _parse(self, node: CanonicalValue) -> ValidationResult[Any]:
        result = self.inner.parse(node.raw)
        if result.is_err():
            return result
        try:
            return Success(self.fn(result.unwrap()))
        except Exception as e:
            log.debug("transform_fault", schema=self.inner.kind, exc_type=type(e).__name__, error=str(e))
            return transform_fault(e)


@dataclass(frozen=True, eq=False)
class PipelineSchema(Schema[Any]):
    """Feeds each stage's output to the next; the first failure is returned as is."""
    stages: tuple[Schema[Any], ...] = ()

    kind = "pipeline"
    intercepts_null = False

    def __post_init__(self) -> None:
        if not self.stages:
            raise SchemaDefinitionError("A pipeline needs at least one stage")

    def _parse(self, node: CanonicalValue) -> ValidationResult[Any]:
        current = node.raw
        for stage in self.stages:
            result = stage.parse(current)
            if result.is_err():
                return result
            current = result.unwrap()
        return Success(current)


@dataclass(frozen=True, eq=False)
class CatchSchema(Schema[Any]):
    """Never fails: any failure or fault of ``inner`` yields ``fallback``."""
    inner: Schema[Any] | None = None
    fallback: Any = None

    kind = "catch"
    intercepts_null = False

    def parse(self, value: Any) -> ValidationResult[Any]:
        try:
            result = super().parse(value)
        except Exception as e:
            log.debug("catch_fallback_applied", schema=self.inner.kind, reason="fault", error=str(e))
            return Success(self.fallback)
        if result.is_err():
            log.debug("catch_fallback_applied", schema=self.inner.kind, reason="failure", issue_count=len(result.issues))
            return Success(self.fallback)
        return result

    def _parse(self, node: CanonicalValue) -> ValidationResult[Any]:
        return self.inner.parse(node.raw)


@dataclass(frozen=True, eq=False)
class BrandSchema(Schema[Any]):
    """Nominal tag on top of ``inner``; parsed values are unchanged."""
    inner: Schema[Any] | None = None
    brand_name: str = ""

    kind = "brand"
    intercepts_null = False

    def _parse(self, node: CanonicalValue) -> ValidationResult[Any]:
        return self.inner.parse(node.raw)

    def unwrap(self) -> Schema[Any]:
        return self.inner
