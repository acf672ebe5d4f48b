"""Literal and enumeration schemas."""
from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from functools import cached_property
from typing import Any

from sod.core.base import Schema
from sod.core.canonical import CanonicalValue, NullValue, ScalarValue, type_label
from sod.core.coercion import (
    CoercionRule,
    StringToBool,
    StringToDecimal,
    StringToEnum,
    StringToFloat,
    StringToInt,
)
from sod.errors import ErrorCode, SchemaDefinitionError, Success, ValidationResult, failure, type_mismatch

_LITERAL_RULES: dict[type, CoercionRule] = {
    bool: StringToBool(),
    int: StringToInt(),
    float: StringToFloat(),
    Decimal: StringToDecimal(),
}


def _same(candidate: Any, target: Any) -> bool:
    """Equality that keeps True apart from 1."""
    return type(candidate) is type(target) and candidate == target


@dataclass(frozen=True, eq=False)
class LiteralSchema(Schema[Any]):
    """Exactly one value. Strings convertible to the literal's type also match."""
    value: Any = None

    kind = "literal"
    intercepts_null = False

    def _parse(self, node: CanonicalValue) -> ValidationResult[Any]:
        if isinstance(node, NullValue):
            if self.value is None:
                return Success(None)
            return failure(
                f"Expected literal value '{self.value}', got null",
                ErrorCode.E2005_CONSTRAINT_VIOLATION,
            )

        raw = node.raw
        if _same(raw, self.value):
            return Success(self.value)

        rule = _LITERAL_RULES.get(type(self.value))
        if rule is not None and isinstance(raw, str):
            converted = rule.coerce(raw)
            if converted.is_ok() and _same(converted.unwrap(), self.value):
                return Success(self.value)

        return failure(
            f"Expected literal value '{self.value}', got '{raw}'",
            ErrorCode.E2005_CONSTRAINT_VIOLATION,
        )


@dataclass(frozen=True, eq=False)
class EnumSchema(Schema[Enum]):
    """Members of an Enum class, given as a member, a name (any case) or a value.

    ``members`` narrows the accepted set; ``None`` means every member.
    """
    enum_class: type[Enum] | None = None
    members: tuple[Enum, ...] | None = None

    kind = "enum"
    expected = "an enum value"

    @cached_property
    def _allowed(self) -> tuple[Enum, ...]:
        return tuple(self.enum_class) if self.members is None else self.members

    @cached_property
    def _rule(self) -> StringToEnum:
        return StringToEnum(self.enum_class)

    @property
    def options(self) -> tuple[str, ...]:
        return tuple(member.name for member in self._allowed)

    def _parse(self, node: CanonicalValue) -> ValidationResult[Enum]:
        if not isinstance(node, ScalarValue):
            return type_mismatch(self.expected, type_label(node))

        converted = self._rule.coerce(node.value)
        if converted.is_ok() and converted.unwrap() in self._allowed:
            return converted
        return failure(
            f"Invalid enum value. Expected one of: {', '.join(self.options)}",
            ErrorCode.E2005_CONSTRAINT_VIOLATION,
        )

    def _named(self, names: tuple[str, ...]) -> set[str]:
        unknown = [n for n in names if n not in self.enum_class.__members__]
        if unknown:
            raise SchemaDefinitionError(f"Unknown enum members: {', '.join(unknown)}")
        return set(names)

    def extract(self, *names: str) -> EnumSchema:
        """Narrow to the named members."""
        wanted = self._named(names)
        return replace(self, members=tuple(m for m in self._allowed if m.name in wanted))

    def exclude(self, *names: str) -> EnumSchema:
        dropped = self._named(names)
        return replace(self, members=tuple(m for m in self._allowed if m.name not in dropped))


@dataclass(frozen=True, eq=False)
class NativeEnumSchema(Schema[str]):
    """A closed set of strings; any scalar whose ``str()`` is in the set matches."""
    values: tuple[str, ...] = ()

    kind = "native_enum"
    expected = "an enum value"

    @cached_property
    def _lookup(self) -> frozenset[str]:
        return frozenset(self.values)

    def _parse(self, node: CanonicalValue) -> ValidationResult[str]:
        if isinstance(node, ScalarValue):
            text = str(node.value)
            if text in self._lookup:
                return Success(text)
        expected = ", ".join(f"'{v}'" for v in self.values)
        return failure(
            f"Invalid value. Expected one of: {expected}",
            ErrorCode.E2005_CONSTRAINT_VIOLATION,
        )
