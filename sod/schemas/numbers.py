"""Numeric schemas: integer, float and Decimal.

All three share one constraint layout, evaluated in this order:
finiteness (float only), sign checks in declaration order, minimum,
maximum, exclusive bounds, multiple-of. Booleans are never numbers.
"""
from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass, replace
from decimal import Decimal
from functools import cached_property
from typing import Any, TypeVar

from sod.core.base import Schema, result_of
from sod.core.canonical import CanonicalValue, ScalarValue, type_label
from sod.core.coercion import IntegralNumberToInt, StringToDecimal, StringToFloat, StringToInt
from sod.core.constraints import Bound, Constraint, Finite, MultipleOf, first_violation
from sod.errors import Success, ValidationResult, invalid_value, type_mismatch

N = TypeVar("N", int, float, Decimal)

_STRING_TO_INT = StringToInt()
_INTEGRAL_TO_INT = IntegralNumberToInt()
_STRING_TO_FLOAT = StringToFloat()
_TO_DECIMAL = StringToDecimal()


def _shown(raw: Any) -> str:
    return f"'{raw}'" if isinstance(raw, str) else str(raw)


@dataclass(frozen=True, eq=False)
class _NumericSchema(Schema[N]):
    signs: tuple[Bound, ...] = ()
    minimum: Bound | None = None
    maximum: Bound | None = None
    exclusive: tuple[Bound, ...] = ()
    multiple: MultipleOf | None = None

    expected = "a number"

    @cached_property
    def _checks(self) -> tuple[Constraint, ...]:
        return (
            *self._leading_checks(),
            *self.signs,
            *(c for c in (self.minimum, self.maximum) if c is not None),
            *self.exclusive,
            *((self.multiple,) if self.multiple is not None else ()),
        )

    def _leading_checks(self) -> tuple[Constraint, ...]:
        return ()

    def _parse(self, node: CanonicalValue) -> ValidationResult[N]:
        if not isinstance(node, ScalarValue) or isinstance(node.value, bool):
            return type_mismatch(self.expected, type_label(node))
        return self._convert(node.value).flat_map(
            lambda value: result_of(value, first_violation(self._checks, value))
        )

    @abstractmethod
    def _convert(self, raw: Any) -> ValidationResult[N]:
        """Turn one scalar input into the schema's type."""

    def _limit(self, value: Any) -> Any:
        return value

    # ------------------------------------------------------------------------
    # Sign
    # ------------------------------------------------------------------------

    def positive(self, message: str = "Number must be positive") -> _NumericSchema[N]:
        return self._with_sign(Bound(self._limit(0), "gt", message))

    def negative(self, message: str = "Number must be negative") -> _NumericSchema[N]:
        return self._with_sign(Bound(self._limit(0), "lt", message))

    def non_positive(self, message: str = "Number must be non-positive") -> _NumericSchema[N]:
        return self._with_sign(Bound(self._limit(0), "le", message))

    def non_negative(self, message: str = "Number must be non-negative") -> _NumericSchema[N]:
        return self._with_sign(Bound(self._limit(0), "ge", message))

    def _with_sign(self, check: Bound) -> _NumericSchema[N]:
        return replace(self, signs=(*self.signs, check))

    # ------------------------------------------------------------------------
    # Bounds
    # ------------------------------------------------------------------------

    def min(self, value: N, message: str | None = None) -> _NumericSchema[N]:
        return replace(self, minimum=Bound(self._limit(value), "ge", message or f"Number must be at least {value}"))

    def max(self, value: N, message: str | None = None) -> _NumericSchema[N]:
        return replace(self, maximum=Bound(self._limit(value), "le", message or f"Number must be at most {value}"))

    def gte(self, value: N, message: str | None = None) -> _NumericSchema[N]:
        return self.min(value, message)

    def lte(self, value: N, message: str | None = None) -> _NumericSchema[N]:
        return self.max(value, message)

    def gt(self, value: N, message: str | None = None) -> _NumericSchema[N]:
        check = Bound(self._limit(value), "gt", message or f"Number must be greater than {value}")
        return replace(self, exclusive=(*self.exclusive, check))

    def lt(self, value: N, message: str | None = None) -> _NumericSchema[N]:
        check = Bound(self._limit(value), "lt", message or f"Number must be less than {value}")
        return replace(self, exclusive=(*self.exclusive, check))

    def multiple_of(self, factor: N, message: str | None = None) -> _NumericSchema[N]:
        return replace(self, multiple=MultipleOf(self._limit(factor), message or f"Number must be a multiple of {factor}"))

    def step(self, factor: N, message: str | None = None) -> _NumericSchema[N]:
        return self.multiple_of(factor, message)


@dataclass(frozen=True, eq=False)
class IntegerSchema(_NumericSchema[int]):
    """Accepts int, a clean integer string, or a whole-valued float/Decimal.

    ``gt(v)`` and ``lt(v)`` check inclusive bounds on ``v + 1`` and ``v - 1``
    alongside any ``min``/``max``.
    """
    kind = "integer"

    def _convert(self, raw: Any) -> ValidationResult[int]:
        if isinstance(raw, int):
            return Success(raw)
        if isinstance(raw, str):
            converted = _STRING_TO_INT.coerce(raw)
        elif isinstance(raw, (float, Decimal)):
            converted = _INTEGRAL_TO_INT.coerce(raw)
        else:
            return type_mismatch(self.expected, type(raw).__name__)
        if converted.is_err():
            return invalid_value(f"Expected an integer, got {_shown(raw)}")
        return converted

    def gt(self, value: int, message: str | None = None) -> IntegerSchema:
        check = Bound(value + 1, "ge", message or f"Number must be greater than {value}")
        return replace(self, exclusive=(*self.exclusive, check))

    def lt(self, value: int, message: str | None = None) -> IntegerSchema:
        check = Bound(value - 1, "le", message or f"Number must be less than {value}")
        return replace(self, exclusive=(*self.exclusive, check))


@dataclass(frozen=True, eq=False)
class FloatSchema(_NumericSchema[float]):
    """Accepts int, float, Decimal and numeric strings. Finite by default."""
    require_finite: bool = True

    kind = "float"

    def _leading_checks(self) -> tuple[Constraint, ...]:
        return (Finite(),) if self.require_finite else ()

    def _convert(self, raw: Any) -> ValidationResult[float]:
        if isinstance(raw, (int, float, Decimal)):
            try:
                return Success(float(raw))
            except (OverflowError, ValueError):
                return invalid_value(f"Expected a floating-point number, got {_shown(raw)}")
        if isinstance(raw, str):
            converted = _STRING_TO_FLOAT.coerce(raw)
            if converted.is_err():
                return invalid_value(f"Expected a floating-point number, got {_shown(raw)}")
            return converted
        return type_mismatch(self.expected, type(raw).__name__)

    def _limit(self, value: Any) -> Any:
        return float(value)

    def finite(self) -> FloatSchema:
        return replace(self, require_finite=True)

    def allow_non_finite(self) -> FloatSchema:
        return replace(self, require_finite=False)


@dataclass(frozen=True, eq=False)
class DecimalSchema(_NumericSchema[Decimal]):
    """Accepts Decimal, int, float (through its repr) and numeric strings. Never NaN/Infinity."""
    kind = "decimal"

    def _convert(self, raw: Any) -> ValidationResult[Decimal]:
        if not isinstance(raw, (Decimal, int, float, str)):
            return type_mismatch(self.expected, type(raw).__name__)
        converted = _TO_DECIMAL.coerce(raw)
        if converted.is_err() or not converted.unwrap().is_finite():
            return invalid_value(f"Expected a decimal number, got {_shown(raw)}")
        return converted

    def _limit(self, value: Any) -> Any:
        return _TO_DECIMAL.coerce(value).unwrap()
