"""Coercing variants of the primitive schemas.

Each function returns the ordinary primitive schema with a lenient
preprocessing step in front. Values the step cannot convert are passed on
unchanged so the schema reports its usual error; null stays null.

Usage:
    from sod import coerce

    coerce.number().parse("42")      # Success(42)
    coerce.number().parse(2.5)       # Success(2), half to even
    coerce.boolean().parse("true")   # Success(True)
    coerce.boolean().parse(1)        # Success(True)
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any, Callable

from sod.core.coercion import DEFAULT_COERCER, CoercionRule, RoundingToInt
from sod.schemas.booleans import BooleanSchema
from sod.schemas.numbers import DecimalSchema, FloatSchema, IntegerSchema
from sod.schemas.strings import StringSchema
from sod.schemas.temporal import DateSchema, DateTimeSchema


def _lenient(rule: CoercionRule | None = None, target: type | None = None) -> Callable[[Any], Any]:
    def step(value: Any) -> Any:
        if value is None:
            return None
        result = rule.coerce(value) if rule is not None else DEFAULT_COERCER.coerce(value, target)
        return result.unwrap_or(value)
    return step


def _to_string(value: Any) -> Any:
    return None if value is None else str(value)


def string() -> StringSchema:
    return StringSchema().preprocess(_to_string)


def number() -> IntegerSchema:
    """Integers from rounded floats/Decimals, booleans and numeric strings."""
    return IntegerSchema().preprocess(_lenient(rule=RoundingToInt()))


def integer() -> IntegerSchema:
    return number()


def float_() -> FloatSchema:
    return FloatSchema().preprocess(_lenient(target=float))


def decimal() -> DecimalSchema:
    return DecimalSchema().preprocess(_lenient(target=Decimal))


def boolean() -> BooleanSchema:
    return BooleanSchema().coerce()


def datetime() -> DateTimeSchema:
    return DateTimeSchema().coerce()


def date() -> DateSchema:
    return DateSchema().coerce()
