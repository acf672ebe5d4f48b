"""Date and time schemas.

Each accepts its native type and ISO-8601 strings. ``coerce()`` widens the
accepted input: UNIX timestamps (seconds) for datetimes and dates, numeric
seconds for durations. ``min``/``max`` are inclusive bounds.
"""
from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass, replace
from datetime import date, datetime, time, timedelta
from functools import cached_property
from typing import Any, TypeVar

from sod.core.base import Schema, result_of
from sod.core.canonical import CanonicalValue, ScalarValue, type_label
from sod.core.coercion import (
    DurationToTimedelta,
    ISO8601ToDate,
    ISO8601ToDateTime,
    ISO8601ToTime,
    UnixTimestampToDateTime,
)
from sod.core.constraints import Bound, Constraint, first_violation
from sod.errors import Success, ValidationResult, invalid_value, type_mismatch

D = TypeVar("D")

_ISO_DATETIME = ISO8601ToDateTime()
_ISO_DATE = ISO8601ToDate()
_ISO_TIME = ISO8601ToTime()
_TIMESTAMP = UnixTimestampToDateTime()
_DURATION = DurationToTimedelta()


def _is_number(raw: Any) -> bool:
    return isinstance(raw, (int, float)) and not isinstance(raw, bool)


@dataclass(frozen=True, eq=False)
class _TemporalSchema(Schema[D]):
    minimum: Bound | None = None
    maximum: Bound | None = None
    lenient: bool = False

    @cached_property
    def _checks(self) -> tuple[Constraint, ...]:
        return tuple(c for c in (self.minimum, self.maximum) if c is not None)

    def _parse(self, node: CanonicalValue) -> ValidationResult[D]:
        if not isinstance(node, ScalarValue):
            return type_mismatch(self.expected, type_label(node))
        return self._convert(node.value).flat_map(
            lambda value: result_of(value, first_violation(self._checks, value))
        )

    @abstractmethod
    def _convert(self, raw: Any) -> ValidationResult[D]:
        """Turn one scalar input into the schema's type."""

    def _min_message(self, value: Any) -> str:
        return f"Value must be at least {value}"

    def _max_message(self, value: Any) -> str:
        return f"Value must be at most {value}"

    def min(self, value: D, message: str | None = None) -> _TemporalSchema[D]:
        return replace(self, minimum=Bound(value, "ge", message or self._min_message(value)))

    def max(self, value: D, message: str | None = None) -> _TemporalSchema[D]:
        return replace(self, maximum=Bound(value, "le", message or self._max_message(value)))

    def coerce(self) -> _TemporalSchema[D]:
        return replace(self, lenient=True)


@dataclass(frozen=True, eq=False)
class DateTimeSchema(_TemporalSchema[datetime]):
    kind = "datetime"
    expected = "a date"

    def _convert(self, raw: Any) -> ValidationResult[datetime]:
        match raw:
            case datetime():
                return Success(raw)
            case date():
                return Success(datetime.combine(raw, time()))
            case str():
                parsed = _ISO_DATETIME.coerce(raw)
                if parsed.is_err():
                    return invalid_value(f"Expected a valid date, got '{raw}'")
                return parsed
        if self.lenient and _is_number(raw):
            parsed = _TIMESTAMP.coerce(raw)
            if parsed.is_err():
                return invalid_value("Invalid timestamp")
            return parsed
        return type_mismatch(self.expected, type(raw).__name__)

    def _min_message(self, value: Any) -> str:
        return f"Date must be after {value:%Y-%m-%d}"

    def _max_message(self, value: Any) -> str:
        return f"Date must be before {value:%Y-%m-%d}"


@dataclass(frozen=True, eq=False)
class DateSchema(_TemporalSchema[date]):
    """Calendar dates. Datetimes and datetime strings are truncated to their date."""
    kind = "date"
    expected = "a date"

    def _convert(self, raw: Any) -> ValidationResult[date]:
        match raw:
            case datetime():
                return Success(raw.date())
            case date():
                return Success(raw)
            case str():
                parsed = _ISO_DATE.coerce(raw)
                if parsed.is_err():
                    parsed = _ISO_DATETIME.coerce(raw).map(datetime.date)
                if parsed.is_err():
                    return invalid_value(f"Expected a valid date, got '{raw}'")
                return parsed
        if self.lenient and _is_number(raw):
            parsed = _TIMESTAMP.coerce(raw)
            if parsed.is_err():
                return invalid_value("Invalid timestamp")
            return parsed.map(datetime.date)
        return type_mismatch(self.expected, type(raw).__name__)

    def _min_message(self, value: Any) -> str:
        return f"Date must be after {value:%Y-%m-%d}"

    def _max_message(self, value: Any) -> str:
        return f"Date must be before {value:%Y-%m-%d}"


@dataclass(frozen=True, eq=False)
class TimeSchema(_TemporalSchema[time]):
    """Time of day. Datetimes contribute their time component."""
    kind = "time"
    expected = "a time"

    def _convert(self, raw: Any) -> ValidationResult[time]:
        match raw:
            case datetime():
                return Success(raw.time())
            case time():
                return Success(raw)
            case str():
                parsed = _ISO_TIME.coerce(raw)
                if parsed.is_err():
                    return invalid_value(f"Expected a valid time, got '{raw}'")
                return parsed
        return type_mismatch(self.expected, type(raw).__name__)

    def _min_message(self, value: Any) -> str:
        return f"Time must be at least {value:%H:%M:%S}"

    def _max_message(self, value: Any) -> str:
        return f"Time must be at most {value:%H:%M:%S}"


@dataclass(frozen=True, eq=False)
class DurationSchema(_TemporalSchema[timedelta]):
    """ISO-8601 (``PT1H30M``), unit (``1h30m``) and clock (``01:30:00``) strings."""
    kind = "duration"
    expected = "a duration"

    def _convert(self, raw: Any) -> ValidationResult[timedelta]:
        if isinstance(raw, timedelta):
            return Success(raw)
        if isinstance(raw, str) or (self.lenient and _is_number(raw)):
            parsed = _DURATION.coerce(raw)
            if parsed.is_err():
                return invalid_value(f"Expected a valid duration, got '{raw}'")
            return parsed
        return type_mismatch(self.expected, type(raw).__name__)

    def _min_message(self, value: Any) -> str:
        return f"Duration must be at least {value}"

    def _max_message(self, value: Any) -> str:
        return f"Duration must be at most {value}"
