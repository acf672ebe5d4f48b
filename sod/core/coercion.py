"""Explicit Coercion Rules

Coercion rules are explicit and opt-in, never implicit. Primitive schemas
call the rule for the one conversion they document (an integer schema
accepts "42"), and the ``sod.coerce`` factory wires the lenient rules in as
preprocessing steps.

Features:
- Rules return ValidationResult instead of raising
- ``can_coerce`` doubles as a format predicate (ISO datetimes, UUIDs)
- Extensible rule registry through ExplicitCoercion
"""
from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Generic, TypeVar
from uuid import UUID

from sod.errors import ErrorCode, Success, ValidationResult, failure, type_name

T = TypeVar("T")
S = TypeVar("S")

_INT_PATTERN = re.compile(r"^[+-]?\d+$")


def _cannot(value: Any, target: str, detail: str | None = None) -> ValidationResult[Any]:
    shown = f"'{value}'" if isinstance(value, str) else type_name(value)
    message = f"Cannot coerce {shown} to {target}"
    if detail:
        message += f": {detail}"
    return failure(message, ErrorCode.E2001_TYPE_MISMATCH)


@dataclass(frozen=True, slots=True)
class CoercionRule(ABC, Generic[S, T]):
    """Base class for coercion rules.

    Each rule defines:
    - Source type(s) it can coerce from
    - Target type it coerces to
    - Validation of coercion feasibility
    - The actual coercion logic
    """

    @property
    @abstractmethod
    def source_types(self) -> tuple[type, ...]:
        """Types this rule can coerce from."""

    @property
    @abstractmethod
    def target_type(self) -> type[T]:
        """Type this rule coerces to."""

    def can_coerce(self, value: Any) -> bool:
        """Check if value can be coerced to target type."""
        return self.coerce(value).is_ok()

    @abstractmethod
    def coerce(self, value: Any) -> ValidationResult[T]:
        """Coerce value to target type."""

    def __call__(self, value: Any) -> ValidationResult[T]:
        return self.coerce(value)


# ============================================================================
# Numeric Rules
# ============================================================================

@dataclass(frozen=True, slots=True)
class StringToInt(CoercionRule[str, int]):
    """Coerce a clean integer string (``"42"``, ``" -7 "``) to int.

    Digit-group underscores and fractional parts are rejected.
    """

    @property
    def source_types(self) -> tuple[type, ...]:
        return (str,)

    @property
    def target_type(self) -> type[int]:
        return int

    def coerce(self, value: Any) -> ValidationResult[int]:
        if not isinstance(value, str):
            return _cannot(value, "int")
        stripped = value.strip()
        if not _INT_PATTERN.match(stripped):
            return _cannot(value, "int")
        try:
            return Success(int(stripped))
        except ValueError as e:
            return _cannot(value, "int", str(e))


@dataclass(frozen=True, slots=True)
class IntegralNumberToInt(CoercionRule[float, int]):
    """Coerce a whole-valued float or Decimal (``3.0``) to int."""

    @property
    def source_types(self) -> tuple[type, ...]:
        return (float, Decimal)

    @property
    def target_type(self) -> type[int]:
        return int

    def coerce(self, value: Any) -> ValidationResult[int]:
        if isinstance(value, float):
            if value.is_integer():
                return Success(int(value))
            return _cannot(value, "int", "value is not integral")
        if isinstance(value, Decimal):
            if value.is_finite() and value == value.to_integral_value():
                return Success(int(value))
            return _cannot(value, "int", "value is not integral")
        return _cannot(value, "int")


@dataclass(frozen=True, slots=True)
class RoundingToInt(CoercionRule[Any, int]):
    """Lenient integer coercion used by ``sod.coerce.number``.

    Floats and Decimals round half to even, booleans become 0/1, strings are
    read as integers first and then as rounded floats.
    """

    @property
    def source_types(self) -> tuple[type, ...]:
        return (bool, int, float, Decimal, str)

    @property
    def target_type(self) -> type[int]:
        return int

    def coerce(self, value: Any) -> ValidationResult[int]:
        match value:
            case bool():
                return Success(int(value))
            case int():
                return Success(value)
            case float():
                if value != value or value in (float("inf"), float("-inf")):
                    return _cannot(value, "int", "value is not finite")
                return Success(round(value))
            case Decimal():
                if not value.is_finite():
                    return _cannot(value, "int", "value is not finite")
                return Success(int(value.to_integral_value(rounding=ROUND_HALF_EVEN)))
            case str():
                as_int = StringToInt().coerce(value)
                if as_int.is_ok():
                    return as_int
                return StringToFloat().coerce(value).flat_map(self.coerce)
        return _cannot(value, "int")


@dataclass(frozen=True, slots=True)
class StringToFloat(CoercionRule[str, float]):
    """Coerce string to float. ``"nan"`` and ``"inf"`` parse; schemas decide finiteness."""

    @property
    def source_types(self) -> tuple[type, ...]:
        return (str,)

    @property
    def target_type(self) -> type[float]:
        return float

    def coerce(self, value: Any) -> ValidationResult[float]:
        if not isinstance(value, str):
            return _cannot(value, "float")
        stripped = value.strip()
        if not stripped or "_" in stripped:
            return _cannot(value, "float")
        try:
            return Success(float(stripped))
        except ValueError as e:
            return _cannot(value, "float", str(e))


@dataclass(frozen=True, slots=True)
class StringToDecimal(CoercionRule[str, Decimal]):
    """Coerce string, int or float to Decimal with precision preservation."""

    @property
    def source_types(self) -> tuple[type, ...]:
        return (str, int, float)

    @property
    def target_type(self) -> type[Decimal]:
        return Decimal

    def coerce(self, value: Any) -> ValidationResult[Decimal]:
        if isinstance(value, bool):
            return _cannot(value, "Decimal")
        if isinstance(value, Decimal):
            return Success(value)
        if isinstance(value, (int, float)):
            return Success(Decimal(repr(value)) if isinstance(value, float) else Decimal(value))
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped or "_" in stripped:
                return _cannot(value, "Decimal")
            try:
                return Success(Decimal(stripped))
            except InvalidOperation:
                return _cannot(value, "Decimal")
        return _cannot(value, "Decimal")


# ============================================================================
# Boolean Rules
# ============================================================================

@dataclass(frozen=True, slots=True)
class StringToBool(CoercionRule[str, bool]):
    """Coerce string or integer to boolean.

    Truthy: "true", "1", "yes", "on"
    Falsy: "false", "0", "no", "off", ""
    Integers: non-zero is True
    """
    true_values: frozenset[str] = frozenset({"true", "1", "yes", "on"})
    false_values: frozenset[str] = frozenset({"false", "0", "no", "off", ""})

    @property
    def source_types(self) -> tuple[type, ...]:
        return (str, int)

    @property
    def target_type(self) -> type[bool]:
        return bool

    def coerce(self, value: Any) -> ValidationResult[bool]:
        if isinstance(value, bool):
            return Success(value)
        if isinstance(value, int):
            return Success(value != 0)
        if not isinstance(value, str):
            return _cannot(value, "bool")

        lower = value.strip().lower()
        if lower in self.true_values:
            return Success(True)
        if lower in self.false_values:
            return Success(False)
        return _cannot(value, "bool")


# ============================================================================
# Temporal Rules
# ============================================================================

@dataclass(frozen=True, slots=True)
class ISO8601ToDateTime(CoercionRule[str, datetime]):
    """Coerce ISO8601 string to datetime."""
    default_timezone: timezone | None = None

    @property
    def source_types(self) -> tuple[type, ...]:
        return (str,)

    @property
    def target_type(self) -> type[datetime]:
        return datetime

    def _parse(self, value: str) -> datetime:
        """Parse ISO8601 string handling Z suffix."""
        normalized = value.strip().replace("Z", "+00:00")
        dt = datetime.fromisoformat(normalized)
        if dt.tzinfo is None and self.default_timezone:
            dt = dt.replace(tzinfo=self.default_timezone)
        return dt

    def coerce(self, value: Any) -> ValidationResult[datetime]:
        if not isinstance(value, str):
            return _cannot(value, "datetime")
        try:
            return Success(self._parse(value))
        except ValueError as e:
            return _cannot(value, "datetime", str(e))


@dataclass(frozen=True, slots=True)
class UnixTimestampToDateTime(CoercionRule[float, datetime]):
    """Coerce seconds since the epoch to an aware UTC datetime."""

    @property
    def source_types(self) -> tuple[type, ...]:
        return (int, float)

    @property
    def target_type(self) -> type[datetime]:
        return datetime

    def coerce(self, value: Any) -> ValidationResult[datetime]:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return _cannot(value, "datetime")
        try:
            return Success(datetime.fromtimestamp(value, tz=timezone.utc))
        except (OverflowError, OSError, ValueError) as e:
            return _cannot(value, "datetime", str(e))


@dataclass(frozen=True, slots=True)
class ISO8601ToDate(CoercionRule[str, date]):
    """Coerce ISO8601 string to date."""

    @property
    def source_types(self) -> tuple[type, ...]:
        return (str,)

    @property
    def target_type(self) -> type[date]:
        return date

    def coerce(self, value: Any) -> ValidationResult[date]:
        if not isinstance(value, str):
            return _cannot(value, "date")
        try:
            return Success(date.fromisoformat(value.strip()))
        except ValueError as e:
            return _cannot(value, "date", str(e))


@dataclass(frozen=True, slots=True)
class ISO8601ToTime(CoercionRule[str, time]):
    """Coerce ISO8601 string to time."""

    @property
    def source_types(self) -> tuple[type, ...]:
        return (str,)

    @property
    def target_type(self) -> type[time]:
        return time

    def coerce(self, value: Any) -> ValidationResult[time]:
        if not isinstance(value, str):
            return _cannot(value, "time")
        try:
            return Success(time.fromisoformat(value.strip()))
        except ValueError as e:
            return _cannot(value, "time", str(e))


@dataclass(frozen=True, slots=True)
class DurationToTimedelta(CoercionRule[str, timedelta]):
    """Coerce duration string (or seconds) to timedelta.

    Supports formats:
    - ISO8601: "P1DT2H30M" (1 day, 2 hours, 30 minutes)
    - Simple: "1d", "2h", "30m", "45s"
    - Combined: "1d2h30m"
    - Clock: "01:30" or "01:30:15.5"
    """

    UNIT_MAP = {
        "w": "weeks", "week": "weeks", "weeks": "weeks",
        "d": "days", "day": "days", "days": "days",
        "h": "hours", "hr": "hours", "hour": "hours", "hours": "hours",
        "m": "minutes", "min": "minutes", "minute": "minutes", "minutes": "minutes",
        "s": "seconds", "sec": "seconds", "second": "seconds", "seconds": "seconds",
        "ms": "milliseconds", "millisecond": "milliseconds", "milliseconds": "milliseconds",
    }
    SIMPLE_PATTERN = re.compile(r"(\d+\.?\d*)\s*([a-z]+)")
    CLOCK_PATTERN = re.compile(r"^(-)?(\d+):([0-5]\d)(?::([0-5]\d(?:\.\d+)?))?$")
    ISO_PATTERN = re.compile(
        r"^P(?:(\d+)W)?(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?)?$"
    )

    @property
    def source_types(self) -> tuple[type, ...]:
        return (str, int, float)

    @property
    def target_type(self) -> type[timedelta]:
        return timedelta

    def _parse(self, value: str) -> timedelta:
        value = value.strip().lower()
        if not value:
            raise ValueError("empty duration")

        if value.startswith("p"):
            return self._parse_iso8601(value)

        clock = self.CLOCK_PATTERN.match(value)
        if clock:
            sign, hours, minutes, seconds = clock.groups()
            delta = timedelta(hours=int(hours), minutes=int(minutes), seconds=float(seconds or 0))
            return -delta if sign else delta

        matches = self.SIMPLE_PATTERN.findall(value)
        if not matches or self.SIMPLE_PATTERN.sub("", value).strip():
            raise ValueError(f"Invalid duration format: {value}")

        kwargs: dict[str, float] = {}
        for num_str, unit in matches:
            unit_key = self.UNIT_MAP.get(unit)
            if not unit_key:
                raise ValueError(f"Unknown duration unit: {unit}")
            kwargs[unit_key] = kwargs.get(unit_key, 0) + float(num_str)
        return timedelta(**kwargs)

    def _parse_iso8601(self, value: str) -> timedelta:
        """Parse ISO8601 duration (P1W, P1DT2H30M, PT0.5S)."""
        match = self.ISO_PATTERN.match(value.upper())
        if not match or value.upper() in ("P", "PT") or value.upper().endswith("T"):
            raise ValueError(f"Invalid ISO8601 duration: {value}")
        weeks, days, hours, minutes, seconds = match.groups()
        return timedelta(
            weeks=int(weeks or 0),
            days=int(days or 0),
            hours=int(hours or 0),
            minutes=int(minutes or 0),
            seconds=float(seconds or 0),
        )

    def coerce(self, value: Any) -> ValidationResult[timedelta]:
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            return _cannot(value, "timedelta")
        try:
            if isinstance(value, str):
                return Success(self._parse(value))
            return Success(timedelta(seconds=value))
        except (ValueError, OverflowError) as e:
            return _cannot(value, "timedelta", str(e))


# ============================================================================
# Identifier Rules
# ============================================================================

@dataclass(frozen=True, slots=True)
class StringToUUID(CoercionRule[str, UUID]):
    """Coerce string to UUID."""

    @property
    def source_types(self) -> tuple[type, ...]:
        return (str,)

    @property
    def target_type(self) -> type[UUID]:
        return UUID

    def coerce(self, value: Any) -> ValidationResult[UUID]:
        if not isinstance(value, str):
            return _cannot(value, "UUID")
        try:
            return Success(UUID(value.strip()))
        except ValueError as e:
            return _cannot(value, "UUID", str(e))


@dataclass(frozen=True, slots=True)
class StringToEnum(CoercionRule[str, Enum]):
    """Coerce a member, member name or member value to an Enum member."""
    enum_class: type[Enum]
    by_value: bool = True
    case_insensitive: bool = True

    @property
    def source_types(self) -> tuple[type, ...]:
        return (str, int, float, self.enum_class)

    @property
    def target_type(self) -> type[Enum]:
        return self.enum_class

    def _find_member(self, value: Any) -> Enum:
        """Find enum member by identity, name or value."""
        if isinstance(value, self.enum_class):
            return value

        if isinstance(value, str):
            check_value = value.strip().upper() if self.case_insensitive else value.strip()
            for member in self.enum_class:
                name = member.name.upper() if self.case_insensitive else member.name
                if name == check_value:
                    return member

        if self.by_value:
            for member in self.enum_class:
                if type(member.value) is not type(value):
                    continue
                if isinstance(value, str) and self.case_insensitive:
                    if member.value.strip().upper() == value.strip().upper():
                        return member
                elif member.value == value:
                    return member

        raise ValueError(f"No enum member matches: {value}")

    def coerce(self, value: Any) -> ValidationResult[Enum]:
        try:
            return Success(self._find_member(value))
        except ValueError:
            return _cannot(value, self.enum_class.__name__)


# ============================================================================
# Rule Registry
# ============================================================================

@dataclass(frozen=True, slots=True)
class ExplicitCoercion:
    """Coercion system with explicit opt-in rules.

    Usage:
        coercer = ExplicitCoercion()
        result = coercer.coerce("123", int)  # Success(123)
        result = coercer.coerce("invalid", int)  # Failure(...)
    """
    rules: tuple[CoercionRule, ...] = field(default_factory=lambda: (
        RoundingToInt(),
        StringToFloat(),
        StringToDecimal(),
        StringToBool(),
        ISO8601ToDateTime(),
        UnixTimestampToDateTime(),
        ISO8601ToDate(),
        ISO8601ToTime(),
        DurationToTimedelta(),
        StringToUUID(),
    ))

    def add_rule(self, rule: CoercionRule) -> ExplicitCoercion:
        """Add a coercion rule, returning new instance."""
        return ExplicitCoercion(rules=(*self.rules, rule))

    def coerce(self, value: Any, target_type: type[T]) -> ValidationResult[T]:
        """Attempt to coerce value to target type.

        Only rules whose target is ``target_type`` and whose source types
        include the value are tried, in registration order.
        """
        if isinstance(value, target_type) and not (
            isinstance(value, bool) and target_type is not bool
        ):
            return Success(value)

        for rule in self.rules:
            if rule.target_type is target_type and isinstance(value, rule.source_types):
                result = rule.coerce(value)
                if result.is_ok():
                    return result

        return _cannot(value, target_type.__name__)

    def coerce_or_none(self, value: Any, target_type: type[T]) -> T | None:
        """Coerce value or return None on failure."""
        return self.coerce(value, target_type).unwrap_or(None)


DEFAULT_COERCER = ExplicitCoercion()


def coerce(value: Any, target_type: type[T]) -> ValidationResult[T]:
    """Convenience function using default coercer."""
    return DEFAULT_COERCER.coerce(value, target_type)


def coerce_or_none(value: Any, target_type: type[T]) -> T | None:
    """Convenience function for coerce-or-none pattern."""
    return DEFAULT_COERCER.coerce_or_none(value, target_type)
