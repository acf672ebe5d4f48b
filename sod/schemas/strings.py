"""String schema.

Normalizers (trim, then case folding) run before any check. Checks run in a
fixed order: exact length, min, max, regex patterns, then format checks in
the order they were declared, then refinements.
"""
from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass, replace
from functools import cached_property
from typing import Literal
from urllib.parse import urlparse

from sod.core.base import Schema, result_of
from sod.core.canonical import CanonicalValue, ScalarValue, type_label
from sod.core.coercion import ISO8601ToDateTime, StringToUUID
from sod.core.constraints import (
    Constraint,
    ExactLength,
    MaxLength,
    MinLength,
    NonEmpty,
    Pattern,
    Predicate,
    first_violation,
)
from sod.errors import ValidationResult, type_mismatch

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
CUID_PATTERN = re.compile(r"^c[a-z0-9]{24}$")
CUID2_PATTERN = re.compile(r"^[a-z0-9]{24,}$")
ULID_PATTERN = re.compile(r"^[0-9A-Z]{26}$")

_UUID_RULE = StringToUUID()
_DATETIME_RULE = ISO8601ToDateTime()


# ============================================================================
# Format predicates
# ============================================================================

def is_url(value: str) -> bool:
    """Absolute http(s) URL with a host."""
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def is_uuid(value: str) -> bool:
    return _UUID_RULE.can_coerce(value)


def is_iso_datetime(value: str) -> bool:
    return _DATETIME_RULE.can_coerce(value)


def ip_checker(version: Literal[4, 6] | None = None):
    def is_ip(value: str) -> bool:
        try:
            address = ipaddress.ip_address(value)
        except ValueError:
            return False
        return version is None or address.version == version
    return is_ip


# ============================================================================
# Schema
# ============================================================================

@dataclass(frozen=True, eq=False)
class StringSchema(Schema[str]):
    exact_len: ExactLength | None = None
    min_len: MinLength | None = None
    max_len: MaxLength | None = None
    patterns: tuple[Pattern, ...] = ()
    formats: tuple[Constraint, ...] = ()
    strip_whitespace: bool = False
    case_fold: Literal["lower", "upper"] | None = None

    kind = "string"
    expected = "a string"

    @cached_property
    def _checks(self) -> tuple[Constraint, ...]:
        ordered = (self.exact_len, self.min_len, self.max_len)
        return (*(c for c in ordered if c is not None), *self.patterns, *self.formats)

    def _parse(self, node: CanonicalValue) -> ValidationResult[str]:
        if not (isinstance(node, ScalarValue) and isinstance(node.value, str)):
            return type_mismatch(self.expected, type_label(node))

        value = node.value
        if self.strip_whitespace:
            value = value.strip()
        if self.case_fold == "lower":
            value = value.lower()
        elif self.case_fold == "upper":
            value = value.upper()

        return result_of(value, first_violation(self._checks, value))

    # ------------------------------------------------------------------------
    # Normalizers
    # ------------------------------------------------------------------------

    def trim(self) -> StringSchema:
        return replace(self, strip_whitespace=True)

    def to_lower_case(self) -> StringSchema:
        return replace(self, case_fold="lower")

    def to_upper_case(self) -> StringSchema:
        return replace(self, case_fold="upper")

    # ------------------------------------------------------------------------
    # Length
    # ------------------------------------------------------------------------

    def length(self, n: int, message: str | None = None) -> StringSchema:
        return replace(self, exact_len=ExactLength(n, message or f"String must be exactly {n} characters"))

    def min(self, n: int, message: str | None = None) -> StringSchema:
        return replace(self, min_len=MinLength(n, message or f"String must be at least {n} characters"))

    def max(self, n: int, message: str | None = None) -> StringSchema:
        return replace(self, max_len=MaxLength(n, message or f"String must be at most {n} characters"))

    def non_empty(self, message: str = "String cannot be empty") -> StringSchema:
        return self._with_format(NonEmpty(message, strip=True))

    # ------------------------------------------------------------------------
    # Patterns and formats
    # ------------------------------------------------------------------------

    def regex(self, pattern: str | re.Pattern, message: str = "String does not match pattern") -> StringSchema:
        return replace(self, patterns=(*self.patterns, Pattern.compile(pattern, message)))

    def email(self, message: str = "Invalid email format") -> StringSchema:
        return self._with_format(Pattern(EMAIL_PATTERN, message))

    def url(self, message: str = "Invalid URL format") -> StringSchema:
        return self._with_format(Predicate(is_url, message, "url"))

    def uuid(self, message: str = "Invalid UUID format") -> StringSchema:
        return self._with_format(Predicate(is_uuid, message, "uuid"))

    def cuid(self, message: str = "Invalid CUID format") -> StringSchema:
        return self._with_format(Pattern(CUID_PATTERN, message))

    def cuid2(self, message: str = "Invalid CUID2 format") -> StringSchema:
        return self._with_format(Pattern(CUID2_PATTERN, message))

    def ulid(self, message: str = "Invalid ULID format") -> StringSchema:
        return self._with_format(Pattern(ULID_PATTERN, message))

    def ip(self, version: Literal[4, 6] | None = None, message: str = "Invalid IP address") -> StringSchema:
        return self._with_format(Predicate(ip_checker(version), message, f"ip{version or ''}"))

    def datetime(self, message: str = "Invalid datetime format") -> StringSchema:
        return self._with_format(Predicate(is_iso_datetime, message, "datetime"))

    def starts_with(self, prefix: str, message: str | None = None) -> StringSchema:
        return self._with_format(Predicate(
            lambda s: s.startswith(prefix),
            message or f"String must start with '{prefix}'",
            "starts_with",
        ))

    def ends_with(self, suffix: str, message: str | None = None) -> StringSchema:
        return self._with_format(Predicate(
            lambda s: s.endswith(suffix),
            message or f"String must end with '{suffix}'",
            "ends_with",
        ))

    def includes(self, needle: str, message: str | None = None) -> StringSchema:
        return self._with_format(Predicate(
            lambda s: needle in s,
            message or f"String must contain '{needle}'",
            "includes",
        ))

    def _with_format(self, check: Constraint) -> StringSchema:
        return replace(self, formats=(*self.formats, check))
