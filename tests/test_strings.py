"""String Schema: tests for type checks, normalizers, length and format checks.

Tests cover:
    - Only str is accepted; null and other types name what they got
    - trim runs before length checks, case folding after trim
    - Check order: exact length, min, max, regex, formats in declaration order
    - Only the first failing check is reported
    - Built-in formats (email, url, uuid, cuid, cuid2, ulid, ip, datetime)
    - Refinements and configuration immutability
"""

import pytest

import sod


def _errors(schema, value):
    """Helper: error messages from parsing value (empty tuple on success)."""
    return schema.parse(value).errors


# ─── Type check ─────────────────────────────────────────────────────────────


def test_accepts_strings():
    assert sod.string().parse("hi") == sod.Success("hi")


def test_rejects_non_strings_and_null():
    assert _errors(sod.string(), 5) == ("Expected a string, got int",)
    assert _errors(sod.string(), ["a"]) == ("Expected a string, got list",)
    assert _errors(sod.string(), None) == ("Expected a string, got null",)


def test_rejects_bytes():
    assert _errors(sod.string(), b"hi") == ("Expected a string, got bytes",)


# ─── Normalizers ────────────────────────────────────────────────────────────


def test_trim_runs_before_length_checks():
    schema = sod.string().trim().min(3)
    assert _errors(schema, "  ab  ") == ("String must be at least 3 characters",)
    assert schema.parse("  abc  ").value == "abc"


def test_case_folding():
    assert sod.string().to_lower_case().parse("HeLLo").value == "hello"
    assert sod.string().trim().to_upper_case().parse(" abc ").value == "ABC"


# ─── Length ─────────────────────────────────────────────────────────────────


def test_min_and_max():
    schema = sod.string().min(2).max(4)
    assert _errors(schema, "a") == ("String must be at least 2 characters",)
    assert _errors(schema, "abcde") == ("String must be at most 4 characters",)
    assert schema.parse("abc").is_ok()


def test_exact_length_is_checked_first():
    schema = sod.string().max(3).length(5)
    assert _errors(schema, "ab") == ("String must be exactly 5 characters",)


def test_non_empty_rejects_whitespace_only():
    assert _errors(sod.string().non_empty(), "   ") == ("String cannot be empty",)
    assert sod.string().non_empty().parse(" a ").value == " a "


def test_custom_messages():
    assert _errors(sod.string().min(3, "Too short"), "a") == ("Too short",)


# ─── Patterns and formats ───────────────────────────────────────────────────


def test_regex():
    schema = sod.string().regex(r"^\d+$")
    assert schema.parse("123").is_ok()
    assert _errors(schema, "12a") == ("String does not match pattern",)


@pytest.mark.parametrize("value, ok", [
    ("ada@example.com", True),
    ("first.last+tag@sub.example.co", True),
    ("nope", False),
    ("a@b", False),
])
def test_email(value, ok):
    result = sod.string().email().parse(value)
    assert result.is_ok() is ok
    if not ok:
        assert result.errors == ("Invalid email format",)


@pytest.mark.parametrize("value, ok", [
    ("https://example.com/path?q=1", True),
    ("http://localhost:8000", True),
    ("ftp://example.com", False),
    ("example.com", False),
])
def test_url(value, ok):
    assert sod.string().url().parse(value).is_ok() is ok


def test_uuid():
    schema = sod.string().uuid()
    assert schema.parse("123e4567-e89b-12d3-a456-426614174000").is_ok()
    assert _errors(schema, "xyz") == ("Invalid UUID format",)


def test_identifier_formats():
    assert sod.string().cuid().parse("c" + "a1" * 12).is_ok()
    assert _errors(sod.string().cuid(), "x" * 25) == ("Invalid CUID format",)
    assert sod.string().cuid2().parse("a" * 24).is_ok()
    assert _errors(sod.string().cuid2(), "ABC") == ("Invalid CUID2 format",)
    assert sod.string().ulid().parse("01ARZ3NDEKTSV4RRFFQ69G5FAV").is_ok()
    assert _errors(sod.string().ulid(), "01arz3") == ("Invalid ULID format",)


def test_ip_versions():
    assert sod.string().ip().parse("192.168.0.1").is_ok()
    assert sod.string().ip().parse("::1").is_ok()
    assert sod.string().ip(version=6).parse("::1").is_ok()
    assert _errors(sod.string().ip(version=4), "::1") == ("Invalid IP address",)
    assert _errors(sod.string().ip(), "300.1.1.1") == ("Invalid IP address",)


def test_iso_datetime_format_keeps_the_string():
    schema = sod.string().datetime()
    assert schema.parse("2024-01-15T10:30:00Z").value == "2024-01-15T10:30:00Z"
    assert _errors(schema, "yesterday") == ("Invalid datetime format",)


def test_affix_checks():
    assert _errors(sod.string().starts_with("ab"), "xab") == ("String must start with 'ab'",)
    assert _errors(sod.string().ends_with("z"), "zab") == ("String must end with 'z'",)
    assert _errors(sod.string().includes("@"), "abc") == ("String must contain '@'",)


def test_formats_run_in_declaration_order():
    schema = sod.string().ends_with("z").starts_with("a")
    assert _errors(schema, "bbb") == ("String must end with 'z'",)


def test_only_first_failing_check_is_reported():
    assert _errors(sod.string().min(5).email(), "x") == ("String must be at least 5 characters",)


# ─── Refinements and immutability ───────────────────────────────────────────


def test_refine_runs_after_checks():
    schema = sod.string().min(2).refine(str.islower, "Must be lowercase")
    assert _errors(schema, "A") == ("String must be at least 2 characters",)
    assert _errors(schema, "AB") == ("Must be lowercase",)
    assert schema.parse("ab").is_ok()


def test_refine_that_raises_becomes_failure():
    schema = sod.string().refine(lambda s: 1 / 0)
    assert _errors(schema, "a") == ("Invalid value: division by zero",)


def test_builders_do_not_mutate():
    base = sod.string()
    longer = base.min(3)
    assert base.parse("a").is_ok()
    assert longer.parse("a").is_err()
