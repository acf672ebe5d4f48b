"""Literal, Enum and Special Schemas: tests for exact values and the catch-all schemas.

Tests cover:
    - Literals match by value and type; strings convert to the literal's type
    - Enum members by member, name (any case) or value, narrowed by extract/exclude
    - Native enums compare str() of the input
    - any/unknown pass everything through, null included
    - never always fails; null and void accept only null
"""

import pytest

import sod
from sod.errors import SchemaDefinitionError
from tests.sample_models import Color, Level


def _errors(schema, value):
    """Helper: error messages from parsing value (empty tuple on success)."""
    return schema.parse(value).errors


# ─── Literal ────────────────────────────────────────────────────────────────


def test_string_literal():
    assert sod.literal("admin").parse("admin").value == "admin"
    assert _errors(sod.literal("admin"), "user") == ("Expected literal value 'admin', got 'user'",)
    assert _errors(sod.literal("admin"), None) == ("Expected literal value 'admin', got null",)


def test_literal_converts_strings_to_its_type():
    assert sod.literal(5).parse("5").value == 5
    assert sod.literal(True).parse("true").value is True
    assert sod.literal(1.5).parse("1.5").value == 1.5


def test_literal_keeps_booleans_apart_from_ints():
    assert _errors(sod.literal(5), True) == ("Expected literal value '5', got 'True'",)
    assert sod.literal(1).parse(True).is_err()
    assert sod.literal(True).parse(1).is_err()


def test_none_literal_accepts_null():
    assert sod.literal(None).parse(None) == sod.Success(None)


# ─── Enum ───────────────────────────────────────────────────────────────────


def test_enum_accepts_member_name_and_value():
    schema = sod.enum(Color)
    assert schema.parse(Color.BLUE).value is Color.BLUE
    assert schema.parse("red").value is Color.RED
    assert schema.parse("Green").value is Color.GREEN


def test_enum_rejects_unknown_values():
    assert _errors(sod.enum(Color), "purple") == ("Invalid enum value. Expected one of: RED, GREEN, BLUE",)
    assert _errors(sod.enum(Color), None) == ("Expected an enum value, got null",)


def test_int_enum_by_value():
    assert sod.enum(Level).parse(2).value is Level.HIGH
    assert sod.enum(Level).parse("low").value is Level.LOW


def test_enum_narrowing():
    assert _errors(sod.enum(Color, Color.RED), "blue") == ("Invalid enum value. Expected one of: RED",)
    picked = sod.enum(Color).extract("RED", "GREEN")
    assert picked.options == ("RED", "GREEN")
    assert picked.parse("blue").is_err()
    assert sod.enum(Color).exclude("RED").parse("red").is_err()


def test_enum_narrowed_to_nothing_rejects_everything():
    emptied = sod.enum(Color).exclude("RED", "GREEN", "BLUE")
    assert emptied.options == ()
    assert emptied.parse("red").is_err()
    assert sod.enum(Color).extract("RED").exclude("RED").parse(Color.RED).is_err()


def test_enum_narrowing_rejects_unknown_names():
    with pytest.raises(SchemaDefinitionError):
        sod.enum(Color).extract("PURPLE")
    with pytest.raises(SchemaDefinitionError):
        sod.enum(Color).exclude("RED", "TEAL")


def test_native_enum():
    schema = sod.native_enum("a", "b")
    assert schema.parse("a").value == "a"
    assert _errors(schema, "c") == ("Invalid value. Expected one of: 'a', 'b'",)
    assert sod.native_enum("1", "2").parse(1).value == "1"


# ─── Special ────────────────────────────────────────────────────────────────


def test_any_and_unknown_pass_everything():
    payload = {"x": [1, 2]}
    assert sod.any_().parse(payload).value is payload
    assert sod.any_().parse(None) == sod.Success(None)
    assert sod.unknown().parse(3).value == 3


def test_any_still_runs_refinements():
    schema = sod.any_().refine(lambda v: v is not None, "Value is required")
    assert _errors(schema, None) == ("Value is required",)


def test_never_always_fails():
    assert _errors(sod.never(), "x") == ("This value should never be provided",)
    assert _errors(sod.never("Not allowed"), None) == ("Not allowed",)


def test_null_and_void():
    assert sod.null().parse(None) == sod.Success(None)
    assert _errors(sod.null(), 0) == ("Expected null, got int",)
    assert sod.void().parse(None).is_ok()
    assert _errors(sod.void(), "x") == ("Expected void (null), got a value",)
