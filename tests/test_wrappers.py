"""Wrappers and Modifiers: tests for transform, pipeline, catch, brand and the shared modifiers.

Tests cover:
    - transform maps successful output; exceptions become "Transform failed"
    - pipeline stops at the first failing stage
    - catch replaces any failure or fault with its fallback
    - brand keeps values unchanged
    - optional / nullable / nullish / required / default
    - refinements stop at the first failure
    - preprocess runs first, chains, and reports its own faults
"""

import pytest

import sod
from sod.errors import ErrorCode, SchemaDefinitionError
from tests.sample_models import Exploding


def _errors(schema, value):
    """Helper: error messages from parsing value (empty tuple on success)."""
    return schema.parse(value).errors


# ─── Transform ──────────────────────────────────────────────────────────────


def test_transform_maps_output():
    assert sod.string().transform(len).parse("abc").value == 3
    assert sod.transform(sod.integer(), lambda n: n + 1).parse("1").value == 2


def test_transform_skips_failed_input():
    assert _errors(sod.string().transform(len), 1) == ("Expected a string, got int",)


def test_transform_fault_becomes_failure():
    result = sod.string().transform(int).parse("x")
    assert result.errors[0].startswith("Transform failed: invalid literal for int()")
    assert result.issues[0].code is ErrorCode.E2010_TRANSFORM_FAULT


# ─── Pipeline ───────────────────────────────────────────────────────────────


def test_pipeline_feeds_each_stage():
    assert sod.string().trim().pipe(sod.integer().positive()).parse(" 42 ").value == 42


def test_pipeline_returns_first_failure_only():
    schema = sod.pipeline(sod.integer().min(10), sod.integer().max(3))
    assert _errors(schema, 5) == ("Number must be at least 10",)


def test_empty_pipeline_is_rejected():
    with pytest.raises(SchemaDefinitionError):
        sod.pipeline()


# ─── Catch ──────────────────────────────────────────────────────────────────


def test_catch_replaces_failures():
    assert sod.integer().catch(0).parse("x").value == 0
    assert sod.integer().catch(0).parse(None).value == 0
    assert sod.integer().catch(0).parse("7").value == 7


def test_catch_replaces_faults():
    assert sod.catch(Exploding(), "safe").parse(1) == sod.Success("safe")


# ─── Brand ──────────────────────────────────────────────────────────────────


def test_brand_keeps_values():
    user_id = sod.string().uuid().brand("UserId")
    assert user_id.brand_name == "UserId"
    assert user_id.parse("123e4567-e89b-12d3-a456-426614174000").is_ok()
    assert user_id.parse("nope").errors == ("Invalid UUID format",)
    assert user_id.unwrap().kind == "string"


# ─── Null handling ──────────────────────────────────────────────────────────


def test_optional_nullable_and_nullish_accept_null():
    for schema in (sod.string().optional(), sod.nullable(sod.string()), sod.string().nullish()):
        assert schema.parse(None) == sod.Success(None)
        assert schema.parse("a").value == "a"


def test_required_undoes_null_modifiers():
    assert sod.optional(sod.string()).required().parse(None).is_err()
    assert sod.string().default("x").required().parse(None).is_err()


def test_default_value():
    schema = sod.integer().default(5)
    assert schema.parse(None).value == 5
    assert schema.parse("6").value == 6
    assert schema.has_default


def test_modifiers_do_not_mutate():
    base = sod.string()
    base.optional()
    base.default("x")
    assert _errors(base, None) == ("Expected a string, got null",)


# ─── Refinements ────────────────────────────────────────────────────────────


def test_refinements_stop_at_first_failure():
    schema = sod.integer().refine(lambda n: n > 0, "Must be positive").refine(lambda n: n < 10, "Must be small")
    assert _errors(schema, -1) == ("Must be positive",)
    assert _errors(schema, 20) == ("Must be small",)
    assert schema.parse(5).value == 5


# ─── Preprocess ─────────────────────────────────────────────────────────────


def test_preprocess_runs_before_type_check():
    schema = sod.preprocess(lambda v: v.replace("-", "") if isinstance(v, str) else v, sod.string())
    assert schema.parse("a-b").value == "ab"
    assert sod.integer().preprocess(lambda v: v["n"]).parse({"n": "3"}).value == 3


def test_preprocess_steps_chain_in_order():
    schema = sod.string().preprocess(str.strip).preprocess(str.upper)
    assert schema.parse(" a ").value == "A"


def test_preprocess_fault_becomes_failure():
    result = sod.string().preprocess(lambda v: v.nope).parse("x")
    assert result.errors[0].startswith("Preprocess failed:")
    assert result.issues[0].code is ErrorCode.E2011_PREPROCESS_FAULT


def test_describe():
    assert sod.string().describe("Display name").description == "Display name"
