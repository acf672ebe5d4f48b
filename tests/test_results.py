"""Validation Results: tests for Success/Failure, Issue paths and ValidationError.

Tests cover:
    - Success and Failure combinators (map, flat_map, unwrap_or, match)
    - Failure requires at least one issue
    - Issue.within prefixes the message and the path together
    - format_path renders dotted fields and bracketed indices
    - IssueCollector aggregation
    - ValidationError message, field_errors and to_dict
    - ErrorCode categories
"""

import pytest

from sod.errors import (
    ErrorCode,
    Failure,
    Issue,
    IssueCollector,
    Success,
    ValidationError,
    failure,
    format_path,
    from_exception,
    try_result,
    union_exhausted,
)


def _two_issue_failure() -> Failure:
    """Helper: failure with one root issue and one nested field issue."""
    return Failure((
        Issue("Unexpected keys: extra", ErrorCode.E2004_UNEXPECTED_KEY),
        Issue("Expected a string, got int", ErrorCode.E2001_TYPE_MISMATCH).within("name", "Field 'name'"),
    ))


# ─── Success ────────────────────────────────────────────────────────────────


def test_success_carries_value_and_no_errors():
    result = Success(3)
    assert result.is_ok()
    assert not result.is_err()
    assert result.value == 3
    assert result.errors == ()
    assert result.issues == ()


def test_success_map_and_flat_map():
    assert Success(2).map(lambda n: n * 10) == Success(20)
    assert Success(2).flat_map(lambda n: failure("nope")).is_err()
    assert Success(2).and_then(lambda n: Success(n + 1)) == Success(3)


def test_success_match_calls_ok_branch():
    assert Success("x").match(ok=str.upper, err=lambda issues: "err") == "X"


def test_success_supports_structural_pattern_matching():
    match Success(5):
        case Success(value):
            assert value == 5
        case Failure():
            pytest.fail("expected Success")


# ─── Failure ────────────────────────────────────────────────────────────────


def test_failure_requires_issues():
    with pytest.raises(ValueError):
        Failure(())


def test_failure_errors_and_summary():
    result = _two_issue_failure()
    assert result.errors == (
        "Unexpected keys: extra",
        "Field 'name': Expected a string, got int",
    )
    assert result.error == "Unexpected keys: extra; Field 'name': Expected a string, got int"


def test_failure_combinators_are_no_ops():
    result = failure("bad")
    assert result.map(lambda v: v + 1) is result
    assert result.flat_map(lambda v: Success(v)) is result
    assert result.unwrap_or("fallback") == "fallback"
    assert result.match(ok=lambda v: "ok", err=lambda issues: len(issues)) == 1


def test_failure_unwrap_raises_validation_error():
    with pytest.raises(ValidationError) as exc_info:
        failure("bad").unwrap()
    assert exc_info.value.errors == ("bad",)


def test_failure_iterates_to_nothing():
    assert list(failure("bad")) == []
    assert list(Success(1)) == [1]


# ─── Issues and paths ───────────────────────────────────────────────────────


def test_within_prefixes_message_and_path():
    issue = Issue("Expected a string, got int", ErrorCode.E2001_TYPE_MISMATCH)
    nested = issue.within(0, "[0]").within("tags", "Field 'tags'")
    assert nested.message == "Field 'tags': [0]: Expected a string, got int"
    assert nested.path == ("tags", 0)
    assert nested.code is ErrorCode.E2001_TYPE_MISMATCH
    assert nested.location == "tags[0]"


def test_format_path_renders_root_fields_and_indices():
    assert format_path(()) == "$"
    assert format_path(("users", 0, "email")) == "users[0].email"
    assert format_path((1, 2)) == "[1][2]"


def test_issue_to_dict():
    issue = Issue("Missing required field 'age'", ErrorCode.E2003_MISSING_REQUIRED_FIELD, ("age",))
    assert issue.to_dict() == {
        "message": "Missing required field 'age'",
        "code": "E2003_MISSING_REQUIRED_FIELD",
        "category": "validation",
        "location": "age",
    }


# ─── Collector ──────────────────────────────────────────────────────────────


def test_collector_result_is_success_when_empty():
    collector = IssueCollector()
    assert not collector
    assert collector.result([1, 2]) == Success([1, 2])


def test_collector_nests_child_failures_in_order():
    collector = IssueCollector()
    collector.nest(failure("first"), 0, "[0]")
    collector.nest(failure("second"), 2, "[2]")
    result = collector.result([])
    assert result.errors == ("[0]: first", "[2]: second")
    assert [issue.path for issue in result.issues] == [(0,), (2,)]


# ─── Helpers ────────────────────────────────────────────────────────────────


def test_from_exception_and_try_result():
    assert from_exception(KeyError("k")).errors == ("Unexpected error: 'k'",)
    assert try_result(lambda: 1 + 1) == Success(2)
    faulted = try_result(lambda: 1 / 0)
    assert faulted.errors == ("Unexpected error: division by zero",)
    assert faulted.issues[0].code is ErrorCode.E9001_UNEXPECTED_ERROR


def test_union_exhausted_joins_candidates():
    result = union_exhausted(["Expected a string, got int", "Expected a boolean, got int"])
    assert result.errors == (
        "None of the union schemas matched. Errors: "
        "Expected a string, got int OR Expected a boolean, got int",
    )


# ─── ValidationError ────────────────────────────────────────────────────────


def test_validation_error_message_lists_every_issue():
    error = ValidationError(issues=_two_issue_failure().issues)
    assert str(error) == (
        "Validation failed: Unexpected keys: extra; "
        "Field 'name': Expected a string, got int"
    )


def test_validation_error_groups_by_location():
    error = ValidationError(issues=_two_issue_failure().issues)
    assert error.field_errors == {
        "$": ["Unexpected keys: extra"],
        "name": ["Field 'name': Expected a string, got int"],
    }
    payload = error.to_dict()["error"]
    assert payload["issue_count"] == 2
    assert payload["issues"][1]["location"] == "name"


# ─── Error codes ────────────────────────────────────────────────────────────


@pytest.mark.parametrize("code, category", [
    (ErrorCode.E2001_TYPE_MISMATCH, "validation"),
    (ErrorCode.E2009_UNION_EXHAUSTED, "validation"),
    (ErrorCode.E2010_TRANSFORM_FAULT, "fault"),
    (ErrorCode.E2013_UNRESOLVED_REFERENCE, "fault"),
    (ErrorCode.E9001_UNEXPECTED_ERROR, "internal"),
])
def test_error_code_category(code, category):
    assert code.category == category
