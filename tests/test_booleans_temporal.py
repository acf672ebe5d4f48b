"""Boolean and Temporal Schemas: tests for booleans, datetimes, dates, times and durations.

Tests cover:
    - Booleans are strict unless coerce() enables tokens and integers
    - Datetimes from ISO strings and dates; timestamps only when coercing
    - Dates truncate datetimes; times keep the time of day
    - Durations from ISO-8601, unit and clock strings
    - Inclusive min/max with their messages
    - Out-of-range and non-finite inputs yield Failures, never exceptions
"""

from datetime import date, datetime, time, timedelta, timezone

import pytest

import sod


def _errors(schema, value):
    """Helper: error messages from parsing value (empty tuple on success)."""
    return schema.parse(value).errors


# ─── Boolean ────────────────────────────────────────────────────────────────


def test_boolean_is_strict_by_default():
    assert sod.boolean().parse(True).value is True
    assert _errors(sod.boolean(), "true") == ("Expected a boolean, got str",)
    assert _errors(sod.boolean(), 1) == ("Expected a boolean, got int",)
    assert _errors(sod.boolean(), None) == ("Expected a boolean, got null",)


@pytest.mark.parametrize("value, expected", [
    ("TRUE", True),
    (" yes ", True),
    ("on", True),
    ("off", False),
    ("", False),
    ("0", False),
    (0, False),
    (5, True),
])
def test_boolean_coerce_tokens(value, expected):
    assert sod.boolean().coerce().parse(value).value is expected


def test_boolean_coerce_rejects_unknown_tokens():
    schema = sod.boolean().coerce()
    assert _errors(schema, "maybe") == ("Expected a boolean, got 'maybe'",)
    assert _errors(schema, 1.0) == ("Expected a boolean, got float",)


# ─── Datetime ───────────────────────────────────────────────────────────────


def test_datetime_from_iso_string():
    assert sod.datetime().parse("2024-03-01T12:00:00Z").value == datetime(2024, 3, 1, 12, tzinfo=timezone.utc)
    assert sod.datetime().parse("2024-03-01T12:00:00").value == datetime(2024, 3, 1, 12)


def test_datetime_from_date_is_midnight():
    assert sod.datetime().parse(date(2024, 3, 1)).value == datetime(2024, 3, 1)


def test_datetime_rejects_bad_strings_and_numbers():
    assert _errors(sod.datetime(), "not a date") == ("Expected a valid date, got 'not a date'",)
    assert _errors(sod.datetime(), 1700000000) == ("Expected a date, got int",)


def test_datetime_coerce_accepts_timestamps():
    assert sod.datetime().coerce().parse(0).value == datetime(1970, 1, 1, tzinfo=timezone.utc)


def test_datetime_bounds():
    schema = sod.datetime().min(datetime(2024, 1, 1)).max(datetime(2024, 12, 31))
    assert _errors(schema, "2023-12-31T00:00:00") == ("Date must be after 2024-01-01",)
    assert _errors(schema, "2025-01-01T00:00:00") == ("Date must be before 2024-12-31",)
    assert schema.parse("2024-06-01T08:00:00").is_ok()


# ─── Date and time ──────────────────────────────────────────────────────────


def test_date_accepts_dates_and_truncates_datetimes():
    assert sod.date().parse("2024-02-29").value == date(2024, 2, 29)
    assert sod.date().parse("2024-02-29T10:00:00").value == date(2024, 2, 29)
    assert sod.date().parse(datetime(2024, 2, 29, 23, 59)).value == date(2024, 2, 29)


def test_date_coerce_and_bounds():
    assert sod.date().coerce().parse(86400).value == date(1970, 1, 2)
    assert _errors(sod.date().max(date(2024, 1, 1)), "2024-06-01") == ("Date must be before 2024-01-01",)
    assert _errors(sod.date(), "2024-13-01") == ("Expected a valid date, got '2024-13-01'",)


def test_time_of_day():
    assert sod.time().parse("10:30").value == time(10, 30)
    assert sod.time().parse(datetime(2024, 1, 1, 7, 15)).value == time(7, 15)
    assert _errors(sod.time().min(time(9)), "08:00") == ("Time must be at least 09:00:00",)
    assert _errors(sod.time(), "noon") == ("Expected a valid time, got 'noon'",)


# ─── Duration ───────────────────────────────────────────────────────────────


@pytest.mark.parametrize("text, expected", [
    ("PT1H30M", timedelta(hours=1, minutes=30)),
    ("P1DT2H", timedelta(days=1, hours=2)),
    ("P1W", timedelta(weeks=1)),
    ("1h30m", timedelta(hours=1, minutes=30)),
    ("2 days", timedelta(days=2)),
    ("01:30:00", timedelta(hours=1, minutes=30)),
    ("00:00:15.5", timedelta(seconds=15.5)),
])
def test_duration_formats(text, expected):
    assert sod.duration().parse(text).value == expected


def test_duration_numbers_need_coerce():
    assert _errors(sod.duration(), 90) == ("Expected a duration, got int",)
    assert sod.duration().coerce().parse(90).value == timedelta(seconds=90)


def test_duration_rejects_garbage_and_bounds():
    assert _errors(sod.duration(), "soon") == ("Expected a valid duration, got 'soon'",)
    assert _errors(sod.duration(), "PT") == ("Expected a valid duration, got 'PT'",)
    assert _errors(sod.duration().max(timedelta(hours=1)), "2h") == ("Duration must be at most 1:00:00",)


@pytest.mark.parametrize("text", ["99999999999d", "P99999999999D", "99999999999:00"])
def test_duration_out_of_range_strings_fail(text):
    assert _errors(sod.duration(), text) == (f"Expected a valid duration, got '{text}'",)


@pytest.mark.parametrize("value, shown", [
    (float("nan"), "nan"),
    (float("inf"), "inf"),
    (10 ** 20, "100000000000000000000"),
])
def test_duration_coerce_rejects_unrepresentable_numbers(value, shown):
    assert _errors(sod.duration().coerce(), value) == (f"Expected a valid duration, got '{shown}'",)


def test_datetime_coerce_rejects_unrepresentable_timestamps():
    assert _errors(sod.datetime().coerce(), float("nan")) == ("Invalid timestamp",)
    assert _errors(sod.datetime().coerce(), 10 ** 20) == ("Invalid timestamp",)
