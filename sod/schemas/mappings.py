"""Record and map schemas.

Both walk every entry and keep going after a failure, so one parse reports
every bad key and every bad value. A record's keys are strings; a map's keys
are whatever its key schema produces.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sod.core.base import Schema
from sod.core.canonical import CanonicalValue, as_map, type_label
from sod.errors import IssueCollector, ValidationResult, type_mismatch


def _parse_entries(
    entries: list[tuple[Any, Any]],
    key_schema: Schema[Any] | None,
    value_schema: Schema[Any],
    collector: IssueCollector,
    stringify_keys: bool,
) -> dict[Any, Any]:
    parsed: dict[Any, Any] = {}
    for raw_key, raw_value in entries:
        label_key = str(raw_key)
        key = label_key if stringify_keys else raw_key
        if key_schema is not None:
            key_result = key_schema.parse(key)
            if key_result.is_err():
                collector.nest(key_result, label_key, f"Key '{label_key}'")
                continue
            key = key_result.unwrap()

        value_result = value_schema.parse(raw_value)
        if value_result.is_err():
            collector.nest(value_result, label_key, f"Value for key '{label_key}'")
            continue
        parsed[key] = value_result.unwrap()
    return parsed


@dataclass(frozen=True, eq=False)
class RecordSchema(Schema[dict]):
    """String-keyed dictionary whose values share one schema.

    Non-string input keys are converted with ``str`` before the optional key
    schema sees them.
    """
    value_schema: Schema[Any] | None = None
    key_schema: Schema[Any] | None = None

    kind = "record"
    expected = "a record/dictionary"

    def _parse(self, node: CanonicalValue) -> ValidationResult[dict]:
        data = as_map(node)
        if data is None:
            return type_mismatch("a dictionary", type_label(node))

        collector = IssueCollector()
        entries = [(k, data.get(k)) for k in data.keys()]
        parsed = _parse_entries(entries, self.key_schema, self.value_schema, collector, stringify_keys=True)
        return collector.result(parsed)


@dataclass(frozen=True, eq=False)
class MapSchema(Schema[dict]):
    """Dictionary with schema-parsed keys of any type."""
    key_schema: Schema[Any] | None = None
    value_schema: Schema[Any] | None = None

    kind = "map"
    expected = "a map"

    def _parse(self, node: CanonicalValue) -> ValidationResult[dict]:
        data = as_map(node)
        if data is None:
            return type_mismatch(self.expected, type_label(node))

        collector = IssueCollector()
        entries = [(k, data.get(k)) for k in data.keys()]
        parsed = _parse_entries(entries, self.key_schema, self.value_schema, collector, stringify_keys=False)
        return collector.result(parsed)
