from __future__ import annotations

from dataclasses import dataclass, replace

from sod.core.base import Schema
from sod.core.canonical import CanonicalValue, ScalarValue, type_label
from sod.core.coercion import StringToBool
from sod.errors import Success, ValidationResult, invalid_value, type_mismatch

_STRING_TO_BOOL = StringToBool()


@dataclass(frozen=True, eq=False)
class BooleanSchema(Schema[bool]):
    """Native booleans only, unless ``coerce()`` enables tokens and integers."""
    lenient: bool = False

    kind = "boolean"
    expected = "a boolean"

    def _parse(self, node: CanonicalValue) -> ValidationResult[bool]:
        if isinstance(node, ScalarValue) and isinstance(node.value, bool):
            return Success(node.value)
        if not self.lenient or not isinstance(node, ScalarValue):
            return type_mismatch(self.expected, type_label(node))

        raw = node.value
        if not isinstance(raw, (str, int)):
            return type_mismatch(self.expected, type_label(node))
        converted = _STRING_TO_BOOL.coerce(raw)
        if converted.is_err():
            return invalid_value(f"Expected a boolean, got '{raw}'")
        return converted

    def coerce(self) -> BooleanSchema:
        return replace(self, lenient=True)
