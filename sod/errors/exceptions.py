"""Exceptions raised at the boundary of the engine.

``ValidationError`` is the aggregate raised by ``parse_or_throw`` and
``Failure.unwrap``. ``SchemaDefinitionError`` signals an invalid schema
configuration and is raised while building schemas, never while parsing.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .types import Issue


@dataclass
class ValidationError(Exception):
    """Aggregate validation failure carrying the full ordered issue list."""
    issues: tuple[Issue, ...] = ()
    message: str = field(init=False, default="")

    def __post_init__(self) -> None:
        from sod.config import get_settings

        joined = get_settings().ERROR_SEPARATOR.join(self.errors)
        self.message = f"Validation failed: {joined}"
        super().__init__(self.message)

    @property
    def errors(self) -> tuple[str, ...]:
        return tuple(issue.message for issue in self.issues)

    @property
    def field_errors(self) -> dict[str, list[str]]:
        """Errors grouped by location (``$`` for the root value)."""
        grouped: dict[str, list[str]] = {}
        for issue in self.issues:
            grouped.setdefault(issue.location, []).append(issue.message)
        return grouped

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": {
                "message": self.message,
                "issue_count": len(self.issues),
                "issues": [issue.to_dict() for issue in self.issues],
            }
        }

    def __str__(self) -> str:
        return self.message


class SchemaDefinitionError(ValueError):
    """A schema was configured in a way that can never parse correctly."""
