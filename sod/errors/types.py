"""Validation Result Types

Success/Failure form the result monad every schema returns. A Failure carries
one or more Issues; each Issue knows its message, its ErrorCode and the path
of field names and indices that led to it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import (
    TYPE_CHECKING, Any, Callable, Generic, Iterator, NoReturn,
    TypeVar, Union, final,
)

if TYPE_CHECKING:
    from sod.errors.exceptions import ValidationError

T = TypeVar("T")
U = TypeVar("U")

PathSegment = Union[str, int]


class ErrorCode(Enum):
    """Hierarchical error code taxonomy.

    E2xxx: Validation errors raised while parsing input
    E9xxx: Internal/Unknown errors
    """
    # Validation (E2xxx)
    E2000_VALIDATION_GENERIC = 2000
    E2001_TYPE_MISMATCH = 2001
    E2002_NULL_NOT_ALLOWED = 2002
    E2003_MISSING_REQUIRED_FIELD = 2003
    E2004_UNEXPECTED_KEY = 2004
    E2005_CONSTRAINT_VIOLATION = 2005
    E2006_LENGTH_MISMATCH = 2006
    E2007_DISCRIMINATOR_MISSING = 2007
    E2008_DISCRIMINATOR_UNRECOGNIZED = 2008
    E2009_UNION_EXHAUSTED = 2009
    E2010_TRANSFORM_FAULT = 2010
    E2011_PREPROCESS_FAULT = 2011
    E2012_CONSTRUCTION_FAULT = 2012
    E2013_UNRESOLVED_REFERENCE = 2013

    # Internal (E9xxx)
    E9000_INTERNAL_GENERIC = 9000
    E9001_UNEXPECTED_ERROR = 9001

    @property
    def category(self) -> str:
        """Human-readable error category."""
        code = self.value
        if 2000 <= code < 2010:
            return "validation"
        if 2010 <= code < 3000:
            return "fault"
        return "internal"


def format_path(path: tuple[PathSegment, ...]) -> str:
    """Render a path as dotted notation with bracketed indices: ``users[0].email``."""
    if not path:
        return "$"
    parts: list[str] = []
    for segment in path:
        if isinstance(segment, int):
            parts.append(f"[{segment}]")
        elif parts:
            parts.append(f".{segment}")
        else:
            parts.append(str(segment))
    return "".join(parts)


@dataclass(frozen=True, slots=True)
class Issue:
    """A single validation problem.

    ``message`` is already prefixed with every enclosing label, e.g.
    ``"Field 'tags': [2]: Expected a string, got int"``.
    """
    message: str
    code: ErrorCode = ErrorCode.E2000_VALIDATION_GENERIC
    path: tuple[PathSegment, ...] = ()

    @property
    def location(self) -> str:
        return format_path(self.path)

    def within(self, segment: PathSegment, label: str) -> Issue:
        """Re-tag this issue as coming from a child at ``segment``."""
        return Issue(
            message=f"{label}: {self.message}",
            code=self.code,
            path=(segment, *self.path),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code.name,
            "category": self.code.category,
            "location": self.location,
        }

    def __str__(self) -> str:
        return self.message


@final
@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """Success variant of ValidationResult. Carries exactly one value."""
    value: T

    @property
    def errors(self) -> tuple[str, ...]:
        return ()

    @property
    def issues(self) -> tuple[Issue, ...]:
        return ()

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> ValidationResult[U]:
        """Transform the success value."""
        return Success(f(self.value))

    def flat_map(self, f: Callable[[T], ValidationResult[U]]) -> ValidationResult[U]:
        """Chain a step that may fail."""
        return f(self.value)

    def and_then(self, f: Callable[[T], ValidationResult[U]]) -> ValidationResult[U]:
        """Alias for flat_map."""
        return f(self.value)

    def match(
        self,
        ok: Callable[[T], U],
        err: Callable[[tuple[Issue, ...]], U],
    ) -> U:
        return ok(self.value)

    def __iter__(self) -> Iterator[T]:
        yield self.value


@final
@dataclass(frozen=True, slots=True)
class Failure:
    """Failure variant of ValidationResult. Carries one or more Issues, never a value."""
    issues: tuple[Issue, ...]

    def __post_init__(self) -> None:
        if not self.issues:
            raise ValueError("Failure requires at least one issue")

    @property
    def errors(self) -> tuple[str, ...]:
        """Ordered error messages."""
        return tuple(issue.message for issue in self.issues)

    @property
    def error(self) -> str:
        """All error messages joined into one summary line."""
        from sod.config import get_settings
        return get_settings().ERROR_SEPARATOR.join(self.errors)

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        """Raises ValidationError carrying every issue."""
        raise self.to_exception()

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, f: Callable[[Any], U]) -> Failure:
        """No-op for Failure."""
        return self

    def flat_map(self, f: Callable[[Any], ValidationResult[U]]) -> Failure:
        """No-op for Failure."""
        return self

    def and_then(self, f: Callable[[Any], ValidationResult[U]]) -> Failure:
        """No-op for Failure."""
        return self

    def match(
        self,
        ok: Callable[[Any], U],
        err: Callable[[tuple[Issue, ...]], U],
    ) -> U:
        return err(self.issues)

    def nested(self, segment: PathSegment, label: str) -> tuple[Issue, ...]:
        """Issues re-tagged as belonging to a child at ``segment``."""
        return tuple(issue.within(segment, label) for issue in self.issues)

    def to_exception(self) -> ValidationError:
        from sod.errors.exceptions import ValidationError
        return ValidationError(issues=self.issues)

    def __iter__(self) -> Iterator:
        return iter([])


ValidationResult = Union[Success[T], Failure]


def success(value: T) -> Success[T]:
    """Construct Success variant."""
    return Success(value)


def failure(
    message: str,
    code: ErrorCode = ErrorCode.E2000_VALIDATION_GENERIC,
    path: tuple[PathSegment, ...] = (),
) -> Failure:
    """Construct a Failure holding a single issue."""
    return Failure((Issue(message, code, path),))


def from_exception(
    exc: BaseException,
    code: ErrorCode = ErrorCode.E9001_UNEXPECTED_ERROR,
    prefix: str = "Unexpected error",
) -> Failure:
    """Convert an exception into a single-issue Failure."""
    return failure(f"{prefix}: {exc}", code)


def try_result(
    f: Callable[[], T],
    code: ErrorCode = ErrorCode.E9001_UNEXPECTED_ERROR,
    prefix: str = "Unexpected error",
) -> ValidationResult[T]:
    """Execute ``f`` and wrap its return value, converting exceptions to Failure."""
    try:
        return Success(f())
    except Exception as e:
        return from_exception(e, code=code, prefix=prefix)


@dataclass(slots=True)
class IssueCollector:
    """Accumulates child issues across independent sub-parts of one input."""
    issues: list[Issue] = field(default_factory=list)

    def add(self, issue: Issue) -> None:
        self.issues.append(issue)

    def extend(self, issues: tuple[Issue, ...] | list[Issue]) -> None:
        self.issues.extend(issues)

    def nest(self, result: Failure, segment: PathSegment, label: str) -> None:
        self.issues.extend(result.nested(segment, label))

    @property
    def has_issues(self) -> bool:
        return bool(self.issues)

    def __bool__(self) -> bool:
        return bool(self.issues)

    def to_failure(self) -> Failure:
        return Failure(tuple(self.issues))

    def result(self, value: T) -> ValidationResult[T]:
        """Failure if anything was collected, else Success(value)."""
        if self.issues:
            return Failure(tuple(self.issues))
        return Success(value)
