"""Engine internals: canonical input, constraints, coercion rules and the Schema base."""
from .base import MISSING, Schema
from .canonical import (
    CanonicalValue,
    MapValue,
    NullValue,
    ScalarValue,
    SequenceValue,
    canonicalize,
    register_adapter,
    unregister_adapter,
)

__all__ = [
    "MISSING",
    "Schema",
    "CanonicalValue",
    "MapValue",
    "NullValue",
    "ScalarValue",
    "SequenceValue",
    "canonicalize",
    "register_adapter",
    "unregister_adapter",
]
