"""Root conftest: shared test configuration."""

import logging
import os

import pytest
import structlog

# Keep a developer's .env or shell from changing error rendering under test
os.environ.setdefault("SOD_ERROR_SEPARATOR", "; ")
os.environ.setdefault("SOD_UNION_SEPARATOR", " OR ")

import sod  # noqa: E402
from sod.config import get_settings  # noqa: E402


@pytest.fixture
def user_schema():
    return sod.object_({
        "name": sod.string().min(1),
        "age": sod.integer().non_negative(),
    })


@pytest.fixture
def shapes():
    """Returns (circle, rectangle, union of both keyed on "type")."""
    circle = sod.object_({
        "type": sod.literal("circle"),
        "radius": sod.float_().positive(),
    })
    rectangle = sod.object_({
        "type": sod.literal("rectangle"),
        "width": sod.float_().positive(),
        "height": sod.float_().positive(),
    })
    return circle, rectangle, sod.discriminated_union("type", {
        "circle": circle,
        "rectangle": rectangle,
    })


@pytest.fixture
def fresh_settings(monkeypatch):
    """Clear the settings cache around a test that changes SOD_* variables."""
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


@pytest.fixture
def isolated_logging():
    """Undo configure_logging so later tests see the library defaults."""
    yield
    structlog.reset_defaults()
    sod_logger = logging.getLogger("sod")
    sod_logger.handlers = []
    sod_logger.setLevel(logging.NOTSET)
    sod_logger.propagate = True
