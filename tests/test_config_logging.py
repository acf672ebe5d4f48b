"""Configuration and Logging: tests for SOD_* settings and structlog setup.

Tests cover:
    - Settings defaults and environment overrides
    - get_settings is cached
    - ERROR_SEPARATOR and UNION_SEPARATOR change rendered messages
    - configure_logging installs one handler on the "sod" logger
    - JSON output carries library metadata and redacts sensitive keys
    - LoggerRegistry hands out one logger per domain
"""

import json
import logging

import sod
from sod.config import Settings, get_settings
from sod.errors import failure
from sod.logging import LoggerRegistry, configure_logging, get_logger, schema_logger


# ─── Settings ───────────────────────────────────────────────────────────────


def test_settings_defaults(fresh_settings):
    fresh_settings.delenv("SOD_LOG_LEVEL", raising=False)
    fresh_settings.delenv("SOD_LOG_JSON", raising=False)
    cfg = Settings(_env_file=None)
    assert cfg.LOG_LEVEL == "WARNING"
    assert cfg.LOG_JSON is False
    assert not cfg.is_verbose


def test_settings_read_environment(fresh_settings):
    fresh_settings.setenv("SOD_LOG_LEVEL", "debug")
    fresh_settings.setenv("SOD_LOG_JSON", "true")
    cfg = Settings(_env_file=None)
    assert cfg.is_verbose
    assert cfg.LOG_JSON is True


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


def test_separators_shape_messages(fresh_settings):
    fresh_settings.setenv("SOD_ERROR_SEPARATOR", " | ")
    fresh_settings.setenv("SOD_UNION_SEPARATOR", " / ")
    result = sod.union(sod.string(), sod.boolean()).parse(1)
    assert result.errors == (
        "None of the union schemas matched. Errors: Expected a string, got int / Expected a boolean, got int",
    )
    two = failure("a").issues + failure("b").issues
    assert sod.Failure(two).error == "a | b"


# ─── Logging ────────────────────────────────────────────────────────────────


def test_configure_logging_installs_handler(isolated_logging):
    configure_logging(level="DEBUG", json_logs=False)
    sod_logger = logging.getLogger("sod")
    assert sod_logger.level == logging.DEBUG
    assert len(sod_logger.handlers) == 1
    assert sod_logger.propagate is False


def test_json_logs_carry_metadata_and_redact(isolated_logging, capsys):
    configure_logging(level="INFO", json_logs=True)
    get_logger("sod.tests").info("schema_checked", password="hunter2", fields=2)
    line = capsys.readouterr().out.strip().splitlines()[-1]
    payload = json.loads(line)
    assert payload["event"] == "schema_checked"
    assert payload["library"] == "sod"
    assert payload["password"] == "[REDACTED]"
    assert payload["fields"] == 2
    assert payload["level"] == "info"


def test_logger_registry_reuses_loggers():
    assert schema_logger() is LoggerRegistry.get("schema")
    assert LoggerRegistry.get("registry") is not LoggerRegistry.get("schema")
