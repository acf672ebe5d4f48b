"""Structured Logging for sod

The library never configures logging on import. Loggers wrap the standard
library logger of the same name, so a host application that has not called
``configure_logging`` only sees warnings and above through its own handlers.

Call ``configure_logging`` from scripts or tests that want sod's own
rendering:
- Colored, human-readable console output
- JSON structured output
- Context bound through ``structlog.contextvars`` merged into every event
"""
import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor


def _censor_sensitive_keys(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Processor that redacts sensitive information from logged inputs."""
    sensitive_keys = {"password", "token", "secret", "authorization", "cookie", "api_key"}

    def _redact(obj: Any, depth: int = 0) -> Any:
        if depth > 5:
            return obj
        if isinstance(obj, dict):
            return {
                k: "[REDACTED]" if str(k).lower() in sensitive_keys else _redact(v, depth + 1)
                for k, v in obj.items()
            }
        if isinstance(obj, list):
            return [_redact(item, depth + 1) for item in obj]
        return obj

    return _redact(event_dict)


def _add_library_info(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Processor that adds library metadata."""
    event_dict.setdefault("library", "sod")
    event_dict.setdefault("version", "0.1.0")
    return event_dict


def get_shared_processors() -> list[Processor]:
    """Processors used in both console and JSON configurations."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _add_library_info,
        _censor_sensitive_keys,
    ]


def configure_logging(
    level: str | None = None,
    json_logs: bool | None = None,
) -> None:
    """Configure the logging system.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Defaults to
            ``settings.LOG_LEVEL``.
        json_logs: If True, output JSON. If False, colored console output.
            Defaults to ``settings.LOG_JSON``.
    """
    from sod.config import get_settings

    cfg = get_settings()
    level = level or cfg.LOG_LEVEL
    json_logs = cfg.LOG_JSON if json_logs is None else json_logs
    log_level = getattr(logging, level.upper(), logging.WARNING)

    shared_processors = get_shared_processors()

    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    sod_logger = logging.getLogger("sod")
    sod_logger.handlers = [handler]
    sod_logger.setLevel(log_level)
    sod_logger.propagate = False


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ from the calling module)

    Returns:
        structlog logger bound to the stdlib logger of the same name
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


class LoggerRegistry:
    """Registry of pre-configured loggers for the library's domains."""

    _loggers: dict[str, structlog.stdlib.BoundLogger] = {}

    @classmethod
    def get(cls, name: str) -> structlog.stdlib.BoundLogger:
        """Get or create a logger for the given domain."""
        if name not in cls._loggers:
            cls._loggers[name] = get_logger(f"sod.{name}")
        return cls._loggers[name]


def schema_logger() -> structlog.stdlib.BoundLogger:
    """Logger for parse entry points and combinator events."""
    return LoggerRegistry.get("schema")


def registry_logger() -> structlog.stdlib.BoundLogger:
    """Logger for named-schema registration and resolution."""
    return LoggerRegistry.get("registry")
