"""Structured logging configuration for the recipebox application."""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

from recipebox.config import Settings, get_settings

# Context variables bound per request and per shopping-list import
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
user_id_ctx: ContextVar[str | None] = ContextVar("user_id", default=None)
list_id_ctx: ContextVar[str | None] = ContextVar("list_id", default=None)

_CONTEXT_VARS: dict[str, ContextVar] = {
    "request_id": request_id_ctx,
    "user_id": user_id_ctx,
    "list_id": list_id_ctx,
}

# Short labels and truncation used by the text formatter
_TEXT_LABELS = (("request_id", "req", 8), ("user_id", "user", None), ("list_id", "list", 8))


def current_context() -> dict[str, str]:
    """Logging context values that are currently set."""
    return {name: value for name, var in _CONTEXT_VARS.items() if (value := var.get()) is not None}


class StructuredJsonFormatter(logging.Formatter):
    """One JSON object per line, for log shipping in production."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **current_context(),
            **getattr(record, "extra_data", {}),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["location"] = {
            "file": record.filename,
            "line": record.lineno,
            "function": record.funcName,
        }

        return json.dumps(log_data, default=str)


class ContextualFormatter(logging.Formatter):
    """Human-readable formatter with context for development."""

    def format(self, record: logging.LogRecord) -> str:
        context = current_context()
        parts = [
            f"{label}={context[name][:width] if width else context[name]}"
            for name, label, width in _TEXT_LABELS
            if name in context
        ]
        context_str = f" [{', '.join(parts)}]" if parts else ""

        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        formatted = (
            f"{timestamp} | {record.levelname.ljust(8)} | {record.name}{context_str} | "
            f"{record.getMessage()}"
        )

        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            formatted += " " + " ".join(f"{key}={value}" for key, value in extra_data.items())

        if record.exc_info:
            formatted += "\n" + self.formatException(record.exc_info)

        return formatted


class ContextLogger(logging.LoggerAdapter):
    """
    Logger adapter for structured fields.

    Keyword ``extra`` values are collected under ``record.extra_data`` so the
    formatters can render them next to the message.
    """

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        extra_data = dict(kwargs.pop("extra", None) or {})
        kwargs["extra"] = {"extra_data": extra_data}
        return msg, kwargs


def get_logger(name: str) -> ContextLogger:
    """Get a context-aware logger for the given module name."""
    return ContextLogger(logging.getLogger(name), {})


def configure_logging(
    settings: Settings | None = None,
    log_file: str | None = None,
) -> None:
    """
    Configure the root logger from application settings.

    JSON output is used when ``LOG_FORMAT=json`` or when running in
    production; otherwise the contextual text format.

    Args:
        settings: Settings to read level and format from; defaults to the
            cached application settings.
        log_file: Optional file path to write logs to as well.
    """
    settings = settings or get_settings()

    level_str = settings.log_level.upper()
    level = getattr(logging, level_str, logging.INFO)
    json_format = settings.log_format.lower() == "json" or (
        settings.environment.lower() == "production" and not settings.log_format
    )

    formatter: logging.Formatter = (
        StructuredJsonFormatter() if json_format else ContextualFormatter()
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(level)
        root_logger.addHandler(handler)

    # Third-party loggers are quieter than our own
    module_levels = {
        "recipebox": level,
        "httpx": logging.WARNING,
        "httpcore": logging.WARNING,
        "sqlalchemy.engine": logging.WARNING,
        "uvicorn": logging.INFO,
        "uvicorn.access": logging.WARNING,
    }
    for module_name, module_level in module_levels.items():
        logging.getLogger(module_name).setLevel(module_level)

    get_logger(__name__).info(
        f"Logging configured: level={level_str}, format={'json' if json_format else 'text'}"
    )


def set_context(
    request_id: str | None = None,
    user_id: str | None = None,
    list_id: str | None = None,
) -> None:
    """Bind values to the logging context of the current task."""
    for name, value in (("request_id", request_id), ("user_id", user_id), ("list_id", list_id)):
        if value is not None:
            _CONTEXT_VARS[name].set(value)


def clear_context() -> None:
    """Clear all logging context variables."""
    for var in _CONTEXT_VARS.values():
        var.set(None)


class LoggingContext:
    """
    Temporarily bind logging context, restoring the previous values on exit.

    Example:
        with LoggingContext(list_id=shopping_list.id):
            await import_ingredients(...)
    """

    def __init__(self, **values: str | None):
        unknown = set(values) - set(_CONTEXT_VARS)
        if unknown:
            raise ValueError(f"Unknown logging context keys: {', '.join(sorted(unknown))}")
        self._values = values
        self._tokens: dict[str, Any] = {}

    def __enter__(self) -> "LoggingContext":
        for name, value in self._values.items():
            if value is not None:
                self._tokens[name] = _CONTEXT_VARS[name].set(value)
        return self

    def __exit__(self, *args: Any) -> None:
        for name, token in self._tokens.items():
            _CONTEXT_VARS[name].reset(token)
        self._tokens.clear()
