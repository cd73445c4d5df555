# app/core/logging.py
"""JSON logging setup shared by the API and services."""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from app.core.config import settings

_LOGGER_NAME = "cafemap"

_SENSITIVE_KEYWORDS = ("token", "secret", "authorization", "password", "email")
_MAX_STRING_LENGTH = 256
_MAX_COLLECTION_ITEMS = 10

_RESERVED_ATTRS = {
    "args",
    "msg",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "process",
    "processName",
    "message",
    "name",
    "taskName",
}


def _sanitize_value(value: Any) -> Any:
    if isinstance(value, str):
        return value if len(value) <= _MAX_STRING_LENGTH else f"{value[:_MAX_STRING_LENGTH]}…"
    if isinstance(value, dict):
        return {key: _sanitize_field(str(key), nested) for key, nested in list(value.items())[:_MAX_COLLECTION_ITEMS]}
    if isinstance(value, (list, tuple, set)):
        items = [_sanitize_value(item) for item in list(value)]
        if len(items) > _MAX_COLLECTION_ITEMS:
            items = items[:_MAX_COLLECTION_ITEMS] + ["…"]
        return items
    return value


def _sanitize_field(key: str, value: Any) -> Any:
    lowered = key.lower()
    if any(keyword in lowered for keyword in _SENSITIVE_KEYWORDS):
        return "[redacted]"
    return _sanitize_value(value)


class JSONLogFormatter(logging.Formatter):
    """Emit logs as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003 (match logging api)
        payload: Dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "msg": record.getMessage(),
            "logger": record.name,
            "service": settings.project_name,
            "env": settings.environment,
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key.startswith("_"):
                continue
            payload[key] = _sanitize_field(key, value)
        return json.dumps(payload, separators=(",", ":"), default=str)


def configure_logging() -> logging.Logger:
    """Configure the root logger with JSON formatting."""
    root = logging.getLogger()
    root.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(JSONLogFormatter())
    root.addHandler(handler)
    root.setLevel(settings.log_level.upper())
    return logging.getLogger(_LOGGER_NAME)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if not name:
        return logging.getLogger(_LOGGER_NAME)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")
