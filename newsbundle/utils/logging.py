"""Logging helpers."""

from __future__ import annotations

import json
import logging
import re
import sys
from typing import Any

_RESERVED_ATTRS = {
    "name",
    "msg",
    "args",
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
    "processName",
    "process",
    "taskName",
    "message",
    "asctime",
}

_SIGNATURE_PATTERN = re.compile(r'signature="[^"]*"')
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """Render log records as compact JSON."""

    default_time_format = "%Y-%m-%dT%H:%M:%S"
    default_msec_format = "%s.%03dZ"

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.default_time_format),
            "level": record.levelname,
            "logger": record.name,
            "message": message,
        }

        extras = {
            key: value for key, value in record.__dict__.items() if key not in _RESERVED_ATTRS
        }
        if extras:
            data.update(extras)

        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)

        return json.dumps(data, ensure_ascii=False, default=str)


class RedactingFilter(logging.Filter):
    """Masks request signatures so Authorization values never reach log output."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact(record.msg)
        for key, value in list(record.__dict__.items()):
            if key in _RESERVED_ATTRS:
                continue
            if isinstance(value, str):
                setattr(record, key, redact(value))
            elif isinstance(value, dict):
                setattr(record, key, _redact_mapping(value))
        return True


def redact(value: str) -> str:
    return _SIGNATURE_PATTERN.sub('signature="***"', value)


def _redact_mapping(mapping: dict[Any, Any]) -> dict[Any, Any]:
    cleaned: dict[Any, Any] = {}
    for key, value in mapping.items():
        if isinstance(key, str) and key.lower() == "authorization":
            cleaned[key] = redact(str(value))
        elif isinstance(value, str):
            cleaned[key] = redact(value)
        else:
            cleaned[key] = value
    return cleaned


def configure_logging(
    *,
    level: int = logging.INFO,
    structured: bool | None = None,
) -> None:
    """Configure root logging with optional JSON output."""

    root = logging.getLogger()
    root.setLevel(level)

    if root.handlers:
        if structured is None:
            return
        formatter: logging.Formatter
        if structured:
            formatter = JsonFormatter()
        else:
            formatter = logging.Formatter(_PLAIN_FORMAT)
        for handler in root.handlers:
            handler.setFormatter(formatter)
            if not any(isinstance(f, RedactingFilter) for f in handler.filters):
                handler.addFilter(RedactingFilter())
        return

    handler = logging.StreamHandler(sys.stderr)
    if structured:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT))
    handler.addFilter(RedactingFilter())
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "redact", "JsonFormatter", "RedactingFilter"]
