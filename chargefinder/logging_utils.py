"""Utilities for configuring structured application logging."""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .config import settings


_LOG_RECORD_RESERVED_KEYS = {
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

_TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class JsonLogFormatter(logging.Formatter):
    """Render log records as single-line JSON documents."""

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(self.serialize_record(record), ensure_ascii=False)

    def serialize_record(self, record: logging.LogRecord) -> Dict[str, Any]:
        """Convert a log record into a JSON-compatible payload."""
        created_at = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: Dict[str, Any] = {
            "service": self.service_name,
            "level": record.levelname,
            "logger_name": record.name,
            "message": record.getMessage(),
            "created_at": created_at.isoformat(),
        }

        if record.exc_info:
            payload["traceback"] = "".join(traceback.format_exception(*record.exc_info))
        elif record.exc_text:
            payload["traceback"] = record.exc_text

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _LOG_RECORD_RESERVED_KEYS and not key.startswith("_")
        }
        if extra:
            sanitized: Dict[str, Any] = {}
            for key, value in extra.items():
                try:
                    json.dumps(value)
                    sanitized[key] = value
                except (TypeError, ValueError):
                    sanitized[key] = repr(value)
            payload["extra"] = sanitized

        return payload


class _ServiceHandler(logging.StreamHandler):
    """Stream handler tagged so repeated configuration can find and replace it."""


def configure_logging(service_name: str, log_format: Optional[str] = None, level: Optional[str] = None) -> logging.Handler:
    """Install the process-wide log handler for ``service_name``.

    Calling this more than once replaces the previously installed handler, so
    the root logger never ends up with duplicates.
    """
    level_name = (level or settings.log_level).upper()
    resolved_level = getattr(logging, level_name, logging.INFO)
    fmt = (log_format or settings.log_format).lower()

    handler = _ServiceHandler(stream=sys.stderr)
    if fmt == "json":
        handler.setFormatter(JsonLogFormatter(service_name))
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
    handler.setLevel(resolved_level)

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if isinstance(existing, _ServiceHandler):
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(resolved_level)

    # httpx logs every request at INFO; keep provider traffic at WARNING.
    logging.getLogger("httpx").setLevel(max(resolved_level, logging.WARNING))

    return handler
