"""
ETTU Backend — Logging Configuration
======================================

What:  One-time setup of the root logger from LOG_LEVEL / LOG_FORMAT / LOG_FILE.
Why:   Every module logs through logging.getLogger(__name__); this decides
       where those records go and what they look like.
When:  Called once at startup, before the database is touched.

Formats:
    text: 2024-01-15T12:00:00 [INFO] ettu.database: Database connection established
    json: {"timestamp": "...", "level": "INFO", "logger": "ettu.database",
           "message": "Database connection established", "request_id": "a1b2c3d4"}

    JSON lines also carry any structured fields passed through `extra=`
    (the access logger uses this for method, path, status, duration_ms).
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import List

from ettu.config import Settings
from ettu.middleware.request_id import request_id_var

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
TEXT_DATEFMT = "%Y-%m-%dT%H:%M:%S"

# Attributes every LogRecord has; anything else came in through `extra=`
_RESERVED_ATTRS = set(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime", "request_id"}


class RequestIdFilter(logging.Filter):
    """Stamps each record with the current request ID (empty outside requests)."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "request_id", None):
            record.request_id = request_id_var.get("")
        return True


class JsonFormatter(logging.Formatter):
    """Renders one JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = getattr(record, "request_id", "")
        if request_id:
            payload["request_id"] = request_id
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def build_formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        return JsonFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt=TEXT_DATEFMT)


def setup_logging(settings: Settings) -> None:
    """
    Configure the root logger.

    What:    stdout handler always; file handler when LOG_FILE is set.
    How:     basicConfig(force=True) replaces whatever uvicorn or a previous
             call installed, so calling this twice is harmless.
    """
    formatter = build_formatter(settings.log_format)
    request_id_filter = RequestIdFilter()

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if settings.log_file:
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(request_id_filter)

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        handlers=handlers,
        force=True,
    )

    # Third-party libraries that log every operation
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
