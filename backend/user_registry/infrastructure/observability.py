"""Structured Logging - one JSON line per record for the user registry.

Invariants:
    - Every line carries timestamp (the record's creation time, UTC), level,
      logger name and message
    - Extra fields listed in EXTRA_FIELDS appear only when the caller set them
    - setup_logging() replaces the root handlers it installed before, so repeated
      lifespans (tests, reloads) never duplicate output

Design Decisions:
    - EXTRA_FIELDS mirrors the extra= keys used by UserManager, the SQL store and
      the error handlers
    - sqlalchemy.engine capped at WARNING whatever the application level
"""

import logging
import json
from datetime import datetime, timezone

EXTRA_FIELDS = ("user_id", "error_code", "path", "operation")

_HANDLER_NAME = "user_registry"


class JSONFormatter(logging.Formatter):
    """Format a log record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the application handler on the root logger and return it."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(error_code)s] %(message)s",
            defaults={"error_code": "-"},
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    return handler
