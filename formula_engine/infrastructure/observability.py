"""Structured Logging - JSON formatter and setup for engine hosts.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (module_key, step_id, reason, estimate, ...) surfaced when present
    - JSON format in production, human-readable in development

Design Decisions:
    - stdlib logging.Formatter subclass, no logging framework dependency
    - setup_logging is called once by the host; the engine itself only emits records
"""

import json
import logging
from datetime import datetime, timezone

from formula_engine.config import get_settings


_EXTRA_KEYS = (
    "module_key", "step_id", "reason", "estimate",
    "error_code", "result_count", "formula_id", "version",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str | None = None, fmt: str | None = None) -> logging.Handler:
    """Configure root logging for the engine host. Returns the installed handler.

    level and fmt default to FORMULA_LOG_LEVEL / FORMULA_LOG_FORMAT.
    """
    settings = get_settings()
    level = level or settings.log_level
    fmt = fmt or settings.log_format
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
