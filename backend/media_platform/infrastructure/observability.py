"""Structured Logging — JSON lines for the media platform managers.

Invariants:
    - Every line carries timestamp, level, logger name, and message
    - Domain ids (category_id, comment_id, content_id, rating_id, user_id) and
      error_code / operation are emitted as top-level keys when a caller passes them
    - Managers log committed writes at INFO; detected races and
      corruption at WARNING

Design Decisions:
    - stdlib logging with a small Formatter: the managers already speak `extra=`,
      so no structlog-style wrapper is needed
    - LOG_FORMAT=text switches to a plain line format for local runs
    - setup_logging called once on startup via lifespan
"""

import logging
import json
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "error_code", "operation", "path",
    "category_id", "comment_id", "content_id", "rating_id", "user_id",
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
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
