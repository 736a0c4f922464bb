"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - History context (collection, entry_id, operation, entry_count) and
      error_code/path surfaced when present
    - setup_logging installs exactly one handler, however often it is called
    - SQLAlchemy engine chatter stays at WARNING unless log_level is DEBUG

Design Decisions:
    - JSONFormatter on stdlib logging: no extra dependency, full control
    - setup_logging called once on startup via lifespan
"""

import logging
import json
from datetime import datetime, timezone

_EXTRA_KEYS = (
    "collection", "entry_id", "operation", "entry_count",
    "error_code", "path",
)

_HANDLER_NAME = "translator"


class JSONFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update({
            key: record.__dict__[key]
            for key in _EXTRA_KEYS
            if record.__dict__.get(key) is not None
        })
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Configure root logging for the application."""
    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        ))
    logging.root.addHandler(handler)

    root_level = getattr(logging, level.upper(), logging.INFO)
    logging.root.setLevel(root_level)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.DEBUG if root_level <= logging.DEBUG else logging.WARNING,
    )
