"""Structured Logging — one JSON line per record, carrying pairing context.

Invariants:
    - Every line has timestamp (record creation time, UTC), level, logger, message
    - Pairing extras (user_id, room_code, error_code, attempt, path) appear
      only when the call site passed them
    - setup_logging() is safe to call more than once: it replaces the handler
      it installed earlier instead of stacking a second one

Design Decisions:
    - SQLAlchemy engine logging is capped at WARNING unless the app itself
      runs at DEBUG; statement echo would drown out pairing events
"""

import json
import logging
from datetime import datetime, timezone

PAIRING_FIELDS = ("user_id", "room_code", "error_code", "attempt", "path")

_HANDLER_NAME = "roomlink"


class JSONFormatter(logging.Formatter):
    """Render a LogRecord as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update({
            key: getattr(record, key)
            for key in PAIRING_FIELDS
            if getattr(record, key, None) is not None
        })
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the RoomLink handler on the root logger and return it."""
    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        JSONFormatter() if fmt == "json"
        else logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"),
    )
    root.addHandler(handler)

    resolved = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(resolved)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.DEBUG if resolved <= logging.DEBUG else logging.WARNING,
    )
    return handler
