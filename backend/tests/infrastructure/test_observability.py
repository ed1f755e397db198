"""Structured logging — JSON shape, pairing extras, idempotent setup.

Invariants:
    - Extras passed via `extra=` surface as top-level JSON keys
    - Absent extras are omitted, not rendered as null
    - Repeated setup_logging() calls leave exactly one RoomLink handler
"""

import json
import sys
import logging

import pytest

from roomlink.infrastructure.observability import JSONFormatter, setup_logging


def _record(msg="Room paired", exc_info=None, **extra):
    record = logging.LogRecord(
        "roomlink.services.pairing_engine", logging.INFO, __file__, 1,
        msg, None, exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    engine_logger = logging.getLogger("sqlalchemy.engine")
    handlers, level = list(root.handlers), root.level
    engine_level = engine_logger.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
    engine_logger.setLevel(engine_level)


def test_json_line_carries_pairing_extras():
    line = json.loads(JSONFormatter().format(
        _record(user_id="alice", room_code="AB3K9X", attempt=3),
    ))
    assert line["message"] == "Room paired"
    assert line["level"] == "INFO"
    assert line["user_id"] == "alice"
    assert line["room_code"] == "AB3K9X"
    assert line["attempt"] == 3


def test_absent_extras_are_omitted():
    line = json.loads(JSONFormatter().format(_record()))
    assert "user_id" not in line
    assert "room_code" not in line


def test_exception_is_rendered():
    try:
        raise ValueError("boom")
    except ValueError:
        record = _record("failed", exc_info=sys.exc_info())
    line = json.loads(JSONFormatter().format(record))
    assert "ValueError: boom" in line["exception"]


def test_setup_logging_is_idempotent(restore_root_logger):
    setup_logging("INFO", "json")
    setup_logging("DEBUG", "text")

    ours = [h for h in restore_root_logger.handlers if h.get_name() == "roomlink"]
    assert len(ours) == 1
    assert not isinstance(ours[0].formatter, JSONFormatter)
    assert restore_root_logger.level == logging.DEBUG


def test_setup_logging_quiets_sqlalchemy(restore_root_logger):
    setup_logging("INFO")
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
