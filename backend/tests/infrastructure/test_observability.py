"""Structured Logging — JSON formatter fields and idempotent setup."""

import json
import logging

from burnerlink.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra):
    record = logging.LogRecord(
        "burnerlink.core.session_store", logging.INFO, __file__, 1,
        "Session burned", None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_base_fields():
    data = json.loads(JSONFormatter().format(_record()))
    assert data["level"] == "INFO"
    assert data["logger"] == "burnerlink.core.session_store"
    assert data["message"] == "Session burned"
    assert "timestamp" in data


def test_json_formatter_surfaces_known_extras_only():
    data = json.loads(JSONFormatter().format(
        _record(session_id="s1", reason="stale", ciphertext="secret"),
    ))
    assert data["session_id"] == "s1"
    assert data["reason"] == "stale"
    assert "ciphertext" not in data


def test_setup_logging_is_idempotent():
    setup_logging("DEBUG", "json")
    handler = setup_logging("INFO", "text")
    ours = [h for h in logging.root.handlers if h.get_name() == "burnerlink"]
    assert ours == [handler]
    assert logging.root.level == logging.INFO
    logging.root.removeHandler(handler)
