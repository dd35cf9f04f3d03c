"""Structured Logging — tests for the JSON formatter and setup_logging."""

import json
import logging

from user_service.infrastructure.observability import JSONFormatter, setup_logging


def _record(msg="hello", **extra):
    record = logging.LogRecord(
        "user_service.test", logging.INFO, __file__, 1, msg, None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_base_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "user_service.test"
    assert payload["message"] == "hello"
    assert "timestamp" in payload


def test_json_formatter_surfaces_known_extras():
    payload = json.loads(JSONFormatter().format(
        _record(user_id="u-1", error_code="RESOURCE_NOT_FOUND", unrelated="x"),
    ))
    assert payload["user_id"] == "u-1"
    assert payload["error_code"] == "RESOURCE_NOT_FOUND"
    assert "unrelated" not in payload


def test_setup_logging_is_idempotent():
    setup_logging("DEBUG", "json")
    after_first = len(logging.root.handlers)
    setup_logging("WARNING", "text")
    assert len(logging.root.handlers) == after_first
    assert logging.root.level == logging.WARNING
    handlers = [h for h in logging.root.handlers if h.get_name() == "user_service"]
    assert len(handlers) == 1
    assert not isinstance(handlers[0].formatter, JSONFormatter)
