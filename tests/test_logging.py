"""Tests for logging helpers."""
import json
import logging

from speakcheck.core.logging_config import JSONFormatter, RequestIdFilter, request_id_var


def make_record(message="hello"):
    return logging.LogRecord("speakcheck.test", logging.INFO, __file__, 1, message, None, None)


def test_json_formatter_includes_request_id_from_context():
    token = request_id_var.set("req-123")
    try:
        record = make_record()
        RequestIdFilter().filter(record)
    finally:
        request_id_var.reset(token)

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "hello"
    assert payload["level"] == "INFO"
    assert payload["name"] == "speakcheck.test"
    assert payload["request_id"] == "req-123"
    assert payload["timestamp"].endswith("Z")


def test_json_formatter_without_request_id():
    record = make_record()
    RequestIdFilter().filter(record)

    payload = json.loads(JSONFormatter().format(record))

    assert "request_id" not in payload
