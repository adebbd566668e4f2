"""Structured Logging — verifies JSON output surfaces resolver extras."""

import json
import logging

from jsonapi_compound.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "jsonapi_compound.core.resource", logging.WARNING, __file__, 1,
        "Relationship ignored", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_relationship_extras():
    payload = json.loads(JSONFormatter().format(
        _record(relationship="author", value_type="dict", include_prefix="comments."),
    ))
    assert payload["level"] == "WARNING"
    assert payload["message"] == "Relationship ignored"
    assert payload["relationship"] == "author"
    assert payload["value_type"] == "dict"
    assert payload["include_prefix"] == "comments."


def test_json_formatter_skips_absent_extras():
    payload = json.loads(JSONFormatter().format(_record()))
    assert "relationship" not in payload
    assert "error_code" not in payload


def test_setup_logging_replaces_its_own_handler():
    first = setup_logging("DEBUG", "text")
    second = setup_logging("INFO", "json")
    try:
        assert first not in logging.root.handlers
        assert second in logging.root.handlers
        assert isinstance(second.formatter, JSONFormatter)
    finally:
        logging.root.removeHandler(second)
