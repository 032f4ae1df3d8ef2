"""Tests for structured logging setup."""

import json

import structlog

from feedstack.utils.logging import configure_logging


def render(event_dict, method_name="error"):
    """Run an event through the configured processor chain."""
    for processor in structlog.get_config()["processors"]:
        event_dict = processor(None, method_name, event_dict)
    return event_dict


def test_json_output_includes_traceback():
    configure_logging(log_level="DEBUG", json_output=True)
    try:
        try:
            raise ConnectionError("store unavailable")
        except ConnectionError:
            line = render({"event": "cache_set_failed", "key": "k", "exc_info": True})

        record = json.loads(line)
        assert record["event"] == "cache_set_failed"
        assert record["level"] == "error"
        assert "exc_info" not in record
        assert "Traceback" in record["exception"]
        assert "store unavailable" in record["exception"]
    finally:
        configure_logging()
