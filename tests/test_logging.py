"""
Logging configuration tests.
"""

import logging

import orjson

from utils.logging import TEXT_FORMAT, JsonFormatter, setup_logging


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("apps.habits.report", logging.INFO, __file__, 1, "stored id=%d", (7,), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_message_and_extra():
    line = JsonFormatter().format(make_record(table="habits_reports", report_id=7))

    payload = orjson.loads(line)
    assert payload["message"] == "stored id=7"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "apps.habits.report"
    assert payload["table"] == "habits_reports"
    assert payload["report_id"] == 7
    assert "args" not in payload


def test_setup_logging_selects_formatter():
    root = logging.getLogger()
    previous = root.handlers[:], root.level
    try:
        setup_logging("debug", "json")
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

        setup_logging("warning", "text")
        assert root.level == logging.WARNING
        assert root.handlers[0].formatter._fmt == TEXT_FORMAT
    finally:
        root.handlers, root.level = previous
