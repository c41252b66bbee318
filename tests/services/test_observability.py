"""Structured Logging — verifies JSONFormatter output shape."""

import json
import logging

from pomodify.infrastructure.observability import JSONFormatter


def _record(**extra):
    record = logging.LogRecord(
        "pomodify.test", logging.INFO, __file__, 1, "pause -> session_paused", None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_base_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "INFO"
    assert log["logger"] == "pomodify.test"
    assert log["message"] == "pause -> session_paused"
    assert "timestamp" in log


def test_json_formatter_surfaces_session_extras():
    log = json.loads(JSONFormatter().format(_record(
        session_id="abc", command="pause", event="session_paused", cycles_completed=2,
    )))
    assert log["session_id"] == "abc"
    assert log["command"] == "pause"
    assert log["event"] == "session_paused"
    assert log["cycles_completed"] == 2


def test_json_formatter_omits_missing_extras():
    log = json.loads(JSONFormatter().format(_record()))
    assert "session_id" not in log
    assert "phase" not in log
