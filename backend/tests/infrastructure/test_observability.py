"""Structured Logging: JSON shape, extra fields, idempotent setup."""

import json
import logging

from asyncflow.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra):
    record = logging.LogRecord(
        "asyncflow.test", logging.ERROR, __file__, 1,
        "lookup failed for %s", ("1.2.3.4",), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_core_fields():
    out = json.loads(JSONFormatter().format(_record()))
    assert out["level"] == "ERROR"
    assert out["logger"] == "asyncflow.test"
    assert out["message"] == "lookup failed for 1.2.3.4"
    assert "timestamp" in out


def test_json_formatter_surfaces_pipeline_extras():
    out = json.loads(JSONFormatter().format(_record(
        ip="1.2.3.4", stage="weather", adapter="promise",
        status_code=502, error_code="NETWORK_FAILURE", unrelated="x",
    )))
    assert out["ip"] == "1.2.3.4"
    assert out["stage"] == "weather"
    assert out["adapter"] == "promise"
    assert out["status_code"] == 502
    assert out["error_code"] == "NETWORK_FAILURE"
    assert "unrelated" not in out


def test_json_formatter_omits_none_extras():
    out = json.loads(JSONFormatter().format(_record(stage=None)))
    assert "stage" not in out


def test_setup_logging_is_idempotent():
    before = list(logging.root.handlers)
    level = logging.root.level
    try:
        setup_logging("DEBUG", "json")
        setup_logging("WARNING", "text")
        added = [h for h in logging.root.handlers if h not in before]
        assert len(added) <= 1
        assert logging.root.level == logging.WARNING
        assert not any(
            isinstance(h.formatter, JSONFormatter) for h in added
        )
    finally:
        for h in logging.root.handlers[:]:
            if h not in before:
                logging.root.removeHandler(h)
        logging.root.setLevel(level)
