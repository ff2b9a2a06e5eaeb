"""Structured Logging — JSONFormatter output shape."""

import json
import logging

from registry.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "registry.services", logging.INFO, __file__, 1, "grant_lease committed",
        None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_registry_fields():
    line = JSONFormatter().format(
        _record(operation="grant_lease", property_id=1, caller="wallet_1", height=7),
    )
    log = json.loads(line)
    assert log["message"] == "grant_lease committed"
    assert log["level"] == "INFO"
    assert log["operation"] == "grant_lease"
    assert log["property_id"] == 1
    assert log["height"] == 7


def test_json_formatter_omits_absent_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert "error_code" not in log
    assert "property_id" not in log
