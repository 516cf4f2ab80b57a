"""Structured Logging — tests for the JSON line formatter.

Tests cover:
    - Base keys always present
    - Domain ids passed via extra= become top-level keys; absent ones are omitted
"""

import json
import logging

from media_platform.infrastructure.observability import JSONFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "media_platform.services.category_manager", logging.WARNING,
        __file__, 1, "Category cycle detected", None, None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_base_keys_present():
    line = json.loads(JSONFormatter().format(_record()))
    assert line["level"] == "WARNING"
    assert line["logger"] == "media_platform.services.category_manager"
    assert line["message"] == "Category cycle detected"
    assert "timestamp" in line


def test_domain_ids_emitted_when_passed():
    line = json.loads(JSONFormatter().format(_record(
        category_id=7, user_id=3, operation="update_category",
        error_code="CATEGORY_CYCLE",
    )))
    assert line["category_id"] == 7
    assert line["user_id"] == 3
    assert line["operation"] == "update_category"
    assert line["error_code"] == "CATEGORY_CYCLE"
    assert "comment_id" not in line
    assert "rating_id" not in line
