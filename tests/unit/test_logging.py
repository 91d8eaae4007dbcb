"""Unit tests for structured logging."""

import json
import logging

import pytest

from authentik_operator.observability.logging import (
    CorrelationIDFilter,
    OperatorLogger,
    StructuredFormatter,
    correlation_id,
    set_correlation_id,
    setup_structured_logging,
)


def _record(**extra):
    record = logging.LogRecord(
        name="authentik_operator.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Applied deployment %s",
        args=("authentik-prod",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    def test_formats_json_with_structured_fields(self):
        output = StructuredFormatter().format(
            _record(correlation_id="abc12345", resource_name="prod", http_status=204)
        )

        data = json.loads(output)
        assert data["message"] == "Applied deployment authentik-prod"
        assert data["level"] == "INFO"
        assert data["correlation_id"] == "abc12345"
        assert data["resource_name"] == "prod"
        assert data["http_status"] == 204
        assert "namespace" not in data

    def test_unknown_extra_fields_are_dropped(self):
        data = json.loads(StructuredFormatter().format(_record(secret="hunter2")))

        assert "secret" not in data


class TestCorrelationID:
    def test_filter_uses_context_value(self):
        set_correlation_id("fixed123")
        record = _record()

        assert CorrelationIDFilter().filter(record) is True
        assert record.correlation_id == "fixed123"

    def test_reconciliation_start_sets_id(self):
        corr_id = OperatorLogger("test").log_reconciliation_start(
            resource_type="authentik", resource_name="prod", namespace="auth"
        )

        assert len(corr_id) == 8
        assert correlation_id.get() == corr_id


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_setup_structured_logging(restore_root_logger):
    setup_structured_logging(log_level="debug", enable_json_formatting=True)

    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1
    handler = restore_root_logger.handlers[0]
    assert isinstance(handler.formatter, StructuredFormatter)
    assert any(isinstance(f, CorrelationIDFilter) for f in handler.filters)
    assert logging.getLogger("kopf").level == logging.WARNING
