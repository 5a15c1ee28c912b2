"""Unit tests for structured JSON logging."""

import json
import logging

import pytest

from libs.config import OTELConfig
from libs.observability import JsonTraceFormatter, init_logging, resolve_log_level


def _record(**extra):
    record = logging.LogRecord(
        name="provider",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Kafka producer handle created %s",
        args=("ok",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_emits_core_fields():
    payload = json.loads(JsonTraceFormatter("kafka-provider").format(_record()))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "provider"
    assert payload["message"] == "Kafka producer handle created ok"
    assert payload["service"] == "kafka-provider"
    assert payload["trace_id"] is None
    assert "pathname" not in payload


def test_formatter_includes_extra_fields():
    record = _record(bootstrap_servers="localhost:9092", handle=object())
    payload = json.loads(JsonTraceFormatter("kafka-provider").format(record))

    assert payload["bootstrap_servers"] == "localhost:9092"
    assert payload["handle"].startswith("<object")


def test_init_logging_without_export():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        init_logging(OTELConfig(enabled=False), level=logging.DEBUG)

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JsonTraceFormatter)
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("INFO", logging.INFO),
        ("debug", logging.DEBUG),
        (" warning ", logging.WARNING),
        ("verbose", logging.INFO),
    ],
)
def test_resolve_log_level(name, expected):
    assert resolve_log_level(name) == expected
