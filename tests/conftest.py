"""Pytest configuration and fixtures."""

from unittest.mock import MagicMock

import pytest

from apps.provider.src.core.config import get_kafka_settings, get_provider_settings
from apps.provider.src.infra.publisher import MessagePublisher
from libs.config import AppConfig


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate every test from ambient Kafka/provider env vars and caches."""
    for name in (
        "KAFKA__BOOTSTRAP_SERVERS",
        "BOOTSTRAP_SERVERS",
        "PROVIDER__FLUSH_TIMEOUT_SEC",
        "PROVIDER__DEFAULT_TOPIC",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("libs.config.env_file", lambda: None)
    monkeypatch.setattr("apps.provider.src.core.config.env_file", lambda: None)

    get_kafka_settings.cache_clear()
    get_provider_settings.cache_clear()
    AppConfig.load.cache_clear()
    yield
    get_kafka_settings.cache_clear()
    get_provider_settings.cache_clear()
    AppConfig.load.cache_clear()


@pytest.fixture
def mock_producer():
    """A stand-in SerializingProducer."""
    producer = MagicMock()
    producer.poll.return_value = 0
    producer.flush.return_value = 0
    return producer


@pytest.fixture
def mock_instruments():
    """Publisher metric instruments."""
    return MagicMock()


@pytest.fixture
def publisher(mock_producer, mock_instruments):
    return MessagePublisher(mock_producer, instruments=mock_instruments)


def delivery_callback(producer):
    """Return the on_delivery callback passed to the last produce call."""
    return producer.produce.call_args.kwargs["on_delivery"]
