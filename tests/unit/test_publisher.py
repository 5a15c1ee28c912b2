"""Unit tests for the MessagePublisher facade."""

from unittest.mock import MagicMock, patch

import pytest
from confluent_kafka import KafkaError, KafkaException

from apps.provider.src.infra.publisher import MessagePublisher, build_publisher
from tests.conftest import delivery_callback


class TestSend:
    """Tests for MessagePublisher.send."""

    def test_delegates_to_produce(self, publisher, mock_producer):
        publisher.send("orders", "user-1", "hello")

        kwargs = mock_producer.produce.call_args.kwargs
        assert kwargs["topic"] == "orders"
        assert kwargs["key"] == "user-1"
        assert kwargs["value"] == "hello"
        assert callable(kwargs["on_delivery"])
        mock_producer.poll.assert_called_once_with(0)

    def test_future_resolves_on_delivery(self, publisher, mock_producer):
        future = publisher.send("orders", "k", "v")
        assert not future.done()

        msg = MagicMock()
        delivery_callback(mock_producer)(None, msg)

        assert future.result(timeout=0) is msg

    def test_future_fails_on_delivery_error(self, publisher, mock_producer, mock_instruments):
        future = publisher.send("orders", "k", "v")

        err = KafkaError(KafkaError._MSG_TIMED_OUT)
        delivery_callback(mock_producer)(err, MagicMock())

        with pytest.raises(KafkaException):
            future.result(timeout=0)
        mock_instruments.failed.add.assert_called_once_with(1, {"topic": "orders"})

    def test_produce_errors_propagate(self, publisher, mock_producer, mock_instruments):
        mock_producer.produce.side_effect = BufferError("queue full")

        with pytest.raises(BufferError):
            publisher.send("orders", "k", "v")

        mock_instruments.failed.add.assert_called_once()
        mock_instruments.published.add.assert_not_called()
        mock_producer.poll.assert_not_called()

    def test_records_metrics(self, publisher, mock_instruments):
        publisher.send("orders", None, "v")

        mock_instruments.published.add.assert_called_once_with(1, {"topic": "orders"})
        mock_instruments.latency_ms.record.assert_called_once()

    def test_each_send_gets_its_own_future(self, publisher, mock_producer):
        first = publisher.send("orders", "a", "1")
        first_cb = delivery_callback(mock_producer)
        second = publisher.send("orders", "b", "2")

        first_cb(None, MagicMock())
        assert first.done()
        assert not second.done()


class TestFlushAndClose:
    """Tests for flush/close."""

    def test_flush_returns_remaining(self, publisher, mock_producer):
        mock_producer.flush.return_value = 3
        assert publisher.flush(1.5) == 3
        mock_producer.flush.assert_called_once_with(1.5)

    def test_flush_without_timeout(self, publisher, mock_producer):
        publisher.flush()
        mock_producer.flush.assert_called_once_with()

    def test_poll_delegates(self, publisher, mock_producer):
        mock_producer.poll.return_value = 2
        assert publisher.poll(0.1) == 2

    def test_close_is_idempotent(self, publisher, mock_producer):
        mock_producer.flush.return_value = 1

        assert publisher.close(5.0) == 1
        assert publisher.close(5.0) == 0
        mock_producer.flush.assert_called_once_with(5.0)

    def test_send_after_close_rejected(self, publisher, mock_producer, mock_instruments):
        publisher.close(5.0)

        with pytest.raises(RuntimeError):
            publisher.send("orders", "k", "v")

        mock_producer.produce.assert_not_called()
        mock_instruments.published.add.assert_not_called()


def test_build_publisher_wraps_handle(mock_producer):
    with patch(
        "apps.provider.src.infra.publisher.get_publisher_instruments",
        return_value=MagicMock(),
    ):
        publisher = build_publisher(mock_producer)

    assert isinstance(publisher, MessagePublisher)
    assert publisher._producer is mock_producer
