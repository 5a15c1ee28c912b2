"""
Publisher facade over a SerializingProducer.

``send(topic, key, value)`` delegates to ``produce`` and hands back a
Future for the delivery report. Retries, buffering and delivery guarantees
stay with the client library.
"""

import logging
import time
from concurrent.futures import Future
from typing import Optional

from confluent_kafka import KafkaError, KafkaException, Message, SerializingProducer

from libs.observability import PublisherInstruments, get_publisher_instruments, get_tracer

logger = logging.getLogger(__name__)


class MessagePublisher:
    """
    Simplified send interface for string-keyed, string-valued messages.

    Delivery futures are completed by the producer's delivery callback,
    which runs inside ``poll`` or ``flush``. Safe to share between threads;
    the underlying producer is thread-safe and this class keeps no other
    mutable state besides the closed flag.
    """

    def __init__(
        self,
        producer: SerializingProducer,
        instruments: Optional[PublisherInstruments] = None,
    ) -> None:
        self._producer = producer
        self._instruments = instruments or get_publisher_instruments()
        self._tracer = get_tracer(__name__)
        self._closed = False

    def send(
        self,
        topic: str,
        key: Optional[str],
        value: Optional[str],
    ) -> "Future[Message]":
        """
        Publish one message.

        Args:
            topic: Destination topic.
            key: Message key, UTF-8 encoded; None for no key.
            value: Message value, UTF-8 encoded; None for a tombstone.

        Returns:
            Future resolving to the delivered Message, or failing with
            KafkaException on a delivery error.

        Raises:
            RuntimeError: the publisher has been closed.
            Whatever ``produce`` raises (BufferError, KafkaException, ...).
        """
        if self._closed:
            raise RuntimeError("MessagePublisher is closed.")

        future: "Future[Message]" = Future()
        future.set_running_or_notify_cancel()

        def on_delivery(err: Optional[KafkaError], msg: Message) -> None:
            if err is not None:
                self._instruments.failed.add(1, {"topic": topic})
                logger.warning(
                    "Message delivery failed.",
                    extra={"topic": topic, "error": str(err)},
                )
                future.set_exception(KafkaException(err))
            else:
                future.set_result(msg)

        start = time.perf_counter()
        with self._tracer.start_as_current_span("publish_message") as span:
            span.set_attribute("messaging.destination.name", topic)
            try:
                self._producer.produce(
                    topic=topic,
                    key=key,
                    value=value,
                    on_delivery=on_delivery,
                )
            except Exception as exc:
                self._instruments.failed.add(1, {"topic": topic})
                logger.error(
                    "Produce error.",
                    extra={"topic": topic, "error": str(exc)},
                )
                raise
            finally:
                self._instruments.latency_ms.record(
                    (time.perf_counter() - start) * 1000, {"topic": topic}
                )

        self._instruments.published.add(1, {"topic": topic})
        # Serve delivery callbacks for earlier sends.
        self._producer.poll(0)
        return future

    def poll(self, timeout: float = 0.0) -> int:
        """Serve pending delivery callbacks; returns the number served."""
        return self._producer.poll(timeout)

    def flush(self, timeout: Optional[float] = None) -> int:
        """
        Wait for outstanding deliveries.

        Returns:
            Number of messages still queued when the timeout expired.
        """
        if timeout is None:
            return self._producer.flush()
        return self._producer.flush(timeout)

    def close(self, timeout: float = 10.0) -> int:
        """
        Flush pending messages before the handle is discarded.

        Idempotent; calls after the first return 0 without flushing.
        ``send`` raises RuntimeError once the publisher is closed.
        """
        if self._closed:
            return 0
        self._closed = True

        remaining = self.flush(timeout)
        if remaining:
            logger.warning(
                "Messages left undelivered at close.",
                extra={"remaining": remaining},
            )
        return remaining


def build_publisher(handle: SerializingProducer) -> MessagePublisher:
    """Wrap ``handle`` in a MessagePublisher."""
    return MessagePublisher(handle)
