"""
Observability bootstrap and Kafka publisher instruments.
"""

import logging
from typing import NamedTuple, Optional

from opentelemetry.metrics import Counter, Histogram

from libs.config import OTELConfig
from libs.observability.logging import init_logging
from libs.observability.metrics import get_meter, init_metrics
from libs.observability.tracing import init_tracing


class PublisherInstruments(NamedTuple):
    """Metric instruments recorded by the message publisher."""

    published: Counter
    failed: Counter
    latency_ms: Histogram


def init_observability(
    cfg: Optional[OTELConfig] = None,
    level: int = logging.INFO,
) -> None:
    """
    Initialize logging, tracing, and metrics for the current service.

    Call once during startup. With ``cfg.enabled`` false only stdout JSON
    logging is configured and tracing/metrics stay no-op.

    Args:
        cfg: OpenTelemetry settings; defaults are read from the environment.
        level: Logging verbosity level for the root logger.
    """
    cfg = cfg or OTELConfig()
    init_logging(cfg, level=level)
    if cfg.enabled:
        init_tracing(cfg)
        init_metrics(cfg)


def get_publisher_instruments() -> PublisherInstruments:
    """
    Create OpenTelemetry instruments for Kafka message publishing.

    Returns:
        PublisherInstruments with a counter for messages handed to the
        producer, a counter for failed sends/deliveries, and a send latency
        histogram in milliseconds.
    """
    meter = get_meter()

    return PublisherInstruments(
        published=meter.create_counter(
            name="messages_published",
            description="Count of messages handed to the Kafka producer",
            unit="1",
        ),
        failed=meter.create_counter(
            name="messages_publish_failed",
            description="Count of failed produce calls or delivery reports",
            unit="1",
        ),
        latency_ms=meter.create_histogram(
            name="message_publish_latency_ms",
            description="Time spent in the produce call, in milliseconds",
            unit="ms",
        ),
    )
