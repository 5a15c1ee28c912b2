"""
Entrypoint for the Kafka provider service.

Boots the publisher, optionally publishes a single message, then flushes
and shuts down:

    python -m apps.provider.src.main --topic events --key user-1 "hello"
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from confluent_kafka import KafkaException

from libs.config import AppConfig
from libs.errors import ConfigurationError
from libs.observability import init_observability, resolve_log_level
from apps.provider.src.core.bootstrap import bootstrap

logger = logging.getLogger("kafka-provider")

EXIT_DELIVERY_FAILED = 1
EXIT_CONFIG_ERROR = 2


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Bootstrap the Kafka publisher and optionally send one message."
    )
    parser.add_argument("value", nargs="?", help="Message value to publish.")
    parser.add_argument("--topic", help="Destination topic (default: PROVIDER__DEFAULT_TOPIC).")
    parser.add_argument("--key", default=None, help="Message key.")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run the provider once.

    Returns:
        Process exit status.
    """
    args = parse_arguments(argv)

    try:
        app_config = AppConfig.load()
        init_observability(
            app_config.otel,
            level=resolve_log_level(app_config.service.log_level),
        )
        service = bootstrap(app_config)
    except ConfigurationError:
        logger.exception("Startup aborted: invalid configuration.")
        return EXIT_CONFIG_ERROR

    with service:
        service.install_signal_handlers()
        if args.value is None:
            return 0

        topic = args.topic or service.provider_cfg.default_topic
        if not topic:
            logger.error("No topic given and PROVIDER__DEFAULT_TOPIC is unset.")
            return EXIT_CONFIG_ERROR

        future = service.publisher.send(topic, args.key, args.value)
        service.publisher.flush(service.provider_cfg.flush_timeout_sec)
        if not future.done():
            logger.error("Delivery not confirmed before flush timeout.", extra={"topic": topic})
            return EXIT_DELIVERY_FAILED
        try:
            msg = future.result()
        except KafkaException:
            logger.exception("Message delivery failed.", extra={"topic": topic})
            return EXIT_DELIVERY_FAILED

        logger.info(
            "Message delivered.",
            extra={"topic": msg.topic(), "partition": msg.partition(), "offset": msg.offset()},
        )
    return 0


def main_cli() -> None:
    """Console script entrypoint."""
    sys.exit(main())


if __name__ == "__main__":
    main_cli()
