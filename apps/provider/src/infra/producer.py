"""
Producer configuration and handle construction.

Responsible for:
- Validating the bootstrap address list
- Building the immutable producer property mapping
- Constructing the SerializingProducer bound to that mapping
"""

import logging
from types import MappingProxyType
from typing import Any, Mapping, Optional

from confluent_kafka import SerializingProducer
from confluent_kafka.serialization import StringSerializer

from libs.errors import ConfigurationError

logger = logging.getLogger(__name__)

BOOTSTRAP_SERVERS = "bootstrap.servers"
KEY_SERIALIZER = "key.serializer"
VALUE_SERIALIZER = "value.serializer"

REQUIRED_KEYS = (BOOTSTRAP_SERVERS, KEY_SERIALIZER, VALUE_SERIALIZER)

STRING_CODEC = "utf_8"

ProducerConfiguration = Mapping[str, Any]


def _check_endpoint(entry: str) -> None:
    host, sep, port = entry.strip().rpartition(":")
    if not sep or not host or host in ("[", "[]"):
        raise ConfigurationError(f"Bootstrap entry {entry!r} is not host:port.")
    if host.startswith("[") != host.endswith("]"):
        raise ConfigurationError(f"Bootstrap entry {entry!r} has an unbalanced IPv6 host.")
    if not (port.isascii() and port.isdecimal()) or not 1 <= int(port) <= 65535:
        raise ConfigurationError(f"Bootstrap entry {entry!r} has an invalid port.")


def validate_bootstrap_servers(bootstrap_servers: Optional[str]) -> str:
    """
    Check that ``bootstrap_servers`` is a comma-separated host:port list.

    Reachability is not checked; the client discovers that at connect time.

    Returns:
        The input string, unmodified.

    Raises:
        ConfigurationError: value is absent, blank or malformed.
    """
    if bootstrap_servers is None or not bootstrap_servers.strip():
        raise ConfigurationError("Bootstrap servers must be a non-empty host:port list.")

    for entry in bootstrap_servers.split(","):
        _check_endpoint(entry)

    return bootstrap_servers


def build_configuration(bootstrap_servers: Optional[str]) -> ProducerConfiguration:
    """
    Build the producer property mapping.

    Keys and values are UTF-8 string encoded. The bootstrap value is kept
    exactly as given (no reordering, deduplication or trimming).

    Args:
        bootstrap_servers: Comma-separated host:port list.

    Returns:
        Read-only mapping with exactly ``bootstrap.servers``,
        ``key.serializer`` and ``value.serializer``.

    Raises:
        ConfigurationError: bootstrap servers absent, blank or malformed.
    """
    validate_bootstrap_servers(bootstrap_servers)

    config = {
        BOOTSTRAP_SERVERS: bootstrap_servers,
        KEY_SERIALIZER: StringSerializer(STRING_CODEC),
        VALUE_SERIALIZER: StringSerializer(STRING_CODEC),
    }
    logger.debug(
        "Producer configuration built.",
        extra={"bootstrap_servers": bootstrap_servers},
    )
    return MappingProxyType(config)


def build_producer_handle(config: ProducerConfiguration) -> SerializingProducer:
    """
    Construct a SerializingProducer bound to ``config``.

    librdkafka connects lazily in its own threads, so this does not block on
    the network. The client receives its own dict copy; handles built from
    equal configurations share no configuration state.

    Raises:
        ConfigurationError: a required key is missing or empty.
    """
    missing = [key for key in REQUIRED_KEYS if not config.get(key)]
    if missing:
        raise ConfigurationError(
            f"Producer configuration is missing required keys: {', '.join(missing)}."
        )

    handle = SerializingProducer(dict(config))
    logger.info(
        "Kafka producer handle created.",
        extra={"bootstrap_servers": config[BOOTSTRAP_SERVERS]},
    )
    return handle
