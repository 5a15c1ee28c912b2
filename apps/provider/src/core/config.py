"""
Service-specific configuration for the Kafka provider.

This module ONLY handles:
- the broker bootstrap address list
- publisher runtime parameters (flush timeout, default topic)

It reads from the environment and the ROOT .env:

    KAFKA__BOOTSTRAP_SERVERS=broker1:9092,broker2:9092   (or BOOTSTRAP_SERVERS)
    PROVIDER__FLUSH_TIMEOUT_SEC=10
    PROVIDER__DEFAULT_TOPIC=events

There is deliberately no default bootstrap address: a missing value fails
startup with ConfigurationError.
"""

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from libs.config import env_file
from libs.errors import ConfigurationError


class KafkaSettings(BaseSettings):
    """
    Kafka connection settings for the provider.

    - KAFKA__BOOTSTRAP_SERVERS or BOOTSTRAP_SERVERS
    """

    bootstrap_servers: str = Field(
        description="Comma-separated host:port list of bootstrap brokers.",
        validation_alias=AliasChoices(
            "KAFKA__BOOTSTRAP_SERVERS",
            "BOOTSTRAP_SERVERS",
        ),
    )

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


class ProviderSettings(BaseSettings):
    """
    Publisher runtime settings.

    Values come from environment variables prefixed with `PROVIDER__`.
    """

    flush_timeout_sec: float = Field(
        default=10.0,
        ge=0.0,
        description="Upper bound for flushing pending messages on shutdown.",
    )
    default_topic: Optional[str] = Field(
        default=None,
        description="Topic used by the CLI when --topic is not given.",
    )

    model_config = SettingsConfigDict(
        env_prefix="PROVIDER__",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_kafka_settings() -> KafkaSettings:
    """
    Cached accessor for KafkaSettings.

    Raises:
        ConfigurationError: bootstrap servers are not configured.
    """
    try:
        return KafkaSettings(_env_file=env_file())
    except ValidationError as exc:
        raise ConfigurationError(
            "KAFKA__BOOTSTRAP_SERVERS (or BOOTSTRAP_SERVERS) must be set."
        ) from exc


@lru_cache()
def get_provider_settings() -> ProviderSettings:
    """
    Cached accessor for ProviderSettings.
    """
    try:
        return ProviderSettings(_env_file=env_file())
    except ValidationError as exc:
        raise ConfigurationError("Invalid PROVIDER__* settings.") from exc
