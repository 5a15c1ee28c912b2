"""
Bootstrap wiring for the Kafka provider service.

Responsible for:
- Loading global and service configuration
- Constructing the ProviderService with explicit dependencies
"""

from typing import Final, Optional

from libs.config import AppConfig
from libs.observability import get_logger
from apps.provider.src.core.config import (
    KafkaSettings,
    ProviderSettings,
    get_kafka_settings,
    get_provider_settings,
)
from apps.provider.src.service.provider_service import ProviderService


def bootstrap(app_config: Optional[AppConfig] = None) -> ProviderService:
    """
    Build a fully wired, started ProviderService.

    Configuration is validated and the publisher constructed before this
    returns, so a half-configured process never reaches its main loop.

    Raises:
        ConfigurationError: configuration is missing or malformed.
    """
    log = get_logger("provider-bootstrap")

    kafka_cfg: Final[KafkaSettings] = get_kafka_settings()
    provider_cfg: Final[ProviderSettings] = get_provider_settings()

    log.info(
        "Bootstrapping Kafka provider",
        extra={"bootstrap_servers": kafka_cfg.bootstrap_servers},
    )

    service = ProviderService(
        kafka_cfg=kafka_cfg,
        provider_cfg=provider_cfg,
        app_config=app_config,
    )
    service.start()
    return service
