"""
ProviderService: owns the message publisher for the lifetime of the process.

Lifecycle:
- start(): build configuration, producer handle and publisher, once
- shutdown(): flush pending messages and release the publisher, once
"""

from __future__ import annotations

from typing import Optional

from libs.base import BaseService
from libs.config import AppConfig
from apps.provider.src.core.config import KafkaSettings, ProviderSettings
from apps.provider.src.infra.producer import build_configuration, build_producer_handle
from apps.provider.src.infra.publisher import MessagePublisher, build_publisher


class ProviderService(BaseService):
    """Process-wide holder of the Kafka publisher."""

    def __init__(
        self,
        kafka_cfg: KafkaSettings,
        provider_cfg: ProviderSettings,
        app_config: Optional[AppConfig] = None,
    ) -> None:
        super().__init__("kafka-provider", config=app_config)
        self.kafka_cfg = kafka_cfg
        self.provider_cfg = provider_cfg
        self._publisher: Optional[MessagePublisher] = None

    @property
    def publisher(self) -> MessagePublisher:
        """The publisher built by ``start``."""
        if self._publisher is None:
            raise RuntimeError("ProviderService has not been started.")
        return self._publisher

    def _start(self) -> None:
        with self.tracer.start_as_current_span("build_publisher"):
            config = build_configuration(self.kafka_cfg.bootstrap_servers)
            handle = build_producer_handle(config)
            self._publisher = build_publisher(handle)

        self.logger.info(
            "Kafka publisher ready.",
            extra={"bootstrap_servers": self.kafka_cfg.bootstrap_servers},
        )

    def _shutdown(self) -> None:
        if self._publisher is None:
            return
        remaining = self._publisher.close(self.provider_cfg.flush_timeout_sec)
        self.logger.info("Kafka publisher closed.", extra={"remaining": remaining})
