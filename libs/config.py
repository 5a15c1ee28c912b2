"""
Global configuration system for kafka-provider services.

Provides globally shared configuration:
- OTEL settings
- Generic service-level runtime settings

Kafka connection settings are service-specific and live in
apps/provider/src/core/config.py.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from libs.errors import ConfigurationError

PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
DEFAULT_ENV_PATH: Path = PROJECT_ROOT / ".env"


def env_file() -> Optional[str]:
    """Return the root .env path if it exists, else None."""
    return str(DEFAULT_ENV_PATH) if DEFAULT_ENV_PATH.exists() else None


class OTELConfig(BaseSettings):
    """OpenTelemetry configuration shared across services."""

    enabled: bool = Field(default=True)
    service_name: str = Field(default="kafka-provider")
    otlp_endpoint: str = Field(default="http://otel-collector:4317")
    resource_attributes: str = Field(default="deployment.environment=local")

    model_config = SettingsConfigDict(extra="ignore")


class ServiceConfig(BaseSettings):
    """Generic service-level config."""

    log_level: str = Field(default="INFO")
    environment: str = Field(default="local")

    model_config = SettingsConfigDict(extra="ignore")


class AppConfig(BaseSettings):
    """Root global configuration object."""

    otel: OTELConfig = Field(default_factory=OTELConfig)
    service: ServiceConfig = Field(default_factory=ServiceConfig)

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        extra="ignore",
    )

    @classmethod
    @lru_cache(maxsize=1)
    def load(cls) -> "AppConfig":
        try:
            return cls(_env_file=env_file())
        except ValidationError as exc:
            raise ConfigurationError("Invalid configuration values.") from exc
