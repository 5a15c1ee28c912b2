"""
kafka-provider shared library package.

This package contains:
- global configuration (OTEL, service runtime)
- the shared error taxonomy
- observability utilities (logging, tracing, metrics)
- the BaseService lifecycle
"""

from libs.config import AppConfig
from libs.errors import ConfigurationError

__all__ = [
    "AppConfig",
    "ConfigurationError",
]
