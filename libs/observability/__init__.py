"""
Public observability interface for kafka-provider services.

Services should import from here instead of the underlying modules.
"""

from .instrumentation import (
    PublisherInstruments,
    get_publisher_instruments,
    init_observability,
)
from .logging import JsonTraceFormatter, get_logger, init_logging, resolve_log_level
from .metrics import get_meter, init_metrics
from .tracing import get_tracer, init_tracing

__all__ = [
    "init_observability",
    "init_logging",
    "init_tracing",
    "init_metrics",
    "get_logger",
    "resolve_log_level",
    "get_tracer",
    "get_meter",
    "get_publisher_instruments",
    "PublisherInstruments",
    "JsonTraceFormatter",
]
