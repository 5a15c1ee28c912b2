"""
Metrics initialization and meter provider for OpenTelemetry.
"""

from opentelemetry import metrics
from opentelemetry.metrics import Meter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader

from libs.config import OTELConfig
from libs.observability.otlp_exporter import build_metric_exporter, build_resource

DEFAULT_SCOPE = "kafka-provider"

_initialized: bool = False


def init_metrics(cfg: OTELConfig) -> None:
    """
    Initialize the OTel MeterProvider with a periodic OTLP metric reader.

    Idempotent; later calls are ignored.
    """
    global _initialized

    if _initialized:
        return

    reader = PeriodicExportingMetricReader(build_metric_exporter(cfg))
    metrics.set_meter_provider(
        MeterProvider(resource=build_resource(cfg), metric_readers=[reader])
    )
    _initialized = True


def get_meter(name: str = DEFAULT_SCOPE) -> Meter:
    """
    Retrieve a Meter from the global provider.

    Returns a no-op meter until ``init_metrics`` has run.
    """
    return metrics.get_meter(name)
