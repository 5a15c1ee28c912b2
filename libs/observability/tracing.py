"""
OpenTelemetry tracing initialization and tracer helper.
"""

from typing import Optional

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Tracer

from libs.config import OTELConfig
from libs.observability.otlp_exporter import build_resource, build_trace_exporter

DEFAULT_SCOPE = "kafka-provider"


def init_tracing(cfg: OTELConfig) -> None:
    """
    Install a global TracerProvider exporting spans over OTLP.

    OpenTelemetry only accepts the first provider set per process.
    """
    provider = TracerProvider(resource=build_resource(cfg))
    provider.add_span_processor(BatchSpanProcessor(build_trace_exporter(cfg)))
    trace.set_tracer_provider(provider)


def get_tracer(name: Optional[str] = None) -> Tracer:
    """
    Get a Tracer for the given instrumentation scope.

    Falls back to the no-op tracer until ``init_tracing`` has run.
    """
    return trace.get_tracer(name or DEFAULT_SCOPE)
