"""
Factory functions for OTLP exporters (gRPC logging, metrics, trace) and the
shared OpenTelemetry resource.
"""

from typing import Dict, Optional

from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.semconv.attributes.service_attributes import SERVICE_NAME

from libs.config import OTELConfig


def parse_key_values(raw: Optional[str]) -> Dict[str, str]:
    """
    Parse a ``k1=v1,k2=v2`` string (OTEL resource attributes, headers).

    Entries without ``=`` are skipped.
    """
    if not raw:
        return {}
    return {
        key.strip(): value.strip()
        for key, value in (kv.split("=", 1) for kv in raw.split(",") if "=" in kv)
    }


def build_resource(cfg: OTELConfig) -> Resource:
    """Build the Resource describing this service."""
    return Resource.create(
        {SERVICE_NAME: cfg.service_name, **parse_key_values(cfg.resource_attributes)}
    )


def _common_kwargs(cfg: OTELConfig) -> Dict[str, object]:
    return {
        "endpoint": cfg.otlp_endpoint,
        "insecure": cfg.otlp_endpoint.startswith("http://"),
    }


def build_trace_exporter(cfg: OTELConfig) -> OTLPSpanExporter:
    return OTLPSpanExporter(**_common_kwargs(cfg))


def build_metric_exporter(cfg: OTELConfig) -> OTLPMetricExporter:
    return OTLPMetricExporter(**_common_kwargs(cfg))


def build_log_exporter(cfg: OTELConfig) -> OTLPLogExporter:
    return OTLPLogExporter(**_common_kwargs(cfg))
