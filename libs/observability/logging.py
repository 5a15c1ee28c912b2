"""
Structured JSON logging with an optional OpenTelemetry log pipeline.

Every stdout line is a single JSON object correlated with the active span.
"""

import json
import logging
import sys
from typing import Any, Dict, Optional

from opentelemetry import trace
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor

from libs.config import OTELConfig
from libs.observability.otlp_exporter import build_log_exporter, build_resource

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime", "taskName"}


class JsonTraceFormatter(logging.Formatter):
    """
    JSON formatter including trace_id and span_id.

    Emits level, logger, message, time, trace_id, span_id and service, plus
    any JSON-serializable fields passed via ``extra``.
    """

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self._service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        span_ctx = trace.get_current_span().get_span_context()
        valid = span_ctx.is_valid

        payload: Dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
            "trace_id": f"{span_ctx.trace_id:032x}" if valid else None,
            "span_id": f"{span_ctx.span_id:016x}" if valid else None,
            "service": self._service_name,
        }

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key.startswith("_") or key in payload:
                continue
            try:
                json.dumps(value)
            except (TypeError, ValueError):
                value = repr(value)
            payload[key] = value

        return json.dumps(payload, separators=(",", ":"))


def init_logging(cfg: OTELConfig, level: int = logging.INFO) -> None:
    """
    Configure the root logger for the current process.

    Installs the JSON stdout handler and, when ``cfg.enabled`` is set, an
    OpenTelemetry LoggingHandler exporting via OTLP.

    Args:
        cfg: OpenTelemetry settings.
        level: Minimum log level for the root logger.
    """
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(JsonTraceFormatter(cfg.service_name))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(stdout_handler)
    root.setLevel(level)

    if not cfg.enabled:
        return

    logger_provider = LoggerProvider(resource=build_resource(cfg))
    logger_provider.add_log_record_processor(
        BatchLogRecordProcessor(build_log_exporter(cfg))
    )
    root.addHandler(LoggingHandler(level=level, logger_provider=logger_provider))


def resolve_log_level(name: str) -> int:
    """Map a level name such as "debug" to its logging constant; INFO if unknown."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger; the root logger when ``name`` is None."""
    return logging.getLogger(name)
