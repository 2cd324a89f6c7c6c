"""Structured JSON logging with trace context."""

import logging
import sys
from typing import TextIO

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor

from whys.config import settings
from whys.telemetry.tracing import service_resource

_JSON_FORMAT = (
    '{"timestamp":"%(asctime)s","level":"%(levelname)s",'
    '"logger":"%(name)s","message":"%(message)s",'
    '"trace_id":"%(otelTraceID)s","span_id":"%(otelSpanID)s",'
    '"service":"%(otelServiceName)s"}'
)

_UVICORN_FORMAT = (
    '{"timestamp":"%(asctime)s","level":"%(levelname)s",'
    '"logger":"%(name)s","message":"%(message)s"}'
)


class TraceContextFormatter(logging.Formatter):
    """Formatter that stamps records with the active span's ids (zeros outside a span)."""

    def format(self, record: logging.LogRecord) -> str:
        ctx = trace.get_current_span().get_span_context()
        if not hasattr(record, "otelTraceID"):
            record.otelTraceID = trace.format_trace_id(ctx.trace_id) if ctx.is_valid else "0"
        if not hasattr(record, "otelSpanID"):
            record.otelSpanID = trace.format_span_id(ctx.span_id) if ctx.is_valid else "0"
        if not hasattr(record, "otelServiceName"):
            record.otelServiceName = settings.service_name
        return super().format(record)


def setup_logging(
    level: int | str = logging.INFO,
    otlp_endpoint: str = "",
    stream: TextIO = sys.stdout,
) -> logging.Logger:
    stream_handler = logging.StreamHandler(stream)
    stream_handler.setFormatter(TraceContextFormatter(_JSON_FORMAT))

    uvicorn_handler = logging.StreamHandler(stream)
    uvicorn_handler.setFormatter(logging.Formatter(_UVICORN_FORMAT))

    logger = logging.getLogger("whys")
    logger.setLevel(level)
    logger.handlers = [stream_handler]

    if otlp_endpoint:
        log_provider = LoggerProvider(resource=service_resource())
        otlp_exporter = OTLPLogExporter(endpoint=otlp_endpoint, insecure=True)
        log_provider.add_log_record_processor(BatchLogRecordProcessor(otlp_exporter))
        logger.addHandler(LoggingHandler(level=level, logger_provider=log_provider))

    logging.getLogger("uvicorn.access").handlers = [uvicorn_handler]
    logging.getLogger("uvicorn.error").handlers = [uvicorn_handler]

    return logger
