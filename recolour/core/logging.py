"""Logging and tracing set-up for the recolour API."""

from __future__ import annotations

import logging
from logging.config import dictConfig

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from recolour.core.config import Settings

# Module loggers (``recolour.tickets.service`` and friends) propagate here.
APP_LOGGER = "recolour"

_TRACER_INITIALISED = False


class EnvironmentFilter(logging.Filter):
    """Stamp every record with the deployment environment."""

    def __init__(self, environment: str) -> None:
        super().__init__()
        self.environment = environment

    def filter(self, record: logging.LogRecord) -> bool:
        record.environment = self.environment
        return True


def _parse_headers(header_string: str | None) -> dict[str, str]:
    if not header_string:
        return {}
    headers: dict[str, str] = {}
    for item in header_string.split(","):
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            continue
        headers[key.strip()] = value.strip()
    return headers


def configure_logging(settings: Settings) -> logging.Logger:
    """Route workflow logs through one stream handler.

    Third-party libraries stay at WARNING unless the service runs at DEBUG, so
    ticket transitions and photo uploads are not drowned out by access logs.
    """

    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    library_level = level if level <= logging.DEBUG else logging.WARNING
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": {
                "environment": {
                    "()": EnvironmentFilter,
                    "environment": settings.environment,
                }
            },
            "formatters": {
                "default": {"format": settings.log_format},
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "filters": ["environment"],
                }
            },
            "loggers": {
                APP_LOGGER: {"level": level},
                "uvicorn.access": {"level": library_level},
                "httpx": {"level": library_level},
            },
            "root": {
                "handlers": ["default"],
                "level": level,
            },
        }
    )
    return logging.getLogger(APP_LOGGER)


def _tracing_resource(settings: Settings) -> Resource:
    return Resource(
        attributes={
            "service.name": settings.otel_service_name,
            "service.namespace": settings.app_name,
            "deployment.environment": settings.environment,
        }
    )


def init_tracer(settings: Settings) -> TracerProvider | None:
    """Install an OTLP tracer provider when tracing is switched on."""

    global _TRACER_INITIALISED

    if _TRACER_INITIALISED or not settings.otel_enabled:
        return None

    exporter_kwargs: dict[str, object] = {}
    if settings.otel_exporter_otlp_endpoint:
        exporter_kwargs["endpoint"] = settings.otel_exporter_otlp_endpoint
    headers = _parse_headers(settings.otel_exporter_otlp_headers)
    if headers:
        exporter_kwargs["headers"] = headers

    provider = TracerProvider(resource=_tracing_resource(settings))
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(**exporter_kwargs)))
    trace.set_tracer_provider(provider)
    _TRACER_INITIALISED = True
    logging.getLogger(APP_LOGGER).info("Tracing enabled for %s", settings.otel_service_name)
    return provider


def shutdown_tracer(provider: TracerProvider | None) -> None:
    """Flush and stop the tracer provider created by :func:`init_tracer`."""

    global _TRACER_INITIALISED

    if provider is None:
        return
    provider.shutdown()
    _TRACER_INITIALISED = False
