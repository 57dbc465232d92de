import logging

from recolour.core.config import Settings
from recolour.core.logging import (
    APP_LOGGER,
    EnvironmentFilter,
    _parse_headers,
    configure_logging,
    init_tracer,
    shutdown_tracer,
)


def test_configure_logging_stamps_environment():
    settings = Settings(environment="staging", log_level="debug", otel_enabled=False)

    logger = configure_logging(settings)

    handler = next(
        handler
        for handler in logging.getLogger().handlers
        if any(isinstance(item, EnvironmentFilter) for item in handler.filters)
    )
    record = logging.getLogger("recolour.tickets.service").makeRecord(
        "recolour.tickets.service", logging.INFO, __file__, 1, "Ticket %s moved", ("1",), None
    )
    assert handler.filter(record)
    assert logger.name == APP_LOGGER
    assert logger.level == logging.DEBUG
    assert "INFO [staging] recolour.tickets.service Ticket 1 moved" in handler.format(record)


def test_library_loggers_are_quieter_than_the_service():
    configure_logging(Settings(log_level="INFO", otel_enabled=False))

    assert logging.getLogger("uvicorn.access").level == logging.WARNING
    assert logging.getLogger(APP_LOGGER).level == logging.INFO


def test_parse_headers_skips_malformed_items():
    assert _parse_headers(None) == {}
    assert _parse_headers("api-key = secret,broken,,=empty, team=photo") == {
        "api-key": "secret",
        "team": "photo",
    }


def test_tracer_disabled_by_default():
    provider = init_tracer(Settings(otel_enabled=False))

    assert provider is None
    shutdown_tracer(provider)
