from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from recolour.api.errors import register_exception_handlers
from recolour.api.routes import photos, tickets, views
from recolour.core.config import Settings, get_settings
from recolour.core.logging import configure_logging, init_tracer, shutdown_tracer
from recolour.photos.service import PhotoService
from recolour.reporting.dashboard import DashboardService
from recolour.tickets.catalog import seeded_tickets
from recolour.tickets.repository import TicketRepository
from recolour.tickets.service import TicketService


def build_services(app: FastAPI, settings: Settings) -> None:
    """Attach fresh in-memory services to ``app.state``."""

    repository = TicketRepository()
    ticket_service = TicketService(repository)
    if settings.seed_demo_data:
        ticket_service.seed(seeded_tickets(), settings.seed_actor)

    app.state.ticket_repository = repository
    app.state.ticket_service = ticket_service
    app.state.photo_service = PhotoService(settings.uploads_path, url_prefix=settings.uploads_url_prefix)
    app.state.dashboard_service = DashboardService(repository)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):  # pragma: no cover - executed by framework
        logger = configure_logging(settings)
        tracer_provider = init_tracer(settings)

        app.state.logger = logger
        app.state.tracer_provider = tracer_provider
        build_services(app, settings)
        logger.info("Recolour API started (%s)", settings.environment)
        try:
            yield
        finally:
            shutdown_tracer(tracer_provider)

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    register_exception_handlers(app)
    app.include_router(tickets.router)
    app.include_router(photos.router)
    app.include_router(views.router)
    app.mount(
        "/api/assets",
        StaticFiles(directory=settings.assets_path, check_dir=False),
        name="assets",
    )
    return app


app = create_app()
