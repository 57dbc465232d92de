from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from recolour.core.config import Settings
from recolour.main import create_app
from recolour.tickets.catalog import photos
from recolour.tickets.models import CreateTicketInput
from recolour.tickets.repository import TicketRepository
from recolour.tickets.service import TicketService
from recolour.tickets.state import Priority


class FakeClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(seconds=1)
        return current


def make_input(
    *,
    partner: str = "Studio Alpha",
    priority: Priority = Priority.MEDIUM,
    style: str = "Granita - solid",
) -> CreateTicketInput:
    return CreateTicketInput(
        style=style,
        priority=priority,
        partner=partner,
        instructions=["Keep clipping path", "Granita - solid"],
        reference_photos=photos(0, 1),
    )


def auth(value: str) -> dict[str, str]:
    return {"Authorization": value}


MANAGER = auth("manager")
OPERATOR = auth("operator")
ALPHA = auth("partner:Studio Alpha")
BETA = auth("partner:Studio Beta")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def repository():
    return TicketRepository()


@pytest.fixture
def ticket_service(repository, clock):
    return TicketService(repository, clock=clock)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        assets_path=tmp_path,
        uploads_path=tmp_path / "uploads",
        seed_demo_data=True,
        otel_enabled=False,
    )


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client
