from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from semita.config.storage import get_store
from semita.main import app
from semita.services.complaint_service import ComplaintService
from semita.services.insights_service import InsightsService
from semita.services.notification_service import NotificationService
from semita.services.service_status import ServiceStatusService
from semita.services.vote_service import VoteService
from semita.storage.memory import MemoryStore


class FakeClock:
    """Deterministic utc_now(): every call moves one second forward."""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        self.current = self.current + timedelta(seconds=1)
        return self.current


@pytest.fixture
def clock(monkeypatch):
    fake = FakeClock(datetime(2024, 1, 15, 9, 0, tzinfo=timezone.utc))
    for module in (
        "semita.services.complaint_service",
        "semita.services.notification_service",
        "semita.services.service_status",
        "semita.services.vote_service",
    ):
        monkeypatch.setattr(f"{module}.utc_now", fake)
    return fake


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def notifications(store):
    return NotificationService(store)


@pytest.fixture
def service_status(store, notifications):
    return ServiceStatusService(store, notifications=notifications)


@pytest.fixture
def votes(store):
    return VoteService(store)


@pytest.fixture
def complaints(store, notifications, votes):
    return ComplaintService(store, notifications=notifications, votes=votes)


@pytest.fixture
def insights(store):
    return InsightsService(store)


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
