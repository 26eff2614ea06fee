"""Shared test fixtures."""

from __future__ import annotations

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from canaryd.config import Settings
from canaryd.main import create_app
from canaryd.schemas.measurement import Check, Measurement
from canaryd.services.repository import MeasurementRepository
from canaryd.stores import InMemoryScoreStore, SQLScoreStore


class FakeClock:
    """Settable time source in epoch seconds."""

    def __init__(self, now: float = 1005) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def make_measurement(check_id: str = "c1", t: int = 1000, **fields) -> Measurement:
    fields.setdefault("id", f"m-{check_id}-{t}")
    fields.setdefault("location", "us")
    return Measurement(check=Check(id=check_id, url="http://x"), t=t, **fields)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(1005)


@pytest.fixture
def memory_store() -> InMemoryScoreStore:
    return InMemoryScoreStore()


@pytest_asyncio.fixture(params=["memory", "sql"])
async def store(request, tmp_path):
    """Every score store backend that runs without external services."""
    if request.param == "memory":
        yield InMemoryScoreStore()
        return
    store = SQLScoreStore(f"sqlite+aiosqlite:///{tmp_path}/canaryd.db")
    await store.init()
    yield store
    await store.close()


@pytest.fixture
def repository(store, clock) -> MeasurementRepository:
    return MeasurementRepository(store, timeout=5.0, clock=clock)


@pytest.fixture
def settings() -> Settings:
    return Settings(storage_url="memory://", retention=60, default_range=10)


@pytest.fixture
def client(settings, clock):
    """TestClient over an app backed by an in-memory store."""
    app = create_app(settings, store=InMemoryScoreStore(), clock=clock)
    with TestClient(app) as client:
        yield client
