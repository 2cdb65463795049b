"""
Pytest configuration: fresh stores, router and app state per test.
"""

from datetime import datetime, timedelta
from typing import Any

import pytest
from fastapi.testclient import TestClient

from orderhub.services.coordinator import OrderLifecycleCoordinator, reset_coordinator
from orderhub.services.realtime import BroadcastRouter, reset_broadcast_router
from orderhub.services.store import (
    SAMPLE_MENU,
    InMemoryMenuCatalog,
    InMemoryOrderStore,
    reset_stores,
)


class FakeConnection:
    """Records frames instead of writing to a socket."""

    def __init__(self) -> None:
        self.frames: list[dict[str, Any]] = []

    async def send_json(self, data: Any) -> None:
        self.frames.append(data)

    def events(self, name: str) -> list[Any]:
        return [f["data"] for f in self.frames if f["event"] == name]

    @property
    def names(self) -> list[str]:
        return [f["event"] for f in self.frames]


class BrokenConnection(FakeConnection):
    """Works until ``broken`` is set, then every send fails."""

    def __init__(self, broken: bool = True) -> None:
        super().__init__()
        self.broken = broken

    async def send_json(self, data: Any) -> None:
        if self.broken:
            raise ConnectionResetError("peer went away")
        await super().send_json(data)


class SteppingClock:
    """Deterministic clock advancing a fixed step on every call."""

    def __init__(self, start: datetime, step: timedelta = timedelta(0)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


def make_order_payload(**overrides: Any) -> dict[str, Any]:
    payload = {
        "items": [{"id": 1, "name": "Gulab Jamun", "price": 120, "quantity": 2}],
        "total": 240,
        "customerInfo": {
            "name": "Asha Verma",
            "phone": "9876543210",
            "address": {"fullAddress": "12 MG Road, Delhi"},
        },
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def order_payload() -> dict[str, Any]:
    return make_order_payload()


@pytest.fixture
def catalog() -> InMemoryMenuCatalog:
    return InMemoryMenuCatalog(items=SAMPLE_MENU)


@pytest.fixture
def store(catalog: InMemoryMenuCatalog) -> InMemoryOrderStore:
    return InMemoryOrderStore(catalog=catalog)


@pytest.fixture
def router() -> BroadcastRouter:
    return BroadcastRouter(restaurant_name="Test Kitchen")


@pytest.fixture
def coordinator(
    store: InMemoryOrderStore,
    catalog: InMemoryMenuCatalog,
    router: BroadcastRouter,
) -> OrderLifecycleCoordinator:
    return OrderLifecycleCoordinator(orders=store, menu=catalog, router=router)


@pytest.fixture
def client():
    """TestClient over a fresh process state. Used as a context manager so
    HTTP requests and WebSocket sessions share one event loop."""
    reset_coordinator()
    reset_stores()
    reset_broadcast_router()

    from orderhub.main import app

    with TestClient(app) as test_client:
        yield test_client

    reset_coordinator()
    reset_stores()
    reset_broadcast_router()
