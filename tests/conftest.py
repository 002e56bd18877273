"""
Pytest fixtures for the fake railway API, the client application and
signed-in dashboards.

The client talks to the in-process fake server through httpx's
ASGITransport, so every test runs the real HTTP client code path.
"""

from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport

from railbook.core.config import Settings
from railbook.core.notifications import RecordingNotifier
from railbook.main import Application
from railbook.services.interfaces.memory_store import MemorySessionStore
from railbook.views.routes import ADMIN_ROUTE, PASSENGER_ROUTE
from fake_server import FakeRailwayServer

PASSENGER_PASSWORD = "secret123"
ADMIN_PASSWORD = "admin123"


class ScriptedConfirm:
    """Answers every prompt with `answer` and remembers what was asked."""

    def __init__(self, answer: bool = True):
        self.answer = answer
        self.prompts = []

    def __call__(self, message: str) -> bool:
        self.prompts.append(message)
        return self.answer


@pytest.fixture
def server() -> FakeRailwayServer:
    """Fake API seeded with one passenger, one admin and two trains."""
    server = FakeRailwayServer()
    server.add_user("asha", PASSENGER_PASSWORD, "Asha Rao")
    server.add_user("ravi", PASSENGER_PASSWORD, "Ravi Kumar")
    server.add_user("admin", ADMIN_PASSWORD, "Station Master", role="admin")
    server.add_train("12627", "Karnataka Express", "Bangalore", "Delhi", total_seats=50)
    server.add_train("12123", "Deccan Queen", "Pune", "Mumbai", total_seats=50, available_seats=0)
    return server


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def confirm() -> ScriptedConfirm:
    return ScriptedConfirm(answer=True)


@pytest.fixture
def store() -> MemorySessionStore:
    return MemorySessionStore()


@pytest_asyncio.fixture
async def app(
    server: FakeRailwayServer,
    notifier: RecordingNotifier,
    confirm: ScriptedConfirm,
    store: MemorySessionStore,
) -> AsyncGenerator[Application, None]:
    """Client application wired to the fake server."""
    http = httpx.AsyncClient(transport=ASGITransport(app=server.app), base_url="http://test")
    application = Application(
        settings=Settings(), notifier=notifier, confirm=confirm, store=store, http=http
    )
    async with application:
        yield application


@pytest_asyncio.fixture
async def passenger(app: Application, notifier: RecordingNotifier) -> Application:
    """Application with the passenger "asha" signed in."""
    assert await app.auth.login("asha", PASSENGER_PASSWORD) == PASSENGER_ROUTE
    notifier.clear()
    return app


@pytest_asyncio.fixture
async def admin(app: Application, notifier: RecordingNotifier) -> Application:
    """Application with the admin signed in."""
    assert await app.auth.login("admin", ADMIN_PASSWORD) == ADMIN_ROUTE
    notifier.clear()
    return app


@pytest_asyncio.fixture
async def passenger_dashboard(passenger: Application, server: FakeRailwayServer, notifier: RecordingNotifier):
    """Mounted passenger dashboard; request log and notifications start empty."""
    dashboard = await passenger.navigate(PASSENGER_ROUTE)
    server.requests.clear()
    notifier.clear()
    return dashboard


@pytest_asyncio.fixture
async def admin_dashboard(admin: Application, server: FakeRailwayServer, notifier: RecordingNotifier):
    dashboard = await admin.navigate(ADMIN_ROUTE)
    server.requests.clear()
    notifier.clear()
    return dashboard
