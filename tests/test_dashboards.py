"""
Tests for dashboard mounting, role routing and late responses after logout.
"""

import asyncio

import pytest

from railbook.schemas.train import SearchQuery
from railbook.schemas.user import Role
from railbook.views import AdminDashboard, PassengerDashboard, dashboard_for
from railbook.views.routes import ADMIN_ROUTE, PASSENGER_ROUTE


def test_dashboard_for_role():
    assert dashboard_for(Role.PASSENGER) is PassengerDashboard
    assert dashboard_for(Role.ADMIN) is AdminDashboard


@pytest.mark.asyncio
async def test_entry_point_has_no_dashboard(app):
    assert await app.navigate("/") is None
    assert await app.navigate("/nowhere") is None


@pytest.mark.asyncio
async def test_home_when_signed_out(app, server):
    assert await app.home() is None
    assert server.requests == []


@pytest.mark.asyncio
async def test_home_follows_role(passenger, admin):
    # Both fixtures share one application; the admin signed in last
    dashboard = await admin.home()
    assert isinstance(dashboard, AdminDashboard)


@pytest.mark.asyncio
async def test_home_for_passenger(passenger):
    dashboard = await passenger.home()
    assert isinstance(dashboard, PassengerDashboard)
    assert dashboard.ready


@pytest.mark.asyncio
async def test_logout_during_mount_discards_late_results(passenger, server):
    """Responses that land after logout never reach the torn-down view."""
    gate = server.hold("GET", "/api/trains")
    mount = asyncio.create_task(passenger.navigate(PASSENGER_ROUTE))
    await server.arrived[("GET", "/api/trains")].wait()

    passenger.guard.logout()
    gate.set()
    dashboard = await mount

    assert dashboard.ready is False
    assert dashboard.catalog.trains == []


@pytest.mark.asyncio
async def test_admin_logout_during_load_discards_results(admin, server):
    gate = server.hold("GET", "/api/reports/summary")
    mount = asyncio.create_task(admin.navigate(ADMIN_ROUTE))
    await server.arrived[("GET", "/api/reports/summary")].wait()

    admin.guard.logout()
    gate.set()
    dashboard = await mount

    assert dashboard.ready is False
    assert dashboard.console.summary is None
    assert dashboard.console.trains == []


@pytest.mark.asyncio
async def test_admin_dashboard_logout(admin_dashboard, store, notifier):
    assert admin_dashboard.logout() == "/"
    assert admin_dashboard.ready is False
    assert store.load() is None
    assert notifier.messages() == ["Logged out successfully"]


@pytest.mark.asyncio
async def test_search_finishing_after_logout_leaves_catalog_untouched(passenger_dashboard, server):
    catalog = passenger_dashboard.catalog
    before = list(catalog.trains)
    gate = server.hold("GET", "/api/trains/search")
    search = asyncio.create_task(passenger_dashboard.search(source="Pune"))
    await server.arrived[("GET", "/api/trains/search")].wait()

    passenger_dashboard.logout()
    gate.set()
    await search

    assert catalog.query == SearchQuery()
    assert catalog.trains == before
