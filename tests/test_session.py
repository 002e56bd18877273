"""
Tests for the session guard, route resolution and logout.
"""

import pytest

from railbook.core.exceptions import AuthorizationError, RedirectRequired
from railbook.core.notifications import RecordingNotifier
from railbook.schemas.user import Identity, Role, Session
from railbook.services.interfaces.memory_store import MemorySessionStore
from railbook.services.session_guard import SessionGuard
from railbook.views.routes import ADMIN_ROUTE, PASSENGER_ROUTE, resolve

ASHA = Identity(id="user-1", username="asha", full_name="Asha Rao", role=Role.PASSENGER)


def test_require_without_session_redirects():
    guard = SessionGuard(MemorySessionStore())

    with pytest.raises(RedirectRequired) as exc_info:
        guard.require(Role.PASSENGER)

    assert exc_info.value.location == "/"
    assert exc_info.value.reason == "no_session"


def test_require_wrong_role_redirects():
    guard = SessionGuard(MemorySessionStore(Session(token="t", identity=ASHA)))

    with pytest.raises(RedirectRequired) as exc_info:
        guard.require(Role.ADMIN)

    assert exc_info.value.reason == "role_mismatch"


def test_require_rereads_the_store():
    """A session written by another process is picked up at mount time."""
    store = MemorySessionStore()
    guard = SessionGuard(store)
    store.save(Session(token="from-elsewhere", identity=ASHA))

    assert guard.require(Role.PASSENGER).token == "from-elsewhere"


def test_establish_persists_token_and_identity():
    store = MemorySessionStore()
    guard = SessionGuard(store)

    guard.establish("abc", ASHA)

    assert store.load() == Session(token="abc", identity=ASHA)
    assert guard.token() == "abc"
    assert guard.identity.username == "asha"


def test_invalidate_clears_both_halves_and_ends_leases():
    store = MemorySessionStore()
    guard = SessionGuard(store)
    guard.establish("abc", ASHA)
    lease = guard.lease()
    assert lease.active

    guard.invalidate("logout")

    assert store.load() is None
    assert guard.token() is None
    assert guard.identity is None
    assert not lease.active


def test_new_login_does_not_revive_old_lease():
    guard = SessionGuard(MemorySessionStore())
    guard.establish("first", ASHA)
    lease = guard.lease()

    guard.invalidate("logout")
    guard.establish("second", ASHA)

    assert not lease.active
    assert guard.lease().active


@pytest.mark.parametrize(
    "path, expected",
    [
        (ADMIN_ROUTE, ADMIN_ROUTE),
        (PASSENGER_ROUTE, PASSENGER_ROUTE),
        ("/", "/"),
        ("/reports", "/"),
        ("", "/"),
    ],
)
def test_unknown_routes_resolve_to_entry_point(path, expected):
    assert resolve(path) == expected


@pytest.mark.asyncio
async def test_logout_is_local_and_notifies(passenger_dashboard, server, store, notifier):
    route = passenger_dashboard.logout()

    assert route == "/"
    assert server.requests == []
    assert store.load() is None
    assert notifier.messages("info") == ["Logged out successfully"]


@pytest.mark.asyncio
async def test_after_logout_guarded_views_redirect(passenger):
    passenger.guard.logout()

    with pytest.raises(RedirectRequired):
        await passenger.navigate(PASSENGER_ROUTE)


@pytest.mark.asyncio
async def test_unauthorized_mid_session_tears_down(passenger, server, store):
    server.revoke_all_tokens()

    with pytest.raises(AuthorizationError):
        await passenger.api.my_bookings()

    assert passenger.guard.current is None
    assert store.load() is None
    with pytest.raises(RedirectRequired):
        passenger.guard.require(Role.PASSENGER)


@pytest.mark.asyncio
async def test_passenger_cannot_open_admin_view(passenger, server):
    server.requests.clear()

    with pytest.raises(RedirectRequired) as exc_info:
        await passenger.navigate(ADMIN_ROUTE)

    assert exc_info.value.reason == "role_mismatch"
    assert server.requests == []
    # Wrong view, not a dead session
    assert passenger.guard.current is not None


def test_logout_notification_uses_guard_notifier():
    notifier = RecordingNotifier()
    guard = SessionGuard(MemorySessionStore(), notifier)
    guard.establish("abc", ASHA)

    guard.logout()

    assert notifier.messages() == ["Logged out successfully"]
