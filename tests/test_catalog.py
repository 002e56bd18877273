"""
Tests for the train catalog, the passenger's ledger and PNR status lookup.
"""

import pytest

from railbook.schemas.booking import Booking, BookingStatus
from railbook.schemas.train import SearchQuery
from railbook.services.ledger_service import BookingLedger
from railbook.services.pnr_service import normalize_pnr


def numbers(trains):
    return sorted(t.train_number for t in trains)


@pytest.mark.asyncio
async def test_mount_loads_catalog_and_own_ledger(passenger, server):
    server.add_booking("asha", server.train_id("12627"), passenger_name="Asha")
    server.add_booking("ravi", server.train_id("12627"), passenger_name="Ravi")

    dashboard = await passenger.navigate("/passenger")

    assert dashboard.ready
    assert numbers(dashboard.catalog.trains) == ["12123", "12627"]
    assert [b.passenger_name for b in dashboard.ledger.bookings] == ["Asha"]


@pytest.mark.asyncio
async def test_search_sends_only_given_fields(passenger_dashboard, server):
    await passenger_dashboard.search(source="Bangalore")

    assert server.last("GET", "/api/trains/search").params == {"source": "Bangalore"}
    assert numbers(passenger_dashboard.catalog.trains) == ["12627"]


@pytest.mark.asyncio
async def test_search_passes_values_verbatim(passenger_dashboard, server):
    """Case folding is the server's business."""
    await passenger_dashboard.search(source="pune", destination="MUMBAI")

    assert server.last("GET", "/api/trains/search").params == {"source": "pune", "destination": "MUMBAI"}
    assert numbers(passenger_dashboard.catalog.trains) == ["12123"]


@pytest.mark.asyncio
async def test_empty_query_lists_everything(passenger_dashboard, server):
    await passenger_dashboard.search()

    assert server.count("GET", "/api/trains") == 1
    assert server.count("GET", "/api/trains/search") == 0


@pytest.mark.asyncio
async def test_no_matches_is_info_not_error(passenger_dashboard, notifier):
    result = await passenger_dashboard.search(source="Goa")

    assert result == []
    assert passenger_dashboard.catalog.trains == []
    assert notifier.history[0].level == "info"
    assert notifier.messages() == ["No trains found for this route"]


@pytest.mark.asyncio
async def test_search_failure_keeps_previous_set(passenger_dashboard, server, notifier):
    before = list(passenger_dashboard.catalog.trains)
    server.fail("GET", "/api/trains/search", 500)

    assert await passenger_dashboard.search(source="Pune") is None

    assert notifier.messages("error") == ["Search failed"]
    assert passenger_dashboard.catalog.trains == before


@pytest.mark.asyncio
async def test_results_replace_the_whole_set(passenger_dashboard, server):
    await passenger_dashboard.search(source="Pune")
    server.add_train("11301", "Udyan Express", "Pune", "Bangalore")

    await passenger_dashboard.catalog.list_all()

    assert numbers(passenger_dashboard.catalog.trains) == ["11301", "12123", "12627"]
    assert passenger_dashboard.catalog.query == SearchQuery()


@pytest.mark.asyncio
async def test_list_failure_uses_fallback(passenger_dashboard, server, notifier):
    server.fail("GET", "/api/trains", 502)

    assert await passenger_dashboard.catalog.list_all() is None
    assert notifier.messages() == ["Failed to load trains"]


@pytest.mark.parametrize(
    "status, cancellable",
    [
        (BookingStatus.CONFIRMED, True),
        (BookingStatus.WAITING, False),
        (BookingStatus.CANCELLED, False),
    ],
)
def test_only_confirmed_bookings_can_be_cancelled(status, cancellable):
    booking = Booking(
        id="b-1",
        pnr="PNR000001",
        username="asha",
        train_id="train-1",
        train_name="Karnataka Express",
        train_number="12627",
        passenger_name="Asha",
        passenger_age=29,
        passenger_gender="F",
        passenger_phone="9999999999",
        seat_number=1 if status == BookingStatus.CONFIRMED else None,
        booking_status=status,
        source="Bangalore",
        destination="Delhi",
        fare=500.0,
        booking_date="2026-01-15T10:00:00",
    )
    assert BookingLedger.can_cancel(booking) is cancellable


@pytest.mark.asyncio
async def test_ledger_failure_prefers_detail(passenger_dashboard, server, notifier):
    server.fail("GET", "/api/bookings/my-bookings", 500, "Ledger temporarily unavailable")

    assert await passenger_dashboard.ledger.refresh() is None
    assert notifier.messages() == ["Ledger temporarily unavailable"]


@pytest.mark.parametrize("raw, expected", [("  pnr123  ", "PNR123"), ("PNR000001", "PNR000001"), ("   ", "")])
def test_normalize_pnr(raw, expected):
    assert normalize_pnr(raw) == expected


@pytest.mark.asyncio
async def test_pnr_lookup_trims_and_uppercases(app, server):
    await app.pnr.lookup("  pnr123  ")

    assert server.count("GET", "/api/bookings/pnr/PNR123") == 1


@pytest.mark.asyncio
async def test_pnr_lookup_needs_no_session(app, server, notifier):
    booking = server.add_booking("asha", server.train_id("12627"), passenger_name="Asha")
    assert app.guard.current is None

    found = await app.pnr.lookup(booking["pnr"].lower())

    assert found.pnr == booking["pnr"]
    assert found.booking_status == BookingStatus.CONFIRMED
    assert notifier.messages("success") == ["Booking found!"]


@pytest.mark.asyncio
async def test_empty_pnr_is_rejected_locally(app, server, notifier):
    assert await app.pnr.lookup("   ") is None
    assert server.requests == []
    assert notifier.messages("error") == ["Please enter PNR number"]


@pytest.mark.asyncio
async def test_failed_lookup_clears_previous_result(app, server, notifier):
    booking = server.add_booking("asha", server.train_id("12627"))
    await app.pnr.lookup(booking["pnr"])
    assert app.pnr.result is not None

    assert await app.pnr.lookup("PNR999999") is None

    assert app.pnr.result is None
    assert notifier.last.message == "Booking not found"


@pytest.mark.asyncio
async def test_passenger_dashboard_exposes_pnr_lookup(passenger_dashboard, server):
    booking = server.add_booking("ravi", server.train_id("12627"))

    found = await passenger_dashboard.lookup_pnr(booking["pnr"])

    assert found.passenger_name == "Someone"
    assert passenger_dashboard.pnr.result == found


@pytest.mark.asyncio
@pytest.mark.parametrize("suffix", ["#X", "?X=1", "/X"])
async def test_pnr_lookup_sends_the_whole_input(app, server, notifier, suffix):
    """Characters with URL meaning stay part of the PNR instead of truncating it."""
    booking = server.add_booking("asha", server.train_id("12627"))

    assert await app.pnr.lookup(booking["pnr"] + suffix) is None

    assert app.pnr.result is None
    assert notifier.messages() == ["Booking not found"]
