"""
Booking ledger: the signed-in passenger's own bookings.
The server filters by session; the client shows what it is given.
"""

from typing import List, Optional

from railbook.api.client import RailwayApiClient
from railbook.core.exceptions import ApiError
from railbook.core.logging import get_logger
from railbook.core.notifications import Notifier
from railbook.schemas.booking import Booking
from railbook.services.session_guard import SessionLease

logger = get_logger(__name__)


class BookingLedger:
    def __init__(self, api: RailwayApiClient, notifier: Notifier, lease: Optional[SessionLease] = None):
        self.api = api
        self.notifier = notifier
        self.lease = lease
        self.bookings: List[Booking] = []

    async def refresh(self) -> Optional[List[Booking]]:
        try:
            bookings = await self.api.my_bookings()
        except ApiError as e:
            self.notifier.error(e.user_message("Failed to load bookings"))
            return None

        if self.lease is not None and not self.lease.active:
            logger.info("ledger_result_discarded", reason="session_ended")
            return bookings
        self.bookings = list(bookings)
        return bookings

    @staticmethod
    def can_cancel(booking: Booking) -> bool:
        """Only confirmed bookings expose a cancel action."""
        return booking.cancellable

    def cancellable(self) -> List[Booking]:
        return [b for b in self.bookings if self.can_cancel(b)]

    def find(self, pnr: str) -> Optional[Booking]:
        for booking in self.bookings:
            if booking.pnr == pnr:
                return booking
        return None
