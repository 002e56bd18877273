"""
Passenger dashboard: catalog, booking, own ledger and PNR status.
Only operations valid for a passenger are exposed here.
"""

import asyncio
from typing import Optional

from railbook.api.client import RailwayApiClient
from railbook.core.logging import get_logger
from railbook.core.notifications import Confirm, Notifier
from railbook.schemas.booking import Booking
from railbook.schemas.forms import PassengerForm
from railbook.schemas.train import SearchQuery, Train
from railbook.schemas.user import Role, Session
from railbook.services.booking_service import BookingAttempt, BookingOrchestrator
from railbook.services.catalog_service import TrainCatalog
from railbook.services.ledger_service import BookingLedger
from railbook.services.pnr_service import PnrLookup
from railbook.services.session_guard import SessionGuard

logger = get_logger(__name__)


class PassengerDashboard:
    role = Role.PASSENGER

    def __init__(self, guard: SessionGuard, api: RailwayApiClient, notifier: Notifier, confirm: Confirm):
        self.guard = guard
        self.api = api
        self.notifier = notifier
        self.confirm = confirm
        self.session: Optional[Session] = None
        self.ready = False
        self.pnr = PnrLookup(api, notifier)

    async def mount(self) -> "PassengerDashboard":
        """Guard, then load catalog and ledger together."""
        self.session = self.guard.require(self.role)
        lease = self.guard.lease()
        self.catalog = TrainCatalog(self.api, self.notifier, lease)
        self.ledger = BookingLedger(self.api, self.notifier, lease)
        self.orchestrator = BookingOrchestrator(
            self.api, self.catalog, self.ledger, self.notifier, self.confirm, lease
        )

        await asyncio.gather(self.catalog.list_all(), self.ledger.refresh())
        self.ready = lease.active
        logger.info("dashboard_mounted", role=self.role.value, ready=self.ready)
        return self

    async def search(self, source: str = "", destination: str = ""):
        return await self.catalog.search(SearchQuery(source=source, destination=destination))

    def select_train(self, train: Train) -> bool:
        return self.orchestrator.select_train(train)

    async def book(self, train: Train, form: PassengerForm) -> Optional[BookingAttempt]:
        """Select and submit in one go. None when the waiting-list prompt was declined."""
        if not self.orchestrator.select_train(train):
            return None
        return await self.orchestrator.submit(form)

    async def cancel(self, booking: Booking) -> bool:
        return await self.orchestrator.cancel(booking)

    async def lookup_pnr(self, raw: str) -> Optional[Booking]:
        return await self.pnr.lookup(raw)

    def logout(self) -> str:
        self.ready = False
        return self.guard.logout()
