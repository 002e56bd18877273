"""
Admin inventory console: train create/delete and the summary report.
"""

import asyncio
from dataclasses import dataclass
from typing import List, Optional

from railbook.api.client import RailwayApiClient
from railbook.core.config import get_settings
from railbook.core.exceptions import ApiError, BookingInProgressError, ValidationError
from railbook.core.logging import get_logger
from railbook.core.notifications import Confirm, Notifier
from railbook.schemas.booking import Booking
from railbook.schemas.forms import TrainForm
from railbook.schemas.report import SummaryReport
from railbook.schemas.train import Train
from railbook.services.session_guard import SessionLease

logger = get_logger(__name__)

DELETE_PROMPT = "Are you sure you want to delete this train?"


@dataclass(frozen=True)
class SeatStatistics:
    total_seats: int
    booked_seats: int
    available_seats: int

    @property
    def booked_percent(self) -> float:
        return _percent(self.booked_seats, self.total_seats)

    @property
    def available_percent(self) -> float:
        return _percent(self.available_seats, self.total_seats)


def _percent(part: int, whole: int) -> float:
    if not whole:
        return 0.0
    return round(part / whole * 100, 1)


class AdminConsole:
    def __init__(
        self,
        api: RailwayApiClient,
        notifier: Notifier,
        confirm: Confirm,
        lease: Optional[SessionLease] = None,
    ):
        self.api = api
        self.notifier = notifier
        self.confirm = confirm
        self.lease = lease
        self.trains: List[Train] = []
        self.bookings: List[Booking] = []
        self.summary: Optional[SummaryReport] = None
        self.form = TrainForm()
        self.busy = False

    async def load(self) -> bool:
        """Fetch trains, all bookings and the summary concurrently."""
        try:
            trains, bookings, summary = await asyncio.gather(
                self.api.list_trains(),
                self.api.all_bookings(),
                self.api.summary(),
            )
        except ApiError as e:
            logger.warning("admin_load_failed", status_code=e.status_code)
            self.notifier.error("Failed to load data")
            return False

        if self.lease is not None and not self.lease.active:
            logger.info("admin_result_discarded", reason="session_ended")
            return False
        self.trains, self.bookings, self.summary = trains, bookings, summary
        return True

    async def create_train(self, form: Optional[TrainForm] = None) -> Optional[Train]:
        if self.busy:
            raise BookingInProgressError("a train is already being added")
        form = form or self.form
        try:
            request = form.to_request()
        except ValidationError as e:
            self.notifier.error(e.message)
            return None

        self.busy = True
        try:
            train = await self.api.create_train(request)
        except ApiError as e:
            logger.warning("train_create_failed", train_number=request.train_number, status_code=e.status_code)
            self.notifier.error(e.user_message("Failed to add train"))
            return None
        finally:
            self.busy = False

        logger.info("train_created", train_id=train.id, train_number=train.train_number)
        self.notifier.success("Train added successfully")
        self.form = TrainForm()
        await self.load()
        return train

    async def delete_train(self, train_id: str) -> bool:
        if not self.confirm(DELETE_PROMPT):
            return False
        try:
            await self.api.delete_train(train_id)
        except ApiError as e:
            logger.warning("train_delete_failed", train_id=train_id, status_code=e.status_code)
            self.notifier.error(e.user_message("Failed to delete train"))
            return False

        logger.info("train_deleted", train_id=train_id)
        self.notifier.success("Train deleted successfully")
        await self.load()
        return True

    def seat_statistics(self) -> SeatStatistics:
        s = self.summary or SummaryReport()
        return SeatStatistics(s.total_seats, s.booked_seats, s.available_seats)

    def recent_bookings(self) -> List[Booking]:
        if not self.summary:
            return []
        return self.summary.recent_bookings[: get_settings().RECENT_BOOKINGS_LIMIT]
