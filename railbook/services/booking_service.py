"""
Booking orchestrator: drives one booking attempt from train selection to a
settled outcome, plus cancellation.

BOOKING FLOW
============

  IDLE -> AWAITING_SEAT_CHECK -> FORM_OPEN -> SUBMITTING -> SETTLED | FAILED

  1. select_train(): look at the train's last known available_seats.
     - seats left: open the form
     - sold out: ask before joining the waiting list; "no" goes back to IDLE
  2. submit(): validate the passenger form (age must be an integer), then
     send the request. A second submit while SUBMITTING is rejected.
  3. The response status decides the branch, not the pre-check:
     - confirmed: show the PNR
     - waiting: show the list position (a success, not an error)
  4. Any non-2xx response: FAILED, message prefers the server detail.
  5. SETTLED or FAILED: close and reset the form, then re-fetch the catalog
     and the ledger. Seat counts and ledger rows only change through that
     re-fetch.

The seat check is advisory. Two passengers can race for the last seat; the
loser is told "waiting" by the server even though the client saw a seat,
and that answer is shown as-is.

There is a single attempt slot. A 401 during submission leaves through
AuthorizationError after the guard has cleared the session; the slot is
reset and nothing is re-fetched because the view is gone.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from railbook.api.client import RailwayApiClient
from railbook.core.exceptions import (
    ApiError,
    AuthorizationError,
    BookingInProgressError,
    InvalidTransitionError,
    ValidationError,
)
from railbook.core.logging import get_logger
from railbook.core.notifications import Confirm, Notifier
from railbook.core.metrics import record_booking_outcome, record_cancellation
from railbook.schemas.booking import Booking, BookingResult
from railbook.schemas.forms import PassengerForm
from railbook.schemas.train import Train
from railbook.services.catalog_service import TrainCatalog
from railbook.services.ledger_service import BookingLedger
from railbook.services.session_guard import SessionLease

logger = get_logger(__name__)

WAITLIST_PROMPT = "No seats available. Do you want to join waiting list?"
CANCEL_PROMPT = "Are you sure you want to cancel this booking?"


class AttemptState(str, Enum):
    IDLE = "idle"
    AWAITING_SEAT_CHECK = "awaiting_seat_check"
    FORM_OPEN = "form_open"
    SUBMITTING = "submitting"
    SETTLED = "settled"
    FAILED = "failed"


@dataclass
class BookingAttempt:
    train: Train
    state: AttemptState = AttemptState.AWAITING_SEAT_CHECK
    waitlist_consent: bool = False
    result: Optional[BookingResult] = None
    error: Optional[str] = None

    @property
    def message(self) -> Optional[str]:
        """The one line shown for a finished attempt."""
        if self.state == AttemptState.FAILED:
            return self.error
        if self.result is None:
            return None
        if self.result.confirmed:
            return f"Ticket booked! PNR: {self.result.pnr}"
        return f"Added to waiting list. Position: {self.result.position}"


class BookingOrchestrator:
    def __init__(
        self,
        api: RailwayApiClient,
        catalog: TrainCatalog,
        ledger: BookingLedger,
        notifier: Notifier,
        confirm: Confirm,
        lease: Optional[SessionLease] = None,
    ):
        self.api = api
        self.catalog = catalog
        self.ledger = ledger
        self.notifier = notifier
        self.confirm = confirm
        self.lease = lease
        self.current: Optional[BookingAttempt] = None
        self.form = PassengerForm()
        self._cancelling: set[str] = set()

    @property
    def state(self) -> AttemptState:
        return self.current.state if self.current else AttemptState.IDLE

    def select_train(self, train: Train) -> bool:
        """
        Start an attempt for `train`. Returns True when the form is open.
        Declining the waiting-list prompt leaves everything untouched.
        """
        if self.state == AttemptState.SUBMITTING:
            raise BookingInProgressError("a booking is already being submitted")

        attempt = BookingAttempt(train=train)
        self.current = attempt

        if train.available_seats == 0:
            if not self.confirm(WAITLIST_PROMPT):
                logger.info("waitlist_declined", train_id=train.id)
                self.current = None
                return False
            attempt.waitlist_consent = True

        attempt.state = AttemptState.FORM_OPEN
        logger.info(
            "booking_form_opened",
            train_id=train.id,
            available_seats=train.available_seats,
            waitlist=attempt.waitlist_consent,
        )
        return True

    def close_form(self) -> None:
        """User dismissed the dialog before submitting."""
        if self.state == AttemptState.SUBMITTING:
            raise BookingInProgressError("cannot close the form while submitting")
        self.current = None
        self.form = PassengerForm()

    async def submit(self, form: Optional[PassengerForm] = None) -> BookingAttempt:
        """
        Submit the passenger form for the selected train.

        Returns the finished attempt (SETTLED or FAILED). A form that fails
        validation raises ValidationError and the form stays open.
        """
        if self.state == AttemptState.SUBMITTING:
            logger.info("booking_submit_rejected", reason="in_flight")
            raise BookingInProgressError("a booking is already being submitted")
        if self.state != AttemptState.FORM_OPEN:
            raise InvalidTransitionError("submit", self.state.value)

        attempt = self.current
        form = form or self.form
        try:
            request = form.to_request(attempt.train.id)
        except ValidationError as e:
            self.notifier.error(e.message)
            raise

        attempt.state = AttemptState.SUBMITTING
        try:
            result = await self.api.create_booking(request)
        except AuthorizationError:
            self._finish()
            raise
        except ApiError as e:
            attempt.state = AttemptState.FAILED
            attempt.error = e.user_message("Booking failed")
            record_booking_outcome("failed")
            logger.warning("booking_failed", train_id=attempt.train.id, status_code=e.status_code)
            self.notifier.error(attempt.error)
        else:
            attempt.state = AttemptState.SETTLED
            attempt.result = result
            record_booking_outcome(result.status.value)
            logger.info(
                "booking_settled",
                train_id=attempt.train.id,
                status=result.status.value,
                pnr=result.pnr,
                position=result.position,
                expected_waitlist=attempt.waitlist_consent,
            )
            if result.confirmed:
                self.notifier.success(attempt.message)
            else:
                self.notifier.info(attempt.message)

        self._finish()
        await self.reconcile()
        return attempt

    async def cancel(self, booking: Booking) -> bool:
        """Cancel a confirmed booking by PNR after the user agrees."""
        if not self.ledger.can_cancel(booking):
            raise InvalidTransitionError("cancel", booking.booking_status.value)
        if booking.pnr in self._cancelling:
            raise BookingInProgressError(f"cancellation of {booking.pnr} already in flight")
        if not self.confirm(CANCEL_PROMPT):
            return False

        self._cancelling.add(booking.pnr)
        try:
            response = await self.api.cancel_booking(booking.pnr)
        except ApiError as e:
            record_cancellation(False)
            logger.warning("cancellation_failed", pnr=booking.pnr, status_code=e.status_code)
            self.notifier.error("Cancellation failed")
            return False
        finally:
            self._cancelling.discard(booking.pnr)

        record_cancellation(True)
        logger.info("booking_cancelled", pnr=booking.pnr)
        self.notifier.success(response.message)
        await self.reconcile()
        return True

    async def reconcile(self) -> None:
        """Re-fetch catalog and ledger from the server."""
        if self.lease is not None and not self.lease.active:
            return
        await asyncio.gather(self.catalog.refresh(), self.ledger.refresh())

    def _finish(self) -> None:
        self.current = None
        self.form = PassengerForm()
