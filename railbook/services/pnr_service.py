"""
Public PNR status lookup. No session needed.
"""

from typing import Optional

from railbook.api.client import RailwayApiClient
from railbook.core.exceptions import ApiError
from railbook.core.logging import get_logger
from railbook.core.notifications import Notifier
from railbook.schemas.booking import Booking

logger = get_logger(__name__)


def normalize_pnr(raw: str) -> str:
    return (raw or "").strip().upper()


class PnrLookup:
    def __init__(self, api: RailwayApiClient, notifier: Notifier):
        self.api = api
        self.notifier = notifier
        self.result: Optional[Booking] = None

    async def lookup(self, raw: str) -> Optional[Booking]:
        pnr = normalize_pnr(raw)
        if not pnr:
            self.notifier.error("Please enter PNR number")
            return None

        try:
            booking = await self.api.lookup_pnr(pnr)
        except ApiError as e:
            # Never leave an old result next to a failure notice
            self.result = None
            logger.info("pnr_lookup_failed", pnr=pnr, status_code=e.status_code)
            if e.not_found:
                self.notifier.error("Booking not found")
            else:
                self.notifier.error(e.user_message("Booking not found"))
            return None

        self.result = booking
        self.notifier.success("Booking found!")
        return booking
