"""
Train catalog: the displayed train set and the query that produced it.

Every successful fetch replaces the whole set. Seat counts are only ever
the server's last answer; nothing here adjusts them locally.
"""

from typing import List, Optional

from railbook.api.client import RailwayApiClient
from railbook.core.exceptions import ApiError
from railbook.core.logging import get_logger
from railbook.core.notifications import Notifier
from railbook.schemas.train import SearchQuery, Train
from railbook.services.session_guard import SessionLease

logger = get_logger(__name__)


class TrainCatalog:
    def __init__(self, api: RailwayApiClient, notifier: Notifier, lease: Optional[SessionLease] = None):
        self.api = api
        self.notifier = notifier
        self.lease = lease
        self.trains: List[Train] = []
        self.query = SearchQuery()

    def _replace(self, trains: List[Train]) -> bool:
        if self.lease is not None and not self.lease.active:
            logger.info("catalog_result_discarded", reason="session_ended")
            return False
        self.trains = list(trains)
        return True

    async def list_all(self) -> Optional[List[Train]]:
        """Fetch every train. Returns None when the request failed."""
        try:
            trains = await self.api.list_trains()
        except ApiError as e:
            self.notifier.error(e.user_message("Failed to load trains"))
            return None

        if self._replace(trains):
            self.query = SearchQuery()
        logger.info("catalog_loaded", count=len(trains))
        return trains

    async def search(self, query: SearchQuery) -> Optional[List[Train]]:
        """
        Filter by source and/or destination; an empty query lists everything.
        No matches is a normal result, reported separately from a failure.
        """
        if query.is_empty:
            return await self.list_all()

        try:
            trains = await self.api.search_trains(query)
        except ApiError as e:
            self.notifier.error(e.user_message("Search failed"))
            return None

        if self._replace(trains):
            self.query = query
            if not trains:
                self.notifier.info("No trains found for this route")
        logger.info("catalog_searched", source=query.source, destination=query.destination, count=len(trains))
        return trains

    async def refresh(self) -> Optional[List[Train]]:
        """Re-run the current query without the empty-result notice."""
        if self.query.is_empty:
            return await self.list_all()
        try:
            trains = await self.api.search_trains(self.query)
        except ApiError as e:
            self.notifier.error(e.user_message("Failed to load trains"))
            return None
        self._replace(trains)
        return trains

    def find(self, train_id: str) -> Optional[Train]:
        for train in self.trains:
            if train.id == train_id:
                return train
        return None
