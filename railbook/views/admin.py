"""
Admin dashboard: inventory console and statistics.
"""

from typing import Optional

from railbook.api.client import RailwayApiClient
from railbook.core.logging import get_logger
from railbook.core.notifications import Confirm, Notifier
from railbook.schemas.forms import TrainForm
from railbook.schemas.user import Role, Session
from railbook.services.admin_service import AdminConsole
from railbook.services.session_guard import SessionGuard

logger = get_logger(__name__)


class AdminDashboard:
    role = Role.ADMIN

    def __init__(self, guard: SessionGuard, api: RailwayApiClient, notifier: Notifier, confirm: Confirm):
        self.guard = guard
        self.api = api
        self.notifier = notifier
        self.confirm = confirm
        self.session: Optional[Session] = None
        self.ready = False

    async def mount(self) -> "AdminDashboard":
        self.session = self.guard.require(self.role)
        lease = self.guard.lease()
        self.console = AdminConsole(self.api, self.notifier, self.confirm, lease)
        await self.console.load()
        self.ready = lease.active
        logger.info("dashboard_mounted", role=self.role.value, ready=self.ready)
        return self

    async def add_train(self, form: TrainForm):
        return await self.console.create_train(form)

    async def delete_train(self, train_id: str) -> bool:
        return await self.console.delete_train(train_id)

    def logout(self) -> str:
        self.ready = False
        return self.guard.logout()
