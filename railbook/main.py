"""
Railbook - Application Entry Point

Wires one front-end run together:
- Session guard over the configured session store
- Railway API client bound to that guard (bearer token, 401 teardown)
- Route resolution into role-gated dashboards
"""

from typing import Optional

import httpx

from railbook.api.client import RailwayApiClient
from railbook.core.config import Settings, get_settings
from railbook.core.logging import get_logger
from railbook.core.notifications import Confirm, Notifier, RecordingNotifier, always
from railbook.services.auth_service import AuthService
from railbook.services.interfaces.session_store import SessionStore
from railbook.services.pnr_service import PnrLookup
from railbook.services.session_guard import SessionGuard
from railbook.services.store_factory import get_session_store
from railbook.views import dashboard_for
from railbook.views.routes import landing_route, required_role, resolve

logger = get_logger(__name__)


class Application:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        notifier: Optional[Notifier] = None,
        confirm: Optional[Confirm] = None,
        store: Optional[SessionStore] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.settings = settings or get_settings()
        self.notifier = notifier or RecordingNotifier()
        self.confirm = confirm or always(False)
        self.guard = SessionGuard(store or get_session_store(self.settings), self.notifier)

        if http is None:
            self.api = RailwayApiClient.from_settings(self.settings)
        else:
            self.api = RailwayApiClient(http, settings=self.settings)
        self.api.bind_session(self.guard.token, self.guard.handle_unauthorized)

        self.auth = AuthService(self.api, self.guard, self.notifier)
        self.pnr = PnrLookup(self.api, self.notifier)

    async def __aenter__(self) -> "Application":
        logger.info(
            "application_starting",
            app=self.settings.APP_NAME,
            version=self.settings.APP_VERSION,
            environment=self.settings.ENVIRONMENT,
            api=self.settings.API_BASE_URL,
        )
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.api.aclose()
        logger.info("application_shutdown")

    async def navigate(self, path: str):
        """
        Mount the dashboard behind `path`.
        Returns None for the entry point; raises RedirectRequired when the
        guard refuses the view.
        """
        path = resolve(path)
        role = required_role(path)
        if role is None:
            return None
        dashboard = dashboard_for(role)(self.guard, self.api, self.notifier, self.confirm)
        return await dashboard.mount()

    async def home(self):
        """The signed-in identity's dashboard, or None when signed out."""
        identity = self.guard.identity
        if identity is None:
            return None
        return await self.navigate(landing_route(identity.role))
