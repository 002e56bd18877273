"""
Authentication service handling sign-in and registration.
"""

from typing import Optional

from railbook.api.client import RailwayApiClient
from railbook.core.config import get_settings
from railbook.core.exceptions import ApiError, ValidationError
from railbook.core.logging import get_logger
from railbook.core.notifications import Notifier
from railbook.schemas.forms import RegistrationForm
from railbook.schemas.user import LoginRequest
from railbook.services.session_guard import SessionGuard
from railbook.views.routes import landing_route

logger = get_logger(__name__)


class AuthService:
    def __init__(self, api: RailwayApiClient, guard: SessionGuard, notifier: Notifier):
        self.api = api
        self.guard = guard
        self.notifier = notifier
        self.busy = False
        self.registration = RegistrationForm()

    async def login(self, username: str, password: str) -> Optional[str]:
        """
        Exchange credentials for a session.
        Returns the landing route for the identity's role, or None on failure.
        """
        if self.busy:
            logger.info("login_rejected", reason="busy")
            return None

        self.busy = True
        try:
            response = await self.api.login(LoginRequest(username=username, password=password))
        except ApiError as e:
            logger.warning("login_failed", username=username, status_code=e.status_code)
            self.notifier.error(e.user_message("Login failed"))
            return None
        finally:
            self.busy = False

        identity = response.user
        self.guard.establish(response.access_token, identity)
        self.notifier.success(f"Welcome back, {identity.full_name}!")
        return landing_route(identity.role)

    async def register(self, form: Optional[RegistrationForm] = None) -> bool:
        """
        Submit the registration form.
        Password mismatch and short passwords are rejected before any request.
        """
        form = form or self.registration
        if self.busy:
            logger.info("registration_rejected", reason="busy")
            return False

        try:
            request = form.to_request(get_settings().MIN_PASSWORD_LENGTH)
        except ValidationError as e:
            self.notifier.error(e.message)
            return False

        self.busy = True
        try:
            await self.api.register(request)
        except ApiError as e:
            logger.warning("registration_failed", username=request.username, status_code=e.status_code)
            self.notifier.error(e.user_message("Registration failed"))
            return False
        finally:
            self.busy = False

        logger.info("user_registered", username=request.username)
        self.notifier.success("Registration successful! Please login.")
        self.registration = RegistrationForm()
        return True
