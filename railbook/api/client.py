"""
Async client for the railway REST API.

Every method maps to one endpoint. Calls that need a bearer token pull it
from the session guard at send time; a 401 on such a call hands control to
the guard's unauthorized hook before AuthorizationError is raised.
"""

from typing import Any, Callable, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError as SchemaError

from railbook.api.middleware import RequestLoggingHooks
from railbook.core.config import Settings, get_settings
from railbook.core.exceptions import ApiError, AuthorizationError
from railbook.core.logging import get_logger
from railbook.schemas.booking import Booking, BookingCancelResponse, BookingCreate, BookingResult
from railbook.schemas.report import SummaryReport
from railbook.schemas.train import SearchQuery, Train, TrainCreate
from railbook.schemas.user import LoginRequest, LoginResponse, RegisterRequest

logger = get_logger(__name__)

TokenProvider = Callable[[], Optional[str]]


class RailwayApiClient:
    def __init__(
        self,
        http: httpx.AsyncClient,
        token_provider: TokenProvider = lambda: None,
        on_unauthorized: Optional[Callable[[], None]] = None,
        settings: Optional[Settings] = None,
    ):
        self._http = http
        self._token_provider = token_provider
        self._on_unauthorized = on_unauthorized
        self._prefix = (settings or get_settings()).API_PREFIX.rstrip("/")
        self._hooks = RequestLoggingHooks()
        self._hooks.install(http)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs) -> "RailwayApiClient":
        settings = settings or get_settings()
        http = httpx.AsyncClient(base_url=settings.API_BASE_URL, timeout=settings.REQUEST_TIMEOUT)
        return cls(http, settings=settings, **kwargs)

    def bind_session(self, token_provider: TokenProvider, on_unauthorized: Callable[[], None]) -> None:
        self._token_provider = token_provider
        self._on_unauthorized = on_unauthorized

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        auth: bool = False,
        json: Any = None,
        params: Optional[dict] = None,
    ) -> Any:
        headers = {}
        if auth:
            token = self._token_provider()
            if not token:
                # Nothing to tear down; the guard already has no session
                logger.info("api_unauthorized", path=path, detail="no session token")
                raise AuthorizationError("no session token")
            headers["Authorization"] = f"Bearer {token}"

        request = self._http.build_request(
            method, f"{self._prefix}{path}", json=json, params=params, headers=headers
        )
        try:
            response = await self._http.send(request)
        except httpx.HTTPError as e:
            self._hooks.failed(request, e)
            raise ApiError(None, None) from e

        if response.status_code == 401 and auth:
            self._unauthorized(path, _detail(response))

        if response.is_error:
            detail = _detail(response)
            logger.warning("api_error", path=path, status_code=response.status_code, detail=detail)
            raise ApiError(response.status_code, detail)

        if not response.content:
            return None
        return response.json()

    def _unauthorized(self, path: str, detail: Any):
        logger.warning("api_unauthorized", path=path, detail=detail)
        if self._on_unauthorized:
            self._on_unauthorized()
        raise AuthorizationError(detail)

    # Auth

    async def login(self, credentials: LoginRequest) -> LoginResponse:
        data = await self._request("POST", "/auth/login", json=credentials.model_dump())
        return _parse(LoginResponse, data)

    async def register(self, registration: RegisterRequest) -> Any:
        return await self._request("POST", "/auth/register", json=registration.model_dump())

    # Trains

    async def list_trains(self) -> list[Train]:
        data = await self._request("GET", "/trains")
        return [_parse(Train, item) for item in data or []]

    async def search_trains(self, query: SearchQuery) -> list[Train]:
        data = await self._request("GET", "/trains/search", params=query.to_params())
        return [_parse(Train, item) for item in data or []]

    async def create_train(self, train: TrainCreate) -> Train:
        data = await self._request("POST", "/trains", auth=True, json=train.model_dump())
        return _parse(Train, data)

    async def delete_train(self, train_id: str) -> None:
        await self._request("DELETE", f"/trains/{_segment(train_id)}", auth=True)

    # Bookings

    async def create_booking(self, booking: BookingCreate) -> BookingResult:
        data = await self._request("POST", "/bookings", auth=True, json=booking.model_dump(mode="json"))
        return _parse(BookingResult, data)

    async def cancel_booking(self, pnr: str) -> BookingCancelResponse:
        data = await self._request("DELETE", f"/bookings/{_segment(pnr)}", auth=True)
        return _parse(BookingCancelResponse, data or {})

    async def my_bookings(self) -> list[Booking]:
        data = await self._request("GET", "/bookings/my-bookings", auth=True)
        return [_parse(Booking, item) for item in data or []]

    async def all_bookings(self) -> list[Booking]:
        data = await self._request("GET", "/bookings/all", auth=True)
        return [_parse(Booking, item) for item in data or []]

    async def lookup_pnr(self, pnr: str) -> Booking:
        data = await self._request("GET", f"/bookings/pnr/{_segment(pnr)}")
        return _parse(Booking, data)

    # Reports

    async def summary(self) -> SummaryReport:
        data = await self._request("GET", "/reports/summary", auth=True)
        return _parse(SummaryReport, data)


def _segment(value: str) -> str:
    """Percent-encode `value` as exactly one path segment."""
    return quote(str(value), safe="")


def _detail(response: httpx.Response) -> Any:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("detail")
    return None


def _parse(model, data):
    """A 2xx body that does not match the contract is a server error."""
    try:
        return model.model_validate(data)
    except SchemaError as e:
        logger.error("api_response_invalid", model=model.__name__, error=str(e))
        raise ApiError(None, None) from e
