from railbook.schemas.user import Role, Identity, Session, LoginRequest, LoginResponse, RegisterRequest
from railbook.schemas.train import Train, TrainCreate, SearchQuery
from railbook.schemas.booking import (
    Booking, BookingCreate, BookingResult, BookingCancelResponse, BookingStatus, Gender,
)
from railbook.schemas.report import SummaryReport

__all__ = [
    "Role", "Identity", "Session", "LoginRequest", "LoginResponse", "RegisterRequest",
    "Train", "TrainCreate", "SearchQuery",
    "Booking", "BookingCreate", "BookingResult", "BookingCancelResponse", "BookingStatus", "Gender",
    "SummaryReport",
]
