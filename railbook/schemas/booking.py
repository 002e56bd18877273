"""
Pydantic schemas for booking-related request/response validation.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"
    WAITING = "waiting"
    CANCELLED = "cancelled"


class Gender(str, Enum):
    MALE = "M"
    FEMALE = "F"
    OTHER = "Other"


class Booking(BaseModel):
    id: str
    pnr: str
    username: str
    train_id: str
    train_name: str
    train_number: str
    passenger_name: str
    passenger_age: int
    passenger_gender: str
    passenger_phone: str
    seat_number: Optional[int] = None
    booking_status: BookingStatus
    position: Optional[int] = None
    source: str
    destination: str
    fare: float
    booking_date: datetime

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    @property
    def cancellable(self) -> bool:
        return self.booking_status == BookingStatus.CONFIRMED


class BookingCreate(BaseModel):
    train_id: str
    passenger_name: str = Field(..., min_length=1)
    passenger_age: int = Field(..., ge=0, le=150)
    passenger_gender: Gender
    passenger_phone: str = Field(..., min_length=1)


class BookingResult(BaseModel):
    """
    Outcome of a booking request. The server decides the status; a confirmed
    result carries a PNR and a waiting result carries a list position.
    """

    status: BookingStatus
    pnr: Optional[str] = None
    position: Optional[int] = None
    message: Optional[str] = None

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    @model_validator(mode="after")
    def check_outcome(self) -> "BookingResult":
        if self.status == BookingStatus.CONFIRMED and not self.pnr:
            raise ValueError("confirmed booking requires a pnr")
        if self.status == BookingStatus.WAITING and self.position is None:
            raise ValueError("waiting booking requires a position")
        if self.status == BookingStatus.CANCELLED:
            raise ValueError("a new booking cannot be cancelled")
        return self

    @property
    def confirmed(self) -> bool:
        return self.status == BookingStatus.CONFIRMED


class BookingCancelResponse(BaseModel):
    message: str = "Booking cancelled successfully"

    model_config = ConfigDict(extra="ignore")
