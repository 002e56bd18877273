"""
Pydantic schema for the admin summary report.
"""

from pydantic import BaseModel, ConfigDict

from railbook.schemas.booking import Booking


class SummaryReport(BaseModel):
    total_trains: int = 0
    total_bookings: int = 0
    total_passengers: int = 0
    waiting_count: int = 0
    total_seats: int = 0
    booked_seats: int = 0
    available_seats: int = 0
    recent_bookings: list[Booking] = []

    model_config = ConfigDict(extra="ignore")
