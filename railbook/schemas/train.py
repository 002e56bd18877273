"""
Pydantic schemas for train inventory and catalog queries.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


class Train(BaseModel):
    id: str
    train_number: str
    train_name: str
    source: str
    destination: str
    total_seats: int = Field(..., ge=0)
    available_seats: int = Field(..., ge=0)
    fare: float
    departure_time: Optional[str] = None
    arrival_time: Optional[str] = None

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    @model_validator(mode="after")
    def check_seat_bounds(self) -> "Train":
        if self.available_seats > self.total_seats:
            raise ValueError("available_seats cannot exceed total_seats")
        return self

    @property
    def sold_out(self) -> bool:
        return self.available_seats == 0


class TrainCreate(BaseModel):
    train_number: str = Field(..., min_length=1)
    train_name: str = Field(..., min_length=1)
    source: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    total_seats: int = Field(..., gt=0)
    fare: float = Field(..., ge=0)
    departure_time: str = ""
    arrival_time: str = ""


class SearchQuery(BaseModel):
    """Both fields optional; an empty query means "all trains"."""

    source: str = ""
    destination: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.source and not self.destination

    def to_params(self) -> dict[str, str]:
        """Fields are sent verbatim; absent ones are omitted."""
        params = {}
        if self.source:
            params["source"] = self.source
        if self.destination:
            params["destination"] = self.destination
        return params
