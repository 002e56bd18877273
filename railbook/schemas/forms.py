"""
Raw form input as typed by the user, and its conversion into request schemas.

Conversion is where client-side validation happens: a form that fails to
convert raises ValidationError and no request is ever built from it.
"""

from dataclasses import dataclass
from typing import Union

from pydantic import ValidationError as SchemaError

from railbook.core.exceptions import ValidationError
from railbook.schemas.booking import BookingCreate, Gender
from railbook.schemas.train import TrainCreate
from railbook.schemas.user import RegisterRequest


def _first_error(error: SchemaError) -> str:
    err = error.errors()[0]
    field_name = ".".join(str(part) for part in err["loc"]) or "input"
    return f"{field_name}: {err['msg']}"


@dataclass
class RegistrationForm:
    username: str = ""
    password: str = ""
    confirm_password: str = ""
    full_name: str = ""
    email: str = ""
    phone: str = ""

    def to_request(self, min_password_length: int = 6) -> RegisterRequest:
        if self.password != self.confirm_password:
            raise ValidationError("Passwords do not match")
        if len(self.password) < min_password_length:
            raise ValidationError(f"Password must be at least {min_password_length} characters")
        try:
            # confirm_password is never sent
            return RegisterRequest(
                username=self.username.strip(),
                password=self.password,
                full_name=self.full_name.strip(),
                email=self.email.strip(),
                phone=self.phone.strip(),
            )
        except SchemaError as e:
            raise ValidationError(_first_error(e)) from e


@dataclass
class PassengerForm:
    passenger_name: str = ""
    passenger_age: Union[str, int] = ""
    passenger_gender: str = Gender.MALE.value
    passenger_phone: str = ""

    def to_request(self, train_id: str) -> BookingCreate:
        name = self.passenger_name.strip()
        phone = str(self.passenger_phone).strip()
        if not name or not phone:
            raise ValidationError("Passenger name and phone are required")
        try:
            age = int(str(self.passenger_age).strip())
        except ValueError:
            raise ValidationError("Age must be a whole number")
        try:
            gender = Gender(self.passenger_gender)
        except ValueError:
            raise ValidationError("Gender must be one of M, F, Other")
        try:
            return BookingCreate(
                train_id=train_id,
                passenger_name=name,
                passenger_age=age,
                passenger_gender=gender,
                passenger_phone=phone,
            )
        except SchemaError as e:
            raise ValidationError(_first_error(e)) from e


@dataclass
class TrainForm:
    train_number: str = ""
    train_name: str = ""
    source: str = ""
    destination: str = ""
    total_seats: Union[str, int] = ""
    fare: Union[str, float] = ""
    departure_time: str = ""
    arrival_time: str = ""

    def to_request(self) -> TrainCreate:
        try:
            total_seats = int(str(self.total_seats).strip())
        except ValueError:
            raise ValidationError("Total seats must be a whole number")
        try:
            fare = float(str(self.fare).strip())
        except ValueError:
            raise ValidationError("Fare must be a number")
        try:
            return TrainCreate(
                train_number=self.train_number.strip(),
                train_name=self.train_name.strip(),
                source=self.source.strip(),
                destination=self.destination.strip(),
                total_seats=total_seats,
                fare=fare,
                departure_time=self.departure_time.strip(),
                arrival_time=self.arrival_time.strip(),
            )
        except SchemaError as e:
            raise ValidationError(_first_error(e)) from e
