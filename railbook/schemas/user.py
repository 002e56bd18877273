"""
Pydantic schemas for identity, credentials and the persisted session.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class Role(str, Enum):
    ADMIN = "admin"
    PASSENGER = "passenger"


class Identity(BaseModel):
    id: str
    username: str
    full_name: str
    role: Role
    email: Optional[str] = None
    phone: Optional[str] = None

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class Session(BaseModel):
    """Token and identity travel together; neither exists without the other."""

    token: str = Field(..., min_length=1)
    identity: Identity

    model_config = ConfigDict(frozen=True)


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: Identity


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str
    full_name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = ""
