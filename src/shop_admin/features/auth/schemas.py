"""Pydantic schemas for authentication, defining the structure for request and response data."""

from pydantic import BaseModel, Field
from typing import Optional
import datetime

from ...common.schemas import CamelModel

MOBILE_NUMBER_PATTERN = r"^[0-9]{10}$"


class UserCreate(CamelModel):
    full_name: str = Field(..., min_length=2, max_length=50, description="Full name")
    mobile_number: str = Field(..., pattern=MOBILE_NUMBER_PATTERN, description="10-digit mobile number")
    password: str = Field(..., min_length=6, description="User password")


class UserLogin(CamelModel):
    mobile_number: str = Field(..., pattern=MOBILE_NUMBER_PATTERN)
    password: str = Field(..., min_length=1)


class UserResponse(CamelModel):
    public_id: str = Field(
        ..., description="Public unique identifier for the user (KSUID)"
    )
    full_name: str
    mobile_number: str
    role: str = Field(..., description="User role (user or admin)")
    is_active: bool = Field(..., description="Whether the user account is active")
    created_at: datetime.datetime = Field(
        ..., description="Timestamp of when the user was created"
    )


class AuthResponse(CamelModel):
    success: bool = True
    token: str
    user: UserResponse


class MeResponse(CamelModel):
    success: bool = True
    data: UserResponse


# OAuth2 token endpoint keeps the snake_case keys required by RFC 6749
class Token(BaseModel):
    access_token: str
    token_type: str


class TokenData(BaseModel):
    sub: Optional[str] = None
