# ==============================================================================
# USER SCHEMAS - Authentication & Profile
# ==============================================================================
# Request/Response schemas for registration, login and profile
# ==============================================================================

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from shoppy.schemas.base import BaseSchema


class UserRegister(BaseSchema):
    """
    Schema for user registration.

    Fields are optional here so that a missing field produces the
    registration error message instead of a generic validation error.
    """

    email: Optional[EmailStr] = Field(
        None,
        description="User email address",
        examples=["shopper@shoppy.io"],
    )
    username: Optional[str] = Field(
        None,
        max_length=100,
        description="Unique display handle",
    )
    password: Optional[str] = Field(
        None,
        max_length=128,
        description="User password (min 6 chars)",
    )


class UserLogin(BaseSchema):
    """Schema for user login request."""

    email_or_username: Optional[str] = Field(
        None,
        description="Email address or username",
    )
    password: Optional[str] = Field(
        None,
        description="User password",
    )


class UserResponse(BaseSchema):
    """Schema for user response (public profile)."""

    id: str = Field(
        ...,
        description="User unique identifier",
    )
    email: str = Field(
        ...,
        description="User email address",
    )
    username: str = Field(
        ...,
        description="Display handle",
    )
    sensay_user_id: Optional[str] = Field(
        None,
        description="Linked replica-chat user id",
    )
    created_at: Optional[datetime] = Field(
        None,
        description="Registration timestamp",
    )


class AuthResponse(BaseSchema):
    """Payload returned by register and login."""

    user: UserResponse
    token: str = Field(
        ...,
        description="JWT access token",
    )


class MeResponse(BaseSchema):
    """Payload returned by /auth/me."""

    user: UserResponse
