"""Authentication schemas."""

import re

from pydantic import BaseModel, EmailStr, Field, field_validator

PASSWORD_MIN_LENGTH = 8


class UserRegister(BaseModel):
    """User registration request."""

    firstname: str = Field(..., min_length=1, max_length=255)
    lastname: str = Field(..., min_length=1, max_length=255)
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=72)

    @field_validator("password")
    @classmethod
    def password_has_letter_and_digit(cls, value: str) -> str:
        if not re.search(r"[A-Za-z]", value) or not re.search(r"\d", value):
            raise ValueError("Password must contain at least one letter and one digit")
        return value


class UserLogin(BaseModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1)


class AuthResponse(BaseModel):
    """Registration or login response with a session token."""

    email: str
    access_token: str
    token_type: str = "bearer"  # noqa: S105


class GuestResponse(BaseModel):
    """Guest login response."""

    guest_name: str
    access_token: str
    token_type: str = "bearer"  # noqa: S105


class StorageResponse(BaseModel):
    """Storage resolved from the caller's session token."""

    tenant: str
    storage_pointer: str
    guest: bool


class ErrorResponse(BaseModel):
    """Structured error body."""

    kind: str
    detail: str
