# File: src/tailordesk/models/auth_schemas.py
"""Pydantic schemas for the auth API."""

from pydantic import BaseModel, Field, field_validator

from tailordesk.core.validators import MIN_PASSWORD_LENGTH, validate_email
from tailordesk.models.session import SessionUser


class LoginRequest(BaseModel):
    """Credentials posted to /api/auth/login."""

    email: str = Field(..., min_length=5, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)
    remember: bool = False

    @field_validator("email")
    @classmethod
    def validate_and_lowercase_email(cls, v: str) -> str:
        return validate_email(v)


class LoginResponse(BaseModel):
    user: SessionUser
    token: str


class RefreshResponse(BaseModel):
    success: bool = True
    user: SessionUser
    token: str | None = None


class LogoutResult(BaseModel):
    """Outcome of a logout. Failures are reported here, never raised."""

    success: bool
    message: str


class RegisterRequest(BaseModel):
    """New account posted to /api/auth/register."""

    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=5, max_length=255)
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=128)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("Name cannot be empty")
        return cleaned

    @field_validator("email")
    @classmethod
    def validate_and_lowercase_email(cls, v: str) -> str:
        return validate_email(v)


class ForgotPasswordRequest(BaseModel):
    email: str = Field(..., min_length=5, max_length=255)

    @field_validator("email")
    @classmethod
    def validate_and_lowercase_email(cls, v: str) -> str:
        return validate_email(v)


class ResetPasswordRequest(BaseModel):
    """Token from the reset link plus the new password; strength is checked by the route."""

    token: str = ""
    password: str = ""


class ActionResult(BaseModel):
    """Outcome of a password-flow action, reported in the body rather than raised."""

    success: bool
    message: str


class VerifyResetTokenResult(BaseModel):
    valid: bool
    message: str | None = None
