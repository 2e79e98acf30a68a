"""
Auth-related Pydantic schemas (sign in, session, password update, legacy login).
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, field_validator


class SignInRequest(BaseModel):
    """Request body for admin sign in."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "email": "admin@example.com",
                    "password": "securePass123",
                }
            ]
        }
    )

    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("password")
    @classmethod
    def password_present(cls, v: str) -> str:
        if not v:
            raise ValueError("Please enter both email and password")
        return v


class SessionUser(BaseModel):
    """Admin identity returned in auth responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: Optional[str] = None
    created_at: Optional[datetime] = None


class AuthResponse(BaseModel):
    """Response after successful sign in."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                    "token_type": "bearer",
                    "expires_in": 3600,
                    "expires_at": 1736932200,
                    "refresh_token": "v1.MRk...",
                    "user": {
                        "id": "550e8400-e29b-41d4-a716-446655440000",
                        "email": "admin@example.com",
                        "created_at": "2025-01-15T10:30:00Z",
                    },
                }
            ]
        }
    )

    access_token: str
    token_type: str = "bearer"
    expires_in: Optional[int] = None
    expires_at: Optional[int] = None
    refresh_token: Optional[str] = None
    user: SessionUser


class SessionResponse(BaseModel):
    """Current admin session."""
    user_id: str
    email: Optional[str] = None
    expires_at: Optional[datetime] = None


class PasswordUpdateRequest(BaseModel):
    """Request body to change the admin password from the profile page."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "current_password": "oldPass123",
                    "new_password": "newSecurePass456",
                    "confirm_password": "newSecurePass456",
                }
            ]
        }
    )

    current_password: str = ""
    new_password: str = ""
    confirm_password: str = ""


class LegacyLoginRequest(BaseModel):
    """Body of POST /api/admin-login. Fields are checked by the handler."""
    email: Optional[str] = None
    password: Optional[str] = None


class LegacyLoginResponse(BaseModel):
    ok: bool
    error: Optional[str] = None
