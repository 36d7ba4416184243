# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication requests and responses.
# =============================================================================

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from core.models.user import UserResponse
from lib.passwords import MAX_PASSWORD_BYTES, password_too_long


class AuthUser(BaseModel):
    """
    Authenticated user extracted from an access token.

    This is the minimal user info available from the token itself,
    without querying the database.
    """
    model_config = ConfigDict(frozen=True)

    id: int


class RegisterRequest(BaseModel):
    """Body of POST /auth/register."""

    email: EmailStr = Field(..., examples=["jane@example.com"])
    password: str = Field(..., min_length=6, description="6 characters to 72 bytes")
    name: str = Field(..., min_length=2, max_length=255, description="Display name")

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("password")
    @classmethod
    def check_password_length(cls, v: str) -> str:
        # bcrypt ignores everything past 72 bytes
        if password_too_long(v):
            raise ValueError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class LoginRequest(BaseModel):
    """Body of POST /auth/login."""

    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class AuthResponse(BaseModel):
    """
    Returned by register and login. The refresh token is NOT in the body;
    it is set as an HTTP-only cookie.
    """
    message: str
    user: UserResponse
    access_token: str


class RefreshResponse(BaseModel):
    """Returned by POST /auth/refresh."""
    access_token: str
    user: UserResponse


class MessageResponse(BaseModel):
    message: str
