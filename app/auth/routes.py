# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# POST /auth/register  create account, issue tokens
# POST /auth/login     verify credentials, issue tokens
# POST /auth/refresh   exchange refresh cookie for a new access token
# POST /auth/logout    revoke the stored refresh token
# GET  /auth/me        current user's profile
#
# Access tokens travel in the response body; refresh tokens only ever
# travel in an HTTP-only cookie.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Cookie, Depends, Response, status

from app.auth.dependencies import get_current_user
from app.auth.models import (
    AuthResponse,
    AuthUser,
    LoginRequest,
    MessageResponse,
    RefreshResponse,
    RegisterRequest,
)
from app.config import settings
from app.dependencies import DbSession
from core.models.user import UserResponse
from core.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Cookie helpers
# =============================================================================

def _cookie_options() -> dict:
    # Cross-site cookies need SameSite=None, which browsers only accept with Secure
    return {
        "httponly": True,
        "secure": settings.is_production,
        "samesite": "none" if settings.is_production else "lax",
        "path": "/",
    }


def set_refresh_cookie(response: Response, refresh_token: str) -> None:
    response.set_cookie(
        key=settings.REFRESH_COOKIE_NAME,
        value=refresh_token,
        max_age=settings.refresh_token_max_age,
        **_cookie_options(),
    )


def clear_refresh_cookie(response: Response) -> None:
    response.delete_cookie(key=settings.REFRESH_COOKIE_NAME, **_cookie_options())


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, response: Response, db: DbSession):
    """
    Register a new user.

    Returns the user and an access token; sets the refresh token cookie.

    Raises:
        400: Invalid input or email already registered
    """
    result = AuthService.register(db, email=request.email, password=request.password, name=request.name)
    set_refresh_cookie(response, result.refresh_token)

    return AuthResponse(
        message="User registered successfully",
        user=UserResponse.model_validate(result.user),
        access_token=result.access_token,
    )


@router.post("/login", response_model=AuthResponse)
def login(request: LoginRequest, response: Response, db: DbSession):
    """
    Log in with email and password.

    Replaces any refresh token issued by an earlier login.

    Raises:
        400: Invalid input
        401: Invalid email or password
    """
    result = AuthService.login(db, email=request.email, password=request.password)
    set_refresh_cookie(response, result.refresh_token)

    return AuthResponse(
        message="Login successful",
        user=UserResponse.model_validate(result.user),
        access_token=result.access_token,
    )


@router.post("/refresh", response_model=RefreshResponse)
def refresh(
    db: DbSession,
    refresh_token: Annotated[str | None, Cookie(alias=settings.REFRESH_COOKIE_NAME)] = None,
):
    """
    Get a new access token using the refresh token cookie.

    The refresh token itself is not rotated.

    Raises:
        401: Missing, expired, invalid, or revoked refresh token
    """
    result = AuthService.refresh(db, refresh_token)

    return RefreshResponse(
        access_token=result.access_token,
        user=UserResponse.model_validate(result.user),
    )


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    db: DbSession,
    user: AuthUser = Depends(get_current_user),
):
    """
    Log out: clear the stored refresh token and the cookie.

    Raises:
        401: If not authenticated
    """
    AuthService.logout(db, user.id)
    clear_refresh_cookie(response)
    return MessageResponse(message="Logout successful")


@router.get("/me", response_model=UserResponse)
def get_current_user_info(
    db: DbSession,
    user: AuthUser = Depends(get_current_user),
) -> UserResponse:
    """
    Get the current authenticated user's profile.

    Raises:
        401: If not authenticated
        404: If the account was deleted after the token was issued
    """
    return UserResponse.model_validate(AuthService.get_user(db, user.id))
