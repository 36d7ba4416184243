# =============================================================================
# core/services/token_service.py - JWT Issuance and Verification
# =============================================================================
# Two token types, each signed with its own secret:
#
#   access  - 15 minutes, sent as "Authorization: Bearer <token>"
#   refresh - 7 days, sent as an HTTP-only cookie and stored on the user row
#
# Verification maps python-jose errors onto the API's 401 exceptions so
# an expired token and a forged token produce distinct responses.
# =============================================================================

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import ExpiredSignatureError, JWTError, jwt

from app.config import settings
from app.exceptions import (
    AccessTokenExpiredError,
    InvalidAccessTokenError,
    InvalidRefreshTokenError,
    RefreshTokenExpiredError,
)

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


@dataclass(frozen=True)
class TokenClaims:
    """Verified contents of a token."""
    user_id: int
    token_type: str
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """
    Creates and verifies access and refresh tokens.

    All methods are static; secrets and lifetimes come from settings.
    """

    @staticmethod
    def _encode(
        user_id: int,
        token_type: str,
        secret: str,
        lifetime: timedelta,
        issued_at: datetime | None = None,
        extra: dict[str, Any] | None = None,
    ) -> str:
        now = issued_at or datetime.now(timezone.utc)
        claims: dict[str, Any] = {
            "sub": str(user_id),
            "type": token_type,
            "iat": now,
            "exp": now + lifetime,
        }
        if extra:
            claims.update(extra)
        return jwt.encode(claims, secret, algorithm=settings.JWT_ALGORITHM)

    @staticmethod
    def _decode(token: str, secret: str, token_type: str) -> TokenClaims:
        """
        Verify signature, expiry, and token type.

        Raises:
            ExpiredSignatureError: If the token is past its exp claim
            JWTError: For any other verification failure
        """
        payload = jwt.decode(token, secret, algorithms=[settings.JWT_ALGORITHM])

        if payload.get("type") != token_type:
            raise JWTError(f"Expected {token_type} token, got {payload.get('type')!r}")

        try:
            return TokenClaims(
                user_id=int(payload["sub"]),
                token_type=token_type,
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (KeyError, TypeError, ValueError):
            raise JWTError("Token is missing required claims")

    # -------------------------------------------------------------------------
    # Access tokens
    # -------------------------------------------------------------------------

    @staticmethod
    def create_access_token(user_id: int, issued_at: datetime | None = None) -> str:
        """
        Issue a short-lived access token for a user.

        Args:
            user_id: The user the token authenticates
            issued_at: Override the issue time (defaults to now)

        Returns:
            Encoded JWT string
        """
        return TokenService._encode(
            user_id,
            ACCESS_TOKEN_TYPE,
            settings.JWT_ACCESS_SECRET,
            timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            issued_at=issued_at,
        )

    @staticmethod
    def verify_access_token(token: str) -> TokenClaims:
        """
        Verify an access token.

        Raises:
            AccessTokenExpiredError: If the token has expired
            InvalidAccessTokenError: If the signature, format, or type is wrong
        """
        try:
            return TokenService._decode(token, settings.JWT_ACCESS_SECRET, ACCESS_TOKEN_TYPE)
        except ExpiredSignatureError:
            logger.warning("Access token has expired")
            raise AccessTokenExpiredError()
        except JWTError as e:
            logger.warning(f"Access token validation failed: {e}")
            raise InvalidAccessTokenError()

    # -------------------------------------------------------------------------
    # Refresh tokens
    # -------------------------------------------------------------------------

    @staticmethod
    def create_refresh_token(user_id: int, issued_at: datetime | None = None) -> str:
        """
        Issue a long-lived refresh token.

        A random jti makes every token unique, even two issued for the
        same user within the same second.
        """
        return TokenService._encode(
            user_id,
            REFRESH_TOKEN_TYPE,
            settings.JWT_REFRESH_SECRET,
            timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
            issued_at=issued_at,
            extra={"jti": uuid.uuid4().hex},
        )

    @staticmethod
    def verify_refresh_token(token: str) -> TokenClaims:
        """
        Verify a refresh token's signature and expiry.

        This does NOT check the token against the stored value;
        AuthService.refresh does that.

        Raises:
            RefreshTokenExpiredError: If the token has expired
            InvalidRefreshTokenError: If the signature, format, or type is wrong
        """
        try:
            return TokenService._decode(token, settings.JWT_REFRESH_SECRET, REFRESH_TOKEN_TYPE)
        except ExpiredSignatureError:
            logger.warning("Refresh token has expired")
            raise RefreshTokenExpiredError()
        except JWTError as e:
            logger.warning(f"Refresh token validation failed: {e}")
            raise InvalidRefreshTokenError()
