# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.auth.models import AuthUser
from app.exceptions import AccessTokenMissingError
from core.services.token_service import TokenService

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor. auto_error is off so a missing header
# produces our own 401 body instead of FastAPI's default.
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> AuthUser:
    """
    Extract and validate the user from the access token.

    This dependency:
    1. Extracts the Bearer token from the Authorization header
    2. Verifies the JWT signature and expiry
    3. Returns an AuthUser with the user's ID

    Raises:
        AccessTokenMissingError: 401 if no bearer token was sent
        AccessTokenExpiredError: 401 if the token has expired
        InvalidAccessTokenError: 401 if the token is forged or malformed
    """
    if credentials is None or not credentials.credentials:
        raise AccessTokenMissingError()

    claims = TokenService.verify_access_token(credentials.credentials)

    logger.debug(f"Authenticated user: {claims.user_id}")
    return AuthUser(id=claims.user_id)
