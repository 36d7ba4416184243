# =============================================================================
# core/services/auth_service.py - Registration, Login, Refresh, Logout
# =============================================================================
# The session-token state machine for a user:
#
#   register/login -> new refresh token stored (overwrites any previous one)
#   refresh        -> signature valid AND token == stored value -> new access token
#   logout         -> stored refresh token cleared
#
# The refresh token is never rotated by /refresh; only login/register
# replace it.
# =============================================================================

import logging
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    RefreshTokenMissingError,
    UserNotFoundError,
)
from core.orm import User
from core.services.token_service import TokenService
from lib.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)


@dataclass
class AuthResult:
    """A user together with freshly issued tokens."""
    user: User
    access_token: str
    refresh_token: str | None = None


class AuthService:
    """
    Service for authentication operations.

    Methods take the request's SQLAlchemy session and commit their own writes.
    """

    @staticmethod
    def get_user(db: Session, user_id: int) -> User:
        """
        Get a user by ID.

        Raises:
            UserNotFoundError: If the user doesn't exist
        """
        user = db.get(User, user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> User | None:
        return db.scalars(select(User).where(User.email == email.lower())).one_or_none()

    @staticmethod
    def _issue_tokens(db: Session, user: User) -> AuthResult:
        # Overwrites whatever refresh token the user had before
        access_token = TokenService.create_access_token(user.id)
        refresh_token = TokenService.create_refresh_token(user.id)
        user.refresh_token = refresh_token
        db.commit()
        return AuthResult(user=user, access_token=access_token, refresh_token=refresh_token)

    @staticmethod
    def register(db: Session, email: str, password: str, name: str) -> AuthResult:
        """
        Create an account and log it in.

        Args:
            db: Database session
            email: Login email (stored lower-cased)
            password: Plaintext password (hashed with bcrypt)
            name: Display name

        Returns:
            AuthResult with the new user and both tokens

        Raises:
            EmailAlreadyRegisteredError: If the email is taken
        """
        email = email.lower()
        if AuthService.get_user_by_email(db, email) is not None:
            raise EmailAlreadyRegisteredError(email)

        user = User(email=email, password_hash=hash_password(password), name=name)
        db.add(user)
        try:
            db.flush()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            db.rollback()
            raise EmailAlreadyRegisteredError(email)

        result = AuthService._issue_tokens(db, user)
        logger.info(f"Registered user: {user.id}")
        return result

    @staticmethod
    def login(db: Session, email: str, password: str) -> AuthResult:
        """
        Verify credentials and issue tokens.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
                (same error for both so emails can't be probed)
        """
        user = AuthService.get_user_by_email(db, email)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed login attempt")
            raise InvalidCredentialsError()

        result = AuthService._issue_tokens(db, user)
        logger.info(f"User logged in: {user.id}")
        return result

    @staticmethod
    def refresh(db: Session, refresh_token: str | None) -> AuthResult:
        """
        Exchange a refresh token for a new access token.

        The presented token must verify AND match the value stored on the
        user, so a token from before the last login or logout is refused
        even though its signature is still valid.

        Raises:
            RefreshTokenMissingError: No token presented
            RefreshTokenExpiredError: Token past its expiry
            InvalidRefreshTokenError: Bad signature, unknown user, or not
                the currently stored token
        """
        if not refresh_token:
            raise RefreshTokenMissingError()

        claims = TokenService.verify_refresh_token(refresh_token)

        user = db.get(User, claims.user_id)
        if user is None or user.refresh_token != refresh_token:
            logger.warning(f"Refresh token rejected for user: {claims.user_id}")
            raise InvalidRefreshTokenError()

        return AuthResult(user=user, access_token=TokenService.create_access_token(user.id))

    @staticmethod
    def logout(db: Session, user_id: int) -> None:
        """Revoke the user's refresh token."""
        user = AuthService.get_user(db, user_id)
        user.refresh_token = None
        db.commit()
        logger.info(f"User logged out: {user_id}")
