# =============================================================================
# lib/passwords.py - Password Hashing
# =============================================================================
# Thin wrapper around bcrypt so the rest of the code deals in str, not bytes.
#
# bcrypt only reads the first 72 bytes of a password. Longer passwords are
# refused at registration (see RegisterRequest) and can never match at login.
#
# Usage:
#   from lib.passwords import hash_password, verify_password
#   stored = hash_password("secret123")
#   verify_password("secret123", stored)  # True
# =============================================================================

import bcrypt

from app.config import settings

MAX_PASSWORD_BYTES = 72


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def hash_password(password: str, rounds: int | None = None) -> str:
    """
    Hash a plaintext password with a fresh salt.

    Args:
        password: The plaintext password
        rounds: bcrypt cost factor (defaults to BCRYPT_ROUNDS)

    Returns:
        The bcrypt hash as a UTF-8 string

    Raises:
        ValueError: If the password is longer than 72 bytes
    """
    if password_too_long(password):
        raise ValueError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    if password_too_long(password):
        # hash_password never accepts these, so nothing stored can match
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value isn't a bcrypt hash
        return False
