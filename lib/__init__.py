# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - passwords.py: bcrypt password hashing
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.passwords import MAX_PASSWORD_BYTES, hash_password, password_too_long, verify_password

__all__ = [
    "MAX_PASSWORD_BYTES",
    "hash_password",
    "password_too_long",
    "verify_password",
]
