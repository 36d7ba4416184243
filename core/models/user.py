# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# Public representation of a user. Never includes the password hash or
# the stored refresh token.
# =============================================================================

from pydantic import BaseModel, ConfigDict


class UserResponse(BaseModel):
    """
    Example:
        {"id": 3, "email": "jane@example.com", "name": "Jane"}
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
