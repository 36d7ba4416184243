# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .auth_service import AuthResult, AuthService
from .task_service import TaskService
from .token_service import TokenClaims, TokenService

__all__ = [
    "AuthResult",
    "AuthService",
    "TaskService",
    "TokenClaims",
    "TokenService",
]
