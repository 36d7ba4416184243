# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from core.database import get_db


# Type alias for dependency injection
DbSession = Annotated[Session, Depends(get_db)]
