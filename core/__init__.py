# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic:
# - models/: Pydantic schemas for data validation
# - orm.py: SQLAlchemy table definitions (users, tasks)
# - database.py: Engine, session factory, table creation
# - services/: Auth, token, and task operations
#
# Services raise the typed errors from app/exceptions.py but never touch
# requests or responses.
# =============================================================================
