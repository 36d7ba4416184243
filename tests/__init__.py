# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the TaskTracker API:
# - test_models.py: Pydantic schema validation
# - test_passwords.py: bcrypt hashing helpers
# - test_token_service.py: JWT issuance and verification
# - test_auth_service.py: register/login/refresh/logout state transitions
# - test_task_service.py: task CRUD, ownership, filtering, pagination
# - test_api.py: HTTP-level tests through FastAPI's TestClient
#
# Run tests with: pytest
# =============================================================================
