# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for request/response schemas:
# - Valid data is accepted and normalized
# - Invalid data raises ValidationError
# - Partial updates only report the fields that were sent
# =============================================================================

import pytest
from pydantic import ValidationError

from app.auth.models import LoginRequest, RegisterRequest
from core.models import Pagination, TaskCreate, TaskStatus, TaskUpdate


# =============================================================================
# TaskStatus Tests
# =============================================================================

class TestTaskStatus:
    """Tests for TaskStatus enum."""

    def test_values(self):
        assert TaskStatus.PENDING.value == "PENDING"
        assert TaskStatus.COMPLETED.value == "COMPLETED"

    def test_toggled(self):
        assert TaskStatus.PENDING.toggled() is TaskStatus.COMPLETED
        assert TaskStatus.COMPLETED.toggled() is TaskStatus.PENDING


# =============================================================================
# TaskCreate Tests
# =============================================================================

class TestTaskCreate:
    """Tests for TaskCreate model."""

    def test_defaults(self):
        task = TaskCreate(title="Buy milk")

        assert task.title == "Buy milk"
        assert task.description is None
        assert task.status == TaskStatus.PENDING

    def test_title_is_trimmed_before_length_check(self):
        # "  ab  " trims to 2 characters, below the minimum of 3
        with pytest.raises(ValidationError):
            TaskCreate(title="  ab  ")

        assert TaskCreate(title="  abc  ").title == "abc"

    def test_title_too_long(self):
        with pytest.raises(ValidationError):
            TaskCreate(title="x" * 201)

    def test_description_too_long(self):
        with pytest.raises(ValidationError):
            TaskCreate(title="Valid", description="x" * 1001)

    def test_blank_description_becomes_none(self):
        assert TaskCreate(title="Valid", description="   ").description is None

    def test_invalid_status(self):
        with pytest.raises(ValidationError):
            TaskCreate(title="Valid", status="DONE")


# =============================================================================
# TaskUpdate Tests
# =============================================================================

class TestTaskUpdate:
    """Tests for TaskUpdate model."""

    def test_empty_update(self):
        assert TaskUpdate().changes() == {}

    def test_changes_only_include_sent_fields(self):
        update = TaskUpdate(status="COMPLETED")
        assert update.changes() == {"status": TaskStatus.COMPLETED}

    def test_description_can_be_cleared(self):
        update = TaskUpdate(description=None)
        assert update.changes() == {"description": None}

    def test_null_title_rejected(self):
        with pytest.raises(ValidationError):
            TaskUpdate(title=None)

    def test_null_status_rejected(self):
        with pytest.raises(ValidationError):
            TaskUpdate(status=None)

    def test_short_title_rejected(self):
        with pytest.raises(ValidationError):
            TaskUpdate(title="  x ")


# =============================================================================
# Pagination Tests
# =============================================================================

class TestPagination:

    @pytest.mark.parametrize(
        "total,limit,expected",
        [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (25, 5, 5)],
    )
    def test_total_pages(self, total, limit, expected):
        assert Pagination.build(page=1, limit=limit, total=total).total_pages == expected


# =============================================================================
# Auth Request Tests
# =============================================================================

class TestRegisterRequest:
    """Tests for RegisterRequest model."""

    def test_email_lowercased_and_name_trimmed(self):
        request = RegisterRequest(email="Jane@Example.COM", password="secret123", name="  Jane  ")

        assert request.email == "jane@example.com"
        assert request.name == "Jane"

    def test_password_not_trimmed(self):
        request = RegisterRequest(email="a@example.com", password="  secret  ", name="Al")
        assert request.password == "  secret  "

    def test_short_password_rejected(self):
        with pytest.raises(ValidationError):
            RegisterRequest(email="a@example.com", password="12345", name="Al")

    def test_short_name_rejected(self):
        with pytest.raises(ValidationError):
            RegisterRequest(email="a@example.com", password="secret123", name=" A ")

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError):
            RegisterRequest(email="not-an-email", password="secret123", name="Al")

    def test_password_over_72_bytes_rejected(self):
        with pytest.raises(ValidationError, match="72 bytes"):
            RegisterRequest(email="a@example.com", password="p" * 100, name="Al")

    def test_password_of_72_bytes_accepted(self):
        request = RegisterRequest(email="a@example.com", password="p" * 72, name="Al")
        assert len(request.password) == 72


class TestLoginRequest:

    def test_empty_password_rejected(self):
        with pytest.raises(ValidationError):
            LoginRequest(email="a@example.com", password="")

    def test_email_lowercased(self):
        assert LoginRequest(email="A@Example.com", password="x").email == "a@example.com"
