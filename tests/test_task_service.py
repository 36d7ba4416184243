# =============================================================================
# tests/test_task_service.py - Task Service Tests
# =============================================================================
# CRUD, per-user ownership, filtering, search, and pagination.
# =============================================================================

import pytest

from app.exceptions import TaskNotFoundError
from core.orm import TaskStatus, User
from core.services.task_service import TaskService
from lib.passwords import hash_password


def _make_user(db_session, email: str) -> User:
    user = User(email=email, password_hash=hash_password("secret123"), name=email.split("@")[0])
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def owner(db_session):
    return _make_user(db_session, "owner@example.com")


@pytest.fixture
def stranger(db_session):
    return _make_user(db_session, "stranger@example.com")


class TestCreateAndGet:

    def test_create_defaults(self, db_session, owner):
        task = TaskService.create_task(db_session, user_id=owner.id, title="Write report")

        assert task.id is not None
        assert task.status == TaskStatus.PENDING
        assert task.description is None
        assert task.user_id == owner.id
        assert task.created_at is not None
        assert task.updated_at is not None

    def test_get_own_task(self, db_session, owner):
        created = TaskService.create_task(db_session, user_id=owner.id, title="Write report")
        fetched = TaskService.get_task(db_session, created.id, user_id=owner.id)

        assert fetched.title == "Write report"

    def test_missing_task(self, db_session, owner):
        with pytest.raises(TaskNotFoundError):
            TaskService.get_task(db_session, 999, user_id=owner.id)

    def test_other_users_task_looks_missing(self, db_session, owner, stranger):
        task = TaskService.create_task(db_session, user_id=owner.id, title="Private task")

        with pytest.raises(TaskNotFoundError) as exc_info:
            TaskService.get_task(db_session, task.id, user_id=stranger.id)

        assert exc_info.value.status_code == 404


class TestUpdate:

    def test_partial_update(self, db_session, owner):
        task = TaskService.create_task(
            db_session, user_id=owner.id, title="Original", description="Keep me"
        )

        updated = TaskService.update_task(
            db_session, task.id, user_id=owner.id, changes={"title": "Renamed"}
        )

        assert updated.title == "Renamed"
        assert updated.description == "Keep me"
        assert updated.status == TaskStatus.PENDING

    def test_clear_description(self, db_session, owner):
        task = TaskService.create_task(db_session, user_id=owner.id, title="Task", description="Old")
        updated = TaskService.update_task(db_session, task.id, user_id=owner.id, changes={"description": None})

        assert updated.description is None

    def test_empty_changes_is_noop(self, db_session, owner):
        task = TaskService.create_task(db_session, user_id=owner.id, title="Task")
        updated = TaskService.update_task(db_session, task.id, user_id=owner.id, changes={})

        assert updated.title == "Task"

    def test_cannot_update_other_users_task(self, db_session, owner, stranger):
        task = TaskService.create_task(db_session, user_id=owner.id, title="Task")

        with pytest.raises(TaskNotFoundError):
            TaskService.update_task(db_session, task.id, user_id=stranger.id, changes={"title": "Hacked"})

        assert TaskService.get_task(db_session, task.id, user_id=owner.id).title == "Task"


class TestDeleteAndToggle:

    def test_delete(self, db_session, owner):
        task = TaskService.create_task(db_session, user_id=owner.id, title="Temporary")
        TaskService.delete_task(db_session, task.id, user_id=owner.id)

        with pytest.raises(TaskNotFoundError):
            TaskService.get_task(db_session, task.id, user_id=owner.id)

    def test_cannot_delete_other_users_task(self, db_session, owner, stranger):
        task = TaskService.create_task(db_session, user_id=owner.id, title="Mine")

        with pytest.raises(TaskNotFoundError):
            TaskService.delete_task(db_session, task.id, user_id=stranger.id)

    def test_toggle_flips_both_ways(self, db_session, owner):
        task = TaskService.create_task(db_session, user_id=owner.id, title="Flip me")

        assert TaskService.toggle_task(db_session, task.id, user_id=owner.id).status == TaskStatus.COMPLETED
        assert TaskService.toggle_task(db_session, task.id, user_id=owner.id).status == TaskStatus.PENDING


class TestListTasks:

    @pytest.fixture
    def seeded(self, db_session, owner, stranger):
        TaskService.create_task(db_session, user_id=owner.id, title="Buy groceries")
        TaskService.create_task(db_session, user_id=owner.id, title="Pay rent", status=TaskStatus.COMPLETED)
        TaskService.create_task(db_session, user_id=owner.id, title="Call the BANK")
        TaskService.create_task(db_session, user_id=stranger.id, title="Stranger's groceries")

    def test_only_own_tasks_newest_first(self, db_session, owner, seeded):
        tasks, total = TaskService.list_tasks(db_session, user_id=owner.id)

        assert total == 3
        assert [t.title for t in tasks] == ["Call the BANK", "Pay rent", "Buy groceries"]

    def test_status_filter(self, db_session, owner, seeded):
        tasks, total = TaskService.list_tasks(db_session, user_id=owner.id, status="COMPLETED")

        assert total == 1
        assert tasks[0].title == "Pay rent"

    def test_unknown_status_is_ignored(self, db_session, owner, seeded):
        _, total = TaskService.list_tasks(db_session, user_id=owner.id, status="ARCHIVED")
        assert total == 3

    def test_search_is_case_insensitive(self, db_session, owner, seeded):
        tasks, total = TaskService.list_tasks(db_session, user_id=owner.id, search="bank")

        assert total == 1
        assert tasks[0].title == "Call the BANK"

    def test_search_does_not_leak_other_users(self, db_session, owner, seeded):
        _, total = TaskService.list_tasks(db_session, user_id=owner.id, search="groceries")
        assert total == 1

    def test_pagination(self, db_session, owner, seeded):
        page_one, total = TaskService.list_tasks(db_session, user_id=owner.id, page=1, limit=2)
        page_two, _ = TaskService.list_tasks(db_session, user_id=owner.id, page=2, limit=2)

        assert total == 3
        assert len(page_one) == 2
        assert [t.title for t in page_two] == ["Buy groceries"]

    def test_page_past_end_is_empty(self, db_session, owner, seeded):
        tasks, total = TaskService.list_tasks(db_session, user_id=owner.id, page=5, limit=2)

        assert tasks == []
        assert total == 3

    @pytest.mark.parametrize("wildcard", ["_", "%"])
    def test_like_wildcards_match_literally(self, db_session, owner, seeded, wildcard):
        tasks, total = TaskService.list_tasks(db_session, user_id=owner.id, search=wildcard)

        assert tasks == []
        assert total == 0

    def test_search_finds_literal_percent_and_underscore(self, db_session, owner, seeded):
        TaskService.create_task(db_session, user_id=owner.id, title="Finish 100% of report_v2")

        for term in ("%", "100%", "_v2"):
            tasks, total = TaskService.list_tasks(db_session, user_id=owner.id, search=term)
            assert total == 1
            assert tasks[0].title == "Finish 100% of report_v2"
