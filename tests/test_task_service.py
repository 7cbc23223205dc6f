"""Tests for TaskService."""

from datetime import timedelta

from taskman.domain.shared import (
    Err,
    IllegalTransitionError,
    InvalidInputError,
    Ok,
    TaskNotFoundError,
)
from taskman.domain.task import Priority, Status, TaskChanges

from conftest import NOW


class TestCreateTask:
    """Tests for TaskService.create_task."""

    def test_buy_milk_lifecycle(self, task_service):
        created = task_service.create_task("Buy milk")
        assert isinstance(created, Ok)
        task = created.value

        assert task.status is Status.TODO
        assert task.priority is Priority.MEDIUM
        assert task.category_id is None
        assert task.due_date is None

        started = task_service.update_task_status(task.id, Status.IN_PROGRESS)
        assert started.value.status is Status.IN_PROGRESS

        again = task_service.update_task_status(task.id, Status.IN_PROGRESS)
        assert isinstance(again, Err)
        assert isinstance(again.error, IllegalTransitionError)

        cancelled = task_service.update_task_status(task.id, Status.CANCELLED)
        assert cancelled.value.status is Status.CANCELLED

    def test_created_task_is_persisted(self, task_service, task_repository):
        task = task_service.create_task("Write report", "Q1 numbers", Priority.HIGH).value

        assert task_repository.find_by_id(task.id) == Ok(task)
        assert task.created_at == NOW

    def test_blank_title_is_invalid_input(self, task_service, task_repository):
        result = task_service.create_task("   ")

        assert isinstance(result, Err)
        assert isinstance(result.error, InvalidInputError)
        assert str(result.error) == "Task title cannot be blank"
        assert task_repository.count() == Ok(0)


class TestUpdateTask:
    """Tests for the update_task_* operations."""

    def test_update_bumps_updated_at(self, task_service, clock):
        task = task_service.create_task("x").value
        clock.advance(hours=1)

        updated = task_service.update_task_priority(task.id, Priority.CRITICAL).value

        assert updated.priority is Priority.CRITICAL
        assert updated.updated_at == NOW + timedelta(hours=1)
        assert updated.created_at == NOW

    def test_illegal_transition_leaves_task_unchanged(self, task_service):
        task = task_service.create_task("x").value

        result = task_service.update_task_status(task.id, Status.DONE)

        assert isinstance(result.error, IllegalTransitionError)
        assert task_service.get_task(task.id) == Ok(task)

    def test_unknown_id_is_not_found(self, task_service):
        result = task_service.update_task_title("missing", "new")

        assert isinstance(result, Err)
        assert isinstance(result.error, TaskNotFoundError)
        assert result.error.key == "missing"

    def test_blank_title_update_rejected(self, task_service):
        task = task_service.create_task("x").value

        result = task_service.update_task_title(task.id, "")

        assert isinstance(result.error, InvalidInputError)
        assert task_service.get_task(task.id).value.title == "x"

    def test_field_updates_are_saved(self, task_service):
        task = task_service.create_task("x").value
        due = NOW + timedelta(days=2)

        task_service.update_task_title(task.id, "y")
        task_service.update_task_description(task.id, "more")
        task_service.update_task_due_date(task.id, due)
        task_service.update_task_category(task.id, "cat-1")
        stored = task_service.get_task(task.id).value

        assert (stored.title, stored.description, stored.due_date, stored.category_id) == (
            "y",
            "more",
            due,
            "cat-1",
        )

        task_service.update_task_due_date(task.id, None)
        task_service.update_task_category(task.id, None)
        cleared = task_service.get_task(task.id).value

        assert cleared.due_date is None
        assert cleared.category_id is None

    def test_reopen_done_task(self, task_service):
        task = task_service.create_task("x").value
        task_service.update_task_status(task.id, Status.IN_PROGRESS)
        task_service.update_task_status(task.id, Status.DONE)

        reopened = task_service.update_task_status(task.id, Status.TODO)

        assert reopened.value.status is Status.TODO

    def test_update_task_saves_every_change(self, task_service, clock):
        task = task_service.create_task("x").value
        clock.advance(minutes=10)
        changes = TaskChanges(status=Status.IN_PROGRESS, priority=Priority.LOW, title="y")

        updated = task_service.update_task(task.id, changes).value

        assert task_service.get_task(task.id) == Ok(updated)
        assert (updated.status, updated.priority, updated.title) == (
            Status.IN_PROGRESS,
            Priority.LOW,
            "y",
        )
        assert updated.updated_at == NOW + timedelta(minutes=10)

    def test_update_task_rejected_change_saves_nothing(self, task_service):
        task = task_service.create_task("x").value

        result = task_service.update_task(
            task.id, TaskChanges(status=Status.IN_PROGRESS, title=" ")
        )

        assert isinstance(result.error, InvalidInputError)
        assert task_service.get_task(task.id) == Ok(task)

    def test_update_task_unknown_id(self, task_service):
        result = task_service.update_task("missing", TaskChanges(title="y"))

        assert isinstance(result.error, TaskNotFoundError)


class TestQueriesAndDelete:
    """Tests for reads, deletes and statistics."""

    def test_get_all_in_creation_order(self, task_service):
        for title in ("a", "b", "c"):
            task_service.create_task(title)

        assert [t.title for t in task_service.get_all_tasks().value] == ["a", "b", "c"]

    def test_get_tasks_by_category(self, task_service):
        task_service.create_task("a", category_id="work")
        task_service.create_task("b")

        found = task_service.get_tasks_by_category("work").value

        assert [t.title for t in found] == ["a"]

    def test_get_unknown_task(self, task_service):
        assert isinstance(task_service.get_task("missing").error, TaskNotFoundError)

    def test_delete(self, task_service):
        task = task_service.create_task("x").value

        assert task_service.delete_task(task.id) == Ok(True)
        assert task_service.delete_task(task.id) == Ok(False)

    def test_statistics(self, task_service):
        overdue = task_service.create_task("late", due_date=NOW - timedelta(hours=2)).value
        started = task_service.create_task("started").value
        finished = task_service.create_task("finished", due_date=NOW - timedelta(days=1)).value
        dropped = task_service.create_task("dropped").value

        task_service.update_task_status(started.id, Status.IN_PROGRESS)
        task_service.update_task_status(finished.id, Status.IN_PROGRESS)
        task_service.update_task_status(finished.id, Status.DONE)
        task_service.update_task_status(dropped.id, Status.CANCELLED)

        stats = task_service.get_statistics().value

        assert stats.total == 4
        assert stats.todo == 1
        assert stats.in_progress == 1
        assert stats.done == 1
        assert stats.cancelled == 1
        assert stats.overdue == 1
        assert stats.completion_rate == 25.0
        assert task_service.get_task(overdue.id).value.is_overdue(NOW)

    def test_statistics_empty(self, task_service):
        stats = task_service.get_statistics().value
        assert stats.total == 0
        assert stats.completion_rate == 0.0
