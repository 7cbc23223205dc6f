"""Task application service.

Orchestrates task lifecycle operations against a TaskRepository. Every
operation re-fetches from the repository; the service holds no state
besides its collaborators. Expected failures come back as Err values.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from pydantic import ValidationError

from taskman.domain.repositories import TaskRepository
from taskman.domain.shared import (
    Clock,
    Err,
    IllegalTransitionError,
    InvalidInputError,
    Ok,
    Result,
    TaskNotFoundError,
    TrackerError,
    flat_map,
    utc_now,
)
from taskman.domain.task import Priority, Status, Task, TaskChanges, TaskStatistics

logger = logging.getLogger(__name__)


class TaskService:
    """Create, update, read and delete tasks.

    Example:
        service = TaskService(JsonTaskRepository(Path("data/tasks.json")))
        result = service.create_task("Buy milk")
        if isinstance(result, Ok):
            print(result.value.id)
    """

    def __init__(self, repository: TaskRepository, clock: Clock = utc_now) -> None:
        """Initialize the service.

        Args:
            repository: Task persistence to read from and write to.
            clock: Source of the current time for timestamps and overdue checks.
        """
        self._repository = repository
        self._clock = clock

    def create_task(
        self,
        title: str,
        description: str | None = "",
        priority: Priority | None = None,
        category_id: str | None = None,
        due_date: datetime | None = None,
    ) -> Result[Task, TrackerError]:
        """Create and persist a new task.

        Args:
            title: Task title; must not be blank.
            description: Free text, defaults to empty.
            priority: Defaults to MEDIUM.
            category_id: Optional category id. Not checked for existence.
            due_date: Optional due date.

        Returns:
            Ok(Task) as stored, or Err(InvalidInputError) for a blank title.
        """
        try:
            task = Task.create(
                title=title,
                description=description,
                priority=priority,
                category_id=category_id,
                due_date=due_date,
                now=self._clock(),
            )
        except ValidationError as e:
            return Err(InvalidInputError.from_validation_error(e))

        result = self._repository.save(task)
        if isinstance(result, Ok):
            logger.debug(f"Created task {task.id}")
        return result

    def _update(
        self,
        task_id: str,
        change: Callable[[Task], Task],
    ) -> Result[Task, TrackerError]:
        """Load a task, apply a functional update and save the result."""

        def apply(task: Task | None) -> Result[Task, TrackerError]:
            if task is None:
                return Err(TaskNotFoundError(task_id))
            try:
                updated = change(task)
            except ValidationError as e:
                return Err(InvalidInputError.from_validation_error(e))
            except IllegalTransitionError as e:
                return Err(e)
            saved = self._repository.save(updated)
            if isinstance(saved, Ok):
                logger.debug(f"Updated task {task_id}")
            return saved

        return flat_map(self._repository.find_by_id(task_id), apply)

    def update_task_status(self, task_id: str, status: Status) -> Result[Task, TrackerError]:
        """Move a task to a new status.

        Returns:
            Ok(Task) with the new status, Err(TaskNotFoundError) for an
            unknown id, or Err(IllegalTransitionError) if the move is not
            allowed from the current status.
        """
        return self._update(task_id, lambda t: t.with_status(status, self._clock()))

    def update_task_priority(self, task_id: str, priority: Priority) -> Result[Task, TrackerError]:
        return self._update(task_id, lambda t: t.with_priority(priority, self._clock()))

    def update_task_title(self, task_id: str, title: str) -> Result[Task, TrackerError]:
        return self._update(task_id, lambda t: t.with_title(title, self._clock()))

    def update_task_description(
        self, task_id: str, description: str | None
    ) -> Result[Task, TrackerError]:
        return self._update(task_id, lambda t: t.with_description(description, self._clock()))

    def update_task_due_date(
        self, task_id: str, due_date: datetime | None
    ) -> Result[Task, TrackerError]:
        return self._update(task_id, lambda t: t.with_due_date(due_date, self._clock()))

    def update_task_category(
        self, task_id: str, category_id: str | None
    ) -> Result[Task, TrackerError]:
        return self._update(task_id, lambda t: t.with_category(category_id, self._clock()))

    def update_task(self, task_id: str, changes: TaskChanges) -> Result[Task, TrackerError]:
        """Apply several field changes and save once.

        Either every change is stored or, on any Err, none is.
        """
        return self._update(task_id, lambda t: t.with_changes(changes, self._clock()))

    def get_task(self, task_id: str) -> Result[Task, TrackerError]:
        """Get a task by id, or Err(TaskNotFoundError)."""

        def require(task: Task | None) -> Result[Task, TrackerError]:
            if task is None:
                return Err(TaskNotFoundError(task_id))
            return Ok(task)

        return flat_map(self._repository.find_by_id(task_id), require)

    def get_all_tasks(self) -> Result[list[Task], TrackerError]:
        return self._repository.find_all()

    def get_tasks_by_category(self, category_id: str) -> Result[list[Task], TrackerError]:
        return self._repository.find_by_category_id(category_id)

    def delete_task(self, task_id: str) -> Result[bool, TrackerError]:
        """Delete a task. Ok(True) iff it existed."""
        result = self._repository.delete_by_id(task_id)
        if isinstance(result, Ok) and result.value:
            logger.debug(f"Deleted task {task_id}")
        return result

    def get_statistics(self) -> Result[TaskStatistics, TrackerError]:
        """Count tasks by status and overdue in a single pass.

        The overdue check uses one clock reading for every task.
        """
        result = self._repository.find_all()
        if isinstance(result, Err):
            return result

        now = self._clock()
        counts = {status: 0 for status in Status}
        overdue = 0
        for task in result.value:
            counts[task.status] += 1
            if task.is_overdue(now):
                overdue += 1

        return Ok(
            TaskStatistics(
                total=len(result.value),
                todo=counts[Status.TODO],
                in_progress=counts[Status.IN_PROGRESS],
                done=counts[Status.DONE],
                cancelled=counts[Status.CANCELLED],
                overdue=overdue,
            )
        )
