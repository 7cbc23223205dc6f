"""Search application service.

Keyword search, filtering and sorting over all stored tasks. The
matching and ordering rules live in taskman.domain.task.queries; this
service loads the tasks and applies them.
"""

from datetime import datetime

from taskman.domain.repositories import TaskRepository
from taskman.domain.shared import Clock, Result, TrackerError, map_result, to_utc, utc_now
from taskman.domain.task import (
    Priority,
    SortStrategy,
    Status,
    Task,
    TaskFilter,
    TaskPredicate,
    due_between,
    filter_tasks,
    has_priority,
    has_status,
    matches_keyword,
    sort_tasks,
)


class SearchService:
    """Query tasks by keyword, criteria, due date and sort order."""

    def __init__(self, repository: TaskRepository, clock: Clock = utc_now) -> None:
        """Initialize the service.

        Args:
            repository: Task persistence to query.
            clock: Source of the current time for overdue and due-soon checks.
        """
        self._repository = repository
        self._clock = clock

    def _select(self, predicate: TaskPredicate) -> Result[list[Task], TrackerError]:
        return map_result(self._repository.find_all(), lambda tasks: filter_tasks(tasks, predicate))

    def search_by_keyword(self, keyword: str) -> Result[list[Task], TrackerError]:
        """Tasks whose title or description contains keyword, ignoring case."""
        return self._select(matches_keyword(keyword))

    def filter_by_status(self, status: Status) -> Result[list[Task], TrackerError]:
        return self._select(has_status(status))

    def filter_by_priority(self, priority: Priority) -> Result[list[Task], TrackerError]:
        return self._select(has_priority(priority))

    def filter_by_category(self, category_id: str) -> Result[list[Task], TrackerError]:
        return self._repository.find_by_category_id(category_id)

    def get_overdue_tasks(self) -> Result[list[Task], TrackerError]:
        now = self._clock()
        return self._select(lambda task: task.is_overdue(now))

    def get_tasks_due_soon(self) -> Result[list[Task], TrackerError]:
        """Tasks due within the next 24 hours that are not yet overdue."""
        now = self._clock()
        return self._select(lambda task: task.is_due_soon(now))

    def filter_by_date_range(
        self, start: datetime, end: datetime
    ) -> Result[list[Task], TrackerError]:
        """Tasks with a due date in [start, end], inclusive."""
        return self._select(due_between(to_utc(start), to_utc(end)))

    def filter(self, criteria: TaskFilter) -> Result[list[Task], TrackerError]:
        """Tasks matching every active criterion.

        A default TaskFilter returns all tasks.
        """
        return self._select(criteria.to_predicate(self._clock()))

    def sort(self, tasks: list[Task], strategy: SortStrategy) -> list[Task]:
        """Return a new list of tasks ordered by strategy."""
        return sort_tasks(tasks, strategy)
