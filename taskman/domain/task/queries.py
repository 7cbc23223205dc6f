"""Pure query combinators over task lists.

All functions in this module are pure - no I/O, no side effects.
They take tasks in, return tasks out.
"""

from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel

from taskman.domain.shared.errors import InvalidInputError

from .models import Priority, Status, Task

TaskPredicate = Callable[[Task], bool]

# Stands in for a missing due date so sort keys never compare None
_NO_DATE = datetime.min.replace(tzinfo=UTC)


# =============================================================================
# Predicates
# =============================================================================


def matches_keyword(keyword: str) -> TaskPredicate:
    """Case-insensitive substring match against title or description."""
    needle = keyword.lower()

    def predicate(task: Task) -> bool:
        return needle in task.title.lower() or needle in task.description.lower()

    return predicate


def has_status(status: Status) -> TaskPredicate:
    return lambda task: task.status == status


def has_priority(priority: Priority) -> TaskPredicate:
    return lambda task: task.priority == priority


def in_category(category_id: str) -> TaskPredicate:
    return lambda task: task.category_id == category_id


def due_between(start: datetime, end: datetime) -> TaskPredicate:
    """Due date set and within [start, end], both ends inclusive."""

    def predicate(task: Task) -> bool:
        return task.due_date is not None and start <= task.due_date <= end

    return predicate


def all_of(predicates: Iterable[TaskPredicate]) -> TaskPredicate:
    """Combine predicates with AND. No predicates matches everything."""
    predicates = list(predicates)
    return lambda task: all(p(task) for p in predicates)


def filter_tasks(tasks: Iterable[Task], predicate: TaskPredicate) -> list[Task]:
    return [task for task in tasks if predicate(task)]


# =============================================================================
# Multi-criteria filter
# =============================================================================


class TaskFilter(BaseModel):
    """Criteria for a combined filter.

    Every criterion left at its default is inactive. An all-default
    filter matches every task.
    """

    status: Status | None = None
    priority: Priority | None = None
    category_id: str | None = None
    keyword: str = ""
    overdue_only: bool = False

    def to_predicate(self, now: datetime) -> TaskPredicate:
        """Build the AND of the active criteria.

        Args:
            now: Clock reading used for the overdue check.
        """
        predicates: list[TaskPredicate] = []
        if self.status is not None:
            predicates.append(has_status(self.status))
        if self.priority is not None:
            predicates.append(has_priority(self.priority))
        if self.category_id is not None:
            predicates.append(in_category(self.category_id))
        if self.keyword.strip():
            predicates.append(matches_keyword(self.keyword))
        if self.overdue_only:
            predicates.append(lambda task: task.is_overdue(now))
        return all_of(predicates)


# =============================================================================
# Sorting
# =============================================================================


class SortStrategy(str, Enum):
    """Named orderings for task lists."""

    PRIORITY_ASC = "priority-asc"
    PRIORITY_DESC = "priority-desc"
    DUE_DATE_ASC = "due-date-asc"
    DUE_DATE_DESC = "due-date-desc"
    CREATED_ASC = "created-asc"
    CREATED_DESC = "created-desc"
    TITLE_ASC = "title-asc"
    TITLE_DESC = "title-desc"

    @classmethod
    def parse(cls, text: str) -> "SortStrategy":
        """Parse "PRIORITY_DESC", "priority desc" or "priority-desc".

        Raises:
            InvalidInputError: If the input names no strategy.
        """
        token = text.strip().lower().replace("_", "-").replace(" ", "-")
        try:
            return cls(token)
        except ValueError:
            raise InvalidInputError(f"Invalid sort strategy: {text}") from None


def _priority_key(task: Task) -> int:
    return task.priority.level


def _due_key_nulls_last_asc(task: Task) -> tuple[bool, datetime]:
    return (task.due_date is None, task.due_date or _NO_DATE)


def _due_key_nulls_last_desc(task: Task) -> tuple[bool, datetime]:
    # Sorted with reverse=True, so present dates (True) come first
    return (task.due_date is not None, task.due_date or _NO_DATE)


def _created_key(task: Task) -> datetime:
    return task.created_at


def _title_key(task: Task) -> str:
    return task.title


# strategy -> (key function, reverse)
_SORT_KEYS: dict[SortStrategy, tuple[Callable[[Task], Any], bool]] = {
    SortStrategy.PRIORITY_ASC: (_priority_key, False),
    SortStrategy.PRIORITY_DESC: (_priority_key, True),
    SortStrategy.DUE_DATE_ASC: (_due_key_nulls_last_asc, False),
    SortStrategy.DUE_DATE_DESC: (_due_key_nulls_last_desc, True),
    SortStrategy.CREATED_ASC: (_created_key, False),
    SortStrategy.CREATED_DESC: (_created_key, True),
    SortStrategy.TITLE_ASC: (_title_key, False),
    SortStrategy.TITLE_DESC: (_title_key, True),
}


def sort_tasks(tasks: Iterable[Task], strategy: SortStrategy) -> list[Task]:
    """Return a new list ordered by strategy.

    The sort is stable: tasks with equal keys keep their input order in
    both directions. The input is not modified.
    """
    key, reverse = _SORT_KEYS[strategy]
    return sorted(tasks, key=key, reverse=reverse)
