"""Persistence contracts consumed by the application services.

Services depend on these protocols, not on a storage implementation.
The JSON-file implementations live in taskman.infrastructure.storage.
Every method returns a Result; an Err carries a PersistenceError and
ends the current operation.
"""

from typing import Protocol

from taskman.domain.category.models import Category
from taskman.domain.shared.errors import PersistenceError
from taskman.domain.shared.result import Result
from taskman.domain.task.models import Task

__all__ = [
    "TaskRepository",
    "CategoryRepository",
]


class TaskRepository(Protocol):
    """Protocol for task persistence keyed by task id."""

    def save(self, task: Task) -> Result[Task, PersistenceError]:
        """Insert or overwrite the task with the same id."""
        ...

    def find_by_id(self, task_id: str) -> Result[Task | None, PersistenceError]: ...

    def find_all(self) -> Result[list[Task], PersistenceError]: ...

    def find_by_category_id(self, category_id: str) -> Result[list[Task], PersistenceError]: ...

    def delete_by_id(self, task_id: str) -> Result[bool, PersistenceError]:
        """Remove a task. Ok(True) iff a record existed."""
        ...

    def delete_all(self) -> Result[None, PersistenceError]: ...

    def count(self) -> Result[int, PersistenceError]: ...


class CategoryRepository(Protocol):
    """Protocol for category persistence keyed by category id."""

    def save(self, category: Category) -> Result[Category, PersistenceError]:
        """Insert or overwrite the category with the same id."""
        ...

    def find_by_id(self, category_id: str) -> Result[Category | None, PersistenceError]: ...

    def find_by_name(self, name: str) -> Result[Category | None, PersistenceError]:
        """Look up a category by name, ignoring case."""
        ...

    def find_all(self) -> Result[list[Category], PersistenceError]: ...

    def delete_by_id(self, category_id: str) -> Result[bool, PersistenceError]: ...

    def delete_all(self) -> Result[None, PersistenceError]: ...

    def count(self) -> Result[int, PersistenceError]: ...
