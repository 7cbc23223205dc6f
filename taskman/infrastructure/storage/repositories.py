"""Repository implementations for tasks and categories.

Each repository owns one JSON file and rewrites it whole on every
mutation. Nothing is cached between calls: every operation re-reads the
file, so callers always see the latest saved state.
"""

import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from taskman.domain.category.models import Category, default_categories
from taskman.domain.shared.errors import PersistenceError
from taskman.domain.shared.result import Err, Ok, Result, map_result
from taskman.domain.task.models import Task
from taskman.infrastructure.storage.json_storage import JsonStorage

logger = logging.getLogger(__name__)

TASKS_FILENAME = "tasks.json"
CATEGORIES_FILENAME = "categories.json"


class TaskCollection(BaseModel):
    """On-disk shape of tasks.json."""

    tasks: list[Task] = Field(default_factory=list)


class CategoryCollection(BaseModel):
    """On-disk shape of categories.json."""

    categories: list[Category] = Field(default_factory=list)


class JsonTaskRepository:
    """Repository for task persistence.

    Wraps tasks.json file operations with Result-based error handling.
    Records are kept in insertion order; an upsert of an existing id keeps
    its position.
    """

    def __init__(self, path: Path, storage: JsonStorage | None = None) -> None:
        """Initialize the repository.

        Args:
            path: Location of tasks.json.
            storage: JsonStorage instance to use. Creates new one if not provided.
        """
        self._path = path
        self._storage = storage or JsonStorage()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Result[dict[str, Task], PersistenceError]:
        if not self._path.exists():
            # No tasks file means no tasks yet - not an error
            return Ok({})

        result = self._storage.load_json(self._path)
        if isinstance(result, Err):
            return result

        try:
            collection = TaskCollection(**result.value)
        except ValidationError as e:
            return Err(PersistenceError(f"Invalid task data in {self._path}: {e}", self._path))
        return Ok({task.id: task for task in collection.tasks})

    def _write(self, tasks: dict[str, Task]) -> Result[None, PersistenceError]:
        collection = TaskCollection(tasks=list(tasks.values()))
        return self._storage.save_json(self._path, collection.model_dump(mode="json"))

    def save(self, task: Task) -> Result[Task, PersistenceError]:
        """Insert or overwrite a task by id.

        Returns:
            Ok(task) once written, Err(PersistenceError) otherwise.
        """
        result = self._load()
        if isinstance(result, Err):
            return result

        tasks = result.value
        tasks[task.id] = task
        return map_result(self._write(tasks), lambda _: task)

    def find_by_id(self, task_id: str) -> Result[Task | None, PersistenceError]:
        return map_result(self._load(), lambda tasks: tasks.get(task_id))

    def find_all(self) -> Result[list[Task], PersistenceError]:
        return map_result(self._load(), lambda tasks: list(tasks.values()))

    def find_by_category_id(self, category_id: str) -> Result[list[Task], PersistenceError]:
        return map_result(
            self._load(),
            lambda tasks: [t for t in tasks.values() if t.category_id == category_id],
        )

    def delete_by_id(self, task_id: str) -> Result[bool, PersistenceError]:
        """Delete a task by id.

        Returns:
            Ok(True) if a task was removed, Ok(False) if none matched.
            The file is only rewritten when something was removed.
        """
        result = self._load()
        if isinstance(result, Err):
            return result

        tasks = result.value
        if tasks.pop(task_id, None) is None:
            return Ok(False)
        return map_result(self._write(tasks), lambda _: True)

    def delete_all(self) -> Result[None, PersistenceError]:
        return self._write({})

    def count(self) -> Result[int, PersistenceError]:
        return map_result(self._load(), len)


class JsonCategoryRepository:
    """Repository for category persistence.

    Wraps categories.json file operations with Result-based error handling.
    On first run (no file yet) the default categories are seeded and
    written out.
    """

    def __init__(
        self,
        path: Path,
        storage: JsonStorage | None = None,
        seed_defaults: bool = True,
    ) -> None:
        """Initialize the repository.

        Args:
            path: Location of categories.json.
            storage: JsonStorage instance to use. Creates new one if not provided.
            seed_defaults: Write the default category set when the file is missing.
        """
        self._path = path
        self._storage = storage or JsonStorage()
        self._seed_defaults = seed_defaults

    @property
    def path(self) -> Path:
        return self._path

    def _seed(self) -> Result[dict[str, Category], PersistenceError]:
        categories = {c.id: c for c in default_categories()}
        logger.info(f"Seeding {len(categories)} default categories into {self._path}")
        return map_result(self._write(categories), lambda _: categories)

    def _load(self) -> Result[dict[str, Category], PersistenceError]:
        if not self._path.exists():
            if self._seed_defaults:
                return self._seed()
            return Ok({})

        result = self._storage.load_json(self._path)
        if isinstance(result, Err):
            return result

        try:
            collection = CategoryCollection(**result.value)
        except ValidationError as e:
            return Err(
                PersistenceError(f"Invalid category data in {self._path}: {e}", self._path)
            )
        return Ok({category.id: category for category in collection.categories})

    def _write(self, categories: dict[str, Category]) -> Result[None, PersistenceError]:
        collection = CategoryCollection(categories=list(categories.values()))
        return self._storage.save_json(self._path, collection.model_dump(mode="json"))

    def save(self, category: Category) -> Result[Category, PersistenceError]:
        result = self._load()
        if isinstance(result, Err):
            return result

        categories = result.value
        categories[category.id] = category
        return map_result(self._write(categories), lambda _: category)

    def find_by_id(self, category_id: str) -> Result[Category | None, PersistenceError]:
        return map_result(self._load(), lambda categories: categories.get(category_id))

    def find_by_name(self, name: str) -> Result[Category | None, PersistenceError]:
        """Find a category by name, ignoring case."""
        return map_result(
            self._load(),
            lambda categories: next((c for c in categories.values() if c.has_name(name)), None),
        )

    def find_all(self) -> Result[list[Category], PersistenceError]:
        return map_result(self._load(), lambda categories: list(categories.values()))

    def delete_by_id(self, category_id: str) -> Result[bool, PersistenceError]:
        result = self._load()
        if isinstance(result, Err):
            return result

        categories = result.value
        if categories.pop(category_id, None) is None:
            return Ok(False)
        return map_result(self._write(categories), lambda _: True)

    def delete_all(self) -> Result[None, PersistenceError]:
        return self._write({})

    def count(self) -> Result[int, PersistenceError]:
        return map_result(self._load(), len)
