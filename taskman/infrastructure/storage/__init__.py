"""Storage infrastructure for taskman.

Provides persistence layer implementations for domain models,
using Result types for explicit error handling.
"""

from taskman.infrastructure.storage.json_storage import JsonStorage
from taskman.infrastructure.storage.repositories import (
    CATEGORIES_FILENAME,
    TASKS_FILENAME,
    JsonCategoryRepository,
    JsonTaskRepository,
)

__all__ = [
    "JsonStorage",
    "JsonTaskRepository",
    "JsonCategoryRepository",
    "TASKS_FILENAME",
    "CATEGORIES_FILENAME",
]
