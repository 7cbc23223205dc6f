"""Infrastructure layer for taskman.

This module provides the I/O side of the application: JSON file
storage and the repositories built on it, all returning Result types
for explicit error handling.

Exports:
    Storage:
        - JsonStorage: Low-level JSON file I/O
        - JsonTaskRepository: Task persistence (tasks.json)
        - JsonCategoryRepository: Category persistence (categories.json)
"""

from taskman.infrastructure.storage import (
    JsonCategoryRepository,
    JsonStorage,
    JsonTaskRepository,
)

__all__ = [
    "JsonStorage",
    "JsonTaskRepository",
    "JsonCategoryRepository",
]
