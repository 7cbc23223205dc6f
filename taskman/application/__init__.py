"""Application service layer for taskman.

This package contains application services that orchestrate domain
operations against injected repositories. Services return Result values
for every expected failure and never cache repository data.

Services:
    task_service - Task lifecycle operations (create, update, delete, stats)
    category_service - Category management with unique names
    search_service - Keyword search, filtering and sorting

Example usage:
    >>> from taskman.application import TaskService
    >>> from taskman.domain.shared import Ok
    >>>
    >>> service = TaskService(task_repository)
    >>> result = service.create_task("Buy milk")
    >>> if isinstance(result, Ok):
    ...     print(f"Created: {result.value.title}")
"""

from taskman.application.category_service import CategoryService
from taskman.application.search_service import SearchService
from taskman.application.task_service import TaskService

__all__ = [
    "TaskService",
    "CategoryService",
    "SearchService",
]
