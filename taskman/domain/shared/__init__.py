"""Shared domain utilities for taskman.

This package provides common building blocks used across domain modules:

- Result type for explicit error handling
- The error taxonomy
- Clock helpers producing aware UTC timestamps

Example usage:
    >>> from taskman.domain.shared import Ok, Err, Result, TaskNotFoundError
    >>>
    >>> def find_task(task_id: str) -> Result[dict, TaskNotFoundError]:
    ...     if task_id == "missing":
    ...         return Err(TaskNotFoundError(task_id))
    ...     return Ok({"id": task_id, "title": "Example"})
"""

from taskman.domain.shared.clock import Clock, to_utc, utc_now
from taskman.domain.shared.errors import (
    CategoryNotFoundError,
    DuplicateNameError,
    IllegalTransitionError,
    InvalidInputError,
    NotFoundError,
    PersistenceError,
    TaskNotFoundError,
    TrackerError,
)
from taskman.domain.shared.result import (
    Err,
    Ok,
    Result,
    flat_map,
    map_result,
)

__all__ = [
    # Result
    "Ok",
    "Err",
    "Result",
    "map_result",
    "flat_map",
    # Errors
    "TrackerError",
    "InvalidInputError",
    "NotFoundError",
    "TaskNotFoundError",
    "CategoryNotFoundError",
    "DuplicateNameError",
    "IllegalTransitionError",
    "PersistenceError",
    # Clock
    "Clock",
    "utc_now",
    "to_utc",
]
