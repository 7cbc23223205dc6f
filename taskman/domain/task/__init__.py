"""Task domain - tasks, their lifecycle and the query engine.

All exports are pure (no I/O, no side effects).

Key Types:
    Priority - Ordinal priority enumeration
    Status - Lifecycle status with its transition table
    Task - Immutable task value
    TaskChanges - Batch of field changes for a single update
    TaskStatistics - Counts by status
    TaskFilter - Multi-criteria filter
    SortStrategy - Named orderings

Query Functions:
    matches_keyword, has_status, has_priority, in_category, due_between
    all_of - AND-combine predicates
    filter_tasks - Apply a predicate
    sort_tasks - Stable sort by strategy
"""

from .models import DUE_SOON_WINDOW, Priority, Status, Task, TaskChanges, TaskStatistics
from .queries import (
    SortStrategy,
    TaskFilter,
    TaskPredicate,
    all_of,
    due_between,
    filter_tasks,
    has_priority,
    has_status,
    in_category,
    matches_keyword,
    sort_tasks,
)

__all__ = [
    # Models
    "Priority",
    "Status",
    "Task",
    "TaskChanges",
    "TaskStatistics",
    "DUE_SOON_WINDOW",
    # Queries
    "TaskPredicate",
    "TaskFilter",
    "SortStrategy",
    "matches_keyword",
    "has_status",
    "has_priority",
    "in_category",
    "due_between",
    "all_of",
    "filter_tasks",
    "sort_tasks",
]
