"""Shared utilities for taskman CLI commands.

This module provides common utilities used across CLI commands:
- Service wiring (repositories and services built once per invocation)
- Formatted output helpers (error, success, info)
- Result unwrapping that turns an Err into an error message and exit code 1
- Parsing of user input: dates, priorities, statuses, task and category refs
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import TypeVar

import typer

from taskman.application import CategoryService, SearchService, TaskService
from taskman.domain.category import Category
from taskman.domain.shared import (
    CategoryNotFoundError,
    Clock,
    Err,
    InvalidInputError,
    Ok,
    Result,
    TaskNotFoundError,
    TrackerError,
    utc_now,
)
from taskman.domain.task import Task
from taskman.global_config import TrackerConfig
from taskman.infrastructure.storage import (
    CATEGORIES_FILENAME,
    TASKS_FILENAME,
    JsonCategoryRepository,
    JsonTaskRepository,
)

T = TypeVar("T")

# Accepted input formats for due dates, tried in order
DATE_INPUT_FORMATS = ("%Y-%m-%d %H:%M", "%Y-%m-%d")


# =============================================================================
# Service Wiring
# =============================================================================


@dataclass
class Services:
    """Services for one CLI invocation, stored on the Typer context."""

    tasks: TaskService
    categories: CategoryService
    search: SearchService
    config: TrackerConfig
    data_dir: Path


def build_services(
    data_dir: Path,
    config: TrackerConfig | None = None,
    clock: Clock = utc_now,
) -> Services:
    """Create the repositories for data_dir and the services on top of them.

    Args:
        data_dir: Directory for tasks.json and categories.json.
        config: Loaded user configuration (defaults if not provided).
        clock: Source of the current time for every service.

    Returns:
        Services sharing one task repository.
    """
    task_repository = JsonTaskRepository(data_dir / TASKS_FILENAME)
    category_repository = JsonCategoryRepository(data_dir / CATEGORIES_FILENAME)
    return Services(
        tasks=TaskService(task_repository, clock=clock),
        categories=CategoryService(category_repository),
        search=SearchService(task_repository, clock=clock),
        config=config or TrackerConfig(),
        data_dir=data_dir,
    )


def get_services(ctx: typer.Context) -> Services:
    """Return the Services the root callback stored on the context."""
    services = ctx.find_object(Services)
    if services is None:
        print_error("Services not initialised; run through the taskman app.")
        raise typer.Exit(1)
    return services


# =============================================================================
# Output Helpers
# =============================================================================


def print_error(msg: str) -> None:
    """Print a formatted error message.

    Args:
        msg: Error message to display
    """
    typer.echo(typer.style(f"Error: {msg}", fg=typer.colors.RED), err=True)


def print_success(msg: str) -> None:
    """Print a formatted success message.

    Args:
        msg: Success message to display
    """
    typer.echo(typer.style(msg, fg=typer.colors.GREEN))


def print_info(msg: str) -> None:
    """Print a formatted info message.

    Args:
        msg: Info message to display
    """
    typer.echo(typer.style(msg, fg=typer.colors.BLUE))


def print_warning(msg: str) -> None:
    """Print a formatted warning message.

    Args:
        msg: Warning message to display
    """
    typer.echo(typer.style(f"Warning: {msg}", fg=typer.colors.YELLOW), err=True)


def unwrap_or_exit(result: Result[T, TrackerError]) -> T:
    """Return the Ok value, or print the error and exit with status 1.

    Args:
        result: Result from a service call.

    Returns:
        The Ok value.

    Raises:
        typer.Exit: If the result is an Err.
    """
    if isinstance(result, Err):
        print_error(str(result.error))
        raise typer.Exit(1)
    return result.value


# =============================================================================
# Input Parsing
# =============================================================================


def parse_datetime(text: str) -> datetime:
    """Parse a user-entered date as local time.

    Accepts "YYYY-MM-DD HH:MM", "YYYY-MM-DD" and ISO 8601 dates or
    date-times.

    Raises:
        InvalidInputError: If no format matches.
    """
    text = text.strip()
    for fmt in DATE_INPUT_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise InvalidInputError(
            f"Unable to parse date: {text}. Expected format: YYYY-MM-DD HH:MM or YYYY-MM-DD"
        ) from None


def parse_or_exit(parser, text: str):
    """Run a parser that raises InvalidInputError, exiting on failure."""
    try:
        return parser(text)
    except InvalidInputError as e:
        print_error(str(e))
        raise typer.Exit(1)


def find_task(services: Services, ref: str) -> Result[Task, TrackerError]:
    """Resolve a task reference.

    A reference is a full task id, a unique id prefix, or a 1-based row
    number from ``task list`` with no filter and the default sort.
    """
    result = services.tasks.get_all_tasks()
    if isinstance(result, Err):
        return result
    tasks = services.search.sort(result.value, services.config.default_sort)

    ref = ref.strip()
    if ref.isdigit():
        index = int(ref) - 1
        if 0 <= index < len(tasks):
            return Ok(tasks[index])
        return Err(TaskNotFoundError(ref))

    matches = [t for t in tasks if t.id == ref] or [t for t in tasks if t.id.startswith(ref)]
    if len(matches) == 1:
        return Ok(matches[0])
    if len(matches) > 1:
        return Err(InvalidInputError(f"Ambiguous task id prefix: {ref}"))
    return Err(TaskNotFoundError(ref))


def find_category(services: Services, ref: str) -> Result[Category, TrackerError]:
    """Resolve a category reference by name (ignoring case) or id."""
    by_name = services.categories.get_category_by_name(ref)
    if not isinstance(by_name, Err) or not isinstance(by_name.error, CategoryNotFoundError):
        return by_name
    return services.categories.get_category(ref)


__all__ = [
    "Services",
    "build_services",
    "get_services",
    "print_error",
    "print_success",
    "print_info",
    "print_warning",
    "unwrap_or_exit",
    "parse_datetime",
    "parse_or_exit",
    "find_task",
    "find_category",
    "DATE_INPUT_FORMATS",
]
