"""Task management CLI commands.

Commands for the task lifecycle: adding, listing, updating status and
fields, deleting, searching and filtering, plus the statistics view.
"""

from collections.abc import Callable
from typing import Any, Optional

import typer

from taskman.domain.category import Category
from taskman.domain.shared import CategoryNotFoundError, Err, InvalidInputError, Result
from taskman.domain.task import Priority, SortStrategy, Status, Task, TaskChanges, TaskFilter
from taskman.interfaces.cli.common import (
    Services,
    find_category,
    find_task,
    get_services,
    parse_datetime,
    parse_or_exit,
    print_info,
    print_success,
    print_warning,
    unwrap_or_exit,
)
from taskman.interfaces.cli.formatting import format_statistics, format_task, format_task_table

app = typer.Typer(help="Task management commands")

# Words accepted by `--due` and `--category` to clear the field
CLEAR_WORDS = {"none", "clear", "-"}


# =============================================================================
# Helpers
# =============================================================================


def _categories_by_id(services: Services) -> dict[str, Category]:
    categories = unwrap_or_exit(services.categories.get_all_categories())
    return {category.id: category for category in categories}


def _resolve_sort(services: Services, sort: str | None) -> SortStrategy:
    if sort is None:
        return services.config.default_sort
    return parse_or_exit(SortStrategy.parse, sort)


def _show_list(services: Services, tasks: list[Task], header: str, sort: str | None) -> None:
    ordered = services.search.sort(tasks, _resolve_sort(services, sort))
    typer.echo(format_task_table(ordered, header))


def _show_task(services: Services, task: Task) -> None:
    typer.echo(format_task(task, _categories_by_id(services)))


def _set_status(ctx: typer.Context, ref: str, status: Status, message: str) -> None:
    services = get_services(ctx)
    task = unwrap_or_exit(find_task(services, ref))
    updated = unwrap_or_exit(services.tasks.update_task_status(task.id, status))
    print_success(f"{message}: {updated.title}")


# filter word -> (header, query)
LIST_FILTERS: dict[str, tuple[str, Callable[[Services], Result]]] = {
    "todo": ("TODO Tasks", lambda s: s.search.filter_by_status(Status.TODO)),
    "progress": ("In Progress Tasks", lambda s: s.search.filter_by_status(Status.IN_PROGRESS)),
    "inprogress": ("In Progress Tasks", lambda s: s.search.filter_by_status(Status.IN_PROGRESS)),
    "done": ("Completed Tasks", lambda s: s.search.filter_by_status(Status.DONE)),
    "completed": ("Completed Tasks", lambda s: s.search.filter_by_status(Status.DONE)),
    "cancelled": ("Cancelled Tasks", lambda s: s.search.filter_by_status(Status.CANCELLED)),
    "overdue": ("Overdue Tasks", lambda s: s.search.get_overdue_tasks()),
    "soon": ("Tasks Due Soon", lambda s: s.search.get_tasks_due_soon()),
    "high": ("High Priority Tasks", lambda s: s.search.filter_by_priority(Priority.HIGH)),
    "critical": ("Critical Tasks", lambda s: s.search.filter_by_priority(Priority.CRITICAL)),
}


# =============================================================================
# Commands
# =============================================================================


@app.command("add")
def add(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Task title"),
    description: str = typer.Option("", "--description", "-d", help="Task description"),
    priority: Optional[str] = typer.Option(
        None, "--priority", "-p", help="LOW/MEDIUM/HIGH/CRITICAL (or L/M/H/C, 1-4)"
    ),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Category name"),
    due: Optional[str] = typer.Option(None, "--due", help="Due date: YYYY-MM-DD [HH:MM]"),
) -> None:
    """Create a new task.

    An unknown category or an unparseable due date is reported as a
    warning and the task is created without it.
    """
    services = get_services(ctx)
    task_priority = parse_or_exit(Priority.parse, priority) if priority else None

    category_id = None
    if category:
        result = find_category(services, category)
        if isinstance(result, Err) and isinstance(result.error, CategoryNotFoundError):
            print_warning("Category not found. Task will have no category.")
        else:
            category_id = unwrap_or_exit(result).id

    due_date = None
    if due:
        try:
            due_date = parse_datetime(due)
        except InvalidInputError:
            print_warning("Invalid date format. Task will have no due date.")

    task = unwrap_or_exit(
        services.tasks.create_task(title, description, task_priority, category_id, due_date)
    )
    print_success("Task created successfully!")
    _show_task(services, task)


@app.command("list")
def list_tasks(
    ctx: typer.Context,
    filter_name: Optional[str] = typer.Argument(
        None, help="todo, progress, done, cancelled, overdue, soon, high or critical"
    ),
    sort: Optional[str] = typer.Option(None, "--sort", "-s", help="Sort strategy, e.g. due-date-asc"),
) -> None:
    """List all tasks, or those matching a quick filter."""
    services = get_services(ctx)
    header, query = "All Tasks", lambda s: s.tasks.get_all_tasks()

    if filter_name:
        selected = LIST_FILTERS.get(filter_name.lower())
        if selected is None:
            print_warning(f"Unknown filter '{filter_name}', showing all tasks.")
        else:
            header, query = selected

    tasks = unwrap_or_exit(query(services))
    _show_list(services, tasks, header, sort)


@app.command("show")
def show(
    ctx: typer.Context,
    ref: str = typer.Argument(..., help="Task number or id"),
) -> None:
    """Show one task in detail."""
    services = get_services(ctx)
    _show_task(services, unwrap_or_exit(find_task(services, ref)))


@app.command("update")
def update(
    ctx: typer.Context,
    ref: str = typer.Argument(..., help="Task number or id"),
    status: Optional[str] = typer.Option(None, "--status", help="New status"),
    priority: Optional[str] = typer.Option(None, "--priority", "-p", help="New priority"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="New description"),
    due: Optional[str] = typer.Option(None, "--due", help="New due date, or 'none' to clear"),
    category: Optional[str] = typer.Option(
        None, "--category", "-c", help="Category name, or 'none' to clear"
    ),
) -> None:
    """Update one or more fields of a task.

    The changes are saved together: if any of them is rejected, the task
    is left as it was.
    """
    services = get_services(ctx)
    task = unwrap_or_exit(find_task(services, ref))

    changes: dict[str, Any] = {}
    if status:
        changes["status"] = parse_or_exit(Status.parse, status)
    if priority:
        changes["priority"] = parse_or_exit(Priority.parse, priority)
    if title is not None:
        changes["title"] = title
    if description is not None:
        changes["description"] = description
    if due is not None:
        changes["due_date"] = (
            None if due.lower() in CLEAR_WORDS else parse_or_exit(parse_datetime, due)
        )
    if category is not None:
        changes["category_id"] = (
            None
            if category.lower() in CLEAR_WORDS
            else unwrap_or_exit(find_category(services, category)).id
        )

    if not changes:
        print_info("Nothing to update.")
        return

    updated = unwrap_or_exit(services.tasks.update_task(task.id, TaskChanges(**changes)))

    print_success("Task updated!")
    _show_task(services, updated)


@app.command("start")
def start(ctx: typer.Context, ref: str = typer.Argument(..., help="Task number or id")) -> None:
    """Mark a task as in progress."""
    _set_status(ctx, ref, Status.IN_PROGRESS, "Started")


@app.command("done")
def done(ctx: typer.Context, ref: str = typer.Argument(..., help="Task number or id")) -> None:
    """Mark a task as done."""
    _set_status(ctx, ref, Status.DONE, "Marked as done")


@app.command("cancel")
def cancel(ctx: typer.Context, ref: str = typer.Argument(..., help="Task number or id")) -> None:
    """Cancel a task."""
    _set_status(ctx, ref, Status.CANCELLED, "Cancelled")


@app.command("reopen")
def reopen(ctx: typer.Context, ref: str = typer.Argument(..., help="Task number or id")) -> None:
    """Move a done or cancelled task back to TODO."""
    _set_status(ctx, ref, Status.TODO, "Reopened")


@app.command("delete")
def delete(
    ctx: typer.Context,
    ref: str = typer.Argument(..., help="Task number or id"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a task."""
    services = get_services(ctx)
    task = unwrap_or_exit(find_task(services, ref))

    if not yes:
        typer.confirm(f"Delete task '{task.title}'?", abort=True)

    unwrap_or_exit(services.tasks.delete_task(task.id))
    print_success("Task deleted!")


@app.command("search")
def search(
    ctx: typer.Context,
    keyword: str = typer.Argument(..., help="Text to look for in titles and descriptions"),
    sort: Optional[str] = typer.Option(None, "--sort", "-s", help="Sort strategy"),
) -> None:
    """Search tasks by keyword."""
    services = get_services(ctx)
    tasks = unwrap_or_exit(services.search.search_by_keyword(keyword))
    _show_list(services, tasks, f"Search Results for: {keyword}", sort)


@app.command("filter")
def filter_tasks(
    ctx: typer.Context,
    status: Optional[str] = typer.Option(None, "--status", help="Only this status"),
    priority: Optional[str] = typer.Option(None, "--priority", "-p", help="Only this priority"),
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Only this category"),
    keyword: str = typer.Option("", "--keyword", "-k", help="Title/description substring"),
    overdue: bool = typer.Option(False, "--overdue", help="Only overdue tasks"),
    date_from: Optional[str] = typer.Option(None, "--from", help="Due on or after this date"),
    date_to: Optional[str] = typer.Option(None, "--to", help="Due on or before this date"),
    sort: Optional[str] = typer.Option(None, "--sort", "-s", help="Sort strategy"),
) -> None:
    """Filter tasks by several criteria at once (all must match)."""
    services = get_services(ctx)

    criteria = TaskFilter(
        status=parse_or_exit(Status.parse, status) if status else None,
        priority=parse_or_exit(Priority.parse, priority) if priority else None,
        category_id=unwrap_or_exit(find_category(services, category)).id if category else None,
        keyword=keyword,
        overdue_only=overdue,
    )
    tasks = unwrap_or_exit(services.search.filter(criteria))

    if date_from is not None or date_to is not None:
        if date_from is None or date_to is None:
            raise typer.BadParameter("--from and --to must be given together")
        start_date = parse_or_exit(parse_datetime, date_from)
        end_date = parse_or_exit(parse_datetime, date_to)
        in_range = unwrap_or_exit(services.search.filter_by_date_range(start_date, end_date))
        in_range_ids = {t.id for t in in_range}
        tasks = [t for t in tasks if t.id in in_range_ids]

    _show_list(services, tasks, "Filtered Tasks", sort)


@app.command("stats")
def stats(ctx: typer.Context) -> None:
    """Show task statistics."""
    services = get_services(ctx)
    typer.echo(format_statistics(unwrap_or_exit(services.tasks.get_statistics())))
