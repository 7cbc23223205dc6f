"""Text rendering for taskman CLI output.

Every function here returns a string; commands decide where to echo it.
Timestamps are shown in local time.
"""

from collections.abc import Mapping
from datetime import datetime

from taskman.domain.category import Category
from taskman.domain.shared import utc_now
from taskman.domain.task import Priority, Status, Task, TaskStatistics

WIDTH = 80
BORDER = "=" * WIDTH
LINE = "-" * WIDTH
DISPLAY_FORMAT = "%Y-%m-%d %H:%M"

STATUS_ICONS = {
    Status.TODO: "○",
    Status.IN_PROGRESS: "◐",
    Status.DONE: "●",
    Status.CANCELLED: "✕",
}

PRIORITY_ICONS = {
    Priority.LOW: "↓",
    Priority.MEDIUM: "→",
    Priority.HIGH: "↑",
    Priority.CRITICAL: "⚡",
}


def truncate(text: str | None, max_length: int) -> str:
    """Shorten text to max_length, ending in "..." when cut."""
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def format_datetime(value: datetime | None) -> str:
    if value is None:
        return "N/A"
    return value.astimezone().strftime(DISPLAY_FORMAT)


def relative_time(value: datetime | None, now: datetime | None = None) -> str:
    """Describe value relative to now, e.g. "3 hours ago" or "in 2 days"."""
    if value is None:
        return "N/A"

    now = now or utc_now()
    seconds = (value - now).total_seconds()
    # Whole hours, truncated toward zero
    hours = int(seconds / 3600)

    if seconds < 0:
        past = abs(hours)
        if past < 1:
            return "just now"
        if past < 24:
            return f"{past} hours ago"
        return f"{past // 24} days ago"

    if hours < 1:
        return "soon"
    if hours < 24:
        return f"in {hours} hours"
    return f"in {hours // 24} days"


def category_label(task: Task, categories: Mapping[str, Category]) -> str:
    """Category name for display; dangling references are tolerated."""
    if task.category_id is None:
        return ""
    category = categories.get(task.category_id)
    if category is None:
        return "(category not found)"
    return category.name


def format_task(
    task: Task,
    categories: Mapping[str, Category],
    now: datetime | None = None,
) -> str:
    """Detail card for one task.

    Args:
        task: Task to render.
        categories: Categories by id, for resolving the task's category.
        now: Clock reading for relative times and the overdue marker.
    """
    now = now or utc_now()
    lines = ["", BORDER, f"  {task.title}", LINE]

    if task.description:
        lines.append(f"  Description: {task.description}")

    lines.append(f"  Status:      {STATUS_ICONS[task.status]} {task.status.display_name}")
    lines.append(f"  Priority:    {PRIORITY_ICONS[task.priority]} {task.priority.display_name}")

    if task.category_id is not None:
        lines.append(f"  Category:    {category_label(task, categories)}")

    if task.due_date is not None:
        due = f"{format_datetime(task.due_date)} ({relative_time(task.due_date, now)})"
        if task.is_overdue(now):
            due += " ⚠ OVERDUE"
        lines.append(f"  Due Date:    {due}")

    lines.append(f"  Created:     {format_datetime(task.created_at)}")
    lines.append(f"  ID:          {task.id}")
    lines.append(BORDER)
    return "\n".join(lines)


def format_task_table(
    tasks: list[Task],
    header: str,
    now: datetime | None = None,
) -> str:
    """Numbered table of tasks."""
    now = now or utc_now()
    lines = ["", BORDER, f"  {header} ({len(tasks)} tasks)", BORDER]

    if not tasks:
        lines.append("  No tasks found.")
        lines.append(BORDER)
        return "\n".join(lines)

    lines.append(f"  {'#':<4} {'Title':<30} {'Status':<14} {'Priority':<12} {'Due Date':<18}")
    lines.append(LINE)

    for number, task in enumerate(tasks, start=1):
        status = f"{STATUS_ICONS[task.status]} {task.status.display_name}"
        priority = f"{PRIORITY_ICONS[task.priority]} {task.priority.display_name}"
        due = format_datetime(task.due_date)
        if task.is_overdue(now):
            due += " ⚠"
        lines.append(
            f"  {number:<4} {truncate(task.title, 30):<30} {status:<14} {priority:<12} {due:<18}"
        )

    lines.append(BORDER)
    return "\n".join(lines)


def format_category_table(categories: list[Category]) -> str:
    lines = ["", BORDER, f"  Categories ({len(categories)})", BORDER]

    if not categories:
        lines.append("  No categories found.")
        lines.append(BORDER)
        return "\n".join(lines)

    lines.append(f"  {'Name':<20} {'Description':<40} {'Color':<10}")
    lines.append(LINE)
    for category in categories:
        lines.append(
            f"  {truncate(category.name, 20):<20} "
            f"{truncate(category.description, 40):<40} {category.color:<10}"
        )

    lines.append(BORDER)
    return "\n".join(lines)


def format_statistics(stats: TaskStatistics) -> str:
    lines = [
        "",
        BORDER,
        "  Task Statistics",
        BORDER,
        f"  Total Tasks:      {stats.total}",
        f"  TODO:             {stats.todo}",
        f"  In Progress:      {stats.in_progress}",
        f"  Done:             {stats.done}",
        f"  Cancelled:        {stats.cancelled}",
        f"  Overdue:          {stats.overdue}",
    ]
    if stats.total > 0:
        lines.append(f"  Completion Rate:  {stats.completion_rate:.1f}%")
    lines.append(BORDER)
    return "\n".join(lines)
