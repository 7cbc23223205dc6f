"""CLI interface for taskman using Typer.

This module provides the command-line interface for taskman,
a single-user task tracker with categories, search and JSON storage.

Usage:
    taskman add "Buy milk" -p high     # Create a task
    taskman list                       # Show all tasks
    taskman done 1                     # Mark task #1 done
    taskman shell                      # Interactive mode

The CLI is structured as:
- app: Main Typer application
- commands/: Individual command groups (task, category, config, shell)
- common.py: Shared utilities for CLI commands
- formatting.py: Text rendering of tasks, categories and statistics
- main.py: Entry point that runs the app
"""

import logging
from pathlib import Path
from typing import Optional

import typer

from taskman import __version__
from taskman.global_config import get_global_config

# Import command groups
from taskman.interfaces.cli.commands import category, config, shell, task
from taskman.interfaces.cli.common import build_services, get_services

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

# Create the main Typer application
app = typer.Typer(
    name="taskman",
    help="A command-line task tracker",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"taskman version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    data_dir: Optional[Path] = typer.Option(
        None,
        "--data-dir",
        help="Directory for tasks.json and categories.json (or set TASKMAN_DATA_DIR)",
        envvar="TASKMAN_DATA_DIR",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Show debug logging"),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """taskman - track tasks with priorities, statuses, due dates and categories.

    Data is stored as JSON in the data directory, which defaults to the
    one set with 'taskman config set-data-dir' (or ./data).
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )
    user_config = get_global_config()
    resolved = data_dir.expanduser().resolve() if data_dir else user_config.resolve_data_dir()
    ctx.obj = build_services(resolved, user_config)


# =============================================================================
# Register Command Groups
# =============================================================================

app.add_typer(task.app, name="task")
app.add_typer(category.app, name="category")
app.add_typer(config.app, name="config")


# =============================================================================
# Top-Level Shortcuts for Common Commands
# =============================================================================


@app.command("add")
def add(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Task title"),
    description: str = typer.Option("", "--description", "-d", help="Task description"),
    priority: Optional[str] = typer.Option(None, "--priority", "-p", help="Task priority"),
    category_name: Optional[str] = typer.Option(None, "--category", "-c", help="Category name"),
    due: Optional[str] = typer.Option(None, "--due", help="Due date: YYYY-MM-DD [HH:MM]"),
) -> None:
    """Create a task (shortcut for 'task add')."""
    task.add(ctx, title, description=description, priority=priority, category=category_name, due=due)


@app.command("list")
def list_tasks(
    ctx: typer.Context,
    filter_name: Optional[str] = typer.Argument(
        None, help="todo, progress, done, cancelled, overdue, soon, high or critical"
    ),
    sort: Optional[str] = typer.Option(None, "--sort", "-s", help="Sort strategy"),
) -> None:
    """List tasks (shortcut for 'task list')."""
    task.list_tasks(ctx, filter_name, sort=sort)


@app.command("done")
def done(
    ctx: typer.Context,
    ref: str = typer.Argument(..., help="Task number or id"),
) -> None:
    """Mark a task done (shortcut for 'task done')."""
    task.done(ctx, ref)


@app.command("search")
def search(
    ctx: typer.Context,
    keyword: str = typer.Argument(..., help="Text to look for in titles and descriptions"),
) -> None:
    """Search tasks (shortcut for 'task search')."""
    task.search(ctx, keyword, sort=None)


@app.command("stats")
def stats(ctx: typer.Context) -> None:
    """Show task statistics."""
    task.stats(ctx)


@app.command("shell")
def interactive(ctx: typer.Context) -> None:
    """Start an interactive session."""
    shell.run_shell(app, get_services(ctx).data_dir)


__all__ = ["app"]
