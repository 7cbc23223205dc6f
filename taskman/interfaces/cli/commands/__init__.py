"""CLI command groups for taskman.

This package contains individual command groups that are registered
with the main Typer app. Each module provides a set of related commands.

Command groups:
- task: Task lifecycle (add, list, update, done, search, filter, stats)
- category: Category management (list, add, rename, update, delete)
- config: User preferences (show, set-data-dir, set-sort)
- shell: Interactive prompt that runs the commands above

Each command group is a Typer app that gets registered
with the main app using app.add_typer().
"""

from taskman.interfaces.cli.commands import category, config, shell, task

__all__ = ["task", "category", "config", "shell"]
