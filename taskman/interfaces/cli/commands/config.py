"""Configuration CLI commands.

Reads and writes the user preferences in ~/.taskman/config.json.
"""

import typer

from taskman.domain.task import SortStrategy
from taskman.global_config import get_config_dir, get_global_config, save_global_config
from taskman.interfaces.cli.common import parse_or_exit, print_success

app = typer.Typer(help="Configuration commands")


@app.command("show")
def show() -> None:
    """Show the current configuration."""
    config = get_global_config()
    typer.echo(f"Config file:   {get_config_dir() / 'config.json'}")
    typer.echo(f"Data dir:      {config.resolve_data_dir()}")
    typer.echo(f"Default sort:  {config.default_sort.value}")


@app.command("set-data-dir")
def set_data_dir(
    path: str = typer.Argument(..., help="Directory for tasks.json and categories.json"),
) -> None:
    """Set the default data directory."""
    config = get_global_config()
    save_global_config(config.model_copy(update={"data_dir": path}))
    print_success(f"Data dir set to {path}")


@app.command("set-sort")
def set_sort(
    strategy: str = typer.Argument(..., help=", ".join(s.value for s in SortStrategy)),
) -> None:
    """Set the default sort order for task lists."""
    sort = parse_or_exit(SortStrategy.parse, strategy)
    config = get_global_config()
    save_global_config(config.model_copy(update={"default_sort": sort}))
    print_success(f"Default sort set to {sort.value}")
