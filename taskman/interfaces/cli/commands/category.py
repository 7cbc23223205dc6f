"""Category management CLI commands."""

from typing import Optional

import typer

from taskman.interfaces.cli.common import (
    find_category,
    get_services,
    print_info,
    print_success,
    unwrap_or_exit,
)
from taskman.interfaces.cli.formatting import format_category_table

app = typer.Typer(help="Category management commands")


@app.command("list")
def list_categories(ctx: typer.Context) -> None:
    """List all categories."""
    services = get_services(ctx)
    typer.echo(format_category_table(unwrap_or_exit(services.categories.get_all_categories())))


@app.command("add")
def add(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Category name (unique, case-insensitive)"),
    description: str = typer.Option("", "--description", "-d", help="Category description"),
    color: Optional[str] = typer.Option(None, "--color", help="Hex colour, e.g. #3498db"),
) -> None:
    """Create a new category."""
    services = get_services(ctx)
    category = unwrap_or_exit(services.categories.create_category(name, description, color))
    print_success(f"Category created: {category.name}")


@app.command("rename")
def rename(
    ctx: typer.Context,
    ref: str = typer.Argument(..., help="Category name or id"),
    new_name: str = typer.Argument(..., help="New name"),
) -> None:
    """Rename a category."""
    services = get_services(ctx)
    category = unwrap_or_exit(find_category(services, ref))
    renamed = unwrap_or_exit(services.categories.update_category_name(category.id, new_name))
    print_success(f"Category renamed: {category.name} -> {renamed.name}")


@app.command("update")
def update(
    ctx: typer.Context,
    ref: str = typer.Argument(..., help="Category name or id"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="New description"),
    color: Optional[str] = typer.Option(None, "--color", help="New hex colour"),
) -> None:
    """Update a category's description or colour."""
    services = get_services(ctx)
    category = unwrap_or_exit(find_category(services, ref))

    if description is None and color is None:
        print_info("Nothing to update.")
        return

    category = unwrap_or_exit(
        services.categories.update_category_details(category.id, description, color)
    )

    print_success(f"Category updated: {category.name}")


@app.command("delete")
def delete(
    ctx: typer.Context,
    ref: str = typer.Argument(..., help="Category name or id"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a category.

    Tasks that reference it keep the dangling id and are shown with
    "(category not found)".
    """
    services = get_services(ctx)
    category = unwrap_or_exit(find_category(services, ref))

    if not yes:
        typer.confirm(f"Delete category '{category.name}'?", abort=True)

    unwrap_or_exit(services.categories.delete_category(category.id))
    print_success("Category deleted!")
