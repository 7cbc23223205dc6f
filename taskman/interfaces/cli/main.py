"""Entry point for the taskman CLI.

This module provides the main entry point for the taskman CLI.
It imports the Typer app and runs it.

Usage:
    python -m taskman.interfaces.cli.main

Or via installed entry point:
    taskman <command>
"""

from taskman.interfaces.cli import app


def main() -> None:
    """Run the taskman CLI application."""
    app()


if __name__ == "__main__":
    main()
