"""Interactive shell for taskman.

Reads one command per line and runs it through the same Typer app, so
every command available on the command line works here too:

    taskman> add "Buy milk" -p high
    taskman> list
    taskman> done 1
    taskman> exit
"""

import shlex
from pathlib import Path

import click
import typer

from taskman.interfaces.cli.common import print_error, print_info

PROMPT = "taskman> "
EXIT_WORDS = {"exit", "quit", "q"}

BANNER = """
Task Manager - interactive mode
Type 'help' for available commands, 'exit' to quit.
"""


def run_line(app: typer.Typer, data_dir: Path, args: list[str]) -> int:
    """Run one parsed command line against app.

    Returns:
        The command's exit code (0 on success).
    """
    if args[0] == "help":
        args = ["--help"]
    try:
        exit_code = app(
            args=["--data-dir", str(data_dir), *args],
            prog_name="taskman",
            standalone_mode=False,
        )
    except click.exceptions.Abort:
        print_info("Aborted.")
        return 1
    except click.ClickException as e:
        e.show()
        return e.exit_code
    return exit_code or 0


def run_shell(app: typer.Typer, data_dir: Path) -> None:
    """Prompt for commands until exit, quit, q or end of input."""
    typer.echo(BANNER)
    while True:
        try:
            line = input(PROMPT).strip()
        except EOFError:
            typer.echo()
            break

        if not line:
            continue
        if line.lower() in EXIT_WORDS:
            break

        try:
            args = shlex.split(line)
        except ValueError as e:
            print_error(f"Could not parse command: {e}")
            continue

        if args[0] == "shell":
            print_info("Already in the shell.")
            continue

        run_line(app, data_dir, args)

    print_info("Goodbye!")
