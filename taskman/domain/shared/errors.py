"""Error taxonomy for taskman.

Entities raise these errors directly. Services and repositories carry
them inside ``Err`` results. The CLI prints ``str(error)`` and exits.
"""

from pathlib import Path

from pydantic import ValidationError


class TrackerError(Exception):
    """Base class for all taskman domain errors."""


class InvalidInputError(TrackerError):
    """Malformed input: blank title or name, unparseable value or date."""

    @classmethod
    def from_validation_error(cls, error: ValidationError) -> "InvalidInputError":
        """Wrap the first message of a pydantic ValidationError."""
        details = error.errors()
        if not details:
            return cls(str(error))
        # pydantic prefixes messages raised from validators
        return cls(details[0]["msg"].removeprefix("Value error, "))


class NotFoundError(TrackerError):
    """A referenced identifier or name does not exist.

    Attributes:
        kind: Entity kind, e.g. "Task" or "Category".
        key: The identifier or name that failed to resolve.
    """

    kind = "Entity"

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"{self.kind} not found: {key}")


class TaskNotFoundError(NotFoundError):
    kind = "Task"


class CategoryNotFoundError(NotFoundError):
    kind = "Category"


class DuplicateNameError(TrackerError):
    """A category with the same name (ignoring case) already exists."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Category with name '{name}' already exists")


class IllegalTransitionError(TrackerError):
    """A status change not allowed by the transition table.

    Attributes:
        source: Current status.
        target: Requested status.
    """

    def __init__(self, source, target) -> None:
        self.source = source
        self.target = target
        super().__init__(
            f"Cannot transition from {source.display_name} to {target.display_name}"
        )


class PersistenceError(TrackerError):
    """Reading or writing a data file failed.

    Attributes:
        path: The file involved, if known.
    """

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)
