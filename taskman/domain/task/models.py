"""Task domain models.

Pure domain models for tasks. Uses Pydantic for validation and for
serialization compatibility with the storage layer. Tasks are frozen:
every change returns a new Task value.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

from taskman.domain.shared.clock import to_utc, utc_now
from taskman.domain.shared.errors import IllegalTransitionError, InvalidInputError

# Window used by Task.is_due_soon
DUE_SOON_WINDOW = timedelta(hours=24)


class Priority(str, Enum):
    """Priority level of a task, ordered by ``level``."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def level(self) -> int:
        return _PRIORITY_LEVELS[self]

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @classmethod
    def parse(cls, text: str) -> "Priority":
        """Parse a priority from user input.

        Accepts full names, single-letter and numeric shorthands,
        case-insensitively: LOW/L/1, MEDIUM/M/2, HIGH/H/3, CRITICAL/C/4.

        Raises:
            InvalidInputError: If the input matches no priority.
        """
        priority = _PRIORITY_ALIASES.get(text.strip().upper())
        if priority is None:
            raise InvalidInputError(f"Invalid priority: {text}")
        return priority


_PRIORITY_LEVELS = {
    Priority.LOW: 1,
    Priority.MEDIUM: 2,
    Priority.HIGH: 3,
    Priority.CRITICAL: 4,
}

_PRIORITY_ALIASES = {
    "LOW": Priority.LOW,
    "L": Priority.LOW,
    "1": Priority.LOW,
    "MEDIUM": Priority.MEDIUM,
    "M": Priority.MEDIUM,
    "2": Priority.MEDIUM,
    "HIGH": Priority.HIGH,
    "H": Priority.HIGH,
    "3": Priority.HIGH,
    "CRITICAL": Priority.CRITICAL,
    "C": Priority.CRITICAL,
    "4": Priority.CRITICAL,
}


class Status(str, Enum):
    """Lifecycle status of a task."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"
    CANCELLED = "cancelled"

    @property
    def display_name(self) -> str:
        return _STATUS_LABELS[self]

    def allowed_transitions(self) -> frozenset["Status"]:
        """Return the statuses this status may move to."""
        return _TRANSITIONS[self]

    def can_transition_to(self, target: "Status") -> bool:
        """Check the transition table. Self-transitions are never allowed."""
        return target in self.allowed_transitions()

    @classmethod
    def parse(cls, text: str) -> "Status":
        """Parse a status from user input.

        Case-insensitive. Spaces, underscores and hyphens are
        interchangeable, so "in progress", "IN_PROGRESS" and
        "in-progress" all parse.

        Raises:
            InvalidInputError: If the input matches no status.
        """
        token = text.strip().upper().replace(" ", "_").replace("-", "_")
        status = _STATUS_ALIASES.get(token)
        if status is None:
            raise InvalidInputError(f"Invalid status: {text}")
        return status


_STATUS_LABELS = {
    Status.TODO: "To Do",
    Status.IN_PROGRESS: "In Progress",
    Status.DONE: "Done",
    Status.CANCELLED: "Cancelled",
}

_TRANSITIONS: dict[Status, frozenset[Status]] = {
    Status.TODO: frozenset({Status.IN_PROGRESS, Status.CANCELLED}),
    Status.IN_PROGRESS: frozenset({Status.DONE, Status.TODO, Status.CANCELLED}),
    # Reopening
    Status.DONE: frozenset({Status.TODO}),
    Status.CANCELLED: frozenset({Status.TODO}),
}

_STATUS_ALIASES = {
    "TODO": Status.TODO,
    "TO_DO": Status.TODO,
    "PENDING": Status.TODO,
    "1": Status.TODO,
    "IN_PROGRESS": Status.IN_PROGRESS,
    "INPROGRESS": Status.IN_PROGRESS,
    "PROGRESS": Status.IN_PROGRESS,
    "2": Status.IN_PROGRESS,
    "DONE": Status.DONE,
    "COMPLETED": Status.DONE,
    "COMPLETE": Status.DONE,
    "3": Status.DONE,
    "CANCELLED": Status.CANCELLED,
    "CANCELED": Status.CANCELLED,
    "4": Status.CANCELLED,
}


class TaskChanges(BaseModel):
    """A batch of field changes applied to a task in one update.

    Only the fields passed explicitly are applied. An explicit None clears
    ``description``, ``due_date`` or ``category_id``; it is ignored for the
    other fields.
    """

    model_config = {"frozen": True}

    status: Status | None = None
    priority: Priority | None = None
    title: str | None = None
    description: str | None = None
    due_date: datetime | None = None
    category_id: str | None = None


# Fields an explicit None clears
_CLEARABLE_FIELDS = frozenset({"description", "due_date", "category_id"})


class Task(BaseModel):
    """A tracked task.

    Tasks are immutable values. The ``with_*`` methods return a new Task
    with ``updated_at`` bumped; the receiver is never modified. Every
    replacement is re-validated, so a blank title can never be introduced
    by an update.
    """

    model_config = {"frozen": True}

    id: str = Field(default_factory=lambda: str(uuid4()))
    title: str
    description: str = ""
    priority: Priority = Priority.MEDIUM
    status: Status = Status.TODO
    category_id: str | None = None
    due_date: datetime | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Task title cannot be blank")
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _description_default(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("due_date", "created_at", "updated_at")
    @classmethod
    def _normalise_timestamp(cls, value: datetime | None) -> datetime | None:
        return None if value is None else to_utc(value)

    @classmethod
    def create(
        cls,
        title: str,
        description: str | None = "",
        priority: Priority | None = None,
        category_id: str | None = None,
        due_date: datetime | None = None,
        now: datetime | None = None,
    ) -> "Task":
        """Build a new task with a generated id and default fields.

        ``created_at`` and ``updated_at`` come from the same clock reading.

        Raises:
            pydantic.ValidationError: If the title is blank.
        """
        now = now or utc_now()
        return cls(
            title=title,
            description=description,
            priority=priority or Priority.MEDIUM,
            category_id=category_id,
            due_date=due_date,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------------
    # Due-date predicates
    # -------------------------------------------------------------------------

    def is_overdue(self, now: datetime | None = None) -> bool:
        """True if the due date has passed and the task is not done."""
        if self.due_date is None or self.status == Status.DONE:
            return False
        now = now or utc_now()
        return self.due_date < now

    def is_due_soon(self, now: datetime | None = None) -> bool:
        """True if the task falls due within the next 24 hours.

        Overdue tasks are not "due soon". Both checks use the same ``now``
        so the two predicates can never hold together.
        """
        if self.due_date is None or self.status == Status.DONE:
            return False
        now = now or utc_now()
        return now + DUE_SOON_WINDOW > self.due_date and not self.is_overdue(now)

    # -------------------------------------------------------------------------
    # Functional updates
    # -------------------------------------------------------------------------

    def _replace(self, now: datetime | None = None, **changes: Any) -> "Task":
        return Task(**{**self.model_dump(), **changes, "updated_at": now or utc_now()})

    def with_status(self, status: Status, now: datetime | None = None) -> "Task":
        """Return a copy with a new status.

        Raises:
            IllegalTransitionError: If the transition table forbids the move.
        """
        if not self.status.can_transition_to(status):
            raise IllegalTransitionError(self.status, status)
        return self._replace(now, status=status)

    def with_priority(self, priority: Priority, now: datetime | None = None) -> "Task":
        return self._replace(now, priority=priority)

    def with_title(self, title: str, now: datetime | None = None) -> "Task":
        return self._replace(now, title=title)

    def with_description(self, description: str | None, now: datetime | None = None) -> "Task":
        return self._replace(now, description=description)

    def with_due_date(self, due_date: datetime | None, now: datetime | None = None) -> "Task":
        return self._replace(now, due_date=due_date)

    def with_category(self, category_id: str | None, now: datetime | None = None) -> "Task":
        return self._replace(now, category_id=category_id)

    def with_changes(self, changes: TaskChanges, now: datetime | None = None) -> "Task":
        """Return a copy with every change in ``changes`` applied at once.

        Raises:
            IllegalTransitionError: If a status change is not allowed.
            pydantic.ValidationError: If the combined result is invalid.
        """
        updates = {
            name: value
            for name, value in changes.model_dump(include=changes.model_fields_set).items()
            if value is not None or name in _CLEARABLE_FIELDS
        }
        status = updates.get("status")
        if status is not None and not self.status.can_transition_to(status):
            raise IllegalTransitionError(self.status, status)
        return self._replace(now, **updates)


class TaskStatistics(BaseModel):
    """Counts over all tasks for the stats display."""

    total: int = 0
    todo: int = 0
    in_progress: int = 0
    done: int = 0
    cancelled: int = 0
    overdue: int = 0

    @property
    def completion_rate(self) -> float:
        """Calculate completion percentage."""
        if self.total == 0:
            return 0.0
        return round(self.done / self.total * 100, 1)
