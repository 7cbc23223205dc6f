"""Category domain models.

This module contains the category value object and the default set
seeded on first run. These are pure data structures with no I/O.
"""

import re
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field, ValidationInfo, field_validator

DEFAULT_COLOR = "#808080"

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")

# Validation context for user-supplied colours
_CHECK_COLOR = {"check_color": True}

# (name, description, color)
DEFAULT_CATEGORIES: tuple[tuple[str, str, str], ...] = (
    ("Work", "Work-related tasks", "#3498db"),
    ("Personal", "Personal tasks", "#2ecc71"),
    ("Shopping", "Shopping list items", "#e74c3c"),
    ("Health", "Health and fitness", "#9b59b6"),
    ("Learning", "Study and learning", "#f39c12"),
)


class Category(BaseModel):
    """A task category.

    Names are unique across categories ignoring case; the category
    service enforces that, not the model. Tasks refer to categories by
    id only and nothing stops a category from being deleted while tasks
    still point at it.
    """

    model_config = {"frozen": True}

    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    description: str = ""
    color: str = DEFAULT_COLOR

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Category name cannot be blank")
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _description_default(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("color", mode="before")
    @classmethod
    def _color_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_COLOR
        if isinstance(value, str):
            value = value.strip()
            # Stored colours load as-is; only new input must be a hex code
            if info.context and info.context.get("check_color") and not _HEX_COLOR.match(value):
                raise ValueError(f"Color must be a hex code like #3498db, got '{value}'")
        return value

    @classmethod
    def create(
        cls,
        name: str,
        description: str | None = "",
        color: str | None = None,
    ) -> "Category":
        """Build a new category with a generated id.

        Raises:
            pydantic.ValidationError: If the name is blank or the colour is
                not a hex code.
        """
        return cls.model_validate(
            {"name": name, "description": description, "color": color},
            context=_CHECK_COLOR,
        )

    def _replace(self, **changes: Any) -> "Category":
        return Category(**{**self.model_dump(), **changes})

    def with_name(self, name: str) -> "Category":
        return self._replace(name=name)

    def with_description(self, description: str | None) -> "Category":
        return self._replace(description=description)

    def with_color(self, color: str | None) -> "Category":
        return Category.model_validate(
            {**self.model_dump(), "color": color}, context=_CHECK_COLOR
        )

    def has_name(self, name: str) -> bool:
        """Case-insensitive name comparison."""
        return self.name.casefold() == name.strip().casefold()


def default_categories() -> list[Category]:
    """Build fresh Category values for the default set."""
    return [Category.create(name, description, color) for name, description, color in DEFAULT_CATEGORIES]
