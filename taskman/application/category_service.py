"""Category application service.

Manages categories and enforces case-insensitive name uniqueness.
"""

import logging
from collections.abc import Callable

from pydantic import ValidationError

from taskman.domain.category import Category
from taskman.domain.repositories import CategoryRepository
from taskman.domain.shared import (
    CategoryNotFoundError,
    DuplicateNameError,
    Err,
    InvalidInputError,
    Ok,
    Result,
    TrackerError,
    flat_map,
)

logger = logging.getLogger(__name__)


class CategoryService:
    """Create, rename, recolor, read and delete categories."""

    def __init__(self, repository: CategoryRepository) -> None:
        """Initialize the service.

        Args:
            repository: Category persistence to read from and write to.
        """
        self._repository = repository

    def _check_name_free(
        self, name: str, allow_id: str | None = None
    ) -> Result[None, TrackerError]:
        """Err(DuplicateNameError) if another category already uses name."""
        result = self._repository.find_by_name(name)
        if isinstance(result, Err):
            return result
        existing = result.value
        if existing is not None and existing.id != allow_id:
            return Err(DuplicateNameError(name.strip()))
        return Ok(None)

    def create_category(
        self,
        name: str,
        description: str | None = "",
        color: str | None = None,
    ) -> Result[Category, TrackerError]:
        """Create and persist a new category.

        Returns:
            Ok(Category), Err(DuplicateNameError) if the name is taken in
            any letter case, or Err(InvalidInputError) for a blank name or
            malformed color.
        """
        try:
            category = Category.create(name, description, color)
        except ValidationError as e:
            return Err(InvalidInputError.from_validation_error(e))

        check = self._check_name_free(category.name)
        if isinstance(check, Err):
            return check

        result = self._repository.save(category)
        if isinstance(result, Ok):
            logger.debug(f"Created category {category.id} ({category.name})")
        return result

    def _update(
        self,
        category_id: str,
        change: Callable[[Category], Category],
    ) -> Result[Category, TrackerError]:
        def apply(category: Category | None) -> Result[Category, TrackerError]:
            if category is None:
                return Err(CategoryNotFoundError(category_id))
            try:
                updated = change(category)
            except ValidationError as e:
                return Err(InvalidInputError.from_validation_error(e))
            saved = self._repository.save(updated)
            if isinstance(saved, Ok):
                logger.debug(f"Updated category {category_id}")
            return saved

        return flat_map(self._repository.find_by_id(category_id), apply)

    def update_category_name(self, category_id: str, name: str) -> Result[Category, TrackerError]:
        """Rename a category.

        Renaming a category to its own name (in any case) is allowed.
        A name used by a different category is rejected.
        """
        found = self._repository.find_by_id(category_id)
        if isinstance(found, Err):
            return found
        if found.value is None:
            return Err(CategoryNotFoundError(category_id))

        check = self._check_name_free(name, allow_id=category_id)
        if isinstance(check, Err):
            return check
        return self._update(category_id, lambda c: c.with_name(name))

    def update_category_description(
        self, category_id: str, description: str | None
    ) -> Result[Category, TrackerError]:
        return self._update(category_id, lambda c: c.with_description(description))

    def update_category_color(
        self, category_id: str, color: str | None
    ) -> Result[Category, TrackerError]:
        return self._update(category_id, lambda c: c.with_color(color))

    def update_category_details(
        self,
        category_id: str,
        description: str | None = None,
        color: str | None = None,
    ) -> Result[Category, TrackerError]:
        """Change the description and/or colour with a single save.

        A None argument leaves that field as it is. If either value is
        rejected, nothing is stored.
        """

        def change(category: Category) -> Category:
            if description is not None:
                category = category.with_description(description)
            if color is not None:
                category = category.with_color(color)
            return category

        return self._update(category_id, change)

    def get_category(self, category_id: str) -> Result[Category, TrackerError]:
        def require(category: Category | None) -> Result[Category, TrackerError]:
            if category is None:
                return Err(CategoryNotFoundError(category_id))
            return Ok(category)

        return flat_map(self._repository.find_by_id(category_id), require)

    def get_category_by_name(self, name: str) -> Result[Category, TrackerError]:
        """Look up a category by name, ignoring case."""

        def require(category: Category | None) -> Result[Category, TrackerError]:
            if category is None:
                return Err(CategoryNotFoundError(name))
            return Ok(category)

        return flat_map(self._repository.find_by_name(name), require)

    def get_all_categories(self) -> Result[list[Category], TrackerError]:
        return self._repository.find_all()

    def delete_category(self, category_id: str) -> Result[bool, TrackerError]:
        """Delete a category. Tasks referring to it are left as they are."""
        result = self._repository.delete_by_id(category_id)
        if isinstance(result, Ok) and result.value:
            logger.debug(f"Deleted category {category_id}")
        return result
