"""Category domain package.

This package contains the category model and the default category set.
"""

from taskman.domain.category.models import (
    DEFAULT_CATEGORIES,
    DEFAULT_COLOR,
    Category,
    default_categories,
)

__all__ = [
    "Category",
    "DEFAULT_CATEGORIES",
    "DEFAULT_COLOR",
    "default_categories",
]
