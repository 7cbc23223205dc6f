"""Result type for explicit error handling in services and repositories.

Operations that can fail for expected reasons (a missing task, a duplicate
category name, an unreadable data file) return either ``Ok(value)`` or
``Err(error)`` instead of raising. Callers branch with ``isinstance``.

Example usage:
    >>> result = service.get_task("3f2a...")
    >>> if isinstance(result, Err):
    ...     print(f"Error: {result.error}")
    ... else:
    ...     print(result.value.title)
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result.

    Attributes:
        value: The success value of type T.
    """

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result.

    Attributes:
        error: The error value of type E.
    """

    error: E


# Using Union here as TypeVar aliases don't work with | syntax at runtime
Result = Union[Ok[T], Err[E]]  # noqa: UP007


def map_result(result: Ok[T] | Err[E], fn: Callable[[T], U]) -> Ok[U] | Err[E]:
    """Apply fn to the value of an Ok result, passing an Err through.

    Args:
        result: The result to transform.
        fn: Function applied to the Ok value.

    Returns:
        Ok(fn(value)), or the original Err.
    """
    if isinstance(result, Ok):
        return Ok(fn(result.value))
    return result


def flat_map(result: Ok[T] | Err[E], fn: Callable[[T], Ok[U] | Err[E]]) -> Ok[U] | Err[E]:
    """Chain a Result-returning step onto an Ok result.

    Used by the services for load-then-save sequences: the save only runs
    if the load succeeded.

    Args:
        result: The result to chain from.
        fn: Function taking the Ok value and returning a new Result.

    Returns:
        The Result from fn, or the original Err.
    """
    if isinstance(result, Ok):
        return fn(result.value)
    return result
