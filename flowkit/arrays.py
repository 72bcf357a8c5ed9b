"""Functions that create, inspect and change arrays."""

from __future__ import annotations

import logging
from typing import Any

from .coerce import CoercionError, to_int

_logger = logging.getLogger(__name__)


def _is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _position(value: Any, function_name: str) -> int:
    try:
        return to_int(value)
    except CoercionError:
        raise ValueError(
            f"array {function_name} function second parameter must be integer"
        ) from None


def append(items: Any, item: Any) -> Any:
    """Return ``items`` with ``item`` added at the end; a None item changes nothing."""
    _logger.debug("Start array append function with parameters %r and %r", items, item)
    if item is None:
        return items
    if items is None:
        return [item]
    if _is_array(items):
        result = [*items, item]
        _logger.debug("array append function done, final array %r", result)
        return result
    return items


def contains(array: Any, item: Any) -> bool:
    """Report whether ``array`` holds an element of the same type equal to ``item``."""
    _logger.debug("Looking for %r in %r", item, array)
    if array is None or item is None or not _is_array(array):
        return False
    return any(type(element) is type(item) and element == item for element in array)


def count(items: Any) -> int:
    """Return the number of elements in ``items``; None counts as empty."""
    _logger.debug("Start array count function with parameters %r", items)
    if items is None:
        return 0
    if _is_array(items):
        return len(items)
    raise ValueError("unable to count un-array object")


def create(*args: Any) -> list[Any] | None:
    """Return a new array of the arguments, or None when there are none."""
    _logger.debug("Start array function with parameters %r", args)
    if not args:
        return None
    return list(args)


def delete(items: Any, index: Any) -> list[Any]:
    """Return ``items`` without the element at ``index``."""
    position = _position(index, "delete")
    _logger.debug("Start array delete function with parameters %r and %r", items, position)
    if items is None:
        raise IndexError(f"index out of bounds, index [{position}] but array empty")
    if not _is_array(items):
        raise ValueError("unable to use array.delete on un-array object")
    if not 0 <= position < len(items):
        raise IndexError(
            f"index out of bounds, index [{position}] but array length [{len(items)}]"
        )
    return [*items[:position], *items[position + 1:]]


def get(items: Any, index: Any) -> Any:
    """Return the element of ``items`` at ``index``."""
    position = _position(index, "get")
    _logger.debug("Start array get function with parameters %r and %r", items, position)
    if items is None:
        raise IndexError(f"index out of bounds, index [{position}] but array empty")
    if not _is_array(items):
        raise ValueError("unable to use array.get on un-array object")
    if not 0 <= position < len(items):
        raise IndexError(
            f"index out of bounds, index [{position}] but array length [{len(items)}]"
        )
    return items[position]