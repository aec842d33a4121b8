"""Sequence helpers: chunking, flattening, de-duplication, compaction.

All functions accept a ``list`` or ``tuple`` and return a new ``list``.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence
from typing import Any, TypeVar

from datype.domain.errors import InvalidArgumentError, InvalidValueError
from datype.domain.values import is_array

T = TypeVar("T")


def _require_sequence(items: Any) -> Sequence[Any]:
    if not is_array(items):
        msg = f"Expected a list or tuple, got {type(items).__name__}"
        raise InvalidArgumentError(msg)
    return items


def _require_callable(fn: Any) -> None:
    if not callable(fn):
        msg = "Expected a callable"
        raise InvalidArgumentError(msg)


def chunk(items: Sequence[T], size: int) -> list[list[T]]:
    """Split *items* into lists of *size* (the last one may be shorter).

    Examples:
        >>> chunk([1, 2, 3, 4, 5], 2)
        [[1, 2], [3, 4], [5]]
    """
    seq = _require_sequence(items)
    if isinstance(size, bool) or not isinstance(size, int):
        msg = "Chunk size must be an integer"
        raise InvalidArgumentError(msg)
    if size <= 0:
        msg = f"Chunk size must be positive, got {size}"
        raise InvalidValueError(msg)
    return [list(seq[start : start + size]) for start in range(0, len(seq), size)]


def flatten(items: Sequence[Any]) -> list[Any]:
    """Flatten one level of nested lists/tuples."""
    return flatten_depth(items, 1)


def flatten_deep(items: Sequence[Any]) -> list[Any]:
    """Flatten nested lists/tuples all the way down."""
    return flatten_depth(items, math.inf)


def flatten_depth(items: Sequence[Any], depth: float = 1) -> list[Any]:
    """Flatten nested lists/tuples up to *depth* levels (``math.inf`` for all).

    Examples:
        >>> flatten_depth([1, [2, [3, [4]]]], 2)
        [1, 2, 3, [4]]
    """
    seq = _require_sequence(items)
    if isinstance(depth, bool) or not isinstance(depth, (int, float)) or math.isnan(depth):
        msg = "Depth must be a number"
        raise InvalidArgumentError(msg)
    if depth < 0:
        msg = f"Depth must be non-negative, got {depth}"
        raise InvalidValueError(msg)

    result: list[Any] = []

    def _walk(level: Iterable[Any], remaining: float) -> None:
        for item in level:
            if is_array(item) and remaining > 0:
                _walk(item, remaining - 1)
            else:
                result.append(item)

    _walk(seq, depth)
    return result


def _first_by_key(items: Sequence[T], key: Callable[[T], Any]) -> list[T]:
    """Keep the first item for each distinct key; unhashable keys compare with ``==``."""
    seen_hashable: set[Any] = set()
    seen_other: list[Any] = []
    result: list[T] = []
    for item in items:
        marker = key(item)
        try:
            if marker in seen_hashable:
                continue
            seen_hashable.add(marker)
        except TypeError:
            if marker in seen_other:
                continue
            seen_other.append(marker)
        result.append(item)
    return result


def uniq(items: Sequence[T]) -> list[T]:
    """Remove duplicates, keeping first occurrences in order.

    Examples:
        >>> uniq([3, 1, 3, 2, 1])
        [3, 1, 2]
    """
    return _first_by_key(_require_sequence(items), lambda item: item)


def uniq_by(items: Sequence[T], key: Callable[[T], Any]) -> list[T]:
    """Remove items whose ``key(item)`` was already seen."""
    seq = _require_sequence(items)
    _require_callable(key)
    return _first_by_key(seq, key)


def uniq_by_property(items: Sequence[Any], name: str) -> list[Any]:
    """Remove items whose *name* item/attribute value was already seen."""

    def _prop(item: Any) -> Any:
        if isinstance(item, dict):
            return item.get(name)
        return getattr(item, name, None)

    return uniq_by(items, _prop)


def compact(items: Sequence[T]) -> list[T]:
    """Drop falsy items (``None``, ``0``, ``""``, ``False``, empty containers)."""
    return [item for item in _require_sequence(items) if item]


def compact_by(items: Sequence[T], values: Iterable[Any]) -> list[T]:
    """Drop every item equal to one of *values*."""
    seq = _require_sequence(items)
    hashable: set[Any] = set()
    unhashable: list[Any] = []
    for value in _require_sequence(values):
        try:
            hashable.add(value)
        except TypeError:
            unhashable.append(value)

    def _dropped(item: Any) -> bool:
        try:
            if item in hashable:
                return True
        except TypeError:
            pass
        return item in unhashable

    return [item for item in seq if not _dropped(item)]


def compact_with(items: Sequence[T], predicate: Callable[[T], bool]) -> list[T]:
    """Drop every item for which ``predicate(item)`` is true."""
    seq = _require_sequence(items)
    _require_callable(predicate)
    return [item for item in seq if not predicate(item)]
