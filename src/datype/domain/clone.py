"""Deep clone with cycle preservation.

Each top-level call owns a memo mapping ``id(original) -> clone``.
Mutable containers are registered in the memo *before* their children are
visited, so a container that reaches itself is cloned exactly once and the
clone points at itself. Immutable containers (tuples, frozensets, read-only
mappings) can only be built after their children; when a cycle through a
mutable child has already produced their clone, that clone is reused.

INVARIANT: the memo never outlives the call, and originals are kept alive
for its duration so ``id()`` values cannot be recycled mid-traversal.
"""

from __future__ import annotations

import copy
import logging
import re
from collections import ChainMap
from collections.abc import MutableMapping, MutableSet
from typing import Any, TypeVar, assert_never

from datype.domain.values import Kind, kind_of

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Memo:
    """Per-call original → clone table."""

    __slots__ = ("_clones", "_keepalive")

    def __init__(self) -> None:
        self._clones: dict[int, Any] = {}
        self._keepalive: list[Any] = []

    def __contains__(self, original: Any) -> bool:
        return id(original) in self._clones

    def get(self, original: Any) -> Any:
        return self._clones[id(original)]

    def remember(self, original: Any, clone: Any) -> Any:
        self._clones[id(original)] = clone
        self._keepalive.append(original)
        return clone


def clone_deep(value: T) -> T:
    """Return a fully independent structural copy of *value*.

    Callables, opaque objects and immutable primitives are returned as-is.
    Cycles in the input are reproduced in the output.

    Example:
        >>> original = {"name": "Ada", "tags": ["math"], "address": {"city": "London"}}
        >>> cloned = clone_deep(original)
        >>> cloned["address"]["city"] = "Paris"
        >>> original["address"]["city"]
        'London'
    """
    result: T = _clone(value, _Memo())
    return result


def _clone(value: Any, memo: _Memo) -> Any:
    kind = kind_of(value)
    match kind:
        case (
            Kind.NULL
            | Kind.ABSENT
            | Kind.BOOLEAN
            | Kind.NUMBER
            | Kind.TEXT
            | Kind.CALLABLE
            | Kind.OPAQUE
        ):
            return value
        case Kind.BYTES:
            return bytearray(value) if isinstance(value, bytearray) else value
        case Kind.INSTANT:
            return value.replace()
        case Kind.PATTERN:
            return re.compile(value.pattern, value.flags)
        case Kind.SEQUENCE:
            if value in memo:
                return memo.get(value)
            if isinstance(value, list):
                return _clone_list(value, memo)
            return _clone_tuple(value, memo)
        case Kind.MAPPING:
            if value in memo:
                return memo.get(value)
            result: dict[Any, Any] = memo.remember(value, {})
            for key, item in value.items():
                result[_clone(key, memo)] = _clone(item, memo)
            return result
        case Kind.UNIQUE:
            if value in memo:
                return memo.get(value)
            return _clone_unique(value, memo)
        case Kind.ASSOCIATION:
            if value in memo:
                return memo.get(value)
            return _clone_association(value, memo)
        case Kind.RECORD:
            if value in memo:
                return memo.get(value)
            return _clone_record(value, memo)
        case _:
            assert_never(kind)


def _empty_like(value: Any) -> Any:
    """Shallow-copy a mutable container and empty it, keeping its concrete type."""
    shell = copy.copy(value)
    shell.clear()
    return shell


def _clone_list(value: list[Any], memo: _Memo) -> list[Any]:
    result: list[Any] = memo.remember(value, [] if type(value) is list else _empty_like(value))
    result.extend(_clone(item, memo) for item in value)
    return result


def _clone_tuple(value: tuple[Any, ...], memo: _Memo) -> tuple[Any, ...]:
    items = [_clone(item, memo) for item in value]
    # A cycle through a mutable child may already have built this tuple.
    if value in memo:
        existing: tuple[Any, ...] = memo.get(value)
        return existing
    cls = type(value)
    if cls is tuple:
        result = tuple(items)
    elif hasattr(cls, "_make"):
        result = cls._make(items)
    else:
        result = cls(items)
    memo.remember(value, result)
    return result


def _clone_unique(value: set[Any] | frozenset[Any], memo: _Memo) -> set[Any] | frozenset[Any]:
    if isinstance(value, MutableSet):
        result = memo.remember(value, set() if type(value) is set else _empty_like(value))
        for item in value:
            result.add(_clone(item, memo))
        return result
    items = [_clone(item, memo) for item in value]
    if value in memo:
        existing: frozenset[Any] = memo.get(value)
        return existing
    return memo.remember(value, type(value)(items))


def _clone_association(value: Any, memo: _Memo) -> Any:
    if isinstance(value, ChainMap):
        result = memo.remember(value, ChainMap())
        result.maps = [_clone(layer, memo) for layer in value.maps]
        return result
    if isinstance(value, MutableMapping):
        result = memo.remember(value, _empty_like(value))
        for key, item in value.items():
            result[_clone(key, memo)] = _clone(item, memo)
        return result
    items = {_clone(key, memo): _clone(item, memo) for key, item in value.items()}
    if value in memo:
        return memo.get(value)
    try:
        rebuilt = type(value)(items)
    except TypeError:
        logger.debug("Cannot rebuild %s from items; cloning as dict", type(value).__name__)
        rebuilt = items
    return memo.remember(value, rebuilt)


def _clone_record(value: Any, memo: _Memo) -> Any:
    try:
        shell = copy.copy(value)
    except (TypeError, copy.Error):
        logger.debug("Cannot copy %s; returning it by reference", type(value).__name__)
        return memo.remember(value, value)
    if shell is value:
        return memo.remember(value, value)
    memo.remember(value, shell)
    attrs = vars(shell)
    for name, attr in list(attrs.items()):
        attrs[name] = _clone(attr, memo)
    return shell
