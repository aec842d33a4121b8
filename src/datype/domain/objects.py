"""Dictionary helpers: pick/omit, dotted-path access, key and value mapping."""

from __future__ import annotations

import copy
import re
from collections.abc import Callable, Hashable, Iterable, Mapping
from typing import Any

from datype.domain.errors import InvalidArgumentError
from datype.domain.values import MISSING, Kind, is_array, kind_of, own_items

_INDEX_RE = re.compile(r"^[0-9]+$")


def _require_keys(keys: Any) -> list[Hashable]:
    if isinstance(keys, (str, bytes)) or not isinstance(keys, Iterable):
        msg = "Keys must be a list, tuple or set of keys"
        raise InvalidArgumentError(msg)
    return list(keys)


def pick(obj: Any, keys: Iterable[Hashable]) -> dict[Any, Any]:
    """Return a new dict holding only *keys* that exist on *obj*.

    Examples:
        >>> pick({"a": 1, "b": 2, "c": 3}, ["a", "c", "z"])
        {'a': 1, 'c': 3}
    """
    wanted = _require_keys(keys)
    if isinstance(obj, Mapping):
        return {key: obj[key] for key in wanted if key in obj}
    if kind_of(obj) is Kind.RECORD:
        return {key: getattr(obj, key) for key in wanted if isinstance(key, str) and hasattr(obj, key)}
    msg = f"Expected a mapping or object, got {type(obj).__name__}"
    raise InvalidArgumentError(msg)


def omit(obj: Any, keys: Iterable[Hashable]) -> dict[Any, Any]:
    """Return a new dict of *obj*'s own items except *keys*.

    Examples:
        >>> omit({"a": 1, "b": 2, "c": 3}, ["b"])
        {'a': 1, 'c': 3}
    """
    dropped = frozenset(_require_keys(keys))
    if not isinstance(obj, Mapping) and kind_of(obj) is not Kind.RECORD:
        msg = f"Expected a mapping or object, got {type(obj).__name__}"
        raise InvalidArgumentError(msg)
    return {key: value for key, value in own_items(obj) if key not in dropped}


def _is_index(segment: str) -> bool:
    return _INDEX_RE.match(segment) is not None


def _read(container: Any, segment: str) -> Any:
    if is_array(container):
        if not _is_index(segment):
            return MISSING
        index = int(segment)
        return container[index] if index < len(container) else MISSING
    if isinstance(container, Mapping):
        if segment in container:
            return container[segment]
        if _is_index(segment):
            return container.get(int(segment), MISSING)
        return MISSING
    return getattr(container, segment, MISSING)


def get(obj: Any, path: str, default: Any = None) -> Any:
    """Read a value by dotted *path*; numeric segments index into lists.

    Returns *default* when any step is missing or passes through ``None``.

    Examples:
        >>> get({"a": {"b": [10, 20]}}, "a.b.1")
        20
        >>> get({"a": None}, "a.b", "fallback")
        'fallback'
    """
    if obj is None or obj is MISSING or not isinstance(path, str) or not path:
        return default
    current = obj
    for segment in path.split("."):
        if current is None or current is MISSING:
            return default
        current = _read(current, segment)
    return default if current is MISSING else current


def _shallow_copy(value: Any) -> Any:
    if is_array(value):
        return list(value)
    if isinstance(value, Mapping):
        return dict(value)
    if kind_of(value) is Kind.RECORD:
        return copy.copy(value)
    return {}


def _write(container: Any, segment: str, value: Any) -> None:
    if isinstance(container, list):
        if not _is_index(segment):
            msg = f"Cannot set non-numeric key {segment!r} on a list"
            raise InvalidArgumentError(msg)
        index = int(segment)
        if index >= len(container):
            container.extend([None] * (index - len(container) + 1))
        container[index] = value
    elif isinstance(container, dict):
        container[segment] = value
    else:
        setattr(container, segment, value)


def set_in(obj: Any, path: str, value: Any) -> Any:
    """Return a copy of *obj* with *value* stored at dotted *path*.

    Every container along the path is copied; the input is left untouched.
    Missing intermediate steps are created as lists when the next segment is
    numeric, dicts otherwise. Lists are padded with ``None`` when indexed
    past their end.

    Examples:
        >>> set_in({"a": 1}, "b.c", 2)
        {'a': 1, 'b': {'c': 2}}
        >>> set_in({}, "items.1", "x")
        {'items': [None, 'x']}
    """
    if obj is None or obj is MISSING:
        msg = "Cannot set a path on None"
        raise InvalidArgumentError(msg)
    if not isinstance(path, str) or not path:
        msg = "Path must be a non-empty string"
        raise InvalidArgumentError(msg)

    segments = path.split(".")
    root = _shallow_copy(obj)
    current = root
    for segment, next_segment in zip(segments, segments[1:]):
        child = _read(current, segment)
        if child is None or child is MISSING:
            child = [] if _is_index(next_segment) else {}
        else:
            child = _shallow_copy(child)
        _write(current, segment, child)
        current = child
    _write(current, segments[-1], value)
    return root


def _require_mapping(obj: Any) -> Mapping[Any, Any]:
    if not isinstance(obj, Mapping):
        msg = f"Expected a mapping, got {type(obj).__name__}"
        raise InvalidArgumentError(msg)
    return obj


def _require_callable(fn: Any, name: str) -> None:
    if not callable(fn):
        msg = f"Expected {name} to be callable"
        raise InvalidArgumentError(msg)


def map_values(obj: Mapping[Any, Any], fn: Callable[[Any], Any]) -> dict[Any, Any]:
    """Return a dict with the same keys and ``fn(value)`` as values."""
    mapping = _require_mapping(obj)
    _require_callable(fn, "fn")
    return {key: fn(value) for key, value in mapping.items()}


def map_keys(obj: Mapping[Any, Any], fn: Callable[[Any], Hashable]) -> dict[Any, Any]:
    """Return a dict with ``fn(key)`` as keys; on collisions the last key wins."""
    mapping = _require_mapping(obj)
    _require_callable(fn, "fn")
    return {fn(key): value for key, value in mapping.items()}


class KeyTransformers:
    """Ready-made key functions for :func:`map_keys`."""

    @staticmethod
    def to_camel_case(key: str) -> str:
        return re.sub(r"_([a-z])", lambda m: m.group(1).upper(), key)

    @staticmethod
    def to_snake_case(key: str) -> str:
        return re.sub(r"[A-Z]", lambda m: f"_{m.group(0).lower()}", key)

    @staticmethod
    def to_kebab_case(key: str) -> str:
        return re.sub(r"[A-Z]", lambda m: f"-{m.group(0).lower()}", key)

    @staticmethod
    def to_lower_case(key: str) -> str:
        return key.lower()

    @staticmethod
    def to_upper_case(key: str) -> str:
        return key.upper()

    @staticmethod
    def add_prefix(prefix: str) -> Callable[[str], str]:
        return lambda key: f"{prefix}{key}"

    @staticmethod
    def add_suffix(suffix: str) -> Callable[[str], str]:
        return lambda key: f"{key}{suffix}"

    @staticmethod
    def normalize(key: str) -> str:
        """Lowercase, turn dashes/spaces/other symbols into single underscores."""
        text = key.lower()
        text = re.sub(r"[-\s]+", "_", text)
        text = re.sub(r"[^a-z0-9_]", "_", text)
        text = re.sub(r"_+", "_", text)
        return text.strip("_")


key_transformers = KeyTransformers()


def group_by(items: Iterable[Any], key: Callable[[Any], Any] | str) -> dict[str, list[Any]]:
    """Group *items* by ``str(key(item))`` (or by an item key/attribute name).

    Examples:
        >>> group_by([1.3, 2.1, 2.4], int)
        {'1': [1.3], '2': [2.1, 2.4]}
        >>> group_by([{"t": "a"}, {"t": "b"}, {"t": "a"}], "t")
        {'a': [{'t': 'a'}, {'t': 'a'}], 'b': [{'t': 'b'}]}
    """
    if not is_array(items):
        msg = f"Expected a list or tuple, got {type(items).__name__}"
        raise InvalidArgumentError(msg)
    if not callable(key) and not isinstance(key, (str, int)):
        msg = "Expected key to be a callable or a property name"
        raise InvalidArgumentError(msg)

    groups: dict[str, list[Any]] = {}
    for item in items:
        if callable(key):
            group = key(item)
        elif isinstance(item, Mapping):
            group = item.get(key)
        else:
            group = getattr(item, str(key), None)
        groups.setdefault(str(group), []).append(item)
    return groups


def is_empty(value: Any) -> bool:
    """True for ``None``/``MISSING`` and for empty strings, sequences, sets and mappings.

    Numbers, booleans, dates, patterns, callables and objects are never empty.
    """
    match kind_of(value):
        case Kind.NULL | Kind.ABSENT:
            return True
        case Kind.TEXT | Kind.BYTES | Kind.SEQUENCE | Kind.MAPPING | Kind.UNIQUE | Kind.ASSOCIATION:
            return len(value) == 0
        case _:
            return False
