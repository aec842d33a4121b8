"""Value model: the closed catalog of kinds every deep operation dispatches on.

Clone, equality and merge never inspect types ad hoc: they classify a value
once with :func:`kind_of` and match on the resulting :class:`Kind`.

INVARIANT: ``kind_of`` is total. Anything outside the catalog is either a
RECORD (it has an instance ``__dict__``) or OPAQUE.
"""

from __future__ import annotations

import datetime as _dt
import numbers
import re
from collections.abc import Iterable, Mapping
from enum import Enum, StrEnum
from typing import Any, Final, TypeGuard


class Kind(StrEnum):
    """Runtime category of a value."""

    NULL = "null"
    ABSENT = "absent"
    BOOLEAN = "boolean"
    NUMBER = "number"
    TEXT = "text"
    BYTES = "bytes"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    INSTANT = "instant"
    PATTERN = "pattern"
    UNIQUE = "unique"
    ASSOCIATION = "association"
    CALLABLE = "callable"
    RECORD = "record"
    OPAQUE = "opaque"


PRIMITIVE_KINDS: Final[frozenset[Kind]] = frozenset(
    {Kind.NULL, Kind.ABSENT, Kind.BOOLEAN, Kind.NUMBER, Kind.TEXT, Kind.BYTES}
)

CONTAINER_KINDS: Final[frozenset[Kind]] = frozenset(
    {Kind.SEQUENCE, Kind.MAPPING, Kind.UNIQUE, Kind.ASSOCIATION, Kind.RECORD}
)


class _Missing:
    """Type of the :data:`MISSING` sentinel (the "absent" value)."""

    _instance: _Missing | None = None
    __slots__ = ()

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "MISSING"

    def __copy__(self) -> _Missing:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Missing:
        return self


MISSING: Final = _Missing()
"""An absent value. Distinct from ``None``: ``is_equal(None, MISSING)`` is False."""


_INSTANT_TYPES = (_dt.datetime, _dt.date, _dt.time)


def kind_of(value: Any) -> Kind:
    """Classify *value* into exactly one :class:`Kind`.

    Examples:
        >>> kind_of(None)
        <Kind.NULL: 'null'>
        >>> kind_of(True)
        <Kind.BOOLEAN: 'boolean'>
        >>> kind_of({"a": 1})
        <Kind.MAPPING: 'mapping'>
        >>> kind_of(len)
        <Kind.CALLABLE: 'callable'>
    """
    if value is None:
        return Kind.NULL
    if value is MISSING:
        return Kind.ABSENT
    # bool is a Number subclass; check it first.
    if isinstance(value, bool):
        return Kind.BOOLEAN
    if isinstance(value, numbers.Number):
        return Kind.NUMBER
    if isinstance(value, str):
        return Kind.TEXT
    if isinstance(value, (bytes, bytearray)):
        return Kind.BYTES
    if isinstance(value, (list, tuple)):
        return Kind.SEQUENCE
    if type(value) is dict:
        return Kind.MAPPING
    if isinstance(value, (set, frozenset)):
        return Kind.UNIQUE
    if isinstance(value, Mapping):
        return Kind.ASSOCIATION
    if isinstance(value, _INSTANT_TYPES):
        return Kind.INSTANT
    if isinstance(value, re.Pattern):
        return Kind.PATTERN
    if isinstance(value, Enum):
        return Kind.OPAQUE
    if callable(value):
        return Kind.CALLABLE
    if hasattr(value, "__dict__"):
        return Kind.RECORD
    return Kind.OPAQUE


def is_primitive(value: Any) -> bool:
    """True for null, absent, booleans, numbers, text and bytes."""
    return kind_of(value) in PRIMITIVE_KINDS


def is_container(value: Any) -> bool:
    """True for values that can hold references to other values."""
    return kind_of(value) in CONTAINER_KINDS


def is_plain_object(value: Any) -> TypeGuard[dict[Any, Any]]:
    """True only for plain ``dict`` instances (not subclasses, not other mappings)."""
    return type(value) is dict


def is_array(value: Any) -> TypeGuard[list[Any] | tuple[Any, ...]]:
    """True for ordered sequences (``list`` and ``tuple``)."""
    return isinstance(value, (list, tuple))


def is_function(value: Any) -> bool:
    """True for values classified as :attr:`Kind.CALLABLE`."""
    return kind_of(value) is Kind.CALLABLE


def own_items(value: Any) -> Iterable[tuple[Any, Any]]:
    """Return the own key/value pairs of a mapping or record.

    Records expose their instance ``__dict__``; class attributes and
    properties are not included.
    """
    if isinstance(value, Mapping):
        return value.items()
    return vars(value).items()
