"""Tests for the value model: Kind classification and the MISSING sentinel."""

from __future__ import annotations

import copy
import datetime as dt
import pickle
import re
from collections import OrderedDict, defaultdict, namedtuple
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from types import MappingProxyType

import pytest

from datype.domain.values import (
    MISSING,
    Kind,
    is_array,
    is_container,
    is_function,
    is_plain_object,
    is_primitive,
    kind_of,
    own_items,
)


class Color(Enum):
    RED = 1


class Point:
    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y


class Slotted:
    __slots__ = ("value",)

    def __init__(self, value: int) -> None:
        self.value = value


Pair = namedtuple("Pair", "left right")


class TestKindOf:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, Kind.NULL),
            (MISSING, Kind.ABSENT),
            (True, Kind.BOOLEAN),
            (False, Kind.BOOLEAN),
            (0, Kind.NUMBER),
            (1.5, Kind.NUMBER),
            (float("nan"), Kind.NUMBER),
            (2j, Kind.NUMBER),
            (Decimal("1.1"), Kind.NUMBER),
            (Fraction(1, 3), Kind.NUMBER),
            ("text", Kind.TEXT),
            (b"raw", Kind.BYTES),
            (bytearray(b"raw"), Kind.BYTES),
            ([], Kind.SEQUENCE),
            ((1, 2), Kind.SEQUENCE),
            (Pair(1, 2), Kind.SEQUENCE),
            ({}, Kind.MAPPING),
            ({1, 2}, Kind.UNIQUE),
            (frozenset(), Kind.UNIQUE),
            (OrderedDict(), Kind.ASSOCIATION),
            (defaultdict(list), Kind.ASSOCIATION),
            (MappingProxyType({}), Kind.ASSOCIATION),
            (dt.datetime(2024, 1, 1), Kind.INSTANT),
            (dt.date(2024, 1, 1), Kind.INSTANT),
            (dt.time(12, 0), Kind.INSTANT),
            (re.compile("a+"), Kind.PATTERN),
            (len, Kind.CALLABLE),
            (lambda: None, Kind.CALLABLE),
            (Point, Kind.CALLABLE),
            (Point(1, 2), Kind.RECORD),
            (Color.RED, Kind.OPAQUE),
            (Slotted(1), Kind.OPAQUE),
            (object(), Kind.OPAQUE),
        ],
    )
    def test_classification(self, value: object, expected: Kind) -> None:
        assert kind_of(value) is expected

    def test_bool_is_not_a_number(self) -> None:
        assert kind_of(True) is not kind_of(1)

    def test_dict_subclass_is_association(self) -> None:
        class Config(dict):
            pass

        assert kind_of(Config()) is Kind.ASSOCIATION


class TestPredicates:
    def test_is_primitive(self) -> None:
        assert is_primitive(None)
        assert is_primitive(MISSING)
        assert is_primitive("x")
        assert is_primitive(b"x")
        assert not is_primitive([])
        assert not is_primitive(dt.date.today())

    def test_is_container(self) -> None:
        assert is_container([])
        assert is_container({})
        assert is_container(set())
        assert is_container(OrderedDict())
        assert is_container(Point(0, 0))
        assert not is_container("abc")
        assert not is_container(len)

    def test_is_plain_object(self) -> None:
        assert is_plain_object({})
        assert not is_plain_object(OrderedDict())
        assert not is_plain_object([])
        assert not is_plain_object(None)

    def test_is_array(self) -> None:
        assert is_array([1])
        assert is_array((1,))
        assert not is_array("abc")
        assert not is_array({1})

    def test_is_function(self) -> None:
        assert is_function(print)
        assert is_function(lambda x: x)
        assert not is_function(Point(1, 2))


class TestMissing:
    def test_singleton(self) -> None:
        assert type(MISSING)() is MISSING

    def test_falsy_and_repr(self) -> None:
        assert not MISSING
        assert repr(MISSING) == "MISSING"

    def test_distinct_from_none(self) -> None:
        assert MISSING is not None
        assert kind_of(MISSING) is not kind_of(None)

    def test_survives_copy_and_pickle(self) -> None:
        assert copy.copy(MISSING) is MISSING
        assert copy.deepcopy(MISSING) is MISSING
        assert pickle.loads(pickle.dumps(MISSING)) is MISSING


class TestOwnItems:
    def test_mapping(self) -> None:
        assert dict(own_items({"a": 1})) == {"a": 1}

    def test_record_excludes_class_attributes(self) -> None:
        class WithClassAttr:
            shared = "class"

            def __init__(self) -> None:
                self.own = "instance"

        assert dict(own_items(WithClassAttr())) == {"own": "instance"}
