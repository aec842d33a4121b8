"""Tests for is_equal."""

from __future__ import annotations

import datetime as dt
import re
from collections import OrderedDict
from decimal import Decimal

import pytest

from datype.domain.equality import is_equal
from datype.domain.values import MISSING


class Point:
    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y


class OtherPoint:
    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y


class Exploding:
    """An object whose comparison raises."""

    __slots__ = ()

    def __eq__(self, other: object) -> bool:
        raise TypeError("no comparisons")

    __hash__ = object.__hash__


class TestPrimitives:
    def test_nan_equals_nan(self) -> None:
        nan = float("nan")
        assert is_equal(nan, nan)
        assert is_equal(float("nan"), float("nan"))
        assert is_equal(Decimal("NaN"), Decimal("NaN"))
        assert not is_equal(float("nan"), 1.0)

    def test_signed_zero(self) -> None:
        assert is_equal(0.0, -0.0)

    def test_int_and_float(self) -> None:
        assert is_equal(1, 1.0)

    def test_bool_is_not_int(self) -> None:
        assert not is_equal(True, 1)
        assert not is_equal(0, False)

    def test_text_and_bytes(self) -> None:
        assert is_equal("abc", "".join(["a", "b", "c"]))
        assert not is_equal("abc", "abd")
        assert is_equal(b"ab", bytearray(b"ab"))
        assert not is_equal("ab", b"ab")

    def test_none_and_missing(self) -> None:
        assert is_equal(None, None)
        assert is_equal(MISSING, MISSING)
        assert not is_equal(None, MISSING)
        assert not is_equal(MISSING, None)
        assert not is_equal(None, 0)


class TestCategories:
    def test_list_vs_dict(self) -> None:
        assert not is_equal([], {})

    def test_list_vs_tuple(self) -> None:
        assert not is_equal([1, 2], (1, 2))

    def test_dict_vs_ordered_dict(self) -> None:
        assert not is_equal({"a": 1}, OrderedDict(a=1))


class TestContainers:
    def test_nested_mappings(self) -> None:
        assert is_equal({"a": [1, {"b": 2}]}, {"a": [1, {"b": 2}]})
        assert not is_equal({"a": [1, {"b": 2}]}, {"a": [1, {"b": 3}]})

    def test_mapping_keys_must_match(self) -> None:
        assert not is_equal({"a": 1}, {"b": 1})
        assert not is_equal({"a": 1}, {"a": 1, "b": 2})

    def test_mapping_order_ignored(self) -> None:
        assert is_equal({"a": 1, "b": 2}, {"b": 2, "a": 1})

    def test_sequence_order_matters(self) -> None:
        assert not is_equal([1, 2, 3], [3, 2, 1])
        assert not is_equal([1, 2], [1, 2, 3])

    def test_unordered_sets(self) -> None:
        assert is_equal({1, 2, 3}, {3, 2, 1})
        assert not is_equal({1, 2}, {1, 2, 3})
        assert is_equal(frozenset({1}), {1})

    def test_sets_match_structurally(self) -> None:
        assert is_equal({(1, (2,))}, {(1, (2,))})

    def test_associations_unordered(self) -> None:
        assert is_equal(OrderedDict(a=1, b=[2]), OrderedDict(b=[2], a=1))
        assert not is_equal(OrderedDict(a=1), OrderedDict(a=2))

    def test_nested_nan(self) -> None:
        assert is_equal({"x": [float("nan")]}, {"x": [float("nan")]})

    def test_nan_keys_match(self) -> None:
        assert is_equal({float("nan"): 1}, {float("nan"): 1})
        assert not is_equal({float("nan"): 1}, {float("nan"): 2})

    def test_bool_and_int_keys_differ(self) -> None:
        assert not is_equal({1: "a"}, {True: "a"})
        assert not is_equal({(1,): "a"}, {(True,): "a"})
        assert is_equal({1: "a", "b": 2}, {"b": 2, 1: "a"})

    def test_record_keys_match_structurally(self) -> None:
        assert is_equal({Point(1, 2): "a"}, {Point(1, 2): "a"})
        assert not is_equal({Point(1, 2): "a"}, {Point(1, 3): "a"})
        assert not is_equal({Point(1, 2): "a"}, {OtherPoint(1, 2): "a"})


class TestInstantsPatternsCallables:
    def test_datetimes(self) -> None:
        assert is_equal(dt.datetime(2024, 1, 1), dt.datetime(2024, 1, 1))
        assert not is_equal(dt.datetime(2024, 1, 1), dt.datetime(2024, 1, 2))

    def test_date_vs_datetime(self) -> None:
        assert not is_equal(dt.date(2024, 1, 1), dt.datetime(2024, 1, 1))

    def test_patterns(self) -> None:
        assert is_equal(re.compile("a+"), re.compile("a+"))
        assert not is_equal(re.compile("a+"), re.compile("a+", re.IGNORECASE))
        assert not is_equal(re.compile("a+"), re.compile("b+"))

    def test_callables_identity_only(self) -> None:
        def make() -> object:
            return lambda: 1

        fn = make()
        assert is_equal(fn, fn)
        assert not is_equal(make(), make())


class TestRecords:
    def test_same_class_same_attributes(self) -> None:
        assert is_equal(Point(1, 2), Point(1, 2))
        assert not is_equal(Point(1, 2), Point(2, 1))

    def test_different_class(self) -> None:
        assert not is_equal(Point(1, 2), OtherPoint(1, 2))


class TestCycles:
    def test_self_reference_reflexive(self) -> None:
        a: dict[str, object] = {}
        a["self"] = a
        assert is_equal(a, a)

    def test_isomorphic_cycles(self) -> None:
        a: dict[str, object] = {"v": 1}
        a["self"] = a
        b: dict[str, object] = {"v": 1}
        b["self"] = b
        assert is_equal(a, b)

    def test_misaligned_cycles(self) -> None:
        a: list[object] = []
        a.append(a)
        b_inner: list[object] = []
        b: list[object] = [b_inner]
        b_inner.append(b)
        # a -> a, b -> b_inner -> b: lengths match everywhere but pairing shifts.
        assert is_equal(a, b) is is_equal(b, a)

    def test_cycle_vs_acyclic(self) -> None:
        a: dict[str, object] = {}
        a["next"] = a
        b = {"next": {"next": {}}}
        assert not is_equal(a, b)


class TestNeverRaises:
    def test_failing_eq_is_unequal(self) -> None:
        assert not is_equal(Exploding(), Exploding())

    def test_identical_exploding_is_equal(self) -> None:
        value = Exploding()
        assert is_equal(value, value)

    @pytest.mark.parametrize(
        ("a", "b"),
        [
            (1, "1"),
            (complex(1, 2), 1.0),
            (Decimal("1.0"), 1.0),
            (object(), object()),
        ],
    )
    def test_mixed_values(self, a: object, b: object) -> None:
        assert isinstance(is_equal(a, b), bool)
