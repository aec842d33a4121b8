"""Deep structural equality, tolerant of cycles.

Comparison keeps a per-call table ``id(a) -> b`` of the container pairs
currently being compared. Re-entering a container of ``a`` answers with
whether it is paired with the same ``b`` again, so cyclic structures are
equal only when their cycles line up.

Unordered collections (sets, non-plain mappings) are matched element by
element in O(n²). That is fine for the small collections this is used on
and is not meant for large sets.
"""

from __future__ import annotations

import cmath
import logging
import math
from decimal import Decimal
from typing import Any, assert_never

from datype.domain.values import MISSING, Kind, kind_of

logger = logging.getLogger(__name__)


def is_equal(a: Any, b: Any) -> bool:
    """Return True when *a* and *b* are deeply, structurally equal.

    * NaN equals NaN, and ``0.0`` equals ``-0.0`` (same-value-zero).
    * ``None`` and :data:`~datype.domain.values.MISSING` are only equal to
      themselves.
    * Values of different kinds are never equal (``[]`` vs ``{}``,
      ``True`` vs ``1``).
    * Callables compare by identity only.

    Never raises, including on cyclic input.

    Examples:
        >>> is_equal({"a": [1, 2]}, {"a": [1, 2]})
        True
        >>> is_equal(float("nan"), float("nan"))
        True
        >>> is_equal({1, 2}, {1, 2, 3})
        False
    """
    return _equal(a, b, {})


def _equal(a: Any, b: Any, pairs: dict[int, Any]) -> bool:
    if a is b:
        return True
    kind = kind_of(a)
    if kind is not kind_of(b):
        return False
    match kind:
        case Kind.NULL | Kind.ABSENT | Kind.CALLABLE:
            # Singletons and callables are equal only by identity.
            return False
        case Kind.BOOLEAN | Kind.TEXT | Kind.BYTES:
            return bool(a == b)
        case Kind.NUMBER:
            return _same_value_zero(a, b)
        case Kind.INSTANT:
            return type(a) is type(b) and _safe_eq(a, b)
        case Kind.PATTERN:
            return bool(a.pattern == b.pattern and a.flags == b.flags)
        case Kind.OPAQUE:
            return _safe_eq(a, b)
        case Kind.SEQUENCE | Kind.MAPPING | Kind.UNIQUE | Kind.ASSOCIATION | Kind.RECORD:
            key = id(a)
            if key in pairs:
                return pairs[key] is b
            pairs[key] = b
            try:
                return _equal_containers(kind, a, b, pairs)
            finally:
                del pairs[key]
        case _:
            assert_never(kind)


def _equal_containers(kind: Kind, a: Any, b: Any, pairs: dict[int, Any]) -> bool:
    match kind:
        case Kind.SEQUENCE:
            if isinstance(a, tuple) is not isinstance(b, tuple) or len(a) != len(b):
                return False
            return all(_equal(x, y, pairs) for x, y in zip(a, b, strict=True))
        case Kind.MAPPING:
            return _equal_mappings(a, b, pairs)
        case Kind.UNIQUE:
            if len(a) != len(b):
                return False
            return all(any(_equal(item, other, pairs) for other in b) for item in a)
        case Kind.ASSOCIATION:
            if len(a) != len(b):
                return False
            return all(
                any(
                    _equal(key, other_key, pairs) and _equal(value, other_value, pairs)
                    for other_key, other_value in b.items()
                )
                for key, value in a.items()
            )
        case Kind.RECORD:
            return type(a) is type(b) and _equal_mappings(vars(a), vars(b), pairs)
        case _:
            raise AssertionError(f"not a container kind: {kind}")


def _equal_mappings(a: dict[Any, Any], b: dict[Any, Any], pairs: dict[int, Any]) -> bool:
    if len(a) != len(b):
        return False
    # Hash lookup first; keys it cannot pair (NaN, 1 vs True, identity-hashed
    # records) fall back to a structural scan of b's keys.
    b_keys = {key: key for key in b}
    for key, value in a.items():
        found = b_keys.get(key, MISSING)
        if (
            found is not MISSING
            and _equal(key, found, pairs)
            and _equal(value, b[found], pairs)
        ):
            continue
        if not any(
            _equal(key, other_key, pairs) and _equal(value, other_value, pairs)
            for other_key, other_value in b.items()
        ):
            return False
    return True


def _is_nan(value: Any) -> bool:
    if isinstance(value, float):
        return math.isnan(value)
    if isinstance(value, complex):
        return cmath.isnan(value)
    if isinstance(value, Decimal):
        return value.is_nan()
    return False


def _same_value_zero(a: Any, b: Any) -> bool:
    if _is_nan(a) or _is_nan(b):
        return _is_nan(a) and _is_nan(b)
    return _safe_eq(a, b)


def _safe_eq(a: Any, b: Any) -> bool:
    """``a == b`` coerced to bool; comparison failures mean "not equal"."""
    try:
        return bool(a == b)
    except (TypeError, ValueError, ArithmeticError):
        logger.debug("Comparison of %s and %s failed", type(a).__name__, type(b).__name__)
        return False
