"""Deep and shallow dictionary merging.

Canonical merge semantics:

- Nested plain dicts merge recursively.
- Two sequences at the same key combine per ``array_merge_strategy``:
  ``concat`` (default) appends the source's items, ``replace`` takes the
  source's sequence as-is.
- Anything else: the later value wins.

Inputs are never mutated. Recursion is bounded by ``max_depth``. A target
mapping that is re-entered on the current path is returned as-is; a source
value is only descended into while the target has a mapping at the same
key, and is otherwise stored by reference (cycles included).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from datype.domain.errors import DepthExceededError, InvalidArgumentError, InvalidValueError
from datype.domain.values import MISSING, is_array, is_plain_object

logger = logging.getLogger(__name__)


class ArrayMergeStrategy(StrEnum):
    """How two sequences found at the same key are combined."""

    CONCAT = "concat"
    REPLACE = "replace"


DEFAULT_MAX_DEPTH = 50


class MergeOptions(BaseModel):
    """Options for :func:`deep_merge`.

    Accepts both ``array_merge_strategy`` / ``max_depth`` and the camelCase
    spellings ``arrayMergeStrategy`` / ``maxDepth``.
    """

    model_config = {"frozen": True, "populate_by_name": True, "extra": "forbid"}

    array_merge_strategy: ArrayMergeStrategy = Field(
        default=ArrayMergeStrategy.CONCAT, alias="arrayMergeStrategy"
    )
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=0, alias="maxDepth")


_POSITIONAL_OPTION_KEYS = frozenset({"arrayMergeStrategy", "maxDepth"})


def deep_merge(
    target: dict[Any, Any],
    *sources: Any,
    options: MergeOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> dict[Any, Any]:
    """Recursively merge *sources* into a copy of *target*.

    Later sources override earlier ones. A trailing positional
    :class:`MergeOptions`, or a dict made only of ``arrayMergeStrategy`` and
    ``maxDepth`` keys, is taken as the options. Snake_case option names are
    only read from *options* and keywords. Sources that are not plain dicts
    are skipped.

    Args:
        target: Base dict (lowest priority). Must be a plain ``dict``.
        *sources: Override dicts, in increasing priority.
        options: Merge options; keyword *overrides* are applied on top.

    Returns:
        A new dict.

    Raises:
        InvalidArgumentError: *target* is not a plain dict, or *options* is
            neither a ``MergeOptions`` nor a mapping.
        InvalidValueError: An option value is out of range.
        DepthExceededError: Nesting went deeper than ``max_depth``.

    Example:
        >>> deep_merge({"api": {"url": "/api", "timeout": 5}, "features": ["auth"]},
        ...            {"api": {"timeout": 10}, "features": ["dashboard"]})
        {'api': {'url': '/api', 'timeout': 10}, 'features': ['auth', 'dashboard']}
    """
    if not is_plain_object(target):
        msg = f"Target must be a plain dict, got {type(target).__name__}"
        raise InvalidArgumentError(msg)

    source_list = list(sources)
    if options is None and source_list and _is_options_argument(source_list[-1]):
        options = source_list.pop()

    resolved = resolve_merge_options(options, **overrides)
    return _merge_into(target, source_list, resolved, depth=0, active=set())


def resolve_merge_options(
    options: MergeOptions | Mapping[str, Any] | None = None, **overrides: Any
) -> MergeOptions:
    """Normalize *options* (model, mapping or None) plus keyword overrides."""
    if options is None:
        base: dict[str, Any] = {}
    elif isinstance(options, MergeOptions):
        if not overrides:
            return options
        base = options.model_dump()
    elif isinstance(options, Mapping):
        base = dict(options)
    else:
        msg = f"Options must be MergeOptions or a mapping, got {type(options).__name__}"
        raise InvalidArgumentError(msg)

    try:
        return MergeOptions.model_validate({**base, **overrides})
    except ValidationError as exc:
        raise InvalidValueError(f"Invalid merge options: {exc}") from exc


def merge(*objects: Any) -> dict[Any, Any]:
    """Shallow-merge mappings into a new dict; later keys win.

    Non-mapping arguments are ignored. Nested dicts are replaced, not merged.

    Examples:
        >>> merge({"a": 1, "b": 2}, {"b": 3, "c": 4})
        {'a': 1, 'b': 3, 'c': 4}
        >>> merge()
        {}
    """
    result: dict[Any, Any] = {}
    for obj in objects:
        if isinstance(obj, Mapping):
            result.update(obj)
    return result


def _is_options_argument(value: Any) -> bool:
    if isinstance(value, MergeOptions):
        return True
    return (
        is_plain_object(value)
        and bool(value)
        and all(key in _POSITIONAL_OPTION_KEYS for key in value)
    )


def _merge_into(
    target: dict[Any, Any],
    sources: Sequence[Any],
    options: MergeOptions,
    *,
    depth: int,
    active: set[int],
) -> dict[Any, Any]:
    if depth > options.max_depth:
        raise DepthExceededError(options.max_depth)

    # A target already being merged on this path is returned unchanged.
    if id(target) in active:
        return target
    active.add(id(target))

    try:
        result = dict(target)
        for source in sources:
            if not is_plain_object(source):
                logger.debug("Skipping non-dict merge source of type %s", type(source).__name__)
                continue
            for key, value in source.items():
                current = result.get(key, MISSING)
                if is_plain_object(current) and is_plain_object(value):
                    result[key] = _merge_into(
                        current, [value], options, depth=depth + 1, active=active
                    )
                elif is_array(current) and is_array(value):
                    result[key] = _combine_sequences(current, value, options.array_merge_strategy)
                else:
                    result[key] = value
        return result
    finally:
        active.discard(id(target))


def _combine_sequences(
    current: Sequence[Any], incoming: Sequence[Any], strategy: ArrayMergeStrategy
) -> Sequence[Any]:
    match strategy:
        case ArrayMergeStrategy.CONCAT:
            return [*current, *incoming]
        case ArrayMergeStrategy.REPLACE:
            return incoming
