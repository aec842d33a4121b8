"""Function wrappers: once, compose, pipe, curry."""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable
from typing import Any, ParamSpec, TypeVar

from datype.domain.errors import InvalidArgumentError

P = ParamSpec("P")
R = TypeVar("R")


def _require_callables(fns: tuple[Any, ...], name: str) -> None:
    if not fns:
        msg = f"{name}() requires at least one function"
        raise InvalidArgumentError(msg)
    for fn in fns:
        if not callable(fn):
            msg = f"{name}() arguments must be callable, got {type(fn).__name__}"
            raise InvalidArgumentError(msg)


def once(fn: Callable[P, R]) -> Callable[P, R]:
    """Wrap *fn* so it runs on the first call only.

    Later calls return the first result, or re-raise the first exception,
    without calling *fn* again.

    Example:
        >>> calls = []
        >>> init = once(lambda: calls.append(1) or len(calls))
        >>> init(), init(), calls
        (1, 1, [1])
    """
    if not callable(fn):
        msg = "once() requires a callable"
        raise InvalidArgumentError(msg)

    called = False
    result: Any = None
    error: BaseException | None = None

    @functools.wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        nonlocal called, result, error
        if not called:
            called = True
            try:
                result = fn(*args, **kwargs)
            except Exception as exc:
                error = exc
                raise
        if error is not None:
            raise error
        return result

    return wrapper


def compose(*fns: Callable[..., Any]) -> Callable[..., Any]:
    """Right-to-left composition: ``compose(f, g)(x) == f(g(x))``.

    The rightmost function receives all call arguments; the rest get one.
    """
    _require_callables(fns, "compose")
    *rest, first = fns

    def composed(*args: Any, **kwargs: Any) -> Any:
        value = first(*args, **kwargs)
        for fn in reversed(rest):
            value = fn(value)
        return value

    return composed


def pipe(*fns: Callable[..., Any]) -> Callable[..., Any]:
    """Left-to-right composition: ``pipe(f, g)(x) == g(f(x))``."""
    _require_callables(fns, "pipe")
    return compose(*reversed(fns))


def _arity(fn: Callable[..., Any]) -> int:
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return 0
    return sum(
        1
        for param in signature.parameters.values()
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD)
        and param.default is param.empty
    )


def curry(fn: Callable[..., R], arity: int | None = None) -> Callable[..., Any]:
    """Collect positional arguments until *arity* of them are available.

    *arity* defaults to the number of required positional parameters.
    Each partial call may pass several arguments at once.

    Example:
        >>> add = curry(lambda a, b, c: a + b + c)
        >>> add(1)(2)(3), add(1, 2)(3), add(1, 2, 3)
        (6, 6, 6)
    """
    if not callable(fn):
        msg = "curry() requires a callable"
        raise InvalidArgumentError(msg)
    needed = _arity(fn) if arity is None else arity
    if isinstance(needed, bool) or not isinstance(needed, int) or needed < 0:
        msg = f"Arity must be a non-negative integer, got {arity!r}"
        raise InvalidArgumentError(msg)

    def curried(*args: Any) -> Any:
        if len(args) >= needed:
            return fn(*args)
        return functools.partial(curried, *args)

    functools.update_wrapper(curried, fn)
    return curried
