"""Rate limiting wrappers: debounce and throttle.

Times are in seconds. Each wrapper owns its timers and guards its state with
a re-entrant lock, so the wrapped function may call back into its wrapper.
The clock and the timer factory are injectable; the default factory starts a
daemon :class:`threading.Timer`.

INVARIANT: a timer that was cancelled or replaced never fires the wrapped
function, even if its thread had already woken up.
"""

from __future__ import annotations

import functools
import threading
import time
from collections.abc import Callable
from typing import Any, Generic, ParamSpec, Protocol, TypeVar

from datype.domain.errors import InvalidArgumentError, InvalidValueError

P = ParamSpec("P")
R = TypeVar("R")


class Cancellable(Protocol):
    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], Cancellable]
Clock = Callable[[], float]


def start_thread_timer(delay: float, callback: Callable[[], None]) -> Cancellable:
    """Run *callback* after *delay* seconds on a daemon thread."""
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


class _Scheduled:
    """One armed timer; identity is what makes stale callbacks detectable."""

    __slots__ = ("handle",)

    def __init__(self) -> None:
        self.handle: Cancellable | None = None

    def cancel(self) -> None:
        if self.handle is not None:
            self.handle.cancel()


def _check_wait(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        msg = f"{name} must be a number of seconds"
        raise InvalidArgumentError(msg)
    if value < 0:
        msg = f"{name} must be non-negative, got {value}"
        raise InvalidValueError(msg)
    return float(value)


class _RateLimited(Generic[P, R]):
    def __init__(
        self,
        fn: Callable[P, R],
        wait: float,
        *,
        clock: Clock | None = None,
        timer_factory: TimerFactory | None = None,
    ) -> None:
        if not callable(fn):
            msg = "Expected a function"
            raise InvalidArgumentError(msg)
        self._fn = fn
        self._wait = _check_wait(wait, "Wait time")
        self._clock = clock or time.monotonic
        self._timer_factory = timer_factory or start_thread_timer
        self._lock = threading.RLock()

        self._timer: _Scheduled | None = None
        self._last_args: tuple[tuple[Any, ...], dict[str, Any]] | None = None
        self._last_call_time: float | None = None
        self._last_invoke_time = 0.0
        self._result: R | None = None
        functools.update_wrapper(self, fn)

    def _start(self, delay: float, on_expire: Callable[[_Scheduled], None]) -> _Scheduled:
        scheduled = _Scheduled()
        scheduled.handle = self._timer_factory(max(delay, 0.0), lambda: on_expire(scheduled))
        return scheduled

    def _invoke(self, now: float) -> R:
        assert self._last_args is not None
        args, kwargs = self._last_args
        self._last_args = None
        self._last_invoke_time = now
        self._result = self._fn(*args, **kwargs)
        return self._result

    def pending(self) -> bool:
        """True while a trailing call is scheduled."""
        with self._lock:
            return self._timer is not None


class Debounced(_RateLimited[P, R]):
    """Delay calls to *fn* until *wait* seconds pass without another call.

    With ``leading`` the first call of a burst runs immediately; with
    ``trailing`` (default) the last call of a burst runs once the burst
    settles. ``max_wait`` caps how long a continuous burst can postpone the
    call.
    """

    def __init__(
        self,
        fn: Callable[P, R],
        wait: float,
        *,
        leading: bool = False,
        trailing: bool = True,
        max_wait: float | None = None,
        clock: Clock | None = None,
        timer_factory: TimerFactory | None = None,
    ) -> None:
        super().__init__(fn, wait, clock=clock, timer_factory=timer_factory)
        self._leading = leading
        self._trailing = trailing
        self._max_wait = None if max_wait is None else _check_wait(max_wait, "max_wait")
        if self._max_wait is not None and self._max_wait < self._wait:
            msg = "max_wait must be greater than or equal to wait"
            raise InvalidValueError(msg)
        self._max_timer: _Scheduled | None = None

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> R | None:
        with self._lock:
            now = self._clock()
            invoking = self._should_invoke(now)
            self._last_args = (args, kwargs)
            self._last_call_time = now

            if invoking:
                if self._timer is None and self._max_timer is None:
                    return self._leading_edge(now)
                if self._max_timer is not None:
                    self._clear_timers()
                    return self._invoke(now)

            if self._timer is None:
                self._timer = self._start(self._wait, self._timer_expired)
            if self._max_wait is not None and self._max_timer is None:
                self._max_timer = self._start(self._max_wait, self._max_timer_expired)
            return self._result

    def cancel(self) -> None:
        """Drop any scheduled call and forget the current burst."""
        with self._lock:
            self._clear_timers()
            self._last_invoke_time = 0.0
            self._last_args = None
            self._last_call_time = None

    def flush(self) -> R | None:
        """Run a scheduled call now; return the latest result."""
        with self._lock:
            if self._timer is None and self._max_timer is None:
                return self._result
            self._clear_timers()
            if self._last_args is not None:
                return self._invoke(self._clock())
            return self._result

    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None or self._max_timer is not None

    def _should_invoke(self, now: float) -> bool:
        if self._last_call_time is None:
            return True
        if now - self._last_call_time >= self._wait:
            return True
        return self._max_wait is not None and now - self._last_invoke_time >= self._max_wait

    def _remaining_wait(self, now: float) -> float:
        waiting = self._wait - (now - (self._last_call_time or 0.0))
        if self._max_wait is None:
            return waiting
        return min(waiting, self._max_wait - (now - self._last_invoke_time))

    def _leading_edge(self, now: float) -> R | None:
        self._last_invoke_time = now
        self._timer = self._start(self._wait, self._timer_expired)
        if self._max_wait is not None:
            self._max_timer = self._start(self._max_wait, self._max_timer_expired)
        return self._invoke(now) if self._leading else self._result

    def _trailing_edge(self, now: float) -> R | None:
        self._clear_timers()
        if self._trailing and self._last_args is not None:
            return self._invoke(now)
        self._last_args = None
        return self._result

    def _timer_expired(self, scheduled: _Scheduled) -> None:
        with self._lock:
            if self._timer is not scheduled:
                return
            now = self._clock()
            if self._should_invoke(now):
                self._trailing_edge(now)
            else:
                self._timer = self._start(self._remaining_wait(now), self._timer_expired)

    def _max_timer_expired(self, scheduled: _Scheduled) -> None:
        with self._lock:
            if self._max_timer is not scheduled:
                return
            if self._last_args is None:
                self._max_timer = None
                return
            self._trailing_edge(self._clock())

    def _clear_timers(self) -> None:
        for scheduled in (self._timer, self._max_timer):
            if scheduled is not None:
                scheduled.cancel()
        self._timer = None
        self._max_timer = None


class Throttled(_RateLimited[P, R]):
    """Run *fn* at most once per *wait* seconds.

    With ``leading`` (default) the first call runs immediately; with
    ``trailing`` (default) the latest call made during the window runs when
    it closes.
    """

    def __init__(
        self,
        fn: Callable[P, R],
        wait: float,
        *,
        leading: bool = True,
        trailing: bool = True,
        clock: Clock | None = None,
        timer_factory: TimerFactory | None = None,
    ) -> None:
        super().__init__(fn, wait, clock=clock, timer_factory=timer_factory)
        self._leading = leading
        self._trailing = trailing

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> R | None:
        with self._lock:
            now = self._clock()
            invoking = self._last_call_time is None or now - self._last_invoke_time >= self._wait
            self._last_args = (args, kwargs)
            self._last_call_time = now

            if invoking and self._timer is None:
                return self._leading_edge(now)
            if self._timer is None and self._trailing:
                self._timer = self._start(self._wait, self._timer_expired)
            return self._result

    def cancel(self) -> None:
        """Drop any scheduled call and reset the window."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._last_invoke_time = 0.0
            self._last_args = None
            self._last_call_time = None

    def flush(self) -> R | None:
        """Run the scheduled trailing call now; return the latest result."""
        with self._lock:
            if self._timer is None:
                return self._result
            return self._trailing_edge(self._clock())

    def _leading_edge(self, now: float) -> R | None:
        self._last_invoke_time = now
        if self._trailing:
            self._timer = self._start(self._wait, self._timer_expired)
        return self._invoke(now) if self._leading else self._result

    def _trailing_edge(self, now: float) -> R | None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._trailing and self._last_args is not None:
            return self._invoke(now)
        self._last_args = None
        return self._result

    def _timer_expired(self, scheduled: _Scheduled) -> None:
        with self._lock:
            if self._timer is not scheduled:
                return
            self._trailing_edge(self._clock())


def debounce(
    fn: Callable[P, R],
    wait: float,
    *,
    leading: bool = False,
    trailing: bool = True,
    max_wait: float | None = None,
    clock: Clock | None = None,
    timer_factory: TimerFactory | None = None,
) -> Debounced[P, R]:
    """Return a :class:`Debounced` wrapper around *fn*."""
    return Debounced(
        fn,
        wait,
        leading=leading,
        trailing=trailing,
        max_wait=max_wait,
        clock=clock,
        timer_factory=timer_factory,
    )


def throttle(
    fn: Callable[P, R],
    wait: float,
    *,
    leading: bool = True,
    trailing: bool = True,
    clock: Clock | None = None,
    timer_factory: TimerFactory | None = None,
) -> Throttled[P, R]:
    """Return a :class:`Throttled` wrapper around *fn*."""
    return Throttled(
        fn,
        wait,
        leading=leading,
        trailing=trailing,
        clock=clock,
        timer_factory=timer_factory,
    )
