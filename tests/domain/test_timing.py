"""Tests for debounce and throttle, driven by a manual clock."""

from __future__ import annotations

import threading
from collections.abc import Callable

import pytest

from datype.domain.errors import InvalidArgumentError, InvalidValueError
from datype.domain.timing import debounce, start_thread_timer, throttle


class _Handle:
    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Clock plus timer factory where time only moves on ``advance``."""

    def __init__(self) -> None:
        self.now = 0.0
        self.handles: list[_Handle] = []

    def clock(self) -> float:
        return self.now

    def timer(self, delay: float, callback: Callable[[], None]) -> _Handle:
        handle = _Handle(self.now + delay, callback)
        self.handles.append(handle)
        return handle

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [h for h in self.handles if not (h.cancelled or h.fired) and h.due <= target]
            if not due:
                break
            handle = min(due, key=lambda h: h.due)
            handle.fired = True
            self.now = max(self.now, handle.due)
            handle.callback()
        self.now = target


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


def _recorder() -> tuple[list[object], Callable[[object], object]]:
    calls: list[object] = []

    def record(value: object) -> object:
        calls.append(value)
        return value

    return calls, record


class TestDebounce:
    def _debounce(self, scheduler: ManualScheduler, fn: Callable[..., object], wait: float = 1, **kwargs: object):
        return debounce(fn, wait, clock=scheduler.clock, timer_factory=scheduler.timer, **kwargs)

    def test_trailing_call_after_quiet_period(self, scheduler: ManualScheduler) -> None:
        calls, record = _recorder()
        debounced = self._debounce(scheduler, record)

        debounced("a")
        scheduler.advance(0.5)
        debounced("b")
        scheduler.advance(0.9)
        assert calls == []
        scheduler.advance(0.2)
        assert calls == ["b"]

    def test_separate_bursts_each_fire(self, scheduler: ManualScheduler) -> None:
        calls, record = _recorder()
        debounced = self._debounce(scheduler, record)

        debounced(1)
        scheduler.advance(2)
        debounced(2)
        scheduler.advance(2)
        assert calls == [1, 2]

    def test_leading_only(self, scheduler: ManualScheduler) -> None:
        calls, record = _recorder()
        debounced = self._debounce(scheduler, record, leading=True, trailing=False)

        assert debounced(1) == 1
        scheduler.advance(0.5)
        debounced(2)
        scheduler.advance(1.5)
        assert calls == [1]
        debounced(3)
        assert calls == [1, 3]

    def test_leading_and_trailing_single_call_runs_once(self, scheduler: ManualScheduler) -> None:
        calls, record = _recorder()
        debounced = self._debounce(scheduler, record, leading=True)

        debounced(1)
        scheduler.advance(5)
        assert calls == [1]

    def test_continuous_calls_postpone_without_max_wait(self, scheduler: ManualScheduler) -> None:
        calls, record = _recorder()
        debounced = self._debounce(scheduler, record)

        for value in range(4):
            debounced(value)
            scheduler.advance(0.5)
        assert calls == []

    def test_max_wait_caps_postponement(self, scheduler: ManualScheduler) -> None:
        calls, record = _recorder()
        debounced = self._debounce(scheduler, record, max_wait=2)

        for value in range(4):
            debounced(value)
            scheduler.advance(0.5)
        assert calls == [3]

    def test_cancel(self, scheduler: ManualScheduler) -> None:
        calls, record = _recorder()
        debounced = self._debounce(scheduler, record)

        debounced(1)
        assert debounced.pending()
        debounced.cancel()
        assert not debounced.pending()
        scheduler.advance(5)
        assert calls == []

    def test_flush_runs_pending_call(self, scheduler: ManualScheduler) -> None:
        calls, record = _recorder()
        debounced = self._debounce(scheduler, record)

        debounced("x")
        assert debounced.flush() == "x"
        assert calls == ["x"]
        assert not debounced.pending()
        scheduler.advance(5)
        assert calls == ["x"]

    def test_flush_without_pending_returns_last_result(self, scheduler: ManualScheduler) -> None:
        _, record = _recorder()
        debounced = self._debounce(scheduler, record)
        assert debounced.flush() is None

    def test_stale_timer_callback_is_ignored(self, scheduler: ManualScheduler) -> None:
        calls, record = _recorder()
        debounced = self._debounce(scheduler, record)

        debounced(1)
        stale = scheduler.handles[0]
        debounced.cancel()
        stale.callback()
        assert calls == []

    def test_wraps_function_metadata(self, scheduler: ManualScheduler) -> None:
        def save(value: object) -> None:
            """Persist."""

        debounced = self._debounce(scheduler, save)
        assert debounced.__name__ == "save"
        assert debounced.__wrapped__ is save

    def test_invalid_arguments(self) -> None:
        with pytest.raises(InvalidArgumentError):
            debounce(None, 1)  # type: ignore[arg-type]
        with pytest.raises(InvalidArgumentError):
            debounce(print, "1")  # type: ignore[arg-type]
        with pytest.raises(InvalidValueError):
            debounce(print, -1)
        with pytest.raises(InvalidValueError, match="max_wait"):
            debounce(print, 2, max_wait=1)


class TestThrottle:
    def _throttle(self, scheduler: ManualScheduler, fn: Callable[..., object], wait: float = 1, **kwargs: object):
        return throttle(fn, wait, clock=scheduler.clock, timer_factory=scheduler.timer, **kwargs)

    def test_leading_then_trailing(self, scheduler: ManualScheduler) -> None:
        calls, record = _recorder()
        throttled = self._throttle(scheduler, record)

        throttled(1)
        scheduler.advance(0.25)
        throttled(2)
        scheduler.advance(0.25)
        throttled(3)
        assert calls == [1]
        scheduler.advance(0.5)
        assert calls == [1, 3]

    def test_call_inside_next_window_is_deferred(self, scheduler: ManualScheduler) -> None:
        calls, record = _recorder()
        throttled = self._throttle(scheduler, record)

        throttled(1)
        scheduler.advance(0.5)
        throttled(2)
        scheduler.advance(0.7)
        throttled(3)
        assert calls == [1, 2]
        scheduler.advance(1)
        assert calls == [1, 2, 3]

    def test_returns_last_result(self, scheduler: ManualScheduler) -> None:
        throttled = self._throttle(scheduler, lambda value: value * 2)
        assert throttled(3) == 6
        assert throttled(4) == 6

    def test_trailing_only(self, scheduler: ManualScheduler) -> None:
        calls, record = _recorder()
        throttled = self._throttle(scheduler, record, leading=False)

        throttled(1)
        assert calls == []
        scheduler.advance(1)
        assert calls == [1]

    def test_leading_only(self, scheduler: ManualScheduler) -> None:
        calls, record = _recorder()
        throttled = self._throttle(scheduler, record, trailing=False)

        throttled(1)
        scheduler.advance(0.5)
        throttled(2)
        scheduler.advance(0.5)
        throttled(3)
        scheduler.advance(5)
        assert calls == [1, 3]

    def test_flush(self, scheduler: ManualScheduler) -> None:
        calls, record = _recorder()
        throttled = self._throttle(scheduler, record)

        throttled(1)
        throttled(2)
        assert throttled.pending()
        assert throttled.flush() == 2
        assert not throttled.pending()
        assert calls == [1, 2]

    def test_cancel(self, scheduler: ManualScheduler) -> None:
        calls, record = _recorder()
        throttled = self._throttle(scheduler, record)

        throttled(1)
        throttled(2)
        throttled.cancel()
        scheduler.advance(5)
        assert calls == [1]

    def test_invalid_wait(self) -> None:
        with pytest.raises(InvalidValueError):
            throttle(print, -0.5)


class TestThreadTimer:
    def test_fires_on_background_thread(self) -> None:
        fired = threading.Event()
        timer = start_thread_timer(0.01, fired.set)
        assert fired.wait(timeout=5)
        assert timer.daemon  # type: ignore[attr-defined]

    def test_debounce_with_real_timers(self) -> None:
        fired = threading.Event()
        debounced = debounce(lambda: fired.set(), 0.01)
        debounced()
        assert fired.wait(timeout=5)
