"""Clocks and repeating timers.

The controller reads time through a `Clock` and drives its once-per-second
tick through a `Scheduler`, so tests can swap both for a `ManualClock`.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from typing import Callable, Protocol

logger = logging.getLogger(__name__)


class Clock(Protocol):
    def now(self) -> float:
        """Current time in seconds."""
        ...


class TimerHandle(Protocol):
    def cancel(self) -> None:
        """Stop the timer. Safe to call more than once."""
        ...


class Scheduler(Protocol):
    def call_every(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        """Call `callback` every `interval` seconds until cancelled."""
        ...


class SystemClock:
    """Wall-clock time."""

    def now(self) -> float:
        return time.time()


class _AsyncioRepeatingTimer:
    def __init__(self, loop: asyncio.AbstractEventLoop, interval: float, callback: Callable[[], None]):
        self._loop = loop
        self._interval = interval
        self._callback = callback
        self._handle: asyncio.TimerHandle | None = None
        self._cancelled = False

    def start(self) -> None:
        self._handle = self._loop.call_later(self._interval, self._run)

    def _run(self) -> None:
        if self._cancelled:
            return
        try:
            self._callback()
        except Exception:
            logger.exception("Timer callback failed")
        if not self._cancelled:
            self._handle = self._loop.call_later(self._interval, self._run)

    def cancel(self) -> None:
        self._cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class AsyncioScheduler:
    """Repeating timers on an asyncio event loop.

    Args:
        loop: Loop to schedule on. Defaults to the running loop.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop or asyncio.get_running_loop()

    def call_every(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        timer = _AsyncioRepeatingTimer(self._loop, interval, callback)
        timer.start()
        return timer


class _ThreadRepeatingTimer:
    def __init__(self, interval: float, callback: Callable[[], None]):
        self._interval = interval
        self._callback = callback
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._cancelled = False

    def start(self) -> None:
        with self._lock:
            if self._cancelled:
                return
            self._timer = threading.Timer(self._interval, self._run)
            self._timer.daemon = True
            self._timer.start()

    def _run(self) -> None:
        if self._cancelled:
            return
        try:
            self._callback()
        except Exception:
            logger.exception("Timer callback failed")
        self.start()

    def cancel(self) -> None:
        with self._lock:
            self._cancelled = True
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None


class ThreadScheduler:
    """Repeating timers on daemon threads, for synchronous front ends."""

    def call_every(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        timer = _ThreadRepeatingTimer(interval, callback)
        timer.start()
        return timer


class _ManualTimer:
    def __init__(self, due: float, interval: float, callback: Callable[[], None]):
        self.due = due
        self.interval = interval
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualClock:
    """Deterministic clock and scheduler.

    Time only moves when `advance` is called; due timers fire in order
    with `now()` set to their due time.
    """

    def __init__(self, start: float = 0.0):
        self._now = start
        self._timers: list[_ManualTimer] = []

    def now(self) -> float:
        return self._now

    def call_every(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        if interval <= 0:
            raise ValueError(f"Interval must be positive, got {interval}")
        timer = _ManualTimer(self._now + interval, interval, callback)
        self._timers.append(timer)
        return timer

    @property
    def active_timers(self) -> int:
        """Number of timers that have not been cancelled."""
        self._timers = [t for t in self._timers if not t.cancelled]
        return len(self._timers)

    def advance(self, seconds: float) -> None:
        """Move time forward, firing every timer that falls due."""
        if seconds < 0:
            raise ValueError("Cannot move time backwards")
        target = self._now + seconds

        while True:
            pending = [t for t in self._timers if not t.cancelled and t.due <= target]
            if not pending:
                break
            timer = min(pending, key=lambda t: t.due)
            self._now = timer.due
            timer.due += timer.interval
            timer.callback()

        self._now = target
