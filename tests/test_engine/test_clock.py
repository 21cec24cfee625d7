"""Tests for the manual clock and schedulers."""

import asyncio
import threading
import time

import pytest

from hanoi_engine.clock import AsyncioScheduler, ManualClock, ThreadScheduler


class TestManualClock:
    def test_starts_at_given_time(self):
        assert ManualClock(start=12.0).now() == 12.0

    def test_advance_moves_time(self, clock):
        clock.advance(2.5)
        assert clock.now() == 1002.5

    def test_timer_fires_each_interval(self, clock):
        fired = []
        clock.call_every(1.0, lambda: fired.append(clock.now()))

        clock.advance(3.5)
        assert fired == [1001.0, 1002.0, 1003.0]
        assert clock.now() == 1003.5

    def test_cancel_stops_timer(self, clock):
        fired = []
        handle = clock.call_every(1.0, lambda: fired.append(clock.now()))
        clock.advance(1.0)
        handle.cancel()
        handle.cancel()
        clock.advance(5.0)

        assert fired == [1001.0]
        assert clock.active_timers == 0

    def test_timers_fire_in_due_order(self, clock):
        fired = []
        clock.call_every(2.0, lambda: fired.append("slow"))
        clock.call_every(1.5, lambda: fired.append("fast"))

        clock.advance(4.0)
        assert fired == ["fast", "slow", "fast", "slow"]

    def test_callback_can_cancel_itself(self, clock):
        fired = []
        handles = []

        def once():
            fired.append(clock.now())
            handles[0].cancel()

        handles.append(clock.call_every(1.0, once))
        clock.advance(10.0)
        assert fired == [1001.0]

    def test_invalid_arguments(self, clock):
        with pytest.raises(ValueError):
            clock.advance(-1.0)
        with pytest.raises(ValueError):
            clock.call_every(0, lambda: None)


class TestAsyncioScheduler:
    def test_repeats_until_cancelled(self):
        async def scenario():
            ticks = []
            scheduler = AsyncioScheduler()
            handle = scheduler.call_every(0.01, lambda: ticks.append(1))
            await asyncio.sleep(0.055)
            handle.cancel()
            count = len(ticks)
            await asyncio.sleep(0.03)
            return count, len(ticks)

        at_cancel, later = asyncio.run(scenario())
        assert at_cancel >= 2
        assert later == at_cancel

    def test_failing_callback_keeps_ticking(self):
        async def scenario():
            ticks = []

            def flaky():
                ticks.append(1)
                raise RuntimeError("boom")

            handle = AsyncioScheduler().call_every(0.01, flaky)
            await asyncio.sleep(0.045)
            handle.cancel()
            return len(ticks)

        assert asyncio.run(scenario()) >= 2


class TestThreadScheduler:
    def test_repeats_until_cancelled(self):
        ticked = threading.Event()
        ticks = []

        def tick():
            ticks.append(1)
            if len(ticks) >= 2:
                ticked.set()

        handle = ThreadScheduler().call_every(0.01, tick)
        assert ticked.wait(timeout=2.0)
        handle.cancel()
        handle.cancel()

        count = len(ticks)
        time.sleep(0.05)
        assert len(ticks) <= count + 1
