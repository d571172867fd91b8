"""
Tests for timing helpers
"""

import asyncio
import logging

import pytest

import eakwell.timing as timing
from eakwell.config import EakwellConfig, set_config
from eakwell.timing import auto_throttle, defer, delay, throttle, wait_for


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class TestThrottle:
    """Rate-limited trailing-edge invocation"""

    @pytest.fixture
    def armed(self, monkeypatch):
        """Capture deferred calls instead of scheduling them"""
        calls = []

        def fake_defer(cb, seconds=0, *args):
            calls.append((cb, seconds))
            return object()

        monkeypatch.setattr(timing, "defer", fake_defer)
        return calls

    def test_first_call_is_immediate(self, armed):
        clock = FakeClock()
        received = []
        wrapped = throttle(0.1, lambda *args: received.append(args), clock=clock)

        wrapped("a", 1)
        assert received == [("a", 1)]
        assert armed == []

    def test_calls_inside_window_arm_one_timer_with_latest_args(self, armed):
        clock = FakeClock()
        received = []
        wrapped = throttle(0.1, lambda *args: received.append(args), clock=clock)

        wrapped("t0")
        clock.now = 0.01
        wrapped("t10")
        clock.now = 0.05
        wrapped("t50")

        assert received == [("t0",)]
        assert len(armed) == 1
        fire, seconds = armed[0]
        assert seconds == pytest.approx(0.09)

        clock.now = 0.1
        fire()
        assert received == [("t0",), ("t50",)]

    def test_call_after_window_arms_zero_delay(self, armed):
        clock = FakeClock()
        received = []
        wrapped = throttle(0.1, lambda *args: received.append(args), clock=clock)

        wrapped(1)
        clock.now = 0.5
        wrapped(2)
        assert armed[0][1] == 0.0
        armed[0][0]()
        assert received == [(1,), (2,)]

    def test_new_cycle_after_trailing_call(self, armed):
        clock = FakeClock()
        received = []
        wrapped = throttle(0.1, lambda *args: received.append(args), clock=clock)

        wrapped(1)
        clock.now = 0.02
        wrapped(2)
        clock.now = 0.1
        armed[0][0]()

        clock.now = 0.13
        wrapped(3)
        assert len(armed) == 2
        assert armed[1][1] == pytest.approx(0.07)

    def test_default_interval_comes_from_config(self, armed):
        set_config(EakwellConfig(throttle_interval=2.0))
        clock = FakeClock()
        wrapped = throttle(None, lambda *args: None, clock=clock)

        wrapped()
        clock.now = 0.5
        wrapped()
        assert armed[0][1] == pytest.approx(1.5)

    def test_reentrant_call_from_leading_call_arms_one_timer(self, armed):
        clock = FakeClock()
        received = []

        def cb(*args):
            received.append(args)
            if args == ("outer",):
                wrapped("inner")

        wrapped = throttle(0.1, cb, clock=clock)
        wrapped("outer")
        assert received == [("outer",)]
        assert len(armed) == 1
        assert armed[0][1] == pytest.approx(0.1)

        clock.now = 0.05
        wrapped("again")
        assert len(armed) == 1

        clock.now = 0.1
        armed[0][0]()
        assert received == [("outer",), ("again",)]

    def test_reentrant_call_from_trailing_call_starts_new_cycle(self, armed):
        clock = FakeClock()
        received = []

        def cb(*args):
            received.append(args)
            if args == ("outer",):
                wrapped("inner")

        wrapped = throttle(0.1, cb, clock=clock)
        wrapped(1)
        clock.now = 0.02
        wrapped("outer")
        clock.now = 0.1
        armed[0][0]()

        assert received == [(1,), ("outer",)]
        assert len(armed) == 2
        assert armed[1][1] == pytest.approx(0.1)

        clock.now = 0.2
        armed[1][0]()
        assert received == [(1,), ("outer",), ("inner",)]

    @pytest.mark.asyncio
    async def test_trailing_call_on_event_loop(self):
        loop = asyncio.get_running_loop()
        received = []
        wrapped = throttle(0.1, lambda *args: received.append((args, loop.time())))

        start = loop.time()
        wrapped(0)
        await asyncio.sleep(0.01)
        wrapped(10)
        await asyncio.sleep(0.04)
        wrapped(50)
        assert [args for args, _ in received] == [(0,)]

        await asyncio.sleep(0.15)
        assert [args for args, _ in received] == [(0,), (50,)]
        assert received[1][1] - start >= 0.09


class TestAutoThrottle:
    """Single-flight invocation of asynchronous callbacks"""

    def test_calls_while_in_flight_collapse_into_one(self):
        pending = []
        wrapped = auto_throttle(pending.append)

        wrapped()
        wrapped()
        wrapped()
        assert len(pending) == 1

        pending[0]()
        assert len(pending) == 2

        pending[1]()
        assert len(pending) == 2

    def test_idle_wrapper_starts_immediately(self):
        pending = []
        wrapped = auto_throttle(pending.append)

        wrapped()
        pending[0]()
        wrapped()
        assert len(pending) == 2

    def test_synchronous_completion(self):
        starts = []

        def work(done):
            starts.append(1)
            done()

        wrapped = auto_throttle(work)
        wrapped()
        wrapped()
        assert len(starts) == 2

    def test_reentrant_call_before_completion_runs_once_more(self):
        starts = []
        active = []

        def work(done):
            starts.append(1)
            active.append(1)
            assert len(active) == 1
            if len(starts) == 1:
                wrapped()
                wrapped()
            active.pop()
            done()

        wrapped = auto_throttle(work)
        wrapped()
        assert len(starts) == 2
        assert active == []

        wrapped()
        assert len(starts) == 3

    def test_second_completion_signal_is_ignored(self, caplog):
        pending = []
        wrapped = auto_throttle(pending.append)

        wrapped()
        pending[0]()
        wrapped()
        wrapped()

        with caplog.at_level(logging.WARNING, logger="eakwell.timing"):
            pending[0]()
        assert "more than once" in caplog.text
        # The second invocation is still in flight
        assert len(pending) == 2

        pending[1]()
        assert len(pending) == 3

    @pytest.mark.asyncio
    async def test_continuation_held_by_event_loop(self):
        loop = asyncio.get_running_loop()
        starts = []

        def work(done):
            starts.append(loop.time())
            loop.call_later(0.05, done)

        wrapped = auto_throttle(work)
        wrapped()
        wrapped()
        wrapped()
        assert len(starts) == 1

        await asyncio.sleep(0.2)
        assert len(starts) == 2
        assert starts[1] - starts[0] >= 0.04

    @pytest.mark.asyncio
    async def test_coroutine_function(self):
        running = []
        overlaps = []

        async def work():
            overlaps.append(len(running))
            running.append(1)
            await asyncio.sleep(0.02)
            running.pop()

        wrapped = auto_throttle(work)
        wrapped()
        wrapped()
        wrapped()

        await asyncio.sleep(0.1)
        assert overlaps == [0, 0]

    @pytest.mark.asyncio
    async def test_failing_coroutine_does_not_stall(self, caplog):
        runs = []

        async def work():
            runs.append(1)
            await asyncio.sleep(0)
            raise ValueError("nope")

        wrapped = auto_throttle(work)
        with caplog.at_level(logging.ERROR, logger="eakwell.timing"):
            wrapped()
            wrapped()
            await asyncio.sleep(0.05)

        assert len(runs) == 2
        assert "nope" in caplog.text


class TestScheduling:
    """defer, delay and wait_for"""

    @pytest.mark.asyncio
    async def test_defer_runs_later_with_args(self):
        received = []
        handle = defer(received.append, 0.01, "x")
        assert received == []
        assert isinstance(handle, asyncio.TimerHandle)

        await asyncio.sleep(0.05)
        assert received == ["x"]

    @pytest.mark.asyncio
    async def test_defer_can_be_cancelled(self):
        received = []
        handle = defer(received.append, 0.01, "x")
        handle.cancel()
        await asyncio.sleep(0.05)
        assert received == []

    @pytest.mark.asyncio
    async def test_delay(self):
        loop = asyncio.get_running_loop()
        start = loop.time()
        await delay(0.02)
        assert loop.time() - start >= 0.015

    @pytest.mark.asyncio
    async def test_wait_for_calls_back_once_condition_holds(self):
        state = {"ready": False}
        calls = []

        task = wait_for(lambda: state["ready"], lambda: calls.append("done"), interval=0.01)
        await asyncio.sleep(0.03)
        assert calls == []

        state["ready"] = True
        await asyncio.wait_for(task, timeout=1)
        assert calls == ["done"]

    @pytest.mark.asyncio
    async def test_wait_for_can_be_cancelled(self):
        calls = []
        task = wait_for(lambda: False, lambda: calls.append("done"), interval=0.01)
        await asyncio.sleep(0.03)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert calls == []
