"""
Timing helpers built on the asyncio event loop

All intervals are in seconds. Helpers that schedule work (defer, the
trailing call of a throttled function, wait_for) need a running loop in
the calling thread.
"""

import asyncio
import inspect
import logging
import time
from typing import Any, Awaitable, Callable, Optional

from .config import get_config

logger = logging.getLogger(__name__)

Done = Callable[[], None]


def defer(cb: Callable[..., Any], seconds: float = 0, *args: Any) -> asyncio.TimerHandle:
    """Run cb(*args) once, no earlier than <seconds> from now"""
    loop = asyncio.get_running_loop()
    return loop.call_later(max(0.0, seconds), cb, *args)


def delay(seconds: float) -> Awaitable[None]:
    """Awaitable that resolves after <seconds>"""
    return asyncio.sleep(seconds)


def wait_for(
    condition: Callable[[], Any],
    cb: Callable[[], Any],
    interval: Optional[float] = None
) -> "asyncio.Task[None]":
    """
    Keep checking <condition> every <interval> seconds until it holds,
    then call <cb> once. Cancel the returned task to stop waiting.
    """
    if interval is None:
        interval = get_config().wait_for_interval

    async def poll() -> None:
        while True:
            await asyncio.sleep(interval)
            if condition():
                cb()
                return

    return asyncio.get_running_loop().create_task(poll())


def throttle(
    thresh: Optional[float],
    cb: Callable[..., Any],
    clock: Callable[[], float] = time.monotonic
) -> Callable[..., None]:
    """
    Return a wrapper that calls <cb> at most once every <thresh> seconds

    The first call goes through immediately. Later calls arm a single
    deferred call for the rest of the window; calls made while it is
    pending only replace the arguments it will be made with.
    """
    if thresh is None:
        thresh = get_config().throttle_interval

    last_invocation: Optional[float] = None
    pending: Optional[asyncio.TimerHandle] = None
    trailing_args: tuple = ()

    def fire() -> None:
        nonlocal last_invocation, pending
        last_invocation = clock()
        pending = None
        cb(*trailing_args)

    def wrapper(*args: Any) -> None:
        nonlocal last_invocation, pending, trailing_args
        if last_invocation is None:
            last_invocation = clock()
            cb(*args)
            return

        trailing_args = args
        if pending is None:
            elapsed = clock() - last_invocation
            pending = defer(fire, max(0.0, thresh - elapsed))

    return wrapper


def auto_throttle(cb: Callable[..., Any]) -> Callable[[], None]:
    """
    Return a wrapper that never runs <cb> concurrently with itself

    <cb> receives a ``done`` continuation and must call it once its
    asynchronous work has finished. Calls made while an invocation is in
    flight collapse into a single follow-up invocation started right after
    ``done`` fires.

    A coroutine function is also accepted: it is scheduled as a task and
    ``done`` is signalled when the task finishes, whether it succeeded or not.
    """
    if inspect.iscoroutinefunction(cb):
        return auto_throttle(_as_continuation(cb))

    running = False
    update_requested = False

    def start() -> None:
        nonlocal running
        fired = False

        def done() -> None:
            nonlocal running, update_requested, fired
            if fired:
                logger.warning(f"Completion of {_name(cb)} signalled more than once; ignoring")
                return
            fired = True
            running = False
            if update_requested:
                update_requested = False
                start()

        running = True
        cb(done)

    def wrapper() -> None:
        nonlocal update_requested
        if running:
            update_requested = True
        else:
            start()

    return wrapper


def _as_continuation(coro_fn: Callable[[], Awaitable[Any]]) -> Callable[[Done], None]:
    def run(done: Done) -> None:
        task = asyncio.get_running_loop().create_task(coro_fn())

        def finished(t: "asyncio.Task[Any]") -> None:
            if not t.cancelled() and t.exception() is not None:
                logger.error(f"{_name(coro_fn)} failed: {t.exception()!r}")
            done()

        task.add_done_callback(finished)

    return run


def _name(fn: Callable[..., Any]) -> str:
    return getattr(fn, '__qualname__', repr(fn))
