"""Cancellable repeating ticks driven by a per-frame callback.

A scheduled task runs once at least ``interval_provider()`` milliseconds
have passed since it last ran (or since it was scheduled). The provider is
re-read on every frame, so the interval can change between ticks without
rescheduling.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)

FRAME_INTERVAL_MS = 16.0

IntervalProvider = Callable[[], float]
TickCallback = Callable[[], None]


def monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class TickHandle:
    """A scheduled repeating task. Cancelling stops it immediately."""

    def __init__(
        self,
        interval_provider: IntervalProvider,
        callback: TickCallback,
        started_at: float,
    ) -> None:
        self.interval_provider = interval_provider
        self.callback = callback
        self.last_run = started_at
        self.runs = 0
        self._cancelled = False
        self._on_cancel: Callable[[TickHandle], None] | None = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if self._on_cancel is not None:
            self._on_cancel(self)

    def poll(self, now: float) -> bool:
        """Run the callback if due at *now*. Returns True if it ran."""
        if self._cancelled:
            return False
        if now - self.last_run < self.interval_provider():
            return False
        self.last_run = now
        self.runs += 1
        self.callback()
        return True


class Scheduler(Protocol):
    def schedule_repeating(
        self, interval_provider: IntervalProvider, callback: TickCallback,
    ) -> TickHandle: ...


class FrameScheduler:
    """Scheduler whose frames are driven explicitly by the caller.

    ``clock`` returns milliseconds; tests pass a fake one and call
    :meth:`advance` to step time forward one frame at a time.
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock
        self._now = 0.0
        self._handles: list[TickHandle] = []

    def now(self) -> float:
        return self._clock() if self._clock is not None else self._now

    @property
    def active_handles(self) -> list[TickHandle]:
        return [h for h in self._handles if not h.cancelled]

    def schedule_repeating(
        self, interval_provider: IntervalProvider, callback: TickCallback,
    ) -> TickHandle:
        handle = TickHandle(interval_provider, callback, self.now())
        handle._on_cancel = self._forget
        self._handles.append(handle)
        return handle

    def frame(self, now: float | None = None) -> int:
        """Run one frame at *now*. Returns the number of callbacks fired."""
        if now is None:
            now = self.now()
        else:
            self._now = now
        fired = 0
        # A callback may cancel any handle, including ones later in the list.
        for handle in list(self._handles):
            if handle.poll(now):
                fired += 1
        return fired

    def advance(self, ms: float, frame_ms: float = FRAME_INTERVAL_MS) -> int:
        """Step the internal clock forward by *ms* in frame-sized increments."""
        if self._clock is not None:
            raise RuntimeError("advance() requires the internal clock.")
        fired = 0
        target = self._now + ms
        while self._now < target:
            fired += self.frame(min(self._now + frame_ms, target))
        return fired

    def _forget(self, handle: TickHandle) -> None:
        if handle in self._handles:
            self._handles.remove(handle)


class AsyncioScheduler:
    """Scheduler running each handle as an asyncio task on the current loop."""

    def __init__(self, frame_ms: float = FRAME_INTERVAL_MS) -> None:
        if frame_ms <= 0:
            raise ValueError("frame_ms must be positive.")
        self.frame_ms = frame_ms
        self._tasks: dict[TickHandle, asyncio.Task] = {}

    def schedule_repeating(
        self, interval_provider: IntervalProvider, callback: TickCallback,
    ) -> TickHandle:
        loop = asyncio.get_running_loop()
        handle = TickHandle(interval_provider, callback, loop.time() * 1000.0)
        handle._on_cancel = self._cancel_task
        self._tasks[handle] = loop.create_task(self._run(handle))
        return handle

    async def _run(self, handle: TickHandle) -> None:
        loop = asyncio.get_running_loop()
        try:
            while not handle.cancelled:
                await asyncio.sleep(self.frame_ms / 1000.0)
                handle.poll(loop.time() * 1000.0)
        except asyncio.CancelledError:
            pass
        except Exception:
            logger.exception("Tick callback %r failed; stopping it.", handle.callback)
            handle.cancel()
        finally:
            self._tasks.pop(handle, None)

    def _cancel_task(self, handle: TickHandle) -> None:
        task = self._tasks.pop(handle, None)
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()

    async def shutdown(self) -> None:
        """Cancel every running tick task and wait for them to finish."""
        handles = list(self._tasks)
        tasks = list(self._tasks.values())
        for handle in handles:
            handle.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("Scheduler shut down (%d task(s) cancelled).", len(tasks))
