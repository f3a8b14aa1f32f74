"""Deferred task scheduling for simulated processing delays"""

import asyncio
import heapq
import itertools
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Tuple


class ScheduledTask:
    """Handle for a callback scheduled to run after a delay"""

    def __init__(self, callback: Callable[..., Any], args: Tuple[Any, ...], due: float):
        self.callback = callback
        self.args = args
        self.due = due
        self._cancelled = False
        self._done = False
        self._timer: Optional[asyncio.TimerHandle] = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._done

    def cancel(self) -> None:
        if self._done:
            return
        self._cancelled = True
        if self._timer is not None:
            self._timer.cancel()

    def run(self) -> None:
        if self._cancelled or self._done:
            return
        self._done = True
        self.callback(*self.args)


class Scheduler(ABC):
    """Runs callbacks after a delay and provides an awaitable sleep"""

    @abstractmethod
    def call_later(self, delay_seconds: float, callback: Callable[..., Any], *args: Any) -> ScheduledTask:
        pass

    @abstractmethod
    async def sleep(self, seconds: float) -> None:
        pass


class AsyncioScheduler(Scheduler):
    """Timers on the running asyncio event loop (single thread, no locking needed)"""

    def call_later(self, delay_seconds: float, callback: Callable[..., Any], *args: Any) -> ScheduledTask:
        loop = asyncio.get_running_loop()
        task = ScheduledTask(callback, args, due=loop.time() + delay_seconds)
        task._timer = loop.call_later(delay_seconds, task.run)
        return task

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class ManualScheduler(Scheduler):
    """
    Virtual-clock scheduler for deterministic tests.

    Nothing fires until advance() moves the clock; sleep() advances the
    clock by the requested amount and returns immediately.
    """

    def __init__(self, start: float = 0.0):
        self.now = start
        self._queue: List[Tuple[float, int, ScheduledTask]] = []
        self._seq = itertools.count()
        self.slept: List[float] = []

    def call_later(self, delay_seconds: float, callback: Callable[..., Any], *args: Any) -> ScheduledTask:
        task = ScheduledTask(callback, args, due=self.now + delay_seconds)
        heapq.heappush(self._queue, (task.due, next(self._seq), task))
        return task

    async def sleep(self, seconds: float) -> None:
        self.slept.append(seconds)
        self.advance(seconds)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, running every task that falls due; returns how many ran"""
        target = self.now + seconds
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, task = heapq.heappop(self._queue)
            self.now = due
            if not task.cancelled:
                task.run()
                ran += 1
        self.now = target
        return ran

    @property
    def pending(self) -> int:
        return sum(1 for _, _, task in self._queue if not task.cancelled)
