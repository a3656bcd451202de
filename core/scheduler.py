"""Deferred callback scheduling for game feedback and clocks."""

import asyncio
import heapq
import itertools

from .interfaces import Scheduler


class ManualScheduler(Scheduler):
    """Scheduler driven by an explicit virtual clock.

    Nothing runs until advance() moves the clock past a callback's due time.
    Callbacks scheduled while advancing run in the same call if they fall due.
    """

    def __init__(self):
        self.now = 0.0
        self._queue = []
        self._counter = itertools.count()
        self._cancelled = set()

    def call_later(self, delay: float, callback):
        handle = next(self._counter)
        heapq.heappush(self._queue, (self.now + delay, handle, callback))
        return handle

    def cancel(self, handle) -> None:
        self._cancelled.add(handle)

    @property
    def pending(self) -> int:
        return sum(1 for _, handle, _ in self._queue if handle not in self._cancelled)

    def advance(self, seconds: float) -> None:
        """Move the clock forward, running every callback that falls due."""
        target = self.now + seconds
        while self._queue and self._queue[0][0] <= target:
            due, handle, callback = heapq.heappop(self._queue)
            self.now = due
            if handle in self._cancelled:
                self._cancelled.discard(handle)
                continue
            callback()
        self.now = target

    def run_all(self, limit: int = 1000) -> None:
        """Run queued callbacks in due order until the queue is empty."""
        for _ in range(limit):
            if not self._queue:
                return
            self.advance(self._queue[0][0] - self.now)


class AsyncioScheduler(Scheduler):
    """Scheduler backed by the running asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None or self._loop.is_closed():
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay: float, callback):
        return self.loop.call_later(delay, callback)

    def cancel(self, handle) -> None:
        if handle is not None:
            handle.cancel()


class DelayedTransitions:
    """Outstanding deferred callbacks owned by one engine.

    cancel_all() guarantees that no callback scheduled before the call will
    run afterwards, even if the backing scheduler already dequeued it.
    """

    def __init__(self, scheduler: Scheduler):
        self.scheduler = scheduler
        self._handles = {}
        self._tokens = itertools.count()

    def schedule(self, delay: float, callback) -> int:
        token = next(self._tokens)

        def fire():
            if self._handles.pop(token, None) is None:
                return
            callback()

        self._handles[token] = self.scheduler.call_later(delay, fire)
        return token

    def cancel(self, token: int) -> None:
        handle = self._handles.pop(token, None)
        if handle is not None:
            self.scheduler.cancel(handle)

    def cancel_all(self) -> None:
        handles = list(self._handles.values())
        self._handles.clear()
        for handle in handles:
            self.scheduler.cancel(handle)

    @property
    def pending(self) -> int:
        return len(self._handles)
