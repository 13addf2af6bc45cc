"""Cancellable deadline shared by the runs of one scanner."""

import asyncio
import threading
import time
from typing import Optional, Set, Tuple


class ScanContext:
    """Cancellation signal with an optional deadline.

    A context is done once its deadline has passed or ``cancel()`` was called.
    It is safe to cancel from any thread while a run awaits it: every waiting
    event loop is woken through ``call_soon_threadsafe``.
    """

    def __init__(self, timeout: Optional[float] = None):
        """Initialize scan context.

        Args:
            timeout: Seconds from now until the context expires, None for never
        """
        if timeout is not None and timeout < 0:
            raise ValueError("timeout must not be negative")

        self.timeout = timeout
        self.deadline = time.monotonic() + timeout if timeout is not None else None
        self._cancelled = threading.Event()
        self._lock = threading.Lock()
        self._waiters: Set[Tuple[asyncio.AbstractEventLoop, asyncio.Event]] = set()

    @classmethod
    def background(cls) -> 'ScanContext':
        """Context that never expires unless cancelled."""
        return cls()

    def cancel(self) -> None:
        with self._lock:
            self._cancelled.set()
            for loop, event in self._waiters:
                if not loop.is_closed():
                    loop.call_soon_threadsafe(event.set)

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, None without a deadline."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def done(self) -> bool:
        if self._cancelled.is_set():
            return True
        return self.deadline is not None and time.monotonic() >= self.deadline

    async def wait(self) -> None:
        """Return once the context is done."""
        waiter = (asyncio.get_running_loop(), asyncio.Event())
        with self._lock:
            if self._cancelled.is_set():
                return
            self._waiters.add(waiter)

        try:
            while not self.done():
                remaining = self.remaining()
                if remaining is None:
                    await waiter[1].wait()
                    continue
                try:
                    await asyncio.wait_for(waiter[1].wait(), remaining)
                except asyncio.TimeoutError:
                    # timers may fire marginally early, done() decides
                    continue
        finally:
            with self._lock:
                self._waiters.discard(waiter)

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(timeout={self.timeout}, "
                f"cancelled={self.cancelled})")
