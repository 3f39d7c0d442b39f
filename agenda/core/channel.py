"""One-directional message channels between background workers and the UI loop.

A channel is an unbounded multiple-producer/single-consumer queue. Producers
(the refresh job, reminder timers, the login thread) call ``send``; the
single consumer either drains it without blocking once per tick, or waits on
it with a deadline during startup.
"""

import queue
import threading
from collections.abc import Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class ChannelClosed(Exception):
    """Raised when sending on a channel whose consumer has gone away."""


class Channel(Generic[T]):
    """Unbounded MPSC queue with non-blocking drain and explicit close."""

    def __init__(self, name: str = "channel"):
        self.name = name
        self._queue: queue.SimpleQueue[T] = queue.SimpleQueue()
        self._closed = threading.Event()

    def send(self, message: T) -> None:
        if self._closed.is_set():
            raise ChannelClosed(f"{self.name} is closed")
        self._queue.put(message)

    def drain(self) -> Iterator[T]:
        """Yield every message available right now, in arrival order."""
        while True:
            try:
                yield self._queue.get_nowait()
            except queue.Empty:
                return

    def recv(self, timeout: float | None = None) -> T:
        """Block for the next message; raises TimeoutError past the deadline."""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            raise TimeoutError(f"Nothing received on {self.name} within {timeout}s") from None

    def close(self) -> None:
        """Refuse further sends. Buffered messages can still be drained."""
        self._closed.set()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def empty(self) -> bool:
        return self._queue.empty()
