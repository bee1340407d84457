"""Pull-based queue of committed lines with high-water-mark backpressure."""

from __future__ import annotations

import asyncio
from collections import deque
from typing import AsyncIterator, Callable


class LineStream:
    """FIFO of committed lines between the editor and a consumer.

    ``push`` never blocks and never drops a line; it returns ``False`` once
    the number of buffered lines reaches ``high_water_mark`` so the producer
    knows the consumer is behind. Drain listeners fire when a read brings a
    full buffer back under the mark. ``end`` marks end-of-data: pending
    lines can still be read, then readers get ``None``.
    """

    def __init__(self, *, high_water_mark: int = 16) -> None:
        if high_water_mark < 1:
            raise ValueError("high_water_mark must be at least 1")
        self._high_water_mark = high_water_mark
        self._queue: deque[str] = deque()
        self._ended = False
        self._needs_drain = False
        self._readable = asyncio.Event()
        self._drain_listeners: list[Callable[[], None]] = []

    @property
    def high_water_mark(self) -> int:
        return self._high_water_mark

    @property
    def length(self) -> int:
        return len(self._queue)

    @property
    def ended(self) -> bool:
        return self._ended

    @property
    def needs_drain(self) -> bool:
        return self._needs_drain

    def push(self, line: str) -> bool:
        """Queue *line*; returns ``False`` when the producer should pause."""
        if self._ended:
            raise RuntimeError("push() after end()")
        self._queue.append(line)
        self._readable.set()
        if len(self._queue) >= self._high_water_mark:
            self._needs_drain = True
            return False
        return True

    def end(self) -> bool:
        """Signal end-of-data. Returns ``False`` if already ended."""
        if self._ended:
            return False
        self._ended = True
        self._readable.set()
        return True

    def on_drain(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Register a drain listener. Returns an unsubscribe function."""
        self._drain_listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._drain_listeners:
                self._drain_listeners.remove(listener)

        return unsubscribe

    def read_nowait(self) -> str | None:
        """Next buffered line, or ``None`` when nothing is queued."""
        if not self._queue:
            return None
        return self._shift()

    async def read(self) -> str | None:
        """Wait for the next line; ``None`` once ended and drained."""
        while not self._queue:
            if self._ended:
                return None
            self._readable.clear()
            await self._readable.wait()
        return self._shift()

    def __aiter__(self) -> AsyncIterator[str]:
        return self

    async def __anext__(self) -> str:
        line = await self.read()
        if line is None:
            raise StopAsyncIteration
        return line

    def _shift(self) -> str:
        line = self._queue.popleft()
        if self._needs_drain and len(self._queue) < self._high_water_mark:
            self._needs_drain = False
            for listener in list(self._drain_listeners):
                listener()
        return line
