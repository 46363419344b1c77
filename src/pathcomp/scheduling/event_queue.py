"""Shared intent queue, safe to push from any thread."""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Iterable

from pathcomp.scheduling.events import Event


class EventQueue:
    """Lock-guarded FIFO of pending events.

    The tick thread takes the whole batch with :meth:`swap`; producers on
    other threads only ever append.
    """

    def __init__(self) -> None:
        self._events: deque[Event] = deque()
        self._lock = threading.Lock()

    def push(self, event: Event) -> None:
        with self._lock:
            self._events.append(event)

    def extend(self, events: Iterable[Event]) -> None:
        with self._lock:
            self._events.extend(events)

    def swap(self) -> list[Event]:
        """Take every queued event and leave the queue empty."""
        with self._lock:
            batch = list(self._events)
            self._events.clear()
        return batch

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def snapshot(self) -> list[Event]:
        """Copy of the queued events, for inspection."""
        with self._lock:
            return list(self._events)
