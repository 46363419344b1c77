"""Deferred background operations polled from the tick thread.

A :class:`PendingOperation` is a slot that moves idle -> awaiting -> idle.
``spawn`` starts one short-lived worker thread that runs a blocking callable
(typically a native file dialog) and sends the outcome over a one-shot
channel. The tick thread calls ``poll`` once per pass and never blocks.

Usage:
    slot = PendingOperation("save-dialog")
    if not slot.busy:
        slot.spawn(lambda: dialog.pick_save_file("ccmp", "Untitled"))
    outcome = slot.poll()
    if outcome is None:
        ...  # still waiting, try again next tick
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Outcome(Generic[T]):
    """Result sent back by a worker: a value, or the exception it raised."""

    value: T | None = None
    error: Exception | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class PendingOperation(Generic[T]):
    """Single-slot, single-producer/single-consumer background operation."""

    def __init__(self, name: str) -> None:
        self._name = name
        self._channel: queue.SimpleQueue[Outcome[T]] | None = None
        self._thread: threading.Thread | None = None
        self.spawn_count = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def busy(self) -> bool:
        return self._channel is not None

    def spawn(self, task: Callable[[], T]) -> None:
        """Run ``task`` on a worker thread.

        Raises:
            RuntimeError: If an operation is already in flight in this slot.
        """
        if self._channel is not None:
            raise RuntimeError(f"{self._name} already has an operation in flight")

        channel: queue.SimpleQueue[Outcome[T]] = queue.SimpleQueue()

        def worker() -> None:
            try:
                channel.put(Outcome(value=task()))
            except Exception as e:  # noqa: BLE001 - forwarded to the tick thread
                channel.put(Outcome(error=e))

        self._channel = channel
        self._thread = threading.Thread(target=worker, daemon=True, name=f"pending-{self._name}")
        self.spawn_count += 1
        self._thread.start()
        logger.debug("Spawned %s worker", self._name)

    def poll(self) -> Outcome[T] | None:
        """Non-blocking check for the worker's outcome.

        Returns:
            The outcome once available (the slot is then idle again), or None
            while the worker is still running or when nothing is in flight.
        """
        if self._channel is None:
            return None
        try:
            outcome = self._channel.get_nowait()
        except queue.Empty:
            return None
        self._channel = None
        self._thread = None
        logger.debug("%s resolved", self._name)
        return outcome
