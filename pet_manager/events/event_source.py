"""Event source: merges key input and a periodic tick into one ordered queue."""

from __future__ import annotations

import contextlib
import queue
import threading
import time
from typing import Callable

from ..config import TICK_INTERVAL
from ..log import pet_log
from .event_types import InputEvent, SourceFailure, TickEvent
from .key_poller import KeyPoller


class EventSource:
    """Background producer of ``InputEvent`` / ``TickEvent`` values.

    The worker thread blocks on the poller for whatever is left of the
    current tick interval, emits any key it gets, then emits a tick once
    the interval has elapsed. Keys therefore always come out in device
    order and ahead of a tick that falls due at the same moment.

    ``max_pending`` bounds how far ticks may pile up behind a slow
    consumer: once that many events are queued, ticks are dropped. Keys
    are never dropped. ``0`` means unbounded.
    """

    def __init__(
        self,
        poller: KeyPoller,
        tick_interval: float = TICK_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        max_pending: int = 0,
    ) -> None:
        if tick_interval <= 0:
            raise ValueError(f"tick_interval must be positive, got {tick_interval}")
        self.poller = poller
        self.tick_interval = tick_interval
        self.max_pending = max_pending
        self._clock = clock
        self._queue: queue.Queue = queue.Queue()
        self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run,
            daemon=True,
            name="pet-event-source",
        )
        self.dropped_ticks = 0

    def start(self) -> None:
        self._thread.start()

    def stop(self, timeout: float = 1.0) -> None:
        """Ask the worker to finish and wait for it."""
        self._stop_event.set()
        if self._thread.is_alive():
            self._thread.join(timeout=timeout)

    @property
    def running(self) -> bool:
        return self._thread.is_alive()

    def next_event(self, timeout: float | None = None):
        """Block for the next event. Raises ``queue.Empty`` on timeout."""
        return self._queue.get(timeout=timeout)

    # -- Worker --

    def _run(self) -> None:
        last_tick = self._clock()
        try:
            while not self._stop_event.is_set():
                timeout = max(0.0, self.tick_interval - (self._clock() - last_tick))
                key = self.poller.poll(timeout)
                if key is not None:
                    self._queue.put(InputEvent(key))
                if self._clock() - last_tick >= self.tick_interval:
                    self._put_tick()
                    last_tick = self._clock()
        except Exception as exc:
            # Deliver first: the consumer must hear about it even if logging fails too
            self._queue.put(SourceFailure(exc))
            with contextlib.suppress(OSError):
                pet_log(f"ERROR: input device failed, event source stopping: {exc!r}")

    def _put_tick(self) -> None:
        if self.max_pending and self._queue.qsize() >= self.max_pending:
            self.dropped_ticks += 1
            return
        self._queue.put(TickEvent())
