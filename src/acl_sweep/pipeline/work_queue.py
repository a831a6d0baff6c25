# acl_sweep/pipeline/work_queue.py
"""Bounded hand-off between the producer and the worker pool."""
from __future__ import annotations

import queue
import threading
from typing import Union

from acl_sweep.errors import Cancelled

__all__ = ["CLOSED", "WorkQueue"]


class _Closed:
    """Sentinel a worker receives once the producer has no more keys."""

    def __repr__(self) -> str:
        return "CLOSED"


CLOSED = _Closed()


class WorkQueue:
    """
    Bounded FIFO of keys with cancellation-aware blocking.

    One producer puts, many workers compete for gets. Blocking calls wake up
    every ``poll_s`` seconds to look at the cancel event.
    """

    def __init__(self, maxsize: int, *, poll_s: float = 0.1) -> None:
        if maxsize < 1:
            raise ValueError(f"maxsize must be >= 1, got {maxsize}")
        self.maxsize = maxsize
        self.poll_s = poll_s
        self._q: queue.Queue = queue.Queue(maxsize=maxsize)

    def put(self, key: str, cancel_event: threading.Event) -> bool:
        """Block until ``key`` is queued (True) or the run is cancelled (False)."""
        return self._put(key, cancel_event)

    def get(self, cancel_event: threading.Event) -> Union[str, _Closed]:
        """Next key, or CLOSED; raises Cancelled once the run is cancelled."""
        while True:
            if cancel_event.is_set():
                raise Cancelled()
            try:
                return self._q.get(timeout=self.poll_s)
            except queue.Empty:
                continue

    def close(self, consumers: int, cancel_event: threading.Event) -> None:
        """Queue one CLOSED per consumer, behind every key already queued."""
        for _ in range(consumers):
            if not self._put(CLOSED, cancel_event):
                return

    def qsize(self) -> int:
        return self._q.qsize()

    def _put(self, item, cancel_event: threading.Event) -> bool:
        while not cancel_event.is_set():
            try:
                self._q.put(item, timeout=self.poll_s)
                return True
            except queue.Full:
                continue
        return False
