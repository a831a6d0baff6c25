"""Throughput reporting and checkpointing for the sweep producer."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger(__name__)

__all__ = ["ProgressSnapshot", "ProgressFormatter", "ProgressReporter"]


@dataclass(frozen=True)
class ProgressSnapshot:
    """Immutable snapshot of producer progress at a point in time."""

    processed: int
    last_key: Optional[str]
    elapsed_s: float

    @property
    def rate(self) -> float:
        """Keys enqueued per second since the run started."""
        if self.elapsed_s <= 0:
            return 0.0
        return self.processed / self.elapsed_s


class ProgressFormatter:
    """Formats progress statistics for the periodic log line."""

    _COUNT_UNITS = ((1_000_000_000, "B"), (1_000_000, "M"), (1_000, "K"))

    @classmethod
    def format_count(cls, count: int) -> str:
        """Abbreviate a key count: 1.50K, 2.25M, 3.00B."""
        for scale, suffix in cls._COUNT_UNITS:
            if count >= scale:
                return f"{count / scale:.2f}{suffix}"
        return str(count)

    @staticmethod
    def format_elapsed_time(seconds: float) -> str:
        """Compact duration: 45s, 5m03s, 2h07m."""
        minutes, secs = divmod(int(seconds), 60)
        hours, minutes = divmod(minutes, 60)
        if hours:
            return f"{hours}h{minutes:02d}m"
        if minutes:
            return f"{minutes}m{secs:02d}s"
        return f"{seconds:.0f}s"

    @classmethod
    def format_progress_line(cls, snapshot: ProgressSnapshot) -> str:
        """One-line human summary, e.g. ``1.20M keys in 5m03s (3960 keys/second)``."""
        return (
            f"{cls.format_count(snapshot.processed)} keys in "
            f"{cls.format_elapsed_time(snapshot.elapsed_s)} "
            f"({snapshot.rate:.0f} keys/second)"
        )


class ProgressReporter:
    """
    Counts enqueued keys and periodically persists the last one.

    Driven entirely from the producer thread: ``observe()`` is called after
    every successful enqueue and fires a tick when at least ``interval_s``
    has passed since the previous one. Ticks that were missed under load are
    dropped, so there is at most one checkpoint write per interval.

    Args:
        store: Checkpoint store with a ``write(key)`` method
        interval_s: Minimum seconds between ticks
        clock: Monotonic time source (injectable for tests)
        bar: Optional tqdm-like object; ``update(1)`` is called per key
    """

    def __init__(
        self,
        store,
        interval_s: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        bar=None,
    ) -> None:
        self.store = store
        self.interval_s = interval_s
        self.clock = clock
        self.bar = bar
        self._processed = 0
        self._last_key: Optional[str] = None
        self._persisted_key: Optional[str] = None
        self._start: Optional[float] = None
        self._next_tick: Optional[float] = None
        self.ticks = 0

    @property
    def processed(self) -> int:
        return self._processed

    @property
    def last_key(self) -> Optional[str]:
        return self._last_key

    def start(self) -> None:
        now = self.clock()
        self._start = now
        self._next_tick = now + self.interval_s

    def observe(self, key: str) -> None:
        """Record one enqueued key; tick if the interval has elapsed."""
        if self._start is None:
            self.start()
        self._processed += 1
        self._last_key = key
        if self.bar is not None:
            self.bar.update(1)
        now = self.clock()
        if now >= self._next_tick:
            self._tick(now)

    def flush(self) -> None:
        """Persist the last enqueued key if it is not already the checkpoint."""
        if self._last_key is not None and self._last_key != self._persisted_key:
            self._persist(self._last_key)

    def snapshot(self) -> ProgressSnapshot:
        elapsed = 0.0 if self._start is None else self.clock() - self._start
        return ProgressSnapshot(
            processed=self._processed,
            last_key=self._last_key,
            elapsed_s=elapsed,
        )

    def _tick(self, now: float) -> None:
        self.ticks += 1
        self._next_tick = now + self.interval_s
        snap = self.snapshot()
        logger.info("Progress: %s", ProgressFormatter.format_progress_line(snap))
        self._persist(snap.last_key)

    def _persist(self, key: Optional[str]) -> None:
        if key is None:
            return
        try:
            self.store.write(key)
        except Exception as exc:
            # A failed write never stops the sweep.
            logger.warning("Checkpoint not saved: %s", exc)
            return
        self._persisted_key = key
