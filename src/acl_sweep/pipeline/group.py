# acl_sweep/pipeline/group.py
"""First-error-wins supervision of the producer and worker threads."""
from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Callable, List, Optional

from acl_sweep.errors import Cancelled

logger = logging.getLogger(__name__)

__all__ = ["CancellationGroup"]


class CancellationGroup:
    """
    Run tasks on a thread pool as one unit.

    The first exception raised by any task is recorded and ``cancel_event`` is
    set; every other task is expected to watch the event at its next blocking
    point and bail out. ``wait()`` joins all tasks and re-raises that first
    exception.

    Usage:
        with CancellationGroup(max_tasks=11) as group:
            group.go(produce, ...)
            for i in range(10):
                group.go(run_worker, i, ...)
            group.wait()
    """

    def __init__(self, max_tasks: int, *, name: str = "acl") -> None:
        self.cancel_event = threading.Event()
        self._executor = ThreadPoolExecutor(
            max_workers=max_tasks, thread_name_prefix=name
        )
        self._futures: List[Future] = []
        self._lock = threading.Lock()
        self._first_error: Optional[BaseException] = None

    @property
    def first_error(self) -> Optional[BaseException]:
        with self._lock:
            return self._first_error

    def go(self, fn: Callable, *args, name: Optional[str] = None, **kwargs) -> Future:
        """Start ``fn(*args, **kwargs)`` as a supervised task."""
        label = name or getattr(fn, "__name__", "task")

        def _task():
            try:
                return fn(*args, **kwargs)
            except Exception as exc:
                self._record(exc, label)
                raise

        fut = self._executor.submit(_task)
        self._futures.append(fut)
        return fut

    def cancel(self, reason: Optional[BaseException] = None) -> None:
        """Cancel from outside the tasks (e.g. Ctrl-C in the main thread)."""
        self._record(reason or Cancelled(), "caller")

    def wait(self) -> None:
        """Block until every task has exited; raise the first error, if any."""
        wait(self._futures)
        err = self.first_error
        if err is not None:
            raise err

    def shutdown(self) -> None:
        self.cancel_event.set()
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "CancellationGroup":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.shutdown()
        return False

    def _record(self, exc: BaseException, label: str) -> None:
        with self._lock:
            first = self._first_error is None
            if first:
                self._first_error = exc
        if first and not isinstance(exc, Cancelled):
            logger.error("Task %s failed, cancelling the run: %s", label, exc)
        elif first:
            logger.info("Run cancelled by %s: %s", label, exc)
        self.cancel_event.set()
