# acl_sweep/pipeline/worker.py
from __future__ import annotations

import logging
import threading

from setproctitle import setthreadtitle

from acl_sweep.errors import Cancelled, MutationError
from acl_sweep.io.collection import RemoteCollection
from acl_sweep.pipeline.work_queue import CLOSED, WorkQueue

logger = logging.getLogger(__name__)

__all__ = ["run_worker"]


def run_worker(
    worker_id: int,
    work: WorkQueue,
    collection: RemoteCollection,
    cancel_event: threading.Event,
) -> int:
    """
    Pull keys from ``work`` and mutate each one exactly once.

    Returns the number of keys mutated once the queue is closed. Raises
    Cancelled when the run is cancelled and MutationError (wrapping the
    client's exception) on the first failed mutation; there are no retries.
    """
    setthreadtitle(f"acl:worker-{worker_id:03d}")
    mutated = 0

    while True:
        key = work.get(cancel_event)
        if key is CLOSED:
            logger.debug("Worker %s: queue closed after %d keys", worker_id, mutated)
            return mutated
        if cancel_event.is_set():
            raise Cancelled()

        try:
            collection.mutate(key, cancel_event=cancel_event)
        except Cancelled:
            raise
        except Exception as exc:
            logger.error("Worker %s: mutation failed - %s: %s", worker_id, key, exc)
            raise MutationError(key, exc) from exc

        mutated += 1
        logger.debug("Worker %s: mutated %s", worker_id, key)
