# acl_sweep/pipeline/producer.py
from __future__ import annotations

import logging
import threading

from setproctitle import setthreadtitle

from acl_sweep.pipeline.progress import ProgressReporter
from acl_sweep.pipeline.source import ItemSource
from acl_sweep.pipeline.work_queue import WorkQueue

logger = logging.getLogger(__name__)

__all__ = ["produce"]


def produce(
    source: ItemSource,
    work: WorkQueue,
    reporter: ProgressReporter,
    cancel_event: threading.Event,
    consumers: int,
) -> int:
    """
    Stream every key from ``source`` into ``work``; the only writer of progress.

    Keys are enqueued in listing order. Each successful enqueue is reported
    to ``reporter`` so that the checkpoint only ever names an enqueued key.
    When the source is exhausted the last key is checkpointed and the queue
    is closed, letting workers drain what is left. If the run is cancelled
    the producer stops quietly; the error that caused it is already recorded.

    Returns the number of keys enqueued.
    """
    setthreadtitle("acl:producer")
    reporter.start()
    try:
        for key in source:
            if not work.put(key, cancel_event):
                logger.info(
                    "Producer stopping on cancellation after %d keys",
                    reporter.processed,
                )
                return reporter.processed
            reporter.observe(key)
    except Exception:
        logger.info(
            "Producer failed after %d keys (last enqueued %r)",
            reporter.processed,
            reporter.last_key,
        )
        raise

    logger.info(
        "Listing exhausted: %d keys in %d pages",
        reporter.processed,
        source.pages_fetched,
    )
    reporter.flush()
    work.close(consumers, cancel_event)
    return reporter.processed
