# acl_sweep/pipeline/orchestrate.py
"""Wire the source, queue, workers and reporter into one supervised run."""
from __future__ import annotations

import logging
import time
from contextlib import ExitStack
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from setproctitle import setproctitle
from tqdm import tqdm

from acl_sweep.config import PipelineConfig
from acl_sweep.errors import Cancelled
from acl_sweep.io.checkpoint import FileCheckpointStore
from acl_sweep.io.collection import RemoteCollection
from acl_sweep.io.s3 import S3Collection
from acl_sweep.pipeline.group import CancellationGroup
from acl_sweep.pipeline.producer import produce
from acl_sweep.pipeline.progress import ProgressReporter
from acl_sweep.pipeline.report import log_run_summary
from acl_sweep.pipeline.source import ItemSource
from acl_sweep.pipeline.work_queue import WorkQueue
from acl_sweep.pipeline.worker import run_worker

logger = logging.getLogger(__name__)

__all__ = ["RunResult", "run_pipeline", "sweep_bucket"]


@dataclass(frozen=True)
class RunResult:
    """Outcome of a run: the processed count and the first error, if any."""

    processed: int
    last_key: Optional[str]
    error: Optional[BaseException]
    start_time: datetime
    end_time: datetime

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def interrupted(self) -> bool:
        return isinstance(self.error, Cancelled)


def run_pipeline(
    config: PipelineConfig,
    collection: RemoteCollection,
    store,
    *,
    clock: Callable[[], float] = time.monotonic,
    poll_s: float = 0.1,
) -> RunResult:
    """
    Apply ``collection.mutate`` to every key of ``collection``.

    Process
    -------
    1. Read the checkpoint once; listing starts strictly after it
    2. Start one producer and ``config.workers`` workers under a
       CancellationGroup sharing a bounded WorkQueue
    3. Producer enqueues keys in listing order; the ProgressReporter logs
       throughput and checkpoints the last enqueued key every interval
    4. First failure anywhere cancels everything; Ctrl-C does the same
    5. Return a RunResult (never raises for pipeline failures)
    """
    setproctitle("acl:main")
    start_time = datetime.now()

    start_after = store.read()
    queue_size = config.effective_queue_size

    log_run_summary(
        bucket=config.bucket,
        checkpoint_path=str(config.checkpoint_path),
        start_after=start_after,
        canned_acl=config.canned_acl,
        workers=config.workers,
        queue_size=queue_size,
        page_size=config.page_size,
        report_interval_s=config.report_interval_s,
        start_time=start_time,
        endpoint_url=config.endpoint_url,
    )

    source = ItemSource(collection, start_after=start_after, page_size=config.page_size)
    work = WorkQueue(queue_size, poll_s=poll_s)
    error: Optional[BaseException] = None

    with ExitStack() as stack:
        bar = None
        if config.show_progress:
            bar = stack.enter_context(
                tqdm(desc="Keys enqueued", unit="keys", ncols=100, leave=False)
            )
        reporter = ProgressReporter(
            store, config.report_interval_s, clock=clock, bar=bar
        )
        group = stack.enter_context(CancellationGroup(config.workers + 1))

        group.go(
            produce, source, work, reporter, group.cancel_event, config.workers,
            name="producer",
        )
        for worker_id in range(1, config.workers + 1):
            group.go(
                run_worker, worker_id, work, collection, group.cancel_event,
                name=f"worker-{worker_id}",
            )

        try:
            group.wait()
        except KeyboardInterrupt:
            logger.warning("Interrupted; cancelling workers")
            group.cancel(Cancelled("interrupted"))
            try:
                group.wait()
            except Exception as exc:
                error = exc
        except Exception as exc:
            error = exc

    end_time = datetime.now()
    result = RunResult(
        processed=reporter.processed,
        last_key=reporter.last_key,
        error=error,
        start_time=start_time,
        end_time=end_time,
    )
    logger.info("keys processed: %d", result.processed)
    return result


def sweep_bucket(config: PipelineConfig) -> RunResult:
    """Set ``config.canned_acl`` on every object of ``config.bucket``."""
    collection = S3Collection(
        bucket=config.bucket,
        canned_acl=config.canned_acl,
        region=config.region,
        endpoint_url=config.endpoint_url,
        max_pool_connections=config.workers + 1,
    )
    store = FileCheckpointStore(config.checkpoint_path)
    return run_pipeline(config, collection, store)
