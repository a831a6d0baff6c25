"""
Resumable, concurrent sweep that sets a canned ACL on every object of a bucket.

Main entry points:
    sweep_bucket() - S3-backed run with a file checkpoint
    run_pipeline() - same pipeline over any RemoteCollection / checkpoint store

Key components:
    - io.s3: boto3 adapter (paged listing, put_object_acl)
    - io.checkpoint: last-enqueued-key persistence
    - pipeline.source: paged, resumable key listing
    - pipeline.group: first-error cancellation of producer and workers
    - pipeline.progress: throughput logging and checkpoint ticks
"""

__version__ = "0.1.0"

from acl_sweep.config import PipelineConfig
from acl_sweep.pipeline.orchestrate import RunResult, run_pipeline, sweep_bucket

__all__ = ["PipelineConfig", "RunResult", "run_pipeline", "sweep_bucket", "__version__"]
