"""Concurrent sweep pipeline: producer, work queue, workers and reporting."""

from .orchestrate import RunResult, run_pipeline, sweep_bucket

__all__ = ["RunResult", "run_pipeline", "sweep_bucket"]
