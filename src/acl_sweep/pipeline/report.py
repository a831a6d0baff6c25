# acl_sweep/pipeline/report.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

logger = logging.getLogger(__name__)


def _abbrev(s: str, width: int = 96) -> str:
    """Return s truncated with an ellipsis if it exceeds width."""
    return s if len(s) <= width else (s[: max(0, width - 1)] + "…")


def format_run_summary(
    *,
    bucket: str,
    checkpoint_path: str,
    start_after: Optional[str],
    canned_acl: str,
    workers: int,
    queue_size: int,
    page_size: int,
    report_interval_s: float,
    start_time: datetime,
    endpoint_url: Optional[str] = None,
    color: bool = True,
) -> str:
    """
    Build a formatted, human-readable summary of the planned run.
    """
    heading = f"Start Time: {start_time:%Y-%m-%d %H:%M:%S}"
    if color:
        heading = f"\033[31m{heading}\033[0m"

    lines = [
        heading,
        ("\033[4mACL Sweep Configuration\033[0m" if color
         else "ACL Sweep Configuration"),
        f"Bucket:                     s3://{bucket}",
    ]
    if endpoint_url:
        lines.append(f"Endpoint:                   {_abbrev(endpoint_url)}")
    lines += [
        f"Canned ACL:                 {canned_acl}",
        f"Checkpoint file:            {checkpoint_path}",
        f"Resume after:               "
        f"{_abbrev(start_after) if start_after else '(beginning)'}",
        f"Keys per listing page:      {page_size:,}",
        f"Report interval:            {report_interval_s:g}s",
        f"Work queue capacity:        {queue_size}",
        f"Worker threads:             {workers}",
    ]
    return "\n".join(lines) + "\n"


def log_run_summary(*, color: bool = False, **kwargs) -> None:
    """Log the run summary at INFO level (pipelines using logging)."""
    summary = format_run_summary(color=color, **kwargs)
    for line in summary.rstrip("\n").splitlines():
        logger.info(line)


def format_final_summary(
    *,
    processed: int,
    start_time: datetime,
    end_time: datetime,
    last_key: Optional[str] = None,
    error: Optional[BaseException] = None,
    color: bool = True,
) -> str:
    """Completion banner plus timing stats; mirrors the run summary layout."""
    runtime = end_time - start_time
    seconds = runtime.total_seconds()
    kps = processed / seconds if seconds > 0 else 0.0

    if error is None:
        status = "Sweep completed!"
        if color:
            status = f"\033[32m{status}\033[0m"
    else:
        status = f"Sweep failed: {error}"
        if color:
            status = f"\033[31m{status}\033[0m"

    lines = [
        status,
        f"Keys processed:             {processed:,}",
        f"Last key enqueued:          "
        f"{_abbrev(last_key) if last_key is not None else '(none)'}",
        f"End Time:                   {end_time:%Y-%m-%d %H:%M:%S}",
        f"Total Runtime:              {runtime}",
        f"Keys per second:            {kps:.1f}",
    ]
    return "\n".join(lines) + "\n"


def print_final_summary(**kwargs) -> None:
    """Print the completion summary to stdout."""
    print(format_final_summary(**kwargs), end="")
