"""
s3-acl-sweep

Scan an S3 bucket and set a canned ACL (default: private) on every object.
The last enqueued key is saved periodically to a state file; re-running with
the same state file continues after it.

Examples:
  s3-acl-sweep --bucket my-bucket
  s3-acl-sweep --bucket my-bucket --state ~/acl-state.txt --workers 32
  s3-acl-sweep --bucket my-bucket --acl bucket-owner-full-control --progress
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from acl_sweep import __version__
from acl_sweep.config import (
    CANNED_ACLS,
    DEFAULT_CHECKPOINT_PATH,
    DEFAULT_WORKERS,
    MAX_PAGE_SIZE,
    PipelineConfig,
)
from acl_sweep.errors import ConfigError
from acl_sweep.pipeline.logger import setup_logger
from acl_sweep.pipeline.orchestrate import sweep_bucket
from acl_sweep.pipeline.report import print_final_summary

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="s3-acl-sweep",
        description="Set a canned ACL on every object of an S3 bucket, resumably.",
    )
    p.add_argument("--bucket", required=True, help="Bucket name to scan")
    p.add_argument("--state", type=Path, default=DEFAULT_CHECKPOINT_PATH,
                   help="File to periodically save last processed key, used to "
                        f"continue operations (default: {DEFAULT_CHECKPOINT_PATH})")
    p.add_argument("--workers", type=int, default=DEFAULT_WORKERS,
                   help=f"Concurrent mutation workers (default: {DEFAULT_WORKERS})")
    p.add_argument("--queue-size", type=int, default=None,
                   help="Work queue capacity (default: same as --workers)")
    p.add_argument("--interval", type=float, default=60.0,
                   help="Seconds between progress reports/checkpoints (default: 60)")
    p.add_argument("--acl", choices=sorted(CANNED_ACLS), default="private",
                   help="Canned ACL to apply (default: private)")
    p.add_argument("--page-size", type=int, default=MAX_PAGE_SIZE,
                   help=f"Keys per listing request (default: {MAX_PAGE_SIZE})")
    p.add_argument("--region", default=None, help="AWS region (default: from environment)")
    p.add_argument("--endpoint-url", default=None,
                   help="Custom S3 endpoint, e.g. for S3-compatible stores")
    p.add_argument("--log-dir", type=Path, default=None,
                   help="Also write a timestamped log file into this directory")
    p.add_argument("--log-level", default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                   help="Log level (default: INFO)")
    p.add_argument("--progress", action="store_true", help="Show a live progress bar")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p.parse_args(argv)


def build_config(args: argparse.Namespace) -> PipelineConfig:
    return PipelineConfig(
        bucket=args.bucket,
        checkpoint_path=args.state,
        canned_acl=args.acl,
        workers=args.workers,
        queue_size=args.queue_size,
        page_size=args.page_size,
        report_interval_s=args.interval,
        show_progress=args.progress,
        region=args.region,
        endpoint_url=args.endpoint_url,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        config = build_config(args)
    except ConfigError as exc:
        print(f"s3-acl-sweep: error: {exc}", file=sys.stderr)
        return EXIT_USAGE

    setup_logger(args.log_dir, level=getattr(logging, args.log_level))

    try:
        result = sweep_bucket(config)
    except Exception as exc:
        # Client construction failed before any key was listed
        logger.error("Could not start the sweep: %s", exc)
        print(f"s3-acl-sweep: error: {exc}", file=sys.stderr)
        return EXIT_FAILED

    print_final_summary(
        processed=result.processed,
        start_time=result.start_time,
        end_time=result.end_time,
        last_key=result.last_key,
        error=result.error,
        color=sys.stdout.isatty(),
    )
    if result.ok:
        return EXIT_OK

    print(result.error, file=sys.stderr)
    return EXIT_INTERRUPTED if result.interrupted else EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
