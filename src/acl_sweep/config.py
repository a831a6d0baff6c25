# acl_sweep/config.py
"""Configuration for ACL sweep runs."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from acl_sweep.errors import ConfigError

__all__ = [
    "CANNED_ACLS",
    "DEFAULT_CHECKPOINT_PATH",
    "DEFAULT_WORKERS",
    "MAX_PAGE_SIZE",
    "PipelineConfig",
]

DEFAULT_CHECKPOINT_PATH = Path("/tmp/fixacl-lastkey.txt")
DEFAULT_WORKERS = 10
MAX_PAGE_SIZE = 1000  # S3 ListObjectsV2 MaxKeys ceiling

CANNED_ACLS = frozenset({
    "private",
    "public-read",
    "public-read-write",
    "authenticated-read",
    "aws-exec-read",
    "bucket-owner-read",
    "bucket-owner-full-control",
})


@dataclass(frozen=True)
class PipelineConfig:
    """Immutable settings for a single sweep run."""

    # Target
    bucket: str
    checkpoint_path: Path = DEFAULT_CHECKPOINT_PATH
    canned_acl: str = "private"

    # Parallelism
    workers: int = DEFAULT_WORKERS
    queue_size: Optional[int] = None  # If None, defaults to workers

    # Listing
    page_size: int = MAX_PAGE_SIZE

    # Progress reporting
    report_interval_s: float = 60.0
    show_progress: bool = False

    # Client
    region: Optional[str] = None
    endpoint_url: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.bucket:
            raise ConfigError("bucket must be set")
        if self.checkpoint_path in (None, ""):
            raise ConfigError("checkpoint path must be set")
        if self.workers < 1:
            raise ConfigError(f"workers must be >= 1, got {self.workers}")
        if self.queue_size is not None and self.queue_size < 1:
            raise ConfigError(f"queue_size must be >= 1, got {self.queue_size}")
        if not 1 <= self.page_size <= MAX_PAGE_SIZE:
            raise ConfigError(
                f"page_size must be between 1 and {MAX_PAGE_SIZE}, got {self.page_size}"
            )
        if self.report_interval_s <= 0:
            raise ConfigError(
                f"report_interval_s must be positive, got {self.report_interval_s}"
            )
        if self.canned_acl not in CANNED_ACLS:
            raise ConfigError(
                f"canned_acl must be one of {sorted(CANNED_ACLS)}, got {self.canned_acl!r}"
            )
        object.__setattr__(self, "checkpoint_path", Path(self.checkpoint_path))

    @property
    def effective_queue_size(self) -> int:
        """Capacity of the work queue between the producer and the workers."""
        return self.queue_size or self.workers
