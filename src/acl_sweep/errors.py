"""Error taxonomy for the ACL sweep pipeline."""
from __future__ import annotations

__all__ = [
    "SweepError",
    "ConfigError",
    "ListingError",
    "KeyDecodeError",
    "MutationError",
    "CheckpointError",
    "Cancelled",
]


class SweepError(Exception):
    """Base class for every error raised by the sweep."""


class ConfigError(SweepError, ValueError):
    """Invalid pipeline configuration."""


class ListingError(SweepError):
    """A page of the remote collection could not be retrieved."""


class KeyDecodeError(SweepError):
    """A listed key could not be decoded from its transport encoding."""

    def __init__(self, raw_key: str, reason: str = "invalid escape") -> None:
        super().__init__(f"cannot decode key {raw_key!r}: {reason}")
        self.raw_key = raw_key


class MutationError(SweepError):
    """The mutation of a single key failed on the remote side."""

    def __init__(self, key: str, cause: BaseException) -> None:
        super().__init__(f"mutating {key!r} failed: {cause}")
        self.key = key


class CheckpointError(SweepError):
    """The checkpoint could not be persisted. Never fatal to a run."""


class Cancelled(SweepError):
    """Raised by tasks that stop because the run was cancelled."""

    def __init__(self, reason: str = "cancelled") -> None:
        super().__init__(reason)
