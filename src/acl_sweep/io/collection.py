# acl_sweep/io/collection.py
"""Contract between the pipeline and the remote collection it sweeps."""
from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

__all__ = ["ListPage", "RemoteCollection"]


@dataclass(frozen=True)
class ListPage:
    """One page of raw (still transport-encoded) keys."""

    raw_keys: List[str] = field(default_factory=list)
    truncated: bool = False


class RemoteCollection(Protocol):
    """Anything that can list keys page by page and mutate one key."""

    def list_page(self, after: Optional[str], limit: int) -> ListPage:
        """Return keys strictly after ``after`` (all keys when None)."""
        ...

    def mutate(
        self, key: str, cancel_event: Optional[threading.Event] = None
    ) -> None:
        """Apply the mutation to ``key``; raise Cancelled if cancel_event is set."""
        ...
