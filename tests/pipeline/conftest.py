# tests/pipeline/conftest.py
from __future__ import annotations

import threading
from typing import Callable, Iterable, Optional
from urllib.parse import quote_plus

import pytest

from acl_sweep.errors import Cancelled
from acl_sweep.io.collection import ListPage


class FakeCollection:
    """
    Sorted in-memory key space with S3-like StartAfter listing.

    Keys are served URL-encoded, as S3 does with EncodingType=url.
    ``on_mutate(key, cancel_event)`` lets a test inject failures or delays.
    """

    def __init__(
        self,
        keys: Iterable[str],
        *,
        on_mutate: Optional[Callable[[str, Optional[threading.Event]], None]] = None,
    ):
        self.keys = sorted(keys)
        self.on_mutate = on_mutate
        self.list_calls: list[Optional[str]] = []
        self.mutated: list[str] = []
        self._lock = threading.Lock()

    def list_page(self, after, limit):
        self.list_calls.append(after)
        remaining = [k for k in self.keys if after is None or k > after]
        page = remaining[:limit]
        return ListPage(
            raw_keys=[quote_plus(k, safe="/") for k in page],
            truncated=len(remaining) > limit,
        )

    def mutate(self, key, cancel_event=None):
        with self._lock:
            self.mutated.append(key)
        if self.on_mutate is not None:
            self.on_mutate(key, cancel_event)

    def mutate_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for k in self.mutated:
            counts[k] = counts.get(k, 0) + 1
        return counts


def fail_on(bad_key: str, *, block_others: bool = False):
    """on_mutate hook: raise for ``bad_key``; optionally park every other call
    until the run is cancelled, like an in-flight request that gets aborted."""

    def _hook(key, cancel_event):
        if key == bad_key:
            raise RuntimeError(f"AccessDenied on {key}")
        if block_others and cancel_event is not None:
            cancel_event.wait(5.0)
            raise Cancelled()

    return _hook


@pytest.fixture
def make_collection():
    return FakeCollection


@pytest.fixture
def fail_on_key():
    return fail_on
