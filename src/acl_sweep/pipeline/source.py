# acl_sweep/pipeline/source.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from acl_sweep.config import MAX_PAGE_SIZE
from acl_sweep.errors import KeyDecodeError, ListingError
from acl_sweep.io.collection import RemoteCollection
from acl_sweep.io.keys import decode_key

logger = logging.getLogger(__name__)

__all__ = ["SourcePage", "ItemSource"]


@dataclass(frozen=True)
class SourcePage:
    """One listing page, keys still in their url-encoded transport form."""

    raw_keys: List[str] = field(default_factory=list)
    has_more: bool = False


class ItemSource:
    """
    Lazy, restartable listing of every key in a remote collection.

    Pagination is keyed by the last decoded key of the previous page, so the
    same call that resumes from a checkpoint also advances page to page.
    Keys are decoded one at a time as they are consumed: everything before an
    undecodable key is handed out before the error surfaces.

    Args:
        collection: Remote collection client
        start_after: Resume point (usually the stored checkpoint); only keys
            strictly after it are produced
        page_size: Keys requested per listing call
    """

    def __init__(
        self,
        collection: RemoteCollection,
        *,
        start_after: Optional[str] = None,
        page_size: int = MAX_PAGE_SIZE,
    ) -> None:
        self.collection = collection
        self.start_after = start_after
        self.page_size = page_size
        self.pages_fetched = 0

    def next_page(self, after: Optional[str]) -> SourcePage:
        """Fetch the page of keys strictly after ``after``."""
        try:
            page = self.collection.list_page(after, self.page_size)
        except Exception as exc:
            raise ListingError(f"listing after {after!r} failed: {exc}") from exc
        self.pages_fetched += 1

        if page.truncated and not page.raw_keys:
            raise ListingError(
                f"listing after {after!r} reported more results but returned no keys"
            )
        return SourcePage(raw_keys=list(page.raw_keys), has_more=page.truncated)

    def decode(self, raw: str) -> str:
        try:
            return decode_key(raw)
        except KeyDecodeError:
            logger.error(
                "Undecodable key %r on page %d; stopping the run",
                raw,
                self.pages_fetched,
            )
            raise

    def pages(self) -> Iterator[SourcePage]:
        """Yield pages until the collection is exhausted."""
        after = self.start_after
        if after:
            logger.info("Resuming after checkpoint %r", after)
        while True:
            page = self.next_page(after)
            yield page
            if not page.has_more:
                return
            after = self.decode(page.raw_keys[-1])

    def __iter__(self) -> Iterator[str]:
        for page in self.pages():
            for raw in page.raw_keys:
                yield self.decode(raw)
