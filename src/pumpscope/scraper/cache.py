"""In-process cache of token scrape results.

One :class:`ScrapeResult` is kept per token address for the life of the
process.  Failed scrapes are cached too, so a token whose page errored is not
fetched again until it is evicted.  There is no TTL and no size bound.  A
long-lived deployment should put ``clear()`` on a schedule or swap in an
LRU/TTL policy.

Writes are plain dict assignments.  All access happens on one event loop, so
concurrent writers to the same key resolve last-write-wins without locking.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScrapeResult:
    """Outcome of scraping one token page.

    Attributes:
        description: Extracted description, or ``None`` if the page had none
            or the scrape failed.
        error: Failure description, or ``None`` on success.
    """

    description: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class CacheStats:
    """Snapshot of the cache contents."""

    count: int
    ids: list[str] = field(default_factory=list)


class ScrapeCache:
    """Unbounded address → :class:`ScrapeResult` mapping."""

    def __init__(self) -> None:
        self._entries: dict[str, ScrapeResult] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, address: object) -> bool:
        return address in self._entries

    def get(self, address: str) -> ScrapeResult | None:
        return self._entries.get(address)

    def put(self, address: str, result: ScrapeResult) -> None:
        self._entries[address] = result

    def evict(self, address: str) -> bool:
        """Drop one entry.  Returns ``True`` if it was present."""
        removed = self._entries.pop(address, None) is not None
        logger.info("scraper: evicted %s from cache (present=%s)", address, removed)
        return removed

    def clear(self) -> None:
        count = len(self._entries)
        self._entries.clear()
        logger.info("scraper: cache cleared (%d entries)", count)

    def stats(self) -> CacheStats:
        return CacheStats(count=len(self._entries), ids=list(self._entries))
