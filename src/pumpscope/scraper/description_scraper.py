"""Batch description scraper for token pages.

:class:`DescriptionScraper` ties the fetcher, the extractor and the cache
together.  :meth:`DescriptionScraper.scrape_many` splits the addresses into
batches of ``batch_size``.  Each batch runs concurrently under
``asyncio.gather(..., return_exceptions=True)``, so one failing page never
cancels or spoils its siblings.  Batches run strictly one after another,
separated by ``batch_delay``.

Per-token failures never propagate.  They are logged, cached as error
results, and reported as :data:`~pumpscope.scraper.config.NO_DESCRIPTION`.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

import httpx

from pumpscope.core.exceptions import FetchError
from pumpscope.scraper.cache import CacheStats, ScrapeCache, ScrapeResult
from pumpscope.scraper.config import NO_DESCRIPTION, ScraperConfig
from pumpscope.scraper.description_extractor import extract_description
from pumpscope.scraper.http_fetcher import build_page_url, fetch_page

logger = logging.getLogger(__name__)


class DescriptionScraper:
    """Scrapes token descriptions from public token pages.

    Args:
        config: Scraper timing and filter bounds.
        cache: Shared result cache.  One instance per process.
        client: Shared HTTP client used for every page fetch.
    """

    def __init__(
        self,
        config: ScraperConfig,
        cache: ScrapeCache,
        client: httpx.AsyncClient,
    ) -> None:
        self._config = config
        self._cache = cache
        self._client = client

    # ------------------------------------------------------------------
    # Single token
    # ------------------------------------------------------------------

    async def scrape_token_description(self, address: str, *, skip_delay: bool = False) -> str:
        """Return the description for one token, fetching its page at most once.

        Args:
            address: Token address.
            skip_delay: Skip the ``rate_limit_delay`` sleep (batch mode).

        Returns:
            The description, or :data:`NO_DESCRIPTION` if none was found or
            the scrape failed (now or on an earlier, cached attempt).
        """
        cached = self._cache.get(address)
        if cached is not None:
            if not cached.ok:
                logger.debug("scraper: serving cached failure for %s: %s", address, cached.error)
            return cached.description or NO_DESCRIPTION

        if not skip_delay and self._config.rate_limit_delay > 0:
            await asyncio.sleep(self._config.rate_limit_delay)

        url = build_page_url(self._config.base_url, address)
        try:
            html = await fetch_page(
                url,
                client=self._client,
                timeout=self._config.request_timeout,
            )
            description = extract_description(
                html,
                min_length=self._config.min_description_length,
                max_length=self._config.max_description_length,
            )
        except FetchError as exc:
            logger.warning("scraper: failed to scrape %s: %s", address, exc)
            self._cache.put(address, ScrapeResult(error=str(exc)))
            return NO_DESCRIPTION
        except Exception as exc:  # noqa: BLE001
            logger.exception("scraper: unexpected error scraping %s", address)
            self._cache.put(address, ScrapeResult(error=str(exc) or type(exc).__name__))
            return NO_DESCRIPTION

        self._cache.put(address, ScrapeResult(description=description))
        return description or NO_DESCRIPTION

    # ------------------------------------------------------------------
    # Batches
    # ------------------------------------------------------------------

    async def scrape_many(self, addresses: Sequence[str]) -> dict[str, str]:
        """Scrape descriptions for many tokens.

        Args:
            addresses: Token addresses.  Duplicates are scraped once.

        Returns:
            Mapping of every address to its description or
            :data:`NO_DESCRIPTION`.
        """
        unique = list(dict.fromkeys(addresses))
        results: dict[str, str] = {}
        if not unique:
            return results

        batch_size = self._config.batch_size
        total_batches = (len(unique) + batch_size - 1) // batch_size
        logger.info("scraper: scraping %d tokens in %d batch(es)", len(unique), total_batches)

        for index, start in enumerate(range(0, len(unique), batch_size), start=1):
            batch = unique[start:start + batch_size]
            logger.info(
                "scraper: processing batch %d/%d (%d tokens)", index, total_batches, len(batch)
            )
            results.update(await self._process_batch(batch))

            if start + batch_size < len(unique) and self._config.batch_delay > 0:
                await asyncio.sleep(self._config.batch_delay)

        found = sum(1 for desc in results.values() if desc != NO_DESCRIPTION)
        logger.info(
            "scraper: completed scraping, found descriptions for %d/%d tokens",
            found,
            len(unique),
        )
        return results

    async def _process_batch(self, batch: Sequence[str]) -> dict[str, str]:
        outcomes = await asyncio.gather(
            *(self.scrape_token_description(address, skip_delay=True) for address in batch),
            return_exceptions=True,
        )

        results: dict[str, str] = {}
        for address, outcome in zip(batch, outcomes):
            if isinstance(outcome, BaseException):
                logger.error("scraper: error processing %s: %s", address, outcome)
                results[address] = NO_DESCRIPTION
                continue
            results[address] = outcome
        return results

    # ------------------------------------------------------------------
    # Cache administration
    # ------------------------------------------------------------------

    def cache_stats(self) -> CacheStats:
        return self._cache.stats()

    def clear_cache(self) -> None:
        self._cache.clear()

    def clear_token_from_cache(self, address: str) -> bool:
        return self._cache.evict(address)
