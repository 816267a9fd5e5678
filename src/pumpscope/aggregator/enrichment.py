"""Ranked list enrichment with scraped token descriptions.

Per call, :meth:`ListEnrichmentService.get_enriched_list` moves through::

    Fetching → (EnrichingBestEffort | EnrichmentSkipped) → Returned

Nothing carries over between calls.  Enrichment is best-effort: an upstream
list failure yields ``[]``, and a slow or failing scrape yields the
unenriched list.  The method never raises.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from pumpscope.aggregator.client import AggregatorClient
from pumpscope.aggregator.schemas import RankedToken
from pumpscope.core.exceptions import UpstreamListError
from pumpscope.scraper.config import NO_DESCRIPTION
from pumpscope.scraper.description_scraper import DescriptionScraper

logger = logging.getLogger(__name__)

DEFAULT_ENRICHMENT_TIMEOUT: float = 15.0


class ListEnrichmentService:
    """Serves the ranked token list with missing descriptions filled in.

    Args:
        aggregator: Upstream list client.
        scraper: Description scraper (shares the process-wide cache).
        enrichment_timeout: Upper bound in seconds on the scraping step.
    """

    def __init__(
        self,
        aggregator: AggregatorClient,
        scraper: DescriptionScraper,
        enrichment_timeout: float = DEFAULT_ENRICHMENT_TIMEOUT,
    ) -> None:
        self._aggregator = aggregator
        self._scraper = scraper
        self._enrichment_timeout = enrichment_timeout

    async def get_enriched_list(self) -> list[RankedToken]:
        """Fetch the ranked list and fill missing descriptions.

        Returns:
            The (possibly partially enriched) token list, or ``[]`` if the
            upstream list could not be fetched.
        """
        try:
            tokens = await self._aggregator.fetch_list()
        except UpstreamListError as exc:
            logger.error("enrichment: error fetching token list: %s", exc)
            return []
        except Exception:  # noqa: BLE001
            logger.exception("enrichment: unexpected error fetching token list")
            return []

        if tokens:
            first = tokens[0]
            logger.debug(
                "enrichment: sample token name=%s symbol=%s address=%s has_description=%s",
                first.name,
                first.symbol,
                first.address,
                not first.needs_description,
            )

        await self._enrich(tokens)
        return tokens

    async def get_token_detail(self, address: str) -> dict[str, Any]:
        """Pass-through to the aggregator detail endpoint.

        Raises:
            UpstreamDetailError: If the detail endpoint fails.
        """
        return await self._aggregator.fetch_detail(address)

    async def _enrich(self, tokens: list[RankedToken]) -> None:
        needing = [token for token in tokens if token.needs_description]
        if not needing:
            logger.info("enrichment: all tokens already have descriptions")
            return

        addresses = [token.address for token in needing]
        logger.info("enrichment: scraping descriptions for %d tokens", len(addresses))

        try:
            scraped = await asyncio.wait_for(
                self._scraper.scrape_many(addresses),
                timeout=self._enrichment_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "enrichment: scraping timed out after %.1fs, serving list without descriptions",
                self._enrichment_timeout,
            )
            return
        except Exception:  # noqa: BLE001
            logger.exception("enrichment: scraping failed, serving list without descriptions")
            return

        added = 0
        for token in needing:
            description = scraped.get(token.address)
            if description and description != NO_DESCRIPTION:
                token.description = description
                added += 1
                logger.debug(
                    "enrichment: added description for %s: %.50s", token.symbol, description
                )

        logger.info(
            "enrichment: scraped %d/%d token descriptions", added, len(needing)
        )
