"""FastAPI dependency providers and the service composition root.

One set of services exists per process.  :func:`build_services` creates it
inside the application lifespan and stores it on ``app.state.services``.
Route handlers reach the pieces they need through the ``get_*`` dependencies,
which tests replace via ``app.dependency_overrides``.

Dependency graph::

    httpx.AsyncClient ─┬─ DescriptionScraper ─┐
    ScrapeCache ───────┘                      ├─ ListEnrichmentService
                       └─ AggregatorClient ───┘
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx
from fastapi import Request

from pumpscope.aggregator.client import AggregatorClient
from pumpscope.aggregator.enrichment import ListEnrichmentService
from pumpscope.config.settings import Settings
from pumpscope.scraper.cache import ScrapeCache
from pumpscope.scraper.config import ScraperConfig
from pumpscope.scraper.description_scraper import DescriptionScraper


@dataclass
class Services:
    """Process-wide service instances."""

    http_client: httpx.AsyncClient
    cache: ScrapeCache
    scraper: DescriptionScraper
    aggregator: AggregatorClient
    enrichment: ListEnrichmentService

    async def aclose(self) -> None:
        await self.http_client.aclose()


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create the shared outbound HTTP client.

    The pool is sized so a full batch of page fetches runs at once.
    """
    limits = httpx.Limits(
        max_connections=settings.scrape_batch_size + 10,
        max_keepalive_connections=20,
    )
    return httpx.AsyncClient(
        timeout=settings.upstream_timeout,
        limits=limits,
        proxy=settings.upstream_proxy_url,
    )


def build_services(
    settings: Settings,
    http_client: httpx.AsyncClient | None = None,
) -> Services:
    """Wire the scraper, cache, aggregator client and enrichment service."""
    client = http_client or build_http_client(settings)
    cache = ScrapeCache()
    scraper = DescriptionScraper(ScraperConfig.from_settings(settings), cache, client)
    aggregator = AggregatorClient(
        settings.aggregator_base_url, client, timeout=settings.upstream_timeout
    )
    enrichment = ListEnrichmentService(
        aggregator, scraper, enrichment_timeout=settings.enrichment_timeout
    )
    return Services(
        http_client=client,
        cache=cache,
        scraper=scraper,
        aggregator=aggregator,
        enrichment=enrichment,
    )


# ---------------------------------------------------------------------------
# Request-scoped accessors
# ---------------------------------------------------------------------------


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_enrichment_service(request: Request) -> ListEnrichmentService:
    return get_services(request).enrichment


def get_scraper(request: Request) -> DescriptionScraper:
    return get_services(request).scraper
