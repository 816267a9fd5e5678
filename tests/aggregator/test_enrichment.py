"""Tests for ListEnrichmentService.

The aggregator and scraper are replaced with ``AsyncMock`` objects so that
each scenario controls exactly what the upstream list and the scraper return.
"""

from __future__ import annotations

import asyncio
import time
from unittest.mock import AsyncMock

import pytest

from pumpscope.aggregator.client import AggregatorClient
from pumpscope.aggregator.enrichment import ListEnrichmentService
from pumpscope.aggregator.schemas import RankedToken
from pumpscope.core.exceptions import UpstreamListError
from pumpscope.scraper.config import NO_DESCRIPTION
from pumpscope.scraper.description_scraper import DescriptionScraper


def _service(
    tokens: list[RankedToken] | None = None,
    list_error: Exception | None = None,
    scraped: dict[str, str] | None = None,
    scrape_side_effect: object = None,
    timeout: float = 1.0,
) -> tuple[ListEnrichmentService, AsyncMock, AsyncMock]:
    aggregator = AsyncMock(spec=AggregatorClient)
    if list_error is not None:
        aggregator.fetch_list.side_effect = list_error
    else:
        aggregator.fetch_list.return_value = tokens or []

    scraper = AsyncMock(spec=DescriptionScraper)
    if scrape_side_effect is not None:
        scraper.scrape_many.side_effect = scrape_side_effect
    else:
        scraper.scrape_many.return_value = scraped or {}

    service = ListEnrichmentService(aggregator, scraper, enrichment_timeout=timeout)
    return service, aggregator, scraper


def _descriptions(tokens: list[RankedToken]) -> list[dict[str, object]]:
    return [token.model_dump(include={"address", "description"}) for token in tokens]


@pytest.mark.asyncio
class TestGetEnrichedList:
    async def test_fills_missing_descriptions_only(self) -> None:
        tokens = [
            RankedToken(address="X", description=""),
            RankedToken(address="Y", description="Existing text"),
        ]
        service, _, scraper = _service(tokens, scraped={"X": "Found description"})

        result = await service.get_enriched_list()

        assert _descriptions(result) == [
            {"address": "X", "description": "Found description"},
            {"address": "Y", "description": "Existing text"},
        ]
        scraper.scrape_many.assert_awaited_once_with(["X"])

    async def test_upstream_failure_returns_empty_list(self) -> None:
        service, _, scraper = _service(
            list_error=UpstreamListError("request error: refused", url="https://agg/list")
        )

        assert await service.get_enriched_list() == []
        scraper.scrape_many.assert_not_awaited()

    async def test_unexpected_upstream_failure_returns_empty_list(self) -> None:
        service, _, _ = _service(list_error=RuntimeError("boom"))
        assert await service.get_enriched_list() == []

    async def test_empty_upstream_list(self) -> None:
        service, _, scraper = _service([])

        assert await service.get_enriched_list() == []
        scraper.scrape_many.assert_not_awaited()

    async def test_all_described_skips_scraping(self) -> None:
        tokens = [RankedToken(address="A", description="Already here")]
        service, _, scraper = _service(tokens)

        result = await service.get_enriched_list()

        assert _descriptions(result) == [{"address": "A", "description": "Already here"}]
        scraper.scrape_many.assert_not_awaited()

    async def test_placeholder_is_not_assigned(self) -> None:
        tokens = [RankedToken(address="A"), RankedToken(address="B", description="  ")]
        service, _, _ = _service(tokens, scraped={"A": NO_DESCRIPTION, "B": "Scraped B"})

        result = await service.get_enriched_list()

        assert _descriptions(result) == [
            {"address": "A", "description": None},
            {"address": "B", "description": "Scraped B"},
        ]

    async def test_order_and_length_preserved(self) -> None:
        tokens = [RankedToken(address=addr) for addr in ["C", "A", "B"]]
        scraped = {"A": "a text", "B": "b text", "C": "c text"}
        service, _, _ = _service(tokens, scraped=scraped)

        result = await service.get_enriched_list()

        assert [t.address for t in result] == ["C", "A", "B"]
        assert [t.description for t in result] == ["c text", "a text", "b text"]

    async def test_scrape_timeout_returns_unenriched_list(self) -> None:
        async def _never_finishes(addresses: list[str]) -> dict[str, str]:
            await asyncio.Event().wait()
            return {}

        tokens = [RankedToken(address="A"), RankedToken(address="B", description="kept")]
        service, _, _ = _service(
            tokens, scrape_side_effect=_never_finishes, timeout=0.2
        )

        started = time.perf_counter()
        result = await service.get_enriched_list()
        elapsed = time.perf_counter() - started

        assert 0.15 <= elapsed < 1.0
        assert _descriptions(result) == [
            {"address": "A", "description": None},
            {"address": "B", "description": "kept"},
        ]

    async def test_scraper_exception_returns_unenriched_list(self) -> None:
        tokens = [RankedToken(address="A")]
        service, _, _ = _service(tokens, scrape_side_effect=RuntimeError("scraper down"))

        result = await service.get_enriched_list()

        assert _descriptions(result) == [{"address": "A", "description": None}]

    async def test_repeat_calls_refetch_upstream(self) -> None:
        service, aggregator, _ = _service([RankedToken(address="A", description="d")])

        await service.get_enriched_list()
        await service.get_enriched_list()

        assert aggregator.fetch_list.await_count == 2


@pytest.mark.asyncio
class TestGetTokenDetail:
    async def test_passes_through(self) -> None:
        service, aggregator, _ = _service()
        aggregator.fetch_detail.return_value = {"address": "A", "extra": 1}

        assert await service.get_token_detail("A") == {"address": "A", "extra": 1}
        aggregator.fetch_detail.assert_awaited_once_with("A")
