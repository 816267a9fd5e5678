"""Token list route handlers.

``GET /api/pump``
    Ranked token list with scraped descriptions, optionally filtered and
    sorted.  Never fails because of upstream trouble: the enrichment service
    degrades to an empty or unenriched list, which the dashboard renders as
    its "no data" state.

``GET /api/pump/detail``
    Pass-through of the aggregator detail record for one token.

``GET /api/pump/cache`` / ``DELETE /api/pump/cache`` / ``DELETE /api/pump/cache/{address}``
    Inspect and reset the description scrape cache.
"""

from __future__ import annotations

import logging
import time
from typing import Annotated, Any, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel

from pumpscope.aggregator.enrichment import ListEnrichmentService
from pumpscope.aggregator.schemas import RankedToken
from pumpscope.api.dependencies import get_enrichment_service, get_scraper
from pumpscope.core.exceptions import UpstreamDetailError
from pumpscope.scraper.description_scraper import DescriptionScraper
from pumpscope.tokens.filters import TimeFilter, TokenFilters, apply_filters, has_active_filters
from pumpscope.tokens.formatting import display_fields

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/pump", tags=["pump"])


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class PumpListResponse(BaseModel):
    """Response body for the token list.

    Attributes:
        success: Always ``True``; upstream failures surface as empty ``data``.
        count: Tokens returned after filtering.
        total: Tokens returned by the upstream list before filtering.
        filtered: Whether any filter was active.
        data: Token records, including upstream fields pumpscope ignores.
    """

    success: bool = True
    count: int
    total: int
    filtered: bool
    data: list[dict[str, Any]]


class CacheStatsResponse(BaseModel):
    count: int
    ids: list[str]


class CacheEvictResponse(BaseModel):
    address: str
    evicted: bool


def _serialize(token: RankedToken, formatted: bool, now: float) -> dict[str, Any]:
    record = token.model_dump()
    if formatted:
        record["display"] = display_fields(
            token.address,
            token.usd_market_cap,
            token.created_timestamp,
            price=record.get("price"),
            now=now,
        )
    return record


# ---------------------------------------------------------------------------
# Route handlers
# ---------------------------------------------------------------------------


@router.get("", response_model=PumpListResponse, summary="Ranked token list")
async def list_tokens(
    service: Annotated[ListEnrichmentService, Depends(get_enrichment_service)],
    time_filter: TimeFilter = "all",
    has_twitter: bool = False,
    has_telegram: bool = False,
    has_website: bool = False,
    has_description: bool = False,
    min_market_cap: Annotated[float, Query(ge=0)] = 0,
    max_market_cap: Annotated[float, Query(ge=0, description="0 = no limit")] = 0,
    search: Optional[str] = None,
    sort_by: Optional[Literal["created_timestamp", "usd_market_cap"]] = None,
    sort_order: Literal["asc", "desc"] = "desc",
    formatted: bool = False,
) -> PumpListResponse:
    """Return the enriched token list after applying the query filters."""
    filters = TokenFilters(
        time_filter=time_filter,
        has_twitter=has_twitter,
        has_telegram=has_telegram,
        has_website=has_website,
        has_description=has_description,
        min_market_cap=min_market_cap,
        max_market_cap=max_market_cap,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )

    tokens = await service.get_enriched_list()
    now = time.time()
    selected = apply_filters(tokens, filters, now=now)

    logger.info("pump: serving %d/%d tokens", len(selected), len(tokens))
    return PumpListResponse(
        count=len(selected),
        total=len(tokens),
        filtered=has_active_filters(filters),
        data=[_serialize(token, formatted, now) for token in selected],
    )


@router.get("/detail", summary="Token detail pass-through")
async def token_detail(
    service: Annotated[ListEnrichmentService, Depends(get_enrichment_service)],
    address: Annotated[str, Query(min_length=1)],
) -> dict[str, Any]:
    """Return the upstream detail record for *address*.

    Raises:
        HTTPException 502: If the aggregator detail endpoint fails.
    """
    try:
        return await service.get_token_detail(address)
    except UpstreamDetailError as exc:
        logger.error("pump: detail lookup failed for %s: %s", address, exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to fetch token detail: {exc}",
        ) from exc


@router.get("/cache", response_model=CacheStatsResponse, summary="Scrape cache stats")
async def cache_stats(
    scraper: Annotated[DescriptionScraper, Depends(get_scraper)],
) -> CacheStatsResponse:
    stats = scraper.cache_stats()
    return CacheStatsResponse(count=stats.count, ids=stats.ids)


@router.delete("/cache", response_model=CacheStatsResponse, summary="Clear scrape cache")
async def clear_cache(
    scraper: Annotated[DescriptionScraper, Depends(get_scraper)],
) -> CacheStatsResponse:
    """Drop every cached scrape result.  Returns the stats before clearing."""
    stats = scraper.cache_stats()
    scraper.clear_cache()
    return CacheStatsResponse(count=stats.count, ids=stats.ids)


@router.delete(
    "/cache/{address}", response_model=CacheEvictResponse, summary="Evict one token"
)
async def evict_token(
    address: str,
    scraper: Annotated[DescriptionScraper, Depends(get_scraper)],
) -> CacheEvictResponse:
    return CacheEvictResponse(address=address, evicted=scraper.clear_token_from_cache(address))
