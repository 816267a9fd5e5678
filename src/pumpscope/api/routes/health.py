"""Health check route.

``GET /api/health`` is a liveness probe.  It never calls upstream services
and always returns HTTP 200.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends

from pumpscope.api.dependencies import get_scraper
from pumpscope.scraper.description_scraper import DescriptionScraper

router = APIRouter(tags=["system"])


@router.get("/api/health")
async def health(
    scraper: Annotated[DescriptionScraper, Depends(get_scraper)],
) -> dict[str, Any]:
    return {"status": "ok", "cached_tokens": scraper.cache_stats().count}
