"""Filtering and sorting of ranked token lists.

Filters combine with AND.  Zero market-cap bounds and ``time_filter="all"``
mean "no limit".  Without ``sort_by`` the upstream rank order is kept.
"""

from __future__ import annotations

import time
from collections.abc import Iterable
from typing import Literal, Optional

from pydantic import BaseModel, Field

from pumpscope.aggregator.schemas import RankedToken
from pumpscope.scraper.config import NO_DESCRIPTION

TimeFilter = Literal[
    "all", "15m", "30m", "1h", "2h", "6h", "12h", "18h", "24h",
    "2d", "3d", "4d", "5d", "6d", "7d",
]

#: Maximum token age in seconds per time window.
TIME_WINDOWS: dict[str, int] = {
    "15m": 15 * 60,
    "30m": 30 * 60,
    "1h": 3600,
    "2h": 2 * 3600,
    "6h": 6 * 3600,
    "12h": 12 * 3600,
    "18h": 18 * 3600,
    "24h": 24 * 3600,
    "2d": 2 * 86400,
    "3d": 3 * 86400,
    "4d": 4 * 86400,
    "5d": 5 * 86400,
    "6d": 6 * 86400,
    "7d": 7 * 86400,
}


class TokenFilters(BaseModel):
    """Filter and sort options for a token list.

    Attributes:
        time_filter: Keep tokens created within this window.
        has_twitter: Require a Twitter link.
        has_telegram: Require a Telegram link.
        has_website: Require a website link.
        has_description: Require a real (non-placeholder) description.
        min_market_cap: Minimum USD market cap; ``0`` disables.
        max_market_cap: Maximum USD market cap; ``0`` disables.
        search: Case-insensitive substring of name, symbol or description.
        sort_by: Optional sort key.
        sort_order: ``"asc"`` or ``"desc"``.
    """

    time_filter: TimeFilter = "all"
    has_twitter: bool = False
    has_telegram: bool = False
    has_website: bool = False
    has_description: bool = False
    min_market_cap: float = Field(default=0, ge=0)
    max_market_cap: float = Field(default=0, ge=0)
    search: Optional[str] = None
    sort_by: Optional[Literal["created_timestamp", "usd_market_cap"]] = None
    sort_order: Literal["asc", "desc"] = "desc"


def has_active_filters(filters: TokenFilters) -> bool:
    """Return ``True`` if any option would drop tokens."""
    return (
        filters.time_filter != "all"
        or filters.has_twitter
        or filters.has_telegram
        or filters.has_website
        or filters.has_description
        or filters.min_market_cap > 0
        or filters.max_market_cap > 0
        or bool(filters.search and filters.search.strip())
    )


def has_real_description(token: RankedToken) -> bool:
    text = (token.description or "").strip()
    return bool(text) and text != NO_DESCRIPTION


def _has_link(value: str | None) -> bool:
    return bool(value and value.strip())


def _matches(token: RankedToken, filters: TokenFilters, now: float) -> bool:
    window = TIME_WINDOWS.get(filters.time_filter)
    if window is not None:
        if token.created_timestamp is None or now - token.created_timestamp > window:
            return False

    if filters.has_description and not has_real_description(token):
        return False
    if filters.has_twitter and not _has_link(token.twitter):
        return False
    if filters.has_telegram and not _has_link(token.telegram):
        return False
    if filters.has_website and not _has_link(token.website):
        return False

    market_cap = token.usd_market_cap or 0.0
    if filters.min_market_cap > 0 and market_cap < filters.min_market_cap:
        return False
    if filters.max_market_cap > 0 and market_cap > filters.max_market_cap:
        return False

    needle = (filters.search or "").strip().lower()
    if needle:
        haystacks = (token.name, token.symbol, token.description or "")
        if not any(needle in field.lower() for field in haystacks):
            return False

    return True


def apply_filters(
    tokens: Iterable[RankedToken],
    filters: TokenFilters,
    *,
    now: float | None = None,
) -> list[RankedToken]:
    """Return the tokens matching *filters*, sorted if requested.

    Args:
        tokens: Tokens in upstream rank order.
        filters: Filter and sort options.
        now: Reference unix time for the age window.  Defaults to the
            current time.

    Returns:
        A new list; the input is not modified.
    """
    reference = time.time() if now is None else now
    selected = [token for token in tokens if _matches(token, filters, reference)]

    if filters.sort_by is not None:
        key = filters.sort_by
        selected.sort(
            key=lambda token: getattr(token, key) or 0,
            reverse=filters.sort_order == "desc",
        )
    return selected
