"""Display formatting helpers for token list fields."""

from __future__ import annotations

import time
from datetime import datetime, timezone

# (upper bound in seconds, unit length in seconds, unit name)
_AGE_UNITS: tuple[tuple[float, int, str], ...] = (
    (3600, 60, "minute"),
    (86400, 3600, "hour"),
    (604800, 86400, "day"),
    (2592000, 604800, "week"),
    (float("inf"), 2592000, "month"),
)


def _to_float(value: float | int | str | None) -> float:
    try:
        return float(value) if value is not None else 0.0
    except (TypeError, ValueError):
        return 0.0


def format_market_cap(value: float | int | str | None) -> str:
    """Format a USD market cap: ``"0"``, ``"512.30"`` or ``"4.20k"``."""
    val = _to_float(value)
    if not val:
        return "0"
    if val < 1000:
        return f"{val:.2f}"
    return f"{val / 1000:.2f}k"


def format_time_ago(created: float, *, now: float | None = None) -> str:
    """Describe a token's age, e.g. ``"created 3 hours ago"``.

    Args:
        created: Creation time in unix seconds.
        now: Reference unix time.  Defaults to the current time.
    """
    reference = time.time() if now is None else now
    age = reference - created
    if age < 60:
        return f"created {int(age)} seconds ago"

    for bound, unit_seconds, unit in _AGE_UNITS:
        if age < bound:
            break
    count = int(age // unit_seconds)
    suffix = "" if count == 1 else "s"
    return f"created {count} {unit}{suffix} ago"


def format_time(created: float) -> str:
    """Format a unix timestamp as ``MM-DD HH:mm`` in UTC."""
    return datetime.fromtimestamp(created, tz=timezone.utc).strftime("%m-%d %H:%M")


def format_address(address: str) -> str:
    """Shorten an address to its first 5 and last 4 characters."""
    return f"{address[:5]}...{address[-4:]}"


def format_price(price: float | int | str | None) -> str:
    return f"{_to_float(price):.8f}"


def display_fields(
    address: str,
    usd_market_cap: float | None,
    created_timestamp: float | None,
    *,
    price: float | int | str | None = None,
    now: float | None = None,
) -> dict[str, str | None]:
    """Pre-formatted strings for a token card.

    ``price`` is only rendered when the upstream record carries one.
    """
    return {
        "address": format_address(address),
        "market_cap": format_market_cap(usd_market_cap),
        "price": format_price(price) if price else None,
        "age": (
            format_time_ago(created_timestamp, now=now)
            if created_timestamp is not None
            else None
        ),
        "created": format_time(created_timestamp) if created_timestamp is not None else None,
    }
