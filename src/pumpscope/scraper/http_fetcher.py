"""Async HTTP fetcher for public token pages.

Uses ``httpx`` for all requests.  The whole request (connect, headers and
body) is bounded by ``asyncio.wait_for``.  On expiry the in-flight request is
cancelled, so no connection outlives the call.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping

import httpx

from pumpscope.core.exceptions import FetchError
from pumpscope.scraper.config import BROWSER_HEADERS, DEFAULT_REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


def build_page_url(base_url: str, address: str) -> str:
    """Return the public page URL for a token address."""
    return f"{base_url.rstrip('/')}/{address}"


async def fetch_page(
    url: str,
    *,
    client: httpx.AsyncClient,
    timeout: float = DEFAULT_REQUEST_TIMEOUT,
    headers: Mapping[str, str] = BROWSER_HEADERS,
) -> str:
    """Fetch a single page and return its decoded body.

    Args:
        url: Target URL.
        client: Shared :class:`httpx.AsyncClient` instance.
        timeout: Seconds to wait for the complete response.
        headers: Request headers.  Defaults to the browser-like set.

    Returns:
        The response body as text.

    Raises:
        FetchError: On timeout, network error or a non-2xx status.
    """
    try:
        response = await asyncio.wait_for(
            client.get(url, headers=dict(headers), follow_redirects=True),
            timeout=timeout,
        )
    except asyncio.TimeoutError as exc:
        logger.warning("scraper: timeout after %.1fs fetching %s", timeout, url)
        raise FetchError(f"timeout after {timeout:.1f}s", url=url) from exc
    except httpx.TimeoutException as exc:
        logger.warning("scraper: transport timeout fetching %s", url)
        raise FetchError("timeout", url=url) from exc
    except httpx.RequestError as exc:
        logger.warning("scraper: request error for %s: %s", url, exc)
        raise FetchError(f"request error: {exc}", url=url) from exc

    if not response.is_success:
        logger.info("scraper: HTTP %d for %s", response.status_code, url)
        raise FetchError(
            f"HTTP {response.status_code}: {response.reason_phrase}",
            url=url,
            status_code=response.status_code,
        )

    return response.text
