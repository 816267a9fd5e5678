"""Shared pytest fixtures for pumpscope tests.

Fixture summary
---------------
scraper_config  - ScraperConfig with no delays and a short page timeout.
scrape_cache    - Fresh, empty ScrapeCache.
token_page_html - Callable building a minimal token page around a body.

All tests run without network access: outbound HTTP is mocked with ``respx``
or with stub clients.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from pumpscope.config.settings import get_settings
from pumpscope.scraper.cache import ScrapeCache
from pumpscope.scraper.config import ScraperConfig

# Settings are read once per process; make sure tests never see values
# cached by an earlier import under a different environment.
get_settings.cache_clear()

TEST_BASE_URL = "https://pump.test"


@pytest.fixture()
def scraper_config() -> ScraperConfig:
    """Scraper config suitable for tests: no sleeps, 0.5 s page timeout."""
    return ScraperConfig(
        base_url=TEST_BASE_URL,
        batch_size=50,
        batch_delay=0.0,
        rate_limit_delay=0.0,
        request_timeout=0.5,
    )


@pytest.fixture()
def scrape_cache() -> ScrapeCache:
    return ScrapeCache()


@pytest.fixture()
def token_page_html() -> Callable[..., str]:
    """Return a builder for token page HTML.

    Usage::

        html = token_page_html(body="<main><p>Hello there world</p></main>",
                               meta_description="A memecoin")
    """

    def _build(body: str = "", meta_description: str | None = None) -> str:
        head = "<title>token | pump</title>"
        if meta_description is not None:
            head += f'<meta name="description" content="{meta_description}">'
        return f"<!DOCTYPE html><html><head>{head}</head><body>{body}</body></html>"

    return _build
