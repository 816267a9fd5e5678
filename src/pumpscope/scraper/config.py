"""Constants and tuning parameters for the token description scraper."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pumpscope.config.settings import Settings

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

#: Public token page host.  A token page lives at ``<base>/<address>``.
DEFAULT_BASE_URL: str = "https://pump.fun"

#: Per-page fetch timeout (seconds).
DEFAULT_REQUEST_TIMEOUT: float = 4.0

#: Pages fetched concurrently per batch.
DEFAULT_BATCH_SIZE: int = 50

#: Delay between batches (seconds).
DEFAULT_BATCH_DELAY: float = 0.0

#: Delay before a single non-batched scrape (seconds).
DEFAULT_RATE_LIMIT_DELAY: float = 0.075

DEFAULT_MIN_DESCRIPTION_LENGTH: int = 0
DEFAULT_MAX_DESCRIPTION_LENGTH: int = 2500

#: Value reported for a token whose page yielded no description, or whose
#: scrape failed.
NO_DESCRIPTION: str = "No description available"

# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

#: Browser-like header set.  The token site serves a stripped page without
#: descriptions to clients that do not look like a browser.
BROWSER_HEADERS: dict[str, str] = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Accept-Encoding": "gzip, deflate, br",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
}

# ---------------------------------------------------------------------------
# Extraction cascade
# ---------------------------------------------------------------------------

#: Metadata tags checked first, most authoritative first.
META_SELECTORS: tuple[str, ...] = (
    'meta[name="description"]',
    'meta[property="og:description"]',
    'meta[name="twitter:description"]',
)

#: Structural selectors checked after the meta tags.
STRUCTURAL_SELECTORS: tuple[str, ...] = (
    '[class*="description"]',
    '[data-testid*="description"]',
    "main p",
    '[class*="about"]',
)

#: Tags scanned by the last-resort leaf text block search.
TEXT_BLOCK_TAGS: tuple[str, ...] = ("p", "div", "span")

# ---------------------------------------------------------------------------
# Validity filters
# ---------------------------------------------------------------------------

_UNIT = r"(?:second|minute|hour|day|week|month|year)s?"

#: Relative timestamps ("5 minutes ago", "just now") are the main noise
#: source on token pages.
TIME_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"\b\d+\s+{_UNIT}\s+ago\b", re.IGNORECASE),
    re.compile(rf"\babout\s+\d+\s+{_UNIT}\s+ago\b", re.IGNORECASE),
    re.compile(r"\b\d+[mhd]\s+ago\b", re.IGNORECASE),
    re.compile(rf"^\s*\d+\s+{_UNIT}\s+ago\s*$", re.IGNORECASE),
    re.compile(r"^(?:just now|moments? ago|recently created?)$", re.IGNORECASE),
    re.compile(r"^(?:yesterday|today|tomorrow)$", re.IGNORECASE),
)

#: Rejected only on an exact (case-insensitive) match.
EXACT_EXCLUSIONS: frozenset[str] = frozenset(
    {
        "default description",
        "time since creation",
        "creation time",
    }
)

#: UI chrome rejected as a substring, except for meta tag content.
UI_EXCLUSIONS: tuple[str, ...] = (
    "connect wallet",
    "copy address",
    "click here",
    "sign in",
    "log in",
    "loading",
    "view more",
    "show more",
    "read more",
    "taking too long to load",
    "try refresh",
    "refresh the page",
    "page not found",
    "error loading",
    "failed to load",
    "try again",
)

#: Extra substrings rejected in free text blocks.
TEXT_BLOCK_EXCLUSIONS: tuple[str, ...] = (
    "market cap",
    "loading",
    "refresh",
    "try again",
)


# ---------------------------------------------------------------------------
# Runtime configuration bundle
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScraperConfig:
    """Read-only scraper configuration, fixed at construction.

    Attributes:
        base_url: Token page host; pages are fetched from ``<base_url>/<address>``.
        batch_size: Pages fetched concurrently per batch.
        batch_delay: Seconds to wait between batches.
        rate_limit_delay: Seconds to wait before a single non-batched scrape.
        request_timeout: Per-page fetch timeout in seconds.
        min_description_length: Shortest accepted description.
        max_description_length: Longest accepted description.
    """

    base_url: str = DEFAULT_BASE_URL
    batch_size: int = DEFAULT_BATCH_SIZE
    batch_delay: float = DEFAULT_BATCH_DELAY
    rate_limit_delay: float = DEFAULT_RATE_LIMIT_DELAY
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    min_description_length: int = DEFAULT_MIN_DESCRIPTION_LENGTH
    max_description_length: int = DEFAULT_MAX_DESCRIPTION_LENGTH

    def __post_init__(self) -> None:
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {self.batch_size}")
        if self.min_description_length > self.max_description_length:
            raise ValueError("min_description_length exceeds max_description_length")

    @classmethod
    def from_settings(cls, settings: Settings) -> ScraperConfig:
        """Build a config from the application :class:`Settings`."""
        return cls(
            base_url=settings.scrape_base_url.rstrip("/"),
            batch_size=settings.scrape_batch_size,
            batch_delay=settings.scrape_batch_delay,
            rate_limit_delay=settings.scrape_rate_limit_delay,
            request_timeout=settings.scrape_request_timeout,
            min_description_length=settings.description_min_length,
            max_description_length=settings.description_max_length,
        )
