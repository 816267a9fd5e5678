#!/usr/bin/env python
"""Scrape token descriptions for one or more addresses and print them as JSON.

Run from the project root::

    python scripts/scrape_descriptions.py <address> [<address> ...]

Options:
    --timeout      Per-page fetch timeout in seconds (default: from settings).
    --batch-size   Pages fetched concurrently per batch (default: from settings).
    --base-url     Token page host (default: from settings).

Exit codes:
    0 - At least one description was found, or no addresses were given.
    1 - Every scrape came back without a description.
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import os
import sys

# Ensure the src layout is on sys.path when run as a standalone script.
_SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
_SRC_DIR = os.path.join(os.path.dirname(_SCRIPT_DIR), "src")
if _SRC_DIR not in sys.path:
    sys.path.insert(0, _SRC_DIR)


async def _run(
    addresses: list[str],
    timeout: float | None,
    batch_size: int | None,
    base_url: str | None,
) -> dict[str, str]:
    """Scrape *addresses* with a fresh cache and return the result mapping."""
    from pumpscope.api.dependencies import build_http_client  # noqa: PLC0415
    from pumpscope.config.settings import get_settings  # noqa: PLC0415
    from pumpscope.core.logging_config import configure_logging  # noqa: PLC0415
    from pumpscope.scraper.cache import ScrapeCache  # noqa: PLC0415
    from pumpscope.scraper.config import ScraperConfig  # noqa: PLC0415
    from pumpscope.scraper.description_scraper import DescriptionScraper  # noqa: PLC0415

    settings = get_settings()
    configure_logging(settings.log_level)

    overrides: dict[str, object] = {}
    if timeout is not None:
        overrides["request_timeout"] = timeout
    if batch_size is not None:
        overrides["batch_size"] = batch_size
    if base_url is not None:
        overrides["base_url"] = base_url.rstrip("/")
    config = dataclasses.replace(ScraperConfig.from_settings(settings), **overrides)

    async with build_http_client(settings) as client:
        scraper = DescriptionScraper(config, ScrapeCache(), client)
        return await scraper.scrape_many(addresses)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Scrape token descriptions from public token pages.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("addresses", nargs="*", help="Token addresses to scrape.")
    parser.add_argument("--timeout", type=float, default=None, help="Per-page timeout (s).")
    parser.add_argument("--batch-size", type=int, default=None, help="Concurrent fetches per batch.")
    parser.add_argument("--base-url", default=None, help="Token page host.")
    return parser.parse_args()


def main() -> None:
    """Entry point for the description scraping script."""
    from pumpscope.scraper.config import NO_DESCRIPTION  # noqa: PLC0415

    args = _parse_args()
    if not args.addresses:
        print("{}")
        return

    results = asyncio.run(
        _run(
            addresses=args.addresses,
            timeout=args.timeout,
            batch_size=args.batch_size,
            base_url=args.base_url,
        )
    )
    print(json.dumps(results, indent=2, ensure_ascii=False))

    if all(desc == NO_DESCRIPTION for desc in results.values()):
        sys.exit(1)


if __name__ == "__main__":
    main()
