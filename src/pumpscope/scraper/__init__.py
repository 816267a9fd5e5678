"""Token description scraper.

Fetches public token pages and extracts a human-readable description for
tokens whose upstream record has none.

Sub-modules:
- ``config``                 - constants, selectors, filters and ``ScraperConfig``
- ``http_fetcher``           - timeout-bounded async httpx page fetcher
- ``description_extractor``  - BeautifulSoup meta → selector → text-block cascade
- ``cache``                  - process-wide scrape result cache
- ``description_scraper``    - batch orchestrator (``DescriptionScraper``)
"""
