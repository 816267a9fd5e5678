"""Application-wide exception hierarchy for pumpscope.

All custom exceptions subclass ``PumpscopeError`` so that callers can catch
the whole family with a single ``except`` clause.

Hierarchy::

    PumpscopeError
    ├── FetchError              (url, status_code)
    └── UpstreamError           (url, status_code)
        ├── UpstreamListError
        └── UpstreamDetailError

Failing to find a description is not an exception: the extractor returns
``None``.  An enrichment timeout is not an exception either; the enrichment
service logs it and returns the unenriched list.
"""

from __future__ import annotations


class PumpscopeError(Exception):
    """Base class for all pumpscope exceptions."""


# ---------------------------------------------------------------------------
# Scraper exceptions
# ---------------------------------------------------------------------------


class FetchError(PumpscopeError):
    """Raised when a token page cannot be fetched.

    Covers network failures, non-2xx HTTP statuses and per-request timeouts.

    Args:
        message: Human-readable description of the failure.
        url: The URL that was requested.
        status_code: HTTP status code, or ``None`` for network errors and
            timeouts.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


# ---------------------------------------------------------------------------
# Upstream aggregator exceptions
# ---------------------------------------------------------------------------


class UpstreamError(PumpscopeError):
    """Raised when the upstream aggregation API fails or returns garbage.

    Args:
        message: Human-readable description of the failure.
        url: The upstream endpoint that was called.
        status_code: HTTP status code, or ``None`` when no response arrived
            or the body could not be parsed.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class UpstreamListError(UpstreamError):
    """Raised when the ranked-list endpoint is unreachable or malformed."""


class UpstreamDetailError(UpstreamError):
    """Raised when the per-token detail endpoint is unreachable or malformed."""
