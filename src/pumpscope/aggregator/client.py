"""HTTP client for the upstream token aggregation API.

Two endpoints are used:

- ``GET <base>/list``                   - ranked token list (``{"rank": [...]}``)
- ``GET <base>/detail?address=<id>``    - one token's detail record

The list is always re-fetched (``Cache-Control: no-cache``); nothing is
cached at this layer.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from pumpscope.aggregator.schemas import RankedToken
from pumpscope.core.exceptions import UpstreamDetailError, UpstreamListError

logger = logging.getLogger(__name__)

_NO_CACHE_HEADERS: dict[str, str] = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
    "Accept": "application/json",
}


class AggregatorClient:
    """Thin async wrapper over the aggregation API.

    Args:
        base_url: API root, e.g. ``https://ngapi.vercel.app/api/ngmg``.
        client: Shared :class:`httpx.AsyncClient`.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        base_url: str,
        client: httpx.AsyncClient,
        timeout: float = 10.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = client
        self._timeout = timeout

    @property
    def list_url(self) -> str:
        return f"{self._base_url}/list"

    @property
    def detail_url(self) -> str:
        return f"{self._base_url}/detail"

    async def fetch_list(self) -> list[RankedToken]:
        """Fetch the ranked token list.

        Entries that do not validate (e.g. missing ``address``) are skipped
        with a warning rather than failing the whole list.

        Returns:
            Tokens in upstream rank order.  Empty if ``rank`` is absent.

        Raises:
            UpstreamListError: On network errors, non-2xx responses, a
                non-JSON body, or a ``rank`` value that is not a list.
        """
        url = self.list_url
        logger.info("aggregator: fetching %s", url)
        try:
            response = await self._client.get(
                url, headers=_NO_CACHE_HEADERS, timeout=self._timeout
            )
        except httpx.RequestError as exc:
            raise UpstreamListError(f"request error: {exc}", url=url) from exc

        if not response.is_success:
            raise UpstreamListError(
                f"API returned {response.status_code} error",
                url=url,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamListError(
                "response body is not valid JSON", url=url, status_code=response.status_code
            ) from exc

        if not isinstance(payload, dict):
            raise UpstreamListError(
                f"expected a JSON object, got {type(payload).__name__}",
                url=url,
                status_code=response.status_code,
            )

        raw_rank = payload.get("rank") or []
        if not isinstance(raw_rank, list):
            raise UpstreamListError(
                f"'rank' is {type(raw_rank).__name__}, expected list",
                url=url,
                status_code=response.status_code,
            )

        tokens: list[RankedToken] = []
        for position, item in enumerate(raw_rank):
            try:
                tokens.append(RankedToken.model_validate(item))
            except ValidationError as exc:
                logger.warning(
                    "aggregator: skipping malformed rank entry %d: %s",
                    position,
                    exc.errors()[0].get("msg") if exc.errors() else exc,
                )

        logger.info("aggregator: list returned %d tokens", len(tokens))
        return tokens

    async def fetch_detail(self, address: str) -> dict[str, Any]:
        """Fetch the detail record for one token, passed through untouched.

        Raises:
            UpstreamDetailError: On network errors, non-2xx responses or a
                body that is not a JSON object.
        """
        url = self.detail_url
        try:
            response = await self._client.get(
                url,
                params={"address": address},
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
        except httpx.RequestError as exc:
            raise UpstreamDetailError(f"request error: {exc}", url=url) from exc

        if not response.is_success:
            raise UpstreamDetailError(
                f"API returned {response.status_code} error",
                url=url,
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamDetailError(
                "response body is not valid JSON", url=url, status_code=response.status_code
            ) from exc

        if not isinstance(payload, dict):
            raise UpstreamDetailError(
                f"expected a JSON object, got {type(payload).__name__}",
                url=url,
                status_code=response.status_code,
            )
        return payload
