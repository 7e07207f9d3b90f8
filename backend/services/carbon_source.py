"""Upstream client for the static carbon intensity dataset.

The dataset is a single JSON array served from a GitHub gist. One GET per
call, no retries; callers decide what to do when it fails.
"""

import logging

import httpx

from config import settings
from errors import FetchError

logger = logging.getLogger(__name__)


class CarbonDataSource:
    """Fetches the carbon intensity dataset using httpx."""

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url or settings.carbon_data_url
        self.timeout = timeout if timeout is not None else settings.fetch_timeout
        self._transport = transport

    async def fetch(self) -> list[dict]:
        """GET the dataset. Raises FetchError on any transport, status or decode failure."""
        logger.info("Fetching carbon data from %s", self.url)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.get(self.url)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as e:
            raise FetchError(str(e)) from e
        except ValueError as e:
            raise FetchError(f"invalid JSON body: {e}") from e

        if not isinstance(data, list):
            raise FetchError(f"expected a JSON array, got {type(data).__name__}")
        return data
