"""In-memory dataset cache with keep-last-good fallback. No Redis needed.

Note: Each uvicorn worker has its own cache instance. With --workers 2,
the upstream may be fetched twice (once per worker). Concurrent requests
hitting an expired cache may also each trigger a fetch; both are
acceptable at this scale.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Callable

from errors import FetchError
from services.carbon_source import CarbonDataSource

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 60 * 60  # 1 hour


class DatasetCache:
    def __init__(
        self,
        source: CarbonDataSource | None = None,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self._source = source or CarbonDataSource()
        self._ttl = ttl_seconds
        self._clock = clock
        self._data: list[dict] | None = None
        self._last_fetched_at: float | None = None

    @property
    def data(self) -> list[dict] | None:
        return self._data

    @property
    def last_fetched_at(self) -> float | None:
        return self._last_fetched_at

    @property
    def last_updated(self) -> datetime | None:
        if self._last_fetched_at is None:
            return None
        return datetime.fromtimestamp(self._last_fetched_at, tz=timezone.utc)

    @property
    def record_count(self) -> int:
        return len(self._data) if self._data is not None else 0

    @property
    def is_stale(self) -> bool:
        if self._data is None or self._last_fetched_at is None:
            return True
        return self._clock() - self._last_fetched_at > self._ttl

    async def get_dataset(self) -> list[dict]:
        """Return the current dataset, refreshing it once the TTL has passed.

        A failed refresh falls back to the last good copy. FetchError only
        escapes when no fetch has ever succeeded.
        """
        if not self.is_stale:
            return self._data

        now = self._clock()
        try:
            data = await self._source.fetch()
        except FetchError as e:
            if self._data is None:
                raise
            logger.warning("Carbon data refresh failed, serving stale copy: %s", e)
            return self._data

        self._data = data
        self._last_fetched_at = now
        logger.info("Carbon data refreshed: %d records", len(data))
        return data
