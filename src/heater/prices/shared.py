"""Concurrency-safe handle around the two-day price cache.

The periodic updater calls ``maybe_update`` while the heating controller
reads ``current_price`` and ``status``. Both run as tasks on one event loop
and go through a single ``asyncio.Lock``.

The lock is never held across network I/O: the decision (and a promotion,
which needs no network) happen under the lock, the fetch runs unlocked, and
only the install of the validated result re-acquires it. Concurrent fetches
are not deduplicated; the last validated result wins.
"""

import asyncio
from datetime import datetime, timedelta

from heater.clock import format_timestamp
from heater.logging import get_logger
from heater.models import CacheStatus, ElectricityPrice
from heater.prices.cache import DEFAULT_PREFETCH_LEAD, MultiDayPriceCache, UpdateAction
from heater.prices.client import PriceClient

logger = get_logger(__name__)


class SharedPriceCache:
    """Process-lifetime price cache shared by updater and readers.

    Args:
        client: Source of schedule documents.
        initial: Starting cache contents (empty by default).
        prefetch_lead: How long before today's end to fetch tomorrow.
    """

    def __init__(
        self,
        client: PriceClient,
        initial: MultiDayPriceCache | None = None,
        prefetch_lead: timedelta = DEFAULT_PREFETCH_LEAD,
    ) -> None:
        self._client = client
        self._prices = initial if initial is not None else MultiDayPriceCache()
        self._prefetch_lead = prefetch_lead
        self._lock = asyncio.Lock()

    @classmethod
    async def create(
        cls,
        client: PriceClient,
        url: str,
        now: datetime,
        prefetch_lead: timedelta = DEFAULT_PREFETCH_LEAD,
    ) -> "SharedPriceCache":
        """Create the cache with an initial fetch.

        Raises:
            FetchError: The price feed could not be reached.
            DecodeError: The price feed returned an unusable document.
        """
        data = await MultiDayPriceCache.fetch(client, url, now)
        logger.info("price_cache_created", **data.describe())
        return cls(client, initial=data, prefetch_lead=prefetch_lead)

    async def current_price(self, now: datetime) -> ElectricityPrice | None:
        """Price for the hour containing ``now``, or None if not cached."""
        async with self._lock:
            return self._prices.current_price(now)

    async def status(self) -> CacheStatus | None:
        """Cache health signal: MISSING_DATA without today's prices."""
        async with self._lock:
            return self._prices.status()

    async def snapshot(self) -> MultiDayPriceCache:
        """Return the current (immutable) cache contents."""
        async with self._lock:
            return self._prices

    async def maybe_update(self, url: str, now: datetime) -> UpdateAction:
        """Bring the cache up to date for ``now``.

        Returns the action taken. On FetchError or DecodeError the cache keeps
        its previous contents and the error propagates; the triggering
        condition persists, so the next call retries.
        """
        async with self._lock:
            action = self._prices.next_action(now, self._prefetch_lead)
            if action is UpdateAction.PROMOTE:
                self._prices = self._prices.promote()
                logger.info("price_cache_promoted", now=format_timestamp(now), **self._prices.describe())
                return action

        if action is UpdateAction.NONE:
            logger.debug("price_cache_current", now=format_timestamp(now))
            return action

        logger.info("price_cache_updating", url=url, now=format_timestamp(now))
        data = await MultiDayPriceCache.fetch(self._client, url, now)

        async with self._lock:
            self._prices = data
        logger.info("price_cache_updated", **data.describe())
        return action
