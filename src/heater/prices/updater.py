"""Periodic price cache updater.

Calls ``SharedPriceCache.maybe_update`` on a fixed interval. Most ticks are
no-ops; a fetch happens at startup recovery, ahead of the day boundary, and
after a failed fetch (the triggering condition persists until one succeeds).
"""

import asyncio
from collections.abc import Callable
from datetime import datetime

from heater.clock import utc_now
from heater.exceptions import HeaterError
from heater.logging import get_logger
from heater.prices.cache import UpdateAction
from heater.prices.shared import SharedPriceCache

logger = get_logger(__name__)


class PriceUpdater:
    """Keeps the shared price cache provisioned in the background.

    Args:
        cache: The shared cache to update.
        url: Price feed URL.
        interval: Seconds between update attempts.
        clock: Source of the current UTC time.
    """

    def __init__(
        self,
        cache: SharedPriceCache,
        url: str,
        interval: float = 300.0,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._cache = cache
        self._url = url
        self._interval = interval
        self._clock = clock
        self._running = False
        self._task: asyncio.Task | None = None  # type: ignore[type-arg]

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Begin periodic updates in the background."""
        if self._running:
            logger.warning("price_updater_already_running")
            return
        self._running = True
        self._task = asyncio.create_task(self._update_loop())
        logger.info("price_updater_started", interval=self._interval)

    async def stop(self) -> None:
        """Stop the updater and wait for the background task to finish."""
        self._running = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("price_updater_stopped")

    async def update_once(self) -> UpdateAction | None:
        """Run one update attempt. Returns None if the attempt failed."""
        try:
            return await self._cache.maybe_update(self._url, self._clock())
        except HeaterError as e:
            logger.warning("price_update_failed", error=str(e), error_type=type(e).__name__)
            return None

    async def _update_loop(self) -> None:
        while self._running:
            try:
                await self.update_once()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error("price_update_loop_error", error=str(e), exc_info=True)
            if self._running:
                await asyncio.sleep(self._interval)
