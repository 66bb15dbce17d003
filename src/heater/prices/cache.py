"""Two-day (today/tomorrow) electricity price cache.

``MultiDayPriceCache`` is an immutable value: updates produce a new instance,
which ``SharedPriceCache`` swaps in under its lock. The fetch/validate logic
and the rollover decision table live here as plain functions of ``now`` so
every time-dependent rule can be tested with an injected clock.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from heater.clock import format_timestamp
from heater.exceptions import DecodeError, StaleDataError
from heater.logging import get_logger
from heater.models import CacheStatus, ElectricityPrice
from heater.prices.client import PriceClient
from heater.prices.table import HourlyPriceTable

logger = get_logger(__name__)

#: How long before today's table expires we start asking for tomorrow's.
DEFAULT_PREFETCH_LEAD = timedelta(hours=3)


class UpdateAction(str, Enum):
    """Outcome of the rollover decision table."""

    FETCH = "fetch"
    PROMOTE = "promote"
    NONE = "none"


@dataclass(frozen=True)
class MultiDayPriceCache:
    """Price tables for today and, once published, tomorrow.

    When both are present, ``tomorrow.valid_from == today.valid_until``.
    """

    today: HourlyPriceTable | None = None
    tomorrow: HourlyPriceTable | None = None

    # ──────────────────────────────────────────────
    # Construction
    # ──────────────────────────────────────────────

    @classmethod
    async def fetch(cls, client: PriceClient, url: str, now: datetime) -> "MultiDayPriceCache":
        """Fetch and validate a schedule from the price feed.

        A document whose tomorrow table has already expired is discarded
        entirely and an empty cache is returned, so the next update cycle
        retries from scratch.

        Raises:
            FetchError: Transport failure from the client.
            DecodeError: Malformed or inconsistent document.
        """
        document = await client.fetch_schedule(url)
        data = cls.from_document(document)

        try:
            return data.validated(now)
        except StaleDataError as e:
            logger.error("stale_price_data_received", url=url, now=format_timestamp(now), reason=str(e))
            return cls()

    @classmethod
    def from_document(cls, document: Any) -> "MultiDayPriceCache":
        """Parse ``{"today": table|null, "tomorrow": table|null}``."""
        if not isinstance(document, Mapping):
            raise DecodeError(f"price schedule must be an object, got {type(document).__name__}")

        today = document.get("today")
        tomorrow = document.get("tomorrow")
        return cls(
            today=HourlyPriceTable.from_document(today) if today is not None else None,
            tomorrow=HourlyPriceTable.from_document(tomorrow) if tomorrow is not None else None,
        )

    def validated(self, now: datetime) -> "MultiDayPriceCache":
        """Sanity-check freshly fetched data against ``now``.

        Raises:
            StaleDataError: Tomorrow's table has already expired.
            DecodeError: Today and tomorrow are not contiguous.
        """
        tomorrow = self.tomorrow
        if tomorrow is not None:
            if now >= tomorrow.valid_until:
                raise StaleDataError(
                    f"tomorrow's prices expired at {format_timestamp(tomorrow.valid_until)}"
                )
            if tomorrow.covers(now):
                # Server labelled today's prices as tomorrow's
                logger.warning(
                    "tomorrow_prices_cover_today",
                    valid_from=format_timestamp(tomorrow.valid_from),
                    valid_until=format_timestamp(tomorrow.valid_until),
                )
                return MultiDayPriceCache(today=tomorrow, tomorrow=None)

        if (
            self.today is not None
            and tomorrow is not None
            and tomorrow.valid_from != self.today.valid_until
        ):
            raise DecodeError(
                f"tomorrow starts at {format_timestamp(tomorrow.valid_from)} but today "
                f"ends at {format_timestamp(self.today.valid_until)}"
            )
        return self

    # ──────────────────────────────────────────────
    # Queries
    # ──────────────────────────────────────────────

    def current_price(self, now: datetime) -> ElectricityPrice | None:
        """Price for the hour containing ``now``, from today then tomorrow."""
        for table in (self.today, self.tomorrow):
            if table is None:
                continue
            price = table.price_at(now)
            if price is not None:
                return price
        return None

    def status(self) -> CacheStatus | None:
        """MISSING_DATA when today's prices are absent, else nothing to report."""
        if self.today is None:
            return CacheStatus.MISSING_DATA
        return None

    # ──────────────────────────────────────────────
    # Rollover
    # ──────────────────────────────────────────────

    def next_action(self, now: datetime, prefetch_lead: timedelta = DEFAULT_PREFETCH_LEAD) -> UpdateAction:
        """Decide how to bring the cache up to date. Rules apply in order.

        1. No today: fetch.
        2. Inside today's window with tomorrow cached: nothing to do.
        3. Tomorrow cached and its window has started: promote it.
        4. No tomorrow and within ``prefetch_lead`` of today's end: fetch.
        5. Otherwise: nothing to do yet.
        """
        today, tomorrow = self.today, self.tomorrow

        if today is None:
            return UpdateAction.FETCH
        if tomorrow is not None and today.covers(now):
            return UpdateAction.NONE
        if tomorrow is not None and now >= tomorrow.valid_from:
            return UpdateAction.PROMOTE
        if tomorrow is None and now >= today.valid_until - prefetch_lead:
            return UpdateAction.FETCH
        return UpdateAction.NONE

    def promote(self) -> "MultiDayPriceCache":
        """Make tomorrow's table today's."""
        return MultiDayPriceCache(today=self.tomorrow, tomorrow=None)

    def describe(self) -> dict[str, Any]:
        """Compact summary of the cached windows for log context."""
        return {
            name: (
                f"{format_timestamp(table.valid_from)}/{format_timestamp(table.valid_until)}"
                if table is not None
                else None
            )
            for name, table in (("today", self.today), ("tomorrow", self.tomorrow))
        }
