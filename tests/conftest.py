"""Shared test fixtures for the heater controller."""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any

import pytest

from heater.models import CoreConfig, ElectricityPrice, Temperature
from heater.prices.table import HourlyPriceTable

#: Start of "today" in the test schedules (a CET day, expressed in UTC).
DAY_START = datetime(2024, 3, 1, 23, 0, tzinfo=timezone.utc)


@pytest.fixture
def core_config() -> CoreConfig:
    """The reference limits: 15/22/30 degC, heating off above 0.30."""
    return CoreConfig(
        minimum_temperature=Temperature.of("15.0"),
        maximum_temperature=Temperature.of("22.0"),
        turbo_temperature=Temperature.of("30.0"),
        maximum_price=ElectricityPrice.of("0.30"),
    )


@pytest.fixture
def day_start() -> datetime:
    return DAY_START


@pytest.fixture
def make_table() -> Callable[..., HourlyPriceTable]:
    """Factory for a 24-hour table starting at ``start``.

    Hour ``i`` is priced ``base + i * step``.
    """

    def _make(
        start: datetime = DAY_START,
        base: str = "0.10",
        step: str = "0.01",
        hours: int = 24,
    ) -> HourlyPriceTable:
        prices = {
            start + timedelta(hours=i): ElectricityPrice(Decimal(base) + i * Decimal(step))
            for i in range(hours)
        }
        return HourlyPriceTable(
            valid_from=start,
            valid_until=start + timedelta(hours=hours),
            hourly_price=prices,
        )

    return _make


@pytest.fixture
def make_document(make_table: Callable[..., HourlyPriceTable]) -> Callable[..., dict[str, Any]]:
    """Factory for a feed document with today (and optionally tomorrow) starting at ``start``."""

    def _make(
        start: datetime = DAY_START,
        with_today: bool = True,
        with_tomorrow: bool = True,
    ) -> dict[str, Any]:
        today = make_table(start) if with_today else None
        tomorrow = make_table(start + timedelta(hours=24), base="0.20") if with_tomorrow else None
        return {
            "today": today.to_document() if today is not None else None,
            "tomorrow": tomorrow.to_document() if tomorrow is not None else None,
        }

    return _make
