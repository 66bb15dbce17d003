"""Price layer -- hourly price tables, the two-day cache, and its updater."""

from heater.prices.cache import MultiDayPriceCache, UpdateAction
from heater.prices.client import HttpPriceClient, PriceClient
from heater.prices.shared import SharedPriceCache
from heater.prices.table import HourlyPriceTable
from heater.prices.updater import PriceUpdater

__all__ = [
    "HourlyPriceTable",
    "HttpPriceClient",
    "MultiDayPriceCache",
    "PriceClient",
    "PriceUpdater",
    "SharedPriceCache",
    "UpdateAction",
]
