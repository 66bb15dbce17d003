"""One calendar day of hourly electricity prices.

A table covers the half-open UTC window ``[valid_from, valid_until)``,
normally 24 hours. Keys are hour-start timestamps; the first key of the day
D is usually ``D-1T22:00Z`` or ``D-1T23:00Z`` depending on the market's
local offset, which is why the window is carried explicitly rather than
derived from the calendar date.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from heater.clock import floor_to_hour, format_timestamp, parse_timestamp
from heater.exceptions import DecodeError
from heater.models import ElectricityPrice


@dataclass(frozen=True)
class HourlyPriceTable:
    """Immutable hourly price schedule for one day."""

    valid_from: datetime
    valid_until: datetime
    hourly_price: dict[datetime, ElectricityPrice] = field(default_factory=dict)

    def covers(self, timestamp: datetime) -> bool:
        """True if ``timestamp`` falls inside ``[valid_from, valid_until)``."""
        return self.valid_from <= timestamp < self.valid_until

    def price_at(self, timestamp: datetime) -> ElectricityPrice | None:
        """Return the price for the hour containing ``timestamp``.

        Returns None outside the validity window or when the hour has no entry.
        """
        if not self.covers(timestamp):
            return None
        return self.hourly_price.get(floor_to_hour(timestamp))

    @classmethod
    def from_document(cls, document: Any) -> "HourlyPriceTable":
        """Build a table from its JSON form.

        Expected shape::

            {"valid_from": "2024-03-01T23:00:00Z",
             "valid_until": "2024-03-02T23:00:00Z",
             "hourly_price": {"2024-03-01T23:00:00Z": 0.1234, ...}}

        Raises:
            DecodeError: On missing keys, bad timestamps or prices, or an
                empty validity window.
        """
        if not isinstance(document, Mapping):
            raise DecodeError(f"price table must be an object, got {type(document).__name__}")

        try:
            valid_from = parse_timestamp(document["valid_from"])
            valid_until = parse_timestamp(document["valid_until"])
            raw_prices = document["hourly_price"]
        except KeyError as e:
            raise DecodeError(f"price table missing field {e.args[0]!r}") from e
        except ValueError as e:
            raise DecodeError(f"invalid price table window: {e}") from e

        if valid_from >= valid_until:
            raise DecodeError(
                f"empty price table window [{format_timestamp(valid_from)}, "
                f"{format_timestamp(valid_until)})"
            )
        if not isinstance(raw_prices, Mapping):
            raise DecodeError("hourly_price must be an object")

        hourly_price: dict[datetime, ElectricityPrice] = {}
        for raw_time, raw_price in raw_prices.items():
            try:
                hour = floor_to_hour(parse_timestamp(raw_time))
            except ValueError as e:
                raise DecodeError(f"invalid hour key {raw_time!r}: {e}") from e

            # bool is an int subclass; reject it explicitly
            if raw_price is None or isinstance(raw_price, bool):
                raise DecodeError(f"invalid price {raw_price!r} for {raw_time}")
            try:
                price = Decimal(str(raw_price))
            except InvalidOperation as e:
                raise DecodeError(f"invalid price {raw_price!r} for {raw_time}") from e
            if not price.is_finite():
                raise DecodeError(f"invalid price {raw_price!r} for {raw_time}")

            hourly_price[hour] = ElectricityPrice(price)

        return cls(valid_from=valid_from, valid_until=valid_until, hourly_price=hourly_price)

    def to_document(self) -> dict[str, Any]:
        """Render the table in the same JSON form ``from_document`` accepts."""
        return {
            "valid_from": format_timestamp(self.valid_from),
            "valid_until": format_timestamp(self.valid_until),
            "hourly_price": {
                format_timestamp(hour): str(price.value)
                for hour, price in sorted(self.hourly_price.items())
            },
        }
