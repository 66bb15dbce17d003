"""Shared value types for the heater controller.

CRITICAL: Temperatures and prices are fixed-point Decimal values. Never build
them from float arithmetic; use ``Temperature.of`` / ``ElectricityPrice.of``,
which go through ``str`` so that 0.30 stays exactly 0.30.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from heater.exceptions import ConfigurationError

#: Resolution of configured and interpolated set points (degrees Celsius).
TEMPERATURE_QUANTUM = Decimal("0.01")


@dataclass(frozen=True, order=True)
class Temperature:
    """Temperature in degrees Celsius."""

    value: Decimal

    @classmethod
    def of(cls, value: "Decimal | int | float | str") -> "Temperature":
        return cls(Decimal(str(value)))

    def __str__(self) -> str:
        return f"{self.value}C"


@dataclass(frozen=True, order=True)
class ElectricityPrice:
    """Electricity price per energy unit. Negative prices do happen."""

    value: Decimal

    @classmethod
    def of(cls, value: "Decimal | int | float | str") -> "ElectricityPrice":
        return cls(Decimal(str(value)))

    def __str__(self) -> str:
        return str(self.value)


class PowerState(str, Enum):
    """Commanded heater power."""

    ON = "on"
    OFF = "off"


class HeatingEvent(str, Enum):
    """Event delivered to the actuator for a set point."""

    TURN_ON = "turn_on"
    TURN_OFF = "turn_off"


class CacheStatus(str, Enum):
    """Health signal published by the price cache."""

    MISSING_DATA = "missing_data"


class DeviceStatus(str, Enum):
    """Overall device status shown on the status indicator."""

    INITIALIZING = "initializing"
    READY = "ready"
    COLLECTING = "collecting"
    MISSING_DATA = "missing_data"


@dataclass(frozen=True)
class SetPoint:
    """Commanded power state and target temperature for the heater."""

    power: PowerState
    temperature: Temperature


@dataclass(frozen=True)
class CoreConfig:
    """Temperature and price limits used by the decision engine.

    Validated on construction, so an instance that exists is always usable:
    every value is finite, temperatures are whole hundredths of a degree,
    ``minimum <= maximum <= turbo`` and ``maximum_price != 0``.
    """

    # Lowest set point while heating is on
    minimum_temperature: Temperature
    # Highest set point under normal conditions (reached at zero price)
    maximum_temperature: Temperature
    # Recovery set point when the temperature has dropped below the minimum
    turbo_temperature: Temperature
    # Price at which heating is turned off
    maximum_price: ElectricityPrice

    def __post_init__(self) -> None:
        temperatures = (
            self.minimum_temperature,
            self.maximum_temperature,
            self.turbo_temperature,
        )
        for value in (*(t.value for t in temperatures), self.maximum_price.value):
            if not value.is_finite():
                raise ConfigurationError(f"config values must be finite, got {value}")
        for temperature in temperatures:
            # Interpolation rounds to the quantum; the endpoints must survive it
            if temperature.value != temperature.value.quantize(TEMPERATURE_QUANTUM):
                raise ConfigurationError(
                    f"temperatures must be multiples of {TEMPERATURE_QUANTUM}, got {temperature}"
                )
        if not (
            self.minimum_temperature
            <= self.maximum_temperature
            <= self.turbo_temperature
        ):
            raise ConfigurationError(
                "temperatures must satisfy minimum <= maximum <= turbo, got "
                f"{self.minimum_temperature} / {self.maximum_temperature} / "
                f"{self.turbo_temperature}"
            )
        if self.maximum_price.value == 0:
            raise ConfigurationError("maximum_price must not be zero")
