"""Device interfaces for the heating loop and their stand-in implementations.

The controller depends only on the ABCs. Hardware-backed implementations
(ADC reads, relay GPIO, LED pixel) live outside this package; the classes
here read a voltage through a callable and log what they would actuate.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from decimal import ROUND_HALF_EVEN, Decimal

from heater.control.engine import heating_event
from heater.control.status import status_colour
from heater.control.thermistor import temperature_from_voltage
from heater.logging import get_logger
from heater.models import TEMPERATURE_QUANTUM, DeviceStatus, SetPoint, Temperature

logger = get_logger(__name__)


class TemperatureSensor(ABC):
    """Source of temperature readings."""

    @abstractmethod
    async def read(self) -> Temperature:
        """Take one reading."""
        ...


class Actuator(ABC):
    """Applies set points to the heater."""

    @abstractmethod
    async def apply(self, set_point: SetPoint) -> None:
        """Command the heater to the given set point."""
        ...


class StatusIndicator(ABC):
    """Shows the device status to the user."""

    @abstractmethod
    def show(self, status: DeviceStatus) -> None:
        ...


class ThermistorSensor(TemperatureSensor):
    """NTC thermistor on a voltage divider.

    Args:
        read_voltage: Returns the divider's sampled voltage (mV).
        supply_voltage: Divider supply voltage (mV).
    """

    def __init__(self, read_voltage: Callable[[], float], supply_voltage: float) -> None:
        self._read_voltage = read_voltage
        self._supply_voltage = supply_voltage

    async def read(self) -> Temperature:
        sample = self._read_voltage()
        celsius = temperature_from_voltage(self._supply_voltage, sample)
        temperature = Temperature(
            Decimal(str(celsius)).quantize(TEMPERATURE_QUANTUM, rounding=ROUND_HALF_EVEN)
        )
        logger.debug("thermistor_read", sample_mv=sample, temperature=str(temperature))
        return temperature


class LoggingActuator(Actuator):
    """Logs heating events instead of driving a relay."""

    def __init__(self) -> None:
        self.last_set_point: SetPoint | None = None

    async def apply(self, set_point: SetPoint) -> None:
        logger.info(
            "heating_event",
            action=heating_event(set_point).value,
            temperature=str(set_point.temperature),
        )
        self.last_set_point = set_point


class LoggingStatusIndicator(StatusIndicator):
    """Logs status colour changes instead of lighting an LED."""

    def __init__(self) -> None:
        self.current: DeviceStatus | None = None

    def show(self, status: DeviceStatus) -> None:
        if status is not self.current:
            logger.info("status_changed", status=status.value, colour=status_colour(status))
        self.current = status
