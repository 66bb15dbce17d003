"""Control layer -- set point decisions, thermistor math, and status mapping."""

from heater.control.engine import desired_state, heating_event, select_temperature
from heater.control.status import device_status, status_colour
from heater.control.thermistor import (
    temperature_from_resistance,
    temperature_from_voltage,
    voltage_to_resistance,
)

__all__ = [
    "desired_state",
    "device_status",
    "heating_event",
    "select_temperature",
    "status_colour",
    "temperature_from_resistance",
    "temperature_from_voltage",
    "voltage_to_resistance",
]
