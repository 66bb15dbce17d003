"""Heating layer -- device interfaces and the measurement/decision loop."""

from heater.heating.controller import HeatingController
from heater.heating.devices import (
    Actuator,
    LoggingActuator,
    LoggingStatusIndicator,
    StatusIndicator,
    TemperatureSensor,
    ThermistorSensor,
)

__all__ = [
    "Actuator",
    "HeatingController",
    "LoggingActuator",
    "LoggingStatusIndicator",
    "StatusIndicator",
    "TemperatureSensor",
    "ThermistorSensor",
]
