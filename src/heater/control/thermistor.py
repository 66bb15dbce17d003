"""NTC thermistor conversion using the beta model.

The thermistor sits on the low side of a voltage divider whose high side is
a reference resistor equal to the thermistor's nominal resistance R1:

    Vcc --[R1]--+--[NTC]-- GND
                |
              sample

so ``R_ntc = sample * R1 / (Vcc - sample)`` and

    1 / T2 = ln(R_ntc / R1) / beta + 1 / T1      (temperatures in Kelvin)

This is sensor math, not money: plain floats are fine here. Callers turn the
result into a ``Temperature`` at the boundary.
"""

import math
from dataclasses import dataclass

KELVIN_OFFSET = 273.15


@dataclass(frozen=True)
class ThermistorProperties:
    """Beta-model parameters of an NTC thermistor."""

    beta: float
    r1: float  # nominal resistance (ohm) at t1
    t1: float  # nominal temperature (degC)


THERMISTOR_PROPERTIES = ThermistorProperties(beta=3750.0, r1=12000.0, t1=25.0)


def voltage_to_resistance(v_supply: float, sample: float, reference_resistance: float) -> float:
    """Resistance of the low-side divider leg given the sampled voltage."""
    if not 0 < sample < v_supply:
        raise ValueError(f"sample {sample} outside divider range (0, {v_supply})")
    return (sample * reference_resistance) / (v_supply - sample)


def temperature_from_resistance(
    r2: float, properties: ThermistorProperties = THERMISTOR_PROPERTIES
) -> float:
    """Thermistor temperature (degC) for a measured resistance."""
    if r2 <= 0:
        raise ValueError(f"resistance must be positive, got {r2}")
    if r2 == properties.r1:
        return properties.t1

    t1 = properties.t1 + KELVIN_OFFSET
    t2 = 1.0 / (math.log(r2 / properties.r1) / properties.beta + 1.0 / t1)
    return t2 - KELVIN_OFFSET


def temperature_from_voltage(
    v_supply: float,
    sample: float,
    properties: ThermistorProperties = THERMISTOR_PROPERTIES,
) -> float:
    """Thermistor temperature (degC) straight from the divider voltage.

    R1 cancels out when the reference resistor matches the thermistor's
    nominal resistance, leaving only the voltage ratio.
    """
    if not 0 < sample < v_supply:
        raise ValueError(f"sample {sample} outside divider range (0, {v_supply})")
    ratio = sample / (v_supply - sample)
    inverse = math.log(ratio) / properties.beta + 1.0 / (properties.t1 + KELVIN_OFFSET)
    return 1.0 / inverse - KELVIN_OFFSET
