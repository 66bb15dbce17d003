"""Control decision engine: price-scaled set point selection (pure functions).

Maps {current temperature, electricity price, configured limits} to a
SetPoint. No I/O, no clock, no shared state: safe to call from any task.

CRITICAL: All computations use Decimal. The interpolated temperature is
quantized to 0.01 degC with ROUND_HALF_EVEN so results are reproducible.
"""

from decimal import ROUND_HALF_EVEN

from heater.exceptions import ConfigurationError
from heater.models import (
    TEMPERATURE_QUANTUM,
    CoreConfig,
    ElectricityPrice,
    HeatingEvent,
    PowerState,
    SetPoint,
    Temperature,
)


def select_temperature(config: CoreConfig, current_price: ElectricityPrice) -> Temperature:
    """Scale the set point linearly between maximum and minimum temperature.

    Zero price maps to ``maximum_temperature`` and ``maximum_price`` maps to
    ``minimum_temperature``:

        scaling_factor    = (maximum_price - current_price) / maximum_price
        temperature_delta = (maximum - minimum) * scaling_factor
        result            = minimum + temperature_delta

    The result is not clamped. Prices above ``maximum_price`` or below zero
    land outside ``[minimum, maximum]``; ``desired_state`` never calls this
    function for those cases.

    Raises:
        ConfigurationError: If ``maximum_price`` is zero.
    """
    max_price = config.maximum_price.value
    if max_price == 0:
        raise ConfigurationError("maximum_price must not be zero")

    scaling_factor = (max_price - current_price.value) / max_price
    temperature_range = (
        config.maximum_temperature.value - config.minimum_temperature.value
    )
    temperature_delta = temperature_range * scaling_factor

    set_temperature = config.minimum_temperature.value + temperature_delta
    return Temperature(set_temperature.quantize(TEMPERATURE_QUANTUM, rounding=ROUND_HALF_EVEN))


def desired_state(
    current_temperature: Temperature,
    config: CoreConfig,
    current_price: ElectricityPrice,
) -> SetPoint:
    """Decide the heater set point. Earlier branches always win.

    1. Above turbo temperature: off (overheat cutoff).
    2. Below minimum temperature: on at turbo, whatever the price.
    3. Price above maximum price: off.
    4. Otherwise: on at the price-scaled temperature.
    """
    if current_temperature > config.turbo_temperature:
        return SetPoint(power=PowerState.OFF, temperature=config.minimum_temperature)

    if current_temperature < config.minimum_temperature:
        return SetPoint(power=PowerState.ON, temperature=config.turbo_temperature)

    if current_price > config.maximum_price:
        return SetPoint(power=PowerState.OFF, temperature=config.minimum_temperature)

    return SetPoint(
        power=PowerState.ON,
        temperature=select_temperature(config, current_price),
    )


def heating_event(set_point: SetPoint) -> HeatingEvent:
    """Translate a set point into the event posted to the actuator."""
    if set_point.power is PowerState.ON:
        return HeatingEvent.TURN_ON
    return HeatingEvent.TURN_OFF
