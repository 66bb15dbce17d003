"""Heating controller -- measure, price, decide, actuate.

Each cycle:
  1. STATUS: show COLLECTING while measuring
  2. MEASURE: read the temperature sensor
  3. PRICE: look up the current hour's price, falling back to the configured default
  4. DECIDE: run the decision engine
  5. ACTUATE: hand the set point to the actuator
  6. STATUS: show READY, or MISSING_DATA when today's prices are absent
"""

import asyncio
from collections.abc import Callable
from datetime import datetime

from heater.clock import utc_now
from heater.control.engine import desired_state
from heater.control.status import device_status
from heater.heating.devices import Actuator, StatusIndicator, TemperatureSensor
from heater.logging import get_logger
from heater.models import CoreConfig, DeviceStatus, ElectricityPrice, SetPoint
from heater.prices.shared import SharedPriceCache

logger = get_logger(__name__)


class HeatingController:
    """Periodic measurement and decision loop.

    Args:
        config: Validated set point limits.
        cache: Shared price cache to read prices and health from.
        sensor: Temperature source.
        actuator: Receives each new set point.
        indicator: Shows device status.
        fallback_price: Price used when the cache has none for now.
        interval: Seconds between cycles.
        clock: Source of the current UTC time.
    """

    def __init__(
        self,
        config: CoreConfig,
        cache: SharedPriceCache,
        sensor: TemperatureSensor,
        actuator: Actuator,
        indicator: StatusIndicator,
        fallback_price: ElectricityPrice,
        interval: float = 60.0,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._config = config
        self._cache = cache
        self._sensor = sensor
        self._actuator = actuator
        self._indicator = indicator
        self._fallback_price = fallback_price
        self._interval = interval
        self._clock = clock
        self._running = False
        self._task: asyncio.Task | None = None  # type: ignore[type-arg]

    async def run_cycle(self) -> SetPoint:
        """Run one measure/decide/actuate cycle and return the set point applied."""
        self._indicator.show(DeviceStatus.COLLECTING)
        temperature = await self._sensor.read()
        now = self._clock()

        price = await self._cache.current_price(now)
        if price is None:
            logger.warning("no_current_price", fallback=str(self._fallback_price))
            price = self._fallback_price

        set_point = desired_state(temperature, self._config, price)
        logger.info(
            "set_point_selected",
            temperature=str(temperature),
            price=str(price),
            power=set_point.power.value,
            target=str(set_point.temperature),
        )
        await self._actuator.apply(set_point)

        self._indicator.show(device_status(await self._cache.status()))
        return set_point

    async def start(self) -> None:
        """Begin periodic cycles in the background."""
        if self._running:
            logger.warning("heating_controller_already_running")
            return
        self._running = True
        self._task = asyncio.create_task(self._run_loop())
        logger.info("heating_controller_started", interval=self._interval)

    async def stop(self) -> None:
        """Stop the controller and wait for the background task to finish."""
        self._running = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("heating_controller_stopped")

    async def _run_loop(self) -> None:
        while self._running:
            try:
                await self.run_cycle()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error("heating_cycle_error", error=str(e), exc_info=True)
            if self._running:
                await asyncio.sleep(self._interval)
