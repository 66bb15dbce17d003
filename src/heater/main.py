"""Entry point for the price-aware heater controller.

Component wiring order (in _build_components):
1. AppSettings (configuration) and CoreConfig validation
2. Logging setup
3. Status indicator (shows INITIALIZING)
4. HttpPriceClient (price feed transport)
5. SharedPriceCache (initial fetch)
6. PriceUpdater (periodic maybe_update)
7. ThermistorSensor, LoggingActuator
8. HeatingController (measurement/decision loop)

Handles SIGINT/SIGTERM for graceful shutdown.
"""

import asyncio
import signal
import sys
from typing import Any

from heater.clock import utc_now
from heater.config import AppSettings, build_core_config
from heater.exceptions import ConfigurationError, DecodeError, FetchError
from heater.heating.controller import HeatingController
from heater.heating.devices import LoggingActuator, LoggingStatusIndicator, ThermistorSensor
from heater.logging import get_logger, setup_logging
from heater.models import CoreConfig, DeviceStatus, ElectricityPrice
from heater.prices.client import HttpPriceClient
from heater.prices.shared import SharedPriceCache
from heater.prices.updater import PriceUpdater


async def _build_components(settings: AppSettings, config: CoreConfig) -> dict[str, Any]:
    """Build all heater components from validated settings.

    A failed initial price fetch is not fatal: the cache starts empty,
    reports MISSING_DATA, and the updater retries on its first tick.
    """
    logger = get_logger("heater.main")

    indicator = LoggingStatusIndicator()
    indicator.show(DeviceStatus.INITIALIZING)

    client = HttpPriceClient(timeout=settings.prices.request_timeout)
    try:
        cache = await SharedPriceCache.create(
            client,
            settings.prices.url,
            utc_now(),
            prefetch_lead=settings.prices.prefetch_lead,
        )
    except (FetchError, DecodeError) as e:
        logger.error("initial_price_fetch_failed", error=str(e), error_type=type(e).__name__)
        cache = SharedPriceCache(client, prefetch_lead=settings.prices.prefetch_lead)

    updater = PriceUpdater(
        cache,
        settings.prices.url,
        interval=settings.prices.update_interval,
    )

    measurement = settings.measurement
    sensor = ThermistorSensor(
        read_voltage=lambda: measurement.sample_voltage_mv,
        supply_voltage=measurement.supply_voltage_mv,
    )

    controller = HeatingController(
        config=config,
        cache=cache,
        sensor=sensor,
        actuator=LoggingActuator(),
        indicator=indicator,
        fallback_price=ElectricityPrice(settings.prices.fallback_price),
        interval=measurement.interval,
    )

    return {
        "client": client,
        "cache": cache,
        "updater": updater,
        "controller": controller,
        "indicator": indicator,
    }


async def run() -> None:
    """Run the heater until SIGINT/SIGTERM."""
    # 1. Load and validate settings
    settings = AppSettings()

    # 2. Setup logging
    setup_logging(settings.log_level, settings.log_format)
    logger = get_logger("heater.main")

    try:
        config = build_core_config(settings)
    except ConfigurationError as e:
        logger.critical("invalid_configuration", error=str(e))
        raise

    # 3-8. Build all components
    components = await _build_components(settings, config)

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()

    def _graceful_handler() -> None:
        logger.info("graceful_shutdown_signal")
        stop_event.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, _graceful_handler)

    logger.info(
        "heater_starting",
        minimum_temperature=str(config.minimum_temperature),
        maximum_temperature=str(config.maximum_temperature),
        maximum_price=str(config.maximum_price),
    )

    await components["updater"].start()
    await components["controller"].start()
    try:
        await stop_event.wait()
    finally:
        await components["controller"].stop()
        await components["updater"].stop()
        logger.info("heater_stopped")


def main() -> None:
    """Synchronous entry point."""
    try:
        asyncio.run(run())
    except ConfigurationError:
        sys.exit(2)


if __name__ == "__main__":
    main()
