"""Configuration system using pydantic-settings with environment variable loading."""

from datetime import timedelta
from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict

from heater.exceptions import ConfigurationError
from heater.models import CoreConfig, ElectricityPrice, Temperature


class ControlSettings(BaseSettings):
    """Set point limits for the decision engine."""

    model_config = SettingsConfigDict(env_prefix="CONTROL_")

    minimum_temperature: Decimal = Decimal("15.0")
    maximum_temperature: Decimal = Decimal("22.0")
    turbo_temperature: Decimal = Decimal("30.0")
    maximum_price: Decimal = Decimal("0.30")  # heating off above this price

    def core_config(self) -> CoreConfig:
        """Build the validated engine config. Raises ConfigurationError."""
        return CoreConfig(
            minimum_temperature=Temperature(self.minimum_temperature),
            maximum_temperature=Temperature(self.maximum_temperature),
            turbo_temperature=Temperature(self.turbo_temperature),
            maximum_price=ElectricityPrice(self.maximum_price),
        )


class PriceFeedSettings(BaseSettings):
    """Day-ahead price feed and cache update parameters."""

    model_config = SettingsConfigDict(env_prefix="PRICES_")

    url: str = ""
    update_interval: int = 300  # seconds between maybe_update calls
    prefetch_lead_hours: int = 3  # fetch tomorrow this long before today ends
    fallback_price: Decimal = Decimal("0.20")  # used when no price is cached
    request_timeout: float = 30.0

    @property
    def prefetch_lead(self) -> timedelta:
        return timedelta(hours=self.prefetch_lead_hours)


class MeasurementSettings(BaseSettings):
    """Temperature measurement cycle parameters."""

    model_config = SettingsConfigDict(env_prefix="MEASUREMENT_")

    interval: int = 60  # seconds between decisions
    supply_voltage_mv: float = 4000.0
    sample_voltage_mv: float = 1500.0  # fixed divider reading for the stand-in sensor


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    log_format: str = "console"  # "console" or "json"
    control: ControlSettings = ControlSettings()
    prices: PriceFeedSettings = PriceFeedSettings()
    measurement: MeasurementSettings = MeasurementSettings()


def build_core_config(settings: AppSettings) -> CoreConfig:
    """Validate settings once at startup and return the engine config.

    Raises:
        ConfigurationError: Missing price feed URL, non-positive intervals,
            or set point limits that violate the CoreConfig invariants.
    """
    if not settings.prices.url:
        raise ConfigurationError("Missing electricity price API configuration")
    if settings.prices.update_interval <= 0 or settings.measurement.interval <= 0:
        raise ConfigurationError("update and measurement intervals must be positive")
    if settings.prices.prefetch_lead_hours < 0:
        raise ConfigurationError("prefetch_lead_hours must not be negative")
    return settings.control.core_config()
