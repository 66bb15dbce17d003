"""Tests for settings loading and startup validation."""

from datetime import timedelta
from decimal import Decimal

import pytest

from heater.config import (
    AppSettings,
    ControlSettings,
    MeasurementSettings,
    PriceFeedSettings,
    build_core_config,
)
from heater.exceptions import ConfigurationError
from heater.models import ElectricityPrice, Temperature

URL = "https://prices.example/api/day-ahead"


class TestDefaults:
    def test_control_defaults(self) -> None:
        config = ControlSettings().core_config()
        assert config.minimum_temperature == Temperature.of("15")
        assert config.maximum_temperature == Temperature.of("22")
        assert config.turbo_temperature == Temperature.of("30")
        assert config.maximum_price == ElectricityPrice.of("0.30")

    def test_price_feed_defaults(self) -> None:
        settings = PriceFeedSettings()
        assert settings.prefetch_lead == timedelta(hours=3)
        assert settings.fallback_price == Decimal("0.20")


class TestEnvironment:
    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CONTROL_MAXIMUM_PRICE", "0.45")
        monkeypatch.setenv("PRICES_URL", URL)
        monkeypatch.setenv("PRICES_PREFETCH_LEAD_HOURS", "5")

        assert ControlSettings().maximum_price == Decimal("0.45")
        prices = PriceFeedSettings()
        assert prices.url == URL
        assert prices.prefetch_lead == timedelta(hours=5)


class TestBuildCoreConfig:
    def _settings(self, **control: str) -> AppSettings:
        return AppSettings(
            control=ControlSettings(**control),
            prices=PriceFeedSettings(url=URL),
            measurement=MeasurementSettings(),
        )

    def test_valid(self) -> None:
        config = build_core_config(self._settings())
        assert config.maximum_price == ElectricityPrice.of("0.30")

    def test_missing_url(self) -> None:
        settings = AppSettings(prices=PriceFeedSettings(url=""))
        with pytest.raises(ConfigurationError, match="price API"):
            build_core_config(settings)

    def test_zero_maximum_price(self) -> None:
        with pytest.raises(ConfigurationError, match="maximum_price"):
            build_core_config(self._settings(maximum_price="0"))

    def test_unordered_temperatures(self) -> None:
        with pytest.raises(ConfigurationError):
            build_core_config(self._settings(minimum_temperature="25"))

    def test_non_positive_interval(self) -> None:
        settings = AppSettings(
            prices=PriceFeedSettings(url=URL, update_interval=0),
        )
        with pytest.raises(ConfigurationError, match="intervals"):
            build_core_config(settings)
