"""Tests for PriceUpdater: single ticks, error tolerance, and start/stop."""

import asyncio
from datetime import datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from heater.exceptions import DecodeError, FetchError
from heater.prices.cache import UpdateAction
from heater.prices.updater import PriceUpdater

URL = "https://prices.example/api/day-ahead"


@pytest.fixture
def cache() -> AsyncMock:
    cache = AsyncMock()
    cache.maybe_update = AsyncMock(return_value=UpdateAction.NONE)
    return cache


class TestPriceUpdater:
    @pytest.mark.asyncio
    async def test_update_once_passes_clock_time(self, cache: AsyncMock, day_start: datetime) -> None:
        updater = PriceUpdater(cache, URL, clock=lambda: day_start)

        assert await updater.update_once() is UpdateAction.NONE
        cache.maybe_update.assert_awaited_once_with(URL, day_start)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [FetchError("down"), DecodeError("bad")])
    async def test_update_once_swallows_heater_errors(
        self, cache: AsyncMock, day_start: datetime, error: Exception
    ) -> None:
        cache.maybe_update = AsyncMock(side_effect=error)
        updater = PriceUpdater(cache, URL, clock=lambda: day_start)

        assert await updater.update_once() is None

    @pytest.mark.asyncio
    async def test_unexpected_errors_propagate(self, cache: AsyncMock, day_start: datetime) -> None:
        cache.maybe_update = AsyncMock(side_effect=RuntimeError("bug"))
        updater = PriceUpdater(cache, URL, clock=lambda: day_start)

        with pytest.raises(RuntimeError):
            await updater.update_once()

    @pytest.mark.asyncio
    async def test_loop_keeps_running_after_failures(self, cache: AsyncMock, day_start: datetime) -> None:
        outcomes = iter([FetchError("down"), FetchError("down"), UpdateAction.FETCH])

        async def flaky(url: str, now: datetime) -> UpdateAction:
            outcome = next(outcomes, UpdateAction.NONE)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        cache.maybe_update = AsyncMock(side_effect=flaky)
        ticks = iter(day_start + timedelta(minutes=i) for i in range(1000))
        updater = PriceUpdater(cache, URL, interval=0.001, clock=lambda: next(ticks))

        await updater.start()
        for _ in range(200):
            if cache.maybe_update.await_count >= 4:
                break
            await asyncio.sleep(0.005)
        await updater.stop()

        assert cache.maybe_update.await_count >= 4
        assert not updater.running

    @pytest.mark.asyncio
    async def test_loop_survives_unexpected_errors(self, cache: AsyncMock, day_start: datetime) -> None:
        outcomes = iter([RuntimeError("boom")])

        async def broken_once(url: str, now: datetime) -> UpdateAction:
            outcome = next(outcomes, UpdateAction.NONE)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        cache.maybe_update = AsyncMock(side_effect=broken_once)
        updater = PriceUpdater(cache, URL, interval=0.001, clock=lambda: day_start)

        await updater.start()
        task = updater._task
        for _ in range(200):
            if cache.maybe_update.await_count >= 3:
                break
            await asyncio.sleep(0.005)

        assert task is not None and not task.done()
        await updater.stop()

        assert cache.maybe_update.await_count >= 3

    @pytest.mark.asyncio
    async def test_double_start_is_ignored(self, cache: AsyncMock, day_start: datetime) -> None:
        updater = PriceUpdater(cache, URL, interval=10.0, clock=lambda: day_start)

        await updater.start()
        first_task = updater._task
        await updater.start()
        assert updater._task is first_task

        await updater.stop()
        assert updater._task is None
