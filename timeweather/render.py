"""Render path: writes title, time, weather and map for a city into the display."""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from timeweather.config.catalog import CityCatalog
from timeweather.config.schema import MapConfig
from timeweather.display import Display
from timeweather.errors import InvalidTimeZone, WeatherFetchError
from timeweather.ingest.weather_fetcher import WeatherFetcher
from timeweather.models.common import CityKey, Unit, utc_now
from timeweather.models.weather import WeatherReading
from timeweather.reporting.formatters import (
    TIME_UNAVAILABLE,
    WEATHER_UNAVAILABLE,
    format_local_time,
    format_weather_text,
)
from timeweather.reporting.map_view import map_view

logger = logging.getLogger(__name__)


@dataclass
class SelectionControls:
    """The user's current city and unit selection, read at fire time."""

    city_key: CityKey
    unit: Unit


@dataclass
class WidgetContext:
    controls: SelectionControls
    display: Display


class Renderer:
    def __init__(
        self,
        context: WidgetContext,
        catalog: CityCatalog,
        fetcher: WeatherFetcher,
        map_config: MapConfig | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.context = context
        self.catalog = catalog
        self.fetcher = fetcher
        self.map_config = map_config or MapConfig()
        self.clock = clock
        self._weather_generation = 0
        self._weather_tasks: set[asyncio.Task] = set()

    def render(self, city_key: CityKey, unit: Unit) -> asyncio.Task:
        """Full render: title, time and map now, weather in the background.

        city_key must already be validated; unknown keys raise KeyError.
        Returns the weather refresh task.
        """
        city = self.catalog.require(city_key)
        self.context.display.show_title(city.label)
        self.update_time(city_key)
        self.update_map(city_key)
        return self.refresh_weather(city_key, unit)

    def refresh_weather(self, city_key: CityKey, unit: Unit) -> asyncio.Task:
        """Start update_weather() without waiting for the network."""
        task = asyncio.create_task(
            self.update_weather(city_key, unit), name=f"weather-{city_key}"
        )
        self._weather_tasks.add(task)
        task.add_done_callback(self._weather_done)
        return task

    async def settle(self) -> None:
        """Wait until no weather refresh is in flight."""
        while self._weather_tasks:
            await asyncio.gather(*self._weather_tasks, return_exceptions=True)

    async def cancel_pending(self) -> None:
        tasks = list(self._weather_tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    def _weather_done(self, task: asyncio.Task) -> None:
        self._weather_tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error("Weather refresh crashed", exc_info=task.exception())

    def update_time(self, city_key: CityKey) -> str:
        city = self.catalog.require(city_key)
        try:
            text = format_local_time(city.time_zone, self.clock())
        except InvalidTimeZone:
            logger.exception("Cannot format time for %s", city_key)
            text = TIME_UNAVAILABLE
        self.context.display.show_time(text)
        return text

    async def update_weather(
        self, city_key: CityKey, unit: Unit
    ) -> WeatherReading | None:
        """Fetch and show current weather. Only the newest request may write.

        Returns the reading that was displayed, or None if the fetch failed
        or was superseded while in flight.
        """
        city = self.catalog.require(city_key)
        self._weather_generation += 1
        token = self._weather_generation

        try:
            reading = await self.fetcher.fetch_weather(
                city.latitude, city.longitude, city.time_zone, unit
            )
        except WeatherFetchError as e:
            if self._is_stale(token, city_key):
                return None
            logger.warning("Weather error for %s: %r", city_key, e)
            self.context.display.show_weather(WEATHER_UNAVAILABLE)
            return None

        if self._is_stale(token, city_key):
            return None
        self.context.display.show_weather(format_weather_text(reading, unit))
        return reading

    def update_map(self, city_key: CityKey) -> None:
        city = self.catalog.require(city_key)
        cfg = self.map_config
        view = map_view(city, lon_pad=cfg.lon_pad, lat_pad=cfg.lat_pad, zoom=cfg.zoom)
        self.context.display.show_map(view)

    def _is_stale(self, token: int, city_key: CityKey) -> bool:
        if token == self._weather_generation:
            return False
        logger.debug(
            "Discarding weather response for %s (request %d, latest %d)",
            city_key, token, self._weather_generation,
        )
        return True
