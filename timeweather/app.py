"""Wires config, storage, fetcher and display into a ready scheduler."""

import sqlite3

from timeweather.config.catalog import CityCatalog
from timeweather.config.schema import WidgetConfig
from timeweather.display import Display
from timeweather.ingest.open_meteo_client import OpenMeteoClient
from timeweather.ingest.weather_fetcher import WeatherFetcher
from timeweather.render import Renderer, SelectionControls, WidgetContext
from timeweather.scheduler import RefreshScheduler
from timeweather.storage.settings_store import SettingsStore


def build_scheduler(
    config: WidgetConfig,
    conn: sqlite3.Connection,
    display: Display,
    fetcher: WeatherFetcher | None = None,
) -> RefreshScheduler:
    catalog = CityCatalog(config.cities)
    store = SettingsStore(
        conn,
        catalog,
        default_city=config.defaults.city,
        default_unit=config.defaults.unit,
    )
    if fetcher is None:
        client = OpenMeteoClient(
            base_url=config.weather.base_url,
            user_agent=config.weather.user_agent,
            timeout=config.weather.timeout_seconds,
        )
        fetcher = WeatherFetcher(client)

    context = WidgetContext(
        controls=SelectionControls(
            city_key=config.defaults.city, unit=config.defaults.unit
        ),
        display=display,
    )
    renderer = Renderer(context, catalog, fetcher, map_config=config.map)
    return RefreshScheduler(
        context, catalog, store, renderer, schedule=config.schedule
    )
