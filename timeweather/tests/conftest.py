"""Shared test fixtures."""

import sqlite3
from pathlib import Path

import pytest
import yaml

from timeweather.config.catalog import CityCatalog
from timeweather.config.defaults import DEFAULT_CITIES
from timeweather.config.schema import WidgetConfig
from timeweather.storage.database import open_db


@pytest.fixture
def tmp_db(tmp_path: Path) -> sqlite3.Connection:
    """Temporary settings database with its schema in place."""
    conn = open_db(tmp_path / "test.db")
    yield conn
    conn.close()


@pytest.fixture
def default_config() -> WidgetConfig:
    """Return default WidgetConfig with default cities."""
    return WidgetConfig(cities=DEFAULT_CITIES)


@pytest.fixture
def catalog() -> CityCatalog:
    return CityCatalog(DEFAULT_CITIES)


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "schedule": {"weather_poll_minutes": 15},
        "defaults": {"city": "london", "unit": "celsius"},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def current_payload() -> dict:
    """Open-Meteo response body for a clear, mild afternoon."""
    return {
        "latitude": 37.54,
        "longitude": -77.43,
        "timezone": "America/New_York",
        "current_units": {
            "temperature_2m": "°F",
            "weather_code": "wmo code",
            "wind_speed_10m": "mp/h",
        },
        "current": {
            "time": "2026-10-18T14:00",
            "interval": 900,
            "temperature_2m": 68.4,
            "weather_code": 0,
            "wind_speed_10m": 5.6,
        },
    }
