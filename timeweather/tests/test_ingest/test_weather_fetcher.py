"""Tests for the weather fetcher and current-conditions parsing."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import respx

from timeweather.errors import HttpError, ParseError
from timeweather.ingest.open_meteo_client import OpenMeteoClient
from timeweather.ingest.weather_fetcher import (
    WeatherFetcher,
    parse_current,
    round_half_away,
)
from timeweather.models.common import Unit
from timeweather.models.weather import WeatherReading


class TestRoundHalfAway:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (68.4, 68),
            (5.6, 6),
            (0.5, 1),
            (2.5, 3),
            (-2.5, -3),
            (-0.4, 0),
            (-7.6, -8),
            (12.0, 12),
        ],
    )
    def test_rounding(self, value: float, expected: int):
        assert round_half_away(value) == expected


class TestParseCurrent:
    def test_example_payload(self, current_payload: dict):
        assert parse_current(current_payload) == WeatherReading(
            temperature=68, wind_speed=6, code=0
        )

    def test_integer_fields(self):
        raw = {"current": {"temperature_2m": 20, "weather_code": 63, "wind_speed_10m": 0}}
        assert parse_current(raw) == WeatherReading(20, 0, 63)

    def test_float_weather_code(self):
        raw = {"current": {"temperature_2m": 1.0, "weather_code": 3.0, "wind_speed_10m": 1.0}}
        assert parse_current(raw).code == 3

    def test_missing_current(self):
        with pytest.raises(ParseError):
            parse_current({"hourly": {}})

    @pytest.mark.parametrize("field", ["temperature_2m", "weather_code", "wind_speed_10m"])
    def test_missing_field(self, current_payload: dict, field: str):
        del current_payload["current"][field]
        with pytest.raises(ParseError, match=field):
            parse_current(current_payload)

    @pytest.mark.parametrize("bad", ["68", None, True, [68]])
    def test_non_numeric_temperature(self, current_payload: dict, bad):
        current_payload["current"]["temperature_2m"] = bad
        with pytest.raises(ParseError):
            parse_current(current_payload)

    def test_fractional_code(self, current_payload: dict):
        current_payload["current"]["weather_code"] = 1.5
        with pytest.raises(ParseError):
            parse_current(current_payload)

    @pytest.mark.parametrize("field", ["temperature_2m", "weather_code", "wind_speed_10m"])
    def test_integer_too_large_for_float(self, current_payload: dict, field: str):
        current_payload["current"][field] = 10**400
        with pytest.raises(ParseError, match=field):
            parse_current(current_payload)


class TestWeatherFetcher:
    def test_fetch_with_mocked_client(self, current_payload: dict):
        client = MagicMock(spec=OpenMeteoClient)
        client.get_current = AsyncMock(return_value=current_payload)
        fetcher = WeatherFetcher(client)

        reading = asyncio.run(
            fetcher.fetch_weather(51.5072, -0.1276, "Europe/London", Unit.CELSIUS)
        )

        assert reading == WeatherReading(68, 6, 0)
        client.get_current.assert_awaited_once_with(
            51.5072, -0.1276, "Europe/London", Unit.CELSIUS
        )

    @respx.mock
    def test_fetch_end_to_end(self, current_payload: dict):
        respx.get("https://api.open-meteo.com/v1/forecast").mock(
            return_value=httpx.Response(200, json=current_payload)
        )
        fetcher = WeatherFetcher(OpenMeteoClient())
        reading = asyncio.run(
            fetcher.fetch_weather(37.5407, -77.436, "America/New_York", Unit.FAHRENHEIT)
        )
        assert reading == WeatherReading(temperature=68, wind_speed=6, code=0)

    @respx.mock
    def test_http_error_propagates(self):
        respx.get("https://api.open-meteo.com/v1/forecast").mock(
            return_value=httpx.Response(500)
        )
        fetcher = WeatherFetcher(OpenMeteoClient())
        with pytest.raises(HttpError) as exc_info:
            asyncio.run(
                fetcher.fetch_weather(37.5407, -77.436, "America/New_York", Unit.FAHRENHEIT)
            )
        assert exc_info.value.status == 500

    def test_no_retry_on_failure(self):
        client = MagicMock(spec=OpenMeteoClient)
        client.get_current = AsyncMock(side_effect=HttpError(503))
        fetcher = WeatherFetcher(client)
        with pytest.raises(HttpError):
            asyncio.run(fetcher.fetch_weather(0.0, 0.0, "UTC", Unit.CELSIUS))
        assert client.get_current.await_count == 1
