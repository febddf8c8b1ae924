"""Weather fetcher: turns an Open-Meteo payload into a WeatherReading."""

import logging
import math
from decimal import ROUND_HALF_UP, Decimal

from timeweather.errors import ParseError
from timeweather.ingest.open_meteo_client import OpenMeteoClient
from timeweather.models.common import Unit
from timeweather.models.weather import WeatherReading

logger = logging.getLogger(__name__)


class WeatherFetcher:
    def __init__(self, client: OpenMeteoClient):
        self.client = client

    async def fetch_weather(
        self, latitude: float, longitude: float, time_zone: str, unit: Unit
    ) -> WeatherReading:
        """Fetch and normalize current conditions. No retries."""
        raw = await self.client.get_current(latitude, longitude, time_zone, unit)
        reading = parse_current(raw)
        logger.debug(
            "Weather at %s,%s: %d %s, wind %d mph, code %d",
            latitude, longitude, reading.temperature, unit,
            reading.wind_speed, reading.code,
        )
        return reading


def parse_current(raw: dict) -> WeatherReading:
    """Extract temperature, wind speed and weather code from the "current" section."""
    current = raw.get("current")
    if not isinstance(current, dict):
        raise ParseError("Response has no 'current' section")

    temperature = _number(current, "temperature_2m")
    wind = _number(current, "wind_speed_10m")
    code = _number(current, "weather_code")
    if code != int(code):
        raise ParseError(f"weather_code is not an integer: {code!r}")

    return WeatherReading(
        temperature=round_half_away(temperature),
        wind_speed=round_half_away(wind),
        code=int(code),
    )


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _number(section: dict, field: str) -> float:
    value = section.get(field)
    # bool is an int subclass; a JSON true/false here is malformed
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ParseError(f"Missing or non-numeric '{field}': {value!r}")
    try:
        number = float(value)
    except OverflowError as e:
        raise ParseError(f"Out-of-range '{field}'") from e
    if not math.isfinite(number):
        raise ParseError(f"Non-finite '{field}': {value!r}")
    return number
