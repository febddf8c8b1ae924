"""Output formatters for the time and weather display targets."""

from datetime import UTC, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from timeweather.errors import InvalidTimeZone
from timeweather.models.common import Unit, utc_now
from timeweather.models.weather import WeatherReading
from timeweather.reporting.weather_codes import translate

WEATHER_UNAVAILABLE = "Weather unavailable"
TIME_UNAVAILABLE = "Time unavailable"


def resolve_zone(time_zone: str) -> ZoneInfo:
    try:
        return ZoneInfo(time_zone)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        raise InvalidTimeZone(time_zone) from e


def format_local_time(time_zone: str, instant: datetime | None = None) -> str:
    """US-style 12-hour clock with seconds, e.g. '3:04:05 PM'.

    Naive instants are taken as UTC. Raises InvalidTimeZone for unknown zones.
    """
    zone = resolve_zone(time_zone)
    if instant is None:
        instant = utc_now()
    elif instant.tzinfo is None:
        instant = instant.replace(tzinfo=UTC)
    local = instant.astimezone(zone)
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d}:{local.second:02d} {meridiem}"


def format_weather_text(reading: WeatherReading, unit: Unit) -> str:
    """One-line weather summary: '68°F • Clear • Wind 6 mph'."""
    return (
        f"{reading.temperature}{Unit(unit).symbol} • "
        f"{translate(reading.code)} • Wind {reading.wind_speed} mph"
    )
