"""Current-conditions weather models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class WeatherReading:
    temperature: int
    wind_speed: int  # mph
    code: int
