"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field, model_validator

from timeweather.models.common import Unit

OPEN_METEO_BASE_URL = "https://api.open-meteo.com"
DEFAULT_USER_AGENT = "timeweather/0.1.0"


class CityEntry(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    key: str = Field(min_length=1)
    label: str
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)
    time_zone: str


class WeatherApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = OPEN_METEO_BASE_URL
    timeout_seconds: float = Field(default=30.0, gt=0.0)
    user_agent: str = DEFAULT_USER_AGENT


class ScheduleConfig(BaseModel):
    model_config = {"extra": "forbid"}

    clock_tick_seconds: float = Field(default=1.0, gt=0.0)
    weather_poll_minutes: float = Field(default=10.0, ge=1.0)


class DefaultsConfig(BaseModel):
    model_config = {"extra": "forbid"}

    city: str = "richmond"
    unit: Unit = Unit.FAHRENHEIT


class MapConfig(BaseModel):
    model_config = {"extra": "forbid"}

    lon_pad: float = Field(default=0.15, gt=0.0)
    lat_pad: float = Field(default=0.10, gt=0.0)
    zoom: int = Field(default=12, ge=1, le=19)


class WidgetConfig(BaseModel):
    model_config = {"extra": "forbid"}

    weather: WeatherApiConfig = WeatherApiConfig()
    schedule: ScheduleConfig = ScheduleConfig()
    defaults: DefaultsConfig = DefaultsConfig()
    map: MapConfig = MapConfig()
    cities: list[CityEntry] = []

    @model_validator(mode="after")
    def _check_city_keys(self) -> "WidgetConfig":
        keys = [c.key for c in self.cities]
        dupes = sorted({k for k in keys if keys.count(k) > 1})
        if dupes:
            raise ValueError(f"Duplicate city keys: {', '.join(dupes)}")
        if self.cities and self.defaults.city not in keys:
            raise ValueError(
                f"Default city {self.defaults.city!r} is not in the city list"
            )
        return self
