"""Default city catalog entries."""

from timeweather.config.schema import CityEntry

DEFAULT_CITIES: list[CityEntry] = [
    CityEntry(
        key="richmond",
        label="Richmond, VA",
        latitude=37.5407,
        longitude=-77.4360,
        time_zone="America/New_York",
    ),
    CityEntry(
        key="dc",
        label="Washington, DC",
        latitude=38.9072,
        longitude=-77.0369,
        time_zone="America/New_York",
    ),
    CityEntry(
        key="nyc",
        label="New York City",
        latitude=40.7128,
        longitude=-74.006,
        time_zone="America/New_York",
    ),
    CityEntry(
        key="london",
        label="London",
        latitude=51.5072,
        longitude=-0.1276,
        time_zone="Europe/London",
    ),
    CityEntry(
        key="bristol",
        label="Bristol",
        latitude=51.4545,
        longitude=-2.5879,
        time_zone="Europe/London",
    ),
]
