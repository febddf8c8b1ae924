"""Settings store: persisted city/unit choice with validation and defaults."""

import logging
import sqlite3

from timeweather.config.catalog import CityCatalog
from timeweather.models.common import CityKey, Settings, Unit, Validated
from timeweather.storage import preferences_repo

logger = logging.getLogger(__name__)

CITY_KEY = "tw_city"
UNIT_KEY = "tw_unit"


def validate_city_key(
    raw: str | None, catalog: CityCatalog, default: CityKey
) -> Validated[CityKey]:
    if raw is not None and raw in catalog:
        return Validated(raw, is_default=False)
    return Validated(default, is_default=True)


def validate_unit(raw: str | None, default: Unit) -> Validated[Unit]:
    """Accept exactly "celsius" or "fahrenheit"; anything else is the default."""
    if raw in (Unit.CELSIUS.value, Unit.FAHRENHEIT.value):
        return Validated(Unit(raw), is_default=False)
    return Validated(default, is_default=True)


class SettingsStore:
    def __init__(
        self,
        conn: sqlite3.Connection,
        catalog: CityCatalog,
        default_city: CityKey = "richmond",
        default_unit: Unit = Unit.FAHRENHEIT,
    ):
        if default_city not in catalog:
            raise ValueError(f"Default city {default_city!r} is not in the catalog")
        self.conn = conn
        self.catalog = catalog
        self.default_city = default_city
        self.default_unit = default_unit

    def load(self) -> Settings:
        """Read the saved settings, substituting defaults for missing or bad values.

        Never raises: a storage failure is logged and yields the defaults.
        """
        try:
            raw_city = preferences_repo.get_preference(self.conn, CITY_KEY)
            raw_unit = preferences_repo.get_preference(self.conn, UNIT_KEY)
        except sqlite3.Error:
            logger.exception("Could not read saved settings, using defaults")
            raw_city = raw_unit = None

        city = validate_city_key(raw_city, self.catalog, self.default_city)
        unit = validate_unit(raw_unit, self.default_unit)

        if city.is_default and raw_city is not None:
            logger.warning(
                "Ignoring saved city %r (not in catalog), using %r",
                raw_city, city.value,
            )
        if unit.is_default and raw_unit is not None:
            logger.warning(
                "Ignoring saved unit %r, using %r", raw_unit, unit.value.value
            )

        return Settings(city_key=city.value, unit=unit.value)

    def save(self, city_key: CityKey, unit: Unit | str) -> None:
        """Persist both values, overwriting whatever was saved before."""
        unit_value = unit.value if isinstance(unit, Unit) else str(unit)
        preferences_repo.set_preference(self.conn, CITY_KEY, city_key)
        preferences_repo.set_preference(self.conn, UNIT_KEY, unit_value)
        logger.info("Saved settings city=%s unit=%s", city_key, unit_value)
