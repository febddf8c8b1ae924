"""Common types and helpers shared across models."""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Generic, TypeAlias, TypeVar

CityKey: TypeAlias = str

T = TypeVar("T")


class Unit(StrEnum):
    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"

    @property
    def symbol(self) -> str:
        return "°C" if self is Unit.CELSIUS else "°F"


@dataclass(frozen=True)
class Settings:
    city_key: CityKey
    unit: Unit


@dataclass(frozen=True)
class Validated(Generic[T]):
    """A validated value, tagged with whether the default was substituted."""

    value: T
    is_default: bool


def utc_now() -> datetime:
    return datetime.now(UTC)
