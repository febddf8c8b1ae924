"""YAML config loader with default city injection."""

from pathlib import Path

import yaml

from timeweather.config.defaults import DEFAULT_CITIES
from timeweather.config.schema import WidgetConfig


def load_config(path: str | Path | None = None) -> WidgetConfig:
    """Load and validate config from a YAML file.

    With no path, returns the built-in defaults. If no cities are specified
    in the YAML, injects DEFAULT_CITIES.
    """
    raw: dict = {}
    if path is not None:
        with open(Path(path)) as f:
            raw = yaml.safe_load(f) or {}

    if "cities" not in raw or not raw["cities"]:
        raw["cities"] = [c.model_dump() for c in DEFAULT_CITIES]

    return WidgetConfig(**raw)
