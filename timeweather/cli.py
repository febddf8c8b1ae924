"""CLI entry point for the time and weather widget."""

import argparse
import asyncio
import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from timeweather.app import build_scheduler
from timeweather.config.catalog import CityCatalog
from timeweather.config.loader import load_config
from timeweather.display import MemoryDisplay, TerminalDisplay
from timeweather.models.common import Unit
from timeweather.scheduler import stdin_lines
from timeweather.storage.database import open_db
from timeweather.storage.settings_store import SettingsStore

logger = logging.getLogger(__name__)

DATA_DIR = Path.home() / ".timeweather"
DEFAULT_DB = DATA_DIR / "settings.db"
DEFAULT_LOG = DATA_DIR / "widget.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="timeweather",
        description="Local time and current weather for a chosen city",
    )
    parser.add_argument("--config", default=None, help="Config YAML path")
    parser.add_argument("--db", default=str(DEFAULT_DB), help="SQLite settings DB path")

    sub = parser.add_subparsers(dest="command")

    # run
    run_p = sub.add_parser("run", help="Run the live widget")
    run_p.add_argument(
        "--log-file", default=str(DEFAULT_LOG), help="Where to write logs while running"
    )

    # show
    sub.add_parser("show", help="Render once and exit")

    # set
    set_p = sub.add_parser("set", help="Save city and/or unit")
    set_p.add_argument("--city", help="City key")
    set_p.add_argument("--unit", choices=[u.value for u in Unit], help="Temperature unit")

    # cities
    sub.add_parser("cities", help="List available cities")

    # config show
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "run":
        Path(args.log_file).parent.mkdir(parents=True, exist_ok=True)
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, filename=args.log_file)
    else:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)

    try:
        config = load_config(args.config)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        print(f"Error: cannot load config: {e}")
        return 1

    if args.command == "run":
        return _cmd_run(config, args)
    elif args.command == "show":
        return _cmd_show(config, args)
    elif args.command == "set":
        return _cmd_set(config, args)
    elif args.command == "cities":
        return _cmd_cities(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_run(config, args) -> int:
    conn = open_db(args.db)
    scheduler = build_scheduler(config, conn, TerminalDisplay())
    print("Commands: city <key> | unit <celsius|fahrenheit> | quit")
    try:
        asyncio.run(scheduler.run(stdin_lines()))
    except KeyboardInterrupt:
        logger.info("Widget interrupted by keyboard")
    finally:
        conn.close()
        print()
    return 0


def _cmd_show(config, args) -> int:
    conn = open_db(args.db)
    display = MemoryDisplay()
    try:
        scheduler = build_scheduler(config, conn, display)
        asyncio.run(scheduler.render_once())
    finally:
        conn.close()

    print(display.title)
    print(f"Time: {display.time}")
    print(f"Weather: {display.weather}")
    if display.map is not None:
        print(f"Map: {display.map.link_url}")
    return 0


def _cmd_set(config, args) -> int:
    if args.city is None and args.unit is None:
        print("Nothing to set: use --city and/or --unit")
        return 1

    catalog = CityCatalog(config.cities)
    if args.city is not None and args.city not in catalog:
        print(f"Error: unknown city {args.city!r}. Choose one of: {', '.join(catalog.keys())}")
        return 1

    conn = open_db(args.db)
    try:
        store = SettingsStore(
            conn, catalog,
            default_city=config.defaults.city,
            default_unit=config.defaults.unit,
        )
        current = store.load()
        city_key = args.city or current.city_key
        unit = Unit(args.unit) if args.unit else current.unit
        store.save(city_key, unit)
    finally:
        conn.close()

    print(f"Saved: {catalog.require(city_key).label} ({unit.value})")
    return 0


def _cmd_cities(config, args) -> int:
    for city in CityCatalog(config.cities):
        marker = " (default)" if city.key == config.defaults.city else ""
        print(
            f"  {city.key:<10} {city.label:<20} {city.time_zone:<20} "
            f"{city.latitude:.4f},{city.longitude:.4f}{marker}"
        )
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    print("Use: config show")
    return 1
