"""CLI entry point for the meetup weather tool."""

import argparse
import asyncio
import logging

from meetup_weather.config.defaults import TIME_OF_DAY_PRESETS, hour_range_for_time_of_day
from meetup_weather.config.loader import (
    get_config_value,
    load_config,
    save_config,
    set_config_value,
)
from meetup_weather.config.schema import AppConfig
from meetup_weather.ingest.visual_crossing_client import VisualCrossingClient
from meetup_weather.models.errors import (
    EmptyLocation,
    FetchFailed,
    InvalidHour,
    InvalidWeekday,
)
from meetup_weather.pipeline.orchestrator import ForecastOrchestrator
from meetup_weather.reporting.formatters import format_pair_json, format_pair_text

DEFAULT_CONFIG = "meetup_weather.yaml"
WEEKDAYS = [
    "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="meetup-weather",
        description="Weather for this week's and next week's meetup",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )

    sub = parser.add_subparsers(dest="command")

    # forecast
    fc_p = sub.add_parser("forecast", help="Show the meetup forecast for a location")
    fc_p.add_argument("location", help="City, address or zip code")
    fc_p.add_argument("--day", type=str.lower, choices=WEEKDAYS, help="Meetup weekday")
    fc_p.add_argument("--start", type=int, help="Start hour (0-23)")
    fc_p.add_argument("--end", type=int, help="End hour (0-23)")
    fc_p.add_argument(
        "--time-of-day", choices=sorted(TIME_OF_DAY_PRESETS),
        help="Preset hour range, overrides --start/--end",
    )
    fc_p.add_argument("--json", action="store_true", help="Print JSON")

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    # serve
    serve_p = sub.add_parser("serve", help="Run the HTTP API")
    serve_p.add_argument("--host", help="Bind host")
    serve_p.add_argument("--port", type=int, help="Bind port")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    config = load_config(args.config)

    logging.basicConfig(
        level=config.logging.level.value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "forecast":
        return _cmd_forecast(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    elif args.command == "serve":
        return _cmd_serve(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_forecast(config: AppConfig, args) -> int:
    weekday = args.day or config.selection.weekday
    start = config.selection.start_hour if args.start is None else args.start
    end = config.selection.end_hour if args.end is None else args.end
    try:
        if args.time_of_day:
            start, end = hour_range_for_time_of_day(args.time_of_day)
        client = VisualCrossingClient.from_config(config.provider)
        orchestrator = ForecastOrchestrator(
            client.fetch_forecast,
            weekday=weekday,
            start_hour=start,
            end_hour=end,
            allow_weekday_fallback=config.locator.weekday_fallback,
        )
        asyncio.run(orchestrator.submit_location(args.location))
    except (InvalidWeekday, InvalidHour, EmptyLocation) as e:
        print(f"Error: {e}")
        return 2
    except FetchFailed as e:
        print(f"Error: {e.message}")
        return 1

    pair = orchestrator.get_current_display()
    if args.json:
        print(format_pair_json(pair))
    else:
        print(format_pair_text(pair, weekday, start, end))
    return 0


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        try:
            new_config = set_config_value(config, key.strip(), value.strip())
        except (KeyError, ValueError) as e:
            print(f"Error: {e}")
            return 1
        save_config(new_config, args.config)
        print(f"Set {key.strip()} = {get_config_value(new_config, key.strip())}")
        return 0
    else:
        print("Use: config show | config set key=value")
        return 1


def _cmd_serve(config: AppConfig, args) -> int:
    import uvicorn

    from meetup_weather.dashboard import create_app

    app = create_app(config)
    uvicorn.run(
        app,
        host=args.host or config.server.host,
        port=args.port or config.server.port,
    )
    return 0
