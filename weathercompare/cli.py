"""CLI entry point for the weather comparison tool."""

import argparse
import asyncio
import logging
from datetime import date

from weathercompare.config.loader import (
    get_config_value,
    load_config,
    save_config,
    set_config_value,
)
from weathercompare.config.schema import WeatherCompareConfig
from weathercompare.pipeline.location_loader import LocationLoader
from weathercompare.reporting.formatters import format_grid_json, format_grid_text
from weathercompare.reporting.grid import build_grid
from weathercompare.state import AppState
from weathercompare.storage import session_repo
from weathercompare.storage.database import connect, run_migrations

DEFAULT_CONFIG = "config/weathercompare.yaml"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weathercompare",
        description="Compare daily forecasts and alerts for up to three U.S. locations",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument("--db", default=None, help="SQLite DB path (overrides config)")

    sub = parser.add_subparsers(dest="command")

    # compare
    compare_p = sub.add_parser("compare", help="Show the comparison grid")
    compare_p.add_argument(
        "queries", nargs="*", metavar="LOCATION",
        help="City name or ZIP code (up to 3); restores last session if omitted",
    )
    compare_p.add_argument("--json", action="store_true", help="Emit JSON")
    compare_p.add_argument("--today", default=None, help="Override today (YYYY-MM-DD)")

    # serve
    serve_p = sub.add_parser("serve", help="Run the HTTP API")
    serve_p.add_argument("--host", default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8777)

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    # session show / session clear
    session_p = sub.add_parser("session", help="Remembered locations")
    session_sub = session_p.add_subparsers(dest="session_command")
    session_sub.add_parser("show", help="List remembered locations")
    session_sub.add_parser("clear", help="Forget remembered locations")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)
    db_path = args.db or config.app.db_path

    if args.command == "compare":
        return _cmd_compare(config, db_path, args)
    elif args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    elif args.command == "session":
        return _cmd_session(config, db_path, args)
    else:
        parser.print_help()
        return 1


def _cmd_compare(config: WeatherCompareConfig, db_path: str, args) -> int:
    max_slots = config.app.max_locations
    if len(args.queries) > max_slots:
        print(f"Error: at most {max_slots} locations can be compared")
        return 1
    if args.today is not None:
        try:
            date.fromisoformat(args.today)
        except ValueError:
            print(f"Error: invalid date for --today: {args.today}")
            return 1

    conn = connect(db_path)
    run_migrations(conn)
    try:
        if args.queries:
            queries = {i: q for i, q in enumerate(args.queries)}
        else:
            remembered = session_repo.load_restorable(conn, max_slots)
            queries = {i: q for i, q in enumerate(remembered) if q}

        loader = LocationLoader.from_config(config)
        if not queries:
            queries = {0: asyncio.run(loader.geocoder.locate_by_ip())}

        state = AppState(max_slots)
        result = asyncio.run(loader.update_many(state, queries))

        for index, slot in result.published.items():
            session_repo.save_location(conn, index, slot.location)
    finally:
        conn.close()

    for index, message in sorted(result.errors.items()):
        print(f"Error (slot {index + 1}): {message}")

    grid = build_grid(
        state.slots,
        today=args.today,
        max_days=config.display.max_days,
        policy=config.display.alert_policy,
    )
    print(format_grid_json(grid) if args.json else format_grid_text(grid))
    return 0 if not result.errors else 1


def _cmd_serve(config: WeatherCompareConfig, args) -> int:
    import uvicorn

    from weathercompare.dashboard import create_app

    uvicorn.run(create_app(config), host=args.host, port=args.port)
    return 0


def _cmd_config(config: WeatherCompareConfig, args) -> int:
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
        except Exception as e:
            print(f"Error: {e}")
            return 1
        save_config(new_config, args.config)
        print(f"Set {key} = {get_config_value(new_config, key.strip())}")
        return 0
    else:
        print("Use: config show | config set key=value")
        return 1


def _cmd_session(config: WeatherCompareConfig, db_path: str, args) -> int:
    conn = connect(db_path)
    run_migrations(conn)
    try:
        if args.session_command == "show":
            names = session_repo.load_locations(conn, config.app.max_locations)
            for i, name in enumerate(names):
                print(f"Slot {i + 1}: {name or '(empty)'}")
            return 0
        elif args.session_command == "clear":
            session_repo.clear_all(conn)
            print("Session cleared")
            return 0
        else:
            print("Use: session show | session clear")
            return 1
    finally:
        conn.close()
