"""CLI entry point for the Bight Watch proxy and dashboard."""

import argparse
import asyncio
import json
import logging
from pathlib import Path

from bightwatch.config.loader import (
    config_hash,
    get_config_value,
    load_config,
    save_config,
    set_config_value,
)
from bightwatch.extract.bulletin import (
    LAND_ZONE_MARKER,
    MARINE_ZONE_MARKER,
    SectionNotFound,
    section_for,
)
from bightwatch.handlers.base import FUNCTIONS_PREFIX
from bightwatch.handlers.registry import build_handlers, dispatch
from bightwatch.models.proxy import ProxyRequest

DEFAULT_CONFIG = "ops/configs/default.yaml"

MARKERS = {"marine": MARINE_ZONE_MARKER, "land": LAND_ZONE_MARKER}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="bightwatch",
        description="Alaska marine weather proxy and dashboard",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )

    sub = parser.add_subparsers(dest="command")

    # serve
    serve_p = sub.add_parser("serve", help="Run the HTTP proxy")
    serve_p.add_argument("--host", default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8000)

    # fetch
    fetch_p = sub.add_parser("fetch", help="Call one proxy family and print the response")
    fetch_p.add_argument("name", help="Family name, e.g. marine-forecast")
    fetch_p.add_argument("identifier", nargs="?", help="Zone, station or product id")
    fetch_p.add_argument("--date", help="YYYYMMDD for tide/current data")
    fetch_p.add_argument("--office", help="Office for forecast-discussion")

    # slice
    slice_p = sub.add_parser("slice", help="Extract one zone from a bulletin file")
    slice_p.add_argument("file", help="Bulletin text file")
    slice_p.add_argument("identifier", help="Zone id, e.g. PKZ012")
    slice_p.add_argument("--marker", choices=sorted(MARKERS), default="marine")

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    # dashboard
    dash_p = sub.add_parser("dashboard", help="Run the terminal dashboard")
    dash_p.add_argument("--region", help="Marine region code, e.g. CWFAJK")
    dash_p.add_argument("--once", action="store_true", help="Render once and exit")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "fetch":
        return _cmd_fetch(config, args)
    elif args.command == "slice":
        return _cmd_slice(args)
    elif args.command == "config":
        return _cmd_config(config, args)
    elif args.command == "dashboard":
        return _cmd_dashboard(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_serve(config, args) -> int:
    import uvicorn

    from bightwatch.server import create_app

    uvicorn.run(create_app(config), host=args.host, port=args.port)
    return 0


def _cmd_fetch(config, args) -> int:
    path = f"{FUNCTIONS_PREFIX}/{args.name}"
    if args.identifier:
        path += f"/{args.identifier}"
    query = {k: v for k, v in (("date", args.date), ("office", args.office)) if v}
    request = ProxyRequest(method="GET", path=path, query=query)

    handlers = build_handlers(config)
    try:
        resp = asyncio.run(dispatch(handlers, args.name, request))
    except KeyError:
        print(f"Error: unknown function {args.name}. Known: {', '.join(handlers)}")
        return 1

    print(json.dumps(resp.body, indent=2))
    return 0 if resp.status_code == 200 else 1


def _cmd_slice(args) -> int:
    text = Path(args.file).read_text()
    try:
        section = section_for(text, args.identifier.upper(), MARKERS[args.marker])
    except SectionNotFound as e:
        print(f"Error: {e}")
        return 1
    print(section)
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        print(f"# hash {config_hash(config)}")
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        try:
            new_config = set_config_value(config, key.strip(), value.strip())
        except (KeyError, IndexError, ValueError) as e:
            print(f"Error: {e}")
            return 1
        save_config(new_config, args.config)
        print(f"Set {key} = {get_config_value(new_config, key.strip())}")
        return 0
    else:
        print("Use: config show | config set key=value")
        return 1


def _cmd_dashboard(config, args) -> int:
    from bightwatch.shell import DashboardShell

    shell = DashboardShell(config)
    try:
        return shell.run(region_code=args.region, once=args.once)
    except ValueError as e:
        print(f"Error: {e}")
        return 1
