"""roomweaver CLI entry point.

Provides subcommands for generating a layout in the terminal and for running
the layout web service. Accepts configuration via flags and environment
variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()

# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()


def _load_version() -> str:
    try:
        with open("VERSION", "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    roomweaver dungeon layout generator

    Generate a seeded room-and-corridor layout and print it, or run the web
    service that lets a client edit the generation parameters and fetch the
    regenerated layout. CLI flags take precedence over ROOMWEAVER_* variables.
    """

    epilog = dedent(
        """
        Environment variables:
          ROOMWEAVER_SEED, ROOMWEAVER_WIDTH, ROOMWEAVER_HEIGHT, ...
                          Defaults for any DungeonConfig field (upper-cased)
          HOST            Bind address for the web server (default: 0.0.0.0)
          PORT            Port for the web server (default: 5000)

        Examples:
          # Print the default layout (seed 39129)
          python run.py generate

          # A random seed on a wider grid, summary as JSON
          python run.py generate --seed -1 --width 80 --json

          # Run the web service on a custom port
          python run.py server --port 8080
        """
    )

    parser = argparse.ArgumentParser(
        prog="roomweaver",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"roomweaver {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate a layout and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate one layout from the given parameters and print it as ASCII.",
    )
    gen_parser.add_argument("--seed", default=None, help="Integer or string seed (-1 = random)")
    gen_parser.add_argument("--width", type=int, default=None, help="Grid width")
    gen_parser.add_argument("--height", type=int, default=None, help="Grid height")
    gen_parser.add_argument("--rooms", dest="room_pool_size", type=int, default=None, help="Room pool size")
    gen_parser.add_argument("--room-min", dest="room_size_min", type=int, default=None, help="Minimum room side")
    gen_parser.add_argument("--room-max", dest="room_size_max", type=int, default=None, help="Maximum room side")
    gen_parser.add_argument(
        "--extra-edges",
        dest="additional_edges",
        type=int,
        default=None,
        help="Extra links reinjected after the spanning tree",
    )
    gen_parser.add_argument(
        "--door-margin",
        dest="min_door_dist_to_corner",
        type=int,
        default=None,
        help="Minimum distance between a door and a room corner",
    )
    gen_parser.add_argument("--json", action="store_true", help="Print the layout summary as JSON")
    gen_parser.add_argument("--no-map", action="store_true", help="Skip the ASCII map")
    gen_parser.set_defaults(command="generate")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the layout web service",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask layout service",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    # If no subcommand provided, default to generate
    if not any(a in ("generate", "server", "-h", "--help", "--version") for a in argv):
        argv = list(argv) + ["generate"]

    return parser.parse_args(argv)


GENERATE_FIELDS = (
    "width",
    "height",
    "room_pool_size",
    "room_size_min",
    "room_size_max",
    "additional_edges",
    "min_door_dist_to_corner",
)


def _paint(text: str, color: str) -> str:
    return f"{color}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text


def run_generate(args: argparse.Namespace) -> int:
    from roomweaver.dungeon import Dungeon, DungeonConfig, InvalidConfigError
    from roomweaver.dungeon.render import rasterize, to_text

    cfg = DungeonConfig.from_env()
    overrides = {name: getattr(args, name) for name in GENERATE_FIELDS if getattr(args, name, None) is not None}
    if args.seed is not None:
        overrides["seed"] = args.seed
    try:
        cfg.update(**overrides)
    except ValueError as exc:
        print(f"[ERROR] {exc}")
        return 1
    try:
        dungeon = Dungeon(cfg)
    except InvalidConfigError as exc:
        for err in exc.errors:
            print(f"[ERROR] {err}")
        return 1

    if args.json:
        summary = {
            "seed": dungeon.seed,
            "rooms": len(dungeon.rooms),
            "corridors": len(dungeon.corridors),
            "edges": len(dungeon.edges),
            "metrics": dungeon.metrics,
        }
        print(json.dumps(summary, indent=2))
        return 0

    if not args.no_map:
        print(to_text(rasterize(dungeon)))
    label = _paint("Seed:", Fore.YELLOW)
    print(f"{label} {_paint(str(dungeon.seed), Fore.GREEN)}")
    print(f"{_paint('Rooms:', Fore.YELLOW)} {len(dungeon.rooms)}/{cfg.room_pool_size}")
    print(f"{_paint('Corridors:', Fore.YELLOW)} {len(dungeon.corridors)}")
    print(f"{_paint('Links:', Fore.YELLOW)} {len(dungeon.edges)}")
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    # Load .env if requested; otherwise the default .env if present (no error if missing)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    mode = (getattr(args, "command", None) or "generate").lower()
    if mode == "generate":
        return run_generate(args)

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoints only after environment is ready
    from roomweaver.logging_utils import log
    from roomweaver.server import start_server

    divider = _paint("=" * 40, Fore.MAGENTA)
    lines = [
        divider,
        f"  {_paint('roomweaver layout service', Fore.CYAN + Style.BRIGHT)}",
        divider,
        f"  {_paint('Host:', Fore.YELLOW):12} {_paint(host, Fore.GREEN)}",
        f"  {_paint('Port:', Fore.YELLOW):12} {_paint(str(port), Fore.GREEN)}",
        f"  {_paint('Debug:', Fore.YELLOW):12} {_paint('YES' if debug else 'NO', Fore.GREEN)}",
        divider,
        "",
    ]
    print("\n".join(lines))
    log.info(event="listen", host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


def cli() -> None:
    raise SystemExit(main(sys.argv[1:]))


if __name__ == "__main__":
    cli()
