"""Dungeon Carver CLI entry point.

Provides subcommands for running the dungeon API server and for generating a
single dungeon as a JSON document. Accepts configuration via flags and
environment variables, with optional .env loading.

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

from dungeoncarver import __version__

_color_init()


def _color_enabled() -> bool:
    # No colors when output is captured (pipes, pytest)
    return sys.stdout.isatty()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Dungeon Carver

    Generate rooms-and-mazes dungeons from a seed, either once on the command
    line or through the JSON web API. Configuration can be provided via CLI
    flags or environment variables. If both are present, CLI flags take
    precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                          Bind address for the web server (default: 0.0.0.0)
          PORT                          Port for the web server (default: 5000)
          DUNGEON_DEFAULT_WIDTH         Default grid width (default: 41)
          DUNGEON_DEFAULT_HEIGHT        Default grid height (default: 41)
          DUNGEON_DEFAULT_ROOM_TRIES    Default room placement attempts (default: 100)
          DUNGEONCARVER_LOG_LEVEL       debug / info / warn / error

        Examples:
          # Run the API server on the default host and port
          python run.py server

          # Print a 31x31 dungeon as JSON
          python run.py generate --seed crypt --width 31 --height 31

          # Only print the tile rows
          python run.py generate --seed crypt --rows
        """
    )

    parser = argparse.ArgumentParser(
        prog="dungeoncarver",
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
        version=f"Dungeon Carver {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Run the dungeon API web server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask development server exposing /api/dungeon/*",
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

    # generate subcommand
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one dungeon and print it as JSON",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate one dungeon from the given options and print the JSON document.",
    )
    gen_parser.add_argument("--seed", default=None, help="Seed string (default: empty string)")
    gen_parser.add_argument("--width", type=int, default=None, help="Grid width (>= 5)")
    gen_parser.add_argument("--height", type=int, default=None, help="Grid height (>= 5)")
    gen_parser.add_argument("--room-tries", dest="room_tries", type=int, default=None, help="Room placement attempts")
    gen_parser.add_argument(
        "--extra-room-size", dest="extra_room_size", type=int, default=None, help="Widens the room size range"
    )
    gen_parser.add_argument(
        "--winding-percent",
        dest="winding_percent",
        type=int,
        default=None,
        help="0-100; higher makes corridors turn more often",
    )
    gen_parser.add_argument("--start-index", dest="start_index", type=int, default=None, help="First room index")
    gen_parser.add_argument("--rows", action="store_true", help="Print tile symbol rows instead of JSON")
    gen_parser.set_defaults(command="generate")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    args = parser.parse_args(argv)
    return args


def run_generate(args: argparse.Namespace) -> int:
    from dungeoncarver.dungeon import ConfigError, Generator, defaults_from_env, options_from_mapping
    from dungeoncarver.logging_utils import default_level

    fields = ("seed", "width", "height", "room_tries", "extra_room_size", "winding_percent", "start_index")
    try:
        options = options_from_mapping(
            {name: getattr(args, name, None) for name in fields},
            base=defaults_from_env(),
        )
    except ConfigError as e:
        print(f"[ERROR] invalid option {e.field}: {e.message}", file=sys.stderr)
        return 2
    # Keep stdout clean for the JSON document unless asked otherwise
    with default_level("warn"):
        dungeon = Generator(options).run()
    if getattr(args, "rows", False):
        print("\n".join(dungeon.symbol_rows()))
    else:
        print(json.dumps(dungeon.to_dict(), indent=2))
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if args and getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return run_generate(args)

    # Resolve configuration from CLI flags or env vars
    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "5000"))
    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoint only after environment is ready
    from dungeoncarver.server import start_server

    color = _color_enabled()
    title = f"{Fore.CYAN}{Style.BRIGHT}Dungeon Carver API{Style.RESET_ALL}" if color else "Dungeon Carver API"

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if color else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if color else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if color else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Mode:'):12} {value(mode.upper())}",
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Version:'):12} {value(__version__)}",
        divider,
        "",
    ]
    print("\n".join(lines))

    from dungeoncarver.logging_utils import log

    log.info(event="startup", mode=mode, host=host, port=port)

    start_server(host=host, port=port, debug=bool(getattr(args, "debug", False)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
