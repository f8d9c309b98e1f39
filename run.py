"""Mouse Maze CLI entry point.

Provides subcommands for running the Socket.IO game server and for printing
a generated maze as text (handy when debugging the generator or the solver).
Accepts configuration via flags and environment variables, with optional
.env loading.

Run `python run.py --help` for details.
"""

import argparse
import os
import random
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
try:
    _COLOR_ENABLED = sys.stdout.isatty()
except (AttributeError, ValueError):  # pragma: no cover - detached stdout
    _COLOR_ENABLED = False


def _load_version() -> str:
    try:
        with open("VERSION", "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.4.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Mouse Maze Game Server

    Run the real-time Flask-SocketIO server, or print a generated maze with
    its start, exit and (optionally) the solver path. Configuration can be
    provided via CLI flags or environment variables. If both are present,
    CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST            Bind address for the web server (default: 0.0.0.0)
          PORT            Port for the web server (default: 5000)
          DATABASE_URL    SQLAlchemy database URI (default: sqlite:///instance/maze.db)
          MAZE_SEED       Seed for reproducible mazes (default: random)

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Run the server on a custom port
          python run.py server --port 8080

          # Print a hard maze with the solution path
          python run.py show --difficulty hard --path

          # Reproduce a maze
          python run.py show --seed 42
        """
    )

    parser = argparse.ArgumentParser(
        prog="mousemaze",
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
        version=f"Mouse Maze Server {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Run the Socket.IO web server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the real-time Flask/Socket.IO server",
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
        "--db",
        dest="db_uri",
        default=None,
        help="Database URI (default: env DATABASE_URL or sqlite:///instance/maze.db)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    # show subcommand
    show_parser = subparsers.add_parser(
        "show",
        help="Print a generated maze as text",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate one maze, place start (S) and exit (E), and print it.",
    )
    show_parser.add_argument(
        "--difficulty",
        default="easy",
        help="easy | medium | hard (default: easy)",
    )
    show_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (default: env MAZE_SEED or random)",
    )
    show_parser.add_argument(
        "--path",
        action="store_true",
        help="Overlay the shortest path from S to E",
    )
    show_parser.set_defaults(command="show")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    return parser.parse_args(argv)


def label(text: str) -> str:
    return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text


def value(val) -> str:
    return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)


def colorize_maze(text: str) -> str:
    if not _COLOR_ENABLED:
        return text
    return (
        text.replace("#", Style.DIM + "#" + Style.RESET_ALL)
        .replace("S", Fore.GREEN + Style.BRIGHT + "S" + Style.RESET_ALL)
        .replace("E", Fore.YELLOW + Style.BRIGHT + "E" + Style.RESET_ALL)
        .replace(".", Fore.CYAN + "." + Style.RESET_ALL)
    )


def show_maze(difficulty: str, seed, with_path: bool) -> int:
    from mazegame.maze import MazeConfig, Generator, choose_placements, shortest_path
    from mazegame.maze.text_render import render_text

    config = MazeConfig.from_env()
    if seed is None:
        seed = config.seed
    if seed is None:
        seed = random.randint(1, 1_000_000)
    try:
        rows, cols = config.dimensions(difficulty)
    except ValueError as exc:
        print(f"[ERROR] {exc}")
        return 2
    rng = random.Random(seed)
    outputs = Generator(rows, cols, rng=rng).run()
    start, exit_pos = choose_placements(outputs.grid, rng, max_attempts=config.placement_max_attempts)
    path = shortest_path(outputs.grid, start, exit_pos)
    print(colorize_maze(render_text(outputs.grid, start, exit_pos, path=path if with_path else None)))
    print()
    print(f"  {label('Difficulty:'):12} {value(difficulty)}")
    print(f"  {label('Seed:'):12} {value(seed)}")
    print(f"  {label('Start:'):12} {value(start)}")
    print(f"  {label('Exit:'):12} {value(exit_pos)}")
    print(f"  {label('Path length:'):12} {value(len(path) - 1)}")
    print(f"  {label('Dead ends:'):12} {value(outputs.metrics['dead_ends'])}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "show":
        return show_maze(args.difficulty.lower(), args.seed, args.path)

    # Resolve configuration from CLI flags or env vars
    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "5000"))
    env_db = os.getenv("DATABASE_URL")

    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)
    db_uri_cli = getattr(args, "db_uri", None)

    # Make DATABASE_URL available to the Flask app BEFORE importing it
    if db_uri_cli:
        os.environ["DATABASE_URL"] = db_uri_cli

    db_banner = db_uri_cli or env_db or "auto (instance/maze.db)"

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoints only after environment is ready
    from mazegame.logging_utils import log
    from mazegame.server import start_server

    title = (
        f"{Fore.CYAN}{Style.BRIGHT}Mouse Maze Server Bootup{Style.RESET_ALL}"
        if _COLOR_ENABLED
        else "Mouse Maze Server Bootup"
    )
    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Mode:'):12} {value(mode.upper())}",
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Database:'):12} {value(db_banner)}",
        f"  {label('WebSockets:'):12} {value('enabled')}",
        divider,
        "",
    ]
    print("\n".join(lines))
    log.info(event="startup", mode=mode, host=host, port=port, db=db_banner)

    info_prefix = f"{Fore.CYAN}[INFO]{Style.RESET_ALL}" if _COLOR_ENABLED else "[INFO]"
    print(f"{info_prefix} Listening for connections... Press Ctrl+C to stop.")
    debug = bool(getattr(args, "debug", False) or os.getenv("FLASK_DEBUG") == "1")
    log.info(event="listen", host=host, port=port, debug=debug)
    start_server(host=host, port=port, debug=debug)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
