"""Command-line front door for scriptbridge.

Exposes each util function as a subcommand and prints its result as JSON.
Script errors exit with their message.
"""

from __future__ import annotations

import argparse
import json
import sys

from . import config
from .bridge import create_table
from .highlight import DEFAULT_STYLE, render_json
from .values import ScriptError


def _json_table(value: str) -> dict[str, object]:
    """argparse type for JSON object values."""
    try:
        parsed = json.loads(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid JSON value: {value!r}") from exc
    if not isinstance(parsed, dict):
        raise argparse.ArgumentTypeError("value must be a JSON object")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scriptbridge",
        description="Call script util functions from the command line.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name for colored output.")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=config.LOG_LEVEL_NAMES,
        default=None,
        help="Logging level (default: persisted level or WARNING).",
    )
    parser.add_argument(
        "--save-log-level",
        action="store_true",
        help="Persist --log-level as the default for later runs.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("dirname", "Print the parent of PATH."),
        ("basename", "Print the final component of PATH."),
        ("absolute", "Print PATH made absolute against the current directory."),
    ):
        command = commands.add_parser(name, help=help_text)
        command.add_argument("path")

    quote = commands.add_parser("quote", help="Quote TEXT for a POSIX shell.")
    quote.add_argument("text")

    execute = commands.add_parser("exec", help="Run PROGRAM with literal ARGS and capture its output.")
    execute.add_argument("program")
    execute.add_argument("args", nargs=argparse.REMAINDER)

    explore = commands.add_parser("explore", help="List the children of PATH.")
    explore.add_argument("path")
    explore.add_argument(
        "--config",
        type=_json_table,
        default=None,
        help="Explorer config as a JSON object (default: persisted config, if any).",
    )
    explore.add_argument(
        "--save-config",
        action="store_true",
        help="Persist --config as the default explorer config after a successful listing.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, call the matching util function, and print the result."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.save_log_level and args.log_level is None:
        parser.error("--save-log-level requires --log-level")
    if getattr(args, "save_config", False) and args.config is None:
        parser.error("--save-config requires --config")
    if args.save_log_level:
        config.save_log_level(args.log_level)
    config.configure_logging(args.log_level)
    util = create_table()

    try:
        if args.command == "quote":
            result = util["shell_quote"](args.text)
        elif args.command == "exec":
            result = util["shell_execute"](args.program, args.args or None)
        elif args.command == "explore":
            table = args.config if args.config is not None else config.load_explorer_config()
            result = util["explore"](args.path, table)
            if args.save_config:
                config.save_explorer_config(args.config)
        else:
            result = util[args.command](args.path)
    except ScriptError as exc:
        raise SystemExit(str(exc)) from exc

    color = not args.no_color and sys.stdout.isatty()
    sys.stdout.write(render_json(result, color=color, style=args.style))


if __name__ == "__main__":
    main()
