"""
histview CLI - Entry point

Browses a shell history file in an interactive, searchable list, or renders
a single frame to stdout with --print.
"""

import argparse
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from loguru import logger

from histview.core.config import Config, ConfigError, load_config, parse_column
from histview.core.console import get_console, print_error, print_plain
from histview.core.output import setup_from_config
from histview.domain.history import load_history
from histview.domain.search import SearchMode

DEFAULT_PRINT_WIDTH = 100
DEFAULT_PRINT_HEIGHT = 20


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="histview",
        description="Search and browse shell history in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Keys: Up/Down move, PgUp/PgDn page, Ctrl-R cycles the search mode,\n"
            "Ctrl-U clears the query, Enter prints the selected command, Esc quits."
        ),
    )
    parser.add_argument(
        "history_file",
        nargs="?",
        help="History file (JSON lines, zsh extended or plain); defaults to $HISTFILE",
    )
    parser.add_argument("-q", "--query", default="", help="Initial search query")
    parser.add_argument(
        "-m",
        "--mode",
        choices=[mode.value for mode in SearchMode],
        help="Search mode (overrides config)",
    )
    parser.add_argument(
        "--columns",
        help="Comma-separated column kinds, e.g. duration,time,directory,command",
    )
    parser.add_argument(
        "--inverted", action="store_true", help="Draw the newest entry at the top"
    )
    parser.add_argument(
        "--reverse-selection",
        action="store_true",
        help="Mark the selected row with reverse video instead of a background",
    )
    parser.add_argument("--config", type=Path, help="Path to a config.toml")
    parser.add_argument(
        "--print",
        dest="print_frame",
        action="store_true",
        help="Render one frame to stdout instead of starting the interactive UI",
    )
    parser.add_argument(
        "--width", type=int, default=None, help="Frame width for --print"
    )
    parser.add_argument(
        "--height", type=int, default=None, help="Frame height for --print"
    )
    return parser


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Apply command-line options on top of the loaded configuration.

    Raises:
        ConfigError: If an override is invalid
    """
    ui = config.ui
    if args.columns:
        ui = replace(
            ui, columns=[parse_column(kind.strip()) for kind in args.columns.split(",")]
        )
    if args.inverted:
        ui = replace(ui, inverted=True)
    if args.reverse_selection:
        ui = replace(ui, selection_mode="reverse")

    search = replace(config.search, mode=args.mode) if args.mode else config.search
    config = replace(config, ui=ui, search=search)
    config.validate()
    return config


def resolve_history_file(args: argparse.Namespace, config: Config) -> Optional[Path]:
    if args.history_file:
        return Path(args.history_file).expanduser()
    if config.history.file:
        return Path(config.history.file).expanduser()
    return None


def print_frame(items: list, config: Config, args: argparse.Namespace) -> None:
    """Render a single frame without a terminal session."""
    from histview.ui.blessed.app import render_frame
    from histview.ui.blessed.state import create_initial_state

    size = os.get_terminal_size(sys.stdout.fileno()) if sys.stdout.isatty() else None
    width = args.width or (size.columns if size else DEFAULT_PRINT_WIDTH)
    height = args.height or (size.lines if size else DEFAULT_PRINT_HEIGHT)

    state = create_initial_state(items, args.query, config.search.search_mode())
    buffer = render_frame(state, config, config.theme.build(), width, height)
    print_plain([line.rstrip() for line in buffer.lines()])


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        config = apply_overrides(load_config(args.config), args)
    except ConfigError as e:
        print_error(str(e))
        return 1

    setup_from_config(config.logging)

    history_file = resolve_history_file(args, config)
    if history_file is None:
        print_error("No history file given and $HISTFILE is not set")
        return 1

    try:
        items = load_history(history_file)
    except OSError as e:
        logger.error(f"Cannot read history file {history_file}: {e}")
        print_error(f"Cannot read history file {history_file}: {e.strerror or e}")
        return 1

    if args.print_frame:
        print_frame(items, config, args)
        return 0

    from histview.ui.blessed.app import run_interactive_ui

    accepted = run_interactive_ui(items, config, query=args.query)
    if accepted is None:
        return 1
    get_console().print(accepted, markup=False, highlight=False, soft_wrap=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
