"""Centralized Rich Console management for output outside the blessed UI."""

from rich.console import Console

_console: Console | None = None
_error_console: Console | None = None


def get_console() -> Console:
    """Get or create the global Rich Console instance."""
    global _console
    if _console is None:
        _console = Console(highlight=False)
    return _console


def get_error_console() -> Console:
    """Get or create the Rich Console that writes to stderr."""
    global _error_console
    if _error_console is None:
        _error_console = Console(stderr=True, highlight=False)
    return _error_console


def print_plain(lines: list[str]) -> None:
    """Print rendered rows verbatim (no markup, no wrapping)."""
    console = get_console()
    for line in lines:
        console.print(line, markup=False, soft_wrap=True)


def print_error(message: str) -> None:
    """Print an error message in red to stderr."""
    get_error_console().print(f"Error: {message}", style="bold red", markup=False)
