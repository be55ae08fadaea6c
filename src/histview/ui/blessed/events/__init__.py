"""Event handling for blessed UI."""

from .keyboard import handle_key, parse_key

__all__ = ["handle_key", "parse_key"]
