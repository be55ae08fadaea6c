"""Theme palette: semantic roles mapped to cell styles."""

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Union

# A color is a terminal color name ("red", "bright_black"), an (r, g, b) tuple,
# or None for the terminal default.
Color = Optional[Union[str, tuple[int, int, int]]]

HEX_COLOR_PATTERN = re.compile(r"^#([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")

NAMED_COLORS = frozenset(
    {
        "black",
        "red",
        "green",
        "yellow",
        "blue",
        "magenta",
        "cyan",
        "white",
        "bright_black",
        "bright_red",
        "bright_green",
        "bright_yellow",
        "bright_blue",
        "bright_magenta",
        "bright_cyan",
        "bright_white",
    }
)

SELECTION_BACKGROUND = (0x31, 0x32, 0x44)


class Meaning(Enum):
    """Semantic role a fragment plays in the list."""

    BASE = "base"
    GUIDANCE = "guidance"
    ANNOTATION = "annotation"
    ALERT_INFO = "alert_info"
    ALERT_WARN = "alert_warn"
    ALERT_ERROR = "alert_error"
    SELECTION = "selection"


@dataclass(frozen=True)
class Style:
    """Visual attributes of a single cell."""

    fg: Color = None
    bg: Color = None
    bold: bool = False
    reverse: bool = False

    def with_bold(self) -> "Style":
        return replace(self, bold=True)


def parse_color(value: str) -> Color:
    """
    Parse a configuration color string.

    Args:
        value: Color name ("red", "bright_blue") or "#rrggbb" hex string

    Returns:
        Color name or (r, g, b) tuple

    Raises:
        ValueError: If the color is not recognised
    """
    value = value.strip()
    match = HEX_COLOR_PATTERN.match(value)
    if match:
        r, g, b = (int(part, 16) for part in match.groups())
        return (r, g, b)
    name = value.lower().replace("-", "_")
    if name in NAMED_COLORS:
        return name
    raise ValueError(f"Invalid color: {value!r}")


def _default_styles() -> dict[Meaning, Style]:
    return {
        Meaning.BASE: Style(),
        Meaning.GUIDANCE: Style(fg="blue"),
        Meaning.ANNOTATION: Style(fg="bright_black"),
        Meaning.ALERT_INFO: Style(fg="green"),
        Meaning.ALERT_WARN: Style(fg="yellow"),
        Meaning.ALERT_ERROR: Style(fg="red"),
        Meaning.SELECTION: Style(bg=SELECTION_BACKGROUND),
    }


@dataclass
class Theme:
    """Role → style lookup used by the list renderer."""

    styles: dict[Meaning, Style] = field(default_factory=_default_styles)

    def style_for(self, meaning: Meaning) -> Style:
        return self.styles.get(meaning, Style())


def build_theme(
    colors: dict[str, str], selection_background: Optional[str] = None
) -> Theme:
    """
    Build a theme from configuration overrides on top of the defaults.

    Args:
        colors: Role name → foreground color string
        selection_background: Optional background color for the selected row

    Returns:
        Theme with overrides applied

    Raises:
        ValueError: On unknown roles or colors
    """
    styles = _default_styles()
    for role, color in colors.items():
        try:
            meaning = Meaning(role)
        except ValueError:
            raise ValueError(f"Unknown theme role: {role!r}") from None
        styles[meaning] = replace(styles[meaning], fg=parse_color(color))

    if selection_background is not None:
        styles[Meaning.SELECTION] = replace(
            styles[Meaning.SELECTION], bg=parse_color(selection_background)
        )

    return Theme(styles=styles)
