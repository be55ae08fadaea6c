"""Formatting helper functions."""

import re
from datetime import datetime, timedelta, tzinfo
from typing import Optional, Union

from loguru import logger

ELLIPSIS = "..."
DATETIME_FORMAT = "%Y-%m-%d %H:%M"
DATETIME_PLACEHOLDER = "????-??-?? ??:??"

# Units from most to least significant: (suffix, nanoseconds per unit)
_SECOND_NS = 1_000_000_000
_YEAR_SECS = 31_557_600  # 365.25 days
_MONTH_SECS = 2_630_016  # 30.44 days

# ASCII whitespace: space, tab, LF, FF, CR
_ASCII_WHITESPACE = re.compile(r"[ \t\n\x0c\r]+")


def format_duration(duration: Union[timedelta, int]) -> str:
    """
    Format a duration using only its most significant unit.

    Args:
        duration: timedelta or integer nanoseconds (negative treated as zero)

    Returns:
        Compact string such as "1m", "250ms", "3d" or "0s"
    """
    if isinstance(duration, timedelta):
        nanos = (
            (duration.days * 86_400 + duration.seconds) * _SECOND_NS
            + duration.microseconds * 1_000
        )
    else:
        nanos = duration
    nanos = max(0, nanos)

    secs, subsec = divmod(nanos, _SECOND_NS)
    years, year_rest = divmod(secs, _YEAR_SECS)
    months, month_rest = divmod(year_rest, _MONTH_SECS)
    days, day_secs = divmod(month_rest, 86_400)

    parts = (
        ("y", years),
        ("mo", months),
        ("d", days),
        ("h", day_secs // 3600),
        ("m", day_secs % 3600 // 60),
        ("s", day_secs % 60),
        ("ms", subsec // 1_000_000),
        ("us", subsec // 1_000),
        ("ns", subsec),
    )
    for unit, value in parts:
        if value > 0:
            return f"{value}{unit}"
    return "0s"


def format_elapsed(now: datetime, timestamp: datetime) -> str:
    """Format time since timestamp as "<duration> ago", clamping the future to zero."""
    since = now - timestamp
    if since < timedelta(0):
        since = timedelta(0)
    return f"{format_duration(since)} ago"


def format_datetime(timestamp: datetime, tz: Optional[tzinfo] = None) -> str:
    """
    Format timestamp as YYYY-MM-DD HH:MM in the given timezone.

    Falls back to a placeholder of the same width when the timestamp cannot
    be converted (out of range, naive values on odd platforms).
    """
    try:
        return timestamp.astimezone(tz).strftime(DATETIME_FORMAT)
    except (OverflowError, ValueError, OSError) as e:
        logger.debug(f"Cannot format timestamp {timestamp!r}: {e}")
        return DATETIME_PLACEHOLDER


def align_right(text: str, width: int) -> str:
    """
    Right-align text in width cells, dropping leading characters that do not fit.

    Examples:
        >>> align_right("-1000", 3)
        '000'
    """
    if width <= 0:
        return ""
    return text.rjust(width)[-width:]


def align_left(text: str, width: int) -> str:
    return text.ljust(width)


def truncate_start(text: str, width: int) -> str:
    """
    Keep the tail of text, marking the cut with a leading ellipsis.

    Examples:
        >>> truncate_start("/very/long/path/that/is/too/long", 10)
        '...oo/long'
        >>> truncate_start("/tmp", 10)
        '/tmp      '
    """
    if len(text) > width and width >= 4:
        return ELLIPSIS + text[len(text) - (width - 3):]
    return align_left(text, width)


def truncate_end(text: str, width: int) -> str:
    """
    Keep the head of text, marking the cut with a trailing ellipsis.

    The kept prefix is width - 4 characters, so the result is padded by one
    space back to the full width.

    Examples:
        >>> truncate_end("buildserver-01", 8)
        'buil... '
    """
    if len(text) > width and width >= 4:
        text = text[: max(0, width - 4)] + ELLIPSIS
    return align_left(text, width)


def escape_control(text: str) -> str:
    """
    Replace ASCII control characters with caret notation.

    Examples:
        >>> escape_control("echo\\tdone")
        'echo^Idone'
        >>> escape_control("\\x7f")
        '^?'
    """
    if not any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in text):
        return text

    escaped = []
    for ch in text:
        code = ord(ch)
        if code == 0x7F:
            escaped.append("^?")
        elif code < 0x20:
            escaped.append("^" + chr(code + 64))
        else:
            escaped.append(ch)
    return "".join(escaped)


def command_tokens(command: str) -> list[str]:
    """Escape control characters and split on ASCII whitespace."""
    return [token for token in _ASCII_WHITESPACE.split(escape_control(command)) if token]


def normalize_command(command: str) -> str:
    """Normalized form used for match positions: escaped, single-spaced."""
    return " ".join(command_tokens(command))
