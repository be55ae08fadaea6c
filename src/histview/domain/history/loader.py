"""
History file loading.

Supports three line formats, detected per line:
- JSON lines exported by history tools ({"command": ..., "timestamp": ...})
- zsh extended history (": 1700000000:3;git status")
- plain command-per-line files (bash without HISTTIMEFORMAT)
"""

import json
import re
import socket
import getpass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator, Optional

from loguru import logger

from .models import HistoryItem

ZSH_EXTENDED_PATTERN = re.compile(r"^: (\d+):(\d+);(.*)$", re.DOTALL)

# Epoch values above this are nanoseconds rather than seconds
_NANOSECOND_EPOCH_THRESHOLD = 10**12


def _local_hostname() -> str:
    try:
        return f"{socket.gethostname()}:{getpass.getuser()}"
    except (OSError, KeyError):
        return socket.gethostname()


def parse_timestamp(value: Any) -> datetime:
    """
    Parse an epoch number or ISO-8601 string into an aware datetime.

    Raises:
        ValueError: If the value cannot be interpreted as a timestamp
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid timestamp: {value!r}")
    if isinstance(value, (int, float)):
        seconds = value / 1e9 if value > _NANOSECOND_EPOCH_THRESHOLD else value
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    if isinstance(value, str):
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    raise ValueError(f"Invalid timestamp: {value!r}")


def decode_json_record(line: str) -> Optional[dict[str, Any]]:
    """Return the JSON object on a line, or None when the line is not JSON.

    Shell brace groups such as "{ make; make install; }" also start with a
    brace, so a failed decode means "not a record" rather than an error.
    """
    if not line.lstrip().startswith("{"):
        return None
    try:
        record = json.loads(line)
    except ValueError:
        return None
    return record if isinstance(record, dict) else None


def parse_json_record(record: dict[str, Any], fallback_hostname: str) -> HistoryItem:
    """
    Build a history item from one decoded JSON record.

    Raises:
        ValueError: If the record has no command or holds invalid fields
    """
    if not isinstance(record.get("command"), str):
        raise ValueError("record has no command")

    return HistoryItem(
        command=record["command"],
        timestamp=parse_timestamp(record.get("timestamp", 0)),
        duration=int(record.get("duration", 0)),
        exit=int(record.get("exit", 0)),
        cwd=str(record.get("cwd", "")),
        hostname=str(record.get("hostname", fallback_hostname)),
        id=str(record["id"]) if record.get("id") is not None else None,
    )


def _logical_lines(lines: Iterator[str]) -> Iterator[tuple[int, str]]:
    """Join zsh backslash-continued lines, yielding (line_number, text)."""
    pending: Optional[str] = None
    start = 0
    for number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\n")
        if pending is None:
            start = number
            pending = line
        else:
            pending = pending[:-1] + "\n" + line
        if pending.endswith("\\"):
            continue
        yield start, pending
        pending = None
    if pending is not None:
        yield start, pending


def load_history(path: Path) -> list[HistoryItem]:
    """
    Load history items from a file, newest first.

    Lines that cannot be parsed are skipped and logged.

    Args:
        path: History file path

    Returns:
        List of history items ordered newest first

    Raises:
        OSError: If the file cannot be read
    """
    hostname = _local_hostname()
    file_time = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
    items: list[HistoryItem] = []
    skipped = 0

    with path.open(encoding="utf-8", errors="replace") as f:
        for number, line in _logical_lines(f):
            if not line.strip():
                continue

            record = decode_json_record(line)
            if record is not None:
                try:
                    items.append(parse_json_record(record, hostname))
                except (ValueError, TypeError, OverflowError, OSError) as e:
                    skipped += 1
                    logger.warning(f"Skipping {path}:{number}: {e}")
                continue

            match = ZSH_EXTENDED_PATTERN.match(line)
            if match:
                started, elapsed, command = match.groups()
                try:
                    timestamp = datetime.fromtimestamp(int(started), tz=timezone.utc)
                except (OverflowError, OSError) as e:
                    skipped += 1
                    logger.warning(f"Skipping {path}:{number}: {e}")
                    continue
                items.append(
                    HistoryItem(
                        command=command,
                        timestamp=timestamp,
                        duration=int(elapsed) * 1_000_000_000,
                        hostname=hostname,
                    )
                )
                continue

            items.append(HistoryItem(command=line, timestamp=file_time, hostname=hostname))

    # Stable sort keeps file order among equal timestamps (plain files)
    items.reverse()
    items.sort(key=lambda item: item.timestamp, reverse=True)

    logger.info(f"Loaded {len(items)} history items from {path} ({skipped} skipped)")
    return items
