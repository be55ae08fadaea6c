"""
Shell history domain models.

Contains data structures for representing recorded commands.
"""

from datetime import datetime
from typing import NamedTuple, Optional

# Duration recorded for a command that has not finished yet
RUNNING_DURATION = -1


class HistoryItem(NamedTuple):
    """A single command recorded in shell history.

    The hostname field is a compound "host:user" identifier; older records
    may carry the host alone.
    """
    command: str
    timestamp: datetime  # timezone-aware start time
    duration: int = 0  # nanoseconds, RUNNING_DURATION while in flight
    exit: int = 0
    cwd: str = ""
    hostname: str = ""
    id: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.exit == 0 or self.duration == RUNNING_DURATION

    @property
    def host(self) -> str:
        return self.hostname.split(":", 1)[0]

    @property
    def user(self) -> str:
        _, sep, user = self.hostname.partition(":")
        return user if sep else ""
