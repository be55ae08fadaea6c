"""
History domain module.

Provides the read-only history record model and file loading.
"""

from .loader import load_history, parse_timestamp
from .models import RUNNING_DURATION, HistoryItem

__all__ = ["HistoryItem", "RUNNING_DURATION", "load_history", "parse_timestamp"]
