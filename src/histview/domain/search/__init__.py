"""Search mode engines and match highlighting."""

from .highlight import (
    FullTextEngine,
    FuzzyEngine,
    HighlightResolver,
    MatchEngine,
    PrefixEngine,
    SearchMode,
    engine_for,
)

__all__ = [
    "FullTextEngine",
    "FuzzyEngine",
    "HighlightResolver",
    "MatchEngine",
    "PrefixEngine",
    "SearchMode",
    "engine_for",
]
