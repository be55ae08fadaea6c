"""
Match highlighting for history commands.

Each search mode has an engine that reports which character positions of a
normalized command satisfy the query. Positions are character offsets
(Python str indices), never byte offsets, so the renderer can walk the
same string and stay aligned.
"""

from enum import Enum
from typing import Protocol

from rapidfuzz.distance import LCSseq


class SearchMode(Enum):
    PREFIX = "prefix"
    FULLTEXT = "fulltext"
    FUZZY = "fuzzy"

    def next(self) -> "SearchMode":
        modes = list(SearchMode)
        return modes[(modes.index(self) + 1) % len(modes)]


class MatchEngine(Protocol):
    """Decides whether a command matches a query and where it is highlighted."""

    def highlight_positions(self, normalized_text: str, query: str) -> set[int]: ...

    def matches(self, normalized_text: str, query: str) -> bool: ...


def _fold(text: str) -> str:
    """Lowercase without changing length (keeps offsets valid)."""
    return "".join(ch.lower() if len(ch.lower()) == 1 else ch for ch in text)


class PrefixEngine:
    """Matches when the command starts with the whole query."""

    def highlight_positions(self, normalized_text: str, query: str) -> set[int]:
        if query and _fold(normalized_text).startswith(_fold(query)):
            return set(range(len(query)))
        return set()

    def matches(self, normalized_text: str, query: str) -> bool:
        return bool(self.highlight_positions(normalized_text, query))


class FullTextEngine:
    """Matches every occurrence of every whitespace-separated query term."""

    def highlight_positions(self, normalized_text: str, query: str) -> set[int]:
        text = _fold(normalized_text)
        positions: set[int] = set()
        for term in _fold(query).split():
            start = text.find(term)
            while start != -1:
                positions.update(range(start, start + len(term)))
                start = text.find(term, start + len(term))
        return positions

    def matches(self, normalized_text: str, query: str) -> bool:
        """True when every query term occurs in the command."""
        text = _fold(normalized_text)
        terms = _fold(query).split()
        return bool(terms) and all(term in text for term in terms)


class FuzzyEngine:
    """Matches each query term as an in-order subsequence of the command.

    The alignment comes from rapidfuzz's longest common subsequence; a term
    only contributes positions when all of its characters were found.
    """

    def _term_positions(self, text: str, term: str) -> set[int]:
        matched: set[int] = set()
        for op in LCSseq.opcodes(term, text):
            if op.tag == "equal":
                matched.update(range(op.dest_start, op.dest_end))
        return matched if len(matched) == len(term) else set()

    def highlight_positions(self, normalized_text: str, query: str) -> set[int]:
        text = _fold(normalized_text)
        positions: set[int] = set()
        for term in _fold(query).split():
            positions |= self._term_positions(text, term)
        return positions

    def matches(self, normalized_text: str, query: str) -> bool:
        """True when every query term is found as a subsequence."""
        text = _fold(normalized_text)
        terms = _fold(query).split()
        return bool(terms) and all(self._term_positions(text, term) for term in terms)


_ENGINES: dict[SearchMode, type] = {
    SearchMode.PREFIX: PrefixEngine,
    SearchMode.FULLTEXT: FullTextEngine,
    SearchMode.FUZZY: FuzzyEngine,
}


def engine_for(mode: SearchMode) -> MatchEngine:
    return _ENGINES[mode]()


class HighlightResolver:
    """Binds an engine to the current query for one frame."""

    def __init__(self, engine: MatchEngine, query: str) -> None:
        self.engine = engine
        self.query = query

    def resolve(self, normalized_command: str) -> frozenset[int]:
        if not self.query.strip():
            return frozenset()
        return frozenset(self.engine.highlight_positions(normalized_command, self.query))
