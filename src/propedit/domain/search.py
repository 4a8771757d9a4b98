"""Substring search and match navigation over an edit session's rows."""

from collections.abc import Sequence
from typing import Protocol

from propedit.models import ConfigEntry, SearchState


class RowSource(Protocol):
    """Anything exposing an ordered entry list and a change counter."""

    @property
    def entries(self) -> Sequence[ConfigEntry]: ...

    @property
    def revision(self) -> int: ...


class SearchIndex:
    """Match list and cursor for one query over a RowSource.

    The state is recomputed from scratch whenever the query changes or the
    source's ``revision`` moves, so ``matches`` always refers to valid rows of
    the current entries.  Recomputing resets the cursor to the first match.
    """

    def __init__(self, source: RowSource) -> None:
        self._source = source
        self._state = SearchState()
        self._seen_revision = source.revision

    @property
    def state(self) -> SearchState:
        self._sync()
        return self._state

    @property
    def query(self) -> str:
        return self._state.query

    @property
    def matches(self) -> list[int]:
        return list(self.state.matches)

    @property
    def cursor(self) -> int:
        return self.state.cursor

    @property
    def current_row(self) -> int | None:
        """Row index of the current match, or None when nothing matches."""
        state = self.state
        if state.cursor < 0:
            return None
        return state.matches[state.cursor]

    def set_query(self, text: str) -> None:
        self._state = self._compute(text)
        self._seen_revision = self._source.revision

    def clear(self) -> None:
        self.set_query("")

    def next(self) -> None:
        state = self.state
        if state.matches:
            state.cursor = (state.cursor + 1) % len(state.matches)

    def previous(self) -> None:
        state = self.state
        if state.matches:
            state.cursor = (state.cursor - 1 + len(state.matches)) % len(state.matches)

    def is_match(self, row: int) -> bool:
        return row in self.state.matches

    def is_current(self, row: int) -> bool:
        return self.current_row == row

    def summary(self) -> str:
        """Return ``"{current}/{total}"``, or ``"0 results"`` when nothing matches."""
        state = self.state
        if not state.matches:
            return "0 results"
        return f"{state.cursor + 1}/{len(state.matches)}"

    def _sync(self) -> None:
        if self._source.revision != self._seen_revision:
            self.set_query(self._state.query)

    def _compute(self, text: str) -> SearchState:
        if not text.strip():
            return SearchState(query=text)
        matches = [i for i, entry in enumerate(self._source.entries) if entry.contains(text)]
        return SearchState(query=text, matches=matches, cursor=0 if matches else -1)
