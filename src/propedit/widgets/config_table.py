"""Editable row table widget."""

from rich.text import Text
from textual.binding import Binding
from textual.widgets import DataTable

from propedit.constants import TABLE_COLUMNS
from propedit.domain.search import SearchIndex
from propedit.models import Row

_MATCH_STYLE = "bold yellow"
_CURRENT_MATCH_STYLE = "bold black on yellow"


class ConfigTable(DataTable):
    """Scrollable table of config rows with vim-style navigation.

    Rows are keyed by position rather than by key because duplicate keys are
    legal in a properties file.

    When a SearchIndex is passed to ``load`` every matching row is drawn in
    yellow and the current match is drawn inverted; the cursor is moved onto
    the current match so it scrolls into view.
    """

    BINDINGS = [
        Binding("j", "cursor_down", show=False),
        Binding("k", "cursor_up", show=False),
    ]

    def action_cursor_down(self) -> None:
        """Move down one row, wrapping from the last row to the first."""
        if self.row_count == 0:
            return
        if self.cursor_row == self.row_count - 1:
            self.move_cursor(row=0)
        else:
            super().action_cursor_down()

    def action_cursor_up(self) -> None:
        """Move up one row, wrapping from the first row to the last."""
        if self.row_count == 0:
            return
        if self.cursor_row == 0:
            self.move_cursor(row=self.row_count - 1)
        else:
            super().action_cursor_up()

    def on_mount(self) -> None:
        self.cursor_type = "row"
        self.zebra_stripes = True
        self._ensure_columns()

    def _ensure_columns(self) -> None:
        if not self.columns:
            self.add_columns(*TABLE_COLUMNS)

    def load(self, rows: list[Row], search: SearchIndex | None = None) -> None:
        """Replace table contents, keeping the cursor row where possible."""
        self._ensure_columns()
        cursor = self.cursor_row
        self.clear()
        for i, row in enumerate(rows):
            style = ""
            if search is not None and search.is_current(i):
                style = _CURRENT_MATCH_STYLE
            elif search is not None and search.is_match(i):
                style = _MATCH_STYLE
            self.add_row(
                Text(str(i + 1), style=style),
                Text(row.key, style=style),
                Text(row.value, style=style),
                key=str(i),
            )
        current = search.current_row if search is not None else None
        if current is not None:
            self.move_cursor(row=current)
        elif rows:
            self.move_cursor(row=min(cursor, len(rows) - 1))

    def selected_row(self) -> int | None:
        """Return the index of the highlighted row, or None when the table is empty."""
        if self.row_count == 0:
            return None
        return self.cursor_row
