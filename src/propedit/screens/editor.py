"""Editor screen — the row table of one open config file."""

from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Input, Label, Static

from propedit.screens.edit_cell import EditCellScreen
from propedit.screens.help import HelpScreen
from propedit.session import Column
from propedit.widgets.config_table import ConfigTable
from propedit.workspace import Workspace

_READ_ONLY_HINT = "Online mode is read-only. Switch to Local to edit."


class EditorScreen(Screen[None]):
    """Full-screen editor for the workspace's open EditSession.

    All edits go through the session, which ignores them in Online mode; the
    screen only adds a hint so the key press does not look dead.  Saving
    closes the editor, as does Escape (with a confirmation when there are
    unsaved changes).
    """

    BINDINGS = [
        Binding("escape", "escape", "Close"),
        Binding("s", "save", "Save"),
        Binding("i", "edit_value", "Edit"),
        Binding("r", "edit_key", "Key"),
        Binding("o", "add_row", "Add"),
        Binding("d", "delete_row", "dd Delete"),
        Binding("/", "toggle_search", "Search"),
        Binding("ctrl+f", "toggle_search", show=False),
        Binding("n", "search_next", show=False),
        Binding("N", "search_previous", show=False),
        Binding("?", "help", "Help"),
    ]

    DEFAULT_CSS = """
    EditorScreen #editor-title {
        padding: 0 1;
        text-style: bold;
    }
    EditorScreen #search-bar {
        height: auto;
    }
    EditorScreen #search {
        width: 1fr;
    }
    EditorScreen #search-summary {
        padding: 1 1;
        width: auto;
    }
    EditorScreen #editor-status {
        padding: 0 1;
        color: $text-muted;
    }
    EditorScreen #config-table {
        height: 1fr;
    }
    """

    def __init__(self, workspace: Workspace) -> None:
        super().__init__()
        self._workspace = workspace
        self._d_pressed = False

    def compose(self) -> ComposeResult:
        file = self._workspace.session.file
        yield Header()
        yield Static(f"Editing {file.name if file else ''}", id="editor-title", markup=False)
        with Horizontal(id="search-bar"):
            yield Input(placeholder="Search keys and values…", id="search")
            yield Label("", id="search-summary")
        yield ConfigTable(id="config-table")
        yield Static("", id="editor-status", markup=False)
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#search-bar").display = False
        self._refresh()
        self._table().focus()

    def _table(self) -> ConfigTable:
        return self.query_one("#config-table", ConfigTable)

    def _search_visible(self) -> bool:
        return bool(self.query_one("#search-bar").display)

    def _refresh(self) -> None:
        """Redraw the table, the search summary and the status line."""
        session = self._workspace.session
        search = self._workspace.search if self._search_visible() else None
        self._table().load(session.rows, search)
        self.query_one("#search-summary", Label).update(
            self._workspace.search.summary() if search is not None else ""
        )
        parts = [self._workspace.environment_label]
        if not session.editable:
            parts.append("read-only")
        if session.dirty:
            parts.append("● unsaved changes")
        self.query_one("#editor-status", Static).update(" · ".join(parts))

    def _guard_read_only(self) -> bool:
        if self._workspace.session.editable:
            return False
        self.notify(_READ_ONLY_HINT, timeout=3)
        return True

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        event.stop()
        self.action_edit_value()

    def action_edit_value(self) -> None:
        self._edit_cell("value")

    def action_edit_key(self) -> None:
        self._edit_cell("key")

    def _edit_cell(self, column: Column) -> None:
        row = self._table().selected_row()
        if row is None or self._guard_read_only():
            return
        entry = self._workspace.session.entries[row]
        current = entry.key if column == "key" else entry.value

        def on_apply(new_text: str | None) -> None:
            if new_text is not None and new_text != current:
                self._workspace.session.set_cell(row, column, new_text)
                self._refresh()
            self._table().focus()

        self.app.push_screen(EditCellScreen(column, f"row {row + 1}", current), on_apply)

    def action_add_row(self) -> None:
        if self._guard_read_only():
            return
        row = self._workspace.session.add_row()
        if row is None:
            return
        self._refresh()
        self._table().move_cursor(row=row)

    def action_delete_row(self) -> None:
        """Implement vim-style dd: delete the selected row on the second d press."""
        if self._d_pressed:
            self._d_pressed = False
            row = self._table().selected_row()
            if row is None or self._guard_read_only():
                return
            self._delete(row)
        else:
            self._d_pressed = True
            self.set_timer(0.5, self._reset_d)

    def _reset_d(self) -> None:
        self._d_pressed = False

    @work
    async def _delete(self, row: int) -> None:
        with self._workspace.operation() as ok:
            if not ok:
                return
            await self._workspace.session.delete_row(row)
        self._refresh()
        self._table().focus()

    @work
    async def action_save(self) -> None:
        with self._workspace.operation() as ok:
            if not ok:
                return
            saved = self._workspace.save()
            if saved:
                await self._workspace.close_file()
        if saved:
            self.dismiss()
        else:
            self._refresh()

    @work
    async def action_escape(self) -> None:
        if self._search_visible():
            self.action_toggle_search()
            return
        with self._workspace.operation() as ok:
            if not ok:
                return
            closed = await self._workspace.close_file()
        if closed:
            self.dismiss()
        else:
            self._table().focus()

    def action_toggle_search(self) -> None:
        """Show and focus the search bar, or hide it and drop the query."""
        bar = self.query_one("#search-bar")
        search = self.query_one("#search", Input)
        if self._search_visible():
            bar.display = False
            search.value = ""
            self._workspace.search.clear()
            self._refresh()
            self._table().focus()
        else:
            bar.display = True
            search.focus()
            self._refresh()

    def action_search_next(self) -> None:
        if not self._search_visible():
            return
        self._workspace.search.next()
        self._refresh()

    def action_search_previous(self) -> None:
        if not self._search_visible():
            return
        self._workspace.search.previous()
        self._refresh()

    def action_help(self) -> None:
        self.app.push_screen(HelpScreen())

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "search":
            self._workspace.search.set_query(event.value)
            self._refresh()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "search":
            self.action_search_next()
