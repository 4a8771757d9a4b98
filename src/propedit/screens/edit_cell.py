"""Edit-cell screen — modal for changing one key or value in the table."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, Label


class EditCellScreen(ModalScreen[str | None]):
    """Modal that lets the user rewrite a single cell.

    Dismisses with the new text on Enter, or None on cancel.  Keys may not be
    blank; values may.
    """

    BINDINGS = [
        Binding("escape", "cancel", show=False),
    ]

    DEFAULT_CSS = """
    EditCellScreen {
        align: center middle;
    }
    EditCellScreen #edit-container {
        width: 80;
        height: auto;
        border: thick $accent;
        background: $surface;
        padding: 1 2;
    }
    EditCellScreen #edit-hint {
        color: $text-muted;
    }
    """

    def __init__(self, column: str, row_label: str, current: str) -> None:
        super().__init__()
        self._column = column
        self._row_label = row_label
        self._current = current

    def compose(self) -> ComposeResult:
        with Vertical(id="edit-container"):
            yield Label(f"Edit {self._column} of {self._row_label}", id="edit-title", markup=False)
            yield Input(value=self._current, id="edit-input")
            yield Label("Enter to apply · Escape to cancel", id="edit-hint")

    def on_mount(self) -> None:
        input_widget = self.query_one("#edit-input", Input)
        input_widget.focus()
        input_widget.cursor_position = len(self._current)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if self._column == "key" and not event.value.strip():
            self._show_error("Key cannot be empty")
            return
        self.dismiss(event.value)

    def _show_error(self, message: str) -> None:
        hint = self.query_one("#edit-hint", Label)
        hint.update(f"[red]{message}[/]")
        self.set_timer(2.0, lambda: hint.update("Enter to apply · Escape to cancel"))

    def action_cancel(self) -> None:
        self.dismiss(None)
