"""Directory prompt — modal backing ``Host.prompt_directory``."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Input, Label

from propedit.errors import FilesystemError
from propedit.fs.capability import LocalDirectory


class DirectoryPromptScreen(ModalScreen[LocalDirectory | None]):
    """Modal that asks for a directory path and grants a capability for it.

    The path input is pre-filled with the start hint.  Paths that do not
    exist or are not read-write are rejected inline without closing the
    modal.  Whether the directory is the right one is not checked here.

    Dismisses with a LocalDirectory on Enter, or None on cancel.
    """

    BINDINGS = [
        Binding("escape", "cancel", show=False),
    ]

    DEFAULT_CSS = """
    DirectoryPromptScreen {
        align: center middle;
    }
    DirectoryPromptScreen #prompt-container {
        width: 80;
        height: auto;
        border: thick $accent;
        background: $surface;
        padding: 1 2;
    }
    DirectoryPromptScreen #prompt-error {
        color: $error;
    }
    DirectoryPromptScreen #prompt-hint {
        color: $text-muted;
    }
    """

    def __init__(self, mode: str, start_hint: str) -> None:
        super().__init__()
        self._mode = mode
        self._start_hint = start_hint

    def compose(self) -> ComposeResult:
        with Vertical(id="prompt-container"):
            yield Label(f"Select a directory ({self._mode})", id="prompt-title")
            yield Input(value=self._start_hint, placeholder="/opt", id="prompt-path")
            yield Label("", id="prompt-error", markup=False)
            yield Label("Enter to grant access · Escape to cancel", id="prompt-hint")

    def on_mount(self) -> None:
        input_widget = self.query_one("#prompt-path", Input)
        input_widget.focus()
        input_widget.cursor_position = len(self._start_hint)

    def on_input_submitted(self, event: Input.Submitted) -> None:
        path = event.value.strip()
        error = self.query_one("#prompt-error", Label)
        if not path:
            error.update("Path cannot be blank")
            return
        try:
            capability = LocalDirectory.open(path)
        except FilesystemError as exc:
            error.update(str(exc))
            return
        self.dismiss(capability)

    def action_cancel(self) -> None:
        self.dismiss(None)
