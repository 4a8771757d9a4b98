"""Files modal — pick one config file of a project."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import ModalScreen
from textual.widgets import Label, ListItem, ListView, Static

from propedit.models import ConfigFile, Project


class FileItem(ListItem):
    """List row carrying the ConfigFile it represents."""

    def __init__(self, file: ConfigFile) -> None:
        super().__init__(
            Label(file.display_name, classes="file-name", markup=False),
            Label(f"  {file.name}", classes="file-path", markup=False),
        )
        self.file = file


class FilesScreen(ModalScreen[ConfigFile | None]):
    """Modal listing a project's ``*.properties`` files.

    Each row shows the display name (the part after ``+``) above the real
    filename.  Dismisses with the chosen ConfigFile on Enter or ``None`` on
    Escape/q.
    """

    BINDINGS = [
        Binding("escape", "cancel", show=False),
        Binding("q", "cancel", show=False),
        Binding("j", "cursor_down", show=False),
        Binding("k", "cursor_up", show=False),
    ]

    DEFAULT_CSS = """
    FilesScreen {
        align: center middle;
    }
    FilesScreen #files-container {
        width: 80;
        height: 80%;
        border: thick $accent;
        background: $surface;
    }
    FilesScreen .file-path {
        color: $text-muted;
    }
    FilesScreen #files-hint {
        color: $text-muted;
    }
    """

    def __init__(self, project: Project, files: list[ConfigFile]) -> None:
        super().__init__()
        self._project = project
        self._files = files

    def compose(self) -> ComposeResult:
        with Vertical(id="files-container"):
            yield Static(f"  {self._project.name}", id="files-title", markup=False)
            if self._files:
                yield ListView(*[FileItem(f) for f in self._files], id="files-list")
            else:
                yield Label("  No config files in config-cache", id="files-empty")
            yield Static("  Enter to open · Esc/q to close", id="files-hint")

    def on_mount(self) -> None:
        if self._files:
            list_view = self.query_one("#files-list", ListView)
            list_view.index = 0
            list_view.focus()

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        event.stop()
        if isinstance(event.item, FileItem):
            self.dismiss(event.item.file)

    def action_cursor_down(self) -> None:
        if self._files:
            self.query_one("#files-list", ListView).action_cursor_down()

    def action_cursor_up(self) -> None:
        if self._files:
            self.query_one("#files-list", ListView).action_cursor_up()

    def action_cancel(self) -> None:
        self.dismiss(None)
