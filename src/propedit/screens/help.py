"""Help overlay screen."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Static

from propedit.constants import HELP_TEXT


class HelpScreen(ModalScreen):
    """Modal overlay listing the key bindings of both screens."""

    BINDINGS = [
        Binding("escape", "dismiss", show=False),
        Binding("?", "dismiss", show=False),
        Binding("q", "dismiss", show=False),
    ]

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }
    HelpScreen #help-container {
        width: auto;
        height: auto;
        border: thick $accent;
        background: $surface;
        padding: 1 2;
    }
    """

    def compose(self) -> ComposeResult:
        yield Container(
            Static(HELP_TEXT, id="help-text", markup=False),
            id="help-container",
        )

    def on_click(self) -> None:
        """Dismiss on any click outside the help box."""
        self.dismiss()
