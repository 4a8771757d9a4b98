"""Status bar showing the authorized path and the Online/Local label."""

from textual.app import ComposeResult
from textual.events import Click
from textual.message import Message
from textual.reactive import reactive
from textual.widget import Widget
from textual.widgets import Static


class StatusBar(Widget):
    """A read-only bar: the current path on the left, the environment label on the right.

    Renders as:  Path: /opt/data                                  [Online]

    Both ``path`` and ``environment`` are reactives kept in sync by the
    projects screen.  In Online mode a banner line warns that editing is off.

    Clicking the path posts ``StatusBar.PathClicked`` (re-authorize) and
    clicking the label posts ``StatusBar.EnvironmentClicked`` (toggle).
    """

    class PathClicked(Message):
        """Posted when the user clicks the path label."""

    class EnvironmentClicked(Message):
        """Posted when the user clicks the environment label."""

    DEFAULT_CSS = """
    StatusBar {
        height: auto;
        layout: grid;
        grid-size: 2;
        grid-columns: 1fr auto;
        padding: 0 1;
    }
    StatusBar #status-path {
        color: $text-muted;
    }
    StatusBar .env-label {
        padding: 0 1;
        text-style: bold;
    }
    StatusBar .env-label.online {
        background: $warning;
        color: $background;
    }
    StatusBar .env-label.local {
        background: $success;
        color: $background;
    }
    StatusBar #online-banner {
        column-span: 2;
        color: $warning;
    }
    """

    can_focus = False

    path: reactive[str] = reactive("", init=False)
    environment: reactive[str] = reactive("Online", init=False)
    authorized: reactive[bool] = reactive(False, init=False)

    def compose(self) -> ComposeResult:
        yield Static("Not authorized", id="status-path", markup=False)
        yield Static("Online", id="status-env", classes="env-label online")
        yield Static("Online mode: files are read-only", id="online-banner")

    def on_mount(self) -> None:
        self._sync_banner()

    def watch_path(self, path: str) -> None:
        self.query_one("#status-path", Static).update(f"Path: {path}" if path else "Not authorized")

    def watch_environment(self, environment: str) -> None:
        label = self.query_one("#status-env", Static)
        label.update(environment)
        local = environment == "Local"
        label.set_class(local, "local")
        label.set_class(not local, "online")
        self._sync_banner()

    def watch_authorized(self, authorized: bool) -> None:
        self._sync_banner()

    def _sync_banner(self) -> None:
        banner = self.query_one("#online-banner", Static)
        banner.display = self.authorized and self.environment != "Local"

    def on_click(self, event: Click) -> None:
        widget = event.widget
        if widget is None:
            return
        if widget.id == "status-env":
            self.post_message(StatusBar.EnvironmentClicked())
        elif widget.id == "status-path":
            self.post_message(StatusBar.PathClicked())
