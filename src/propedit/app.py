"""Main application entry point."""

import contextlib
import logging

from textual.app import App
from textual.binding import Binding
from textual.logging import TextualHandler

from propedit.config import ConfigError, Settings, load_config, load_theme, save_theme
from propedit.constants import APP_SUBTITLE, APP_TITLE
from propedit.fs.capability import DirectoryCapability
from propedit.screens.confirm import ConfirmScreen
from propedit.screens.directory_prompt import DirectoryPromptScreen
from propedit.screens.help import HelpScreen
from propedit.screens.projects import ProjectsScreen
from propedit.workspace import Workspace


class PropeditApp(App):
    """propedit — local .properties config editor.

    The app is the Host of its Workspace: directory prompts and confirmations
    are modal screens awaited from workers, and notifications are Textual
    toasts.
    """

    TITLE = APP_TITLE
    SUB_TITLE = APP_SUBTITLE

    BINDINGS = [
        Binding("q", "quit_app", "Quit"),
        Binding("?", "toggle_help", "Help"),
    ]

    def __init__(
        self,
        settings: Settings | None = None,
        _use_config: bool = False,
    ) -> None:
        super().__init__()
        if settings is None and _use_config:
            with contextlib.suppress(ConfigError):
                settings = load_config()
        self.settings = settings or Settings()
        self.workspace = Workspace(self, self.settings)

    def on_mount(self) -> None:
        saved_theme = load_theme()
        if saved_theme:
            self.theme = saved_theme
        self.push_screen(ProjectsScreen(self.workspace))

    def watch_theme(self, theme: str) -> None:
        """Persist theme changes whenever the theme is changed."""
        save_theme(theme)

    # ------------------------------------------------------------------
    # Host protocol
    # ------------------------------------------------------------------

    async def prompt_directory(self, mode: str, start_hint: str) -> DirectoryCapability | None:
        return await self.push_screen_wait(DirectoryPromptScreen(mode, start_hint))

    async def confirm(self, message: str) -> bool:
        return bool(await self.push_screen_wait(ConfirmScreen(message)))

    def notify(
        self,
        message: str,
        *,
        title: str = "",
        severity: str = "information",
        timeout: float | None = None,
        markup: bool = False,
    ) -> None:
        # Messages carry file names and section markers like [General]; keep markup off.
        if timeout is None and severity == "error":
            timeout = 8
        super().notify(message, title=title, severity=severity, timeout=timeout, markup=markup)

    # ------------------------------------------------------------------

    def action_toggle_help(self) -> None:
        self.push_screen(HelpScreen())

    def action_quit_app(self) -> None:
        """Ask before quitting, like closing the editor window."""
        if self.workspace.session.dirty:
            message = "You have unsaved changes. Quit propedit anyway?"
        else:
            message = "Quit propedit?"

        def on_confirm(confirmed: bool | None) -> None:
            if confirmed:
                self.exit()

        self.push_screen(ConfirmScreen(message), on_confirm)


def main() -> None:
    app = PropeditApp(_use_config=True)
    logging.basicConfig(level=app.settings.log_level, handlers=[TextualHandler()])
    app.run()


if __name__ == "__main__":
    main()
