"""Projects screen — authorization, project list and environment toggle."""

from textual import work
from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import Footer, Header, ListView

from propedit.models import Project
from propedit.screens.editor import EditorScreen
from propedit.screens.files import FilesScreen
from propedit.widgets.main_view import MainView, ProjectItem
from propedit.widgets.status_bar import StatusBar
from propedit.workspace import Workspace


class ProjectsScreen(Screen[None]):
    """Base screen of the app.

    Shows a welcome panel until the root is authorized, then the projects
    found under ``data``.  Selecting a project opens its files modal; picking
    a file opens the editor, and closing the editor returns to the files
    modal, matching how the files list stays open underneath the editor.
    """

    BINDINGS = [
        Binding("a", "authorize", "Authorize"),
        Binding("c", "change_path", "Change path"),
        Binding("r", "refresh", "Refresh"),
        Binding("e", "toggle_environment", "Online/Local"),
        Binding("j", "cursor_down", show=False),
        Binding("k", "cursor_up", show=False),
    ]

    def __init__(self, workspace: Workspace) -> None:
        super().__init__()
        self._workspace = workspace
        self._browsing = False

    def compose(self) -> ComposeResult:
        yield Header()
        yield StatusBar(id="status")
        yield MainView(self._workspace.auth.start_hint, id="main")
        yield Footer()

    def on_mount(self) -> None:
        self._sync_status()

    def _status(self) -> StatusBar:
        return self.query_one("#status", StatusBar)

    def _main(self) -> MainView:
        return self.query_one("#main", MainView)

    def _sync_status(self) -> None:
        status = self._status()
        workspace = self._workspace
        status.authorized = workspace.authorized
        status.path = workspace.auth.root.display_path if workspace.authorized else ""
        status.environment = workspace.environment_label

    async def _load_projects(self) -> None:
        projects = self._workspace.list_projects()
        await self._main().show_projects(projects)

    @work
    async def action_authorize(self) -> None:
        """Prompt for the root; on success read the mode and list projects."""
        with self._workspace.operation() as ok:
            if not ok:
                return
            authorized = await self._workspace.authorize()
            if authorized:
                await self._load_projects()
            self._sync_status()

    @work
    async def action_change_path(self) -> None:
        """Re-authorize from scratch; the old grant is dropped first."""
        with self._workspace.operation() as ok:
            if not ok:
                return
            authorized = await self._workspace.change_path()
            if authorized:
                await self._load_projects()
            else:
                self._main().show_welcome()
            self._sync_status()

    @work
    async def action_refresh(self) -> None:
        if not self._workspace.authorized:
            self._main().show_welcome()
            return
        with self._workspace.operation() as ok:
            if ok:
                await self._load_projects()

    @work
    async def action_toggle_environment(self) -> None:
        with self._workspace.operation() as ok:
            if not ok:
                return
            await self._workspace.toggle_environment()
            self._sync_status()

    def on_status_bar_environment_clicked(self, event: StatusBar.EnvironmentClicked) -> None:
        event.stop()
        self.action_toggle_environment()

    def on_status_bar_path_clicked(self, event: StatusBar.PathClicked) -> None:
        event.stop()
        self.action_change_path()

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        event.stop()
        if isinstance(event.item, ProjectItem):
            self._browse(event.item.project)

    @work
    async def _browse(self, project: Project) -> None:
        """Files modal ↔ editor loop for one project."""
        if self._browsing:
            return
        self._browsing = True
        try:
            while True:
                files = self._workspace.select_project(project)
                file = await self.app.push_screen_wait(FilesScreen(project, files))
                if file is None:
                    break
                if self._workspace.open_file(file):
                    await self.app.push_screen_wait(EditorScreen(self._workspace))
        finally:
            self._browsing = False

    def action_cursor_down(self) -> None:
        list_view = self.query_one("#projects", ListView)
        if list_view.display:
            list_view.action_cursor_down()

    def action_cursor_up(self) -> None:
        list_view = self.query_one("#projects", ListView)
        if list_view.display:
            list_view.action_cursor_up()
