"""Main view: welcome message until authorized, then the project list."""

from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Label, ListItem, ListView, Static

from propedit.models import Project


class ProjectItem(ListItem):
    """List row carrying the Project it represents."""

    def __init__(self, project: Project) -> None:
        super().__init__(
            Label(project.name, classes="project-name", markup=False),
            Label(f"  {project.path}", classes="project-path", markup=False),
        )
        self.project = project


class MainView(Vertical):
    """Composes the welcome panel, the empty-state label and the project list."""

    DEFAULT_CSS = """
    MainView #welcome {
        height: 1fr;
        content-align: center middle;
        text-align: center;
    }
    MainView #empty {
        height: 1fr;
        content-align: center middle;
    }
    MainView .project-path {
        color: $text-muted;
    }
    """

    def __init__(self, start_hint: str, *, id: str | None = None) -> None:
        super().__init__(id=id)
        self._start_hint = start_hint

    def compose(self) -> ComposeResult:
        yield Static(
            "Welcome to propedit\n\n"
            f"Grant access to the {self._start_hint} directory to get started.\n\n"
            "Press  a  to authorize",
            id="welcome",
        )
        yield Label("No project folders under data", id="empty")
        yield ListView(id="projects")

    def on_mount(self) -> None:
        self.show_welcome()

    def show_welcome(self) -> None:
        self.query_one("#welcome").display = True
        self.query_one("#empty").display = False
        self.query_one("#projects").display = False

    async def show_projects(self, projects: list[Project]) -> None:
        list_view = self.query_one("#projects", ListView)
        await list_view.clear()
        await list_view.extend(ProjectItem(p) for p in projects)
        self.query_one("#welcome").display = False
        self.query_one("#empty").display = not projects
        list_view.display = bool(projects)
        if projects:
            list_view.index = 0
            list_view.focus()
