"""Workspace: the single owner of the current session pointers.

The app and the CLI both drive the core through one ``Workspace``.  It holds
the root capability (via ``AuthorizationSession``), the current project, the
edit session and its search index, and wires them to a ``Host``.
"""

import contextlib
import logging
from collections.abc import Iterator

from propedit.auth import AuthorizationSession
from propedit.config import Settings
from propedit.domain.search import SearchIndex
from propedit.environment import EnvironmentSwitch
from propedit.errors import UserCancelled, ValidationError
from propedit.host import Host
from propedit.models import ConfigFile, EnvironmentMode, Project
from propedit.repository import ConfigRepository
from propedit.session import EditSession

_LOG = logging.getLogger(__name__)


class Workspace:
    def __init__(self, host: Host, settings: Settings | None = None) -> None:
        settings = settings or Settings()
        self.host = host
        self.auth = AuthorizationSession(host, settings.root_name, settings.start_path)
        self.repository = ConfigRepository(host)
        self.switch = EnvironmentSwitch(host)
        self.session = EditSession(host, self.switch)
        self.search = SearchIndex(self.session)
        self.current_project: Project | None = None
        self.busy: bool = False

    @property
    def authorized(self) -> bool:
        return self.auth.authorized

    @property
    def mode(self) -> EnvironmentMode:
        return self.switch.mode

    @property
    def environment_label(self) -> str:
        return self.switch.label

    @contextlib.contextmanager
    def operation(self) -> Iterator[bool]:
        """Yield True when the caller may start an operation, False if one is in flight.

        Hosts wrap each user-triggered call in this so that a second trigger
        arriving mid-call is dropped instead of racing on the session pointers.
        """
        if self.busy:
            yield False
            return
        self.busy = True
        try:
            yield True
        finally:
            self.busy = False

    async def authorize(self) -> bool:
        """Ask for the root directory and re-derive the environment mode.

        Cancellation is silent; a wrong directory is reported once.  Either
        way the caller is expected to offer the prompt again.
        """
        try:
            root = await self.auth.acquire_root()
        except UserCancelled:
            _LOG.debug("authorization cancelled")
            return False
        except ValidationError as exc:
            self.host.notify(str(exc), title="Error", severity="error")
            return False
        self.switch.read(root)
        return True

    async def change_path(self) -> bool:
        """Drop the current grant and authorize again from scratch."""
        if not await self.close_file():
            return False
        self.auth.revoke()
        self.switch.reset()
        self.current_project = None
        return await self.authorize()

    def list_projects(self) -> list[Project]:
        if not self.auth.authorized:
            self._report_unauthorized()
            return []
        return self.repository.list_projects(self.auth.root)

    def select_project(self, project: Project) -> list[ConfigFile]:
        self.current_project = project
        return self.repository.list_config_files(project)

    def open_file(self, file: ConfigFile) -> bool:
        opened = self.session.open(file, self.current_project)
        self.search.clear()
        return opened

    async def close_file(self) -> bool:
        closed = await self.session.close()
        if closed:
            self.search.clear()
        return closed

    def save(self) -> bool:
        return self.session.save()

    async def toggle_environment(self) -> EnvironmentMode:
        if not self.auth.authorized:
            self._report_unauthorized()
            return self.switch.mode
        return await self.switch.toggle(self.auth.root)

    def _report_unauthorized(self) -> None:
        self.host.notify("Not authorized. Please authorize again.", title="Error", severity="error")
