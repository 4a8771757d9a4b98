"""Project and config-file listing under an authorized root."""

import logging

from propedit.constants import CONFIG_CACHE_DIR_NAME, DATA_DIR_NAME, PROPERTIES_SUFFIX
from propedit.errors import FilesystemError
from propedit.fs.capability import DirectoryCapability
from propedit.host import Host
from propedit.models import ConfigFile, Project

_LOG = logging.getLogger(__name__)


class ConfigRepository:
    """Lists projects under ``{root}/data`` and the files in their config cache.

    Listing never raises: a filesystem failure produces an empty list and a
    single notification.
    """

    def __init__(self, host: Host) -> None:
        self._host = host

    def list_projects(self, root: DirectoryCapability) -> list[Project]:
        try:
            data = root.get_directory(DATA_DIR_NAME, create=True)
            entries = data.list_entries()
            projects = [
                Project(
                    name=entry.name,
                    path=f"{data.display_path}/{entry.name}",
                    data=data,
                )
                for entry in entries
                if entry.kind == "directory"
            ]
        except FilesystemError as exc:
            _LOG.warning("could not list projects", exc_info=exc)
            self._host.notify(
                f"Cannot access the data directory: {exc}", title="Error", severity="error"
            )
            return []
        return sorted(projects, key=lambda p: p.name)

    def config_cache(self, project: Project) -> DirectoryCapability:
        """Return the capability for ``{project}/config-cache``.  Raises on failure."""
        return project.data.get_directory(project.name).get_directory(CONFIG_CACHE_DIR_NAME)

    def list_config_files(self, project: Project) -> list[ConfigFile]:
        try:
            cache = self.config_cache(project)
            files = [
                ConfigFile(name=entry.name, directory=cache)
                for entry in cache.list_entries()
                if entry.kind == "file" and entry.name.endswith(PROPERTIES_SUFFIX)
            ]
        except FilesystemError as exc:
            _LOG.warning("could not list config files for %s", project.name, exc_info=exc)
            self._host.notify(
                f"Cannot read config files of {project.name}: {exc}", title="Error", severity="error"
            )
            return []
        return sorted(files, key=lambda f: f.name)
