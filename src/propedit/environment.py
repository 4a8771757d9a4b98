"""Online/Local environment switch backed by ``settings/server.properties``."""

import logging

from propedit.constants import (
    SERVER_PROPERTIES_NAME,
    SERVER_PROPERTIES_TEMPLATE,
    SETTINGS_DIR_NAME,
)
from propedit.domain.environment import parse_mode, rewrite_for_mode
from propedit.errors import FilesystemError
from propedit.fs.capability import DirectoryCapability
from propedit.host import Host
from propedit.models import EnvironmentMode

_LOG = logging.getLogger(__name__)


class EnvironmentSwitch:
    """Reads and toggles the workspace mode.

    ``mode`` is whatever the last ``read`` or ``toggle`` decided.  It is never
    carried over between authorizations: the workspace calls ``read`` again
    each time a root is granted.

    ``toggle`` flips ``mode`` before writing the file, so when the write fails
    the reported mode no longer matches the disk until the next ``read``.
    """

    def __init__(self, host: Host) -> None:
        self._host = host
        self.mode: EnvironmentMode = EnvironmentMode.ONLINE

    @property
    def is_local(self) -> bool:
        return self.mode.is_local

    @property
    def label(self) -> str:
        return self.mode.label

    def reset(self) -> None:
        self.mode = EnvironmentMode.ONLINE

    def read(self, root: DirectoryCapability) -> EnvironmentMode:
        """Derive the mode from the server.properties file under ``root``.

        Creates ``settings/server.properties`` with a bare ``[General]`` section
        when it does not exist.  Any filesystem failure falls back to Online.
        """
        try:
            settings = root.get_directory(SETTINGS_DIR_NAME, create=True)
            content = self._load(settings)
        except FilesystemError as exc:
            _LOG.warning("could not read %s", SERVER_PROPERTIES_NAME, exc_info=exc)
            self._host.notify(
                f"Could not read {SERVER_PROPERTIES_NAME}: {exc}", title="Error", severity="error"
            )
            self.mode = EnvironmentMode.ONLINE
            return self.mode
        self.mode = parse_mode(content)
        _LOG.info("environment mode is %s", self.mode.label)
        return self.mode

    async def toggle(self, root: DirectoryCapability) -> EnvironmentMode:
        """Switch between Online and Local after asking the user.

        Returns the (possibly unchanged) mode.
        """
        target = self.mode.toggled()
        if target.is_local:
            message = "Switch to Local? server.properties will be set to env=Local."
        else:
            message = "Switch to Online? The env setting will be removed from server.properties."
        if not await self._host.confirm(message):
            return self.mode

        try:
            settings = root.get_directory(SETTINGS_DIR_NAME, create=True)
            content = self._load(settings)
        except FilesystemError as exc:
            _LOG.warning("could not read %s before toggling", SERVER_PROPERTIES_NAME, exc_info=exc)
            self._host.notify(
                f"Could not access {SERVER_PROPERTIES_NAME}: {exc}", title="Error", severity="error"
            )
            return self.mode

        self.mode = target
        try:
            settings.write_text(SERVER_PROPERTIES_NAME, rewrite_for_mode(content, target))
        except FilesystemError as exc:
            _LOG.warning("could not write %s", SERVER_PROPERTIES_NAME, exc_info=exc)
            self._host.notify(
                f"Could not write {SERVER_PROPERTIES_NAME}: {exc}", title="Error", severity="error"
            )
            return self.mode

        self._host.notify(f"Switched to {target.label}", title="Environment")
        return self.mode

    @staticmethod
    def _load(settings: DirectoryCapability) -> str:
        if not settings.exists(SERVER_PROPERTIES_NAME):
            settings.write_text(SERVER_PROPERTIES_NAME, SERVER_PROPERTIES_TEMPLATE)
        return settings.read_text(SERVER_PROPERTIES_NAME)
