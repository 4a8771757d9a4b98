"""Root directory authorization."""

import logging

from propedit.constants import DEFAULT_START_PATH, PROMPT_MODE_READWRITE, ROOT_DIR_NAME
from propedit.errors import PermissionDenied, UserCancelled, ValidationError
from propedit.fs.capability import DirectoryCapability
from propedit.host import Host

_LOG = logging.getLogger(__name__)


class AuthorizationSession:
    """Holds the root capability granted by the user for this process.

    Nothing is remembered between runs: every start, and every "change path",
    goes through ``acquire_root`` again.
    """

    def __init__(
        self,
        host: Host,
        root_name: str = ROOT_DIR_NAME,
        start_hint: str = DEFAULT_START_PATH,
    ) -> None:
        self._host = host
        self.root_name = root_name
        self.start_hint = start_hint
        self._root: DirectoryCapability | None = None

    @property
    def authorized(self) -> bool:
        return self._root is not None

    @property
    def root(self) -> DirectoryCapability:
        if self._root is None:
            raise PermissionDenied("The root directory has not been authorized")
        return self._root

    async def acquire_root(self) -> DirectoryCapability:
        """Prompt for the root directory and keep it if its name matches.

        Raises UserCancelled when the prompt is dismissed and ValidationError
        when a directory with the wrong name is picked.  In both cases any
        previously granted root is left untouched.
        """
        capability = await self._host.prompt_directory(PROMPT_MODE_READWRITE, self.start_hint)
        if capability is None:
            raise UserCancelled("Directory selection was cancelled")
        if capability.name.lower() != self.root_name.lower():
            _LOG.info("rejected directory %s", capability.display_path)
            raise ValidationError(f"Please select the {self.start_hint} directory")
        self._root = capability
        _LOG.info("authorized root %s", capability.display_path)
        return capability

    def revoke(self) -> None:
        self._root = None
