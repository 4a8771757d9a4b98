"""Host protocol: the dialogs the core asks its surroundings to show."""

from typing import Protocol

from propedit.fs.capability import DirectoryCapability


class Host(Protocol):
    """Collaborator interface consumed by the core.

    The Textual app and the CLI each provide one; tests use a scripted fake.
    """

    async def prompt_directory(self, mode: str, start_hint: str) -> DirectoryCapability | None:
        """Ask the user to grant a directory.  Returns None when cancelled."""
        ...

    async def confirm(self, message: str) -> bool:
        """Ask a yes/no question.  Returns True only on explicit confirmation."""
        ...

    def notify(self, message: str, *, title: str = "", severity: str = "information") -> None:
        """Show a one-off message to the user."""
        ...
