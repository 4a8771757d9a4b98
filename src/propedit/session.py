"""Edit session: the in-memory, dirty-tracked rows of one open config file."""

import logging
from typing import Literal

from propedit.constants import BLOCKED_IN_ONLINE_MODE, NEW_ENTRY_KEY, NEW_ENTRY_VALUE
from propedit.domain.properties import decode, encode
from propedit.environment import EnvironmentSwitch
from propedit.errors import FilesystemError
from propedit.host import Host
from propedit.models import ConfigEntry, ConfigFile, Project, Row, SessionState

_LOG = logging.getLogger(__name__)

Column = Literal["key", "value"]


class EditSession:
    """Mutable table of ConfigEntry rows for a single file.

    Lifecycle: CLOSED → LOADING → READY → (MUTATING → READY)* → CLOSING → CLOSED.

    Mutations (``set_cell``, ``add_row``, ``delete_row``) only run in READY
    state and only while the environment switch reports Local mode; otherwise
    they are silent no-ops returning a falsy value.  ``dirty`` becomes True on
    the first successful mutation and is cleared only by a successful ``open``
    or ``save``.

    ``revision`` increases whenever the entry set changes so that a
    ``SearchIndex`` built on this session can tell its matches are stale.
    """

    def __init__(self, host: Host, switch: EnvironmentSwitch) -> None:
        self._host = host
        self._switch = switch
        self._entries: list[ConfigEntry] = []
        self.dirty: bool = False
        self.state: SessionState = SessionState.CLOSED
        self.file: ConfigFile | None = None
        self.project: Project | None = None
        self.revision: int = 0

    @property
    def entries(self) -> list[ConfigEntry]:
        return self._entries

    @property
    def is_open(self) -> bool:
        return self.state is not SessionState.CLOSED

    @property
    def editable(self) -> bool:
        return self.state is SessionState.READY and self._switch.is_local

    @property
    def rows(self) -> list[Row]:
        """The table exposed to the UI, one Row per entry."""
        deletable = self._switch.is_local
        return [Row(e.key, e.value, deletable) for e in self._entries]

    def open(self, file: ConfigFile, project: Project | None = None) -> bool:
        """Load and decode ``file``.  Returns False (session stays CLOSED) on read failure."""
        self.state = SessionState.LOADING
        try:
            text = file.directory.read_text(file.name)
        except FilesystemError as exc:
            _LOG.warning("could not read %s", file.name, exc_info=exc)
            self._host.notify(f"Cannot read {file.name}: {exc}", title="Error", severity="error")
            self._reset()
            return False
        self._entries = decode(text)
        self.file = file
        self.project = project
        self.dirty = False
        self.state = SessionState.READY
        self._touch()
        _LOG.info("opened %s (%d entries)", file.name, len(self._entries))
        return True

    def set_cell(self, row: int, column: Column, new_value: str) -> bool:
        """Overwrite the key or value of ``row`` in place."""
        if not self.editable or not 0 <= row < len(self._entries):
            return False
        if column not in ("key", "value"):
            return False
        self.state = SessionState.MUTATING
        setattr(self._entries[row], column, new_value)
        self._mutated()
        return True

    def add_row(self) -> int | None:
        """Append a placeholder entry and return its row index (the new last row)."""
        if not self.editable:
            return None
        self.state = SessionState.MUTATING
        self._entries.append(ConfigEntry(key=NEW_ENTRY_KEY, value=NEW_ENTRY_VALUE))
        self._mutated()
        return len(self._entries) - 1

    async def delete_row(self, row: int) -> bool:
        """Remove ``row`` after the user confirms."""
        if not self.editable or not 0 <= row < len(self._entries):
            return False
        if not await self._host.confirm(f"Delete {self._entries[row].key}?"):
            return False
        # The session may have been closed or switched Online while waiting.
        if not self.editable or row >= len(self._entries):
            return False
        self.state = SessionState.MUTATING
        del self._entries[row]
        self._mutated()
        return True

    def save(self) -> bool:
        """Encode the entries and commit them to the backing file.

        Blocked with a notification in Online mode.  ``dirty`` is cleared only
        once the write has committed; a failed write leaves it set so the
        user can retry.
        """
        if not self._switch.is_local:
            self._host.notify(BLOCKED_IN_ONLINE_MODE, title="Read-only", severity="warning")
            return False
        if self.state is not SessionState.READY or self.file is None:
            self._host.notify("No file is open", title="Error", severity="error")
            return False
        try:
            self.file.directory.write_text(self.file.name, encode(self._entries), create=False)
        except FilesystemError as exc:
            _LOG.warning("could not save %s", self.file.name, exc_info=exc)
            self._host.notify(f"Save failed: {exc}", title="Error", severity="error")
            return False
        self.dirty = False
        self._host.notify(f"Saved {self.file.name}", title="Saved")
        _LOG.info("saved %s (%d entries)", self.file.name, len(self._entries))
        return True

    async def close(self) -> bool:
        """Close the session.  Unsaved changes need confirmation; declining keeps it open."""
        if not self.is_open:
            return True
        if self.dirty:
            previous = self.state
            self.state = SessionState.CLOSING
            if not await self._host.confirm("You have unsaved changes. Close anyway?"):
                self.state = previous
                return False
        self._reset()
        return True

    def _mutated(self) -> None:
        self.dirty = True
        self.state = SessionState.READY
        self._touch()

    def _touch(self) -> None:
        self.revision += 1

    def _reset(self) -> None:
        self._entries = []
        self.file = None
        self.project = None
        self.dirty = False
        self.state = SessionState.CLOSED
        self._touch()
