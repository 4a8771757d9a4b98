"""Domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

from propedit.constants import DISPLAY_NAME_SEPARATOR, PROPERTIES_SUFFIX

if TYPE_CHECKING:
    from propedit.fs.capability import DirectoryCapability


@dataclass
class ConfigEntry:
    key: str
    value: str

    def contains(self, query: str) -> bool:
        """Return True if key or value contains the query (case-sensitive)."""
        return query in self.key or query in self.value


@dataclass(frozen=True)
class Row:
    """One line of the editable table handed to the UI."""

    key: str
    value: str
    deletable: bool


class EnvironmentMode(Enum):
    ONLINE = "Online"
    LOCAL = "Local"

    @property
    def label(self) -> str:
        return self.value

    @property
    def is_local(self) -> bool:
        return self is EnvironmentMode.LOCAL

    def toggled(self) -> EnvironmentMode:
        return EnvironmentMode.ONLINE if self.is_local else EnvironmentMode.LOCAL


class SessionState(Enum):
    CLOSED = auto()
    LOADING = auto()
    READY = auto()
    MUTATING = auto()
    CLOSING = auto()


@dataclass(frozen=True)
class Project:
    """A named subdirectory of ``{root}/data``.

    ``data`` is the capability for the enclosing ``data`` folder.  The project
    folder itself is only opened when its files are listed, so an unreadable
    project does not hide the others.  It is never persisted and is excluded
    from equality.
    """

    name: str
    path: str
    data: DirectoryCapability = field(compare=False, repr=False)


@dataclass(frozen=True)
class ConfigFile:
    """A ``*.properties`` file inside a project's ``config-cache`` folder."""

    name: str
    directory: DirectoryCapability = field(compare=False, repr=False)

    @property
    def display_name(self) -> str:
        """Return the name shown to the user.

        ``namespace+display.properties`` is shown as ``display``.  Files without
        a ``+`` (or with nothing after it) fall back to the bare stem.
        """
        stem = self.name.removesuffix(PROPERTIES_SUFFIX)
        if DISPLAY_NAME_SEPARATOR not in stem:
            return stem
        segment = stem.split(DISPLAY_NAME_SEPARATOR)[1]
        return segment or stem


@dataclass
class SearchState:
    query: str = ""
    matches: list[int] = field(default_factory=list)
    cursor: int = -1
