"""Directory capabilities: scoped read-write handles to a directory.

Everything in the core touches the filesystem through ``DirectoryCapability``.
A capability only reaches its own directory and the children it hands out via
``get_directory``; nothing outside the granted tree is addressable.

``LocalDirectory`` is the path-based implementation.  Every call checks
``os.access`` before touching the disk and translates ``OSError`` into the
``propedit.errors`` taxonomy, so callers never see raw OS exceptions.
"""

import logging
import os
import stat
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Protocol

from propedit.errors import FilesystemError, NotFound, PermissionDenied, WriteFailure

_LOG = logging.getLogger(__name__)

EntryKind = Literal["file", "directory"]


@dataclass(frozen=True)
class DirEntry:
    name: str
    kind: EntryKind


class DirectoryCapability(Protocol):
    """Protocol that every directory handle must satisfy."""

    @property
    def name(self) -> str:
        """The directory's own name (last path component)."""
        ...

    @property
    def display_path(self) -> str:
        """Human-readable location, for labels only."""
        ...

    def list_entries(self) -> list[DirEntry]:
        """Return the immediate children of this directory."""
        ...

    def get_directory(self, name: str, *, create: bool = False) -> "DirectoryCapability":
        """Return a capability for a child directory, creating it if asked."""
        ...

    def exists(self, name: str) -> bool:
        """Return True if a child file named ``name`` exists."""
        ...

    def read_text(self, name: str) -> str:
        """Return the full text of a child file."""
        ...

    def write_text(self, name: str, text: str, *, create: bool = True) -> None:
        """Replace a child file's content in one commit.

        Readers observe either the previous content or the new content, never
        a partial write.  With ``create=False`` a missing file is an error.
        """
        ...


class LocalDirectory:
    """DirectoryCapability backed by a real directory on the local disk."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @classmethod
    def open(cls, path: str | os.PathLike[str]) -> "LocalDirectory":
        """Grant a capability for an existing, readable and writable directory.

        Raises NotFound if the path is not a directory and PermissionDenied if
        the process cannot both read and write it.
        """
        resolved = Path(path).expanduser()
        if not resolved.is_dir():
            raise NotFound(f"{resolved} is not a directory")
        if not os.access(resolved, os.R_OK | os.W_OK | os.X_OK):
            raise PermissionDenied(f"No read-write access to {resolved}")
        return cls(resolved)

    @property
    def name(self) -> str:
        return self._path.name

    @property
    def display_path(self) -> str:
        return self._path.as_posix()

    @property
    def path(self) -> Path:
        return self._path

    def __repr__(self) -> str:
        return f"LocalDirectory({self.display_path!r})"

    def list_entries(self) -> list[DirEntry]:
        self._check_access(self._path, os.R_OK | os.X_OK)
        try:
            children = list(self._path.iterdir())
        except OSError as exc:
            raise _translate(exc, self._path) from exc
        entries: list[DirEntry] = []
        for child in children:
            if child.is_dir():
                entries.append(DirEntry(child.name, "directory"))
            elif child.is_file():
                entries.append(DirEntry(child.name, "file"))
        return entries

    def get_directory(self, name: str, *, create: bool = False) -> "LocalDirectory":
        child = self._child(name)
        if create and not child.exists():
            self._check_access(self._path, os.W_OK | os.X_OK)
            try:
                child.mkdir()
            except FileExistsError:
                pass
            except OSError as exc:
                raise _translate(exc, child) from exc
            _LOG.debug("created directory %s", child)
        if not child.is_dir():
            raise NotFound(f"{child} is not a directory")
        self._check_access(child, os.R_OK | os.X_OK)
        return LocalDirectory(child)

    def exists(self, name: str) -> bool:
        return self._child(name).is_file()

    def read_text(self, name: str) -> str:
        target = self._child(name)
        if not target.is_file():
            raise NotFound(f"{target} does not exist")
        self._check_access(target, os.R_OK)
        try:
            return target.read_text(encoding="utf-8")
        except OSError as exc:
            raise _translate(exc, target) from exc
        except UnicodeDecodeError as exc:
            raise FilesystemError(f"{target} is not valid UTF-8 text") from exc

    def write_text(self, name: str, text: str, *, create: bool = True) -> None:
        target = self._child(name)
        if not create and not target.is_file():
            raise WriteFailure(f"{target} no longer exists")
        self._check_access(self._path, os.W_OK | os.X_OK)
        if target.exists() and not os.access(target, os.W_OK):
            raise PermissionDenied(f"No write access to {target}")

        # Write via temp file + os.replace so readers never see partial content.
        temp_path: str | None = None
        try:
            fd, temp_path = tempfile.mkstemp(prefix=".propedit_", suffix=".tmp", dir=self._path)
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
                fh.write(text)
                fh.flush()
                os.fsync(fh.fileno())
            os.chmod(temp_path, _file_mode(target))
            os.replace(temp_path, target)
        except OSError as exc:
            if temp_path is not None:
                Path(temp_path).unlink(missing_ok=True)
            raise WriteFailure(f"Could not write {target}: {exc}") from exc
        _LOG.debug("wrote %d chars to %s", len(text), target)

    def _child(self, name: str) -> Path:
        # Capabilities never reach outside their own directory.
        if not name or name in (".", "..") or "/" in name or "\\" in name:
            raise NotFound(f"Invalid entry name {name!r}")
        return self._path / name

    @staticmethod
    def _check_access(path: Path, mode: int) -> None:
        if not path.exists():
            raise NotFound(f"{path} does not exist")
        if not os.access(path, mode):
            raise PermissionDenied(f"Access to {path} was denied")


def _file_mode(target: Path) -> int:
    """Permission bits for the replacement of ``target``.

    mkstemp creates files as 0600; an existing target keeps its own mode and a
    new file gets the regular umask-derived mode.
    """
    if target.exists():
        return stat.S_IMODE(target.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _translate(exc: OSError, path: Path) -> FilesystemError:
    """Map an OSError onto the propedit failure taxonomy."""
    if isinstance(exc, (FileNotFoundError, NotADirectoryError)):
        return NotFound(f"{path} does not exist")
    if isinstance(exc, PermissionError):
        return PermissionDenied(f"Access to {path} was denied")
    return FilesystemError(f"{path}: {exc}")
