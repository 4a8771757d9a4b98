"""Failure taxonomy shared by the core components.

Every expected failure derives from ``PropeditError``.  Components catch these
at their own boundary and surface at most one notification per user action;
none of them is meant to reach the top of the event loop.
"""


class PropeditError(Exception):
    """Base class for expected propedit failures."""


class UserCancelled(PropeditError):
    """The user dismissed a prompt.  Absorbed silently."""


class ValidationError(PropeditError):
    """The user picked a directory that is not the expected root."""


class FilesystemError(PropeditError):
    """A capability operation failed."""


class PermissionDenied(FilesystemError):
    """The capability no longer grants access to the target."""


class NotFound(FilesystemError):
    """The target directory or file does not exist."""


class WriteFailure(FilesystemError):
    """Content could not be committed to disk.  The previous content is intact."""
