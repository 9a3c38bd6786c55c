"""Exceptions for Wise.

I/O failures are not represented here: ``OSError`` and its subclasses
propagate from the core unchanged.
"""


class WiseError(Exception):
    """Base class for all Wise errors."""


class InvalidPathError(WiseError, ValueError):
    """Raised when a path has empty, ``.`` or ``..`` segments or forbidden characters."""


class TreeConflictError(WiseError, ValueError):
    """Raised when staged paths cannot form a tree (a file is also a directory)."""


class NothingToCommitError(WiseError):
    """Raised when a commit is requested with an empty staging index."""


class EmptyMessageError(WiseError, ValueError):
    """Raised when a commit message is empty."""


class MissingIdentityError(WiseError):
    """Raised when no author name/email is configured.

    Set them with ``wise config set user.name "Your Name"`` and
    ``wise config set user.email you@example.com``.
    """


class InvalidObjectError(WiseError, ValueError):
    """Raised for an unknown object kind or a malformed object id."""


class InvalidRefError(WiseError, ValueError):
    """Raised for a branch name that is not a valid reference path."""


class ObjectNotFoundError(WiseError, KeyError):
    """Raised when an object id is not present in the store."""

    def __str__(self) -> str:
        return Exception.__str__(self)


class CorruptObjectError(WiseError):
    """Raised when a stored object cannot be decompressed or its header is invalid."""


class RepositoryExistsError(WiseError):
    """Raised by ``init`` when the repository directory already exists."""
