"""Repository path handling.

Paths inside the index and trees are slash-separated and relative to the
work tree. Malformed paths are rejected, never rewritten.
"""

from pathlib import Path
from typing import List, Union

from .errors import InvalidPathError

FORBIDDEN_CHARS = ('\0', '\n', '\r')

# Dependency and build output directories never walked when adding or
# reporting status
SKIPPED_DIRS = frozenset({'node_modules', 'dist'})


def split_path(path: str) -> List[str]:
    """
    Split a repository path into its segments.

    Raises:
        InvalidPathError: On empty segments (leading, trailing or doubled
            '/'), '.' or '..' segments, or NUL/line-break characters
    """
    if not isinstance(path, str) or not path:
        raise InvalidPathError("Path must be a non-empty string")

    for char in FORBIDDEN_CHARS:
        if char in path:
            raise InvalidPathError(f"Path contains a forbidden character: {path!r}")

    parts = path.split('/')
    for part in parts:
        if part == '':
            raise InvalidPathError(f"Path has an empty segment: {path!r}")
        if part in ('.', '..'):
            raise InvalidPathError(f"Path has a relative segment: {path!r}")

    return parts


def validate_path(path: str) -> str:
    """Return path unchanged if it is a valid repository path."""
    split_path(path)
    return path


def is_skipped(parts) -> bool:
    """
    Check whether a work tree file is left out of directory walks.

    Args:
        parts: Path segments of the file relative to the work tree

    Returns:
        True if any segment is hidden or a directory segment is in SKIPPED_DIRS
    """
    if any(part.startswith('.') for part in parts):
        return True
    return any(part in SKIPPED_DIRS for part in parts[:-1])


def to_repo_path(work_tree: Union[str, Path], file_path: Union[str, Path]) -> str:
    """
    Convert a filesystem path to a repository path.

    Args:
        work_tree: Repository root
        file_path: Absolute path, or path relative to the work tree

    Returns:
        str: Slash-separated path relative to the work tree

    Raises:
        InvalidPathError: If the file is outside the work tree
    """
    work_tree = Path(work_tree).resolve()
    file_path = Path(file_path)
    if not file_path.is_absolute():
        file_path = work_tree / file_path

    # The leaf is kept as named so a symlink is staged under its own path
    file_path = file_path.parent.resolve() / file_path.name

    try:
        rel_path = file_path.relative_to(work_tree)
    except ValueError:
        raise InvalidPathError(f"Path is outside the repository: {file_path}")

    return validate_path(rel_path.as_posix())
