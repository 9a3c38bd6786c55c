"""Index (staging area) implementation.

The index is a UTF-8 text file with a version header followed by one
record per staged path::

    # wise index v1
    <mode> <blob-id> <path>

The path is always the last field and a record is split on at most two
spaces, so a path may contain spaces. Paths containing NUL or line breaks
are rejected when staged. Every write replaces the whole file atomically.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from wise.utils.atomic import atomic_write
from .errors import InvalidObjectError, WiseError
from .hash import is_object_id
from .paths import validate_path

logger = logging.getLogger(__name__)

INDEX_HEADER = '# wise index v1'


@dataclass(frozen=True)
class IndexEntry:
    """
    Represents a single entry in the index.

    Records the mode and the blob id of the last-staged content
    of a path.
    """
    mode: str       # File mode, e.g. '100644'
    path: str       # Slash-separated path relative to the work tree
    blob_id: str    # Id of the blob holding the staged content

    def to_record(self) -> str:
        """Encode entry as one index line (without newline)."""
        return f"{self.mode} {self.blob_id} {self.path}"

    @classmethod
    def from_record(cls, line: str) -> 'IndexEntry':
        """
        Decode one index line.

        Raises:
            ValueError: If the record is malformed
        """
        parts = line.split(' ', 2)
        if len(parts) != 3:
            raise ValueError(f"expected 3 fields, got {len(parts)}")

        mode, blob_id, path = parts
        _check_mode(mode)
        if not is_object_id(blob_id):
            raise ValueError(f"invalid blob id {blob_id!r}")
        validate_path(path)

        return cls(mode=mode, path=path, blob_id=blob_id)

    def __repr__(self) -> str:
        return f"IndexEntry({self.mode} {self.blob_id[:7]} {self.path})"


def _check_mode(mode: str) -> None:
    if not mode or not all(c in '01234567' for c in mode):
        raise ValueError(f"invalid mode {mode!r}")


class Index:
    """
    Wise index (staging area) implementation.

    The index stores the files to be included in the next commit, keyed
    by path. New paths keep their insertion order; re-staging a path
    replaces its entry in place.
    """

    def __init__(self, index_path: Union[str, Path]):
        """
        Initialize index bound to a file.

        Args:
            index_path: Path to the index file
        """
        self.index_path = Path(index_path)

    def _read(self) -> Dict[str, IndexEntry]:
        entries: Dict[str, IndexEntry] = {}

        try:
            text = self.index_path.read_text(encoding='utf-8', errors='replace')
        except FileNotFoundError:
            return entries

        lines = text.split('\n')
        first_lineno = 1
        if lines and lines[0] == INDEX_HEADER:
            lines = lines[1:]
            first_lineno = 2
        elif lines and lines[0].startswith('#'):
            logger.warning("Unknown index header %r in %s", lines[0], self.index_path)
            lines = lines[1:]
            first_lineno = 2

        for lineno, line in enumerate(lines, start=first_lineno):
            if not line:
                continue
            try:
                entry = IndexEntry.from_record(line)
            except (ValueError, WiseError) as e:
                logger.warning("Skipping malformed index record %d: %s", lineno, e)
                continue

            if entry.path in entries:
                logger.warning("Duplicate index record for %s, keeping the last one", entry.path)
            entries[entry.path] = entry

        return entries

    def _write(self, entries: Dict[str, IndexEntry]) -> None:
        lines = [INDEX_HEADER]
        lines.extend(entry.to_record() for entry in entries.values())
        atomic_write(self.index_path, ('\n'.join(lines) + '\n').encode('utf-8'))
        logger.debug("Wrote index with %d entries", len(entries))

    def stage(self, path: str, mode: str, blob_id: str) -> IndexEntry:
        """
        Add or update the entry for path.

        An unchanged entry does not rewrite the index file.

        Args:
            path: Slash-separated path relative to the work tree
            mode: File mode (octal digits)
            blob_id: Id of the staged blob

        Returns:
            IndexEntry: The staged entry

        Raises:
            InvalidPathError: If path is malformed
            InvalidObjectError: If mode or blob_id is malformed
        """
        validate_path(path)
        try:
            _check_mode(mode)
        except ValueError as e:
            raise InvalidObjectError(str(e))
        if not is_object_id(blob_id):
            raise InvalidObjectError(f"Invalid blob id: {blob_id!r}")

        entry = IndexEntry(mode=mode, path=path, blob_id=blob_id)
        entries = self._read()

        if entries.get(path) == entry and self.index_path.exists():
            logger.debug("%s already staged as %s", path, blob_id[:8])
            return entry

        entries[path] = entry
        self._write(entries)
        return entry

    def load_all(self) -> List[IndexEntry]:
        """
        Load every valid entry, in insertion order.

        Malformed records are skipped.
        """
        return list(self._read().values())

    def get(self, path: str) -> Optional[IndexEntry]:
        """Get entry by path."""
        return self._read().get(path)

    def remove(self, path: str) -> bool:
        """
        Remove entry from index.

        Returns:
            True if the path was staged
        """
        entries = self._read()
        if path not in entries:
            return False
        del entries[path]
        self._write(entries)
        return True

    def clear(self) -> None:
        """Atomically replace the index with an empty one."""
        self._write({})

    def __len__(self) -> int:
        return len(self._read())

    def __contains__(self, path: str) -> bool:
        return path in self._read()

    def __iter__(self) -> Iterator[IndexEntry]:
        return iter(self.load_all())

    def __repr__(self) -> str:
        return f"Index(path={self.index_path})"
