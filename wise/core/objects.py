"""Wise objects for Wise."""

from abc import ABC, abstractmethod
from typing import List, Optional
from .hash import object_id
from .errors import CorruptObjectError, InvalidPathError

TREE_MODE = '40000'
FILE_MODE = '100644'


class WiseObject(ABC):
    """Base class for all Wise objects."""

    def __init__(self):
        self._hash: Optional[str] = None

    @abstractmethod
    def serialize(self) -> bytes:
        """
        Serialize object to bytes.

        Returns:
            bytes: Serialized object payload
        """
        pass

    @abstractmethod
    def deserialize(self, data: bytes) -> None:
        """
        Deserialize object from bytes.

        Args:
            data: Serialized object payload
        """
        pass

    @property
    def type(self) -> str:
        """
        Return object type name.

        Returns:
            str: Object type (blob, tree, commit)
        """
        return self.__class__.__name__.lower()

    def compute_hash(self) -> str:
        """
        Compute and cache object hash.

        Objects are hashed with a header containing the type and size.
        Format: <type> <size>\\0<content>

        Returns:
            str: 40-character SHA-1 hash
        """
        if self._hash is None:
            self._hash = object_id(self.type, self.serialize())
        return self._hash

    @property
    def hash(self) -> str:
        """
        Get object hash.

        Returns:
            str: 40-character SHA-1 hash
        """
        return self.compute_hash()


class Blob(WiseObject):
    """
    Represents file content.

    A blob stores the raw content of a file without any metadata
    like filename or permissions.
    """

    def __init__(self, data: Optional[bytes] = None):
        super().__init__()
        self.data = data or b''

    def serialize(self) -> bytes:
        return self.data

    def deserialize(self, data: bytes) -> None:
        self.data = data
        self._hash = None

    def __repr__(self) -> str:
        size = len(self.data)
        return f"Blob(hash={self.hash[:7]}, size={size})"


class TreeEntry:
    """
    Represents a single entry in a tree.

    Each entry contains:
    - mode: '40000' for a subtree, the file mode (e.g. '100644') for a blob
    - type: Object type ('blob' or 'tree'), derived from the mode
    - hash: SHA-1 hash of the referenced object
    - name: Single path segment
    """

    def __init__(self, mode: str, obj_hash: str, name: str):
        if not name or '/' in name or '\0' in name:
            raise InvalidPathError(f"Invalid tree entry name: {name!r}")
        self.mode = mode
        self.type = 'tree' if mode == TREE_MODE else 'blob'
        self.hash = obj_hash
        self.name = name

    @property
    def sort_key(self) -> bytes:
        """Byte-wise ordering key used by the canonical serialization."""
        return self.name.encode()

    def __repr__(self) -> str:
        return f"TreeEntry({self.mode} {self.type} {self.hash[:7]} {self.name})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TreeEntry):
            return NotImplemented
        return (self.mode, self.hash, self.name) == (other.mode, other.hash, other.name)

    def __lt__(self, other: 'TreeEntry') -> bool:
        return self.sort_key < other.sort_key


class Tree(WiseObject):
    """
    Represents one directory level.

    A tree contains entries pointing to blobs (files) and other trees
    (subdirectories), always kept sorted by name.
    """

    def __init__(self, entries: Optional[List[TreeEntry]] = None):
        super().__init__()
        self.entries: List[TreeEntry] = sorted(entries or [])

    def serialize(self) -> bytes:
        """
        Serialize tree entries.

        Format: <mode> <name>\\0<20-byte hash>, repeated for each entry
        in byte-wise name order.

        Returns:
            bytes: Serialized tree data
        """
        parts = []
        for entry in sorted(self.entries):
            parts.append(f"{entry.mode} {entry.name}\0".encode())
            parts.append(bytes.fromhex(entry.hash))
        return b''.join(parts)

    def deserialize(self, data: bytes) -> None:
        self.entries = []
        pos = 0

        try:
            while pos < len(data):
                space_pos = data.index(b' ', pos)
                mode = data[pos:space_pos].decode()

                null_pos = data.index(b'\0', space_pos)
                name = data[space_pos + 1:null_pos].decode()

                hash_bytes = data[null_pos + 1:null_pos + 21]
                if len(hash_bytes) != 20:
                    raise CorruptObjectError("Truncated tree entry")

                self.entries.append(TreeEntry(mode, hash_bytes.hex(), name))
                pos = null_pos + 21
        except (ValueError, UnicodeDecodeError) as e:
            raise CorruptObjectError(f"Invalid tree data: {e}") from e

        self.entries.sort()
        self._hash = None

    def __repr__(self) -> str:
        return f"Tree(entries={len(self.entries)})"


class Commit(WiseObject):
    """
    Represents a commit with metadata.

    A commit captures:
    - Snapshot of project (tree hash)
    - Optional parent commit
    - Author and committer info with timestamp
    - Commit message
    """

    def __init__(self):
        super().__init__()
        self.tree: str = ''
        self.parent: Optional[str] = None
        self.author: str = ''
        self.author_time: int = 0
        self.author_timezone: str = '+0000'
        self.committer: str = ''
        self.committer_time: int = 0
        self.committer_timezone: str = '+0000'
        self.message: str = ''

    def serialize(self) -> bytes:
        """
        Serialize commit.

        Format:
        tree <tree-hash>
        parent <parent-hash>  (only when present)
        author Name <email> <timestamp> <timezone>
        committer Name <email> <timestamp> <timezone>

        <commit message>

        Returns:
            bytes: Serialized commit data
        """
        lines = [f'tree {self.tree}']

        if self.parent:
            lines.append(f'parent {self.parent}')

        lines.append(f'author {self.author} {self.author_time} {self.author_timezone}')
        lines.append(f'committer {self.committer} {self.committer_time} {self.committer_timezone}')
        lines.append('')
        lines.append(self.message.rstrip('\n'))

        return ('\n'.join(lines) + '\n').encode()

    def deserialize(self, data: bytes) -> None:
        try:
            content = data.decode()
        except UnicodeDecodeError as e:
            raise CorruptObjectError(f"Invalid commit data: {e}") from e

        header, sep, message = content.partition('\n\n')
        if not sep:
            raise CorruptObjectError("Commit has no message separator")

        try:
            for line in header.split('\n'):
                if line.startswith('tree '):
                    self.tree = line[5:]

                elif line.startswith('parent '):
                    self.parent = line[7:]

                elif line.startswith('author '):
                    parts = line[7:].rsplit(' ', 2)
                    self.author = parts[0]
                    self.author_time = int(parts[1])
                    self.author_timezone = parts[2]

                elif line.startswith('committer '):
                    parts = line[10:].rsplit(' ', 2)
                    self.committer = parts[0]
                    self.committer_time = int(parts[1])
                    self.committer_timezone = parts[2]
        except (IndexError, ValueError) as e:
            raise CorruptObjectError(f"Invalid commit header: {e}") from e

        self.message = message[:-1] if message.endswith('\n') else message
        self._hash = None

    @classmethod
    def create(
        cls,
        tree_hash: str,
        parent_hash: Optional[str],
        author: str,
        committer: str,
        message: str,
        timestamp: Optional[int] = None,
        timezone: str = '+0000'
    ) -> 'Commit':
        """
        Create a new commit.

        Args:
            tree_hash: Hash of tree object
            parent_hash: Parent commit hash, or None for a root commit
            author: Author name and email (e.g., "Name <email>")
            committer: Committer name and email
            message: Commit message
            timestamp: Unix timestamp (defaults to current time)
            timezone: Timezone offset (e.g., "+0000", "-0500")

        Returns:
            Commit: New commit object
        """
        import time

        commit = cls()
        commit.tree = tree_hash
        commit.parent = parent_hash
        commit.author = author
        commit.committer = committer
        commit.message = message

        if timestamp is None:
            timestamp = int(time.time())

        commit.author_time = timestamp
        commit.committer_time = timestamp
        commit.author_timezone = timezone
        commit.committer_timezone = timezone

        return commit

    def __repr__(self) -> str:
        parent_info = f", parent={self.parent[:7]}" if self.parent else ""
        msg_preview = self.message.split('\n')[0][:50]
        return f"Commit(hash={self.hash[:7]}{parent_info}, msg='{msg_preview}')"


OBJECT_TYPES = {
    'blob': Blob,
    'tree': Tree,
    'commit': Commit,
}
