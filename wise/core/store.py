"""Content-addressed object store for Wise.

Objects are stored under ``<root>/objects/`` with a two-character sharded
layout::

    objects/<id[:2]>/<id[2:]>

Each file holds the zlib-compressed bytes of ``<kind> <len>\\0<payload>``.
The identifier is computed over the uncompressed bytes, so compression never
affects identity. Writing the same object twice is a no-op.
"""

import logging
import zlib
from pathlib import Path
from typing import Iterator, Union

from wise.utils.atomic import atomic_write
from .errors import CorruptObjectError, InvalidObjectError, ObjectNotFoundError
from .hash import OBJECT_KINDS, is_object_id, object_header, object_id
from .objects import OBJECT_TYPES, WiseObject

logger = logging.getLogger(__name__)


class ObjectStore:
    """
    Loose-object database rooted at an objects directory.

    Every operation goes through an explicit store instance, so several
    repositories can be used side by side in one process.
    """

    def __init__(self, objects_dir: Union[str, Path]):
        """
        Initialize object store.

        Args:
            objects_dir: Directory holding the object shards
        """
        self.objects_dir = Path(objects_dir)

    def object_path(self, obj_id: str) -> Path:
        """
        Get filesystem path for an object.

        Objects are stored in subdirectories named by the first 2 characters
        of the id, with the remaining 38 characters as the filename.

        Args:
            obj_id: 40-character hex id

        Returns:
            Path: Full path to object file
        """
        if not is_object_id(obj_id):
            raise InvalidObjectError(f"Invalid object id: {obj_id!r}")
        return self.objects_dir / obj_id[:2] / obj_id[2:]

    def hash(self, kind: str, payload: bytes) -> str:
        """Compute the id an object would get, without writing it."""
        self._check_kind(kind)
        return object_id(kind, payload)

    def put(self, kind: str, payload: bytes) -> str:
        """
        Store a typed payload and return its id.

        If an object with the same id already exists it is not rewritten;
        its content is byte-identical by construction.

        Args:
            kind: Object kind ('blob', 'tree' or 'commit')
            payload: Raw object payload

        Returns:
            str: 40-character hex id

        Raises:
            InvalidObjectError: If kind is unknown
            OSError: If the object cannot be written
        """
        self._check_kind(kind)

        content = object_header(kind, len(payload)) + payload
        obj_id = object_id(kind, payload)
        path = self.object_path(obj_id)

        if path.exists():
            logger.debug("Object %s already in store, skipped", obj_id[:8])
            return obj_id

        atomic_write(path, zlib.compress(content))
        logger.debug("Stored %s %s (%d bytes)", kind, obj_id[:8], len(payload))
        return obj_id

    def write_object(self, obj: WiseObject) -> str:
        """
        Write a Wise object to the store.

        Args:
            obj: Blob, Tree or Commit

        Returns:
            str: 40-character hex id
        """
        return self.put(obj.type, obj.serialize())

    def read_raw(self, obj_id: str) -> tuple[str, bytes]:
        """
        Read an object's kind and payload.

        Args:
            obj_id: 40-character hex id

        Returns:
            Tuple of (kind, payload)

        Raises:
            ObjectNotFoundError: If the object is not in the store
            CorruptObjectError: If the stored bytes are not a valid object
        """
        path = self.object_path(obj_id)

        try:
            compressed = path.read_bytes()
        except FileNotFoundError:
            raise ObjectNotFoundError(f"Object {obj_id} not found")

        try:
            content = zlib.decompress(compressed)
        except zlib.error as e:
            raise CorruptObjectError(f"Object {obj_id} is not valid zlib data: {e}") from e

        null_idx = content.find(b'\0')
        if null_idx == -1:
            raise CorruptObjectError(f"Object {obj_id} has no header")

        header = content[:null_idx].decode(errors='replace')
        payload = content[null_idx + 1:]

        try:
            kind, size_str = header.split(' ', 1)
            size = int(size_str)
        except ValueError:
            raise CorruptObjectError(f"Invalid object header: {header}")

        if kind not in OBJECT_KINDS:
            raise CorruptObjectError(f"Unknown object type: {kind}")

        if len(payload) != size:
            raise CorruptObjectError(
                f"Object size mismatch: expected {size}, got {len(payload)}"
            )

        return kind, payload

    def read_object(self, obj_id: str) -> WiseObject:
        """
        Read and deserialize an object.

        Returns:
            WiseObject: Blob, Tree or Commit
        """
        kind, payload = self.read_raw(obj_id)
        obj = OBJECT_TYPES[kind]()
        obj.deserialize(payload)
        return obj

    def contains(self, obj_id: str) -> bool:
        """Check if object exists in the store."""
        if not is_object_id(obj_id):
            return False
        return self.object_path(obj_id).exists()

    def __contains__(self, obj_id: str) -> bool:
        return self.contains(obj_id)

    def iter_ids(self) -> Iterator[str]:
        """Yield the id of every stored object, in shard order."""
        if not self.objects_dir.exists():
            return

        for subdir in sorted(self.objects_dir.iterdir()):
            if not subdir.is_dir() or len(subdir.name) != 2:
                continue
            for obj_file in sorted(subdir.iterdir()):
                obj_id = subdir.name + obj_file.name
                if is_object_id(obj_id):
                    yield obj_id

    def resolve_prefix(self, prefix: str) -> str:
        """
        Resolve an abbreviated id to a full id.

        Args:
            prefix: At least 4 hex characters

        Returns:
            str: Full 40-character id

        Raises:
            ObjectNotFoundError: If no object or more than one object matches
        """
        prefix = prefix.lower()
        if is_object_id(prefix):
            if not self.contains(prefix):
                raise ObjectNotFoundError(f"Object {prefix} not found")
            return prefix

        if len(prefix) < 4 or not all(c in '0123456789abcdef' for c in prefix):
            raise ObjectNotFoundError(f"Not a valid object name: {prefix}")

        subdir = self.objects_dir / prefix[:2]
        matches = []
        if subdir.is_dir():
            for obj_file in subdir.iterdir():
                full_id = prefix[:2] + obj_file.name
                if full_id.startswith(prefix) and is_object_id(full_id):
                    matches.append(full_id)

        if not matches:
            raise ObjectNotFoundError(f"Object {prefix} not found")
        if len(matches) > 1:
            raise ObjectNotFoundError(f"Ambiguous object name: {prefix}")
        return matches[0]

    @staticmethod
    def _check_kind(kind: str) -> None:
        if kind not in OBJECT_KINDS:
            raise InvalidObjectError(f"Unknown object kind: {kind!r}")

    def __repr__(self) -> str:
        return f"ObjectStore(path={self.objects_dir})"
