"""Build nested tree objects from the flat staging index."""

import logging
from typing import Dict, Iterable, List, NamedTuple, Tuple

from .errors import TreeConflictError
from .index import IndexEntry
from .objects import TREE_MODE, Tree, TreeEntry
from .paths import split_path
from .store import ObjectStore

logger = logging.getLogger(__name__)

EMPTY_TREE_ID = '4b825dc642cb6eb9a060e54bf8d69288fbee4904'


class _Staged(NamedTuple):
    """An index entry with its path split into the segments left to place."""
    parts: Tuple[str, ...]
    mode: str
    blob_id: str
    path: str


class TreeBuilder:
    """
    Turns index entries into a hierarchy of tree objects.

    One tree is written per directory level, children before parents.
    Each tree's entries are sorted byte-wise by name, so the root id
    depends only on the set of (path, mode, blob id) entries and never
    on the order they were staged in.
    """

    def __init__(self, store: ObjectStore):
        self.store = store

    def build(self, entries: Iterable[IndexEntry]) -> str:
        """
        Write the trees for entries and return the root tree id.

        An empty entry list yields the empty tree.

        Raises:
            InvalidPathError: If an entry path has empty or relative segments
            TreeConflictError: If a path is staged both as a file and as a
                directory, or twice
        """
        staged = [
            _Staged(tuple(split_path(entry.path)), entry.mode, entry.blob_id, entry.path)
            for entry in entries
        ]
        root_id = self._build_level(staged, '')
        logger.debug("Built root tree %s from %d entries", root_id[:8], len(staged))
        return root_id

    def _build_level(self, staged: List[_Staged], base: str) -> str:
        files: Dict[str, _Staged] = {}
        subdirs: Dict[str, List[_Staged]] = {}

        for item in staged:
            name = item.parts[0]
            if len(item.parts) == 1:
                if name in files:
                    raise TreeConflictError(f"Path staged twice: {item.path}")
                files[name] = item
            else:
                subdirs.setdefault(name, []).append(item._replace(parts=item.parts[1:]))

        conflicts = files.keys() & subdirs.keys()
        if conflicts:
            name = sorted(conflicts)[0]
            raise TreeConflictError(
                f"{base}{name} is staged both as a file and as a directory"
            )

        tree_entries = [
            TreeEntry(item.mode, item.blob_id, name)
            for name, item in files.items()
        ]

        for name, children in subdirs.items():
            subtree_id = self._build_level(children, f"{base}{name}/")
            tree_entries.append(TreeEntry(TREE_MODE, subtree_id, name))

        tree_id = self.store.write_object(Tree(tree_entries))
        logger.debug("Wrote tree %s for %s/ (%d entries)", tree_id[:8], base.rstrip('/'), len(tree_entries))
        return tree_id


def write_tree(store: ObjectStore, entries: Iterable[IndexEntry]) -> str:
    """Build and store the trees for entries; return the root tree id."""
    return TreeBuilder(store).build(entries)
