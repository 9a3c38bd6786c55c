"""Core functionality for Wise.

This module contains the core data structures:
- Wise objects (Blob, Tree, Commit)
- Content-addressed object store
- Index/staging area
- Tree building and commit assembly
- Reference and configuration management

For working tree status, see wise.operations
"""

from wise.core.objects import WiseObject, Blob, Tree, TreeEntry, Commit
from wise.core.hash import hash_object, object_id
from wise.core.store import ObjectStore
from wise.core.index import Index, IndexEntry
from wise.core.tree_builder import TreeBuilder, EMPTY_TREE_ID
from wise.core.refs import RefManager
from wise.core.config import Config
from wise.core.repository import Repository

__all__ = [
    'WiseObject',
    'Blob',
    'Tree',
    'TreeEntry',
    'Commit',
    'ObjectStore',
    'Index',
    'IndexEntry',
    'TreeBuilder',
    'EMPTY_TREE_ID',
    'RefManager',
    'Config',
    'Repository',
    'hash_object',
    'object_id',
]
