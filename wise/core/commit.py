"""Commit assembly."""

import logging
from typing import Optional

from .objects import Commit
from .store import ObjectStore

logger = logging.getLogger(__name__)


def commit(
    store: ObjectStore,
    tree_id: str,
    parent_id: Optional[str],
    author: str,
    message: str,
    committer: Optional[str] = None,
    timestamp: Optional[int] = None,
    timezone: str = '+0000'
) -> str:
    """
    Write a commit object and return its id.

    Resolving the parent, moving the branch reference and clearing the
    index are left to the caller.

    Args:
        store: Object store to write into
        tree_id: Root tree id
        parent_id: Previous commit on the branch, or None
        author: "Name <email>"
        message: Commit message
        committer: "Name <email>", defaults to author
        timestamp: Unix timestamp (defaults to current time)
        timezone: Timezone offset

    Returns:
        str: 40-character commit id
    """
    commit_obj = Commit.create(
        tree_hash=tree_id,
        parent_hash=parent_id,
        author=author,
        committer=committer or author,
        message=message,
        timestamp=timestamp,
        timezone=timezone
    )
    commit_id = store.write_object(commit_obj)
    logger.debug("Wrote commit %s (tree %s, parent %s)", commit_id[:8], tree_id[:8], parent_id and parent_id[:8])
    return commit_id
