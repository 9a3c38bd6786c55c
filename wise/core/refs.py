"""Reference management for Wise."""

import logging
from pathlib import Path
from typing import Optional, List, Tuple

from wise.utils.atomic import atomic_write
from .errors import InvalidObjectError, InvalidPathError, InvalidRefError
from .hash import is_object_id
from .objects import Commit
from .paths import validate_path

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = 'main'


class RefManager:
    """
    Manages branch references and HEAD.

    Handles:
    - Symbolic HEAD pointing to a branch
    - Branch references (refs/heads/*), one file per branch holding
      the commit id and a trailing newline
    """

    def __init__(self, repo):
        """
        Initialize reference manager.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.wise_dir = repo.wise_dir
        self.heads_dir = repo.heads_dir
        self.head_file = repo.head_file

    def branch_path(self, branch_name: str) -> Path:
        """
        Get the file holding a branch reference.

        Raises:
            InvalidRefError: If the name is not a valid reference path
        """
        try:
            validate_path(branch_name)
        except InvalidPathError as e:
            raise InvalidRefError(f"Invalid branch name: {branch_name!r}") from e
        return self.heads_dir / branch_name

    def read_branch(self, branch_name: str) -> Optional[str]:
        """
        Read the commit id a branch points to.

        Returns:
            Commit id, or None if the branch has no commits yet
        """
        path = self.branch_path(branch_name)
        try:
            content = path.read_text().strip()
        except FileNotFoundError:
            return None

        if not is_object_id(content):
            logger.warning("Ignoring malformed reference %s: %r", branch_name, content)
            return None
        return content

    def update_branch(self, branch_name: str, commit_id: str) -> None:
        """
        Point a branch at a commit, creating it if needed.

        Raises:
            InvalidObjectError: If commit_id is not a commit in the store
        """
        path = self.branch_path(branch_name)

        obj = self.repo.store.read_object(commit_id)
        if not isinstance(obj, Commit):
            raise InvalidObjectError(f"{commit_id} is not a commit")

        atomic_write(path, (commit_id + '\n').encode())
        logger.debug("Updated refs/heads/%s to %s", branch_name, commit_id[:8])

    def current_branch(self) -> str:
        """
        Get the branch HEAD points to.

        Returns:
            Branch name, DEFAULT_BRANCH if HEAD is missing or not symbolic
        """
        try:
            content = self.head_file.read_text().strip()
        except FileNotFoundError:
            return DEFAULT_BRANCH

        if content.startswith('ref: refs/heads/'):
            return content[16:]

        logger.warning("HEAD is not a branch reference, using %s", DEFAULT_BRANCH)
        return DEFAULT_BRANCH

    def set_head(self, branch_name: str) -> None:
        """Make HEAD a symbolic reference to a branch."""
        self.branch_path(branch_name)
        atomic_write(self.head_file, f'ref: refs/heads/{branch_name}\n'.encode())

    def resolve_head(self) -> Optional[str]:
        """
        Resolve HEAD to a commit id.

        Returns:
            Commit id or None if the current branch has no commits
        """
        return self.read_branch(self.current_branch())

    def list_branches(self) -> List[Tuple[str, str]]:
        """
        List all branches.

        Returns:
            List of (branch_name, commit_id) tuples
        """
        if not self.heads_dir.exists():
            return []

        branches = []
        for branch_file in self.heads_dir.rglob('*'):
            if branch_file.is_file() and not branch_file.name.startswith('.'):
                branch_name = branch_file.relative_to(self.heads_dir).as_posix()
                commit_id = self.read_branch(branch_name)
                if commit_id:
                    branches.append((branch_name, commit_id))

        return sorted(branches, key=lambda x: x[0])
