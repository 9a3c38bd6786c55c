"""Repository management for Wise."""

import logging
from pathlib import Path
from typing import List, Optional

from .commit import commit as assemble_commit
from .config import Config
from .errors import (
    EmptyMessageError,
    InvalidPathError,
    MissingIdentityError,
    NothingToCommitError,
    RepositoryExistsError,
)
from .index import Index
from .objects import FILE_MODE, WiseObject
from .paths import is_skipped, to_repo_path
from .refs import DEFAULT_BRANCH, RefManager
from .store import ObjectStore
from .tree_builder import write_tree as build_trees

logger = logging.getLogger(__name__)

WISE_DIR = '.wise'


class Repository:
    """
    Represents a Wise repository.

    A repository is an explicit handle on one .wise directory: its object
    store, staging index, references and configuration. Nothing is global,
    so any number of repositories can be open at once.
    """

    def __init__(self, path: str = '.'):
        """
        Initialize repository.

        Args:
            path: Path to repository root (defaults to current directory)
        """
        self.work_tree = Path(path).resolve()
        self.wise_dir = self.work_tree / WISE_DIR
        self.objects_dir = self.wise_dir / 'objects'
        self.refs_dir = self.wise_dir / 'refs'
        self.heads_dir = self.refs_dir / 'heads'
        self.head_file = self.wise_dir / 'HEAD'
        self.index_file = self.wise_dir / 'index'
        self.config_file = self.wise_dir / 'config'

        self.store = ObjectStore(self.objects_dir)
        self.index = Index(self.index_file)
        self._ref_manager = None
        self._config = None

    @property
    def refs(self) -> RefManager:
        """Get RefManager instance."""
        if self._ref_manager is None:
            self._ref_manager = RefManager(self)
        return self._ref_manager

    @property
    def config(self) -> Config:
        """Get Config instance."""
        if self._config is None:
            self._config = Config(self.config_file)
        return self._config

    def init(self) -> 'Repository':
        """
        Initialize a new repository.

        Creates the .wise directory structure:
        .wise/
        ├── objects/       # Object database
        ├── refs/
        │   └── heads/     # Branch references
        ├── HEAD           # Current branch
        ├── index          # Staging area (created on first add)
        └── config         # Repository configuration

        Returns:
            Repository: self for method chaining

        Raises:
            RepositoryExistsError: If repository already exists
        """
        if self.wise_dir.exists():
            raise RepositoryExistsError(f"Repository already exists at {self.wise_dir}")

        self.work_tree.mkdir(parents=True, exist_ok=True)
        self.wise_dir.mkdir()
        self.objects_dir.mkdir()
        self.refs_dir.mkdir()
        self.heads_dir.mkdir()

        self.refs.set_head(DEFAULT_BRANCH)
        self.config_file.write_text('[core]\nrepositoryformatversion = 0\n\n')

        logger.debug("Initialized repository at %s", self.wise_dir)
        return self

    @classmethod
    def find_repository(cls, path: str = '.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.

        Args:
            path: Starting path for search

        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            if (current / WISE_DIR).is_dir():
                return cls(str(current))

            if current == current.parent:
                return None

            current = current.parent

    def write_object(self, obj: WiseObject) -> str:
        """Write object to the repository's store."""
        return self.store.write_object(obj)

    def read_object(self, obj_id: str) -> WiseObject:
        """Read object from the repository's store."""
        return self.store.read_object(obj_id)

    def add_file(self, file_path) -> str:
        """
        Store a file as a blob and stage it.

        Args:
            file_path: Absolute path, or path relative to the work tree

        Returns:
            str: Blob id of the staged content

        Raises:
            InvalidPathError: If the file is outside the work tree
            OSError: If the file cannot be read
        """
        file_path = Path(file_path)
        if not file_path.is_absolute():
            file_path = self.work_tree / file_path

        return self._stage(file_path, self._repo_path(file_path))

    def _repo_path(self, file_path: Path) -> str:
        rel_path = to_repo_path(self.work_tree, file_path)
        if rel_path.split('/')[0] == WISE_DIR:
            raise InvalidPathError(f"Cannot stage repository metadata: {rel_path}")
        return rel_path

    def _stage(self, file_path: Path, rel_path: str) -> str:
        data = file_path.read_bytes()

        blob_id = self.store.put('blob', data)
        self.index.stage(rel_path, FILE_MODE, blob_id)
        logger.debug("Staged %s as %s", rel_path, blob_id[:8])
        return blob_id

    def add(self, path) -> List[str]:
        """
        Stage a file or, recursively, every file in a directory.

        Hidden entries and dependency/build directories are skipped when
        walking a directory, as in status. Every path in the directory is
        checked before anything is staged, so an unstageable name leaves
        the index untouched.

        Returns:
            List of staged repository paths

        Raises:
            InvalidPathError: If a path is outside the work tree or cannot
                be stored in the index
        """
        path = Path(path)
        if not path.is_absolute():
            path = self.work_tree / path

        if not path.is_dir():
            rel_path = self._repo_path(path)
            self._stage(path, rel_path)
            return [rel_path]

        path = path.resolve()
        if path != self.work_tree and self.work_tree not in path.parents:
            raise InvalidPathError(f"Path is outside the work tree: {path}")

        pending = []
        for file_path in sorted(path.rglob('*')):
            if is_skipped(file_path.relative_to(self.work_tree).parts):
                continue
            if file_path.is_file():
                pending.append((file_path, self._repo_path(file_path)))

        for file_path, rel_path in pending:
            self._stage(file_path, rel_path)
        return [rel_path for _, rel_path in pending]

    def write_tree(self) -> str:
        """
        Build trees from the staged entries.

        Returns:
            str: Root tree id
        """
        return build_trees(self.store, self.index.load_all())

    def author_identity(self) -> str:
        """
        Author line from config.

        Raises:
            MissingIdentityError: If user.name or user.email is unset
        """
        name, email = self.config.get_user_identity()
        if not name or not email:
            raise MissingIdentityError(
                "user.name and user.email must be set before committing"
            )
        return f"{name} <{email}>"

    def commit(
        self,
        message: str,
        branch: Optional[str] = None,
        author: Optional[str] = None,
        timestamp: Optional[int] = None
    ) -> str:
        """
        Commit the staged entries on a branch.

        The branch's current commit becomes the parent. After the commit
        is written the branch is moved to it and the index is cleared.

        Args:
            message: Commit message
            branch: Branch to commit on (defaults to HEAD's branch)
            author: "Name <email>" (defaults to configured identity)
            timestamp: Unix timestamp (defaults to current time)

        Returns:
            str: Commit id

        Raises:
            NothingToCommitError: If nothing is staged
            EmptyMessageError: If message is empty
            MissingIdentityError: If no author is given or configured
        """
        entries = self.index.load_all()
        if not entries:
            raise NothingToCommitError("Nothing staged to commit")

        if not message or not message.strip():
            raise EmptyMessageError("Commit message must not be empty")

        author = author or self.author_identity()
        branch = branch or self.refs.current_branch()
        parent_id = self.refs.read_branch(branch)

        tree_id = build_trees(self.store, entries)
        commit_id = assemble_commit(
            self.store,
            tree_id=tree_id,
            parent_id=parent_id,
            author=author,
            message=message,
            timestamp=timestamp
        )

        self.refs.update_branch(branch, commit_id)
        self.index.clear()

        logger.debug("Committed %s on %s", commit_id[:8], branch)
        return commit_id

    def status(self):
        """Compare the index with the working tree."""
        from wise.operations.status import compute_status
        return compute_status(self)

    def __repr__(self) -> str:
        return f"Repository(path={self.work_tree})"
