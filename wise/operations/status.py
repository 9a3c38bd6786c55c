"""Working tree status - compare the staging index with the work tree."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List

from wise.core.paths import SKIPPED_DIRS

logger = logging.getLogger(__name__)


@dataclass
class StatusReport:
    """
    Result of comparing the index with the working tree.

    All lists hold repository paths in sorted order.
    """
    staged: List[str] = field(default_factory=list)
    modified: List[str] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)
    untracked: List[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not (self.staged or self.modified or self.deleted or self.untracked)


def walk_work_tree(work_tree: Path) -> List[str]:
    """
    List the files of the working tree as repository paths.

    Hidden entries (including .wise) and dependency/build directories
    are skipped.
    """
    files = []

    def visit(directory: Path) -> None:
        for item in sorted(directory.iterdir()):
            if item.name.startswith('.'):
                continue
            if item.is_dir():
                if item.name not in SKIPPED_DIRS:
                    visit(item)
            elif item.is_file():
                files.append(item.relative_to(work_tree).as_posix())

    visit(work_tree)
    return files


def compute_status(repo) -> StatusReport:
    """
    Classify every staged and working-tree path.

    - staged: in the index, working file matches the staged blob
    - modified: in the index, working file content differs
    - deleted: in the index, working file missing
    - untracked: in the working tree, not in the index

    Args:
        repo: Repository instance
    """
    index_files: Dict[str, str] = {
        entry.path: entry.blob_id for entry in repo.index.load_all()
    }
    working_files = set(walk_work_tree(repo.work_tree))

    report = StatusReport()

    for path, staged_id in index_files.items():
        file_path = repo.work_tree / path
        if not file_path.is_file():
            report.deleted.append(path)
            continue

        try:
            working_id = repo.store.hash('blob', file_path.read_bytes())
        except OSError as e:
            logger.warning("Cannot read %s: %s", path, e)
            continue

        if working_id == staged_id:
            report.staged.append(path)
        else:
            report.modified.append(path)

    report.untracked = [path for path in working_files if path not in index_files]

    report.staged.sort()
    report.modified.sort()
    report.deleted.sort()
    report.untracked.sort()
    return report
