"""Repository tests."""

import os
import pytest
from pathlib import Path
from wise.core.repository import Repository
from wise.core.objects import Commit
from wise.core.tree_builder import EMPTY_TREE_ID
from wise.core.errors import (
    RepositoryExistsError,
    NothingToCommitError,
    MissingIdentityError,
    EmptyMessageError,
    InvalidPathError,
)


def test_repository_init(repo):
    """Test repository initialization creates structure."""
    assert repo.wise_dir.is_dir()
    assert repo.objects_dir.is_dir()
    assert repo.heads_dir.is_dir()
    assert repo.head_file.read_text() == 'ref: refs/heads/main\n'
    assert repo.config_file.exists()


def test_repository_init_twice(repo):
    """Initializing an existing repository fails."""
    with pytest.raises(RepositoryExistsError):
        Repository(str(repo.work_tree)).init()


def test_find_repository(repo):
    """Search walks up from a subdirectory."""
    nested = repo.work_tree / 'a' / 'b'
    nested.mkdir(parents=True)

    found = Repository.find_repository(str(nested))
    assert found.work_tree == repo.work_tree


def test_find_repository_none(temp_dir):
    """No .wise directory anywhere above means no repository."""
    assert Repository.find_repository(str(temp_dir)) is None


def test_add_file(repo):
    """Adding a file stores its blob and stages it."""
    path = repo.work_tree / 'hello.txt'
    path.write_bytes(b'hello world\n')

    blob_id = repo.add_file(path)

    assert blob_id == '3b18e512dba79e4c8300dd08aeb37f8e728b8dad'
    assert blob_id in repo.store
    assert repo.index.get('hello.txt').blob_id == blob_id
    assert repo.index.get('hello.txt').mode == '100644'


def test_add_relative_nested_path(repo):
    """Nested files are staged with slash-separated paths."""
    (repo.work_tree / 'src').mkdir()
    (repo.work_tree / 'src' / 'app.js').write_text('x')

    repo.add_file('src/app.js')

    assert [e.path for e in repo.index.load_all()] == ['src/app.js']


def test_add_directory(repo, working_files):
    """Directories are staged recursively."""
    (repo.work_tree / '.secret').write_text('hidden')

    staged = repo.add(repo.work_tree)

    assert sorted(staged) == ['subdir/test3.txt', 'test1.txt', 'test2.txt']
    assert len(repo.index) == 3


def test_add_missing_file(repo):
    """Unreadable sources are I/O errors."""
    with pytest.raises(FileNotFoundError):
        repo.add_file('missing.txt')


def test_add_outside_work_tree(repo, tmp_path):
    """Files outside the work tree cannot be staged."""
    outside = tmp_path / 'outside.txt'
    outside.write_text('x')

    with pytest.raises(InvalidPathError):
        repo.add_file(outside)


def test_add_repository_metadata(repo):
    """Files under .wise cannot be staged."""
    with pytest.raises(InvalidPathError):
        repo.add_file(repo.config_file)


def test_restage_same_content(repo):
    """Re-adding unchanged content keeps a single, correct entry."""
    path = repo.work_tree / 'f.txt'
    path.write_text('same')

    first = repo.add_file(path)
    second = repo.add_file(path)

    assert first == second
    assert repo.index.load_all()[0].blob_id == first
    assert len(list(repo.store.iter_ids())) == 1


def test_restage_new_content(repo):
    """Staging X then Y for a path leaves one entry bearing Y."""
    (repo.work_tree / 'a' / 'b').mkdir(parents=True)
    path = repo.work_tree / 'a' / 'b' / 'c.txt'

    path.write_text('X')
    repo.add_file(path)
    path.write_text('Y')
    y_id = repo.add_file(path)

    entries = repo.index.load_all()
    assert len(entries) == 1
    assert entries[0].path == 'a/b/c.txt'
    assert entries[0].blob_id == y_id


def test_write_tree_empty_index(repo):
    """An empty index builds the empty tree."""
    assert repo.write_tree() == EMPTY_TREE_ID


def test_commit(repo_with_config):
    """Commit writes the object, moves the branch and clears the index."""
    repo = repo_with_config
    (repo.work_tree / 'README.md').write_text('# hi')
    repo.add_file('README.md')
    tree_id = repo.write_tree()

    commit_id = repo.commit('Initial commit', timestamp=1700000000)

    obj = repo.read_object(commit_id)
    assert isinstance(obj, Commit)
    assert obj.tree == tree_id
    assert obj.parent is None
    assert obj.author == 'Test User <test@example.com>'
    assert obj.message == 'Initial commit'
    assert repo.refs.read_branch('main') == commit_id
    assert repo.index.load_all() == []


def test_commit_chaining(repo_with_config):
    """The second commit's parent is the first commit."""
    repo = repo_with_config
    path = repo.work_tree / 'file.txt'

    path.write_text('version 1')
    repo.add_file(path)
    first = repo.commit('First commit')

    path.write_text('version 2')
    repo.add_file(path)
    second = repo.commit('Second commit')

    assert repo.read_object(second).parent == first
    assert repo.refs.resolve_head() == second


def test_commit_on_named_branch(repo_with_config):
    """Commits can target a branch other than HEAD's."""
    repo = repo_with_config
    (repo.work_tree / 'f').write_text('x')
    repo.add_file('f')

    commit_id = repo.commit('On feature', branch='feature')

    assert repo.refs.read_branch('feature') == commit_id
    assert repo.refs.read_branch('main') is None


def test_commit_nothing_staged(repo_with_config):
    """An empty index is a precondition failure."""
    with pytest.raises(NothingToCommitError):
        repo_with_config.commit('Nothing')


def test_commit_after_commit_needs_new_stage(repo_with_config):
    """The cleared index cannot be committed again."""
    repo = repo_with_config
    (repo.work_tree / 'f').write_text('x')
    repo.add_file('f')
    repo.commit('First')

    with pytest.raises(NothingToCommitError):
        repo.commit('Second')


def test_commit_empty_message(repo_with_config):
    """Messages must not be blank."""
    repo = repo_with_config
    (repo.work_tree / 'f').write_text('x')
    repo.add_file('f')

    with pytest.raises(EmptyMessageError):
        repo.commit('   ')
    assert len(repo.index) == 1


def test_commit_missing_identity(repo):
    """Without user.name/user.email nothing is committed."""
    (repo.work_tree / 'f').write_text('x')
    repo.add_file('f')

    with pytest.raises(MissingIdentityError):
        repo.commit('msg')

    assert repo.refs.read_branch('main') is None
    assert len(repo.index) == 1


def test_commit_explicit_author(repo):
    """An explicit author needs no configuration."""
    (repo.work_tree / 'f').write_text('x')
    repo.add_file('f')

    commit_id = repo.commit('msg', author='Jane <jane@example.com>')

    assert repo.read_object(commit_id).author == 'Jane <jane@example.com>'


def test_repositories_are_isolated(tmp_path):
    """Two repositories in one process do not share state."""
    first = Repository(str(tmp_path / 'one')).init()
    second = Repository(str(tmp_path / 'two')).init()

    (first.work_tree / 'f').write_text('x')
    first.add_file('f')

    assert len(first.index) == 1
    assert len(second.index) == 0
    assert list(second.store.iter_ids()) == []


def test_add_directory_outside_work_tree(repo, tmp_path):
    """Directories outside the work tree cannot be staged."""
    outside = tmp_path / 'elsewhere'
    outside.mkdir()
    (outside / 'f.txt').write_text('x')

    with pytest.raises(InvalidPathError):
        repo.add(outside)


def test_add_symlink_keeps_link_name(repo):
    """A symlink is staged under its own path, not its target's."""
    (repo.work_tree / 'real.txt').write_text('target')
    os.symlink('real.txt', repo.work_tree / 'link.txt')

    repo.add('link.txt')

    assert [e.path for e in repo.index.load_all()] == ['link.txt']
    assert 'link.txt' not in repo.status().untracked


def test_add_directory_with_unstageable_name(repo):
    """A bad name anywhere in a directory stages nothing."""
    directory = repo.work_tree / 'd'
    directory.mkdir()
    (directory / 'a.txt').write_text('a')
    (directory / 'b\nc.txt').write_text('b')
    (directory / 'z.txt').write_text('z')

    with pytest.raises(InvalidPathError):
        repo.add('d')

    assert repo.index.load_all() == []


def test_add_directory_skips_dependency_dirs(repo):
    """node_modules and dist are skipped, matching status."""
    for name in ('node_modules', 'dist'):
        (repo.work_tree / name).mkdir()
        (repo.work_tree / name / 'bundle.js').write_text('x')
    (repo.work_tree / 'main.js').write_text('x')

    staged = repo.add(repo.work_tree)

    assert staged == ['main.js']
    assert repo.status().staged == ['main.js']
