"""Shared pytest fixtures for Wise tests."""

import pytest
import tempfile
import shutil
from pathlib import Path
from click.testing import CliRunner
from wise.core.repository import Repository
from wise.core.store import ObjectStore
from wise.core.index import Index


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep tests away from the user's global config and identity variables."""
    global_config = tmp_path_factory.mktemp('home') / '.wiseconfig'
    monkeypatch.setenv('WISE_GLOBAL_CONFIG', str(global_config))
    monkeypatch.delenv('WISE_USER_NAME', raising=False)
    monkeypatch.delenv('WISE_USER_EMAIL', raising=False)
    return global_config


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def store(temp_dir):
    """Object store in an empty directory."""
    return ObjectStore(temp_dir / 'objects')


@pytest.fixture
def index(temp_dir):
    """Index bound to a file that does not exist yet."""
    return Index(temp_dir / 'index')


@pytest.fixture
def repo(temp_dir):
    """Create an initialized repository."""
    repo = Repository(str(temp_dir))
    repo.init()
    return repo


@pytest.fixture
def repo_with_config(repo):
    """Create a repository with user identity set."""
    repo.config_file.write_text("""[user]
name = Test User
email = test@example.com
""")
    # Config is loaded lazily, drop any cached copy
    repo._config = None
    return repo


@pytest.fixture
def working_files(repo):
    """Create sample file structure in repository."""
    file1 = repo.work_tree / "test1.txt"
    file2 = repo.work_tree / "test2.txt"

    (repo.work_tree / "subdir").mkdir()
    file3 = repo.work_tree / "subdir" / "test3.txt"

    file1.write_text("Content 1")
    file2.write_text("Content 2")
    file3.write_text("Content 3")

    return {
        'file1': file1,
        'file2': file2,
        'file3': file3
    }


@pytest.fixture
def runner():
    """Create CLI runner."""
    return CliRunner()


@pytest.fixture
def cli_repo(runner, tmp_path, monkeypatch):
    """Initialized repository with identity, as the current directory."""
    from wise.cli.main import cli

    monkeypatch.chdir(tmp_path)

    result = runner.invoke(cli, ['init'])
    assert result.exit_code == 0

    runner.invoke(cli, ['config', 'set', 'user.name', 'Test User'])
    runner.invoke(cli, ['config', 'set', 'user.email', 'test@example.com'])

    return tmp_path
