"""Integration tests for add and commit workflow."""

from pathlib import Path
from wise.cli.main import cli
from wise.core.repository import Repository


def last_line(result):
    return result.output.strip().splitlines()[-1]


def test_add_and_commit_single_file(runner, cli_repo):
    """Test adding and committing a single file."""
    Path('test.txt').write_text('hello world')

    result = runner.invoke(cli, ['add', 'test.txt'])
    assert result.exit_code == 0
    assert 'Added 1 file(s)' in result.output

    result = runner.invoke(cli, ['commit', '-m', 'Initial commit'])
    assert result.exit_code == 0
    assert 'Initial commit' in result.output

    commit_id = last_line(result)
    assert (cli_repo / '.wise' / 'refs' / 'heads' / 'main').read_text() == commit_id + '\n'


def test_commit_clears_index(runner, cli_repo):
    """After a commit the index is empty."""
    Path('test.txt').write_text('hello')
    runner.invoke(cli, ['add', 'test.txt'])
    runner.invoke(cli, ['commit', '-m', 'Initial commit'])

    repo = Repository(str(cli_repo))
    assert repo.index.load_all() == []


def test_commit_chain(runner, cli_repo):
    """Commits on the same branch link to their parent."""
    Path('file.txt').write_text('version 1')
    runner.invoke(cli, ['add', 'file.txt'])
    first = last_line(runner.invoke(cli, ['commit', '-m', 'First commit']))

    Path('file.txt').write_text('version 2')
    runner.invoke(cli, ['add', 'file.txt'])
    second = last_line(runner.invoke(cli, ['commit', '-m', 'Second commit']))

    repo = Repository(str(cli_repo))
    assert repo.read_object(second).parent == first
    assert repo.read_object(first).parent is None


def test_add_directory(runner, cli_repo):
    """Directories are added recursively."""
    Path('src/lib').mkdir(parents=True)
    Path('src/main.py').write_text('# main')
    Path('src/lib/utils.py').write_text('# utils')

    result = runner.invoke(cli, ['add', 'src'])

    assert result.exit_code == 0
    assert 'Added 2 file(s)' in result.output
    assert 'src/lib/utils.py' in result.output


def test_add_missing_file(runner, cli_repo):
    """Missing files are reported and the command fails."""
    result = runner.invoke(cli, ['add', 'missing.txt'])

    assert result.exit_code != 0
    assert 'File not found' in result.output


def test_commit_nothing_staged(runner, cli_repo):
    """Committing an empty index fails."""
    result = runner.invoke(cli, ['commit', '-m', 'Empty'])

    assert result.exit_code != 0
    assert 'Nothing to commit' in result.output


def test_commit_without_identity(runner, tmp_path, monkeypatch):
    """Identity must be configured or passed with --author."""
    monkeypatch.chdir(tmp_path)
    runner.invoke(cli, ['init'])
    Path('f.txt').write_text('x')
    runner.invoke(cli, ['add', 'f.txt'])

    result = runner.invoke(cli, ['commit', '-m', 'msg'])
    assert result.exit_code != 0
    assert 'Author information not configured' in result.output

    result = runner.invoke(cli, ['commit', '-m', 'msg', '--author', 'Jane <jane@example.com>'])
    assert result.exit_code == 0


def test_commit_bad_author(runner, cli_repo):
    """--author must look like 'Name <email>'."""
    Path('f.txt').write_text('x')
    runner.invoke(cli, ['add', 'f.txt'])

    result = runner.invoke(cli, ['commit', '-m', 'msg', '--author', 'no-email'])

    assert result.exit_code != 0


def test_status(runner, cli_repo):
    """status lists staged, modified and untracked files."""
    Path('staged.txt').write_text('a')
    Path('changed.txt').write_text('b')
    Path('new.txt').write_text('c')
    runner.invoke(cli, ['add', 'staged.txt', 'changed.txt'])
    Path('changed.txt').write_text('b2')

    result = runner.invoke(cli, ['status'])

    assert result.exit_code == 0
    assert 'On branch main' in result.output
    assert 'staged:     staged.txt' in result.output
    assert 'modified:   changed.txt' in result.output
    assert 'Untracked files:' in result.output
    assert 'new.txt' in result.output


def test_status_clean(runner, cli_repo):
    """An empty work tree and index is clean."""
    result = runner.invoke(cli, ['status'])

    assert 'Nothing to commit, working tree clean' in result.output


def test_status_read_error(runner, cli_repo, monkeypatch):
    """I/O errors while computing status are reported."""
    def failing_status(self):
        raise OSError("disk unreadable")

    monkeypatch.setattr(Repository, 'status', failing_status)

    result = runner.invoke(cli, ['status'])

    assert result.exit_code != 0
    assert 'status failed: disk unreadable' in result.output
    assert not isinstance(result.exception, OSError)
