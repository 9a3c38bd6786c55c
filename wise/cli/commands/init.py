"""Initialize a new Wise repository."""

import click
from pathlib import Path
from wise.core.repository import Repository, WISE_DIR
from wise.core.errors import RepositoryExistsError
from wise.cli.output import success, error, info


@click.command('init')
@click.argument('path', default='.')
def init_cmd(path):
    """
    Initialize a new Wise repository.

    Creates a .wise directory with the object database, branch
    references, HEAD and config.

    Examples:
        wise init                    # Initialize in current directory
        wise init my-project         # Initialize in my-project directory
    """
    repo_path = Path(path).resolve()

    try:
        if not repo_path.exists():
            repo_path.mkdir(parents=True)
            click.echo(info(f"Created directory {repo_path}"))

        repo = Repository(str(repo_path))
        repo.init()
    except RepositoryExistsError:
        click.echo(error(f"Repository already exists at {repo_path / WISE_DIR}"))
        raise click.Abort()
    except PermissionError:
        click.echo(error(f"Permission denied: Cannot create repository at {path}"))
        raise click.Abort()
    except OSError as e:
        click.echo(error(f"Failed to initialize repository: {e}"))
        raise click.Abort()

    click.echo(success(f"Initialized empty Wise repository in {repo.wise_dir}"))
    click.echo(info("You can now start tracking files with:"))
    click.echo(info("  wise add <file>"))
    click.echo(info("  wise commit -m 'message'"))
