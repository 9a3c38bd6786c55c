"""Add command - stage files for commit."""

import click
from pathlib import Path
from wise.core.repository import Repository
from wise.core.errors import WiseError
from wise.cli.output import success, error, info


@click.command('add')
@click.argument('paths', nargs=-1, required=True)
def add_cmd(paths):
    """
    Add file contents to the staging area.

    Stage files for the next commit. Modified files must be added
    again to stage the new changes. Directories are added recursively,
    skipping hidden files.

    Examples:
        wise add file.txt
        wise add src
        wise add .
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a wise repository"))
        raise click.Abort()

    added_files = []
    failed_files = []

    for path_pattern in paths:
        resolved_path = Path(path_pattern)
        if not resolved_path.is_absolute():
            resolved_path = Path.cwd() / resolved_path

        if not resolved_path.exists():
            failed_files.append((path_pattern, "File not found"))
            continue

        try:
            added_files.extend(repo.add(resolved_path))
        except (WiseError, OSError) as e:
            failed_files.append((path_pattern, str(e)))

    if added_files:
        click.echo(success(f"Added {len(added_files)} file(s) to staging area"))
        for file in added_files:
            click.echo(info(f"  {file}"))

    if failed_files:
        click.echo(error(f"Failed to add {len(failed_files)} file(s):"))
        for file, reason in failed_files:
            click.echo(error(f"  {file}: {reason}"))
        raise click.Abort()

    if not added_files:
        click.echo(error("No files matched"))
        raise click.Abort()
