"""Status command - show working tree status."""

import click
from colorama import Fore, Style
from wise.core.repository import Repository
from wise.core.errors import WiseError
from wise.cli.output import success, error, info


@click.command('status')
def status_cmd():
    """
    Show the working tree status.

    Displays:
    - Changes staged for commit (in index)
    - Changes not staged for commit (modified or deleted files)
    - Untracked files (files not in index)

    Examples:
        wise status
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a wise repository"))
        raise click.Abort()

    try:
        report = repo.status()
    except (WiseError, OSError) as e:
        click.echo(error(f"status failed: {e}"))
        raise click.Abort()

    click.echo(f"On branch {Fore.CYAN}{repo.refs.current_branch()}{Style.RESET_ALL}")
    click.echo()

    if report.staged:
        click.echo(Fore.GREEN + "Changes to be committed:" + Style.RESET_ALL)
        for path in report.staged:
            click.echo(f"  {Fore.GREEN}staged:     {path}{Style.RESET_ALL}")
        click.echo()

    if report.modified or report.deleted:
        click.echo(Fore.YELLOW + "Changes not staged for commit:" + Style.RESET_ALL)
        click.echo(info("  (use \"wise add <file>...\" to update what will be committed)"))
        for path in report.modified:
            click.echo(f"  {Fore.YELLOW}modified:   {path}{Style.RESET_ALL}")
        for path in report.deleted:
            click.echo(f"  {Fore.YELLOW}deleted:    {path}{Style.RESET_ALL}")
        click.echo()

    if report.untracked:
        click.echo(Fore.RED + "Untracked files:" + Style.RESET_ALL)
        click.echo(info("  (use \"wise add <file>...\" to include in what will be committed)"))
        for path in report.untracked:
            click.echo(f"  {Fore.RED}{path}{Style.RESET_ALL}")
        click.echo()

    if report.is_clean:
        click.echo(success("Nothing to commit, working tree clean"))
