"""Commit command - create a commit from staged changes."""

import re

import click
from wise.core.repository import Repository
from wise.core.errors import (
    EmptyMessageError,
    MissingIdentityError,
    NothingToCommitError,
    WiseError,
)
from wise.cli.output import success, error, info, short_id

AUTHOR_PATTERN = re.compile(r'^[^<>]+ <[^<>]+>$')


@click.command('commit')
@click.option('-m', '--message', required=True, help='Commit message')
@click.option('--author', help='Author name and email (format: "Name <email>")')
@click.option('-b', '--branch', help='Branch to commit on (defaults to the current branch)')
def commit_cmd(message, author, branch):
    """
    Record changes to the repository.

    Creates a commit from the staged changes in the index, moves the
    branch to it and empties the index.

    Examples:
        wise commit -m "Initial commit"
        wise commit -m "Add feature" --author "Jane <jane@example.com>"
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a wise repository"))
        raise click.Abort()

    if author and not AUTHOR_PATTERN.match(author):
        click.echo(error('Author must look like "Name <email>"'))
        raise click.Abort()

    try:
        commit_id = repo.commit(message, branch=branch, author=author)
    except NothingToCommitError:
        click.echo(error("Nothing to commit (use \"wise add\" to stage files)"))
        raise click.Abort()
    except EmptyMessageError:
        click.echo(error("Aborting commit due to empty commit message"))
        raise click.Abort()
    except MissingIdentityError:
        click.echo(error("Author information not configured"))
        click.echo(info('  wise config set user.name "Your Name"'))
        click.echo(info('  wise config set user.email "you@example.com"'))
        raise click.Abort()
    except (WiseError, OSError) as e:
        click.echo(error(f"Commit failed: {e}"))
        raise click.Abort()

    branch = branch or repo.refs.current_branch()
    summary = message.strip().split('\n')[0]
    click.echo(success(f"[{branch} {short_id(commit_id)}] {summary}"))
    click.echo(commit_id)
