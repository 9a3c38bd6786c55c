"""Config command - manage repository configuration."""

import click
from wise.core.repository import Repository
from wise.core.config import Config
from wise.cli.output import success, error, info


def _get_config(is_global):
    if is_global:
        return Config()

    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a wise repository (use --global for global config)"))
        raise click.Abort()
    return repo.config


@click.group('config')
def config_cmd():
    """Get and set repository or global options."""
    pass


@config_cmd.command('set')
@click.argument('key')
@click.argument('value')
@click.option('--global', 'is_global', is_flag=True, help='Set global config')
def config_set(key, value, is_global):
    """
    Set a config value.

    Examples:
        wise config set user.name "Your Name"
        wise config set user.email "your@email.com"
        wise config set --global user.name "Your Name"
    """
    config = _get_config(is_global)

    try:
        config.set(key, value, global_config=is_global)
    except (ValueError, OSError) as e:
        click.echo(error(f"Failed to set {key}: {e}"))
        raise click.Abort()

    scope = "global" if is_global else "repository"
    click.echo(success(f"Set {scope} config: {key} = {value}"))


@config_cmd.command('get')
@click.argument('key')
@click.option('--global', 'is_global', is_flag=True, help='Get global config only')
def config_get(key, is_global):
    """
    Get a config value.

    Repository values override global ones unless --global is given.

    Examples:
        wise config get user.name
    """
    if is_global:
        config = Config()
    else:
        repo = Repository.find_repository()
        config = repo.config if repo else Config()

    try:
        value = config.get(key)
    except ValueError as e:
        click.echo(error(str(e)))
        raise click.Abort()

    if value is None:
        click.echo(error(f'Key "{key}" not found'))
        raise click.Abort()

    click.echo(value)


@config_cmd.command('unset')
@click.argument('key')
@click.option('--global', 'is_global', is_flag=True, help='Unset global config')
def config_unset(key, is_global):
    """
    Remove a config value.

    Examples:
        wise config unset user.email
    """
    config = _get_config(is_global)

    try:
        removed = config.unset(key, global_config=is_global)
    except (ValueError, OSError) as e:
        click.echo(error(f"Failed to unset {key}: {e}"))
        raise click.Abort()

    if not removed:
        click.echo(error(f'Key "{key}" not found'))
        raise click.Abort()

    click.echo(success(f"Removed {key}"))


@config_cmd.command('list')
@click.option('--global', 'is_global', is_flag=True, help='List global config only')
def config_list(is_global):
    """
    List all config values.

    Examples:
        wise config list
        wise config list --global
    """
    if is_global:
        config = Config()
    else:
        repo = Repository.find_repository()
        config = repo.config if repo else Config()

    values = config.list_all(global_only=is_global)
    if not values:
        click.echo(info("No configuration set"))
        return

    for key, value in values.items():
        click.echo(f"{key}={value}")
