"""Main CLI entry point for Wise."""

import logging

import click
from colorama import init

from wise import __version__
from wise.cli.output import BANNER
from wise.cli.commands import (init_cmd, add_cmd, commit_cmd, config_cmd, status_cmd,
                               write_tree_cmd, ls_tree_cmd, cat_file_cmd, count_objects_cmd)

# Initialize colorama for cross-platform colored output
init(autoreset=True)


class WiseGroup(click.Group):
    """Custom Group class to display banner before help."""

    def format_help(self, ctx, formatter):
        click.echo(BANNER)
        super().format_help(ctx, formatter)


@click.group(cls=WiseGroup)
@click.version_option(version=__version__)
@click.option('-v', '--verbose', is_flag=True, help='Log object store and index activity')
def cli(verbose):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s'
    )


cli.add_command(init_cmd)
cli.add_command(add_cmd)
cli.add_command(commit_cmd)
cli.add_command(config_cmd)
cli.add_command(status_cmd)
cli.add_command(write_tree_cmd)
cli.add_command(ls_tree_cmd)
cli.add_command(cat_file_cmd)
cli.add_command(count_objects_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
