"""CLI commands for Wise."""

from wise.cli.commands.init import init_cmd
from wise.cli.commands.add import add_cmd
from wise.cli.commands.commit import commit_cmd
from wise.cli.commands.config import config_cmd
from wise.cli.commands.status import status_cmd
from wise.cli.commands.ls_tree import write_tree_cmd, ls_tree_cmd, cat_file_cmd, count_objects_cmd

__all__ = ['init_cmd', 'add_cmd', 'commit_cmd', 'config_cmd', 'status_cmd',
           'write_tree_cmd', 'ls_tree_cmd', 'cat_file_cmd', 'count_objects_cmd']
