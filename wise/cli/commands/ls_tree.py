"""Object inspection commands - write-tree, ls-tree, cat-file, count-objects."""

import click
from colorama import Fore, Style
from wise.core.repository import Repository
from wise.core.objects import Tree, Commit, Blob
from wise.core.errors import WiseError, ObjectNotFoundError, InvalidRefError
from wise.cli.output import error, info, short_id


def _find_repo():
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a wise repository"))
        raise click.Abort()
    return repo


def resolve_treeish(repo, treeish):
    """
    Resolve HEAD, a branch name or an (abbreviated) id to a tree id.

    Raises:
        ObjectNotFoundError: If nothing matches or the object is a blob
    """
    if treeish == 'HEAD':
        obj_id = repo.refs.resolve_head()
        if obj_id is None:
            raise ObjectNotFoundError("HEAD has no commits yet")
    else:
        try:
            obj_id = repo.refs.read_branch(treeish)
        except InvalidRefError:
            obj_id = None
        if obj_id is None:
            obj_id = repo.store.resolve_prefix(treeish)

    obj = repo.read_object(obj_id)
    if isinstance(obj, Commit):
        return obj.tree
    if isinstance(obj, Tree):
        return obj_id
    raise ObjectNotFoundError(f"Not a valid tree-ish: {treeish}")


@click.command('write-tree')
def write_tree_cmd():
    """
    Create tree objects from the staging area.

    Prints the id of the root tree. The index is left unchanged.

    Examples:
        wise write-tree
    """
    repo = _find_repo()

    try:
        tree_id = repo.write_tree()
    except (WiseError, OSError) as e:
        click.echo(error(f"write-tree failed: {e}"))
        raise click.Abort()

    click.echo(tree_id)


@click.command('ls-tree')
@click.option('-r', '--recursive', is_flag=True, help='Recurse into sub-trees')
@click.option('--name-only', is_flag=True, help='Show only file names')
@click.option('--abbrev', type=int, default=0, help='Abbreviate ids to N characters')
@click.argument('treeish', required=False, default='HEAD')
def ls_tree_cmd(recursive, name_only, abbrev, treeish):
    """
    List contents of a tree object.

    TREEISH can be HEAD, a branch name, or a commit or tree id.

    Examples:
        wise ls-tree                  # Show tree for HEAD
        wise ls-tree -r main          # Recursively list all files on main
        wise ls-tree --name-only 4b82 # Only show names
    """
    repo = _find_repo()

    try:
        tree_id = resolve_treeish(repo, treeish)
        display_tree(repo, repo.read_object(tree_id), "", recursive, name_only, abbrev)
    except WiseError as e:
        click.echo(error(f"ls-tree failed: {e}"))
        raise click.Abort()


def display_tree(repo, tree_obj, prefix, recursive, name_only, abbrev):
    """Display tree entries with optional recursion."""
    for entry in tree_obj.entries:
        full_path = f"{prefix}{entry.name}"

        if entry.type == 'tree' and recursive:
            display_tree(repo, repo.read_object(entry.hash), full_path + "/", recursive, name_only, abbrev)
            continue

        if name_only:
            click.echo(full_path)
        else:
            click.echo(f"{entry.mode} {entry.type} {short_id(entry.hash, abbrev)}\t{full_path}")


@click.command('cat-file')
@click.option('-t', '--type', 'show_type', is_flag=True, help='Show object type')
@click.option('-s', '--size', 'show_size', is_flag=True, help='Show object size')
@click.option('-p', '--pretty', is_flag=True, help='Pretty-print object content')
@click.argument('object_id')
def cat_file_cmd(show_type, show_size, pretty, object_id):
    """
    Show object content, type, or size.

    OBJECT_ID may be abbreviated to at least 4 characters.

    Examples:
        wise cat-file -t abc123     # Show object type
        wise cat-file -s abc123     # Show payload size
        wise cat-file -p abc123     # Pretty-print object content
    """
    repo = _find_repo()

    try:
        full_id = repo.store.resolve_prefix(object_id)
        kind, payload = repo.store.read_raw(full_id)
        obj = repo.read_object(full_id)
    except WiseError as e:
        click.echo(error(f"cat-file failed: {e}"))
        raise click.Abort()

    if show_type:
        click.echo(kind)
        return

    if show_size:
        click.echo(len(payload))
        return

    if isinstance(obj, Commit):
        click.echo(f"{Fore.YELLOW}tree {obj.tree}{Style.RESET_ALL}")
        if obj.parent:
            click.echo(f"{Fore.YELLOW}parent {obj.parent}{Style.RESET_ALL}")
        click.echo(f"author {obj.author} {obj.author_time} {obj.author_timezone}")
        click.echo(f"committer {obj.committer} {obj.committer_time} {obj.committer_timezone}")
        click.echo()
        click.echo(obj.message)
    elif isinstance(obj, Tree):
        for entry in obj.entries:
            click.echo(f"{entry.mode} {entry.type} {short_id(entry.hash, 0)}\t{entry.name}")
    elif isinstance(obj, Blob):
        try:
            click.echo(obj.data.decode('utf-8'), nl=False)
        except UnicodeDecodeError:
            click.echo(info(f"<binary data: {len(obj.data)} bytes>"))


@click.command('count-objects')
@click.option('-v', '--verbose', is_flag=True, help='Show a breakdown by type')
def count_objects_cmd(verbose):
    """
    Count objects in the repository.

    Examples:
        wise count-objects          # Show object count and size
        wise count-objects -v       # Show breakdown by type
    """
    repo = _find_repo()

    total_objects = 0
    total_size = 0
    type_counts = {'commit': 0, 'tree': 0, 'blob': 0}

    for obj_id in repo.store.iter_ids():
        total_objects += 1
        total_size += repo.store.object_path(obj_id).stat().st_size

        if verbose:
            try:
                kind, _ = repo.store.read_raw(obj_id)
            except WiseError as e:
                click.echo(error(f"{obj_id}: {e}"))
                continue
            type_counts[kind] += 1

    if verbose:
        click.echo(f"{Fore.CYAN}Object Statistics:{Style.RESET_ALL}")
        click.echo(f"  Commits: {Fore.YELLOW}{type_counts['commit']}{Style.RESET_ALL}")
        click.echo(f"  Trees:   {Fore.YELLOW}{type_counts['tree']}{Style.RESET_ALL}")
        click.echo(f"  Blobs:   {Fore.YELLOW}{type_counts['blob']}{Style.RESET_ALL}")
        click.echo()

    size_kb = total_size / 1024
    click.echo(f"{total_objects} objects, {size_kb:.2f} KB")
