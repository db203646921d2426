# The command: git mv [-f] <source> <destination>
# What it does: Moves or renames a tracked file or directory, in the working tree and in the index at once
# How it does: It resolves both paths, moves into an existing directory when the destination is one, and then for every file below the source writes the content at the new path, deletes the old one and moves the index entry (the staged blob hash is kept as is)
# What data structure it uses: Dictionary (index entries), Strings (path prefixes)

import posixpath

from ..errors import UsageError
from ..logging import get_logger
from ..utils.paths import repo_relative, select

logger = get_logger(__name__)


def run(ctx, args):
    repo = ctx.repo
    if len(args.paths) != 2:
        raise UsageError("usage: git mv [-f] <source> <destination>")
    source_arg, destination_arg = args.paths
    source = repo_relative(ctx, source_arg)
    destination = repo_relative(ctx, destination_arg)
    where = f"source={source_arg}, destination={destination_arg}"

    if not source or not (repo.worktree.exists(source) or repo.worktree.is_dir(source)):
        raise UsageError(f"fatal: bad source, {where}")
    if destination and repo.worktree.is_dir(destination):
        destination = f"{destination}/{posixpath.basename(source)}"
    if destination == source or destination.startswith(source + '/'):
        raise UsageError(f"fatal: can not move directory into itself, {where}")

    tracked = select(repo.index.paths(), source)
    if not tracked:
        raise UsageError(f"fatal: not under version control, {where}")
    if repo.worktree.exists(destination) and not args.force:
        raise UsageError(f"fatal: destination exists, {where}")
    if repo.worktree.is_dir(destination):
        raise UsageError(f"fatal: destination exists, {where}")

    index = repo.index.read_index()
    for path in select(list(repo.worktree.files()), source):
        new_path = destination + path[len(source):]
        repo.worktree.write(new_path, repo.worktree.read(path))
        repo.worktree.delete(path)
        if path in index:
            repo.index.remove_index_entry(path)
            repo.index.update_index_entry(new_path, index[path])
    logger.info("path_moved", source=source, destination=destination)
    return ''
