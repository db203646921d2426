# The command: git clean -n | -f [-d]
# What it does: Removes untracked files (and with -d untracked directories) from the working tree to maintain a clean workspace
# How it does: It identifies untracked items by comparing the working tree's contents with the index, while strictly respecting .gitignore rules. Every untracked file is removed, wherever it lives. With -d a directory holding no tracked file is removed as a whole instead of file by file. It supports preview (dry-run) and forced deletion modes
# What data structure it uses: Set (for efficient lookup of tracked files and directories), List (to store candidate items for removal)

import posixpath

from ..errors import UsageError
from ..logging import get_logger
from ..utils.ignore import is_ignored

logger = get_logger(__name__)


def run(ctx, args):
    if not args.force and not args.dry_run: # Prevent accidental deletion by default
        raise UsageError("fatal: clean.requireForce defaults to true and neither -n nor -f given; refusing to clean")

    repo = ctx.repo
    files, dirs = untracked_items(repo, include_dirs=args.directories)
    items = sorted([(path, False) for path in files] + [(path, True) for path in dirs])

    lines = []
    for path, is_dir in items:
        label = f"{path}/" if is_dir else path
        if args.dry_run: # Preview mode
            lines.append(f"Would remove {label}")
            continue
        if is_dir:
            repo.worktree.remove_dir(path)
        else:
            repo.worktree.delete(path)
        lines.append(f"Removing {label}")

    if not args.dry_run:
        logger.info("clean_finished", removed=len(items))
    return '\n'.join(lines)


def untracked_items(repo, include_dirs=False):
    """
    Returns (untracked files, untracked directories).
    With include_dirs the files inside untracked directories are covered by their directory.
    """
    tracked = set(repo.index.paths())
    patterns = repo.ignore_patterns()

    tracked_dirs = set() # Tracking parent directories of all indexed files
    for path in tracked:
        parent = posixpath.dirname(path)
        while parent:
            tracked_dirs.add(parent)
            parent = posixpath.dirname(parent)

    untracked_dirs = set()
    for directory in repo.worktree.directories():
        if directory in tracked_dirs or is_ignored(directory, patterns):
            continue
        parent = posixpath.dirname(directory)
        if not parent or parent in tracked_dirs: # Topmost untracked directory only
            untracked_dirs.add(directory)

    def inside_untracked_dir(path):
        return any(path.startswith(d + '/') for d in untracked_dirs)

    files = [
        path for path in repo.worktree.files()
        if path not in tracked and not is_ignored(path, patterns)
    ]
    if not include_dirs:
        return sorted(files), []
    return sorted(p for p in files if not inside_untracked_dir(p)), sorted(untracked_dirs)
