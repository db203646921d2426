# The command: git rm [--cached] [-f] [-r] <path>...
# What it does: Stops tracking files: removes them from the index and, unless --cached, from the working tree
# How it does: Each pathspec selects the tracked paths it names (a directory needs -r). Before anything is removed it checks that no uncommitted work would be lost: without -f a path whose index differs from HEAD, or whose working file differs from the index, is refused
# What data structure it uses: Dictionary (HEAD tree, index and working tree hashes), List (selected paths)

from ..errors import PathspecNotFound, UsageError
from ..logging import get_logger
from ..utils.paths import repo_relative, select

logger = get_logger(__name__)


def run(ctx, args):
    repo = ctx.repo
    specs = list(args.paths) + list(args.pathspec or [])
    if not specs:
        raise UsageError("usage: git rm [--cached] [-f] [-r] <file>...")

    tracked = repo.index.paths()
    selected = []
    for spec in specs:
        path = repo_relative(ctx, spec)
        matches = select(tracked, path)
        if not matches:
            raise PathspecNotFound(spec)
        if matches != [path] and not args.recursive:
            raise UsageError(f"fatal: not removing '{spec}' recursively without -r")
        selected.extend(p for p in matches if p not in selected)

    if not args.force:
        _check_local_changes(repo, selected, args.cached)

    for path in selected:
        repo.remove(path)
        if not args.cached and repo.worktree.exists(path):
            repo.worktree.delete(path)
    logger.info("paths_removed", paths=selected, cached=args.cached)
    return '\n'.join(f"rm '{path}'" for path in selected)


def _check_local_changes(repo, paths, cached):
    head = repo.head_files()
    index = repo.index.read_index()
    work = repo.worktree_hashes()

    for path in paths:
        staged = index.get(path) != head.get(path)
        modified = path in work and work[path] != index.get(path)
        if cached:
            if staged and modified:
                raise UsageError(
                    "error: the following file has staged content different from both the\n"
                    f"file and the HEAD:\n    {path}\n(use -f to force removal)"
                )
        elif staged and path in head:
            raise UsageError(
                "error: the following file has changes staged in the index:\n"
                f"    {path}\n(use --cached to keep the file, or -f to force removal)"
            )
        elif staged or modified:
            raise UsageError(
                "error: the following file has local modifications:\n"
                f"    {path}\n(use --cached to keep the file, or -f to force removal)"
            )
