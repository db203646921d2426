# What it does: Translates the paths a user types (relative to the shell's current directory) into repository-relative paths
# What data structure it uses: Strings only, paths are '/'-separated and relative to the repository root ('' is the root itself)

from ..errors import PathspecNotFound
from .worktree import normalize, relative_to


def repo_relative(ctx, arg): # 'src/a.txt' typed inside ~/project/lib -> 'lib/src/a.txt'
    absolute = normalize(ctx.cwd, arg)
    rel = relative_to(ctx.repo.root, absolute)
    if rel is None:
        raise PathspecNotFound(arg, f"fatal: {arg}: '{arg}' is outside repository at '{ctx.repo.root}'")
    return rel


def is_under(path, directory): # True when path is the directory itself or lies inside it
    return not directory or path == directory or path.startswith(directory + '/')


def select(paths, pathspec): # Paths matched by one pathspec entry (a file or a directory)
    return sorted(p for p in paths if is_under(p, pathspec))
