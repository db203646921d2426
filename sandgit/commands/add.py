# The command: git add <pathspec>... | git add -A
# What it does: Takes a snapshot of files from the working tree and stages them for the next commit by updating the index
# How it does: Each pathspec is resolved against the shell's current directory. A file is staged directly (or its deletion, when it is tracked but gone). A directory, `.` included, expands to the untracked and modified files below it. Pathspecs that match nothing are reported and the command only fails when nothing at all could be staged
# What data structure it uses: Hash Table / Dictionary (the index), Set (the untracked and modified candidates of a directory expansion)

from ..errors import PathspecNotFound, UsageError
from ..logging import get_logger
from ..utils.ignore import is_ignored
from ..utils.paths import repo_relative, select
from .status import compute_status

logger = get_logger(__name__)


def run(ctx, args):
    repo = ctx.repo
    pathspecs = list(args.paths) + list(args.pathspec or [])
    if args.all:
        pathspecs = pathspecs or [None]
    if not pathspecs:
        raise UsageError("Nothing specified, nothing added.\nhint: Maybe you wanted to say 'git add .'?")

    status = compute_status(repo)
    candidates = set(status.untracked) | set(status.modified_paths) | set(status.conflicted)
    ignore_patterns = repo.ignore_patterns()

    to_stage = set()
    problems = []
    matched_any = False
    for spec in pathspecs:
        rel = '' if spec is None else repo_relative(ctx, spec)
        if rel and (repo.worktree.exists(rel) or rel in repo.index):
            if rel not in repo.index and is_ignored(rel, ignore_patterns):
                problems.append(f"The following paths are ignored by one of your .gitignore files:\n{spec}")
                continue
            to_stage.add(rel)
            matched_any = True
        elif not rel or repo.worktree.is_dir(rel) or select(repo.index.paths(), rel):
            to_stage.update(select(candidates, rel))
            matched_any = True
        else:
            problems.append(f"fatal: pathspec '{spec}' did not match any files")

    if not matched_any:
        raise PathspecNotFound(pathspecs[0] or '.', '\n'.join(problems))

    for path in sorted(to_stage):
        repo.add(path)
        if repo.merge_state:
            repo.merge_state.conflicts.discard(path)
    logger.debug("paths_staged", paths=sorted(to_stage))
    return '\n'.join(problems)
