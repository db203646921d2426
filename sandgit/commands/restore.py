# The command: git restore [--staged] [--source=<commit>] <path>...
# What it does: Discards changes. Without --staged it rewrites working files from the index, with --staged it resets index entries from HEAD (or un-stages them when there is no commit yet)
# How it does: Every pathspec must name something git knows about. A directory, `.` included, expands to the changed paths below it: the modified files for a working tree restore, the staged files for --staged
# What data structure it uses: Hash Table / Dictionary (the index and the commit tree), Set (the changed paths)

from ..errors import PathspecNotFound, UsageError
from ..logging import get_logger
from ..utils.paths import repo_relative, select
from ..utils.revision import resolve_commit
from .status import compute_status

logger = get_logger(__name__)


def run(ctx, args):
    repo = ctx.repo
    pathspecs = list(args.paths) + list(args.pathspec or [])
    if not pathspecs:
        raise UsageError("fatal: you must specify path(s) to restore")

    source = resolve_commit(repo, args.source) if args.source else None
    status = compute_status(repo)

    if args.staged:
        head_commit = source or repo.get_head_commit()
        known = set(repo.files_of(head_commit)) | set(repo.index.paths())
        changed = set(status.staged_paths) if not source else known
    else:
        source_files = repo.files_of(source) if source else repo.index.read_index()
        known = set(source_files) | (set(repo.index.paths()) if source else set())
        changed = set(status.modified_paths) if not source else known

    restored = []
    for spec in pathspecs:
        rel = repo_relative(ctx, spec)
        if not select(known, rel):
            raise PathspecNotFound(spec, f"error: pathspec '{spec}' did not match any file(s) known to git")
        for path in select(changed, rel):
            if args.staged:
                repo.reset_index(path, head_commit)
            elif path in source_files:
                repo.write_path(path, source_files[path], stage=False)
            else:
                repo.drop_path(path, stage=False)
            restored.append(path)

    logger.info("paths_restored", staged=args.staged, paths=restored)
    return ''
