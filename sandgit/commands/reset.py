# The command: git reset [--soft | --mixed | --hard] [<commit>] | git reset [<commit>] [--] <path>...
# What it does: Moves the current branch (or the detached HEAD) to <commit>, optionally resetting the index (mixed, the default) and the working tree (hard). With paths it only resets those index entries and moves nothing
# How it does: The pointer move is one update of the branch table. Mixed overwrites the index with the commit's {path: hash} map, hard also rewrites every tracked working file and deletes tracked files the commit does not have. Untracked files are left alone
# What data structure it uses: Hash Table / Dictionary (the index and the commit tree)

from ..errors import PathspecNotFound, UnresolvedReference, UsageError
from ..logging import get_logger
from ..utils.paths import repo_relative, select
from ..utils.revision import resolve_commit, try_resolve
from .status import compute_status

logger = get_logger(__name__)


def run(ctx, args):
    repo = ctx.repo
    targets = list(args.targets)

    if args.pathspec is not None:
        if len(targets) > 1:
            raise UsageError(f"fatal: only one reference expected, {len(targets)} given.")
        return reset_paths(ctx, targets[0] if targets else None, args.pathspec, args.mode)

    if targets:
        commit_hash = try_resolve(repo, targets[0])
        if commit_hash is None:
            if not repo.get_head_commit() or _is_known_path(ctx, targets[0]):
                return reset_paths(ctx, None, targets, args.mode)
            resolve_commit(repo, targets[0]) # Raises the precise error
        if len(targets) > 1:
            return reset_paths(ctx, targets[0], targets[1:], args.mode)
    elif not repo.get_head_commit():
        repo.index.write_index({})
        return ''

    return reset_commit(ctx, targets[0] if targets else 'HEAD', args.mode or 'mixed')


def _is_known_path(ctx, arg):
    rel = repo_relative(ctx, arg)
    repo = ctx.repo
    return bool(select(set(repo.index.paths()) | set(repo.head_files()), rel)) or repo.worktree.exists(rel)


def reset_commit(ctx, ref, mode):
    repo = ctx.repo
    commit_hash = resolve_commit(repo, ref)
    target_files = repo.files_of(commit_hash)

    if mode == 'hard':
        repo.switch_tree(target_files, force=True)
    repo.update_head(commit_hash)
    if mode == 'mixed':
        repo.index.write_index(target_files)
    repo.merge_state = None
    logger.info("reset", mode=mode, commit=commit_hash)

    if mode == 'hard':
        return f"HEAD is now at {commit_hash[:7]} {repo.read_commit(commit_hash).summary}"
    if mode == 'mixed':
        return _unstaged_report(repo)
    return ''


def reset_paths(ctx, ref, pathspecs, mode=None):
    repo = ctx.repo
    if mode in ('soft', 'hard'):
        raise UsageError(f"fatal: Cannot do {mode} reset with paths.")

    commit_hash = resolve_commit(repo, ref) if ref else repo.get_head_commit()
    source_files = repo.files_of(commit_hash)
    known = set(source_files) | set(repo.index.paths())

    for spec in pathspecs:
        rel = repo_relative(ctx, spec)
        matches = select(known, rel)
        if not matches:
            if ref is None and not repo.get_head_commit():
                raise PathspecNotFound(spec)
            raise UnresolvedReference(spec, f"fatal: ambiguous argument '{spec}': unknown revision or path not in the working tree.")
        for path in matches:
            repo.reset_index(path, commit_hash)
            if repo.merge_state:
                repo.merge_state.conflicts.discard(path)

    logger.info("reset_paths", commit=commit_hash, paths=list(pathspecs))
    return _unstaged_report(repo)


def _unstaged_report(repo):
    status = compute_status(repo)
    rows = [('M', p) for p in status.unstaged['modified']] + [('D', p) for p in status.unstaged['deleted']]
    if not rows:
        return ''
    return '\n'.join(['Unstaged changes after reset:'] + [f"{code}\t{path}" for code, path in sorted(rows, key=lambda r: r[1])])
