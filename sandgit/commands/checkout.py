# The command: git checkout <branch> | <commit> | -b|-B <name> [<start>] | [<ref>] -- <path>...
# What it does: Switches branches, detaches HEAD at a commit, OR restores files in the working tree from the index or from a commit
# How it does:
#   - If <branch>: moves index and working tree from the HEAD tree to the branch tree (refusing to overwrite local changes), then attaches HEAD to the branch.
#   - If <commit>: does the same tree switch and writes the commit hash into HEAD (detached HEAD).
#   - If <path>...: reads the blob hash for each path from the index (or from <ref>, which also updates the index) and overwrites the working file. HEAD never moves.
# What data structure it uses: Dictionary (the trees being compared and the index), Hash Table (object store lookup)

from ..errors import BranchExists, PathspecNotFound, UnresolvedReference, UsageError
from ..formatting import is_remote_tracking
from ..logging import get_logger
from ..utils.paths import repo_relative
from ..utils.revision import resolve_commit, split_ancestry, try_resolve
from .branch import validate_branch_name
from .status import compute_status, tracking_summary

logger = get_logger(__name__)


def run(ctx, args):
    repo = ctx.repo
    targets = list(args.targets)

    if args.new_branch or args.reset_branch:
        if len(targets) > 1:
            raise UsageError("fatal: Cannot update paths and switch to branch at the same time.")
        name = args.new_branch or args.reset_branch
        return create_and_switch(ctx, name, targets[0] if targets else None, force_create=bool(args.reset_branch))

    if args.pathspec is not None:
        if len(targets) > 1:
            raise UsageError(f"fatal: only one reference expected, {len(targets)} given.")
        return restore_paths(ctx, targets[0] if targets else None, args.pathspec)

    if not targets:
        raise UsageError("fatal: you must specify a branch, a commit or path(s) to checkout")

    target = targets[0]
    if len(targets) == 1 and not args.detach:
        if target in repo.branches and not is_remote_tracking(repo, target):
            return switch_branch(ctx, target, force=args.force)
        tracking = guess_remote_branch(repo, target)
        if tracking and not repo.worktree.exists(target):
            return create_and_switch(ctx, target, tracking)

    commit_hash = try_resolve(repo, target)
    if commit_hash is None and try_resolve(repo, split_ancestry(target)[0]):
        resolve_commit(repo, target) # Walks past a root commit: raises NoSuchParent
    if commit_hash:
        if len(targets) > 1:
            return restore_paths(ctx, target, targets[1:])
        return detach_at(ctx, commit_hash, target, force=args.force)

    unknown = f"error: pathspec '{target}' did not match any file(s) known to git"
    if args.detach:
        raise UnresolvedReference(target, unknown)
    try:
        return restore_paths(ctx, None, targets)
    except PathspecNotFound:
        if len(targets) == 1:
            raise UnresolvedReference(target, unknown)
        raise


def guess_remote_branch(repo, name): # 'feature' -> 'origin/feature' when exactly that tracking branch exists
    for remote in sorted(repo.remotes):
        candidate = f"{remote}/{name}"
        if candidate in repo.branches:
            return candidate
    return None


def _local_change_lines(repo):
    status = compute_status(repo)
    codes = {'new file': 'A', 'modified': 'M', 'deleted': 'D'}
    rows = {}
    for kind, paths in status.staged.items():
        for path in paths:
            rows[path] = codes[kind]
    for kind, paths in status.unstaged.items():
        for path in paths:
            rows.setdefault(path, codes[kind])
    return [f"{code}\t{path}" for path, code in sorted(rows.items())]


def switch_branch(ctx, name, force=False): # Attaches HEAD to an existing local branch
    repo = ctx.repo
    if repo.get_current_branch() == name:
        return '\n'.join([f"Already on '{name}'"] + _tracking_lines(repo, name))
    if repo.merge_state and not force:
        raise UsageError("error: you need to resolve your current index first")

    repo.checkout(name, force=force)
    repo.merge_state = None
    logger.info("branch_switched", branch=name)
    return '\n'.join(_local_change_lines(repo) + [f"Switched to branch '{name}'"] + _tracking_lines(repo, name))


def _tracking_lines(repo, branch):
    summary = tracking_summary(repo, branch)
    return [summary] if summary else []


def create_and_switch(ctx, name, start=None, force_create=False):
    """
    Creates <name> at <start> (default: HEAD) and switches to it.
    A remote-tracking start point also records the upstream of the new branch.
    """
    repo = ctx.repo
    validate_branch_name(name)
    if name in repo.branches and not force_create:
        raise BranchExists(name)

    existed = name in repo.branches
    start_id = resolve_commit(repo, start) if start else repo.get_head_commit()
    lines = []
    if start_id is None: # Unborn HEAD: only the name HEAD is attached to changes
        repo.attach_head(name)
    else:
        repo.switch_tree(repo.files_of(start_id), operation='checkout')
        repo.set_branch(name, start_id)
        repo.attach_head(name)
        if start and is_remote_tracking(repo, start):
            remote, _, remote_branch = start.partition('/')
            repo.config.set_upstream(name, remote, remote_branch)
            lines.append(f"branch '{name}' set up to track '{start}'.")

    repo.merge_state = None
    logger.info("branch_created_and_switched", branch=name, commit=start_id)
    verb = 'Switched to and reset branch' if existed else 'Switched to a new branch'
    lines.append(f"{verb} '{name}'")
    return '\n'.join(lines)


def detach_at(ctx, commit_hash, label, force=False):
    repo = ctx.repo
    was_detached = repo.is_detached()
    previous = repo.get_head_commit()

    repo.checkout(commit_hash, force=force)
    repo.merge_state = None
    logger.info("head_detached", commit=commit_hash)

    commit = repo.read_commit(commit_hash)
    head_line = f"HEAD is now at {commit_hash[:7]} {commit.summary}"
    if was_detached:
        if previous == commit_hash:
            return head_line
        return f"Previous HEAD position was {previous[:7]}\n{head_line}"
    return (
        f"Note: switching to '{label}'.\n"
        "\n"
        "You are in 'detached HEAD' state. You can look around, make experimental\n"
        "changes and commit them, and you can discard any commits you make in this\n"
        "state without impacting any branches by switching back to a branch.\n"
        "\n"
        f"{head_line}"
    )


def restore_paths(ctx, ref, pathspecs): # Restores paths from the index, or from <ref> into index and working tree
    repo = ctx.repo
    commit_hash = resolve_commit(repo, ref) if ref else None
    paths = [repo_relative(ctx, spec) for spec in pathspecs]
    restored = repo.checkout(commit_hash, paths=paths)

    count = len(restored)
    source = f"{commit_hash[:7]}" if commit_hash else 'the index'
    return f"Updated {count} path{'s' if count != 1 else ''} from {source}"
