# The command: git merge <branch> [-m <message>] [--no-ff] | git merge --abort
# What it does: Joins the history of <branch> into the current branch: nothing to do, a fast-forward, or a three-way merge between the current branch, the target branch and their common ancestor
# How it does: It checks ancestry both ways with a reverse BFS. When neither side contains the other it finds the common ancestor and merges file by file: a path changed on one side only takes that side, a path changed on both sides to different content is a conflict that gets markers in the working tree and blocks the merge commit until resolved
# What data structure it uses: DAG (for ancestry and finding the common ancestor), Merkle Trees (for content comparison), Set (the unresolved paths of a pending merge)

from ..errors import LocalChangesConflict, MergeConflict, UnrelatedHistories, UsageError
from ..formatting import change_summary, is_remote_tracking, join_blocks
from ..logging import get_logger
from ..utils import history
from ..utils.repository import MergeState
from ..utils.revision import resolve_commit

logger = get_logger(__name__)


def run(ctx, args):
    repo = ctx.repo
    if args.abort:
        return abort_merge(ctx)
    if not args.branch:
        raise UsageError("fatal: No remote for the current branch.")
    if repo.merge_state:
        raise UsageError(
            "fatal: You have not concluded your merge (MERGE_HEAD exists).\n"
            "Please, commit your changes before you merge."
        )
    return merge_ref(ctx, args.branch, message=args.message, no_ff=args.no_ff)


def default_message(repo, ref):
    current_branch = repo.get_current_branch() or 'HEAD'
    if is_remote_tracking(repo, ref):
        kind = 'remote-tracking branch'
    elif ref in repo.branches:
        kind = 'branch'
    else:
        kind = 'commit'
    return f"Merge {kind} '{ref}' into {current_branch}"


def merge_ref(ctx, ref, message=None, no_ff=False):
    """
    Merges the commit <ref> resolves to into HEAD.
    Returns the narrative of the outcome: up to date, fast-forward or a merge commit.
    """
    repo = ctx.repo
    theirs = resolve_commit(repo, ref)
    ours = repo.get_head_commit()

    if ours is None: # Unborn branch: adopt their history
        repo.switch_tree(repo.files_of(theirs), operation='merge')
        repo.update_head(theirs)
        return f"Fast-forward\n{change_summary({}, repo.head_files())}".rstrip()

    if history.is_ancestor(repo, theirs, ours):
        logger.info("merge_up_to_date", ours=ours, theirs=theirs)
        return "Already up to date."

    if history.is_ancestor(repo, ours, theirs) and not no_ff:
        old_files = repo.head_files()
        repo.switch_tree(repo.files_of(theirs), operation='merge')
        repo.update_head(theirs)
        logger.info("merge_fast_forward", ours=ours, theirs=theirs)
        return join_blocks(
            f"Updating {ours[:7]}..{theirs[:7]}",
            "Fast-forward",
            change_summary(old_files, repo.head_files()),
        )

    base = history.merge_base(repo, ours, theirs)
    if base is None:
        raise UnrelatedHistories()
    return three_way_merge(ctx, base, ours, theirs, message or default_message(repo, ref), ref)


def merge_trees(base_files, our_files, their_files):
    """
    Merges two trees file by file against their common ancestor.
    Returns (merged {path: blob}, sorted conflicting paths).
    """
    merged = {}
    conflicts = []
    for path in sorted(set(base_files) | set(our_files) | set(their_files)):
        base_hash = base_files.get(path)
        our_hash = our_files.get(path)
        their_hash = their_files.get(path)

        if our_hash == their_hash: # Unchanged in both, or changed the same way
            result = our_hash
        elif our_hash == base_hash: # Only they changed it
            result = their_hash
        elif their_hash == base_hash: # Only we changed it
            result = our_hash
        else: # Both sides made different changes
            conflicts.append(path)
            continue

        if result is not None:
            merged[path] = result
    return merged, conflicts


def three_way_merge(ctx, base, ours, theirs, message, label):
    repo = ctx.repo
    our_files = repo.files_of(ours)
    their_files = repo.files_of(theirs)
    merged, conflicts = merge_trees(repo.files_of(base), our_files, their_files)

    touched = sorted(
        p for p in set(our_files) | set(merged) | set(conflicts)
        if p in conflicts or merged.get(p) != our_files.get(p)
    )
    index = repo.index.read_index()
    staged = [p for p in set(index) | set(our_files) if index.get(p) != our_files.get(p)]
    endangered = sorted(set(repo.local_changes(touched)) | set(staged))
    if endangered:
        raise LocalChangesConflict(endangered, 'merge')

    lines = []
    for path in touched:
        if path in conflicts:
            lines.append(f"Auto-merging {path}")
            repo.worktree.write(path, conflict_content(repo, our_files.get(path), their_files.get(path), label))
        elif path in merged:
            repo.write_path(path, merged[path])
        else:
            repo.drop_path(path)

    if conflicts:
        repo.merge_state = MergeState(head=theirs, message=message, conflicts=set(conflicts))
        logger.info("merge_conflict", ours=ours, theirs=theirs, paths=conflicts)
        report = MergeConflict(conflicts).message
        raise MergeConflict(conflicts, join_blocks(*lines, report))

    commit_hash = repo.commit(message, parents=[ours, theirs])
    logger.info("merge_commit_created", commit=commit_hash, parents=[ours, theirs])
    return join_blocks(
        *lines,
        "Merge made by the 'three-way' strategy.",
        change_summary(our_files, repo.head_files()),
    )


def conflict_content(repo, our_hash, their_hash, label): # Working file content with git's conflict markers
    def side(blob_hash):
        if not blob_hash:
            return ''
        content = repo.blob_content(blob_hash)
        return content if content.endswith('\n') or not content else content + '\n'

    return f"<<<<<<< HEAD\n{side(our_hash)}=======\n{side(their_hash)}>>>>>>> {label}\n"


def abort_merge(ctx):
    repo = ctx.repo
    if not repo.merge_state:
        raise UsageError("fatal: There is no merge to abort (MERGE_HEAD missing).")
    repo.switch_tree(repo.head_files(), force=True)
    repo.merge_state = None
    logger.info("merge_aborted")
    return ''
