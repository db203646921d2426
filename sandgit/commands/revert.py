# The command: git revert <commit>
# What it does: Undoes the changes a commit introduced by creating a new, opposite commit. History is only added to, never rewritten
# How it does: It checks out the whole file set of the commit's parent over the current tree and deletes every path the commit has but its parent lacks, staging everything in both the index and the working tree. Then a new commit `Revert "<message>"` is made on top of HEAD
# What data structure it uses: Dictionary (the parent and target trees), Set (the paths being written or deleted)

from ..errors import LocalChangesConflict, NoParentToRevert, NothingToCommit
from ..formatting import change_summary, join_blocks
from ..logging import get_logger
from ..utils.revision import resolve_commit

logger = get_logger(__name__)


def run(ctx, args):
    repo = ctx.repo
    target = resolve_commit(repo, args.commit)
    commit = repo.read_commit(target)
    if not commit.parent:
        raise NoParentToRevert(target)

    parent_files = repo.files_of(commit.parent)
    removed = sorted(set(commit.tree) - set(parent_files))

    dirty = repo.local_changes(sorted(set(parent_files) | set(removed)))
    if dirty:
        raise LocalChangesConflict(
            dirty, 'revert',
            "error: your local changes would be overwritten by revert.\n"
            "hint: commit your changes or stash them to proceed.\n"
            "fatal: revert failed",
        )

    for path, blob_hash in parent_files.items():
        repo.write_path(path, blob_hash)
    for path in removed:
        repo.drop_path(path)

    old_files = repo.head_files()
    if repo.index.read_index() == old_files:
        raise NothingToCommit(f"{repo.get_head_status()}\nnothing to commit, working tree clean")

    commit_hash = repo.commit(f'Revert "{commit.message}"')
    logger.info("commit_reverted", reverted=target, commit=commit_hash)

    branch = repo.get_current_branch() or 'detached HEAD'
    return join_blocks(
        f'[{branch} {commit_hash[:7]}] Revert "{commit.summary}"',
        change_summary(old_files, repo.head_files()),
    )
