# The command: git cherry-pick <commit>
# What it does: Copies a commit onto the current branch as a new commit with the same message and author
# How it does: The new commit takes the source commit's snapshot tree wholesale (no patch is applied) with HEAD as its only parent, merge commits included. Index and working tree are switched to that tree first, refusing to overwrite local changes, then the current branch advances
# What data structure it uses: Merkle Tree (the copied snapshot), DAG (the new commit is linked to HEAD)

from ..errors import NothingToCommit
from ..formatting import change_summary, format_date, join_blocks
from ..logging import get_logger
from ..utils.revision import resolve_commit

logger = get_logger(__name__)


def run(ctx, args):
    repo = ctx.repo
    source = resolve_commit(repo, args.commit)
    commit = repo.read_commit(source)
    head_commit = repo.get_head_commit()
    old_files = repo.head_files()
    if head_commit and old_files == commit.tree:
        raise NothingToCommit(
            "The previous cherry-pick is now empty, possibly due to conflict resolution.\n"
            f"{repo.get_head_status()}\nnothing to commit, working tree clean"
        )

    repo.switch_tree(commit.tree, operation='cherry-pick')
    commit_hash = repo.commit(
        commit.message,
        author=commit.author,
        parents=[head_commit] if head_commit else [],
        tree=commit.tree_id,
        timestamp=commit.timestamp,
    )
    logger.info("commit_cherry_picked", source=source, commit=commit_hash)

    branch = repo.get_current_branch() or 'detached HEAD'
    return join_blocks(
        f"[{branch} {commit_hash[:7]}] {commit.summary}",
        f" Date: {format_date(commit.timestamp)}",
        change_summary(old_files, repo.head_files()),
    )
