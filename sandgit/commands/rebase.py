# The command: git rebase [<upstream>]
# What it does: Moves the commits of the current branch that <upstream> does not have onto the tip of <upstream>, as new commits
# How it does: It computes the set difference (reachable from HEAD minus reachable from upstream), orders it oldest first, moves the branch to upstream and replays every commit as a new commit that reuses the original snapshot tree, message and author with the moving HEAD as its only parent. Because whole trees are replayed there is never a conflict to stop on
# What data structure it uses: Sets (the two reachability sets and their difference), List (the ordered commits to replay), DAG (the commit history being rewritten)

from ..errors import LocalChangesConflict, NotOnBranch, RefNotFound, UsageError
from ..logging import get_logger
from ..utils import history
from ..utils.revision import resolve_commit

logger = get_logger(__name__)


def run(ctx, args):
    repo = ctx.repo

    current_branch = repo.get_current_branch()
    if not current_branch:
        raise NotOnBranch("fatal: You are not currently on a branch.")

    upstream_name = args.upstream or _configured_upstream(repo, current_branch)
    head_commit = repo.get_head_commit()
    if not head_commit:
        raise RefNotFound('HEAD', "fatal: no commits yet")

    dirty = repo.local_changes()
    if dirty:
        raise LocalChangesConflict(
            dirty, 'rebase',
            "error: cannot rebase: You have unstaged changes.\nerror: Please commit or stash them.",
        )

    upstream_commit = resolve_commit(repo, upstream_name)
    commits_to_replay = history.commits_to_replay(repo, head_commit, upstream_commit)

    if not commits_to_replay or history.is_ancestor(repo, upstream_commit, head_commit):
        logger.info("rebase_up_to_date", branch=current_branch, upstream=upstream_name)
        return f"Current branch {current_branch} is up to date."

    # The last replayed commit carries the final tree, so the working tree moves once
    repo.switch_tree(repo.files_of(commits_to_replay[-1].id), operation='rebase')
    repo.set_branch(current_branch, upstream_commit)

    for commit in commits_to_replay:
        repo.commit(
            commit.message,
            author=commit.author,
            parents=[repo.get_head_commit()],
            tree=commit.tree_id,
            timestamp=commit.timestamp,
        )

    logger.info("rebase_finished", branch=current_branch, upstream=upstream_name, replayed=len(commits_to_replay))
    return f"Successfully rebased and updated refs/heads/{current_branch}."


def _configured_upstream(repo, branch):
    upstream = repo.config.get_upstream(branch)
    if not upstream:
        raise UsageError(
            "There is no tracking information for the current branch.\n"
            "Please specify which branch you want to rebase against."
        )
    return "/".join(upstream)
