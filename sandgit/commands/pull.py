# The command: git pull [<remote> [<branch>]]
# What it does: Fetches from a simulated remote and merges the matching remote-tracking branch into the current branch
# How it does: It is literally fetch followed by merge: the remote branch defaults to the configured upstream of the current branch, then to a branch with the same name
# What data structure it uses: Same as fetch and merge (branch tables, DAG)

from ..errors import NotOnBranch, UnresolvedReference, UsageError
from ..formatting import join_blocks
from ..logging import get_logger
from . import fetch, merge

logger = get_logger(__name__)


def run(ctx, args):
    repo = ctx.repo
    if repo.merge_state:
        raise UsageError(
            "error: Pulling is not possible because you have unmerged files.\n"
            "hint: Fix them up in the work tree, and then use 'git add/rm <file>'\n"
            "hint: as appropriate to mark resolution and make a commit.\n"
            "fatal: Exiting because of an unresolved conflict."
        )

    current_branch = repo.get_current_branch()
    remote_name = args.remote or fetch.default_remote(repo)
    remote_branch = args.branch or upstream_branch(repo, current_branch, remote_name)
    if not remote_branch:
        raise NotOnBranch("You are not currently on a branch.\nPlease specify which branch you want to merge with.")

    fetch_output = fetch.fetch_remote(ctx, remote_name)

    tracking = f"{remote_name}/{remote_branch}"
    if tracking not in repo.branches:
        raise UnresolvedReference(tracking, f"fatal: couldn't find remote ref {remote_branch}")

    logger.info("pull_merging", tracking=tracking)
    return join_blocks(fetch_output, merge.merge_ref(ctx, tracking))


def upstream_branch(repo, branch, remote_name):
    if not branch:
        return None
    upstream = repo.config.get_upstream(branch)
    if upstream and upstream[0] == remote_name:
        return upstream[1]
    return branch
