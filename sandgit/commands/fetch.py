# The command: git fetch [<remote>]
# What it does: Downloads the branch refs of a simulated remote into remote-tracking branches (`<remote>/<branch>`) without touching local branches or the working tree
# How it does: Inside a simulated download it copies every server-side branch pointer to the matching tracking branch and reports which refs are new, fast-forwarded or force-updated. Commits already live in the shared object store, so only pointers move
# What data structure it uses: Map / Dictionary (server-side branch table -> local branch table)

from ..constants import DEFAULT_REMOTE
from ..errors import NoSuchRemote
from ..logging import get_logger
from ..network import DOWNLOAD
from ..utils import history

logger = get_logger(__name__)


def run(ctx, args):
    return fetch_remote(ctx, args.remote or default_remote(ctx.repo))


def default_remote(repo): # The upstream remote of the current branch, else origin
    branch = repo.get_current_branch()
    if branch:
        configured = repo.config.read_config(f'branch.{branch}.remote')
        if configured:
            return configured
    return DEFAULT_REMOTE


def fetch_remote(ctx, name):
    repo = ctx.repo
    if name not in repo.remotes:
        raise NoSuchRemote(name)
    remote = repo.remotes[name]

    lines = []
    with ctx.network.transfer(DOWNLOAD):
        for branch, commit_hash in sorted(remote.branches.items()):
            tracking = f"{name}/{branch}"
            old = repo.get_branch_commit(tracking)
            if old == commit_hash:
                continue
            repo.set_branch(tracking, commit_hash)
            if old is None:
                lines.append(f" * [new branch]      {branch:<10} -> {tracking}")
            elif history.is_ancestor(repo, old, commit_hash):
                lines.append(f"   {old[:7]}..{commit_hash[:7]}  {branch:<10} -> {tracking}")
            else:
                lines.append(f" + {old[:7]}...{commit_hash[:7]} {branch:<10} -> {tracking}  (forced update)")

    logger.info("fetch_finished", remote=name, updated=len(lines))
    if lines:
        lines.insert(0, f"From {remote.url}")
    return '\n'.join(lines)
