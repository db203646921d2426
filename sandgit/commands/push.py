# The command: git push [-u] [-f] [<remote> [<branch> | <src>:<dst>]]
# What it does: Uploads the tip of a local branch to a branch of a simulated remote, then advances the matching remote-tracking branch
# How it does: Inside a simulated upload it compares the server-side branch with the local tip. The server must already contain nothing the local branch lacks: its commit has to be an ancestor of the local tip (found with a reverse BFS), otherwise the push is rejected and nothing moves. `-u` records the upstream in config
# What data structure it uses: Map / Dictionary (server-side branch table), DAG (ancestor check)

from ..errors import NonFastForwardPush, NoSuchRemote, NotOnBranch, UnresolvedReference
from ..logging import get_logger
from ..network import UPLOAD
from ..utils import history
from . import fetch

logger = get_logger(__name__)


def run(ctx, args):
    repo = ctx.repo
    remote_name = args.remote or fetch.default_remote(repo)
    if remote_name not in repo.remotes:
        raise NoSuchRemote(remote_name)

    refspec = args.branch or repo.get_current_branch()
    if not refspec:
        raise NotOnBranch(
            "fatal: You are not currently on a branch.\n"
            "To push the history leading to the current (detached HEAD)\n"
            "state now, use\n"
            "\n"
            f"    git push {remote_name} HEAD:<name-of-remote-branch>"
        )
    source, _, destination = refspec.partition(':')
    destination = destination or source
    return push_branch(ctx, remote_name, source, destination, force=args.force, set_upstream=args.set_upstream)


def push_branch(ctx, remote_name, source, destination, force=False, set_upstream=False):
    """
    Moves <destination> of the remote to the commit <source> names.
    A non-fast-forward update is rejected unless forced.
    """
    repo = ctx.repo
    remote = repo.remotes[remote_name]
    if source == 'HEAD':
        local_commit = repo.get_head_commit()
    else:
        local_commit = repo.get_branch_commit(source)
    if not local_commit:
        raise UnresolvedReference(source, f"error: src refspec {source} does not match any\nerror: failed to push some refs to '{remote.url}'")

    lines = []
    with ctx.network.transfer(UPLOAD):
        remote_commit = remote.branches.get(destination)
        if remote_commit == local_commit:
            lines.append("Everything up-to-date")
        else:
            forced = remote_commit is not None and not history.is_ancestor(repo, remote_commit, local_commit)
            if forced and not force:
                logger.info("push_rejected", remote=remote_name, branch=destination, remote_commit=remote_commit, local_commit=local_commit)
                raise NonFastForwardPush(remote.url, destination)

            remote.branches[destination] = local_commit
            repo.set_branch(f"{remote_name}/{destination}", local_commit)
            logger.info("push_finished", remote=remote_name, branch=destination, commit=local_commit, forced=forced)

            lines.append(f"To {remote.url}")
            if remote_commit is None:
                lines.append(f" * [new branch]      {source} -> {destination}")
            elif forced:
                lines.append(f" + {remote_commit[:7]}...{local_commit[:7]} {source} -> {destination} (forced update)")
            else:
                lines.append(f"   {remote_commit[:7]}..{local_commit[:7]}  {source} -> {destination}")

    if set_upstream and source in repo.branches:
        repo.config.set_upstream(source, remote_name, destination)
        lines.append(f"branch '{source}' set up to track '{remote_name}/{destination}'.")
    return '\n'.join(lines)
