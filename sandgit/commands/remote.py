# The command: git remote [-v] | git remote add <name> <url> | git remote remove <name>
# What it does: Manages the registry of simulated remotes
# How it does: The registry maps a remote name to its URL and to the branch refs the simulated server holds. Registering a remote creates an empty server side, removing one also drops its remote-tracking branches and the upstream settings that pointed at it
# What data structure it uses: Map / Dictionary (remote name -> Remote)

from ..errors import NoSuchRemote, RemoteExists, UsageError
from ..logging import get_logger
from ..utils.repository import Remote

logger = get_logger(__name__)


def run(ctx, args):
    repo = ctx.repo
    action = args.action
    rest = list(args.rest)

    if action is None:
        if args.verbose:
            lines = []
            for name in sorted(repo.remotes):
                url = repo.remotes[name].url
                lines.append(f"{name}\t{url} (fetch)")
                lines.append(f"{name}\t{url} (push)")
            return '\n'.join(lines)
        return '\n'.join(sorted(repo.remotes))

    if action == 'add':
        if len(rest) != 2:
            raise UsageError("usage: git remote add <name> <url>")
        return add_remote(repo, *rest)

    if action in ('remove', 'rm'):
        if len(rest) != 1:
            raise UsageError("usage: git remote remove <name>")
        return remove_remote(repo, rest[0])

    if action == 'get-url':
        if len(rest) != 1:
            raise UsageError("usage: git remote get-url <name>")
        if rest[0] not in repo.remotes:
            raise NoSuchRemote(rest[0])
        return repo.remotes[rest[0]].url

    raise UsageError(f"error: unknown subcommand: {action}")


def add_remote(repo, name, url, branches=None):
    if name in repo.remotes:
        raise RemoteExists(name)
    repo.remotes[name] = Remote(name=name, url=url, branches=dict(branches or {}))
    logger.info("remote_added", remote=name, url=url)
    return ''


def remove_remote(repo, name):
    if name not in repo.remotes:
        raise NoSuchRemote(name)
    del repo.remotes[name]
    for branch in [b for b in repo.branches if b.startswith(name + '/')]:
        del repo.branches[branch]
    for key, value in list(repo.config.items()):
        if key.startswith('branch.') and key.endswith('.remote') and value == name:
            branch = key[len('branch.'):-len('.remote')]
            repo.config.unset(f'branch.{branch}.remote')
            repo.config.unset(f'branch.{branch}.merge')
    logger.info("remote_removed", remote=name)
    return ''


def record_remote_commit(repo, name, branch, changes, message, author=None):
    """
    Simulates somebody else pushing a commit onto <branch> of remote <name>.
    `changes` maps paths to their new content, None deletes the path.
    The local repository only sees the commit after a fetch.
    """
    if name not in repo.remotes:
        raise NoSuchRemote(name)
    remote = repo.remotes[name]
    parent = remote.branches.get(branch)

    files = repo.files_of(parent)
    for path, content in changes.items():
        if content is None:
            files.pop(path, None)
        else:
            files[path] = repo.hash_content(content, write=True)

    commit_hash = repo.commit(
        message,
        author=author,
        parents=[parent] if parent else [],
        tree=repo.objects.write_files(files),
        update_head=False,
    )
    remote.branches[branch] = commit_hash
    logger.debug("remote_commit_recorded", remote=name, branch=branch, commit=commit_hash)
    return commit_hash
