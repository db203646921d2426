# The command: git stash [push [-m <message>] | save <message> | pop | list | clear]
# What it does: Temporarily stores the uncommitted changes of the index and working tree on a stack, and brings them back later
# How it does: It collects every path whose HEAD, index and working tree versions are not all the same. The working tree versions are recorded as a commit whose parent is HEAD (the stash entry id), the working contents and staged entries of those paths are kept on the entry, and the paths are reset to HEAD (untracked files are deleted). `pop` checks that nothing local would be overwritten, writes the contents and staged entries back and drops the entry
# What data structure it uses: Stack (LIFO list of stash entries, newest last), Dictionary (path -> content / staged blob)

from ..errors import LocalChangesConflict, NoStashEntries, UsageError
from ..logging import get_logger
from ..utils.ignore import is_ignored
from ..utils.repository import StashEntry
from .status import compute_status, format_long

logger = get_logger(__name__)


def run(ctx, args):
    action = args.action or 'push'
    rest = list(args.rest)

    if action == 'push':
        if rest:
            raise UsageError(f"error: unknown option for 'stash push': {rest[0]}")
        return push(ctx, ' '.join(args.message) if args.message else None)
    if action == 'save':
        return push(ctx, ' '.join(rest) or None)
    if rest:
        raise UsageError(f"error: too many arguments for 'stash {action}'")
    if action == 'pop':
        return pop(ctx)
    if action == 'list':
        return list_stashes(ctx)
    if action == 'clear':
        ctx.repo.stashes.clear()
        logger.info("stash_cleared")
        return ''
    raise UsageError(f"error: unknown subcommand: {action}")


def changed_paths(repo): # Paths whose HEAD, index and working tree versions are not all identical
    head = repo.head_files()
    index = repo.index.read_index()
    work = repo.worktree_hashes()
    patterns = repo.ignore_patterns()
    paths = []
    for path in sorted(set(head) | set(index) | set(work)):
        if path not in head and path not in index and is_ignored(path, patterns):
            continue
        if not head.get(path) == index.get(path) == work.get(path):
            paths.append(path)
    return paths


def push(ctx, message=None):
    repo = ctx.repo
    head_commit = repo.get_head_commit()
    if not head_commit:
        raise UsageError("You do not have the initial commit yet")

    paths = changed_paths(repo)
    if not paths:
        return "No local changes to save"

    branch = repo.get_current_branch() or '(no branch)'
    if message:
        label = f"On {branch}: {message}"
    else:
        label = f"WIP on {branch}: {head_commit[:7]} {repo.read_commit(head_commit).summary}"

    head = repo.head_files()
    index = repo.index.read_index()
    files = {path: repo.worktree.get(path) for path in paths}

    snapshot = dict(head)
    for path, content in files.items():
        if content is None:
            snapshot.pop(path, None)
        else:
            snapshot[path] = repo.hash_content(content, write=True)
    stash_id = repo.commit(label, parents=[head_commit], tree=repo.objects.write_files(snapshot), update_head=False)

    repo.stashes.append(StashEntry(
        id=stash_id,
        label=label,
        files=files,
        index={path: index.get(path) for path in paths},
    ))

    for path in paths: # Back to HEAD, untracked files included
        if path in head:
            repo.write_path(path, head[path])
        else:
            repo.drop_path(path)

    logger.info("stash_pushed", stash=stash_id, paths=paths)
    return f"Saved working directory and index state {label}"


def pop(ctx):
    repo = ctx.repo
    if not repo.stashes:
        raise NoStashEntries()
    entry = repo.stashes[-1]

    dirty = set(changed_paths(repo))
    endangered = sorted(
        path for path in entry.files
        if path in dirty and repo.worktree.get(path) != entry.files[path]
    )
    if endangered:
        raise LocalChangesConflict(endangered, 'merge')

    for path, content in entry.files.items():
        if content is None:
            if repo.worktree.exists(path):
                repo.worktree.delete(path)
        else:
            repo.worktree.write(path, content)
    for path, blob_hash in entry.index.items():
        if blob_hash is None:
            repo.index.remove_index_entry(path)
        else:
            repo.index.update_index_entry(path, blob_hash)

    repo.stashes.pop()
    logger.info("stash_popped", stash=entry.id)
    return f"{format_long(ctx, compute_status(repo))}\nDropped refs/stash@{{0}} ({entry.id})"


def list_stashes(ctx):
    stashes = ctx.repo.stashes
    return '\n'.join(f"stash@{{{i}}}: {entry.label}" for i, entry in enumerate(reversed(stashes)))
