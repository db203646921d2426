# The command: git commit -m "<message>" [-a] [--amend [--no-edit]]
# What it does: Creates a permanent, uniquely identified snapshot (a commit object) of the currently staged changes
# How it does: It builds a hierarchical Merkle Tree from the flat index to get a single root hash for the project's state. It then finds the parent commit (plus the merge head when concluding a merge), gathers metadata (author, message), and hashes them all into a new "commit" object. Finally, it updates the current branch (or the detached HEAD) to point to this new commit's hash
# What data structure it uses: Merkle Tree (to represent the project's file structure), Directed Acyclic Graph (DAG) (as each commit links to its parents, forming the history graph), Hash Table / Dictionary (the underlying object store)

from ..errors import MergeConflict, NothingToCommit, RefNotFound, UsageError
from ..formatting import change_summary, format_date, join_blocks
from ..logging import get_logger
from .status import compute_status

logger = get_logger(__name__)


def join_message(message_args): # -m "a" -m "b c" -> "a\n\nb c"
    return '\n\n'.join(' '.join(words) for words in message_args)


def run(ctx, args):
    repo = ctx.repo

    if args.all:
        status = compute_status(repo)
        for path in status.modified_paths:
            if path not in status.conflicted:
                repo.add(path)

    if args.amend:
        return amend(ctx, join_message(args.message) if args.message else None)

    if not args.message:
        raise UsageError("error: no commit message given, use -m <msg>")
    message = join_message(args.message)
    if not message.strip():
        raise UsageError("Aborting commit due to empty commit message.")

    return create_commit(ctx, message, allow_empty=args.allow_empty)


def _nothing_to_commit_message(repo):
    status = compute_status(repo)
    if status.modified_paths:
        detail = 'no changes added to commit (use "git add" and/or "git commit -a")'
    elif status.untracked:
        detail = 'nothing added to commit but untracked files present (use "git add" to track)'
    elif not repo.get_head_commit():
        detail = 'nothing to commit (create/copy files and use "git add" to track)'
    else:
        detail = 'nothing to commit, working tree clean'
    return f"{repo.get_head_status()}\n{detail}"


def create_commit(ctx, message, allow_empty=False): # Commits the index on top of HEAD and concludes a pending merge
    repo = ctx.repo
    head_commit = repo.get_head_commit()
    parents = [head_commit] if head_commit else []

    merge_state = repo.merge_state
    if merge_state:
        if merge_state.conflicts:
            raise MergeConflict(
                merge_state.conflicts,
                "error: Committing is not possible because you have unmerged files.\n"
                "hint: Fix them up in the work tree, and then use 'git add <file>'\n"
                "hint: as appropriate to mark resolution and make a commit.\n"
                "fatal: Exiting because of an unresolved conflict.",
            )
        parents.append(merge_state.head)
    elif not allow_empty and repo.index.read_index() == repo.head_files():
        raise NothingToCommit(_nothing_to_commit_message(repo))

    old_files = repo.head_files()
    commit_hash = repo.commit(message, parents=parents)
    repo.merge_state = None
    logger.info("commit_created", commit=commit_hash, parents=parents)

    return join_blocks(
        _commit_header(ctx, commit_hash, message, root=not parents),
        change_summary(old_files, repo.head_files()),
    )


def amend(ctx, message=None): # Replaces the tip commit by one with the same parents and the current index
    repo = ctx.repo
    head_commit = repo.get_head_commit()
    if not head_commit:
        raise RefNotFound('HEAD', "fatal: You have nothing to amend.")
    if repo.merge_state:
        raise UsageError("fatal: You are in the middle of a merge -- cannot amend.")

    old = repo.read_commit(head_commit)
    commit_hash = repo.commit(
        message or old.message,
        author=old.author,
        parents=list(old.parents),
        timestamp=old.timestamp,
    )
    logger.info("commit_amended", old=head_commit, new=commit_hash)

    parent_files = repo.files_of(old.parent)
    return join_blocks(
        _commit_header(ctx, commit_hash, message or old.message, root=not old.parents),
        f" Date: {format_date(old.timestamp)}",
        change_summary(parent_files, repo.head_files()),
    )


def _commit_header(ctx, commit_hash, message, root=False): # "[main (root-commit) 1a2b3c4] message"
    branch = ctx.repo.get_current_branch() or 'detached HEAD'
    root_marker = ' (root-commit)' if root else ''
    summary = message.splitlines()[0] if message else ''
    return f"[{branch}{root_marker} {commit_hash[:7]}] {summary}"
