# The command: git branch [-a | -r] | git branch [-f] <name> [<start>] | git branch -m|-M [<old>] <new> | git branch -d|-D <name>...
# What it does: Lists, creates, renames or deletes branches
# How it does: To create a branch, it resolves the start point (HEAD by default) and adds a name -> commit hash entry to the branch table. To list branches, it reads that table, marking the current one with an asterisk. Deleting drops the entry (only the checked-out branch is protected) and renaming moves it, carrying HEAD along when it pointed at the old name
# What data structure it uses: Map / Dictionary (the branch table maps branch names to commit hashes), List (to hold branch names for sorting and display)

import re

from ..errors import CannotDeleteCheckedOutBranch, NotOnBranch, UsageError
from ..formatting import is_remote_tracking
from ..logging import get_logger
from ..utils.revision import resolve_commit

logger = get_logger(__name__)

# git check-ref-format, reduced to what a branch name typed in a shell can violate
_INVALID_NAME = re.compile(r'(^[-/.])|(\.\.)|([\s~^:?*\[\\])|(@\{)|(/\.)|(//)|([/.]$)|(\.lock$)')


def validate_branch_name(name):
    if not name or name == 'HEAD' or _INVALID_NAME.search(name):
        raise UsageError(f"fatal: '{name}' is not a valid branch name")


def run(ctx, args):
    if args.delete or args.force_delete:
        return delete_branches(ctx, args.names)
    if args.move or args.force_move:
        return rename_branch(ctx, args.names, force=args.force_move)
    if not args.names:
        return list_branches(ctx, show_local=not args.remotes, show_remote=args.all or args.remotes)
    if len(args.names) > 2:
        raise UsageError("fatal: too many arguments for a create operation")
    return create_branch(ctx, args.names[0], args.names[1] if len(args.names) > 1 else None, force=args.force)


def create_branch(ctx, name, start=None, force=False):
    repo = ctx.repo
    validate_branch_name(name)
    if force and name == repo.get_current_branch():
        raise UsageError(f"fatal: cannot force update the branch '{name}' used by worktree at '{repo.root}'")

    start_id = resolve_commit(repo, start) if start else None
    commit_hash = repo.branch(name, start_id, force=force)
    logger.info("branch_created", branch=name, commit=commit_hash)
    return ''


def delete_branches(ctx, names):
    repo = ctx.repo
    if not names:
        raise UsageError("fatal: branch name required")

    lines = []
    for name in names:
        if name == repo.get_current_branch():
            raise CannotDeleteCheckedOutBranch(name)
        commit_hash = repo.delete_branch(name)
        logger.info("branch_deleted", branch=name, commit=commit_hash)
        lines.append(f"Deleted branch {name} (was {commit_hash[:7]}).")
    return '\n'.join(lines)


def rename_branch(ctx, names, force=False):
    repo = ctx.repo
    if len(names) == 1:
        old = repo.get_current_branch()
        if not old:
            raise NotOnBranch("fatal: cannot rename the current branch while not on any.")
        new = names[0]
    elif len(names) == 2:
        old, new = names
    else:
        raise UsageError("fatal: invalid usage of git branch -m")

    validate_branch_name(new)
    if new == repo.get_current_branch() and old != new and force:
        raise UsageError(f"fatal: cannot force update the branch '{new}' used by worktree at '{repo.root}'")
    repo.rename_branch(old, new, force=force)

    for key in ('remote', 'merge'):
        value = repo.config.read_config(f'branch.{old}.{key}')
        if value is not None:
            repo.config.unset(f'branch.{old}.{key}')
            repo.config.write_config(f'branch.{new}.{key}', value)
    logger.info("branch_renamed", old=old, new=new)
    return ''


def list_branches(ctx, show_local=True, show_remote=False):
    repo = ctx.repo
    fmt = ctx.formatter
    current_branch = repo.get_current_branch()
    lines = []

    if show_local:
        if repo.is_detached():
            lines.append(f"* {fmt.current_branch(f'(HEAD detached at {repo.get_head_commit()[:7]})')}")
        for branch in repo.list_branches():
            if is_remote_tracking(repo, branch):
                continue
            if branch == current_branch:
                lines.append(f"* {fmt.current_branch(branch)}")
            else:
                lines.append(f"  {branch}")

    if show_remote:
        prefix = 'remotes/' if show_local else ''
        for branch in repo.list_branches():
            if is_remote_tracking(repo, branch):
                lines.append(f"  {fmt.remote_branch(prefix + branch)}")
    return '\n'.join(lines)
