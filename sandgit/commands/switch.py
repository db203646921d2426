# The command: git switch <branch> | -c|-C <name> [<start>] | --detach <commit>
# What it does: Switches branches. Unlike checkout it never touches individual paths and only detaches HEAD when asked to
# How it does: It reuses checkout's tree switch: attach to an existing branch, create a branch and attach to it, or detach at a resolved commit. A name that only exists as a remote-tracking branch creates the local branch from it
# What data structure it uses: Dictionary (the branch table and the trees being compared)

from ..errors import UnresolvedReference, UsageError
from ..formatting import is_remote_tracking
from ..utils.revision import resolve_commit, try_resolve
from . import checkout


def run(ctx, args):
    repo = ctx.repo
    targets = list(args.targets)
    if len(targets) > 1 or (len(targets) > 0 and args.pathspec):
        raise UsageError("fatal: only one reference expected")

    if args.create or args.force_create:
        name = args.create or args.force_create
        return checkout.create_and_switch(ctx, name, targets[0] if targets else None, force_create=bool(args.force_create))

    if not targets:
        raise UsageError("fatal: missing branch or commit argument")
    target = targets[0]

    if args.detach:
        return checkout.detach_at(ctx, resolve_commit(repo, target), target, force=args.discard_changes)

    if target in repo.branches and not is_remote_tracking(repo, target):
        return checkout.switch_branch(ctx, target, force=args.discard_changes)

    tracking = checkout.guess_remote_branch(repo, target)
    if tracking:
        return checkout.create_and_switch(ctx, target, tracking)

    if try_resolve(repo, target):
        raise UsageError(
            f"fatal: a branch is expected, got '{target}'\n"
            "hint: If you want to detach HEAD at the commit, try again with the --detach option."
        )
    raise UnresolvedReference(target, f"fatal: invalid reference: {target}")
