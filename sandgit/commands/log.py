# The command: git log [--oneline] [--all] [--graph] [-<n> | -n <n>] [<revision>]
# What it does: Displays the commit history reachable from HEAD (or from <revision>, or from every branch with --all), newest first
# How it does: It collects every commit reachable from the starting points with a breadth-first walk over the parent links, then lists them in topological order so that a commit always shows before its parents, breaking ties by timestamp. Each entry is decorated with the branches, tags and HEAD pointing at it
# What data structure it uses: It performs a Graph Traversal on the Directed Acyclic Graph (DAG) formed by the commits, with a Set for visited commits and a Heap for the ordering

from ..errors import RefNotFound, UsageError
from ..formatting import format_commit
from ..utils import history
from ..utils.revision import resolve_commit


def run(ctx, args):
    repo = ctx.repo

    if args.max_count is not None and args.max_count < 0:
        raise UsageError(f"fatal: invalid max count: {args.max_count}")

    if args.all:
        starts = list(repo.branches.values()) + list(repo.tags.values()) + [repo.get_head_commit()]
    elif args.revision:
        starts = [resolve_commit(repo, args.revision)]
    else:
        head_commit = repo.get_head_commit()
        if not head_commit: # Check if there are any commits
            current_branch = repo.get_current_branch() or 'HEAD'
            raise RefNotFound('HEAD', f"fatal: your current branch '{current_branch}' does not have any commits yet")
        starts = [head_commit]

    commits = history.ordered_commits(repo, history.reachable(repo, *starts))
    if args.max_count is not None:
        commits = commits[:args.max_count]

    entries = [format_commit(ctx.formatter, repo, c, oneline=args.oneline, graph=args.graph) for c in commits]
    return ('\n' if args.oneline else '\n\n').join(entries)
