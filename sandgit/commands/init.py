# The command: git init [<directory>] [-b <branch>]
# What it does: Initializes a new, empty repository in the current directory (or in <directory>) and mounts it as the session's repository
# How it does: It asks the session for a fresh `Repository` handle rooted at the target directory and points its HEAD at the unborn default branch. Files already in the directory stay in the working tree, untracked
# What data structure it uses: Tree (the virtual directory structure). It also lays the foundation for a Hash Table (the object database) and a Directed Acyclic Graph (the commit history)

from ..logging import get_logger
from ..utils.worktree import normalize

logger = get_logger(__name__)


def run(ctx, args):
    target = normalize(ctx.cwd, args.directory) if args.directory else ctx.cwd
    reinitialized = ctx.repo is not None and ctx.repo.initialized and ctx.repo.root == target

    repo = ctx.session.mount(target)
    repo.init(args.initial_branch)
    logger.info("repository_initialized", root=target, branch=repo.get_current_branch())

    if reinitialized:
        return f"Reinitialized existing Git repository in {target}/.git/"
    return f"Initialized empty Git repository in {target}/.git/"
