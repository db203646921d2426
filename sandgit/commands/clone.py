# The command: git clone <url> [<directory>]
# What it does: Creates a new repository in <directory> (default: the last segment of the URL without `.git`) connected to a simulated remote `origin`, and checks out its `main` branch
# How it does: Inside a simulated download it mounts an empty repository at the target, registers `origin`, records the single initial commit the simulated server holds (a README.md), copies the server branches to `origin/*` tracking branches and checks out a local `main` that tracks `origin/main`. The shell cursor does not move
# What data structure it uses: Same as init, fetch and checkout (branch tables, index, object store)

from ..constants import DEFAULT_BRANCH, DEFAULT_REMOTE
from ..errors import UsageError
from ..logging import get_logger
from ..network import DOWNLOAD
from ..utils.worktree import normalize
from .remote import add_remote, record_remote_commit

logger = get_logger(__name__)


def repository_name(url): # 'https://example.com/team/app.git' -> 'app'
    name = url.rstrip('/').replace(':', '/').rsplit('/', 1)[-1]
    if name.endswith('.git'):
        name = name[:-len('.git')]
    return name


def run(ctx, args):
    name = repository_name(args.url)
    directory = args.directory or name
    if not directory:
        raise UsageError(f"fatal: could not guess a directory name from '{args.url}'")

    fs = ctx.session.fs
    target = normalize(ctx.cwd, directory)
    if fs.is_file(target):
        raise UsageError(f"fatal: destination path '{directory}' already exists and is not a directory.")
    if fs.is_dir(target) and fs.listdir(target):
        raise UsageError(f"fatal: destination path '{directory}' already exists and is not an empty directory.")

    with ctx.network.transfer(DOWNLOAD, clone=True):
        repo = ctx.session.mount(target)
        repo.init(DEFAULT_BRANCH)
        add_remote(repo, DEFAULT_REMOTE, args.url)
        record_remote_commit(repo, DEFAULT_REMOTE, DEFAULT_BRANCH, {'README.md': f"# {name}\n"}, "Initial commit")

        remote = repo.remotes[DEFAULT_REMOTE]
        for branch, commit_hash in remote.branches.items():
            repo.set_branch(f"{DEFAULT_REMOTE}/{branch}", commit_hash)

        main_commit = remote.branches[DEFAULT_BRANCH]
        repo.switch_tree(repo.files_of(main_commit), force=True)
        repo.set_branch(DEFAULT_BRANCH, main_commit)
        repo.attach_head(DEFAULT_BRANCH)
        repo.config.set_upstream(DEFAULT_BRANCH, DEFAULT_REMOTE, DEFAULT_BRANCH)

    count = len(repo.files_of(main_commit)) + 2 # blobs, the tree and the commit
    logger.info("clone_finished", url=args.url, target=target, commit=main_commit)
    return (
        f"Cloning into '{directory}'...\n"
        f"remote: Enumerating objects: {count}, done.\n"
        f"remote: Total {count} (delta 0), reused 0 (delta 0)\n"
        f"Receiving objects: 100% ({count}/{count}), done."
    )
