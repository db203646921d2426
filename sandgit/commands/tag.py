# The command: git tag | git tag <name> [<commit>] | git tag -d <name>...
# What it does: Creates a lightweight tag pointing to a commit (HEAD by default), deletes tags, or lists existing tags
# How it does: To create a tag, it resolves the commit and adds a name -> commit hash entry to the tag table, which is never moved afterwards. To list, it reads that table in name order
# What data structure it uses: Map / Dictionary (tag name -> commit hash), similar to branches

from ..errors import UsageError
from ..logging import get_logger
from ..utils.revision import resolve_commit
from .branch import validate_branch_name

logger = get_logger(__name__)


def run(ctx, args):
    repo = ctx.repo
    if args.delete:
        if not args.names:
            raise UsageError("fatal: tag name required")
        lines = []
        for name in args.names:
            commit_hash = repo.delete_tag(name)
            logger.info("tag_deleted", tag=name, commit=commit_hash)
            lines.append(f"Deleted tag '{name}' (was {commit_hash[:7]})")
        return '\n'.join(lines)

    if not args.names:
        return '\n'.join(repo.list_tags())
    if len(args.names) > 2:
        raise UsageError("fatal: too many arguments")
    return create_tag(ctx, *args.names)


def create_tag(ctx, name, revision=None):
    repo = ctx.repo
    try:
        validate_branch_name(name)
    except UsageError:
        raise UsageError(f"fatal: '{name}' is not a valid tag name.")
    commit_hash = resolve_commit(repo, revision) if revision else None
    commit_hash = repo.tag(name, commit_hash)
    logger.info("tag_created", tag=name, commit=commit_hash)
    return ''
