# The command: git diff [--staged | --cached] [<commit> [<commit>]] [-- <path>...]
# What it does: Shows line-by-line changes between repository states: working tree vs. index (default), index vs. HEAD (--staged), working tree vs. <commit>, or <commit> vs. <commit>
# How it does: It gathers two dictionaries of {path: hash} for the "before" and "after" states. It identifies changed files by comparing hashes, fetches the two versions of the content, and passes them to a helper function that generates the unified diff text
# What data structure it uses: Hash Table / Dictionary (to represent the file states for quick lookups), Sets (for efficient comparison of file lists to find additions/deletions), List / Array (of file lines passed to the diffing algorithm)

from ..errors import UsageError
from ..utils import diff as diff_utils
from ..utils.paths import repo_relative, select
from ..utils.revision import resolve_commit


def run(ctx, args):
    repo = ctx.repo
    revisions = list(args.revisions)
    if len(revisions) > 2:
        raise UsageError("usage: git diff [--staged] [<commit> [<commit>]] [-- <path>...]")

    if args.staged:
        base = resolve_commit(repo, revisions[0]) if revisions else repo.get_head_commit()
        files1 = repo.files_of(base)
        files2 = repo.index.read_index()
    elif len(revisions) == 2:
        files1 = repo.files_of(resolve_commit(repo, revisions[0]))
        files2 = repo.files_of(resolve_commit(repo, revisions[1]))
    elif revisions:
        files1 = repo.files_of(resolve_commit(repo, revisions[0]))
        files2 = _tracked_working_files(repo, set(files1))
    else:
        files1 = repo.index.read_index()
        files2 = _tracked_working_files(repo, set(files1))

    paths = diff_utils.changed_paths(files1, files2)
    if args.pathspec:
        wanted = set()
        for spec in args.pathspec:
            wanted.update(select(paths, repo_relative(ctx, spec)))
        paths = sorted(wanted)

    if args.name_only:
        return '\n'.join(paths)

    lines = []
    for path in paths:
        lines.extend(file_diff(repo, path, files1.get(path), files2.get(path)))
    return '\n'.join(ctx.formatter.diff_line(line) for line in lines)


def _tracked_working_files(repo, tracked): # Working tree hashes of the paths the other side knows about, plus the index
    tracked = tracked | set(repo.index.paths())
    return {path: blob for path, blob in repo.worktree_hashes().items() if path in tracked}


def _content(repo, blob_hash):
    if blob_hash is None:
        return ''
    if blob_hash in repo.objects:
        return repo.blob_content(blob_hash)
    return None


def file_diff(repo, path, hash1, hash2): # git's per-file header followed by the unified hunks
    lines = [f"diff --git a/{path} b/{path}"]
    if hash1 is None:
        lines.append("new file mode 100644")
    elif hash2 is None:
        lines.append("deleted file mode 100644")
    lines.append(f"index {(hash1 or '0' * 40)[:7]}..{(hash2 or '0' * 40)[:7]}")

    content1 = _content(repo, hash1)
    content2 = _content(repo, hash2)
    if content2 is None: # Working tree content is not stored as an object
        content2 = repo.worktree.read(path)

    hunks = diff_utils.get_diff_lines(
        content1,
        content2,
        f"a/{path}" if hash1 is not None else '/dev/null',
        f"b/{path}" if hash2 is not None else '/dev/null',
    )
    lines.extend(hunks)
    return lines
