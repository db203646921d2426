# The command: git status [-s]
# What it does: Provides a summary of the repository state by comparing the HEAD commit, the index (staging area), and the working tree
# How it does: It generates three dictionaries of {path: hash} for the three states. It then compares these dictionaries to find staged changes (HEAD vs. index), unstaged changes (index vs. working tree), and untracked files (files in the working tree but not in the index)
# What data structure it uses: Hash Table / Dictionary (to represent the three states for efficient O(1) average time complexity lookups), Sets (for efficient comparison of file lists to find additions/deletions in O(N) time)

from dataclasses import dataclass, field

from ..utils import history
from ..utils.ignore import is_ignored


@dataclass
class Status:
    staged: dict = field(default_factory=dict) # {'new file': [...], 'modified': [...], 'deleted': [...]}
    unstaged: dict = field(default_factory=dict) # {'modified': [...], 'deleted': [...]}
    untracked: list = field(default_factory=list)
    conflicted: list = field(default_factory=list)

    @property
    def staged_paths(self):
        return sorted(p for paths in self.staged.values() for p in paths)

    @property
    def modified_paths(self):
        return sorted(p for paths in self.unstaged.values() for p in paths)

    @property
    def clean(self):
        return not (self.staged_paths or self.modified_paths or self.untracked or self.conflicted)


def compute_status(repo): # Compares the HEAD, index, and working tree states
    head_files = repo.head_files()
    index_files = repo.index.read_index()
    working_files = repo.worktree_hashes()
    ignore_patterns = repo.ignore_patterns()

    staged_changes = _compare_dicts(head_files, index_files)
    unstaged_changes = _compare_dicts(index_files, working_files)

    # Untracked files are in the working tree but not in the index
    untracked_files = sorted(
        path for path in set(working_files) - set(index_files)
        if not is_ignored(path, ignore_patterns)
    )

    conflicted = sorted(repo.merge_state.conflicts) if repo.merge_state else []
    untracked_files = [p for p in untracked_files if p not in conflicted]

    return Status(
        staged=staged_changes,
        unstaged={'modified': unstaged_changes['modified'], 'deleted': unstaged_changes['deleted']},
        untracked=untracked_files,
        conflicted=conflicted,
    )


def _compare_dicts(d1, d2): # Compares two {path: hash} dictionaries and returns a dict of changes
    changes = {'new file': [], 'modified': [], 'deleted': []}

    keys1, keys2 = set(d1), set(d2)

    # New files (in d2 but not d1)
    changes['new file'] = sorted(keys2 - keys1)
    # Deleted files (in d1 but not d2)
    changes['deleted'] = sorted(keys1 - keys2)
    # Modified files (in both but with different hashes)
    changes['modified'] = sorted(path for path in keys1 & keys2 if d1[path] != d2[path])

    return changes


def run(ctx, args):
    status = compute_status(ctx.repo)
    if args.short:
        return format_short(ctx, status)
    return format_long(ctx, status)


def tracking_summary(repo, branch): # "Your branch is ahead of 'origin/main' by 1 commit." and friends
    upstream = repo.config.get_upstream(branch)
    if not upstream:
        return None
    upstream = "/".join(upstream)
    upstream_commit = repo.get_branch_commit(upstream)
    local_commit = repo.get_branch_commit(branch)
    if not upstream_commit or not local_commit:
        return None

    ahead = len(history.reachable(repo, local_commit) - history.reachable(repo, upstream_commit))
    behind = len(history.reachable(repo, upstream_commit) - history.reachable(repo, local_commit))
    if ahead and behind:
        return (f"Your branch and '{upstream}' have diverged,\n"
                f"and have {ahead} and {behind} different commits each, respectively.")
    if ahead:
        return f"Your branch is ahead of '{upstream}' by {ahead} commit{'s' if ahead > 1 else ''}."
    if behind:
        return (f"Your branch is behind '{upstream}' by {behind} commit{'s' if behind > 1 else ''}, "
                "and can be fast-forwarded.")
    return f"Your branch is up to date with '{upstream}'."


def format_long(ctx, status):
    repo = ctx.repo
    fmt = ctx.formatter
    lines = [repo.get_head_status()]

    branch = repo.get_current_branch()
    if branch:
        summary = tracking_summary(repo, branch)
        if summary:
            lines.append(summary)
    if not repo.get_head_commit():
        lines.extend(['', 'No commits yet'])

    if repo.merge_state:
        if status.conflicted:
            lines.extend(['You have unmerged paths.', '  (fix conflicts and run "git commit")',
                          '  (use "git merge --abort" to abort the merge)'])
        else:
            lines.extend(['All conflicts fixed but you are still merging.',
                          '  (use "git commit" to conclude merge)'])

    staged = [(kind, p) for kind, paths in status.staged.items() for p in paths if p not in status.conflicted]
    if staged:
        lines.extend(['', 'Changes to be committed:', '  (use "git restore --staged <file>..." to unstage)'])
        for kind, path in sorted(staged, key=lambda item: item[1]):
            lines.append(fmt.staged(f"\t{kind + ':':<12}{path}"))

    if status.conflicted:
        lines.extend(['', 'Unmerged paths:', '  (use "git add <file>..." to mark resolution)'])
        for path in status.conflicted:
            lines.append(fmt.unstaged(f"\t{'both modified:':<18}{path}"))

    unstaged = [(kind, p) for kind, paths in status.unstaged.items() for p in paths if p not in status.conflicted]
    if unstaged:
        lines.extend(['', 'Changes not staged for commit:',
                      '  (use "git add <file>..." to update what will be committed)',
                      '  (use "git restore <file>..." to discard changes in working directory)'])
        for kind, path in sorted(unstaged, key=lambda item: item[1]):
            lines.append(fmt.unstaged(f"\t{kind + ':':<12}{path}"))

    if status.untracked:
        lines.extend(['', 'Untracked files:', '  (use "git add <file>..." to include in what will be committed)'])
        for path in status.untracked:
            lines.append(fmt.unstaged(f"\t{path}"))

    if status.clean:
        lines.extend(['', 'nothing to commit, working tree clean'])
    elif not staged and not status.conflicted:
        if unstaged:
            lines.extend(['', 'no changes added to commit (use "git add" and/or "git commit -a")'])
        else:
            lines.extend(['', 'nothing added to commit but untracked files present (use "git add" to track)'])
    return '\n'.join(lines)


def format_short(ctx, status):
    fmt = ctx.formatter
    codes = {'new file': 'A', 'modified': 'M', 'deleted': 'D'}
    rows = {}
    for kind, paths in status.staged.items():
        for path in paths:
            rows.setdefault(path, [' ', ' '])[0] = codes[kind]
    for kind, paths in status.unstaged.items():
        for path in paths:
            rows.setdefault(path, [' ', ' '])[1] = codes[kind]
    for path in status.conflicted:
        rows.setdefault(path, [' ', ' '])

    lines = []
    for path in sorted(rows):
        if path in status.conflicted:
            lines.append(fmt.unstaged(f"UU {path}"))
            continue
        x, y = rows[path]
        lines.append(f"{fmt.staged(x)}{fmt.unstaged(y)} {path}")
    lines.extend(fmt.unstaged(f"?? {path}") for path in status.untracked)
    return '\n'.join(lines)
