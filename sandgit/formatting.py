# What it does: Turns repository facts into the git-like text blocks the commands print (hashes, ref decorations, log entries, status sections, diffs)
# How it does: A `Formatter` carries the color switch of the session and wraps `click.style`, so every command formats the same way and tests can switch colors off
# What data structure it uses: Lists of output lines joined at the end

import time

import click

from .constants import SHORT_HASH
from .utils.diff import compare_states


class Formatter:

    def __init__(self, color=True):
        self.color = color

    def style(self, text, **styles):
        if not self.color:
            return text
        return click.style(text, **styles)

    def short_id(self, commit_hash):
        return self.style(commit_hash[:SHORT_HASH], fg='yellow')

    def full_id(self, commit_hash):
        return self.style(commit_hash, fg='yellow')

    def staged(self, text):
        return self.style(text, fg='green')

    def unstaged(self, text):
        return self.style(text, fg='red')

    def current_branch(self, text):
        return self.style(text, fg='green')

    def remote_branch(self, text):
        return self.style(text, fg='red')

    def decoration(self, names): # ' (HEAD -> main, origin/main, tag: v1)' or ''
        if not names:
            return ''
        open_paren = self.style('(', fg='yellow')
        close_paren = self.style(')', fg='yellow')
        inner = self.style(', ', fg='yellow').join(self._decoration_name(name) for name in names)
        return f" {open_paren}{inner}{close_paren}"

    def _decoration_name(self, name):
        if name.startswith('HEAD'):
            return self.style(name, fg='cyan', bold=True)
        if name.startswith('tag: '):
            return self.style(name, fg='yellow', bold=True)
        if '/' in name:
            return self.style(name, fg='red', bold=True)
        return self.style(name, fg='green', bold=True)

    def diff_line(self, line):
        if line.startswith(('+++', '---', 'diff ', 'index ', 'new file', 'deleted file')):
            return self.style(line, bold=True)
        if line.startswith('+'):
            return self.style(line, fg='green')
        if line.startswith('-'):
            return self.style(line, fg='red')
        if line.startswith('@@'):
            return self.style(line, fg='cyan')
        return line


def format_date(timestamp): # git's default date layout, always in UTC
    return time.strftime('%a %b %d %H:%M:%S %Y +0000', time.gmtime(timestamp))


def ref_decorations(repo, commit_hash):
    """
    Names pointing at a commit, in git's decoration order:
    HEAD (with its branch), local branches, remote-tracking branches, tags.
    """
    names = []
    current_branch = repo.get_current_branch()
    head_commit = repo.get_head_commit()
    if head_commit == commit_hash:
        names.append(f"HEAD -> {current_branch}" if current_branch else "HEAD")

    branches = [b for b, c in repo.branches.items() if c == commit_hash and b != current_branch]
    local = sorted(b for b in branches if not is_remote_tracking(repo, b))
    remote = sorted(b for b in branches if is_remote_tracking(repo, b))
    names.extend(local)
    names.extend(remote)
    names.extend(f"tag: {t}" for t in sorted(repo.tags) if repo.tags[t] == commit_hash)
    return names


def is_remote_tracking(repo, branch_name): # 'origin/main' when 'origin' is a registered remote
    remote, sep, _ = branch_name.partition('/')
    return bool(sep) and remote in repo.remotes


def format_commit(formatter, repo, commit, oneline=False, graph=False):
    decoration = formatter.decoration(ref_decorations(repo, commit.id))
    prefix = '* ' if graph else ''
    if oneline:
        return f"{prefix}{formatter.short_id(commit.id)}{decoration} {commit.summary}"

    lines = [f"{prefix}{formatter.style('commit ' + commit.id, fg='yellow')}{decoration}"]
    pad = '| ' if graph else ''
    if commit.merge_parent:
        lines.append(f"{pad}Merge: {commit.parent[:SHORT_HASH]} {commit.merge_parent[:SHORT_HASH]}")
    lines.append(f"{pad}Author: {commit.author}")
    lines.append(f"{pad}Date:   {format_date(commit.timestamp)}")
    lines.append(pad.rstrip())
    for message_line in commit.message.rstrip('\n').splitlines():
        lines.append(f"{pad}    {message_line}".rstrip())
    return '\n'.join(lines)


def join_blocks(*blocks): # Joins non-empty text blocks with newlines
    return '\n'.join(block for block in blocks if block)


def change_summary(old_files, new_files): # ' 2 files changed' plus git's create/delete mode lines
    changes = compare_states(old_files, new_files)
    count = len(changes['added']) + len(changes['deleted']) + len(changes['modified'])
    if not count:
        return ''
    lines = [f" {count} file{'s' if count != 1 else ''} changed"]
    lines.extend(f" create mode 100644 {path}" for path in changes['added'])
    lines.extend(f" delete mode 100644 {path}" for path in changes['deleted'])
    return '\n'.join(lines)
