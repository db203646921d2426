# What it does: Implements the `.gitignore` functionality of the sandbox working tree
# What data structure it uses: Set (to store the ignore patterns for efficient, near O(1) average time complexity lookups)

from fnmatch import fnmatch


def get_ignored_patterns(worktree):
    """
    Reads the .gitignore file at the root of the working tree and returns a set of glob patterns.
    """
    patterns = {'.git', '.git/*'} # Always ignore these

    content = worktree.get('.gitignore')
    if content:
        for line in content.splitlines():
            line = line.strip()
            if line and not line.startswith('#'):
                patterns.add(line.rstrip('/'))
    return patterns


def is_ignored(path, ignore_patterns): # Returns True if the path or one of its directories matches any ignore pattern
    for pattern in ignore_patterns:
        if fnmatch(path, pattern) or any(fnmatch(part, pattern) for part in path.split('/')):
            return True
    return False
