# What it does: Simulates the filesystem the sandbox user sees, and the working tree of the repository mounted inside it
# How it does: `VirtualFS` keeps every file and directory under the virtual home `~` keyed by normalized absolute path. `Worktree` is a view of the subtree where the repository is mounted, speaking repository-relative paths
# What data structure it uses: Dictionary (absolute path -> file content) and Set (known directories)

import posixpath

from ..constants import HOME
from ..errors import NoSuchFile


def normalize(cwd, path): # Resolves `path` against `cwd`; '~' is the root and can not be escaped with '..'
    if not path:
        return cwd
    if path == HOME or path.startswith(HOME + '/'):
        joined = path[len(HOME):]
    elif path.startswith('/'):
        joined = path
    else:
        joined = cwd[len(HOME):] + '/' + path
    resolved = posixpath.normpath('/' + joined.lstrip('/'))
    return HOME if resolved == '/' else HOME + resolved


def relative_to(root, path): # Returns `path` relative to `root`, or None when it is outside
    if path == root:
        return ''
    if path.startswith(root + '/'):
        return path[len(root) + 1:]
    return None


class VirtualFS:

    def __init__(self):
        self.files = {}
        self.dirs = {HOME}

    def is_dir(self, path):
        return path in self.dirs

    def is_file(self, path):
        return path in self.files

    def exists(self, path):
        return self.is_dir(path) or self.is_file(path)

    def mkdir(self, path, parents=False):
        if self.exists(path):
            raise NoSuchFile(f"mkdir: cannot create directory '{posixpath.basename(path)}': File exists")
        parent = posixpath.dirname(path)
        if not self.is_dir(parent):
            if not parents:
                raise NoSuchFile(f"mkdir: cannot create directory '{posixpath.basename(path)}': No such file or directory")
            self.mkdir(parent, parents=True)
        self.dirs.add(path)

    def makedirs(self, path):
        while path not in self.dirs and path != HOME:
            self.dirs.add(path)
            path = posixpath.dirname(path)

    def read(self, path):
        if path not in self.files:
            raise NoSuchFile(f"{posixpath.basename(path)}: No such file or directory")
        return self.files[path]

    def write(self, path, content):
        if self.is_dir(path):
            raise NoSuchFile(f"{posixpath.basename(path)}: Is a directory")
        self.makedirs(posixpath.dirname(path))
        self.files[path] = content

    def delete(self, path):
        self.files.pop(path, None)

    def listdir(self, path):
        if not self.is_dir(path):
            raise NoSuchFile(f"ls: cannot access '{posixpath.basename(path)}': No such file or directory")
        names = set()
        for entry in list(self.files) + list(self.dirs):
            rel = relative_to(path, entry)
            if rel:
                names.add(rel.split('/')[0])
        return sorted(names)

    def remove_tree(self, path):
        for entry in [f for f in self.files if relative_to(path, f) is not None]:
            del self.files[entry]
        for entry in [d for d in self.dirs if relative_to(path, d) is not None]:
            self.dirs.discard(entry)

    def snapshot(self):
        return dict(self.files), set(self.dirs)

    def restore(self, snapshot):
        files, dirs = snapshot
        self.files = dict(files)
        self.dirs = set(dirs)


class Worktree:

    def __init__(self, fs, root):
        self.fs = fs
        self.root = root

    def _abs(self, path):
        return f"{self.root}/{path}" if path else self.root

    def files(self): # Returns {relative path: content} for every file under the root
        result = {}
        for path, content in self.fs.files.items():
            rel = relative_to(self.root, path)
            if rel:
                result[rel] = content
        return dict(sorted(result.items()))

    def directories(self):
        return sorted(rel for rel in (relative_to(self.root, d) for d in self.fs.dirs) if rel)

    def exists(self, path):
        return self.fs.is_file(self._abs(path))

    def is_dir(self, path):
        return self.fs.is_dir(self._abs(path))

    def read(self, path):
        return self.fs.read(self._abs(path))

    def get(self, path):
        return self.fs.files.get(self._abs(path))

    def write(self, path, content):
        self.fs.write(self._abs(path), content)

    def delete(self, path): # Deletes a file and prunes the directories it leaves empty, like git does
        self.fs.delete(self._abs(path))
        parent = posixpath.dirname(path)
        while parent and self.fs.is_dir(self._abs(parent)) and not self.fs.listdir(self._abs(parent)):
            self.fs.dirs.discard(self._abs(parent))
            parent = posixpath.dirname(parent)

    def remove_dir(self, path):
        self.fs.remove_tree(self._abs(path))
