# What it does: Manages the in-memory object database of a sandbox repository, storing every blob, tree and commit
# How it does: It implements a content-addressed store. `hash_object` saves content under its SHA-1 and returns the hash, `read_object` retrieves it. It also builds and reads the hierarchical tree objects and serializes commits in git's text layout
# What data structure it uses: Hash Table / Dictionary (the object store maps SHA-1 to compressed object data). Trees form a Merkle Tree built and read recursively

import hashlib
import zlib
from dataclasses import dataclass, field

from ..errors import AmbiguousObjectName, ObjectNotFound, UnresolvedReference
from ..constants import MIN_ABBREV


@dataclass(frozen=True)
class Commit:
    id: str
    message: str
    author: str
    timestamp: int
    parents: tuple = ()
    tree_id: str = ""
    tree: dict = field(default_factory=dict, compare=False, repr=False)

    @property
    def parent(self): # Primary parent, None for a root commit
        return self.parents[0] if self.parents else None

    @property
    def merge_parent(self):
        return self.parents[1] if len(self.parents) > 1 else None

    @property
    def summary(self):
        lines = self.message.splitlines()
        return lines[0] if lines else ""


class ObjectStore:

    def __init__(self):
        self._objects = {}
        self._sequence = {} # sha1 -> creation order, used to break timestamp ties

    def __contains__(self, sha1):
        return sha1 in self._objects

    def hash_object(self, content, obj_type, write=True): # Hashes content and optionally stores it as an object of the given type ('blob', 'tree', 'commit')
        if isinstance(content, str):
            content = content.encode()
        header = f'{obj_type} {len(content)}\0'.encode()
        data = header + content

        sha1 = hashlib.sha1(data).hexdigest()

        if write and sha1 not in self._objects:
            self._objects[sha1] = zlib.compress(data)
            self._sequence[sha1] = len(self._sequence)

        return sha1

    def read_object(self, sha1): # Returns the type and content of the object stored under sha1
        if sha1 not in self._objects:
            raise ObjectNotFound(sha1)

        data = zlib.decompress(self._objects[sha1])

        null_byte_index = data.find(b'\0')
        header = data[:null_byte_index].decode()
        content = data[null_byte_index + 1:]

        obj_type, _ = header.split(' ')

        return obj_type, content

    def sequence(self, sha1):
        return self._sequence.get(sha1, -1)

    def iter_ids(self, obj_type=None):
        for sha1 in self._objects:
            if obj_type is None or self.read_object(sha1)[0] == obj_type:
                yield sha1

    def expand_prefix(self, prefix, obj_type='commit'): # Expands an abbreviated object id to the single object it names
        prefix = prefix.lower()
        if len(prefix) < MIN_ABBREV or any(c not in '0123456789abcdef' for c in prefix):
            raise UnresolvedReference(prefix)
        matches = [sha1 for sha1 in self.iter_ids(obj_type) if sha1.startswith(prefix)]
        if not matches:
            raise UnresolvedReference(prefix)
        if len(matches) > 1:
            raise AmbiguousObjectName(prefix)
        return matches[0]

    # Trees

    def build_tree(self, files): # Builds a nested dictionary representing the directory structure of a flat {path: blob} map
        tree = {}
        for path, blob in files.items():
            parts = path.split('/')
            current_level = tree
            for part in parts[:-1]:
                current_level = current_level.setdefault(part, {})
            current_level[parts[-1]] = blob
        return tree

    def write_tree(self, tree_dict): # Recursively writes a tree object from a nested dictionary and returns its hash
        entries = []
        for name, value in sorted(tree_dict.items()):
            if isinstance(value, dict):
                sha1 = self.write_tree(value)
                mode = '040000'
                entry_type = 'tree'
            else:
                sha1 = value
                mode = '100644'
                entry_type = 'blob'

            # Format is: <mode> <type> <hash>\t<name>
            entries.append(f"{mode} {entry_type} {sha1}\t{name}".encode())

        tree_content = b'\n'.join(entries)
        return self.hash_object(tree_content, 'tree')

    def write_files(self, files):
        return self.write_tree(self.build_tree(files))

    def read_tree(self, tree_sha): # Reads a tree object recursively into a flat {path: blob} map
        files = {}

        def read_tree_recursive(sha1, path_prefix=""):
            obj_type, content = self.read_object(sha1)
            if obj_type != 'tree':
                raise TypeError(f"Object {sha1} is not a tree")

            for line in content.decode().splitlines():
                # Line format: <mode> <type> <hash>\t<name>
                header, name = line.split('\t', 1)
                _, entry_type, entry_sha = header.split(' ')
                current_path = f"{path_prefix}/{name}" if path_prefix else name

                if entry_type == 'blob':
                    files[current_path] = entry_sha
                elif entry_type == 'tree':
                    read_tree_recursive(entry_sha, current_path)

        read_tree_recursive(tree_sha)
        return files

    # Commits

    def write_commit(self, tree_hash, parents, author, timestamp, message, committer=None, commit_time=None):
        lines = [f'tree {tree_hash}']
        for parent in parents:
            if parent:
                lines.append(f'parent {parent}')
        lines.append(f'author {author} {timestamp} +0000')
        lines.append(f'committer {committer or author} {commit_time or timestamp} +0000')
        lines.append('')
        lines.append(message)

        return self.hash_object('\n'.join(lines), 'commit')

    def read_commit(self, sha1):
        obj_type, content = self.read_object(sha1)
        if obj_type != 'commit':
            raise ObjectNotFound(sha1)

        headers, _, message = content.decode().partition('\n\n')
        tree_hash = None
        parents = []
        author, timestamp = '', 0
        for line in headers.splitlines():
            if line.startswith('tree '):
                tree_hash = line.split(' ')[1]
            elif line.startswith('parent '):
                parents.append(line.split(' ')[1])
            elif line.startswith('author '):
                # author <name> <<email>> <timestamp> <tz>
                identity, stamp, _ = line[len('author '):].rsplit(' ', 2)
                author, timestamp = identity, int(stamp)

        return Commit(
            id=sha1,
            message=message,
            author=author,
            timestamp=timestamp,
            parents=tuple(parents),
            tree_id=tree_hash,
            tree=self.read_tree(tree_hash) if tree_hash else {},
        )
