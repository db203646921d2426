# What it does: Is the primitive backend of a sandbox repository: object store, index, branch and tag pointers, HEAD and the working tree behind one handle
# How it does: HEAD is kept the way git writes it, either `ref: refs/heads/<branch>` or a bare commit hash. Branches and tags are name -> hash maps kept apart from the immutable commits they point to, so every pointer move is a single dictionary update
# What data structure it uses: Hash Table / Dictionary (refs, index, object store). Conceptually it manages pointers into the Directed Acyclic Graph of commits

import time
from dataclasses import dataclass, field, replace

from ..errors import (
    BranchExists,
    LocalChangesConflict,
    PathspecNotFound,
    RefNotFound,
    TagExists,
)
from .config import RepoConfig
from .ignore import get_ignored_patterns, is_ignored
from .index import Index
from .objects import ObjectStore
from .worktree import Worktree

HEAD_REF_PREFIX = 'ref: refs/heads/'


@dataclass
class Remote:
    name: str
    url: str
    branches: dict = field(default_factory=dict) # branch refs as the simulated server holds them

    def copy(self):
        return replace(self, branches=dict(self.branches))


@dataclass(frozen=True)
class StashEntry:
    id: str # commit recording the working tree snapshot
    label: str
    files: dict # path -> working tree content, None when the path was deleted
    index: dict # path -> staged blob hash, None when the path was not staged


@dataclass
class MergeState:
    head: str
    message: str
    conflicts: set = field(default_factory=set)

    def copy(self):
        return replace(self, conflicts=set(self.conflicts))


class Repository:

    def __init__(self, fs, root, clock=time.time):
        self.fs = fs
        self.root = root
        self.worktree = Worktree(fs, root)
        self.clock = clock
        self.config = RepoConfig()
        self._reset_state()
        self._head = None

    def _reset_state(self):
        self.objects = ObjectStore()
        self.index = Index()
        self.branches = {}
        self.tags = {}
        self.remotes = {}
        self.stashes = []
        self.merge_state = None

    def init(self, default_branch=None): # Empties every piece of git state and points HEAD at an unborn default branch
        self._reset_state()
        self.config = RepoConfig()
        branch = default_branch or self.config.read_config('init.defaultBranch')
        self._head = f'{HEAD_REF_PREFIX}{branch}'
        self.fs.makedirs(self.root)

    @property
    def initialized(self):
        return self._head is not None

    # HEAD

    def get_head_commit(self): # Retrieves the commit hash that HEAD points to, or None if there are no commits
        if self._head is None:
            return None
        if self._head.startswith(HEAD_REF_PREFIX):
            return self.branches.get(self._head[len(HEAD_REF_PREFIX):])
        return self._head

    def get_current_branch(self): # Retrieves the name of the branch HEAD points to, or None in detached HEAD state
        if self._head and self._head.startswith(HEAD_REF_PREFIX):
            return self._head[len(HEAD_REF_PREFIX):]
        return None

    def is_detached(self):
        return self._head is not None and not self._head.startswith(HEAD_REF_PREFIX)

    def get_head_status(self): # Returns a user-friendly string describing HEAD state
        current_branch = self.get_current_branch()
        if current_branch:
            return f"On branch {current_branch}"
        head_commit = self.get_head_commit()
        if head_commit:
            return f"HEAD detached at {head_commit[:7]}"
        return "HEAD detached (no commits yet)"

    def attach_head(self, branch_name):
        self._head = f'{HEAD_REF_PREFIX}{branch_name}'

    def detach_head(self, commit_hash):
        self._head = commit_hash

    def update_head(self, commit_hash): # Moves the current branch, or HEAD itself when detached
        current_branch = self.get_current_branch()
        if current_branch:
            self.branches[current_branch] = commit_hash
        else:
            self._head = commit_hash

    # Branches and tags

    def list_branches(self):
        return sorted(self.branches)

    def get_branch_commit(self, branch_name):
        return self.branches.get(branch_name)

    def branch(self, name, start_id=None, force=False): # Creates a branch at start_id (default: HEAD)
        if name in self.branches and not force:
            raise BranchExists(name)
        commit_hash = start_id or self.get_head_commit()
        if not commit_hash:
            raise RefNotFound('HEAD', f"fatal: Not a valid object name: '{self.get_current_branch() or 'HEAD'}'.")
        self.branches[name] = commit_hash
        return commit_hash

    def set_branch(self, name, commit_hash):
        self.branches[name] = commit_hash

    def delete_branch(self, name):
        if name not in self.branches:
            raise RefNotFound(name, f"error: branch '{name}' not found.")
        return self.branches.pop(name)

    def rename_branch(self, old, new, force=False):
        unborn = old == self.get_current_branch() and old not in self.branches
        if old not in self.branches and not unborn:
            raise RefNotFound(old, f"error: refname refs/heads/{old} not found\nfatal: Branch rename failed")
        if new in self.branches and new != old and not force:
            raise BranchExists(new)
        if not unborn:
            self.branches[new] = self.branches.pop(old)
        if self.get_current_branch() == old:
            self.attach_head(new)

    def list_tags(self):
        return sorted(self.tags)

    def tag(self, name, commit_hash=None):
        if name in self.tags:
            raise TagExists(name)
        commit_hash = commit_hash or self.get_head_commit()
        if not commit_hash:
            raise RefNotFound('HEAD', "fatal: Failed to resolve 'HEAD' as a valid ref.")
        self.tags[name] = commit_hash
        return commit_hash

    def delete_tag(self, name):
        if name not in self.tags:
            raise RefNotFound(name, f"error: tag '{name}' not found.")
        return self.tags.pop(name)

    def resolve_ref(self, ref): # Direct ref lookup: HEAD, full ref names, branch names, tag names
        if ref == 'HEAD':
            commit_hash = self.get_head_commit()
            if not commit_hash:
                raise RefNotFound(ref)
            return commit_hash
        for prefix, table in (('refs/heads/', self.branches), ('refs/tags/', self.tags), ('refs/remotes/', self.branches)):
            if ref.startswith(prefix) and ref[len(prefix):] in table:
                return table[ref[len(prefix):]]
        if ref in self.branches:
            return self.branches[ref]
        if ref in self.tags:
            return self.tags[ref]
        raise RefNotFound(ref)

    def expand_oid(self, prefix):
        return self.objects.expand_prefix(prefix)

    # Commits and blobs

    def read_commit(self, commit_hash):
        return self.objects.read_commit(commit_hash)

    def files_of(self, commit_hash): # {path: blob} of a commit's tree, empty for no commit
        if not commit_hash:
            return {}
        return dict(self.read_commit(commit_hash).tree)

    def head_files(self):
        return self.files_of(self.get_head_commit())

    def default_author(self):
        user_name, user_email = self.config.get_user_config()
        return f"{user_name} <{user_email}>"

    def commit(self, message, author=None, parents=None, tree=None, timestamp=None, update_head=True): # Writes a commit object; tree defaults to the index, parents to HEAD
        if tree is None:
            tree = self.objects.write_files(self.index.read_index())
        if parents is None:
            head_commit = self.get_head_commit()
            parents = [head_commit] if head_commit else []
        now = int(self.clock())
        commit_hash = self.objects.write_commit(
            tree,
            parents,
            author or self.default_author(),
            timestamp if timestamp is not None else now,
            message,
            committer=self.default_author(),
            commit_time=now,
        )
        if update_head:
            self.update_head(commit_hash)
        return commit_hash

    def list_files(self, ref):
        return sorted(self.files_of(self.resolve_ref(ref)))

    def blob_content(self, blob_hash):
        return self.objects.read_object(blob_hash)[1].decode(errors='replace')

    def read_blob(self, commit_hash, path):
        files = self.files_of(commit_hash)
        if path not in files:
            raise PathspecNotFound(path, f"fatal: path '{path}' does not exist in '{commit_hash[:7]}'")
        return self.blob_content(files[path])

    def hash_content(self, content, write=False):
        return self.objects.hash_object(content, 'blob', write=write)

    # Index and working tree

    def worktree_hashes(self): # {path: blob hash} of the working tree, without storing the blobs
        return {path: self.hash_content(content) for path, content in self.worktree.files().items()}

    def ignore_patterns(self):
        return get_ignored_patterns(self.worktree)

    def is_ignored(self, path):
        return is_ignored(path, self.ignore_patterns())

    def add(self, path): # Stages the working tree content of path, or its deletion
        content = self.worktree.get(path)
        if content is not None:
            self.index.update_index_entry(path, self.hash_content(content, write=True))
        elif path in self.index:
            self.index.remove_index_entry(path)
        else:
            raise PathspecNotFound(path)

    def remove(self, path):
        if path not in self.index:
            raise PathspecNotFound(path)
        self.index.remove_index_entry(path)

    def reset_index(self, path, commit_hash=None): # Makes the index entry of path match a commit (default: HEAD)
        files = self.files_of(commit_hash or self.get_head_commit())
        if path in files:
            self.index.update_index_entry(path, files[path])
        else:
            self.index.remove_index_entry(path)

    def write_path(self, path, blob_hash, stage=True):
        self.worktree.write(path, self.blob_content(blob_hash))
        if stage:
            self.index.update_index_entry(path, blob_hash)

    def drop_path(self, path, stage=True):
        if self.worktree.exists(path):
            self.worktree.delete(path)
        if stage:
            self.index.remove_index_entry(path)

    def local_changes(self, paths=None): # Paths whose index or working tree differs from HEAD
        head = self.head_files()
        index = self.index.read_index()
        work = self.worktree_hashes()
        candidates = paths if paths is not None else set(head) | set(index)
        return sorted(p for p in candidates if index.get(p) != head.get(p) or work.get(p) != index.get(p))

    def switch_tree(self, target_files, force=False, operation='checkout'):
        """
        Moves index and working tree from HEAD's tree to target_files.
        Without force only the paths that differ between the two trees are touched and
        uncommitted work on those paths aborts the switch. With force every tracked path is reset.
        """
        head = self.head_files()
        index = self.index.read_index()

        if force:
            for path in (set(head) | set(index)) - set(target_files):
                self.drop_path(path)
            for path, blob_hash in target_files.items():
                self.write_path(path, blob_hash)
            return sorted(set(head) | set(target_files))

        work = self.worktree_hashes()
        changed = sorted(p for p in set(head) | set(target_files) if head.get(p) != target_files.get(p))
        endangered = []
        for path in changed:
            dirty = index.get(path) != head.get(path) or work.get(path) != index.get(path)
            already_there = index.get(path) == target_files.get(path) and work.get(path) == target_files.get(path)
            if dirty and not already_there:
                endangered.append(path)
        if endangered:
            raise LocalChangesConflict(endangered, operation)

        for path in changed:
            if path in target_files:
                self.write_path(path, target_files[path])
            else:
                self.drop_path(path)
        return changed

    def checkout(self, ref=None, paths=None, force=False):
        """
        With paths, restores them from `ref` (index and working tree) or from the index (working tree only).
        Without paths, switches to `ref`: a branch name attaches HEAD, anything else detaches it.
        """
        if paths:
            if ref is None:
                source = self.index.read_index()
            else:
                source = self.files_of(self._commit_of(ref))
            restored = []
            for path in paths:
                matches = [p for p in source if p == path or p.startswith(path.rstrip('/') + '/') or path in ('', '.')]
                if not matches:
                    raise PathspecNotFound(path, f"error: pathspec '{path}' did not match any file(s) known to git")
                for match in matches:
                    self.write_path(match, source[match], stage=ref is not None)
                    restored.append(match)
            return sorted(set(restored))

        commit_hash = self._commit_of(ref)
        self.switch_tree(self.files_of(commit_hash), force=force)
        if ref in self.branches:
            self.attach_head(ref)
        else:
            self.detach_head(commit_hash)
        return commit_hash

    def _commit_of(self, ref): # Accepts a full commit id as well as a ref name
        if ref in self.objects:
            return ref
        return self.resolve_ref(ref)

    def status_matrix(self):
        """
        Returns [(path, head, workdir, stage)] rows:
        head 0 absent / 1 present; workdir 0 absent / 1 same as HEAD / 2 different;
        stage 0 absent / 1 same as HEAD / 2 same as workdir / 3 different from both.
        """
        head = self.head_files()
        index = self.index.read_index()
        work = self.worktree_hashes()
        patterns = self.ignore_patterns()

        rows = []
        for path in sorted(set(head) | set(index) | set(work)):
            if path not in head and path not in index and is_ignored(path, patterns):
                continue
            head_state = 1 if path in head else 0
            if path not in work:
                work_state = 0
            else:
                work_state = 1 if work[path] == head.get(path) else 2
            if path not in index:
                stage_state = 0
            elif index[path] == head.get(path):
                stage_state = 1
            elif index[path] == work.get(path):
                stage_state = 2
            else:
                stage_state = 3
            rows.append((path, head_state, work_state, stage_state))
        return rows

    # Snapshots

    def checkpoint(self): # Captures every mutable piece of state; objects are immutable and never rolled back
        return {
            'head': self._head,
            'index': self.index.read_index(),
            'branches': dict(self.branches),
            'tags': dict(self.tags),
            'remotes': {name: remote.copy() for name, remote in self.remotes.items()},
            'stashes': list(self.stashes),
            'merge_state': self.merge_state.copy() if self.merge_state else None,
            'config': self.config.copy(),
            'fs': self.fs.snapshot(),
        }

    def restore(self, checkpoint):
        self._head = checkpoint['head']
        self.index.write_index(checkpoint['index'])
        self.branches = checkpoint['branches']
        self.tags = checkpoint['tags']
        self.remotes = checkpoint['remotes']
        self.stashes = checkpoint['stashes']
        self.merge_state = checkpoint['merge_state']
        self.config = checkpoint['config']
        self.fs.restore(checkpoint['fs'])
