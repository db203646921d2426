# Unit tests for utils/objects.py

import hashlib

import pytest

from sandgit.errors import AmbiguousObjectName, ObjectNotFound, UnresolvedReference
from sandgit.utils.objects import ObjectStore


@pytest.fixture
def store():
    return ObjectStore()


class TestHashObject:
    # Tests for ObjectStore.hash_object()

    def test_matches_git_blob_hash(self, store):
        # Hash is SHA-1 of "<type> <size>\0<content>", like git hash-object
        expected = hashlib.sha1(b'blob 5\0hello').hexdigest()
        assert store.hash_object('hello', 'blob') == expected

    def test_write_false_does_not_store(self, store):
        sha1 = store.hash_object('hello', 'blob', write=False)
        assert sha1 not in store

    def test_read_back(self, store):
        sha1 = store.hash_object(b'content', 'blob')
        assert store.read_object(sha1) == ('blob', b'content')

    def test_read_missing_object(self, store):
        with pytest.raises(ObjectNotFound):
            store.read_object('0' * 40)


class TestTrees:
    # Tests for building, writing and reading tree objects

    def test_build_tree_nests_directories(self, store):
        tree = store.build_tree({'a.txt': 'h1', 'src/b.py': 'h2', 'src/lib/c.py': 'h3'})
        assert tree == {'a.txt': 'h1', 'src': {'b.py': 'h2', 'lib': {'c.py': 'h3'}}}

    def test_write_then_read_flat_files(self, store):
        blob1 = store.hash_object('one', 'blob')
        blob2 = store.hash_object('two', 'blob')
        files = {'a.txt': blob1, 'src/b.txt': blob2}

        tree_hash = store.write_files(files)

        assert store.read_object(tree_hash)[0] == 'tree'
        assert store.read_tree(tree_hash) == files

    def test_same_files_same_tree(self, store):
        blob = store.hash_object('x', 'blob')
        assert store.write_files({'a': blob, 'b': blob}) == store.write_files({'b': blob, 'a': blob})


class TestCommits:
    # Tests for writing and parsing commit objects

    def test_commit_round_trip(self, store):
        blob = store.hash_object('x', 'blob')
        tree = store.write_files({'x.txt': blob})
        parent = store.write_commit(tree, [], 'A <a@example.com>', 100, 'first')
        child = store.write_commit(tree, [parent], 'A <a@example.com>', 200, 'second\n\nbody')

        commit = store.read_commit(child)

        assert commit.parents == (parent,)
        assert commit.parent == parent
        assert commit.merge_parent is None
        assert commit.author == 'A <a@example.com>'
        assert commit.timestamp == 200
        assert commit.summary == 'second'
        assert commit.tree == {'x.txt': blob}

    def test_read_commit_rejects_other_objects(self, store):
        blob = store.hash_object('x', 'blob')
        with pytest.raises(ObjectNotFound):
            store.read_commit(blob)


class TestExpandPrefix:
    # Tests for abbreviated object ids

    def test_expands_unique_prefix(self, store):
        tree = store.write_files({})
        commit = store.write_commit(tree, [], 'A <a@example.com>', 1, 'm')
        assert store.expand_prefix(commit[:7]) == commit

    def test_rejects_short_prefix(self, store):
        tree = store.write_files({})
        commit = store.write_commit(tree, [], 'A <a@example.com>', 1, 'm')
        with pytest.raises(UnresolvedReference):
            store.expand_prefix(commit[:3])

    def test_only_commits_by_default(self, store):
        blob = store.hash_object('x', 'blob')
        with pytest.raises(UnresolvedReference):
            store.expand_prefix(blob[:8])

    def test_ambiguous_prefix(self, store):
        tree = store.write_files({})
        commits = [store.write_commit(tree, [], 'A <a@example.com>', i, 'm') for i in range(2000)]
        # 2000 ids over 65536 four-digit prefixes: some pair always shares one
        prefixes = {}
        for commit in commits:
            prefixes.setdefault(commit[:4], []).append(commit)
        shared = [p for p, group in prefixes.items() if len(group) > 1]
        assert shared
        with pytest.raises(AmbiguousObjectName):
            store.expand_prefix(shared[0])
