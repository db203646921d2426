# Unit tests for utils/repository.py

import pytest

from sandgit.errors import (
    BranchExists, LocalChangesConflict, PathspecNotFound, RefNotFound, TagExists,
)


def commit_file(repo, path, content, message=None):
    repo.worktree.write(path, content)
    repo.add(path)
    return repo.commit(message or f"update {path}")


class TestHead:
    # Tests for HEAD handling

    def test_unborn_branch(self, bare_repo):
        # A fresh repository is attached to an unborn main
        assert bare_repo.initialized
        assert bare_repo.get_current_branch() == 'main'
        assert bare_repo.get_head_commit() is None
        assert bare_repo.get_head_status() == 'On branch main'

    def test_first_commit_creates_branch(self, bare_repo):
        commit_hash = commit_file(bare_repo, 'a.txt', 'a')
        assert bare_repo.branches == {'main': commit_hash}
        assert bare_repo.get_head_commit() == commit_hash

    def test_detached_head(self, bare_repo):
        first = commit_file(bare_repo, 'a.txt', 'a')
        commit_file(bare_repo, 'a.txt', 'b')

        bare_repo.checkout(first)

        assert bare_repo.is_detached()
        assert bare_repo.get_current_branch() is None
        assert bare_repo.get_head_status() == f"HEAD detached at {first[:7]}"
        assert bare_repo.worktree.read('a.txt') == 'a'

    def test_commit_while_detached_moves_head_only(self, bare_repo):
        first = commit_file(bare_repo, 'a.txt', 'a')
        bare_repo.detach_head(first)
        second = commit_file(bare_repo, 'b.txt', 'b')

        assert bare_repo.get_head_commit() == second
        assert bare_repo.branches['main'] == first


class TestBranchesAndTags:
    # Tests for the branch and tag tables

    def test_branch_defaults_to_head(self, bare_repo):
        head = commit_file(bare_repo, 'a.txt', 'a')
        assert bare_repo.branch('feature') == head
        assert bare_repo.list_branches() == ['feature', 'main']

    def test_branch_exists(self, bare_repo):
        commit_file(bare_repo, 'a.txt', 'a')
        bare_repo.branch('feature')
        with pytest.raises(BranchExists):
            bare_repo.branch('feature')

    def test_branch_without_commits(self, bare_repo):
        with pytest.raises(RefNotFound):
            bare_repo.branch('feature')

    def test_rename_current_branch_moves_head(self, bare_repo):
        commit_file(bare_repo, 'a.txt', 'a')
        bare_repo.rename_branch('main', 'trunk')
        assert bare_repo.get_current_branch() == 'trunk'
        assert 'main' not in bare_repo.branches

    def test_delete_unknown_branch(self, bare_repo):
        with pytest.raises(RefNotFound):
            bare_repo.delete_branch('nope')

    def test_tags_are_unique(self, bare_repo):
        head = commit_file(bare_repo, 'a.txt', 'a')
        assert bare_repo.tag('v1') == head
        with pytest.raises(TagExists):
            bare_repo.tag('v1')
        assert bare_repo.list_tags() == ['v1']


class TestResolveRef:
    # Tests for Repository.resolve_ref()

    def test_full_ref_names(self, bare_repo):
        head = commit_file(bare_repo, 'a.txt', 'a')
        bare_repo.tag('v1')
        assert bare_repo.resolve_ref('HEAD') == head
        assert bare_repo.resolve_ref('refs/heads/main') == head
        assert bare_repo.resolve_ref('refs/tags/v1') == head
        assert bare_repo.resolve_ref('v1') == head

    def test_unknown_ref(self, bare_repo):
        with pytest.raises(RefNotFound):
            bare_repo.resolve_ref('HEAD')


class TestIndexAndWorktree:
    # Tests for staging and the three-layer comparison

    def test_add_missing_path(self, bare_repo):
        with pytest.raises(PathspecNotFound):
            bare_repo.add('ghost.txt')

    def test_add_stages_deletion(self, bare_repo):
        commit_file(bare_repo, 'a.txt', 'a')
        bare_repo.worktree.delete('a.txt')
        bare_repo.add('a.txt')
        assert 'a.txt' not in bare_repo.index

    def test_status_matrix(self, bare_repo):
        commit_file(bare_repo, 'same.txt', 's')
        commit_file(bare_repo, 'changed.txt', 'c')
        bare_repo.worktree.write('changed.txt', 'c2')
        bare_repo.worktree.write('new.txt', 'n')
        bare_repo.add('new.txt')

        rows = {row[0]: row[1:] for row in bare_repo.status_matrix()}

        assert rows['same.txt'] == (1, 1, 1)
        assert rows['changed.txt'] == (1, 2, 1)
        assert rows['new.txt'] == (0, 2, 2)

    def test_list_files_and_read_blob(self, bare_repo):
        head = commit_file(bare_repo, 'src/a.txt', 'hello')
        assert bare_repo.list_files('HEAD') == ['src/a.txt']
        assert bare_repo.read_blob(head, 'src/a.txt') == 'hello'


class TestSwitchTree:
    # Tests for Repository.switch_tree()

    def test_keeps_unrelated_local_changes(self, bare_repo):
        commit_file(bare_repo, 'a.txt', 'a')
        commit_file(bare_repo, 'b.txt', 'b')
        bare_repo.branch('feature')
        commit_file(bare_repo, 'a.txt', 'a2')

        bare_repo.worktree.write('b.txt', 'local edit')
        bare_repo.checkout('feature')

        assert bare_repo.worktree.read('a.txt') == 'a'
        assert bare_repo.worktree.read('b.txt') == 'local edit'

    def test_refuses_to_overwrite_local_changes(self, bare_repo):
        commit_file(bare_repo, 'a.txt', 'a')
        bare_repo.branch('feature')
        commit_file(bare_repo, 'a.txt', 'a2')
        bare_repo.worktree.write('a.txt', 'local edit')

        with pytest.raises(LocalChangesConflict) as exc:
            bare_repo.checkout('feature')
        assert exc.value.paths == ('a.txt',)
        assert bare_repo.get_current_branch() == 'main'

    def test_force_discards_local_changes(self, bare_repo):
        commit_file(bare_repo, 'a.txt', 'a')
        bare_repo.branch('feature')
        commit_file(bare_repo, 'a.txt', 'a2')
        bare_repo.worktree.write('a.txt', 'local edit')

        bare_repo.checkout('feature', force=True)

        assert bare_repo.worktree.read('a.txt') == 'a'


class TestCheckpoint:
    # Tests for checkpoint() / restore()

    def test_restore_undoes_mutations(self, bare_repo):
        head = commit_file(bare_repo, 'a.txt', 'a')
        checkpoint = bare_repo.checkpoint()

        commit_file(bare_repo, 'b.txt', 'b')
        bare_repo.branch('feature')
        bare_repo.config.write_config('user.name', 'Someone')

        bare_repo.restore(checkpoint)

        assert bare_repo.branches == {'main': head}
        assert bare_repo.index.paths() == ['a.txt']
        assert not bare_repo.worktree.exists('b.txt')
        assert bare_repo.config.read_config('user.name') == 'User'
