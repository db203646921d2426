# Unit tests for utils/history.py

from sandgit.utils import history


def make_commit(repo, message, parents=None):
    return repo.commit(message, parents=parents, update_head=False, tree=repo.objects.write_files({}))


class TestIsAncestor:
    # Tests for history.is_ancestor()

    def test_reflexive(self, bare_repo):
        root = make_commit(bare_repo, 'root', [])
        assert history.is_ancestor(bare_repo, root, root)

    def test_direction_matters(self, bare_repo):
        root = make_commit(bare_repo, 'root', [])
        child = make_commit(bare_repo, 'child', [root])
        assert history.is_ancestor(bare_repo, root, child)
        assert not history.is_ancestor(bare_repo, child, root)

    def test_follows_merge_parents(self, bare_repo):
        root = make_commit(bare_repo, 'root', [])
        left = make_commit(bare_repo, 'left', [root])
        right = make_commit(bare_repo, 'right', [root])
        merge = make_commit(bare_repo, 'merge', [left, right])
        assert history.is_ancestor(bare_repo, right, merge)

    def test_terminates_on_deep_history(self, bare_repo):
        first = current = make_commit(bare_repo, 'c0', [])
        for i in range(1, 1500):
            current = make_commit(bare_repo, f'c{i}', [current])
        assert history.is_ancestor(bare_repo, first, current)
        assert not history.is_ancestor(bare_repo, current, first)

    def test_missing_side(self, bare_repo):
        root = make_commit(bare_repo, 'root', [])
        assert not history.is_ancestor(bare_repo, None, root)


class TestMergeBase:
    # Tests for history.merge_base()

    def test_fork_point(self, bare_repo):
        root = make_commit(bare_repo, 'root', [])
        base = make_commit(bare_repo, 'base', [root])
        left = make_commit(bare_repo, 'left', [base])
        right = make_commit(bare_repo, 'right', [make_commit(bare_repo, 'r1', [base])])
        assert history.merge_base(bare_repo, left, right) == base

    def test_unrelated(self, bare_repo):
        assert history.merge_base(bare_repo, make_commit(bare_repo, 'a', []), make_commit(bare_repo, 'b', [])) is None


class TestOrdering:
    # Tests for ordered_commits() and commits_to_replay()

    def test_children_before_parents(self, bare_repo):
        root = make_commit(bare_repo, 'root', [])
        left = make_commit(bare_repo, 'left', [root])
        right = make_commit(bare_repo, 'right', [root])
        merge = make_commit(bare_repo, 'merge', [left, right])

        ordered = [c.id for c in history.ordered_commits(bare_repo, history.reachable(bare_repo, merge))]

        assert ordered[0] == merge
        assert ordered[-1] == root
        assert ordered[1:3] == [right, left]

    def test_replay_is_oldest_first(self, bare_repo):
        root = make_commit(bare_repo, 'root', [])
        one = make_commit(bare_repo, 'one', [root])
        two = make_commit(bare_repo, 'two', [one])
        upstream = make_commit(bare_repo, 'upstream', [root])

        replay = history.commits_to_replay(bare_repo, two, upstream)

        assert [c.id for c in replay] == [one, two]
