# Unit tests for utils/index.py

from sandgit.utils.index import Index


class TestReadIndex:
    """Tests for Index.read_index()"""

    def test_read_empty_index(self):
        """Should return empty dict when nothing is staged."""
        assert Index().read_index() == {}

    def test_returns_sorted_copy(self):
        """Entries come back sorted by path and mutating the result leaves the index alone."""
        index = Index({'src/main.py': 'def456', 'a.txt': 'abc123'})
        result = index.read_index()

        assert list(result) == ['a.txt', 'src/main.py']
        result['a.txt'] = 'changed'
        assert index.get('a.txt') == 'abc123'


class TestWriteIndex:
    """Tests for Index.write_index() and the single-entry updates"""

    def test_write_replaces_everything(self):
        index = Index({'old.txt': 'abc'})
        index.write_index({'new.txt': 'def'})
        assert index.paths() == ['new.txt']

    def test_update_and_remove_entry(self):
        index = Index()
        index.update_index_entry('file.txt', 'abc')
        assert 'file.txt' in index
        assert len(index) == 1

        index.remove_index_entry('file.txt')
        assert 'file.txt' not in index

    def test_remove_missing_entry_is_a_no_op(self):
        index = Index({'file.txt': 'abc'})
        index.remove_index_entry('other.txt')
        assert index.paths() == ['file.txt']
