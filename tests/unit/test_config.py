# Unit tests for utils/config.py

import pytest

from sandgit.errors import UsageError
from sandgit.utils.config import RepoConfig, split_key


class TestSplitKey:

    def test_plain_key(self):
        assert split_key('user.name') == ('user', 'name')

    def test_subsection(self):
        assert split_key('branch.feature/login.remote') == ('branch "feature/login"', 'remote')

    @pytest.mark.parametrize('key', ['user', '.name', 'user.'])
    def test_invalid(self, key):
        with pytest.raises(UsageError):
            split_key(key)


class TestRepoConfig:
    # Tests for RepoConfig

    def test_defaults(self):
        config = RepoConfig()
        assert config.get_user_config() == ('User', 'user@example.com')
        assert config.read_config('init.defaultBranch') == 'main'

    def test_unset_drops_empty_section(self):
        config = RepoConfig()
        config.write_config('core.editor', 'nano')
        config.unset('core.editor')
        assert config.read_config('core.editor') is None
        assert not any(key.startswith('core.') for key, _ in config.items())

    def test_items_use_dotted_keys(self):
        config = RepoConfig()
        config.set_upstream('main', 'origin', 'main')
        assert ('branch.main.remote', 'origin') in list(config.items())
        assert ('branch.main.merge', 'refs/heads/main') in list(config.items())

    def test_upstream_keeps_slashes(self):
        config = RepoConfig()
        config.set_upstream('feature/login', 'origin', 'feature/login')
        assert config.get_upstream('feature/login') == ('origin', 'feature/login')

    def test_no_upstream(self):
        assert RepoConfig().get_upstream('main') is None

    def test_copy_is_independent(self):
        config = RepoConfig()
        clone = config.copy()
        clone.write_config('user.name', 'Other')
        assert config.read_config('user.name') == 'User'
