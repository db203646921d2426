# What it does: Manages the configuration of a sandbox repository (user identity, default branch, branch upstreams)
# How it does: Keeps an in-memory `configparser` document and translates git's dotted keys (`user.name`, `branch.main.remote`) into INI sections and options
# What data structure it uses: Map / Hash Table / Dictionary (the INI format is a map of sections to key-value pairs, managed by Python's `configparser`)

import configparser

from ..constants import DEFAULT_BRANCH, DEFAULT_USER_EMAIL, DEFAULT_USER_NAME
from ..errors import UsageError


def split_key(key): # 'user.name' -> ('user', 'name'); 'branch.main.remote' -> ('branch "main"', 'remote')
    try:
        section, option = key.split('.', 1)
    except ValueError:
        raise UsageError(f"error: key does not contain a section: {key}")
    if '.' in option:
        subsection, option = option.rsplit('.', 1)
        section = f'{section} "{subsection}"'
    if not section or not option:
        raise UsageError(f"error: invalid key: {key}")
    return section, option


class RepoConfig:

    def __init__(self):
        self._config = configparser.ConfigParser(interpolation=None)
        self.write_config('user.name', DEFAULT_USER_NAME)
        self.write_config('user.email', DEFAULT_USER_EMAIL)
        self.write_config('init.defaultBranch', DEFAULT_BRANCH)

    def read_config(self, key, fallback=None):
        section, option = split_key(key)
        return self._config.get(section, option, fallback=fallback)

    def write_config(self, key, value): # Sets a configuration key to a value
        section, option = split_key(key)
        if not self._config.has_section(section):
            self._config.add_section(section)
        self._config.set(section, option, value)

    def unset(self, key):
        section, option = split_key(key)
        if self._config.has_section(section):
            self._config.remove_option(section, option)
            if not self._config.options(section):
                self._config.remove_section(section)

    def items(self): # Yields (dotted key, value) pairs in git's `config --list` layout
        for section in self._config.sections():
            if ' "' in section:
                name, subsection = section.split(' "', 1)
                prefix = name + '.' + subsection.rstrip('"')
            else:
                prefix = section
            for option, value in self._config.items(section):
                yield f"{prefix}.{option}", value

    def get_user_config(self): # Returns (user.name, user.email)
        return self.read_config('user.name'), self.read_config('user.email')

    def copy(self):
        clone = RepoConfig.__new__(RepoConfig)
        clone._config = configparser.ConfigParser(interpolation=None)
        clone._config.read_dict({s: dict(self._config.items(s)) for s in self._config.sections()})
        return clone

    def get_upstream(self, branch): # ('origin', 'main') from branch.<branch>.remote and branch.<branch>.merge, or None
        remote = self.read_config(f'branch.{branch}.remote')
        merge_ref = self.read_config(f'branch.{branch}.merge')
        if not remote or not merge_ref:
            return None
        prefix = 'refs/heads/'
        return remote, merge_ref[len(prefix):] if merge_ref.startswith(prefix) else merge_ref

    def set_upstream(self, branch, remote, remote_branch):
        self.write_config(f'branch.{branch}.remote', remote)
        self.write_config(f'branch.{branch}.merge', f'refs/heads/{remote_branch}')
