# Unit tests for shell.py

import pytest

from sandgit.errors import NoSuchFile, UnknownCommand, UsageError
from sandgit.shell import split_line


class TestSplitLine:
    # Tests for split_line()

    def test_single_command(self):
        assert split_line('git commit -m "first commit"') == [['git', 'commit', '-m', 'first commit']]

    def test_chain(self):
        assert split_line('git add . && git commit -m wip') == [['git', 'add', '.'], ['git', 'commit', '-m', 'wip']]

    def test_quoted_operator_is_text(self):
        assert split_line('echo "a && b" > notes.txt') == [['echo', 'a && b', '>', 'notes.txt']]

    def test_blank_line(self):
        assert split_line('   ') == []

    @pytest.mark.parametrize('line', [
        'git log | head',
        'git status; git log',
        'git fetch &',
        'cat < a.txt',
        '&& git status',
        'git status &&',
        'echo "unterminated',
    ])
    def test_rejected(self, line):
        with pytest.raises(UsageError):
            split_line(line)


class TestBuiltins:
    # Tests for the filesystem builtins, run through a session

    def test_echo_and_cat(self, session):
        assert session.run('echo hello > a.txt && echo world >> a.txt').ok
        assert session.run('cat a.txt').output == 'hello\nworld'

    def test_append_to_file_without_newline(self, session):
        session.fs.write('~/project/a.txt', 'no newline')
        session.run('echo more >> a.txt')
        assert session.fs.read('~/project/a.txt') == 'no newline\nmore\n'

    def test_cd_and_pwd(self, session):
        assert session.run('mkdir -p src/lib && cd src/lib && pwd').output == '~/project/src/lib'
        assert session.run('cd ../.. && pwd').output == '~/project'

    def test_cd_missing(self, session):
        result = session.run('cd nowhere')
        assert result.error is NoSuchFile.kind

    def test_touch_needs_parent(self, session):
        assert session.run('touch missing/a.txt').error is NoSuchFile.kind
        assert session.run('touch a.txt').ok
        assert session.fs.read('~/project/a.txt') == ''

    def test_ls_marks_directories(self, session):
        session.run('mkdir src && touch b.txt')
        assert session.run('ls').output == 'b.txt  src/'

    def test_editor_prints_hint(self, session):
        output = session.run('vim notes.txt').output
        assert "'vim' is not available" in output
        assert 'echo "content" > notes.txt' in output

    def test_unknown_command(self, session):
        assert session.run('python3 script.py').error is UnknownCommand.kind

    def test_configure_env(self, session):
        assert session.run('configure-env cwd=~/work/app').ok
        assert session.cwd == '~/work/app'
        assert session.run('configure-env bogus').error is UsageError.kind
