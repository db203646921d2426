# Unit tests for commands/table.py

import pytest

from sandgit.commands.table import HANDLERS, PARSERS, Subcommand, parse
from sandgit.errors import UnknownCommand, UsageError


class TestSubcommandTable:

    def test_every_subcommand_is_wired(self):
        for subcommand in Subcommand:
            assert subcommand in HANDLERS
            assert subcommand in PARSERS

    def test_lookup(self):
        assert Subcommand.lookup('cherry-pick') is Subcommand.CHERRY_PICK
        with pytest.raises(UnknownCommand) as exc:
            Subcommand.lookup('frobnicate')
        assert "'frobnicate' is not a git command" in exc.value.message


class TestParse:
    # Tests for parse()

    def test_pathspec_after_double_dash(self):
        args = parse(Subcommand.CHECKOUT, ['HEAD~1', '--', 'a.txt', 'b.txt'])
        assert args.targets == ['HEAD~1']
        assert args.pathspec == ['a.txt', 'b.txt']

    def test_no_double_dash(self):
        assert parse(Subcommand.ADD, ['.']).pathspec is None

    def test_log_count_shorthand(self):
        assert parse(Subcommand.LOG, ['-3', '--oneline']).max_count == 3

    def test_commit_messages_accumulate(self):
        args = parse(Subcommand.COMMIT, ['-m', 'title', '-m', 'body'])
        assert [' '.join(m) for m in args.message] == ['title', 'body']

    def test_reset_modes_exclusive(self):
        assert parse(Subcommand.RESET, ['--hard', 'HEAD~1']).mode == 'hard'
        with pytest.raises(UsageError):
            parse(Subcommand.RESET, ['--hard', '--soft'])

    def test_unknown_option(self):
        with pytest.raises(UsageError):
            parse(Subcommand.STATUS, ['--bogus'])
