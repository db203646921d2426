# What it does: The closed set of git subcommands the interpreter understands, their argument parsers and the handler each one dispatches to
# How it does: Every subcommand gets its own argparse parser (errors raise UsageError instead of exiting the process). Tokens after `--` are split off first and handed to the handler as `args.pathspec`
# What data structure it uses: Enum (the subcommands), Map / Dictionary (subcommand -> parser, subcommand -> handler)

import argparse
import enum
import re

from ..errors import UnknownCommand, UsageError
from . import (
    about, add, branch, checkout, cherry_pick, clean, clone, commit, config, diff, fetch, init, log,
    merge, mv, pull, push, rebase, remote, reset, restore, revert, rm, stash, status, switch, tag,
)


class Subcommand(enum.Enum):
    INIT = 'init'
    CLONE = 'clone'
    STATUS = 'status'
    ADD = 'add'
    COMMIT = 'commit'
    LOG = 'log'
    DIFF = 'diff'
    BRANCH = 'branch'
    CHECKOUT = 'checkout'
    SWITCH = 'switch'
    MERGE = 'merge'
    REBASE = 'rebase'
    RESET = 'reset'
    RESTORE = 'restore'
    REVERT = 'revert'
    CHERRY_PICK = 'cherry-pick'
    STASH = 'stash'
    CLEAN = 'clean'
    RM = 'rm'
    MV = 'mv'
    TAG = 'tag'
    REMOTE = 'remote'
    FETCH = 'fetch'
    PULL = 'pull'
    PUSH = 'push'
    CONFIG = 'config'
    HELP = 'help'
    VERSION = 'version'

    @classmethod
    def lookup(cls, name):
        try:
            return cls(name)
        except ValueError:
            raise UnknownCommand(name, f"git: '{name}' is not a git command. See 'git help'.") from None


# Subcommands that run without a repository under the cursor
OUTSIDE_REPOSITORY = {Subcommand.INIT, Subcommand.CLONE, Subcommand.HELP, Subcommand.VERSION}

HANDLERS = {
    Subcommand.INIT: init.run,
    Subcommand.CLONE: clone.run,
    Subcommand.STATUS: status.run,
    Subcommand.ADD: add.run,
    Subcommand.COMMIT: commit.run,
    Subcommand.LOG: log.run,
    Subcommand.DIFF: diff.run,
    Subcommand.BRANCH: branch.run,
    Subcommand.CHECKOUT: checkout.run,
    Subcommand.SWITCH: switch.run,
    Subcommand.MERGE: merge.run,
    Subcommand.REBASE: rebase.run,
    Subcommand.RESET: reset.run,
    Subcommand.RESTORE: restore.run,
    Subcommand.REVERT: revert.run,
    Subcommand.CHERRY_PICK: cherry_pick.run,
    Subcommand.STASH: stash.run,
    Subcommand.CLEAN: clean.run,
    Subcommand.RM: rm.run,
    Subcommand.MV: mv.run,
    Subcommand.TAG: tag.run,
    Subcommand.REMOTE: remote.run,
    Subcommand.FETCH: fetch.run,
    Subcommand.PULL: pull.run,
    Subcommand.PUSH: push.run,
    Subcommand.CONFIG: config.run,
    Subcommand.HELP: about.run_help,
    Subcommand.VERSION: about.run_version,
}


class CommandParser(argparse.ArgumentParser):

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('add_help', False)
        super().__init__(*args, **kwargs)

    def error(self, message):
        raise UsageError(f"error: {message}\n{self.format_usage().rstrip()}")


def _parser(name):
    return CommandParser(prog=f"git {name}")


def build_parsers():
    parsers = {}

    # Command: init
    p = parsers[Subcommand.INIT] = _parser('init')
    p.add_argument('-b', '--initial-branch', dest='initial_branch')
    p.add_argument('directory', nargs='?')

    # Command: clone
    p = parsers[Subcommand.CLONE] = _parser('clone')
    p.add_argument('url')
    p.add_argument('directory', nargs='?')

    # Command: status
    p = parsers[Subcommand.STATUS] = _parser('status')
    p.add_argument('-s', '--short', action='store_true')

    # Command: add
    p = parsers[Subcommand.ADD] = _parser('add')
    p.add_argument('-A', '--all', action='store_true')
    p.add_argument('paths', nargs='*')

    # Command: commit
    p = parsers[Subcommand.COMMIT] = _parser('commit')
    p.add_argument('-m', '--message', action='append', nargs='+')
    p.add_argument('-a', '--all', action='store_true')
    p.add_argument('--amend', action='store_true')
    p.add_argument('--no-edit', dest='no_edit', action='store_true')
    p.add_argument('--allow-empty', dest='allow_empty', action='store_true')

    # Command: log
    p = parsers[Subcommand.LOG] = _parser('log')
    p.add_argument('--oneline', action='store_true')
    p.add_argument('--all', action='store_true')
    p.add_argument('--graph', action='store_true')
    p.add_argument('-n', '--max-count', dest='max_count', type=int)
    p.add_argument('revision', nargs='?')

    # Command: diff
    p = parsers[Subcommand.DIFF] = _parser('diff')
    p.add_argument('--staged', '--cached', dest='staged', action='store_true')
    p.add_argument('--name-only', dest='name_only', action='store_true')
    p.add_argument('revisions', nargs='*')

    # Command: branch
    p = parsers[Subcommand.BRANCH] = _parser('branch')
    p.add_argument('-d', '--delete', action='store_true')
    p.add_argument('-D', dest='force_delete', action='store_true')
    p.add_argument('-m', '--move', action='store_true')
    p.add_argument('-M', dest='force_move', action='store_true')
    p.add_argument('-f', '--force', action='store_true')
    p.add_argument('-a', '--all', action='store_true')
    p.add_argument('-r', '--remotes', action='store_true')
    p.add_argument('names', nargs='*')

    # Command: checkout
    p = parsers[Subcommand.CHECKOUT] = _parser('checkout')
    p.add_argument('-b', dest='new_branch')
    p.add_argument('-B', dest='reset_branch')
    p.add_argument('-f', '--force', action='store_true')
    p.add_argument('--detach', action='store_true')
    p.add_argument('targets', nargs='*')

    # Command: switch
    p = parsers[Subcommand.SWITCH] = _parser('switch')
    p.add_argument('-c', '--create')
    p.add_argument('-C', '--force-create', dest='force_create')
    p.add_argument('-d', '--detach', action='store_true')
    p.add_argument('-f', '--discard-changes', '--force', dest='discard_changes', action='store_true')
    p.add_argument('targets', nargs='*')

    # Command: merge
    p = parsers[Subcommand.MERGE] = _parser('merge')
    p.add_argument('-m', '--message')
    p.add_argument('--no-ff', dest='no_ff', action='store_true')
    p.add_argument('--abort', action='store_true')
    p.add_argument('branch', nargs='?')

    # Command: rebase
    p = parsers[Subcommand.REBASE] = _parser('rebase')
    p.add_argument('upstream', nargs='?')

    # Command: reset
    p = parsers[Subcommand.RESET] = _parser('reset')
    mode = p.add_mutually_exclusive_group()
    for name in ('soft', 'mixed', 'hard'):
        mode.add_argument(f'--{name}', dest='mode', action='store_const', const=name)
    p.add_argument('targets', nargs='*')

    # Command: restore
    p = parsers[Subcommand.RESTORE] = _parser('restore')
    p.add_argument('-S', '--staged', action='store_true')
    p.add_argument('-s', '--source')
    p.add_argument('paths', nargs='*')

    # Command: revert
    p = parsers[Subcommand.REVERT] = _parser('revert')
    p.add_argument('commit')

    # Command: cherry-pick
    p = parsers[Subcommand.CHERRY_PICK] = _parser('cherry-pick')
    p.add_argument('commit')

    # Command: stash
    p = parsers[Subcommand.STASH] = _parser('stash')
    p.add_argument('-m', '--message', nargs='+')
    p.add_argument('action', nargs='?')
    p.add_argument('rest', nargs='*')

    # Command: clean
    p = parsers[Subcommand.CLEAN] = _parser('clean')
    p.add_argument('-n', '--dry-run', dest='dry_run', action='store_true')
    p.add_argument('-f', '--force', action='store_true')
    p.add_argument('-d', dest='directories', action='store_true')

    # Command: rm
    p = parsers[Subcommand.RM] = _parser('rm')
    p.add_argument('--cached', action='store_true')
    p.add_argument('-f', '--force', action='store_true')
    p.add_argument('-r', dest='recursive', action='store_true')
    p.add_argument('paths', nargs='*')

    # Command: mv
    p = parsers[Subcommand.MV] = _parser('mv')
    p.add_argument('-f', '--force', action='store_true')
    p.add_argument('paths', nargs='*')

    # Command: tag
    p = parsers[Subcommand.TAG] = _parser('tag')
    p.add_argument('-d', '--delete', action='store_true')
    p.add_argument('names', nargs='*')

    # Command: remote
    p = parsers[Subcommand.REMOTE] = _parser('remote')
    p.add_argument('-v', '--verbose', action='store_true')
    p.add_argument('action', nargs='?')
    p.add_argument('rest', nargs='*')

    # Command: fetch
    p = parsers[Subcommand.FETCH] = _parser('fetch')
    p.add_argument('remote', nargs='?')

    # Command: pull
    p = parsers[Subcommand.PULL] = _parser('pull')
    p.add_argument('remote', nargs='?')
    p.add_argument('branch', nargs='?')

    # Command: push
    p = parsers[Subcommand.PUSH] = _parser('push')
    p.add_argument('-u', '--set-upstream', dest='set_upstream', action='store_true')
    p.add_argument('-f', '--force', action='store_true')
    p.add_argument('remote', nargs='?')
    p.add_argument('branch', nargs='?')

    # Command: config
    p = parsers[Subcommand.CONFIG] = _parser('config')
    p.add_argument('-l', '--list', action='store_true')
    p.add_argument('--unset', action='store_true')
    p.add_argument('--global', dest='global_', action='store_true')
    p.add_argument('key', nargs='?')
    p.add_argument('value', nargs='?')

    # Command: help / version
    parsers[Subcommand.HELP] = _parser('help')
    parsers[Subcommand.HELP].add_argument('topic', nargs='?')
    parsers[Subcommand.VERSION] = _parser('version')
    return parsers


PARSERS = build_parsers()

_COUNT_FLAG = re.compile(r'^-(\d+)$')


def parse(subcommand, argv):
    """
    Parses the arguments of one subcommand.
    Everything after the first `--` becomes `args.pathspec` (None when there is no `--`).
    """
    argv = list(argv)
    pathspec = None
    if '--' in argv:
        split = argv.index('--')
        argv, pathspec = argv[:split], argv[split + 1:]

    if subcommand is Subcommand.LOG: # git log -3
        rewritten = []
        for token in argv:
            match = _COUNT_FLAG.match(token)
            rewritten.extend(['-n', match.group(1)] if match else [token])
        argv = rewritten

    args = PARSERS[subcommand].parse_args(argv)
    args.pathspec = pathspec
    return args
