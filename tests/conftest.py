# Shared pytest fixtures for sandgit tests

import itertools

import pytest

from sandgit.commands.remote import record_remote_commit
from sandgit.session import Session
from sandgit.utils.repository import Repository
from sandgit.utils.worktree import VirtualFS

START_TIME = 1_700_000_000


def ticking_clock(start=START_TIME):
    # One second per call, so commit timestamps are distinct and predictable
    counter = itertools.count(start)
    return lambda: next(counter)


@pytest.fixture
def session():
    # A sandbox with no network delay and no colors, cursor in ~/project
    return Session(latency=0, color=False, clock=ticking_clock())


@pytest.fixture
def git(session):
    # Runs command lines and fails the test on any error
    def run(*lines):
        outputs = []
        for line in lines:
            result = session.run(line)
            assert result.ok, f"{line!r} failed: {result.output}"
            outputs.append(result.output)
        return outputs[-1] if len(outputs) == 1 else outputs
    return run


@pytest.fixture
def repo_with_commit(session, git):
    # An initialized repository with README.md committed on main
    git(
        'git init',
        'echo "# Project" > README.md',
        'git add README.md',
        'git commit -m "Initial commit"',
    )
    return session.repo


@pytest.fixture
def repo_with_branches(repo_with_commit, git):
    # main and feature both at the initial commit, main checked out
    git('git branch feature')
    return repo_with_commit


@pytest.fixture
def repo_with_origin(repo_with_commit, git):
    # main pushed to a simulated remote 'origin' and tracking it
    git(
        'git remote add origin https://example.com/team/project.git',
        'git push -u origin main',
    )
    return repo_with_commit


@pytest.fixture
def collaborator():
    # Simulates somebody else pushing to the remote: collaborator(repo, {'path': 'content'}, 'message')
    def push(repo, changes, message, branch='main', remote='origin'):
        return record_remote_commit(repo, remote, branch, changes, message, author='Collaborator <collab@example.com>')
    return push


@pytest.fixture
def bare_repo():
    # A Repository handle on its own filesystem, initialized, without a session
    repo = Repository(VirtualFS(), '~/project', clock=ticking_clock())
    repo.init('main')
    return repo
