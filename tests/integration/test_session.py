# Integration tests for the Session boundary: dispatch, chaining, rollback and state

from sandgit.commands import table
from sandgit.errors import ErrorKind, UsageError


class TestDispatch:

    def test_not_a_repository(self, session):
        result = session.run('git status')
        assert result.error is ErrorKind.NOT_A_REPOSITORY
        assert result.output == "fatal: not a git repository (or any of the parent directories): .git"

    def test_outside_the_repository(self, repo_with_commit, session):
        assert session.run('cd ~ && git status').error is ErrorKind.NOT_A_REPOSITORY

    def test_unknown_git_command(self, session):
        result = session.run('git frobnicate')
        assert result.error is ErrorKind.UNKNOWN_COMMAND
        assert result.output == "git: 'frobnicate' is not a git command. See 'git help'."

    def test_unknown_program(self, session):
        result = session.run('svn status')
        assert result.error is ErrorKind.UNKNOWN_COMMAND
        assert result.output == "svn: command not found"

    def test_usage_errors_are_results(self, repo_with_commit, session):
        result = session.run('git commit --no-such-flag')
        assert result.error is ErrorKind.USAGE

    def test_commit_requires_message(self, repo_with_commit, session, git):
        git('echo x > README.md', 'git add README.md')
        assert session.run('git commit').error is ErrorKind.USAGE


class TestChaining:
    # Tests for `&&` chains

    def test_outputs_are_joined(self, repo_with_commit, session):
        result = session.run('echo one && echo two')
        assert result.ok
        assert result.output == "one\ntwo"

    def test_stops_at_first_failure(self, session):
        result = session.run('git status && echo written > a.txt')
        assert result.error is ErrorKind.NOT_A_REPOSITORY
        assert not session.fs.exists('~/project/a.txt')

    def test_earlier_segments_stay_applied(self, session):
        result = session.run('echo kept > a.txt && git status')
        assert not result.ok
        assert session.fs.read('~/project/a.txt') == "kept\n"

    def test_syntax_error(self, session):
        assert session.run('git status | cat').error is ErrorKind.USAGE


class TestRollback:
    # A failing command leaves no trace

    def test_failed_handler_is_rolled_back(self, repo_with_commit, session, monkeypatch):
        repo = repo_with_commit
        head = repo.get_head_commit()

        def half_done(ctx, args):
            ctx.repo.branch('half-made')
            ctx.repo.worktree.write('partial.txt', 'partial')
            ctx.repo.index.update_index_entry('README.md', 'f' * 40)
            raise UsageError("fatal: simulated failure")

        monkeypatch.setitem(table.HANDLERS, table.Subcommand.BRANCH, half_done)
        result = session.run('git branch anything')

        assert result.error is ErrorKind.USAGE
        assert repo.branches == {'main': head}
        assert not repo.worktree.exists('partial.txt')
        assert repo.index.get('README.md') == repo.head_files()['README.md']

    def test_failed_init_keeps_previous_repository(self, repo_with_commit, session, monkeypatch):
        def broken_init(ctx, args):
            ctx.session.mount('~/elsewhere').init()
            raise UsageError("fatal: simulated failure")

        monkeypatch.setitem(table.HANDLERS, table.Subcommand.INIT, broken_init)
        session.run('git init')

        assert session.repo is repo_with_commit
        assert not session.fs.exists('~/elsewhere')


class TestState:

    def test_uninitialized(self, session):
        state = session.state()
        assert state.cwd == '~/project'
        assert state.repo_path == '~/project'
        assert state.head is None
        assert state.commits == []

    def test_snapshot(self, repo_with_branches, session, git):
        git('git tag v1', 'echo x > README.md', 'git stash push -m parked')
        state = session.state()

        assert state.current_branch == 'main'
        assert state.head == repo_with_branches.get_head_commit()
        assert set(state.branches) == {'main', 'feature'}
        assert state.tags == {'v1': state.head}
        assert [c.id for c in state.commits] == [state.head]
        assert state.stashes == ["On main: parked"]
        assert state.network_operation is None

    def test_remotes(self, repo_with_origin, session):
        assert session.state().remotes == {'origin': 'https://example.com/team/project.git'}
