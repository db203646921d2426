# Integration tests for the smaller porcelain commands

import pytest

from sandgit import __version__
from sandgit.errors import ErrorKind


class TestBranch:

    def test_listing_marks_current(self, repo_with_branches, git):
        assert git('git branch') == "  feature\n* main"

    def test_create_existing(self, repo_with_branches, session):
        assert session.run('git branch feature').error is ErrorKind.BRANCH_EXISTS

    @pytest.mark.parametrize('name', ['bad..name', 'feature~1', 'with space', 'ends.lock'])
    def test_invalid_names(self, repo_with_commit, session, name):
        assert session.run(f'git branch "{name}"').error is ErrorKind.USAGE

    def test_delete(self, repo_with_branches, git):
        commit_id = repo_with_branches.branches['feature']
        assert git('git branch -d feature') == f"Deleted branch feature (was {commit_id[:7]})."
        assert 'feature' not in repo_with_branches.branches

    def test_delete_checked_out(self, repo_with_branches, session):
        assert session.run('git branch -d main').error is ErrorKind.CANNOT_DELETE_CHECKED_OUT_BRANCH

    def test_rename_current(self, repo_with_commit, git):
        git('git branch -m trunk')
        assert repo_with_commit.get_current_branch() == 'trunk'


class TestLogAndDiff:
    # Tests for git log and git diff output

    def test_oneline_decorations(self, repo_with_branches, git):
        commit_id = repo_with_branches.get_head_commit()
        git('git tag v1')
        assert git('git log --oneline') == f"{commit_id[:7]} (HEAD -> main, feature, tag: v1) Initial commit"

    def test_full_entry(self, repo_with_commit, git):
        commit_id = repo_with_commit.get_head_commit()
        lines = git('git log').splitlines()
        assert lines[0] == f"commit {commit_id} (HEAD -> main)"
        assert lines[1] == "Author: User <user@example.com>"
        assert lines[2].startswith("Date:   ")
        assert lines[4] == "    Initial commit"

    def test_newest_first_and_count(self, repo_with_commit, git):
        git('echo 2 > README.md', 'git commit -a -m "Second"', 'echo 3 > README.md', 'git commit -a -m "Third"')
        summaries = [line.split(' ', 1)[1] for line in git('git log --oneline').splitlines()]
        assert summaries == ["(HEAD -> main) Third", "Second", "Initial commit"]
        assert len(git('git log --oneline -2').splitlines()) == 2

    def test_log_past_root(self, repo_with_commit, session):
        assert session.run('git log HEAD~5').error is ErrorKind.NO_SUCH_PARENT

    def test_log_without_commits(self, session, git):
        git('git init')
        assert session.run('git log').error is ErrorKind.UNRESOLVED_REFERENCE

    def test_worktree_diff(self, repo_with_commit, git):
        git('echo "# Renamed" > README.md')
        lines = git('git diff').splitlines()
        assert lines[0] == "diff --git a/README.md b/README.md"
        assert "-# Project" in lines
        assert "+# Renamed" in lines

    def test_staged_diff(self, repo_with_commit, git):
        git('echo new > new.txt', 'git add new.txt')
        assert git('git diff') == ''
        output = git('git diff --staged')
        assert "new file mode 100644" in output
        assert "+new" in output
        assert git('git diff --cached --name-only') == "new.txt"


class TestFiles:
    # Tests for rm, mv and restore

    def test_rm(self, repo_with_commit, git):
        assert git('git rm README.md') == "rm 'README.md'"
        assert 'README.md' not in repo_with_commit.index
        assert not repo_with_commit.worktree.exists('README.md')

    def test_rm_cached_keeps_file(self, repo_with_commit, git):
        git('git rm --cached README.md')
        assert repo_with_commit.worktree.exists('README.md')
        assert git('git status -s') == "D  README.md\n?? README.md"

    def test_rm_refuses_local_modifications(self, repo_with_commit, session, git):
        git('echo changed > README.md')
        assert session.run('git rm README.md').error is ErrorKind.USAGE
        git('git rm -f README.md')
        assert not repo_with_commit.worktree.exists('README.md')

    def test_rm_unknown(self, repo_with_commit, session):
        assert session.run('git rm ghost.txt').error is ErrorKind.PATHSPEC_NOT_FOUND

    def test_mv(self, repo_with_commit, git):
        repo = repo_with_commit
        blob = repo.index.get('README.md')
        git('git mv README.md GUIDE.md')
        assert repo.index.get('GUIDE.md') == blob
        assert 'README.md' not in repo.index
        assert repo.worktree.read('GUIDE.md') == "# Project\n"

    def test_mv_into_directory(self, repo_with_commit, git):
        git('mkdir docs', 'git mv README.md docs')
        assert 'docs/README.md' in repo_with_commit.index

    def test_mv_untracked(self, repo_with_commit, session, git):
        git('touch loose.txt')
        assert session.run('git mv loose.txt moved.txt').error is ErrorKind.USAGE

    def test_restore_worktree(self, repo_with_commit, git):
        git('echo scribble > README.md', 'git restore README.md')
        assert repo_with_commit.worktree.read('README.md') == "# Project\n"

    def test_restore_staged(self, repo_with_commit, git):
        git('echo changed > README.md', 'git add README.md', 'git restore --staged README.md')
        assert git('git status -s') == " M README.md"


class TestTagsAndConfig:

    def test_tag_lifecycle(self, repo_with_commit, session, git):
        commit_id = repo_with_commit.get_head_commit()
        git('git tag v1.0')
        assert git('git tag') == "v1.0"
        assert session.run('git tag v1.0').error is ErrorKind.TAG_EXISTS
        assert git('git tag -d v1.0') == f"Deleted tag 'v1.0' (was {commit_id[:7]})"

    def test_config_get_and_set(self, repo_with_commit, session, git):
        assert git('git config user.name') == "User"
        git('git config user.name "Ada Lovelace"')
        assert git('git config user.name') == "Ada Lovelace"
        assert "user.name=Ada Lovelace" in git('git config --list').splitlines()
        assert session.run('git config core.editor').error is ErrorKind.USAGE

    def test_author_follows_config(self, repo_with_commit, git):
        git('git config user.name Ada', 'git config user.email ada@example.com')
        git('echo x > x.txt', 'git add x.txt', 'git commit -m "By Ada"')
        commit = repo_with_commit.read_commit(repo_with_commit.get_head_commit())
        assert commit.author == "Ada <ada@example.com>"


class TestHelp:

    def test_help_lists_commands(self, session):
        output = session.run('git help').output
        assert output.startswith("usage: git <command>")
        assert "cherry-pick" in output
        assert session.run('git').output == output

    def test_version(self, session):
        assert session.run('git version').output == f"git version {__version__} (sandgit)"
        assert session.run('git --version').output == f"git version {__version__} (sandgit)"
