# Integration tests for git stash and git clean

from sandgit.errors import ErrorKind


class TestStash:
    # Tests for stash push / list / pop / clear

    def test_round_trip(self, repo_with_commit, git):
        repo = repo_with_commit
        head = repo.get_head_commit()
        git('echo "# Changed" > README.md')

        saved = git('git stash')

        assert saved == f"Saved working directory and index state WIP on main: {head[:7]} Initial commit"
        assert git('cat README.md') == "# Project"
        assert git('git stash list') == f"stash@{{0}}: WIP on main: {head[:7]} Initial commit"

        entry_id = repo.stashes[-1].id
        popped = git('git stash pop')

        assert "modified:   README.md" in popped
        assert popped.endswith(f"Dropped refs/stash@{{0}} ({entry_id})")
        assert git('cat README.md') == "# Changed"
        assert repo.stashes == []
        assert repo.get_head_commit() == head

    def test_entry_is_a_commit_on_head(self, repo_with_commit, git):
        repo = repo_with_commit
        git('echo "# Changed" > README.md', 'git stash')
        commit = repo.read_commit(repo.stashes[-1].id)
        assert commit.parents == (repo.get_head_commit(),)
        assert repo.blob_content(commit.tree['README.md']) == "# Changed\n"

    def test_staged_entries_survive(self, repo_with_commit, git):
        git('echo new > new.txt', 'git add new.txt', 'git stash')
        assert not repo_with_commit.worktree.exists('new.txt')
        assert 'new.txt' not in repo_with_commit.index

        git('git stash pop')

        assert git('git status -s') == "A  new.txt"

    def test_message(self, repo_with_commit, git):
        git('echo x > README.md', 'git stash push -m "half done"')
        assert git('git stash list') == "stash@{0}: On main: half done"

    def test_newest_first(self, repo_with_commit, git):
        git('echo one > README.md', 'git stash push -m one', 'echo two > README.md', 'git stash push -m two')
        assert git('git stash list') == "stash@{0}: On main: two\nstash@{1}: On main: one"

    def test_nothing_to_save(self, repo_with_commit, git):
        assert git('git stash') == "No local changes to save"

    def test_pop_empty(self, repo_with_commit, session):
        assert session.run('git stash pop').error is ErrorKind.NO_STASH_ENTRIES

    def test_pop_refuses_to_overwrite(self, repo_with_commit, session, git):
        git('echo stashed > README.md', 'git stash', 'echo conflicting > README.md')
        result = session.run('git stash pop')
        assert result.error is ErrorKind.LOCAL_CHANGES_CONFLICT
        assert len(repo_with_commit.stashes) == 1

    def test_clear(self, repo_with_commit, git):
        git('echo x > README.md', 'git stash', 'git stash clear')
        assert repo_with_commit.stashes == []

    def test_without_commits(self, session, git):
        git('git init', 'touch a.txt')
        assert session.run('git stash').error is ErrorKind.USAGE


class TestClean:
    # Tests for git clean

    def test_requires_force(self, repo_with_commit, session, git):
        git('touch junk.txt')
        result = session.run('git clean')
        assert result.error is ErrorKind.USAGE
        assert repo_with_commit.worktree.exists('junk.txt')

    def test_dry_run(self, repo_with_commit, git):
        git('touch junk.txt', 'mkdir build', 'touch build/out.o')
        assert git('git clean -n') == "Would remove build/out.o\nWould remove junk.txt"
        assert git('git clean -n -d') == "Would remove build/\nWould remove junk.txt"
        assert repo_with_commit.worktree.exists('junk.txt')

    def test_force_removes_files_in_untracked_directories(self, repo_with_commit, git):
        repo = repo_with_commit
        git('touch junk.txt', 'mkdir build', 'touch build/out.o')

        assert git('git clean -f') == "Removing build/out.o\nRemoving junk.txt"
        assert not repo.worktree.exists('build/out.o')
        assert not repo.worktree.is_dir('build')
        assert git('git status -s') == ''

    def test_force_with_directories(self, repo_with_commit, git):
        repo = repo_with_commit
        git('touch junk.txt', 'mkdir build', 'touch build/out.o', 'mkdir empty')

        assert git('git clean -f -d') == "Removing build/\nRemoving empty/\nRemoving junk.txt"
        assert not repo.worktree.is_dir('build')
        assert not repo.worktree.is_dir('empty')
        assert repo.worktree.exists('README.md')

    def test_respects_gitignore(self, repo_with_commit, git):
        git('echo "*.log" > .gitignore', 'touch debug.log', 'touch junk.txt')
        assert git('git clean -n') == "Would remove .gitignore\nWould remove junk.txt"
