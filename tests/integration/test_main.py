# Integration tests for the console entry point

import pytest

from sandgit import __version__
from sandgit.__main__ import main


@pytest.fixture(autouse=True)
def no_network_delay(monkeypatch):
    monkeypatch.setenv('SANDGIT_NETWORK_LATENCY', '0')


class TestMain:

    def test_runs_command_lines(self, capsys):
        status = main(['--no-color', '-c', 'git init', '-c', 'touch a.txt && git add a.txt', '-c', 'git status -s'])
        out = capsys.readouterr().out
        assert status == 0
        assert "Initialized empty Git repository in ~/project/.git/" in out
        assert "A  a.txt" in out

    def test_stops_at_first_failure(self, capsys):
        status = main(['-c', 'git status', '-c', 'git init'])
        captured = capsys.readouterr()
        assert status == 1
        assert "fatal: not a git repository" in captured.err
        assert "Initialized" not in captured.out

    def test_version(self, capsys):
        with pytest.raises(SystemExit):
            main(['--version'])
        assert capsys.readouterr().out.strip() == f"sandgit {__version__}"

    def test_interactive_prompt(self, monkeypatch, capsys):
        lines = iter(['git init', 'echo hi > a.txt', 'cat a.txt', 'exit'])
        monkeypatch.setattr('builtins.input', lambda prompt: next(lines))
        assert main(['--no-color']) == 0
        assert "hi" in capsys.readouterr().out.splitlines()
