"""The interpreter boundary of sandgit.

A ``Session`` owns the virtual filesystem, the shell cursor, the mounted
repository and the network simulator. ``Session.run`` takes one raw command
line, runs every ``&&``-chained segment through the shell builtins or the git
command table and returns a ``CommandResult``. Every ``SandgitError`` is
converted here; nothing else is caught.
"""

from __future__ import annotations

import os
import time
from dataclasses import dataclass, field

from . import shell
from .commands import about, table
from .constants import COLOR_ENV_VAR, DEFAULT_REPO_PATH
from .errors import ErrorKind, MergeConflict, NotARepository, SandgitError
from .formatting import Formatter
from .logging import bind_context, clear_context, get_logger
from .network import NetworkSimulator
from .utils import history
from .utils.repository import Repository
from .utils.worktree import VirtualFS, relative_to

logger = get_logger(__name__)


@dataclass
class Context:
    """Everything a command handler may touch."""

    session: Session
    repo: Repository | None
    network: NetworkSimulator
    formatter: Formatter
    cwd: str


@dataclass
class CommandResult:
    """Outcome of a command line.

    Attributes:
        output: The text block shown to the user (possibly empty).
        error: Kind of the failure that stopped the line, None on success.
        paths: Paths attached to the failure (conflicts, endangered files).
    """

    output: str = ""
    error: ErrorKind | None = None
    paths: tuple = ()

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class SessionState:
    """Observable state recomputed after every command, for renderers."""

    cwd: str
    repo_path: str | None
    head: str | None
    current_branch: str | None
    branches: dict = field(default_factory=dict)
    tags: dict = field(default_factory=dict)
    commits: list = field(default_factory=list)
    remotes: dict = field(default_factory=dict)
    stashes: list = field(default_factory=list)
    network_operation: str | None = None


def color_from_env(default: bool = True) -> bool:
    value = os.environ.get(COLOR_ENV_VAR)
    if value is None:
        return default
    return value.strip().lower() not in ("0", "false", "no", "off", "never")


class Session:
    """One independent practice sandbox.

    Args:
        fs: Virtual filesystem to use, a fresh one by default.
        repo_path: Directory of the repository; the shell cursor starts there.
            The repository is mounted but not initialized until ``git init``.
        latency: Simulated network delay in seconds (default from
            SANDGIT_NETWORK_LATENCY, else 1.5). Clone uses 2.0 unless set.
        color: Colorize output (default from SANDGIT_COLOR, else True).
        clock: Source of commit timestamps.
        sleep: Used by the network simulator to wait.
    """

    def __init__(
        self,
        fs: VirtualFS | None = None,
        repo_path: str = DEFAULT_REPO_PATH,
        latency: float | None = None,
        color: bool | None = None,
        clock=time.time,
        sleep=time.sleep,
    ) -> None:
        self.fs = fs if fs is not None else VirtualFS()
        self.clock = clock
        self.network = NetworkSimulator(latency=latency, sleep=sleep)
        self.formatter = Formatter(color_from_env() if color is None else color)
        self.shell = shell.Shell(self)
        self.repo: Repository | None = None
        self.mount(repo_path)
        self.cwd = repo_path

    def mount(self, root: str) -> Repository:
        """Replaces the session's repository with a fresh handle rooted at ``root``."""
        self.fs.makedirs(root)
        self.repo = Repository(self.fs, root, clock=self.clock)
        logger.debug("repository_mounted", root=root)
        return self.repo

    def context(self) -> Context:
        return Context(
            session=self,
            repo=self.repo,
            network=self.network,
            formatter=self.formatter,
            cwd=self.cwd,
        )

    def run(self, line: str) -> CommandResult:
        """Runs a command line; a chain stops at the first failing segment."""
        outputs = []
        try:
            segments = shell.split_line(line)
        except SandgitError as exc:
            return CommandResult(output=exc.message, error=exc.kind)

        for tokens in segments:
            result = self.run_tokens(tokens)
            if result.output:
                outputs.append(result.output)
            if not result.ok:
                return CommandResult(output="\n".join(outputs), error=result.error, paths=result.paths)
        return CommandResult(output="\n".join(outputs))

    def run_tokens(self, tokens: list[str]) -> CommandResult:
        bind_context(command=tokens[0])
        try:
            if tokens[0] == "git":
                output = self.run_git(tokens[1:])
            else:
                output = self.shell.run(tokens)
        except SandgitError as exc:
            logger.info("command_failed", kind=exc.kind.value)
            return CommandResult(output=exc.message, error=exc.kind, paths=tuple(getattr(exc, "paths", ())))
        finally:
            clear_context()
        return CommandResult(output=output or "")

    def run_git(self, argv: list[str]) -> str:
        if not argv or argv[0] in ("--help", "-h"):
            return about.run_help(self.context(), None)
        if argv[0] == "--version":
            return about.run_version(self.context(), None)

        subcommand = table.Subcommand.lookup(argv[0])
        if subcommand not in table.OUTSIDE_REPOSITORY and not self.inside_repository():
            raise NotARepository()
        args = table.parse(subcommand, argv[1:])
        logger.info("command_dispatched", subcommand=subcommand.value)

        checkpoint = self._checkpoint()
        try:
            return table.HANDLERS[subcommand](self.context(), args)
        except MergeConflict:
            raise
        except SandgitError:
            self._restore(checkpoint)
            raise

    def inside_repository(self) -> bool:
        return (
            self.repo is not None
            and self.repo.initialized
            and relative_to(self.repo.root, self.cwd) is not None
        )

    def _checkpoint(self):
        return {
            "repo": self.repo,
            "state": self.repo.checkpoint() if self.repo is not None else None,
            "fs": self.fs.snapshot(),
        }

    def _restore(self, checkpoint) -> None:
        self.repo = checkpoint["repo"]
        if self.repo is not None:
            self.repo.restore(checkpoint["state"])
        self.fs.restore(checkpoint["fs"])
        logger.debug("state_restored")

    def state(self) -> SessionState:
        repo = self.repo
        if repo is None or not repo.initialized:
            return SessionState(
                cwd=self.cwd,
                repo_path=repo.root if repo else None,
                head=None,
                current_branch=None,
                network_operation=self.network.operation,
            )

        starts = list(repo.branches.values()) + list(repo.tags.values()) + [repo.get_head_commit()]
        return SessionState(
            cwd=self.cwd,
            repo_path=repo.root,
            head=repo.get_head_commit(),
            current_branch=repo.get_current_branch(),
            branches=dict(repo.branches),
            tags=dict(repo.tags),
            commits=history.ordered_commits(repo, history.reachable(repo, *starts)),
            remotes={name: remote.url for name, remote in repo.remotes.items()},
            stashes=[entry.label for entry in reversed(repo.stashes)],
            network_operation=self.network.operation,
        )
