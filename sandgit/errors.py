"""Error taxonomy for sandgit.

Every failure a command can report is a ``SandgitError`` carrying an
``ErrorKind``. Handlers raise them; the session converts them into a
``CommandResult`` so callers can key on ``result.error`` instead of parsing
the message text.
"""

from __future__ import annotations

import enum


class ErrorKind(str, enum.Enum):
    UNRESOLVED_REFERENCE = "UnresolvedReference"
    NO_SUCH_PARENT = "NoSuchParent"
    PATHSPEC_NOT_FOUND = "PathspecNotFound"
    NOTHING_TO_COMMIT = "NothingToCommit"
    BRANCH_EXISTS = "BranchExists"
    CANNOT_DELETE_CHECKED_OUT_BRANCH = "CannotDeleteCheckedOutBranch"
    MERGE_CONFLICT = "MergeConflict"
    NON_FAST_FORWARD_PUSH = "NonFastForwardPush"
    NO_PARENT_TO_REVERT = "NoParentToRevert"
    NOT_A_REPOSITORY = "NotARepository"
    UNKNOWN_COMMAND = "UnknownCommand"
    USAGE = "UsageError"
    NOT_ON_BRANCH = "NotOnBranch"
    LOCAL_CHANGES_CONFLICT = "LocalChangesConflict"
    UNRELATED_HISTORIES = "UnrelatedHistories"
    NO_SUCH_REMOTE = "NoSuchRemote"
    REMOTE_EXISTS = "RemoteExists"
    TAG_EXISTS = "TagExists"
    NO_STASH_ENTRIES = "NoStashEntries"
    NO_SUCH_FILE = "NoSuchFile"


class SandgitError(Exception):
    """Base exception class for all sandgit command failures.

    Attributes:
        message: Human-readable text shown to the user, already prefixed
            the way git prefixes it (``fatal:``, ``error:``...).
        kind: Structured classification of the failure.
    """

    kind = ErrorKind.USAGE

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UsageError(SandgitError):
    kind = ErrorKind.USAGE


class UnresolvedReference(SandgitError):
    """Raised when a revision expression names nothing.

    Attributes:
        ref: The expression that failed to resolve.
    """

    kind = ErrorKind.UNRESOLVED_REFERENCE

    def __init__(self, ref: str, message: str | None = None) -> None:
        self.ref = ref
        super().__init__(message or f"fatal: ambiguous argument '{ref}': unknown revision or path not in the working tree.")


class NoSuchParent(SandgitError):
    kind = ErrorKind.NO_SUCH_PARENT

    def __init__(self, oid: str, ref: str) -> None:
        self.oid = oid
        self.ref = ref
        super().__init__(f"fatal: ambiguous argument '{ref}': commit {oid[:7]} has no parent")


class PathspecNotFound(SandgitError):
    kind = ErrorKind.PATHSPEC_NOT_FOUND

    def __init__(self, path: str, message: str | None = None) -> None:
        self.path = path
        super().__init__(message or f"fatal: pathspec '{path}' did not match any files")


class NothingToCommit(SandgitError):
    kind = ErrorKind.NOTHING_TO_COMMIT

    def __init__(self, message: str = "nothing to commit, working tree clean") -> None:
        super().__init__(message)


class BranchExists(SandgitError):
    kind = ErrorKind.BRANCH_EXISTS

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"fatal: a branch named '{name}' already exists")


class CannotDeleteCheckedOutBranch(SandgitError):
    kind = ErrorKind.CANNOT_DELETE_CHECKED_OUT_BRANCH

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"error: cannot delete branch '{name}' checked out")


class MergeConflict(SandgitError):
    """Raised when a merge stops on conflicting paths.

    Unlike every other kind this one leaves the repository in the
    conflicted state: the user resolves, ``add``s and ``commit``s.

    Attributes:
        paths: Conflicting paths, sorted.
    """

    kind = ErrorKind.MERGE_CONFLICT

    def __init__(self, paths, message: str | None = None) -> None:
        self.paths = tuple(sorted(paths))
        super().__init__(message or "\n".join(
            [f"CONFLICT (content): Merge conflict in {path}" for path in self.paths]
            + ["Automatic merge failed; fix conflicts and then commit the result."]
        ))


class NonFastForwardPush(SandgitError):
    kind = ErrorKind.NON_FAST_FORWARD_PUSH

    def __init__(self, url: str, branch: str) -> None:
        self.branch = branch
        super().__init__(
            f"To {url}\n"
            f" ! [rejected]        {branch} -> {branch} (non-fast-forward)\n"
            f"error: failed to push some refs to '{url}'\n"
            "hint: Updates were rejected because the tip of your current branch is behind\n"
            "hint: its remote counterpart. Integrate the remote changes (e.g.\n"
            "hint: 'git pull ...') before pushing again."
        )


class NoParentToRevert(SandgitError):
    kind = ErrorKind.NO_PARENT_TO_REVERT

    def __init__(self, oid: str) -> None:
        self.oid = oid
        super().__init__(f"error: cannot revert {oid[:7]}: it is a root commit with no parent to diff against")


class NotARepository(SandgitError):
    kind = ErrorKind.NOT_A_REPOSITORY

    def __init__(self) -> None:
        super().__init__("fatal: not a git repository (or any of the parent directories): .git")


class UnknownCommand(SandgitError):
    kind = ErrorKind.UNKNOWN_COMMAND

    def __init__(self, name: str, message: str | None = None) -> None:
        self.name = name
        super().__init__(message or f"{name}: command not found")


class NotOnBranch(SandgitError):
    kind = ErrorKind.NOT_ON_BRANCH


class LocalChangesConflict(SandgitError):
    """Raised when an operation would overwrite uncommitted work.

    Attributes:
        paths: The endangered paths.
    """

    kind = ErrorKind.LOCAL_CHANGES_CONFLICT

    def __init__(self, paths, operation: str = "checkout", message: str | None = None) -> None:
        self.paths = tuple(sorted(paths))
        listing = "\n".join(f"\t{path}" for path in self.paths)
        action = "switch branches" if operation == "checkout" else operation
        super().__init__(message or (
            f"error: Your local changes to the following files would be overwritten by {operation}:\n"
            f"{listing}\n"
            f"Please commit your changes or stash them before you {action}.\n"
            "Aborting"
        ))


class UnrelatedHistories(SandgitError):
    kind = ErrorKind.UNRELATED_HISTORIES

    def __init__(self) -> None:
        super().__init__("fatal: refusing to merge unrelated histories")


class NoSuchRemote(SandgitError):
    kind = ErrorKind.NO_SUCH_REMOTE

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"fatal: '{name}' does not appear to be a git repository\n"
            "fatal: Could not read from remote repository."
        )


class RemoteExists(SandgitError):
    kind = ErrorKind.REMOTE_EXISTS

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"error: remote {name} already exists.")


class TagExists(SandgitError):
    kind = ErrorKind.TAG_EXISTS

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"fatal: tag '{name}' already exists")


class NoStashEntries(SandgitError):
    kind = ErrorKind.NO_STASH_ENTRIES

    def __init__(self) -> None:
        super().__init__("error: No stash entries found.")


class NoSuchFile(SandgitError):
    kind = ErrorKind.NO_SUCH_FILE


# Backend faults. Raised by the in-memory primitives and classified so that
# nothing unclassified reaches the interpreter boundary.

class ObjectNotFound(UnresolvedReference):
    def __init__(self, oid: str) -> None:
        super().__init__(oid, f"fatal: bad object {oid}")


class RefNotFound(UnresolvedReference):
    pass


class AmbiguousObjectName(UnresolvedReference):
    def __init__(self, prefix: str) -> None:
        super().__init__(prefix, f"error: short object ID {prefix} is ambiguous")


class NetworkBusyError(RuntimeError):
    """Raised when a transfer starts while another one is in flight.

    This is a programming error of the caller, not a command outcome.
    """
