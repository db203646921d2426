"""sandgit: a sandboxed, in-process git engine for practising git commands."""

__version__ = "0.1.0"

from .errors import ErrorKind, SandgitError  # noqa: E402
from .session import CommandResult, Session  # noqa: E402

__all__ = ["CommandResult", "ErrorKind", "SandgitError", "Session", "__version__"]
