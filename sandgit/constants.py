"""Defaults shared across the sandbox."""

HOME = "~"

DEFAULT_REPO_PATH = "~/project"

DEFAULT_BRANCH = "main"

DEFAULT_REMOTE = "origin"

DEFAULT_USER_NAME = "User"

DEFAULT_USER_EMAIL = "user@example.com"

# Simulated transfer delays, in seconds.
NETWORK_LATENCY = 1.5
CLONE_LATENCY = 2.0

NETWORK_LATENCY_ENV_VAR = "SANDGIT_NETWORK_LATENCY"
COLOR_ENV_VAR = "SANDGIT_COLOR"

EDITORS = ("nano", "vi", "vim", "notepad", "code", "pico", "emacs")

SHORT_HASH = 7

# Shortest object-id prefix accepted by the resolver.
MIN_ABBREV = 4
