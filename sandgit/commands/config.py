# The command: git config [--global] <key> [<value>] | git config --list | git config --unset <key>
# What it does: A user-facing command to read or set a configuration key-value pair (e.g., user.name)
# How it does: It acts as a simple dispatcher, passing the key and value to the `RepoConfig` of the repository, which handles the `section.key` addressing and the configparser storage. --global is accepted and writes the same in-memory configuration
# What data structure it uses: None directly, but it provides the interface to the underlying Map / Dictionary structure managed by `utils/config.py`

from ..errors import UsageError
from ..utils.config import split_key


def run(ctx, args):
    config = ctx.repo.config
    if args.list:
        return '\n'.join(f"{key}={value}" for key, value in config.items())

    if not args.key:
        raise UsageError("error: key does not contain a section: ")
    split_key(args.key)

    if args.unset:
        if config.read_config(args.key) is None:
            raise UsageError(f"error: key '{args.key}' is not set")
        config.unset(args.key)
        return ''

    if args.value is None:
        value = config.read_config(args.key)
        if value is None:
            raise UsageError(f"error: key '{args.key}' is not set")
        return value

    config.write_config(args.key, args.value)
    return ''

