# The command: git help | git version
# What it does: Prints the list of supported commands, or the version of the sandbox
# How it does: The help text is built from the command table so that it always matches what the interpreter accepts

from .. import __version__

_SUMMARIES = {
    'init': 'Create an empty repository',
    'clone': 'Clone a simulated remote into a new directory',
    'status': 'Show the working tree status',
    'add': 'Add file contents to the index',
    'commit': 'Record changes to the repository',
    'log': 'Show commit logs',
    'diff': 'Show changes between commits, commit and working tree, etc',
    'branch': 'List, create, rename or delete branches',
    'checkout': 'Switch branches or restore working tree files',
    'switch': 'Switch branches',
    'merge': 'Join two development histories together',
    'rebase': 'Reapply commits on top of another base tip',
    'reset': 'Reset current HEAD to the specified state',
    'restore': 'Restore working tree files',
    'revert': 'Revert an existing commit',
    'cherry-pick': 'Apply the changes introduced by an existing commit',
    'stash': 'Stash the changes in a dirty working directory away',
    'clean': 'Remove untracked files from the working tree',
    'rm': 'Remove files from the working tree and from the index',
    'mv': 'Move or rename a file or a directory',
    'tag': 'Create, list or delete tags',
    'remote': 'Manage the set of simulated remotes',
    'fetch': 'Download refs from a simulated remote',
    'pull': 'Fetch from a simulated remote and merge',
    'push': 'Update refs of a simulated remote',
    'config': 'Get and set repository options',
    'help': 'Show this list',
    'version': 'Show the sandgit version',
}


def run_help(ctx, args):
    from .table import Subcommand # The table imports this module
    lines = ["usage: git <command> [<args>]", "", "These are the supported git commands:", ""]
    for subcommand in Subcommand:
        lines.append(f"   {subcommand.value:<12} {_SUMMARIES.get(subcommand.value, '')}".rstrip())
    return '\n'.join(lines)


def run_version(ctx, args):
    return f"git version {__version__} (sandgit)"
