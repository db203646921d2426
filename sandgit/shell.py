# What it does: The tiny POSIX-like shell of the sandbox: splits a command line into `&&`-chained segments and runs the builtins (cd, pwd, touch, mkdir, echo, cat, ls, open, editors, configure-env) against the virtual filesystem
# How it does: `split_line` tokenizes with shlex in POSIX mode (quotes and escapes like a real shell), then cuts the token stream at every `&&`. Pipes, `;` and background jobs are refused. Each builtin is a method resolving paths against the session's cursor
# What data structure it uses: List of token lists (the chain), Map / Dictionary (builtin name -> method)

import posixpath
import shlex

from .constants import EDITORS, HOME
from .errors import NoSuchFile, UnknownCommand, UsageError
from .utils.worktree import normalize

CHAIN = '&&'
_REDIRECTS = {'>', '>>'}


def tokenize(line):
    lexer = shlex.shlex(line, posix=True, punctuation_chars=True)
    lexer.whitespace_split = True
    lexer.commenters = ''
    try:
        return list(lexer)
    except ValueError as exc: # No closing quotation / no escaped character
        raise UsageError(f"syntax error: {exc}") from None


def split_line(line):
    """
    Splits a command line into segments of tokens, one per `&&`-chained command.
    Empty segments between operators are a syntax error, like in bash.
    """
    tokens = tokenize(line)
    if not tokens:
        return []

    segments = [[]]
    for token in tokens:
        if token != CHAIN and set(token) <= set('|;&<'): # pipes, ';', background jobs, input redirects
            raise UsageError(f"syntax error: '{token}' is not supported, chain commands with '&&'")
        if token == CHAIN:
            if not segments[-1]:
                raise UsageError("syntax error near unexpected token `&&'")
            segments.append([])
        else:
            segments[-1].append(token)
    if not segments[-1]:
        raise UsageError("syntax error: unexpected end of line after `&&'")
    return segments


class Shell:

    def __init__(self, session):
        self.session = session
        self.builtins = {
            'cd': self.cd,
            'pwd': self.pwd,
            'touch': self.touch,
            'mkdir': self.mkdir,
            'echo': self.echo,
            'cat': self.cat,
            'open': self.open,
            'ls': self.ls,
            'configure-env': self.configure_env,
        }

    @property
    def fs(self):
        return self.session.fs

    def _path(self, arg):
        return normalize(self.session.cwd, arg)

    def run(self, tokens): # Runs one builtin segment and returns its output
        name, args = tokens[0], tokens[1:]
        if name in EDITORS:
            return self.editor(name, args)
        if name not in self.builtins:
            raise UnknownCommand(name)
        return self.builtins[name](args)

    def cd(self, args):
        if len(args) > 1:
            raise UsageError("cd: too many arguments")
        target = self._path(args[0]) if args else HOME
        if not self.fs.is_dir(target):
            raise NoSuchFile(f"cd: {args[0]}: No such file or directory")
        self.session.cwd = target
        return ''

    def pwd(self, args):
        return self.session.cwd

    def touch(self, args):
        if not args:
            raise UsageError("touch: missing file operand")
        for arg in args:
            path = self._path(arg)
            if self.fs.is_dir(path) or self.fs.is_file(path):
                continue
            if not self.fs.is_dir(posixpath.dirname(path)):
                raise NoSuchFile(f"touch: cannot touch '{arg}': No such file or directory")
            self.fs.write(path, '')
        return ''

    def mkdir(self, args):
        parents = '-p' in args
        names = [arg for arg in args if arg != '-p']
        if not names:
            raise UsageError("mkdir: missing operand")
        for name in names:
            path = self._path(name)
            if parents and self.fs.is_dir(path):
                continue
            self.fs.mkdir(path, parents=parents)
        return ''

    def echo(self, args):
        redirects = [i for i, arg in enumerate(args) if arg in _REDIRECTS]
        if not redirects:
            return ' '.join(args)

        position = redirects[0]
        operator = args[position]
        targets = args[position + 1:]
        if not targets:
            raise UsageError("syntax error near unexpected token `newline'")
        if len(targets) > 1:
            raise UsageError(f"echo: unexpected argument after redirect: {targets[1]}")

        content = ' '.join(args[:position]) + '\n'
        path = self._path(targets[0])
        if not self.fs.is_dir(posixpath.dirname(path)):
            raise NoSuchFile(f"{targets[0]}: No such file or directory")
        if operator == '>>' and self.fs.is_file(path):
            existing = self.fs.read(path)
            if existing and not existing.endswith('\n'):
                existing += '\n'
            content = existing + content
        self.fs.write(path, content)
        return ''

    def cat(self, args):
        if not args:
            raise UsageError("cat: missing file operand")
        chunks = []
        for arg in args:
            path = self._path(arg)
            if self.fs.is_dir(path):
                raise NoSuchFile(f"cat: {arg}: Is a directory")
            if not self.fs.is_file(path):
                raise NoSuchFile(f"cat: {arg}: No such file or directory")
            chunks.append(self.fs.read(path))
        return ''.join(chunks).rstrip('\n')

    def open(self, args):
        if len(args) != 1:
            raise UsageError("open: expected exactly one file")
        return self.cat(args)

    def ls(self, args):
        if len(args) > 1:
            raise UsageError("ls: only one directory can be listed")
        target = self._path(args[0]) if args else self.session.cwd
        if self.fs.is_file(target):
            return posixpath.basename(target)
        names = []
        for name in self.fs.listdir(target):
            if name == '.git':
                continue
            names.append(name + '/' if self.fs.is_dir(f"{target}/{name}") else name)
        return '  '.join(names)

    def editor(self, name, args):
        target = args[0] if args else 'file'
        return (
            f"'{name}' is not available in this sandbox.\n"
            "To edit files use:\n"
            f"  echo \"content\" > {target}       (overwrite)\n"
            f"  echo \"more content\" >> {target}  (append)\n"
            f"  cat {target}                    (show content)"
        )

    def configure_env(self, args): # Test and setup hook: configure-env cwd=~/x repo=~/y
        for arg in args:
            key, sep, value = arg.partition('=')
            if not sep or not value:
                raise UsageError(f"configure-env: expected key=value, got '{arg}'")
            if key == 'cwd':
                path = normalize(HOME, value)
                self.fs.makedirs(path)
                self.session.cwd = path
            elif key == 'repo':
                self.session.mount(normalize(HOME, value))
            else:
                raise UsageError(f"configure-env: unknown key '{key}'")
        return ''
