# What it does: Turns revision expressions (`HEAD`, `HEAD~2`, `main^`, branch and tag names, abbreviated hashes) into commit ids
# How it does: Strips the ancestry suffixes off the end, resolves the remaining name by trying a direct ref lookup, then the tag namespace, then object id prefix expansion, and finally walks primary parents. Each call reads the current state, nothing is cached
# What data structure it uses: Linear traversal of the primary-parent chain of the commit DAG

import re

from ..errors import NoSuchParent, RefNotFound, UnresolvedReference

_SUFFIX = re.compile(r'(~\d*|\^)$')


def split_ancestry(ref): # 'HEAD~2^' -> ('HEAD', 3)
    depth = 0
    base = ref
    while True:
        match = _SUFFIX.search(base)
        if not match or match.start() == 0:
            return base, depth
        token = match.group(1)
        depth += int(token[1:] or 1) if token.startswith('~') else 1
        base = base[:match.start()]


def resolve_name(repo, name):
    try:
        return repo.resolve_ref(name)
    except RefNotFound:
        pass
    try:
        return repo.resolve_ref(f'refs/tags/{name}')
    except RefNotFound:
        pass
    return repo.expand_oid(name)


def resolve_commit(repo, ref):
    """
    Resolves `ref` to a commit id or raises UnresolvedReference.
    Walking past a root commit raises NoSuchParent.
    """
    if not ref:
        raise UnresolvedReference(ref or '')
    base, depth = split_ancestry(ref)
    try:
        commit_hash = resolve_name(repo, base)
    except UnresolvedReference:
        raise UnresolvedReference(ref)

    for _ in range(depth):
        parent = repo.read_commit(commit_hash).parent
        if not parent:
            raise NoSuchParent(commit_hash, ref)
        commit_hash = parent
    return commit_hash


def try_resolve(repo, ref): # Returns the commit id or None, for arguments that may be either a revision or a path
    try:
        return resolve_commit(repo, ref)
    except (UnresolvedReference, NoSuchParent):
        return None
