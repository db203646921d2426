# What it does: Answers questions about the commit graph: ancestry, reachability, the merge base of two commits and the order commits are listed or replayed in
# How it does: Every walk is a breadth-first search over commit ids, reading parents from the object store. Nothing holds live references between commits, only explicit id sets
# What data structure it uses: Directed Acyclic Graph (the commits), Queue (deque) for the BFS frontier, Set for visited ids, Heap for the topological listing

import heapq
from collections import deque


def get_parents(repo, commit_hash): # All parents of a commit, primary first
    return list(repo.read_commit(commit_hash).parents)


def is_ancestor(repo, ancestor, descendant):
    """
    Reverse BFS from `descendant` following every parent edge until `ancestor` shows up
    or the frontier is exhausted. Reflexive: a commit is its own ancestor.
    """
    if not ancestor or not descendant:
        return False
    visited = set()
    queue = deque([descendant])
    while queue:
        current = queue.popleft()
        if current == ancestor:
            return True
        if current in visited:
            continue
        visited.add(current)
        queue.extend(p for p in get_parents(repo, current) if p not in visited)
    return False


def reachable(repo, *starts): # Every commit id reachable from the given commits, the commits included
    seen = set()
    queue = deque(s for s in starts if s)
    while queue:
        current = queue.popleft()
        if current in seen:
            continue
        seen.add(current)
        queue.extend(get_parents(repo, current))
    return seen


def merge_base(repo, commit1, commit2): # Common ancestor found by walking both histories alternately, one step each
    if commit1 == commit2:
        return commit1

    queue1 = deque([commit1])
    queue2 = deque([commit2])
    ancestors1 = {commit1}
    ancestors2 = {commit2}

    while queue1 or queue2:
        if queue1:
            current1 = queue1.popleft()
            if current1 in ancestors2:
                return current1
            for parent in get_parents(repo, current1):
                if parent not in ancestors1:
                    ancestors1.add(parent)
                    queue1.append(parent)

        if queue2:
            current2 = queue2.popleft()
            if current2 in ancestors1:
                return current2
            for parent in get_parents(repo, current2):
                if parent not in ancestors2:
                    ancestors2.add(parent)
                    queue2.append(parent)

    return None


def ordered_commits(repo, commit_ids):
    """
    Lists `commit_ids` newest first in topological order: a commit always comes before its parents.
    Among commits that are ready at the same time the most recent timestamp wins, then the latest created.
    """
    commit_ids = set(commit_ids)
    commits = {cid: repo.read_commit(cid) for cid in commit_ids}

    children_left = {cid: 0 for cid in commit_ids}
    for commit in commits.values():
        for parent in commit.parents:
            if parent in children_left:
                children_left[parent] += 1

    def priority(cid):
        return (-commits[cid].timestamp, -repo.objects.sequence(cid), cid)

    ready = [priority(cid) for cid, count in children_left.items() if count == 0]
    heapq.heapify(ready)

    ordered = []
    while ready:
        cid = heapq.heappop(ready)[2]
        ordered.append(commits[cid])
        for parent in commits[cid].parents:
            if parent in children_left:
                children_left[parent] -= 1
                if children_left[parent] == 0:
                    heapq.heappush(ready, priority(parent))
    return ordered


def commits_to_replay(repo, head, upstream): # Commits reachable from head but not from upstream, oldest first
    to_replay = reachable(repo, head) - reachable(repo, upstream)
    return list(reversed(ordered_commits(repo, to_replay)))
