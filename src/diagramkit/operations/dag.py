"""DAG utilities for commit graphs -- ancestor queries and merge base.

These utilities operate on an in-memory mapping of commit id -> GitCommit
and follow every parent id, so merge commits are walked through all of
their parents.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from typing import TYPE_CHECKING, Mapping

if TYPE_CHECKING:
    from diagramkit.models.gitgraph import GitCommit


def _bfs_walk(start: str, commits: Mapping[str, GitCommit]) -> Iterator[str]:
    """BFS walk from a start id, yielding each reachable commit id once.

    Unknown ids are yielded but not expanded.
    """
    visited: set[str] = set()
    queue: deque[str] = deque([start])
    while queue:
        current = queue.popleft()
        if current in visited:
            continue
        visited.add(current)
        yield current
        commit = commits.get(current)
        if commit is None:
            continue
        for parent_id in commit.parent_ids:
            if parent_id not in visited:
                queue.append(parent_id)


def get_all_ancestors(commits: Mapping[str, GitCommit], commit_id: str) -> set[str]:
    """Get all ancestor ids of a commit (including itself)."""
    return set(_bfs_walk(commit_id, commits))


def is_ancestor(
    commits: Mapping[str, GitCommit],
    potential_ancestor: str,
    commit_id: str,
) -> bool:
    """Check if potential_ancestor is reachable from commit_id.

    A commit counts as its own ancestor. Stops as soon as the target is found.
    """
    for h in _bfs_walk(commit_id, commits):
        if h == potential_ancestor:
            return True
    return False


def find_merge_base(
    commits: Mapping[str, GitCommit],
    id_a: str,
    id_b: str,
) -> str | None:
    """Find the nearest common ancestor of two commits.

    Walks both ancestor chains using BFS and returns the first id reached
    from ``id_b`` that is also an ancestor of ``id_a``.

    Returns:
        The merge base commit id, or None if the commits share no ancestor.
    """
    ancestors_a = get_all_ancestors(commits, id_a)
    for h in _bfs_walk(id_b, commits):
        if h in ancestors_a:
            return h
    return None


def first_parent_chain(
    commits: Mapping[str, GitCommit],
    tip: str,
) -> list[GitCommit]:
    """Follow first parents from ``tip`` back to the root.

    Returns commits newest first, ``tip`` included.
    """
    chain: list[GitCommit] = []
    current: str | None = tip
    while current is not None:
        commit = commits.get(current)
        if commit is None:
            break
        chain.append(commit)
        current = commit.parent_ids[0] if commit.parent_ids else None
    return chain
