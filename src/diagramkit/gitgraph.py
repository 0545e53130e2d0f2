"""Commit-graph diagram: commits, branches, merges and cherry-picks.

GitgraphDiagram owns an append-only commit DAG plus a set of branches and a
current-branch cursor. The first commit materializes the default branch;
every structural mutation recomputes the checksum. ``checkout`` only moves
the cursor, which is serialized but excluded from the checksum.
"""

from __future__ import annotations

import logging
import re
import types
import warnings
from typing import Any, Iterable, Mapping, Sequence

from diagramkit.base import (
    DEFAULT_VERSION,
    Diagram,
    VersionToken,
    ensure_unique,
    payload_list,
)
from diagramkit.engine.hashing import generate_commit_id
from diagramkit.exceptions import (
    AmbiguousCherryPickWarning,
    BranchNotFoundError,
    CommitNotFoundError,
    DanglingReferenceError,
    DiagramValidationError,
    DuplicateElementError,
    GraphStateError,
    InvalidBranchNameError,
)
from diagramkit.models.base import build_element, build_elements
from diagramkit.models.config import DiagramConfig
from diagramkit.models.gitgraph import CommitKind, GitBranch, GitCommit
from diagramkit.operations.dag import find_merge_base, first_parent_chain, is_ancestor

logger = logging.getLogger(__name__)


# Characters forbidden in branch names (git-style)
_FORBIDDEN_CHARS = re.compile(r"[\s~^:?*\[\\]")


def validate_branch_name(name: str) -> None:
    """Validate a branch name against git-style naming rules.

    Raises InvalidBranchNameError on violation.
    """
    if not name:
        raise InvalidBranchNameError(name, "branch name cannot be empty")

    if ".." in name:
        raise InvalidBranchNameError(name, "branch name cannot contain '..'")

    if name.startswith(".") or name.endswith("."):
        raise InvalidBranchNameError(name, "branch name cannot start or end with '.'")

    if _FORBIDDEN_CHARS.search(name):
        raise InvalidBranchNameError(
            name, "branch name contains forbidden characters (whitespace, ~, ^, :, ?, *, [, \\)"
        )

    if name.startswith("/") or name.endswith("/") or "//" in name:
        raise InvalidBranchNameError(name, "branch name has invalid slash usage")


def _coerce_kind(kind: CommitKind | str) -> CommitKind:
    try:
        return CommitKind(kind)
    except ValueError as e:
        raise DiagramValidationError(f"Unknown commit kind: {kind!r}") from e


def _validate_graph(
    commits: Sequence[GitCommit],
    branches: Sequence[GitBranch],
    commit_order: Sequence[str],
) -> None:
    """Check referential integrity of a commit graph before it is adopted."""
    ensure_unique((c.id for c in commits), "Commit")
    ensure_unique((b.name for b in branches), "Branch")

    commit_ids = {c.id for c in commits}
    if len(commit_order) != len(commits) or set(commit_order) != commit_ids:
        raise DiagramValidationError("commit_order must list every commit exactly once")

    position = {commit_id: i for i, commit_id in enumerate(commit_order)}
    branch_names = {b.name for b in branches}
    for commit in commits:
        for parent_id in commit.parent_ids:
            if parent_id not in position:
                raise DanglingReferenceError(
                    f"Commit '{commit.id}' refers to non-existent parent '{parent_id}'"
                )
            if position[parent_id] >= position[commit.id]:
                raise DanglingReferenceError(
                    f"Commit '{commit.id}' has parent '{parent_id}' that was not created before it"
                )
        if commit.branch_name not in branch_names:
            raise DanglingReferenceError(
                f"Commit '{commit.id}' refers to non-existent branch '{commit.branch_name}'"
            )
        if commit.cherry_pick_source_id is not None and commit.cherry_pick_source_id not in commit_ids:
            raise DanglingReferenceError(
                f"Commit '{commit.id}' was cherry-picked from non-existent commit "
                f"'{commit.cherry_pick_source_id}'"
            )

    for branch in branches:
        if branch.start_commit_id not in commit_ids:
            raise DanglingReferenceError(
                f"Branch '{branch.name}' starts at non-existent commit '{branch.start_commit_id}'"
            )
        if branch.head_commit_id is not None and branch.head_commit_id not in commit_ids:
            raise DanglingReferenceError(
                f"Branch '{branch.name}' has non-existent head commit '{branch.head_commit_id}'"
            )


class GitgraphDiagram(Diagram):
    """A git-style commit graph.

    Example::

        graph = GitgraphDiagram()
        graph.commit(id="C1")
        graph.branch("dev")
        graph.commit(id="D1")
        graph.checkout("master")
        graph.merge("dev", id="M1")
    """

    def __init__(
        self,
        commits: Iterable[GitCommit | Mapping[str, Any]] | None = None,
        branches: Iterable[GitBranch | Mapping[str, Any]] | None = None,
        commit_order: Sequence[str] | None = None,
        current_branch_name: str | None = None,
        version: VersionToken = DEFAULT_VERSION,
        *,
        config: DiagramConfig | None = None,
    ) -> None:
        super().__init__(version, config=config)
        commit_list = build_elements(GitCommit, commits)
        branch_list = build_elements(GitBranch, branches)
        order = list(commit_order) if commit_order is not None else [c.id for c in commit_list]
        _validate_graph(commit_list, branch_list, order)

        cursor = current_branch_name or self._config.default_branch
        if branch_list and cursor not in {b.name for b in branch_list}:
            raise BranchNotFoundError(cursor)

        by_id = {c.id: c for c in commit_list}
        self._commits: dict[str, GitCommit] = {cid: by_id[cid] for cid in order}
        self._branches: dict[str, GitBranch] = {b.name: b for b in branch_list}
        self._commit_order: list[str] = order
        self._current_branch_name: str = cursor
        self._update_checksum()

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def commits(self) -> Mapping[str, GitCommit]:
        """Read-only view of commit id -> commit, in creation order."""
        return types.MappingProxyType(self._commits)

    @property
    def branches(self) -> Mapping[str, GitBranch]:
        """Read-only view of branch name -> branch, in creation order."""
        return types.MappingProxyType(self._branches)

    @property
    def commit_order(self) -> list[str]:
        return list(self._commit_order)

    @property
    def current_branch_name(self) -> str:
        return self._current_branch_name

    @property
    def current_branch(self) -> GitBranch | None:
        """The checked-out branch, or None before the first commit."""
        return self._branches.get(self._current_branch_name)

    @property
    def head_commit_id(self) -> str | None:
        """Head of the current branch, or None before the first commit."""
        branch = self.current_branch
        return branch.head_commit_id if branch is not None else None

    def get_commit(self, commit_id: str) -> GitCommit:
        try:
            return self._commits[commit_id]
        except KeyError:
            raise CommitNotFoundError(commit_id) from None

    def get_branch(self, name: str) -> GitBranch:
        try:
            return self._branches[name]
        except KeyError:
            raise BranchNotFoundError(name) from None

    # ------------------------------------------------------------------
    # Graph operations
    # ------------------------------------------------------------------

    def commit(
        self,
        id: str | None = None,
        message: str | None = None,
        tag: str | None = None,
        kind: CommitKind | str = CommitKind.NORMAL,
    ) -> GitCommit:
        """Add a commit on the current branch and advance its head.

        The very first commit creates the default branch, rooted at and
        headed by that commit.

        Raises:
            DuplicateElementError: If ``id`` is already used.
            GraphStateError: If the current branch does not exist.
        """
        kind = _coerce_kind(kind)
        parent_id = self.head_commit_id
        parent_ids = (parent_id,) if parent_id else ()

        commit_id = id if id is not None else self._next_commit_id(parent_ids, message)
        if commit_id in self._commits:
            raise DuplicateElementError("Commit", commit_id)

        new_branch: GitBranch | None = None
        if not self._commits and self._current_branch_name not in self._branches:
            new_branch = GitBranch(
                name=self._current_branch_name,
                start_commit_id=commit_id,
                head_commit_id=commit_id,
            )
        elif self._current_branch_name not in self._branches:
            raise GraphStateError(
                f"Cannot commit: branch '{self._current_branch_name}' does not exist"
            )

        new_commit = build_element(GitCommit, {
            "id": commit_id,
            "parent_ids": parent_ids,
            "branch_name": self._current_branch_name,
            "message": message,
            "tag": tag,
            "kind": kind,
        })

        if new_branch is not None:
            self._branches[new_branch.name] = new_branch
            logger.debug("Created branch %s at first commit %s", new_branch.name, commit_id)
        self._record(new_commit)
        logger.debug("Committed %s on %s", commit_id, self._current_branch_name)
        return new_commit

    def branch(self, name: str, start_commit_id: str | None = None) -> GitBranch:
        """Create a branch at ``start_commit_id`` (default: current head) and switch to it.

        Raises:
            DuplicateElementError: If the branch exists.
            InvalidBranchNameError: If the name is not a valid branch name.
            GraphStateError: If there is no commit to branch from.
            CommitNotFoundError: If ``start_commit_id`` does not exist.
        """
        if name in self._branches:
            raise DuplicateElementError("Branch", name)
        validate_branch_name(name)

        start = start_commit_id if start_commit_id is not None else self.head_commit_id
        if start is None:
            raise GraphStateError("Cannot create a branch before the first commit")
        if start not in self._commits:
            raise CommitNotFoundError(start)

        new_branch = GitBranch(name=name, start_commit_id=start, head_commit_id=start)
        self._branches[name] = new_branch
        self._current_branch_name = name
        self._update_checksum()
        logger.debug("Created branch %s at %s", name, start)
        return new_branch

    def checkout(self, name: str) -> str:
        """Switch the current branch. Does not change the checksum.

        Raises:
            BranchNotFoundError: If the branch does not exist.
        """
        if name not in self._branches:
            raise BranchNotFoundError(name)
        self._current_branch_name = name
        logger.debug("Checked out %s", name)
        return name

    def merge(
        self,
        from_branch: str,
        id: str | None = None,
        tag: str | None = None,
        kind: CommitKind | str = CommitKind.MERGE,
    ) -> GitCommit:
        """Merge the head of ``from_branch`` into the current branch.

        The merge commit's parents are the two branch heads, sorted. The
        source branch is left untouched.

        Raises:
            GraphStateError: Merging a branch into itself, or a branch
                without a head commit.
            BranchNotFoundError: If either branch does not exist.
            DuplicateElementError: If the merge commit id is already used.
        """
        kind = _coerce_kind(kind)
        current = self._current_branch_name
        if from_branch == current:
            raise GraphStateError(f"Cannot merge branch '{from_branch}' into itself")
        if from_branch not in self._branches:
            raise BranchNotFoundError(from_branch)
        if current not in self._branches:
            raise BranchNotFoundError(current)

        target_head = self._branches[current].head_commit_id
        source_head = self._branches[from_branch].head_commit_id
        if target_head is None:
            raise GraphStateError(f"Current branch '{current}' has no commits to merge into")
        if source_head is None:
            raise GraphStateError(f"Source branch '{from_branch}' has no commits to merge from")

        parent_ids = tuple(sorted([target_head, source_head]))
        message = f"Merge branch '{from_branch}' into {current}"
        commit_id = id if id is not None else self._next_commit_id(parent_ids, message)
        if commit_id in self._commits:
            raise DuplicateElementError("Commit", commit_id)

        merge_commit = build_element(GitCommit, {
            "id": commit_id,
            "parent_ids": parent_ids,
            "branch_name": current,
            "message": message,
            "tag": tag,
            "kind": kind,
        })
        self._record(merge_commit)
        logger.debug("Merged %s into %s as %s", from_branch, current, commit_id)
        return merge_commit

    def cherry_pick(
        self,
        commit_id: str,
        parent_override_id: str | None = None,
    ) -> GitCommit:
        """Copy ``commit_id`` onto the current branch as a new CHERRY_PICK commit.

        ``parent_override_id`` names the parent lineage to follow when the
        source is a merge commit. Lineage selection is not modelled; passing
        it only acknowledges the choice and silences the ambiguity warning.

        Raises:
            CommitNotFoundError: If the commit does not exist.
            GraphStateError: If the current branch has no head, or the
                commit was made on the current branch.
        """
        if commit_id not in self._commits:
            raise CommitNotFoundError(commit_id)
        source = self._commits[commit_id]
        head = self.head_commit_id
        current = self._current_branch_name

        if head is None:
            raise GraphStateError(
                f"Current branch '{current}' has no commits. Cannot cherry-pick onto it."
            )
        if source.branch_name == current:
            raise GraphStateError(
                f"Commit '{commit_id}' is already on the current branch '{current}'"
            )

        if source.is_merge and parent_override_id is None:
            logger.warning("Cherry-picking merge commit %s without a parent override", commit_id)
            warnings.warn(
                f"Cherry-picking a merge commit ({commit_id}) without specifying a parent "
                f"override is ambiguous. Picking first parent lineage by default.",
                AmbiguousCherryPickWarning,
                stacklevel=2,
            )

        parent_ids = (head,)
        new_id = self._next_commit_id(parent_ids, f"Cherry-pick: {source.message or source.id}")
        if new_id in self._commits:
            raise DuplicateElementError("Commit", new_id)

        picked = build_element(GitCommit, {
            "id": new_id,
            "parent_ids": parent_ids,
            "branch_name": current,
            "message": source.message or f"Cherry-pick of {source.id}",
            "kind": CommitKind.CHERRY_PICK,
            "cherry_pick_source_id": commit_id,
        })
        self._record(picked)
        logger.debug("Cherry-picked %s onto %s as %s", commit_id, current, new_id)
        return picked

    # ------------------------------------------------------------------
    # History queries
    # ------------------------------------------------------------------

    def is_ancestor(self, potential_ancestor: str, commit_id: str) -> bool:
        """True if ``potential_ancestor`` is reachable from ``commit_id``."""
        self.get_commit(potential_ancestor)
        self.get_commit(commit_id)
        return is_ancestor(self._commits, potential_ancestor, commit_id)

    def merge_base(self, commit_a: str, commit_b: str) -> str | None:
        """Nearest common ancestor of two commits, or None."""
        self.get_commit(commit_a)
        self.get_commit(commit_b)
        return find_merge_base(self._commits, commit_a, commit_b)

    def log(self, branch: str | None = None) -> list[GitCommit]:
        """First-parent history of a branch (default: current), newest first."""
        name = branch if branch is not None else self._current_branch_name
        if name not in self._branches:
            if branch is None and not self._commits:
                return []
            raise BranchNotFoundError(name)
        head = self._branches[name].head_commit_id
        if head is None:
            return []
        return first_parent_chain(self._commits, head)

    # ------------------------------------------------------------------
    # Diagram contract
    # ------------------------------------------------------------------

    def content_payload(self) -> dict[str, Any]:
        return {
            "commits": [c.to_dict() for c in self._commits.values()],
            "branches": [b.to_dict() for b in self._branches.values()],
            "commit_order": list(self._commit_order),
            "current_branch_name": self._current_branch_name,
        }

    def hashable_payload(self) -> dict[str, Any]:
        # The cursor is restored on load but is not graph content.
        payload = self.content_payload()
        del payload["current_branch_name"]
        return payload

    def identifiable_elements(self) -> dict[str, list[Any]]:
        return {
            "commits": list(self._commits.values()),
            "branches": list(self._branches.values()),
        }

    @classmethod
    def _from_payload(
        cls,
        data: Mapping[str, Any],
        *,
        version: VersionToken,
        config: DiagramConfig | None,
    ) -> GitgraphDiagram:
        return cls(
            commits=payload_list(data, "commits"),
            branches=payload_list(data, "branches"),
            commit_order=data.get("commit_order"),
            current_branch_name=data.get("current_branch_name"),
            version=version,
            config=config,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _next_commit_id(self, parent_ids: Sequence[str], message: str | None) -> str:
        return generate_commit_id(len(self._commit_order), parent_ids, message)

    def _record(self, commit: GitCommit) -> None:
        """Append ``commit`` and advance its branch head to it."""
        self._commits[commit.id] = commit
        self._commit_order.append(commit.id)
        branch = self._branches[commit.branch_name]
        self._branches[commit.branch_name] = branch.advanced_to(commit.id)
        self._update_checksum()
