"""Commit-graph element models.

GitCommit and GitBranch are the elements of a GitgraphDiagram.
CommitKind is the enum of commit kinds.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import AliasChoices, Field

from diagramkit.models.base import Element, NonEmptyStr


class CommitKind(str, enum.Enum):
    """Kinds of commit in a commit graph."""

    NORMAL = "NORMAL"
    REVERSE = "REVERSE"
    HIGHLIGHT = "HIGHLIGHT"
    MERGE = "MERGE"
    CHERRY_PICK = "CHERRY_PICK"

    def __repr__(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


class GitCommit(Element):
    """A single commit.

    ``parent_ids`` is empty only for the first commit of a graph and holds
    two or more ids for merge commits. ``kind`` also loads from the legacy
    ``type`` key.
    """

    id: NonEmptyStr
    parent_ids: tuple[str, ...] = ()
    branch_name: NonEmptyStr
    message: Optional[str] = None
    tag: Optional[str] = None
    kind: CommitKind = Field(
        default=CommitKind.NORMAL,
        validation_alias=AliasChoices("kind", "type"),
    )
    cherry_pick_source_id: Optional[str] = None

    @property
    def is_merge(self) -> bool:
        return len(self.parent_ids) > 1

    def __str__(self) -> str:
        msg = self.message or ""
        if len(msg) > 60:
            msg = msg[:57] + "..."
        return f"{self.id} {msg}".rstrip()


class GitBranch(Element):
    """A named line of development.

    ``start_commit_id`` is the commit the branch forked from;
    ``head_commit_id`` is the latest commit made while the branch was current.
    """

    name: NonEmptyStr
    start_commit_id: NonEmptyStr
    head_commit_id: Optional[str] = None

    def advanced_to(self, commit_id: str) -> GitBranch:
        """Return a copy of this branch whose head is ``commit_id``."""
        return self.model_copy(update={"head_commit_id": commit_id})
