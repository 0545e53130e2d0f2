"""Flowchart element models."""

from __future__ import annotations

from typing import Optional

from diagramkit.models.base import Element, NonEmptyStr


class Node(Element):
    """A flowchart node with an identifier and a display label."""

    id: NonEmptyStr
    label: NonEmptyStr


class Edge(Element):
    """A link between two nodes, referenced by id."""

    source_id: NonEmptyStr
    target_id: NonEmptyStr
    label: Optional[str] = None
