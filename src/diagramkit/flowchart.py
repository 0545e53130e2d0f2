"""Flowchart diagram: nodes joined by edges."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from diagramkit.base import DEFAULT_VERSION, Diagram, VersionToken, ensure_unique, payload_list
from diagramkit.exceptions import DanglingReferenceError, DuplicateElementError
from diagramkit.models.base import build_element, build_elements
from diagramkit.models.config import DiagramConfig
from diagramkit.models.flowchart import Edge, Node

logger = logging.getLogger(__name__)


def _check_edges(edges: Iterable[Edge], node_ids: set[str]) -> None:
    for edge in edges:
        if edge.source_id not in node_ids or edge.target_id not in node_ids:
            raise DanglingReferenceError(
                f"Edge refers to non-existent node IDs ('{edge.source_id}' or '{edge.target_id}')"
            )


class FlowchartDiagram(Diagram):
    """A flowchart made of nodes and the edges connecting them."""

    def __init__(
        self,
        nodes: Iterable[Node | Mapping[str, Any]] | None = None,
        edges: Iterable[Edge | Mapping[str, Any]] | None = None,
        version: VersionToken = DEFAULT_VERSION,
        *,
        config: DiagramConfig | None = None,
    ) -> None:
        super().__init__(version, config=config)
        node_list = build_elements(Node, nodes)
        edge_list = build_elements(Edge, edges)
        ensure_unique((n.id for n in node_list), "Node")
        _check_edges(edge_list, {n.id for n in node_list})

        self._nodes: list[Node] = node_list
        self._edges: list[Edge] = edge_list
        self._update_checksum()

    @property
    def nodes(self) -> list[Node]:
        return list(self._nodes)

    @property
    def edges(self) -> list[Edge]:
        return list(self._edges)

    def add_node(self, node: Node | Mapping[str, Any]) -> Node:
        """Add a node. Raises DuplicateElementError if its id is taken."""
        node = build_element(Node, node)
        if self.find_node(node.id) is not None:
            raise DuplicateElementError("Node", node.id)
        self._nodes.append(node)
        self._update_checksum()
        logger.debug("Added node %s", node.id)
        return node

    def add_edge(self, edge: Edge | Mapping[str, Any]) -> Edge:
        """Add an edge. Raises DanglingReferenceError if an endpoint is missing."""
        edge = build_element(Edge, edge)
        _check_edges([edge], {n.id for n in self._nodes})
        self._edges.append(edge)
        self._update_checksum()
        logger.debug("Added edge %s -> %s", edge.source_id, edge.target_id)
        return edge

    def find_node(self, node_id: str) -> Node | None:
        return next((n for n in self._nodes if n.id == node_id), None)

    def content_payload(self) -> dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self._nodes],
            "edges": [e.to_dict() for e in self._edges],
        }

    def identifiable_elements(self) -> dict[str, list[Any]]:
        return {"nodes": list(self._nodes), "edges": list(self._edges)}

    @classmethod
    def _from_payload(
        cls,
        data: Mapping[str, Any],
        *,
        version: VersionToken,
        config: DiagramConfig | None,
    ) -> FlowchartDiagram:
        return cls(
            nodes=payload_list(data, "nodes"),
            edges=payload_list(data, "edges"),
            version=version,
            config=config,
        )
