"""Shared test fixtures for diagramkit.

Provides small prebuilt diagrams and helpers for building commit graphs.
"""

import pytest

from diagramkit import (
    DiagramConfig,
    DiagramTypeRegistry,
    FlowchartDiagram,
    GitgraphDiagram,
)


@pytest.fixture
def empty_graph() -> GitgraphDiagram:
    """A commit graph with no commits."""
    return GitgraphDiagram()


@pytest.fixture
def graph() -> GitgraphDiagram:
    """A commit graph with one commit 'C1' on master."""
    g = GitgraphDiagram()
    g.commit(id="C1", message="init")
    return g


@pytest.fixture
def forked_graph() -> GitgraphDiagram:
    """master: C1 - C2, dev: C1 - D1. Current branch is master."""
    g = GitgraphDiagram()
    g.commit(id="C1")
    g.branch("dev")
    g.commit(id="D1", message="dev work")
    g.checkout("master")
    g.commit(id="C2")
    return g


@pytest.fixture
def flowchart() -> FlowchartDiagram:
    """Two connected nodes."""
    return FlowchartDiagram(
        nodes=[{"id": "A", "label": "Start"}, {"id": "B", "label": "End"}],
        edges=[{"source_id": "A", "target_id": "B", "label": "go"}],
    )


@pytest.fixture
def strict_config() -> DiagramConfig:
    return DiagramConfig(strict_checksum=True)


@pytest.fixture
def registry() -> DiagramTypeRegistry:
    """A fresh registry, so tests can register types without leaking."""
    return DiagramTypeRegistry()


# ------------------------------------------------------------------
# Shared test helpers (used by test_gitgraph.py, test_dag.py)
# ------------------------------------------------------------------

def make_merged_graph() -> GitgraphDiagram:
    """master: C1 - C2 - M1 (merge of dev), dev: C1 - D1."""
    g = GitgraphDiagram()
    g.commit(id="C1")
    g.branch("dev")
    g.commit(id="D1")
    g.checkout("master")
    g.commit(id="C2")
    g.merge("dev", id="M1")
    return g
