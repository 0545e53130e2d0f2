"""Comprehensive tests for the commit-graph diagram.

Tests cover:
- First commit materializing the default branch
- Branch creation, name validation and checkout
- Merge (sorted parents, guards, source branch untouched)
- Cherry-pick (parenting, source link, guards, merge-commit warning)
- Checksum behaviour of each operation
- Generated commit ids
- Serialization round-trip and load-time validation
"""

from __future__ import annotations

import re
import warnings

import pytest

from diagramkit import (
    AmbiguousCherryPickWarning,
    BranchNotFoundError,
    CommitKind,
    CommitNotFoundError,
    DanglingReferenceError,
    DiagramConfig,
    DiagramValidationError,
    DuplicateElementError,
    GitgraphDiagram,
    GraphStateError,
    InvalidBranchNameError,
)
from diagramkit.gitgraph import validate_branch_name
from tests.conftest import make_merged_graph


# ---------------------------------------------------------------------------
# Commit
# ---------------------------------------------------------------------------

class TestCommit:
    def test_empty_graph(self, empty_graph: GitgraphDiagram) -> None:
        """A new graph has a cursor but no branch objects."""
        assert empty_graph.current_branch_name == "master"
        assert empty_graph.current_branch is None
        assert empty_graph.head_commit_id is None
        assert len(empty_graph.branches) == 0

    def test_first_commit_creates_master(self, empty_graph: GitgraphDiagram) -> None:
        commit = empty_graph.commit(id="C1")
        master = empty_graph.get_branch("master")
        assert master.start_commit_id == "C1"
        assert master.head_commit_id == "C1"
        assert commit.parent_ids == ()
        assert commit.branch_name == "master"
        assert commit.kind is CommitKind.NORMAL

    def test_second_commit_parents_on_head(self, graph: GitgraphDiagram) -> None:
        commit = graph.commit(id="C2", message="second", tag="v1")
        assert commit.parent_ids == ("C1",)
        assert commit.tag == "v1"
        assert graph.head_commit_id == "C2"
        assert graph.commit_order == ["C1", "C2"]

    def test_duplicate_id_rejected(self, graph: GitgraphDiagram) -> None:
        before = graph.checksum
        with pytest.raises(DuplicateElementError):
            graph.commit(id="C1")
        assert graph.checksum == before
        assert graph.commit_order == ["C1"]

    def test_kind_from_string(self, graph: GitgraphDiagram) -> None:
        assert graph.commit(id="C2", kind="HIGHLIGHT").kind is CommitKind.HIGHLIGHT

    def test_unknown_kind_rejected(self, graph: GitgraphDiagram) -> None:
        with pytest.raises(DiagramValidationError):
            graph.commit(id="C2", kind="SQUASH")

    def test_custom_default_branch(self) -> None:
        g = GitgraphDiagram(config=DiagramConfig(default_branch="main"))
        g.commit(id="C1")
        assert list(g.branches) == ["main"]

    def test_commit_changes_checksum(self, graph: GitgraphDiagram) -> None:
        before = graph.checksum
        graph.commit(id="C2")
        assert graph.checksum != before


class TestGeneratedIds:
    def test_root_commit_id(self, empty_graph: GitgraphDiagram) -> None:
        commit = empty_graph.commit(message="init")
        assert re.fullmatch(r"commit-0-root-[0-9a-f]{6}", commit.id)

    def test_child_id_embeds_parent_prefix(self, empty_graph: GitgraphDiagram) -> None:
        first = empty_graph.commit(message="init")
        second = empty_graph.commit(message="more")
        assert second.id.startswith(f"commit-1-{first.id[:6]}-")

    def test_same_message_twice_is_unique(self, empty_graph: GitgraphDiagram) -> None:
        """The sequence number keeps repeated messages apart."""
        a = empty_graph.commit(message="same")
        b = empty_graph.commit(message="same")
        assert a.id != b.id


# ---------------------------------------------------------------------------
# Branch and checkout
# ---------------------------------------------------------------------------

class TestBranch:
    def test_branch_switches_and_starts_at_head(self, graph: GitgraphDiagram) -> None:
        dev = graph.branch("dev")
        assert graph.current_branch_name == "dev"
        assert dev.start_commit_id == "C1"
        assert dev.head_commit_id == "C1"

    def test_branch_from_specific_commit(self, graph: GitgraphDiagram) -> None:
        graph.commit(id="C2")
        assert graph.branch("old", start_commit_id="C1").start_commit_id == "C1"

    def test_branch_before_first_commit(self, empty_graph: GitgraphDiagram) -> None:
        with pytest.raises(GraphStateError):
            empty_graph.branch("dev")

    def test_duplicate_branch(self, graph: GitgraphDiagram) -> None:
        with pytest.raises(DuplicateElementError):
            graph.branch("master")

    def test_unknown_start_commit(self, graph: GitgraphDiagram) -> None:
        with pytest.raises(CommitNotFoundError):
            graph.branch("dev", start_commit_id="nope")

    def test_invalid_name(self, graph: GitgraphDiagram) -> None:
        with pytest.raises(InvalidBranchNameError):
            graph.branch("bad name")

    def test_branch_changes_checksum(self, graph: GitgraphDiagram) -> None:
        before = graph.checksum
        graph.branch("dev")
        assert graph.checksum != before

    @pytest.mark.parametrize("name", ["", "a..b", ".hidden", "x.", "a:b", "a/", "/a", "a//b", "a*"])
    def test_name_validation(self, name: str) -> None:
        with pytest.raises(InvalidBranchNameError):
            validate_branch_name(name)

    @pytest.mark.parametrize("name", ["dev", "feature/login", "release-1.2", "fix_42"])
    def test_valid_names(self, name: str) -> None:
        validate_branch_name(name)


class TestCheckout:
    def test_checkout_is_checksum_neutral(self, forked_graph: GitgraphDiagram) -> None:
        before = forked_graph.checksum
        forked_graph.checkout("dev")
        assert forked_graph.current_branch_name == "dev"
        assert forked_graph.checksum == before

    def test_checkout_unknown_branch(self, graph: GitgraphDiagram) -> None:
        with pytest.raises(BranchNotFoundError):
            graph.checkout("nope")

    def test_commit_after_checkout_lands_on_branch(self, forked_graph: GitgraphDiagram) -> None:
        forked_graph.checkout("dev")
        commit = forked_graph.commit(id="D2")
        assert commit.parent_ids == ("D1",)
        assert forked_graph.get_branch("dev").head_commit_id == "D2"
        assert forked_graph.get_branch("master").head_commit_id == "C2"


# ---------------------------------------------------------------------------
# Merge
# ---------------------------------------------------------------------------

class TestMerge:
    def test_branch_merge_scenario(self, empty_graph: GitgraphDiagram) -> None:
        """commit, branch, commit, checkout, commit, merge."""
        g = empty_graph
        g.commit(id="C1")
        assert g.get_branch("master").head_commit_id == "C1"
        g.branch("dev")
        assert g.current_branch_name == "dev"
        assert g.get_branch("dev").head_commit_id == "C1"
        g.commit(id="D1")
        assert g.get_branch("dev").head_commit_id == "D1"
        assert g.get_branch("master").head_commit_id == "C1"
        g.checkout("master")
        c2 = g.commit(id="C2")
        assert c2.parent_ids == ("C1",)
        merge = g.merge("dev", id="M1")
        assert sorted(merge.parent_ids) == ["C2", "D1"]
        assert merge.kind is CommitKind.MERGE
        assert g.get_branch("master").head_commit_id == "M1"

    def test_parents_are_sorted(self, forked_graph: GitgraphDiagram) -> None:
        forked_graph.checkout("dev")
        merge = forked_graph.merge("master", id="M1")
        assert merge.parent_ids == ("C2", "D1")
        assert merge.branch_name == "dev"

    def test_source_branch_untouched(self, forked_graph: GitgraphDiagram) -> None:
        forked_graph.merge("dev", id="M1")
        assert forked_graph.get_branch("dev").head_commit_id == "D1"

    def test_merge_message(self, forked_graph: GitgraphDiagram) -> None:
        merge = forked_graph.merge("dev")
        assert merge.message == "Merge branch 'dev' into master"
        assert merge.id.startswith("commit-3-C2-")

    def test_merge_into_self(self, forked_graph: GitgraphDiagram) -> None:
        with pytest.raises(GraphStateError):
            forked_graph.merge("master")

    def test_merge_unknown_source(self, forked_graph: GitgraphDiagram) -> None:
        with pytest.raises(BranchNotFoundError):
            forked_graph.merge("nope")

    def test_merge_with_no_current_branch(self, empty_graph: GitgraphDiagram) -> None:
        """Before the first commit the cursor names a branch that does not exist."""
        with pytest.raises(BranchNotFoundError):
            empty_graph.merge("dev")

    def test_merge_guards_are_validation_errors(self, forked_graph: GitgraphDiagram) -> None:
        for source in ("master", "nope"):
            with pytest.raises(DiagramValidationError):
                forked_graph.merge(source)

    def test_merge_duplicate_id(self, forked_graph: GitgraphDiagram) -> None:
        with pytest.raises(DuplicateElementError):
            forked_graph.merge("dev", id="C1")


# ---------------------------------------------------------------------------
# Cherry-pick
# ---------------------------------------------------------------------------

class TestCherryPick:
    def test_cherry_pick_scenario(self, empty_graph: GitgraphDiagram) -> None:
        g = empty_graph
        g.commit(id="C1")
        g.branch("feat")
        g.commit(id="F1", message="feature")
        g.checkout("master")
        g.commit(id="C2")
        picked = g.cherry_pick("F1")
        assert picked.parent_ids == ("C2",)
        assert picked.kind is CommitKind.CHERRY_PICK
        assert picked.cherry_pick_source_id == "F1"
        assert picked.message == "feature"
        assert picked.branch_name == "master"
        assert g.head_commit_id == picked.id

    def test_default_message_without_source_message(self, forked_graph: GitgraphDiagram) -> None:
        forked_graph.checkout("dev")
        picked = forked_graph.cherry_pick("C2")
        assert picked.message == "Cherry-pick of C2"

    def test_tag_not_copied(self, forked_graph: GitgraphDiagram) -> None:
        forked_graph.checkout("dev")
        forked_graph.commit(id="D2", message="tagged", tag="v2")
        forked_graph.checkout("master")
        assert forked_graph.cherry_pick("D2").tag is None

    def test_unknown_commit(self, forked_graph: GitgraphDiagram) -> None:
        with pytest.raises(CommitNotFoundError):
            forked_graph.cherry_pick("nope")

    def test_commit_already_on_branch(self, forked_graph: GitgraphDiagram) -> None:
        with pytest.raises(GraphStateError):
            forked_graph.cherry_pick("C1")

    def test_no_head_on_current_branch(self) -> None:
        """A cursor restored onto a headless branch cannot receive picks."""
        g = GitgraphDiagram(
            commits=[{"id": "C1", "branch_name": "master"}],
            branches=[
                {"name": "master", "start_commit_id": "C1", "head_commit_id": "C1"},
                {"name": "empty", "start_commit_id": "C1"},
            ],
            current_branch_name="empty",
        )
        with pytest.raises(GraphStateError):
            g.cherry_pick("C1")

    def test_merge_commit_warns(self) -> None:
        g = make_merged_graph()
        g.checkout("dev")
        with pytest.warns(AmbiguousCherryPickWarning):
            picked = g.cherry_pick("M1")
        assert picked.parent_ids == ("D1",)

    def test_parent_override_silences_warning(self) -> None:
        g = make_merged_graph()
        g.checkout("dev")
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            g.cherry_pick("M1", parent_override_id="C2")

    def test_cherry_pick_changes_checksum(self, forked_graph: GitgraphDiagram) -> None:
        before = forked_graph.checksum
        forked_graph.cherry_pick("D1")
        assert forked_graph.checksum != before


# ---------------------------------------------------------------------------
# Construction, serialization and load validation
# ---------------------------------------------------------------------------

class TestSerialization:
    def test_round_trip(self) -> None:
        g = make_merged_graph()
        g.checkout("dev")
        restored = GitgraphDiagram.from_json(g.to_json())
        assert isinstance(restored, GitgraphDiagram)
        assert restored == g
        assert restored.commit_order == g.commit_order
        assert restored.current_branch_name == "dev"
        assert dict(restored.branches) == dict(g.branches)

    def test_payload_shape(self, graph: GitgraphDiagram) -> None:
        envelope = graph.to_dict()
        assert envelope["type"] == "gitgraph_diagram"
        data = envelope["data"]
        assert data["commit_order"] == ["C1"]
        assert data["current_branch_name"] == "master"
        assert data["commits"][0] == {
            "id": "C1",
            "parent_ids": [],
            "branch_name": "master",
            "message": "init",
            "kind": "NORMAL",
        }

    def test_cursor_not_in_checksum(self, forked_graph: GitgraphDiagram) -> None:
        a = GitgraphDiagram.from_dict(forked_graph.to_dict())
        a.checkout("dev")
        assert a == forked_graph

    def test_restored_graph_keeps_working(self, forked_graph: GitgraphDiagram) -> None:
        restored = GitgraphDiagram.from_dict(forked_graph.to_dict())
        restored.merge("dev", id="M1")
        assert restored.get_branch("master").head_commit_id == "M1"

    def test_dangling_parent_rejected(self) -> None:
        with pytest.raises(DanglingReferenceError):
            GitgraphDiagram(
                commits=[{"id": "C2", "parent_ids": ["C1"], "branch_name": "master"}],
                branches=[{"name": "master", "start_commit_id": "C2"}],
            )

    def test_parent_after_child_rejected(self) -> None:
        with pytest.raises(DanglingReferenceError):
            GitgraphDiagram(
                commits=[
                    {"id": "C1", "branch_name": "master"},
                    {"id": "C2", "parent_ids": ["C1"], "branch_name": "master"},
                ],
                branches=[{"name": "master", "start_commit_id": "C1"}],
                commit_order=["C2", "C1"],
            )

    def test_commit_order_must_match_commits(self) -> None:
        with pytest.raises(DiagramValidationError):
            GitgraphDiagram(
                commits=[{"id": "C1", "branch_name": "master"}],
                branches=[{"name": "master", "start_commit_id": "C1"}],
                commit_order=["C1", "C9"],
            )

    def test_duplicate_commit_rejected(self) -> None:
        with pytest.raises(DuplicateElementError):
            GitgraphDiagram(
                commits=[
                    {"id": "C1", "branch_name": "master"},
                    {"id": "C1", "branch_name": "master"},
                ],
                branches=[{"name": "master", "start_commit_id": "C1"}],
            )

    def test_unknown_cursor_rejected(self, graph: GitgraphDiagram) -> None:
        data = graph.content_payload()
        data["current_branch_name"] = "ghost"
        with pytest.raises(BranchNotFoundError):
            GitgraphDiagram.from_content(data)

    def test_commit_on_unknown_branch_rejected(self) -> None:
        with pytest.raises(DanglingReferenceError):
            GitgraphDiagram(
                commits=[{"id": "C1", "branch_name": "ghost"}],
                branches=[{"name": "master", "start_commit_id": "C1"}],
            )

    def test_read_only_views(self, graph: GitgraphDiagram) -> None:
        with pytest.raises(TypeError):
            graph.commits["X"] = None  # type: ignore[index]
