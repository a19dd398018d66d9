from __future__ import annotations

"""
Integration tests for the Graph Pipeline.

Runs the full chain (validation, inference, refinement, classification,
assembly, layout, review strategy) on realistic change sets and checks the
end-to-end guarantees of the output payload.
"""

from typing import Any, Dict, List

import pytest

from reviewgraph import build_dependency_graph, compute_layout, run_graph_pipeline
from reviewgraph.core.pipeline import engine
from reviewgraph.core.pipeline.stages.assembler import count_descendants
from reviewgraph.core.pipeline.stages.classifier import build_adjacency
from reviewgraph.domain.constants import ORPHAN_BRANCH_ID
from reviewgraph.domain.graph_models import DependencyGraphData, Edge


def edge_pairs(graph: DependencyGraphData) -> List[tuple]:
    return [(e.source, e.target) for e in graph.edges]


# -----------------------------------------------------------------------------
# Reference scenarios
# -----------------------------------------------------------------------------

def test_index_and_sibling() -> None:
    """TC-01: util -> index, one branch over two levels."""
    graph = build_dependency_graph([{"path": "src/index.ts"}, {"path": "src/util.ts"}])

    assert edge_pairs(graph) == [("src/util.ts", "src/index.ts")]
    util = graph.node("src/util.ts")
    index = graph.node("src/index.ts")
    assert (util.children_count, index.children_count) == (1, 0)
    assert (util.level, index.level) == (0, 1)
    assert util.branch_id == index.branch_id == "branch-0"
    assert [n.id for n in graph.nodes] == ["src/util.ts", "src/index.ts"]


def test_test_file_follows_source() -> None:
    """TC-02: b.ts -> b.test.ts."""
    graph = build_dependency_graph(["a/b.ts", "a/b.test.ts"])

    assert edge_pairs(graph) == [("a/b.ts", "a/b.test.ts")]
    assert graph.branch_ids() == ("branch-0",)
    assert graph.node("a/b.test.ts").level == 1


def test_root_manifest_and_nested_file_are_separate() -> None:
    """TC-03: Root-level manifest and nested file end up in two branches."""
    graph = build_dependency_graph(["tailwind.config.js", "src/app.ts"])

    assert graph.edges == ()
    assert graph.node("tailwind.config.js").branch_id == "branch-0"
    assert graph.node("src/app.ts").branch_id == "branch-1"
    assert all(n.level == 0 for n in graph.nodes)


def test_ignored_manifest_edge_is_proposed_then_filtered() -> None:
    files = ["web/tailwind.config.js", "web/src/app.ts"]
    result = run_graph_pipeline(files, {"compute_layout": False})

    assert result.summary["candidate_edges"] == 1
    assert result.graph.edges == ()
    assert result.graph.branch_ids() == ("branch-0", "branch-1")


def test_ignored_manifest_kept_when_filter_disabled() -> None:
    graph = build_dependency_graph(["web/tailwind.config.js", "web/src/app.ts"], ignored_parents=[])
    assert edge_pairs(graph) == [("web/tailwind.config.js", "web/src/app.ts")]


def test_root_level_file_does_not_parent_nested_files() -> None:
    files = ["README.md", "src/api/client.ts", "src/ui/panel.tsx", "lib/math/vec.ts"]
    graph = build_dependency_graph(files)

    assert not any(source == "README.md" for source, _ in edge_pairs(graph))
    assert graph.edges == ()
    assert graph.branch_ids() == ("branch-0", "branch-1", "branch-2", "branch-3")
    assert all(n.level == 0 for n in graph.nodes)


def test_unrelated_files() -> None:
    """TC-04: No edges, two independent roots."""
    graph = build_dependency_graph(["x.ts", "y.ts"])

    assert graph.edges == ()
    assert graph.branch_ids() == ("branch-0", "branch-1")


def test_empty_change_set() -> None:
    result = run_graph_pipeline([])

    assert result.ok is True
    assert result.graph.nodes == ()
    assert result.summary["files"] == 0


# -----------------------------------------------------------------------------
# Global properties on a realistic change set
# -----------------------------------------------------------------------------

@pytest.fixture
def result(sample_pr_files: List[Dict[str, Any]]):
    return run_graph_pipeline(sample_pr_files)


def test_pipeline_succeeds_with_layout_and_strategy(result) -> None:
    assert result.ok is True
    assert result.layout_computed is True
    assert set(result.graph.positions) == {n.id for n in result.graph.nodes}
    assert len(result.strategy.review_order) == len(result.graph.nodes)
    assert result.summary["layout"] is True


def test_no_duplicate_or_self_edges(result) -> None:
    pairs = edge_pairs(result.graph)
    assert len(pairs) == len(set(pairs))
    assert all(s != t for s, t in pairs)


def test_ignored_parent_has_no_outgoing_edges(result) -> None:
    assert all(e.source != "package.json" for e in result.graph.edges)
    assert result.graph.node("package.json").children == ()


def test_partition_and_root_invariants(result) -> None:
    graph = result.graph
    ids = [n.id for n in graph.nodes]
    assert len(ids) == len(set(ids)) == 7

    for node in graph.nodes:
        if node.level == 0:
            assert node.parent is None
        else:
            assert node.parent is not None
            parent = graph.node(node.parent)
            assert parent.branch_id == node.branch_id
            assert parent.level == node.level - 1


def test_children_count_matches_reachability(result) -> None:
    graph = result.graph
    forward, _ = build_adjacency([n.id for n in graph.nodes], list(graph.edges))
    for node in graph.nodes:
        assert node.children_count == count_descendants(node.id, forward)
        assert list(node.children) == forward[node.id]


def test_expected_relations(result) -> None:
    pairs = set(edge_pairs(result.graph))

    assert ("src/components/button.tsx", "src/components/icon-button.tsx") in pairs
    assert ("src/components/button.tsx", "src/components/index.ts") in pairs
    assert ("src/components/button.tsx", "src/components/button.test.tsx") in pairs
    assert ("src/components/forms/user-types.ts", "src/components/forms/user-types-form.tsx") in pairs
    assert ("src/components/index.ts", "src/components/forms/user-types.ts") in pairs


def test_summary_counts(result) -> None:
    summary = result.summary
    assert summary["files"] == 7
    assert summary["edges"] == len(result.graph.edges)
    assert summary["candidate_edges"] >= summary["edges"]
    assert summary["orphans"] == sum(1 for n in result.graph.nodes if n.branch_id == ORPHAN_BRANCH_ID)


def test_review_flags(result) -> None:
    flags = [f.flag for f in result.strategy.review_flags]
    assert flags == ["Test Coverage", "Configuration Changes", "Type Safety"]


def test_pipeline_is_deterministic(sample_pr_files: List[Dict[str, Any]]) -> None:
    first = run_graph_pipeline(sample_pr_files).to_dict()
    second = run_graph_pipeline(sample_pr_files).to_dict()
    assert first == second


# -----------------------------------------------------------------------------
# Options
# -----------------------------------------------------------------------------

def test_layout_can_be_skipped(sample_pr_files: List[Dict[str, Any]]) -> None:
    result = run_graph_pipeline(sample_pr_files, with_layout=False)
    assert result.layout_computed is False
    assert "positions" not in result.to_dict()["graph"]


def test_with_layout_overrides_config(sample_pr_files: List[Dict[str, Any]]) -> None:
    result = run_graph_pipeline(sample_pr_files, {"compute_layout": False}, with_layout=True)
    assert result.layout_computed is True


def test_strategy_can_be_skipped(sample_pr_files: List[Dict[str, Any]]) -> None:
    result = run_graph_pipeline(sample_pr_files, {"build_strategy": False})
    assert result.strategy.review_order == ()


def test_compute_layout_on_prebuilt_graph() -> None:
    graph = build_dependency_graph(["src/index.ts", "src/util.ts"])
    laid_out = compute_layout(graph, {"rank_dir": "LR"})

    util = laid_out.positions["src/util.ts"]
    index = laid_out.positions["src/index.ts"]
    assert index.x > util.x
    assert index.y == util.y


def test_input_warnings_are_reported() -> None:
    result = run_graph_pipeline(["a.ts", "a.ts", 42], {"unknown_key": 1})
    assert result.ok is True
    assert len(result.warnings) == 3
    assert result.summary["files"] == 1


def test_duplicate_edges_from_several_rules_are_collapsed() -> None:
    result = run_graph_pipeline(["src/user-types.ts", "src/ui/user-types-form.ts"])
    assert result.summary["candidate_edges"] == 3
    assert list(result.graph.edges) == [Edge("src/user-types.ts", "src/ui/user-types-form.ts")]


# -----------------------------------------------------------------------------
# Failure handling
# -----------------------------------------------------------------------------

def test_stage_value_error_becomes_error_result(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken(paths, edges):
        raise ValueError("bad adjacency")

    monkeypatch.setattr(engine, "classify_branches", broken)
    result = run_graph_pipeline(["src/index.ts", "src/util.ts"])

    assert result.ok is False
    assert "bad adjacency" in result.error
    assert result.to_dict()["layout_computed"] is False


def test_unexpected_stage_error_propagates(monkeypatch: pytest.MonkeyPatch) -> None:
    def broken(paths, edges):
        raise RuntimeError("unexpected")

    monkeypatch.setattr(engine, "classify_branches", broken)
    with pytest.raises(RuntimeError, match="unexpected"):
        run_graph_pipeline(["src/index.ts", "src/util.ts"])
