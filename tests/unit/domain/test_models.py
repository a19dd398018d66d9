from __future__ import annotations

"""
Unit tests for Domain Data Models.

Verifies:
1. Input record construction from provider mappings.
2. Serialization of nodes, edges and the graph payload.
3. Pipeline result factory functions.
"""

from reviewgraph.domain.graph_models import (
    DependencyGraphData,
    Edge,
    FileRecord,
    GraphNode,
    LayoutPosition,
)
from reviewgraph.domain.pipeline_models import create_error_result, create_success_result
from reviewgraph.domain.strategy_models import ReviewStrategy


def make_node(node_id: str, branch: str = "branch-0") -> GraphNode:
    return GraphNode(
        id=node_id, label=node_id.split("/")[-1], path=node_id, additions=1, deletions=2,
        children_count=0, branch_id=branch, branch_color="#60a5fa", level=0,
    )


def test_file_record_from_mapping_accepts_filename_key() -> None:
    record = FileRecord.from_mapping({"filename": "a.ts", "additions": 3, "deletions": 1})
    assert record == FileRecord("a.ts", 3, 1)


def test_file_record_from_mapping_prefers_path() -> None:
    record = FileRecord.from_mapping({"path": "p.ts", "filename": "f.ts"})
    assert record.path == "p.ts"


def test_edge_serialization() -> None:
    assert Edge("a", "b").to_dict() == {"from": "a", "to": "b"}


def test_node_serialization_keys() -> None:
    payload = make_node("src/a.ts").to_dict()
    assert payload["childrenCount"] == 0
    assert payload["branchId"] == "branch-0"
    assert payload["branchColor"] == "#60a5fa"
    assert payload["parent"] is None
    assert payload["children"] == []


def test_graph_payload_omits_empty_positions() -> None:
    graph = DependencyGraphData(nodes=(make_node("a"),), edges=())
    assert "positions" not in graph.to_dict()

    laid_out = DependencyGraphData(nodes=graph.nodes, positions={"a": LayoutPosition(1.0, 2.0)})
    assert laid_out.to_dict()["positions"] == {"a": {"x": 1.0, "y": 2.0}}


def test_graph_helpers() -> None:
    graph = DependencyGraphData(nodes=(make_node("a"), make_node("b", "branch-1"), make_node("c")))
    assert graph.node("b").branch_id == "branch-1"
    assert graph.node("missing") is None
    assert graph.branch_ids() == ("branch-0", "branch-1")


def test_success_result_factory() -> None:
    graph = DependencyGraphData(nodes=(make_node("a"),), positions={"a": LayoutPosition(0, 0)})
    result = create_success_result(graph, warnings=["w"], summary_extra={"files": 1})

    assert result.ok is True
    assert result.error == ""
    assert result.layout_computed is True
    assert result.strategy == ReviewStrategy()
    assert result.to_dict()["summary"] == {"files": 1}
    assert result.to_dict()["layout_computed"] is True
    assert result.warnings == ("w",)


def test_error_result_factory() -> None:
    result = create_error_result("boom", ["w1"])
    assert result.ok is False
    assert result.error == "boom"
    assert result.warnings == ("w1",)
    assert result.to_dict()["layout_computed"] is False
    assert result.graph.nodes == ()
    assert result.layout_computed is False
