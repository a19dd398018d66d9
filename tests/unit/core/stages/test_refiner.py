from __future__ import annotations

"""
Unit tests for the Edge Refinement Stage.

Verifies:
1. Deduplication keeps the first occurrence and its order.
2. Unknown endpoints and self-edges are dropped.
3. Ignored parents lose their outgoing edges only.
"""

from reviewgraph.core.pipeline.stages.refiner import (
    deduplicate_edges,
    filter_ignored_parents,
    refine_edges,
)
from reviewgraph.domain.constants import DEFAULT_IGNORED_PARENTS
from reviewgraph.domain.graph_models import Edge


def test_deduplicate_keeps_first_occurrence_order() -> None:
    edges = [Edge("a", "b"), Edge("c", "d"), Edge("a", "b"), Edge("b", "a")]
    assert deduplicate_edges(edges) == [Edge("a", "b"), Edge("c", "d"), Edge("b", "a")]


def test_filter_ignored_parents_matches_source_basename() -> None:
    """TC-01: Only the source endpoint is inspected."""
    edges = [
        Edge("web/tailwind.config.js", "web/src/app.ts"),
        Edge("web/src/app.ts", "web/tailwind.config.js"),
    ]
    kept = filter_ignored_parents(edges, ["tailwind.config.js"])
    assert kept == [Edge("web/src/app.ts", "web/tailwind.config.js")]


def test_filter_with_empty_list_keeps_everything() -> None:
    edges = [Edge("package.json", "src/a.ts")]
    assert filter_ignored_parents(edges, []) == edges


def test_refine_uses_default_ignore_list() -> None:
    paths = ["package.json", "src/a.ts"]
    assert refine_edges([Edge("package.json", "src/a.ts")], paths) == []
    assert "package.json" in DEFAULT_IGNORED_PARENTS


def test_refine_with_explicit_empty_ignore_list() -> None:
    paths = ["package.json", "src/a.ts"]
    refined = refine_edges([Edge("package.json", "src/a.ts")], paths, ignored_parents=[])
    assert refined == [Edge("package.json", "src/a.ts")]


def test_refine_drops_unknown_endpoints_and_self_edges() -> None:
    """TC-02: Contract violations never reach the classifier."""
    candidates = [
        Edge("a", "ghost"),
        Edge("a", "a"),
        Edge("a", "b"),
        Edge("a", "b"),
    ]
    assert refine_edges(candidates, ["a", "b"], ignored_parents=[]) == [Edge("a", "b")]
