from __future__ import annotations

"""
Graph Assembler Stage.

Merges the three upstream products into the final node records:
1. File statistics (additions/deletions) from the input records.
2. Children links and descendant counts from the refined edge set.
3. Branch, level, color and display parent from the classifier.

Finishes by sorting nodes into a stable, human-scannable display order.
"""

import logging
from collections import deque
from typing import Deque, Dict, List, Mapping, Sequence

from reviewgraph.core.pipeline.stages.classifier import Adjacency, build_adjacency
from reviewgraph.domain.constants import ORPHAN_BRANCH_ID, ORPHAN_COLOR
from reviewgraph.domain.graph_models import (
    BranchAssignment,
    DependencyGraphData,
    Edge,
    FileRecord,
    GraphNode,
)
from reviewgraph.infra.paths import file_basename

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# CORE ASSEMBLY LOGIC
# -----------------------------------------------------------------------------

def assemble_graph(
        records: Sequence[FileRecord],
        edges: Sequence[Edge],
        assignments: Mapping[str, BranchAssignment],
) -> DependencyGraphData:
    """
    Build the immutable graph payload handed to layout and renderers.

    'children_count' and 'children' are computed over the same refined edge
    set the classifier used, so they agree with the branch structure.

    Args:
        records: Validated file records in input order.
        edges: Refined, duplicate-free edges.
        assignments: Branch classification keyed by path.

    Returns:
        DependencyGraphData: Sorted nodes plus the edge list (no positions).
    """
    paths = [r.path for r in records]
    forward, _ = build_adjacency(paths, edges)

    nodes: List[GraphNode] = []
    for record in records:
        info = assignments.get(record.path)
        if info is None:
            # Classifier contract violation; same fallback as an orphan.
            info = BranchAssignment(branch_id=ORPHAN_BRANCH_ID, level=0, color=ORPHAN_COLOR)

        nodes.append(GraphNode(
            id=record.path,
            label=file_basename(record.path),
            path=record.path,
            additions=record.additions,
            deletions=record.deletions,
            children_count=count_descendants(record.path, forward),
            branch_id=info.branch_id,
            branch_color=info.color,
            level=info.level,
            children=tuple(forward[record.path]),
            parent=info.display_parent,
        ))

    known = set(paths)
    kept_edges = tuple(e for e in edges if e.source in known and e.target in known)

    logger.debug(f"Assembled graph: {len(nodes)} nodes, {len(kept_edges)} edges.")
    return DependencyGraphData(nodes=tuple(sort_nodes(nodes, paths)), edges=kept_edges)


def sort_nodes(nodes: Sequence[GraphNode], input_order: Sequence[str]) -> List[GraphNode]:
    """
    Order nodes by branch id, then level, then label.

    Input position is the final tie-break (two files with the same basename
    in the same branch and level), keeping the order fully deterministic.
    """
    position: Dict[str, int] = {p: i for i, p in enumerate(input_order)}
    return sorted(
        nodes,
        key=lambda n: (n.branch_id, n.level, n.label, position.get(n.id, len(position))),
    )


def count_descendants(node_id: str, forward: Adjacency) -> int:
    """
    Count the nodes reachable from 'node_id', excluding the node itself.

    Iterative BFS with a visited set, safe on cyclic graphs.
    """
    visited = {node_id}
    queue: Deque[str] = deque([node_id])
    while queue:
        current = queue.popleft()
        for child in forward.get(current, ()):
            if child not in visited:
                visited.add(child)
                queue.append(child)
    return len(visited) - 1
