from __future__ import annotations

"""
Branch Classification Stage.

Partitions the refined graph into "branches": the node sets reached by a
breadth-first traversal from each root file. Every node receives a branch
identifier, a depth level and a color (palette hue per branch, shade per
level).

This is a multi-source BFS forest decomposition with first-writer-wins
semantics. Roots are visited in input order and a node claimed by an
earlier traversal is never reassigned, so the output depends only on the
input order.
"""

import logging
from collections import deque
from typing import Deque, Dict, List, Sequence, Tuple

from reviewgraph.domain.constants import (
    BRANCH_ID_PREFIX,
    BRANCH_PALETTES,
    ORPHAN_BRANCH_ID,
    ORPHAN_COLOR,
)
from reviewgraph.domain.graph_models import BranchAssignment, Edge

logger = logging.getLogger(__name__)

Adjacency = Dict[str, List[str]]


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_adjacency(node_ids: Sequence[str], edges: Sequence[Edge]) -> Tuple[Adjacency, Adjacency]:
    """
    Build forward (from -> [to]) and reverse (to -> [from]) adjacency maps.

    Every node gets an entry, possibly empty. Neighbour lists keep edge
    order. Edges with an endpoint outside 'node_ids' are skipped.

    Args:
        node_ids: Ordered node identifiers.
        edges: Refined edges.

    Returns:
        Tuple[Adjacency, Adjacency]: (forward, reverse) maps.
    """
    forward: Adjacency = {n: [] for n in node_ids}
    reverse: Adjacency = {n: [] for n in node_ids}
    for edge in edges:
        if edge.source not in forward or edge.target not in forward:
            continue
        forward[edge.source].append(edge.target)
        reverse[edge.target].append(edge.source)
    return forward, reverse


def find_roots(node_ids: Sequence[str], reverse: Adjacency) -> List[str]:
    """
    Select the traversal roots in input order.

    Roots are nodes without incoming edges. When there are none (the whole
    graph sits on cycles) every node with the minimum in-degree is used
    instead, so classification always terminates with at least one branch.
    """
    roots = [n for n in node_ids if not reverse.get(n)]
    if roots or not node_ids:
        return roots

    min_in = min(len(reverse.get(n, ())) for n in node_ids)
    fallback = [n for n in node_ids if len(reverse.get(n, ())) == min_in]
    logger.warning(
        f"No root files found (cyclic dependencies); using {len(fallback)} "
        f"fallback root(s) with in-degree {min_in}."
    )
    return fallback


def branch_color(branch_index: int, level: int) -> str:
    """
    Color of a node at 'level' within the branch number 'branch_index'.

    Hues wrap around the palette list; shades darken with depth and stay on
    the darkest shade past the end of the list.
    """
    palette = BRANCH_PALETTES[branch_index % len(BRANCH_PALETTES)]
    shades = palette["shades"]
    return shades[min(max(level, 0), len(shades) - 1)]


def classify_branches(
        node_ids: Sequence[str],
        edges: Sequence[Edge],
) -> Dict[str, BranchAssignment]:
    """
    Assign every node to exactly one branch.

    Args:
        node_ids: Node identifiers in input order.
        edges: Refined, duplicate-free edges.

    Returns:
        Dict[str, BranchAssignment]: One assignment per node, keyed by id,
        in 'node_ids' order.
    """
    forward, reverse = build_adjacency(node_ids, edges)
    roots = find_roots(node_ids, reverse)

    assigned: Dict[str, BranchAssignment] = {}
    branch_index = 0

    for root in roots:
        if root in assigned:
            continue
        _traverse_branch(root, branch_index, forward, assigned)
        branch_index += 1

    orphans = [n for n in node_ids if n not in assigned]
    for node_id in orphans:
        assigned[node_id] = BranchAssignment(
            branch_id=ORPHAN_BRANCH_ID, level=0, color=ORPHAN_COLOR
        )
    if orphans:
        logger.warning(f"{len(orphans)} file(s) unreachable from any root; grouped as orphans.")

    logger.debug(f"Classified {len(node_ids)} nodes into {branch_index} branch(es).")
    return {n: assigned[n] for n in node_ids}


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _traverse_branch(
        root: str,
        branch_index: int,
        forward: Adjacency,
        assigned: Dict[str, BranchAssignment],
) -> None:
    """Iterative BFS claiming every unassigned node reachable from 'root'."""
    branch_id = f"{BRANCH_ID_PREFIX}{branch_index}"
    assigned[root] = BranchAssignment(
        branch_id=branch_id, level=0, color=branch_color(branch_index, 0)
    )

    queue: Deque[Tuple[str, int]] = deque([(root, 0)])
    while queue:
        node_id, level = queue.popleft()
        for child in forward.get(node_id, ()):
            if child in assigned:
                continue
            child_level = level + 1
            assigned[child] = BranchAssignment(
                branch_id=branch_id,
                level=child_level,
                color=branch_color(branch_index, child_level),
                display_parent=node_id,
            )
            queue.append((child, child_level))
