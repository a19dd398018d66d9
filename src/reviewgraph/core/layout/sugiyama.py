from __future__ import annotations

"""
Hierarchical Layout Engine (Sugiyama-style).

Assigns non-overlapping 2D box positions for a top-to-bottom (or
left-to-right) layered rendering of the dependency graph:
1. Cycle removal (greedy feedback-arc-set ordering, back edges reversed).
2. Rank assignment by longest path from the sources.
3. Dummy node insertion for edges spanning several ranks.
4. Crossing minimization (barycenter sweeps, branches kept in blocks).
5. Coordinate assignment with fixed box sizes and configurable spacing.

A fresh networkx graph is built for every call and nothing is cached at
module level, so concurrent callers never share layout state.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Dict, Hashable, List, Mapping, Optional, Sequence, Set, Tuple

import networkx as nx

from reviewgraph.domain.constants import (
    DEFAULT_BRANCH_SEP,
    DEFAULT_MARGIN_X,
    DEFAULT_MARGIN_Y,
    DEFAULT_MAX_CROSSING_PASSES,
    DEFAULT_NODE_HEIGHT,
    DEFAULT_NODE_SEP,
    DEFAULT_NODE_WIDTH,
    DEFAULT_RANK_DIR,
    DEFAULT_RANK_SEP,
)
from reviewgraph.domain.graph_models import DependencyGraphData, Edge, GraphNode, LayoutPosition

logger = logging.getLogger(__name__)

Ordering = List[List[Hashable]]

# -----------------------------------------------------------------------------
# SETTINGS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class LayoutSettings:
    """
    Geometry of the layout pass, in pixels.

    Box sizes are fixed constants rather than measured text, so the result
    does not depend on any rendering backend.

    Attributes:
        node_width: Width of every node box.
        node_height: Height of every node box.
        node_sep: Gap between neighbouring boxes inside a rank.
        rank_sep: Gap between consecutive ranks.
        branch_sep: Extra gap between neighbours from different branches.
        margin_x: Left margin.
        margin_y: Top margin.
        rank_dir: 'TB' (ranks stacked vertically) or 'LR'.
        max_crossing_passes: Upper bound on barycenter sweep iterations.
    """
    node_width: int = DEFAULT_NODE_WIDTH
    node_height: int = DEFAULT_NODE_HEIGHT
    node_sep: int = DEFAULT_NODE_SEP
    rank_sep: int = DEFAULT_RANK_SEP
    branch_sep: int = DEFAULT_BRANCH_SEP
    margin_x: int = DEFAULT_MARGIN_X
    margin_y: int = DEFAULT_MARGIN_Y
    rank_dir: str = DEFAULT_RANK_DIR
    max_crossing_passes: int = DEFAULT_MAX_CROSSING_PASSES

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any]) -> LayoutSettings:
        """Build settings from a validated configuration dictionary."""
        defaults = cls()
        return cls(
            node_width=cfg.get("node_width", defaults.node_width),
            node_height=cfg.get("node_height", defaults.node_height),
            node_sep=cfg.get("node_sep", defaults.node_sep),
            rank_sep=cfg.get("rank_sep", defaults.rank_sep),
            branch_sep=cfg.get("branch_sep", defaults.branch_sep),
            margin_x=cfg.get("margin_x", defaults.margin_x),
            margin_y=cfg.get("margin_y", defaults.margin_y),
            rank_dir=cfg.get("rank_dir", defaults.rank_dir),
            max_crossing_passes=cfg.get("max_crossing_passes", defaults.max_crossing_passes),
        )


@dataclass
class _LayeredGraph:
    """Intermediate state: DAG with dummy nodes, ranks and sort hints."""
    graph: nx.DiGraph
    ranks: Dict[Hashable, int]
    rank_count: int
    block: Dict[Hashable, int]
    seed: Dict[Hashable, Tuple[int, int]]


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def compute_layout(
        nodes: Sequence[GraphNode],
        edges: Sequence[Edge],
        settings: Optional[LayoutSettings] = None,
) -> Dict[str, LayoutPosition]:
    """
    Compute box positions for every node.

    The returned position is the raw box center minus half the box size
    (the box's top-left corner), matching what node-based renderers expect.

    Args:
        nodes: Assembled graph nodes (their order defines tie-breaks).
        edges: Refined edges. Unknown endpoints and self-edges are ignored.
        settings: Geometry; defaults to LayoutSettings().

    Returns:
        Dict[str, LayoutPosition]: Positions keyed by node id, in node order.
    """
    opts = settings or LayoutSettings()
    if not nodes:
        return {}

    graph = _build_digraph(nodes, edges)
    dag, reversed_edges = remove_cycles(graph)
    if reversed_edges:
        logger.debug(f"Layout reversed {len(reversed_edges)} back edge(s) to break cycles.")

    ranks = assign_ranks(dag)
    layered = _insert_dummy_nodes(graph, dag, ranks)
    ordering = minimise_crossings(layered, opts.max_crossing_passes)
    centers = _assign_coordinates(ordering, layered, opts)

    half_w = opts.node_width / 2
    half_h = opts.node_height / 2
    positions: Dict[str, LayoutPosition] = {}
    for node in nodes:
        cx, cy = centers[node.id]
        positions[node.id] = LayoutPosition(x=cx - half_w, y=cy - half_h)

    logger.debug(f"Layout computed for {len(positions)} nodes across {layered.rank_count} rank(s).")
    return positions


def layout_graph(
        graph_data: DependencyGraphData,
        settings: Optional[LayoutSettings] = None,
) -> DependencyGraphData:
    """Return a copy of 'graph_data' carrying freshly computed positions."""
    positions = compute_layout(graph_data.nodes, graph_data.edges, settings)
    return replace(graph_data, positions=positions)


# -----------------------------------------------------------------------------
# PHASE 1: CYCLE REMOVAL
# -----------------------------------------------------------------------------

def greedy_fas_ordering(graph: nx.DiGraph) -> List[Hashable]:
    """
    Order nodes so that few edges point backwards (Eades, Lin, Smyth 1993).

    Repeatedly peels sinks to the tail and sources to the head; when only
    cycles remain, moves the node with the largest (out - in) surplus to the
    head. Ties resolve by graph insertion order, so the result is stable.
    """
    active: Dict[Hashable, None] = dict.fromkeys(graph.nodes)
    out_deg = {n: graph.out_degree(n) for n in graph.nodes}
    in_deg = {n: graph.in_degree(n) for n in graph.nodes}

    head: List[Hashable] = []
    tail: List[Hashable] = []

    def _drop(node: Hashable) -> None:
        del active[node]
        for succ in graph.successors(node):
            if succ in active:
                in_deg[succ] -= 1
        for pred in graph.predecessors(node):
            if pred in active:
                out_deg[pred] -= 1

    while active:
        changed = True
        while changed:
            changed = False
            for node in [n for n in active if out_deg[n] == 0]:
                if node in active:
                    _drop(node)
                    tail.append(node)
                    changed = True
            for node in [n for n in active if in_deg[n] == 0]:
                if node in active:
                    _drop(node)
                    head.append(node)
                    changed = True

        if active:
            best = max(active, key=lambda n: out_deg[n] - in_deg[n])
            _drop(best)
            head.append(best)

    tail.reverse()
    return head + tail


def remove_cycles(graph: nx.DiGraph) -> Tuple[nx.DiGraph, Set[Tuple[Hashable, Hashable]]]:
    """
    Copy 'graph' into a DAG by reversing its back edges.

    Returns:
        Tuple of the acyclic copy and the set of original (src, tgt) pairs
        that were reversed. Self-loops are dropped from the copy.
    """
    position = {node: i for i, node in enumerate(greedy_fas_ordering(graph))}

    dag = nx.DiGraph()
    dag.add_nodes_from(graph.nodes(data=True))

    reversed_edges: Set[Tuple[Hashable, Hashable]] = set()
    for src, tgt in graph.edges():
        if src == tgt:
            continue
        if position[src] > position[tgt]:
            reversed_edges.add((src, tgt))
            dag.add_edge(tgt, src)
        else:
            dag.add_edge(src, tgt)
    return dag, reversed_edges


# -----------------------------------------------------------------------------
# PHASE 2: RANK ASSIGNMENT
# -----------------------------------------------------------------------------

def assign_ranks(dag: nx.DiGraph) -> Dict[Hashable, int]:
    """
    Longest-path layering: sources sit on rank 0, every other node one rank
    below its deepest predecessor.
    """
    ranks: Dict[Hashable, int] = {}
    for node in nx.topological_sort(dag):
        preds = [ranks[p] for p in dag.predecessors(node)]
        ranks[node] = max(preds) + 1 if preds else 0
    return ranks


# -----------------------------------------------------------------------------
# PHASE 3: DUMMY NODES
# -----------------------------------------------------------------------------

def _build_digraph(nodes: Sequence[GraphNode], edges: Sequence[Edge]) -> nx.DiGraph:
    """Fresh DiGraph carrying branch and input-order hints on each node."""
    graph = nx.DiGraph()
    block_of: Dict[str, int] = {}
    for index, node in enumerate(nodes):
        block = block_of.setdefault(node.branch_id, len(block_of))
        graph.add_node(node.id, block=block, index=index)

    for edge in edges:
        if edge.source == edge.target:
            continue
        if edge.source in graph and edge.target in graph:
            graph.add_edge(edge.source, edge.target)
    return graph


def _insert_dummy_nodes(
        graph: nx.DiGraph,
        dag: nx.DiGraph,
        ranks: Dict[Hashable, int],
) -> _LayeredGraph:
    """
    Split every edge spanning more than one rank into a chain of dummies.

    Dummy ids are tuples, so they can never collide with file paths. Each
    dummy inherits the branch block of its chain's source.
    """
    layered = nx.DiGraph()
    all_ranks: Dict[Hashable, int] = dict(ranks)
    block: Dict[Hashable, int] = {}
    seed: Dict[Hashable, Tuple[int, int]] = {}

    for node, attrs in graph.nodes(data=True):
        layered.add_node(node)
        block[node] = attrs["block"]
        seed[node] = (attrs["index"], 0)

    for chain_no, (src, tgt) in enumerate(dag.edges()):
        span = all_ranks[tgt] - all_ranks[src]
        if span <= 1:
            layered.add_edge(src, tgt)
            continue

        prev = src
        for step in range(1, span):
            dummy = ("dummy", chain_no, step)
            layered.add_node(dummy)
            all_ranks[dummy] = all_ranks[src] + step
            block[dummy] = block[src]
            seed[dummy] = (seed[src][0], chain_no + 1)
            layered.add_edge(prev, dummy)
            prev = dummy
        layered.add_edge(prev, tgt)

    rank_count = (max(all_ranks.values()) + 1) if all_ranks else 0
    return _LayeredGraph(
        graph=layered, ranks=all_ranks, rank_count=rank_count, block=block, seed=seed
    )


# -----------------------------------------------------------------------------
# PHASE 4: CROSSING MINIMIZATION
# -----------------------------------------------------------------------------

def minimise_crossings(layered: _LayeredGraph, max_passes: int) -> Ordering:
    """
    Reduce edge crossings with alternating barycenter sweeps.

    Within a rank nodes stay grouped by branch block; the barycenter only
    reorders nodes inside their block. The best ordering seen is returned.
    """
    ordering: Ordering = [[] for _ in range(layered.rank_count)]
    for node in sorted(layered.ranks, key=lambda n: (layered.block[n], layered.seed[n])):
        ordering[layered.ranks[node]].append(node)

    best = [list(rank) for rank in ordering]
    best_crossings = count_crossings(ordering, layered.graph)

    for _ in range(max_passes):
        if best_crossings == 0:
            break

        for r in range(1, layered.rank_count):
            _sort_rank(ordering, r, ordering[r - 1], layered, "incoming")
        for r in range(layered.rank_count - 2, -1, -1):
            _sort_rank(ordering, r, ordering[r + 1], layered, "outgoing")

        crossings = count_crossings(ordering, layered.graph)
        if crossings >= best_crossings:
            break
        best_crossings = crossings
        best = [list(rank) for rank in ordering]

    logger.debug(f"Crossing minimization finished with {best_crossings} crossing(s).")
    return best


def count_crossings(ordering: Ordering, graph: nx.DiGraph) -> int:
    """Count pairwise edge crossings between consecutive ranks."""
    total = 0
    for r in range(len(ordering) - 1):
        lower = {n: i for i, n in enumerate(ordering[r + 1])}
        segments: List[Tuple[int, int]] = []
        for i, node in enumerate(ordering[r]):
            for succ in graph.successors(node):
                if succ in lower:
                    segments.append((i, lower[succ]))
        for a in range(len(segments)):
            for b in range(a + 1, len(segments)):
                (s1, t1), (s2, t2) = segments[a], segments[b]
                if (s1 - s2) * (t1 - t2) < 0:
                    total += 1
    return total


def _sort_rank(
        ordering: Ordering,
        rank: int,
        neighbour_rank: List[Hashable],
        layered: _LayeredGraph,
        direction: str,
) -> None:
    """Stable re-sort of one rank by (block, barycenter, current position)."""
    neighbour_pos = {n: float(i) for i, n in enumerate(neighbour_rank)}
    current = {n: float(i) for i, n in enumerate(ordering[rank])}

    def _key(node: Hashable) -> Tuple[int, float, float]:
        if direction == "incoming":
            neighbours = layered.graph.predecessors(node)
        else:
            neighbours = layered.graph.successors(node)
        positions = [neighbour_pos[nb] for nb in neighbours if nb in neighbour_pos]
        barycenter = sum(positions) / len(positions) if positions else current[node]
        return layered.block[node], barycenter, current[node]

    ordering[rank].sort(key=_key)


# -----------------------------------------------------------------------------
# PHASE 5: COORDINATE ASSIGNMENT
# -----------------------------------------------------------------------------

def _assign_coordinates(
        ordering: Ordering,
        layered: _LayeredGraph,
        opts: LayoutSettings,
) -> Dict[Hashable, Tuple[float, float]]:
    """
    Place box centers rank by rank, each rank centered on the widest one.

    'along' is the axis inside a rank (x for TB), 'across' the rank axis.
    Dummies occupy a zero-size lane so long edges keep a channel.
    """
    horizontal = opts.rank_dir == "LR"
    along_size = opts.node_height if horizontal else opts.node_width
    across_size = opts.node_width if horizontal else opts.node_height
    along_margin = opts.margin_y if horizontal else opts.margin_x
    across_margin = opts.margin_x if horizontal else opts.margin_y

    def _is_dummy(node: Hashable) -> bool:
        return isinstance(node, tuple)

    rank_offsets: List[List[float]] = []
    rank_extents: List[float] = []
    for rank_nodes in ordering:
        offsets: List[float] = []
        cursor = 0.0
        prev: Optional[Hashable] = None
        for node in rank_nodes:
            size = 0.0 if _is_dummy(node) else float(along_size)
            if prev is not None:
                gap = opts.node_sep / 2 if (_is_dummy(node) or _is_dummy(prev)) else opts.node_sep
                if layered.block[node] != layered.block[prev]:
                    gap += opts.branch_sep
                cursor += gap
            offsets.append(cursor + size / 2)
            cursor += size
            prev = node
        rank_offsets.append(offsets)
        rank_extents.append(cursor)

    widest = max(rank_extents, default=0.0)

    centers: Dict[Hashable, Tuple[float, float]] = {}
    for rank, rank_nodes in enumerate(ordering):
        shift = along_margin + (widest - rank_extents[rank]) / 2
        across = across_margin + rank * (across_size + opts.rank_sep) + across_size / 2
        for node, offset in zip(rank_nodes, rank_offsets[rank]):
            along = shift + offset
            centers[node] = (across, along) if horizontal else (along, across)
    return centers
