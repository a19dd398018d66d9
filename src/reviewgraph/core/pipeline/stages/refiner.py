from __future__ import annotations

"""
Edge Refinement Stage (Deduplication & Filtering).

Reduces the raw candidate edge list produced by the inference rules to the
edge set every later stage works on:
1. Duplicate (from, to) pairs collapse to their first occurrence.
2. Edges touching paths outside the file set are dropped.
3. Self-edges are dropped.
4. Edges whose source is an ignored parent manifest are removed.
"""

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from reviewgraph.domain.constants import DEFAULT_IGNORED_PARENTS
from reviewgraph.domain.graph_models import Edge
from reviewgraph.infra.paths import file_basename

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def deduplicate_edges(edges: Iterable[Edge]) -> List[Edge]:
    """
    Collapse repeated (from, to) pairs, keeping first-occurrence order.

    Args:
        edges: Candidate edges, possibly with duplicates.

    Returns:
        List[Edge]: Unique edges.
    """
    unique: Dict[Tuple[str, str], Edge] = {}
    for edge in edges:
        unique.setdefault((edge.source, edge.target), edge)
    return list(unique.values())


def filter_ignored_parents(
        edges: Iterable[Edge],
        ignored_parents: Iterable[str],
) -> List[Edge]:
    """
    Remove every edge whose source basename is an ignored parent.

    Only the source endpoint is inspected: an ignored manifest can still be
    the target of an edge. Removed edges are not redirected anywhere.

    Args:
        edges: Unique edges.
        ignored_parents: Basenames (e.g. 'tailwind.config.js').

    Returns:
        List[Edge]: Surviving edges in their original order.
    """
    ignored: Set[str] = set(ignored_parents)
    if not ignored:
        return list(edges)
    return [e for e in edges if file_basename(e.source) not in ignored]


def refine_edges(
        candidates: Iterable[Edge],
        paths: Sequence[str],
        ignored_parents: Optional[Iterable[str]] = None,
) -> List[Edge]:
    """
    Run the full refinement: dedup, contract checks, ignored-parent filter.

    Args:
        candidates: Raw edges from the inference stage.
        paths: The file set the edges must stay within.
        ignored_parents: Basenames whose outgoing edges are discarded.
            Defaults to the built-in manifest list.

    Returns:
        List[Edge]: The filtered edge set used by all downstream stages.
    """
    known = set(paths)
    ignored = DEFAULT_IGNORED_PARENTS if ignored_parents is None else ignored_parents

    unique = deduplicate_edges(candidates)

    valid: List[Edge] = []
    for edge in unique:
        if edge.source not in known or edge.target not in known:
            logger.debug(f"Dropping edge with unknown endpoint: {edge.source} -> {edge.target}")
            continue
        if edge.source == edge.target:
            logger.debug(f"Dropping self-edge on {edge.source}")
            continue
        valid.append(edge)

    refined = filter_ignored_parents(valid, ignored)

    dropped = len(valid) - len(refined)
    if dropped:
        logger.info(f"Detached {dropped} edge(s) originating from ignored parent files.")
    logger.debug(f"Edge refinement: {len(unique)} unique, {len(refined)} kept.")
    return refined
