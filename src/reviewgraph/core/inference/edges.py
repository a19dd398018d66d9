from __future__ import annotations

"""
Candidate Edge Inference.

Runs every inference rule over every distinct ordered pair of changed files
and collects the proposed edges. Duplicates are expected here (several
rules often agree on the same pair); the refiner stage collapses them.
"""

import logging
from collections import Counter
from typing import Iterable, List, Optional, Sequence

from reviewgraph.core.inference.rules import DEFAULT_RULES, FileFacts, InferenceRule
from reviewgraph.domain.graph_models import Edge

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def infer_candidate_edges(
        paths: Sequence[str],
        rules: Optional[Iterable[InferenceRule]] = None,
) -> List[Edge]:
    """
    Propose "review before" edges between changed files.

    The outer loop walks 'file', the inner loop walks 'other', both in input
    order, and rules are evaluated in their declared order for each pair.
    Every firing appends 'other -> file'. The output order is therefore a
    pure function of the input order.

    Args:
        paths: Ordered, unique file paths of the change set.
        rules: Rules to evaluate. Defaults to the five built-in heuristics.

    Returns:
        List[Edge]: Candidate edges, duplicates included, never self-edges.
    """
    active_rules = tuple(rules) if rules is not None else DEFAULT_RULES
    facts = [FileFacts.of(p) for p in paths]

    edges: List[Edge] = []
    firings: Counter[str] = Counter()

    for file in facts:
        for other in facts:
            if file.path == other.path:
                continue
            for rule in active_rules:
                if rule.applies(file, other):
                    edges.append(Edge(source=other.path, target=file.path))
                    firings[rule.name] += 1

    if firings:
        logger.debug(
            "Rule firings: " + ", ".join(f"{name}={count}" for name, count in sorted(firings.items()))
        )
    logger.debug(f"Inferred {len(edges)} candidate edges from {len(facts)} files.")
    return edges
