from __future__ import annotations

"""
Review Strategy Analysis.

Derives a suggested reading order for the changed files plus a short list of
review flags (cross-cutting concerns a reviewer should keep in mind). The
order is a heuristic over path patterns: configuration and type definitions
first, shallow "base" files before deep ones, entry points before siblings,
tests last. Dependencies and dependents come from the refined edge set.
"""

import logging
import re
from typing import Dict, List, Sequence, Tuple

from reviewgraph.core.pipeline.stages.classifier import build_adjacency
from reviewgraph.domain.graph_models import Edge
from reviewgraph.domain.strategy_models import ReviewFlag, ReviewItem, ReviewStrategy
from reviewgraph.infra.paths import path_depth

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# CLASSIFICATION PATTERNS
# -----------------------------------------------------------------------------

_TYPESCRIPT_RX = re.compile(r"\.(ts|tsx)$")

REASON_CONFIG = "Configuration file - review for breaking changes"
REASON_TYPES = "Type definitions - check interface changes"
REASON_ENTRY_POINT = "Module entry point"
REASON_TEST = "Test file - verify coverage"
REASON_ROOT_LEVEL = "Root-level file - likely core functionality"
REASON_STANDARD = "Standard file"

FLAG_TEST_COVERAGE = ReviewFlag(
    flag="Test Coverage",
    description="Ensure new/modified code has appropriate test coverage",
)
FLAG_CONFIG_CHANGES = ReviewFlag(
    flag="Configuration Changes",
    description="Verify configuration changes won't break existing functionality",
)
FLAG_TYPE_SAFETY = ReviewFlag(
    flag="Type Safety",
    description="Check TypeScript types are properly defined and used",
)


def is_config_file(path: str) -> bool:
    return "config" in path or path.endswith(".json") or path.endswith(".yml")


def is_type_definition(path: str) -> bool:
    return ".d.ts" in path or "types" in path


def is_entry_point(path: str) -> bool:
    return "index." in path


def is_test_file(path: str) -> bool:
    return "test" in path or "spec" in path


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def review_sort_key(path: str) -> Tuple[bool, bool, int, bool, bool, str]:
    """
    Sort key implementing the suggested review order.

    False sorts before True, so "first" criteria are negated.
    """
    return (
        not is_config_file(path),
        not is_type_definition(path),
        path_depth(path),
        not is_entry_point(path),
        is_test_file(path),
        path,
    )


def review_reason(path: str) -> str:
    """One-line explanation of why a file sits where it does in the order."""
    if "config" in path or path.endswith(".json"):
        return REASON_CONFIG
    if is_type_definition(path):
        return REASON_TYPES
    if is_entry_point(path):
        return REASON_ENTRY_POINT
    if is_test_file(path):
        return REASON_TEST
    if path_depth(path) <= 2:
        return REASON_ROOT_LEVEL
    return REASON_STANDARD


def collect_review_flags(paths: Sequence[str]) -> List[ReviewFlag]:
    """Flags raised by at least one changed file, in a fixed order."""
    flags: List[ReviewFlag] = []
    if any(is_test_file(p) for p in paths):
        flags.append(FLAG_TEST_COVERAGE)
    if any("config" in p or ".json" in p for p in paths):
        flags.append(FLAG_CONFIG_CHANGES)
    if any(_TYPESCRIPT_RX.search(p) for p in paths):
        flags.append(FLAG_TYPE_SAFETY)
    return flags


def build_review_strategy(paths: Sequence[str], edges: Sequence[Edge]) -> ReviewStrategy:
    """
    Build the review order and flags for a change set.

    Args:
        paths: Normalized file paths in input order.
        edges: Refined edges; sources are read before their targets.

    Returns:
        ReviewStrategy: Ordered review items plus review flags.
    """
    forward, reverse = build_adjacency(paths, edges)

    items: List[ReviewItem] = []
    for path in sorted(paths, key=review_sort_key):
        items.append(ReviewItem(
            path=path,
            reason=review_reason(path),
            dependencies=tuple(reverse.get(path, ())),
            dependents=tuple(forward.get(path, ())),
        ))

    flags = collect_review_flags(paths)

    reasons: Dict[str, int] = {}
    for item in items:
        reasons[item.reason] = reasons.get(item.reason, 0) + 1
    logger.debug(f"Review strategy: {len(items)} item(s), {len(flags)} flag(s), reasons={reasons}")

    return ReviewStrategy(review_order=tuple(items), review_flags=tuple(flags))
