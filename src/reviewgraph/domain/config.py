from __future__ import annotations

"""
Configuration Domain Management.

Provides the default runtime configuration of the graph engine. The
configuration is a plain dictionary, validated and coerced by the validator
stage. Persisting it between runs is the embedding application's concern.
"""

from typing import Any, Dict

from reviewgraph.domain.constants import (
    DEFAULT_BRANCH_SEP,
    DEFAULT_IGNORED_PARENTS,
    DEFAULT_MARGIN_X,
    DEFAULT_MARGIN_Y,
    DEFAULT_MAX_CROSSING_PASSES,
    DEFAULT_NODE_HEIGHT,
    DEFAULT_NODE_SEP,
    DEFAULT_NODE_WIDTH,
    DEFAULT_RANK_DIR,
    DEFAULT_RANK_SEP,
)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.
    This dictionary drives the behavior of the graph pipeline.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Edge Filtering
        "ignored_parents": list(DEFAULT_IGNORED_PARENTS),

        # Layout
        "compute_layout": True,
        "rank_dir": DEFAULT_RANK_DIR,
        "node_width": DEFAULT_NODE_WIDTH,
        "node_height": DEFAULT_NODE_HEIGHT,
        "node_sep": DEFAULT_NODE_SEP,
        "rank_sep": DEFAULT_RANK_SEP,
        "branch_sep": DEFAULT_BRANCH_SEP,
        "margin_x": DEFAULT_MARGIN_X,
        "margin_y": DEFAULT_MARGIN_Y,
        "max_crossing_passes": DEFAULT_MAX_CROSSING_PASSES,

        # Review Strategy
        "build_strategy": True,
    }
