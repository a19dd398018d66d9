from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared change-set fixtures used across unit and integration tests.
"""

import os
import sys
from typing import Any, Dict, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_pr_files() -> List[Dict[str, Any]]:
    """
    A realistic front-end change set in the hosting provider's format.

    Exercises every inference rule: an index aggregator, nested files, a
    test file, a type module and a name-containment pair, plus a manifest
    that must be detached by the ignored-parent filter.
    """
    return [
        {"filename": "package.json", "additions": 2, "deletions": 1},
        {"filename": "src/components/button.tsx", "additions": 40, "deletions": 3},
        {"filename": "src/components/icon-button.tsx", "additions": 25, "deletions": 0},
        {"filename": "src/components/index.ts", "additions": 2, "deletions": 0},
        {"filename": "src/components/button.test.tsx", "additions": 30, "deletions": 0},
        {"filename": "src/components/forms/user-types.ts", "additions": 12, "deletions": 4},
        {"filename": "src/components/forms/user-types-form.tsx", "additions": 60, "deletions": 8},
    ]


@pytest.fixture
def small_layout_config() -> Dict[str, Any]:
    """Compact, easy-to-reason-about geometry for layout assertions."""
    return {
        "node_width": 100,
        "node_height": 40,
        "node_sep": 20,
        "rank_sep": 30,
        "branch_sep": 10,
        "margin_x": 5,
        "margin_y": 7,
    }
