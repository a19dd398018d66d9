from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Provides centralized access to graph-wide constants: branch color palettes,
the orphan sentinel, the default list of build/config manifests that must
never act as parents, and the default geometry of the layout pass.
"""

from typing import Any, Dict, List, Tuple

CURRENT_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# BRANCH IDENTIFIERS
# -----------------------------------------------------------------------------
BRANCH_ID_PREFIX = "branch-"
ORPHAN_BRANCH_ID = "branch-orphan"
ORPHAN_COLOR = "#6b7280"

# -----------------------------------------------------------------------------
# BRANCH COLOR PALETTES (Tailwind hues, lightest shade at level 0)
# -----------------------------------------------------------------------------
BRANCH_PALETTES: Tuple[Dict[str, Any], ...] = (
    {"name": "blue", "base": "#3b82f6",
     "shades": ("#60a5fa", "#3b82f6", "#2563eb", "#1d4ed8", "#1e40af")},
    {"name": "emerald", "base": "#10b981",
     "shades": ("#34d399", "#10b981", "#059669", "#047857", "#065f46")},
    {"name": "purple", "base": "#8b5cf6",
     "shades": ("#a78bfa", "#8b5cf6", "#7c3aed", "#6d28d9", "#5b21b6")},
    {"name": "amber", "base": "#f59e0b",
     "shades": ("#fbbf24", "#f59e0b", "#d97706", "#b45309", "#92400e")},
    {"name": "rose", "base": "#f43f5e",
     "shades": ("#fb7185", "#f43f5e", "#e11d48", "#be123c", "#9f1239")},
    {"name": "cyan", "base": "#06b6d4",
     "shades": ("#22d3ee", "#06b6d4", "#0891b2", "#0e7490", "#155e75")},
    {"name": "pink", "base": "#ec4899",
     "shades": ("#f472b6", "#ec4899", "#db2777", "#be185d", "#9d174d")},
)

# -----------------------------------------------------------------------------
# IGNORED PARENTS
# -----------------------------------------------------------------------------
# Bundler/lint/test manifests that tend to "import" half the change set.
DEFAULT_IGNORED_PARENTS: List[str] = [
    "next.config.js",
    "next.config.mjs",
    "next.config.ts",
    "webpack.config.js",
    "vite.config.js",
    "vite.config.ts",
    "rollup.config.js",
    "jest.config.js",
    "jest.config.ts",
    ".eslintrc.js",
    ".prettierrc.js",
    "babel.config.js",
    "tsconfig.json",
    "package.json",
    "tailwind.config.js",
    "tailwind.config.ts",
    "postcss.config.js",
    "playwright.config.ts",
    "vitest.config.ts",
]

# -----------------------------------------------------------------------------
# LAYOUT GEOMETRY (pixels)
# -----------------------------------------------------------------------------
DEFAULT_NODE_WIDTH = 180
DEFAULT_NODE_HEIGHT = 90
DEFAULT_NODE_SEP = 80
DEFAULT_RANK_SEP = 120
DEFAULT_BRANCH_SEP = 40
DEFAULT_MARGIN_X = 50
DEFAULT_MARGIN_Y = 50
DEFAULT_RANK_DIR = "TB"
SUPPORTED_RANK_DIRS: Tuple[str, ...] = ("TB", "LR")
DEFAULT_MAX_CROSSING_PASSES = 24
