from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema of the 'reviewgraph' tool and translates the
parsed namespace into configuration overrides for the graph pipeline.
"""

import argparse
from typing import Any, Dict, List, Optional

from reviewgraph.domain.constants import DEFAULT_IGNORED_PARENTS, SUPPORTED_RANK_DIRS

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the reviewgraph CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="reviewgraph",
        description=(
            "Build a review dependency graph from the list of files changed "
            "in a pull request."
        ),
    )

    # --- Input ---
    p.add_argument(
        "-i", "--input",
        dest="input_file",
        default=None,
        help="JSON file with the changed files (array of records or {'files': [...]}). "
             "Reads stdin when omitted or '-'.",
    )

    # --- Edge Filtering ---
    p.add_argument(
        "--ignore-parent",
        dest="ignore_parent",
        default=None,
        help="Comma-separated basenames whose outgoing edges are dropped "
             "(added to the built-in list).",
    )
    p.add_argument(
        "--no-default-ignores",
        action="store_true",
        help="Do not apply the built-in list of ignored parent manifests.",
    )

    # --- Layout & Analysis ---
    p.add_argument(
        "--no-layout",
        action="store_true",
        help="Skip node position computation.",
    )
    p.add_argument(
        "--rank-dir",
        dest="rank_dir",
        choices=list(SUPPORTED_RANK_DIRS),
        type=str.upper,
        default=None,
        help="Layout direction: TB (top-bottom) or LR (left-right).",
    )
    p.add_argument(
        "--no-strategy",
        action="store_true",
        help="Skip the suggested review order.",
    )

    # --- Output ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the full result as JSON on stdout.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to this rotating log file.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary subset.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides.
    """
    overrides: Dict[str, Any] = {}

    extra = _split_csv(args.ignore_parent) or []
    if args.no_default_ignores:
        overrides["ignored_parents"] = extra
    elif extra:
        overrides["ignored_parents"] = list(DEFAULT_IGNORED_PARENTS) + [
            name for name in extra if name not in DEFAULT_IGNORED_PARENTS
        ]

    if args.no_layout:
        overrides["compute_layout"] = False
    if args.rank_dir:
        overrides["rank_dir"] = args.rank_dir
    if args.no_strategy:
        overrides["build_strategy"] = False

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """
    Convert a comma-separated string into a list of sanitized strings.
    """
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
