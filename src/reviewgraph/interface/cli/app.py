from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, reading the changed-file
list (JSON from a file or stdin), merging CLI overrides into the default
configuration, pipeline execution and result rendering.
"""

import json
import sys
from typing import Any, Dict, List, Optional

from reviewgraph.core.pipeline.engine import run_graph_pipeline
from reviewgraph.core.pipeline.stages.validator import validate_config
from reviewgraph.domain.config import get_default_config
from reviewgraph.domain.constants import ORPHAN_BRANCH_ID
from reviewgraph.domain.pipeline_models import PipelineResult
from reviewgraph.infra.logging import LoggingConfig, configure_logging, get_logger
from reviewgraph.interface.cli import args as cli_args

logger = get_logger(__name__)


class InputFormatError(ValueError):
    """The input document is valid JSON but not a list of file records."""


# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 pipeline failure,
             2 invalid input, 130 interrupted).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (console on stderr, stdout is for results)
    log_level = "DEBUG" if args.debug else "WARNING"
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    logger.debug("CLI execution initiated. Resolving configuration...")

    # 3. Merge command-line overrides and validate
    overrides = cli_args.args_to_overrides(args)
    raw_conf = _merge_config(get_default_config(), overrides)
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    # 4. Input loading
    try:
        files = _load_files(args.input_file)
    except OSError as e:
        msg = f"Cannot read input '{args.input_file}': {e}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2
    except ValueError as e:
        # json.JSONDecodeError is a ValueError subclass
        msg = f"Invalid input document: {e}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2

    logger.info(f"Loaded {len(files)} file entries.")

    # 5. Pipeline execution phase
    try:
        result = run_graph_pipeline(files, clean_conf)
    except KeyboardInterrupt:
        msg = "Operation interrupted by user."
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return 130
    except Exception as e:
        msg = f"Pipeline failed: {e}"
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 1

    # 6. Output rendering phase
    if args.json_output:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    return 0 if result.ok else 1

# -----------------------------------------------------------------------------
# INPUT & CONFIGURATION
# -----------------------------------------------------------------------------

def _load_files(input_file: Optional[str]) -> List[Any]:
    """
    Read the changed-file list.

    Accepts a JSON array of records (or path strings) or an object holding
    that array under 'files'.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the content is not valid JSON or has the wrong shape.
    """
    if input_file is None or input_file == "-":
        raw = sys.stdin.read()
    else:
        with open(input_file, "r", encoding="utf-8") as f:
            raw = f.read()

    document = json.loads(raw)
    if isinstance(document, dict):
        document = document.get("files")
    if not isinstance(document, list):
        raise InputFormatError("expected a JSON array of file records or an object with a 'files' array")
    return document


def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow merge of override values into the base configuration.

    Only known keys are merged, so stray overrides never reach the schema.
    """
    out = dict(base)
    keys_to_merge = ["ignored_parents", "compute_layout", "rank_dir", "build_strategy"]
    for k in keys_to_merge:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: PipelineResult) -> None:
    """
    Print a terminal report of the graph: branches, orphans, review flags.

    Args:
        result: The pipeline result to render.
    """
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    summary = result.summary
    graph = result.graph

    print("Dependency graph built.")
    print(f"Files: {summary.get('files', 0)}")
    print(f"Edges: {summary.get('edges', 0)} (candidates: {summary.get('candidate_edges', 0)})")
    print(f"Branches: {summary.get('branches', 0)}")

    for branch_id in graph.branch_ids():
        members = [n for n in graph.nodes if n.branch_id == branch_id]
        if branch_id == ORPHAN_BRANCH_ID:
            print(f"\nOrphans ({len(members)}):")
        else:
            root = members[0]
            print(f"\n{branch_id} [{root.branch_color}] root: {root.path}")
        for node in members:
            indent = "  " * (node.level + 1)
            stats = f"+{node.additions}/-{node.deletions}"
            print(f"{indent}- {node.label} ({stats})")

    if result.layout_computed:
        print(f"\nLayout: {len(graph.positions)} node positions computed.")

    flags = result.strategy.review_flags
    if flags:
        print("\nReview flags:")
        for flag in flags:
            print(f"  - {flag.flag}: {flag.description}")

    if result.warnings:
        print(f"\nWarnings: {len(result.warnings)} (see log output)")

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
