from __future__ import annotations

"""
Core orchestration pipeline.

This module coordinates the entire graph-building workflow:
1. Validates configuration and normalizes the file list.
2. Infers candidate edges from path heuristics.
3. Deduplicates and filters the edges.
4. Classifies nodes into branches.
5. Assembles the graph payload.
6. Computes the layout (optional).
7. Derives the review strategy (optional).
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

import networkx as nx

from reviewgraph.core.analysis.review_strategy import build_review_strategy
from reviewgraph.core.inference.edges import infer_candidate_edges
from reviewgraph.core.layout.sugiyama import LayoutSettings, layout_graph
from reviewgraph.core.pipeline.stages.assembler import assemble_graph
from reviewgraph.core.pipeline.stages.classifier import classify_branches
from reviewgraph.core.pipeline.stages.refiner import refine_edges
from reviewgraph.core.pipeline.stages.validator import normalize_file_records, validate_config
from reviewgraph.domain.constants import ORPHAN_BRANCH_ID
from reviewgraph.domain.graph_models import DependencyGraphData
from reviewgraph.domain.pipeline_models import (
    PipelineResult,
    create_error_result,
    create_success_result,
)
from reviewgraph.domain.strategy_models import ReviewStrategy

logger = logging.getLogger(__name__)


def run_graph_pipeline(
        files: Any,
        config: Optional[Dict[str, Any]] = None,
        *,
        with_layout: Optional[bool] = None,
) -> PipelineResult:
    """
    Execute the full graph pipeline over one change set.

    Args:
        files: Ordered file entries (FileRecord, mapping or path string).
        config: The configuration dictionary (raw or partial).
        with_layout: Overrides the 'compute_layout' configuration key.

    Returns:
        PipelineResult: Object containing status, graph, strategy and summary.
    """
    logger.info("Graph pipeline execution started.")

    # -------------------------------------------------------------------------
    # 1) Config & Input Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    records, input_warnings = normalize_file_records(files, strict=False)
    for warning in input_warnings:
        logger.warning(f"Input Warning: {warning}")
    warnings = warnings + input_warnings

    paths = [r.path for r in records]
    do_layout = cfg["compute_layout"] if with_layout is None else bool(with_layout)

    summary: Dict[str, Any] = {
        "files": len(records),
        "candidate_edges": 0,
        "edges": 0,
        "branches": 0,
        "orphans": 0,
        "layout": False,
    }

    if not records:
        logger.info("Empty change set; nothing to build.")
        return create_success_result(DependencyGraphData(), warnings=warnings, summary_extra=summary)

    # -------------------------------------------------------------------------
    # 2) Inference, Refinement & Classification
    # -------------------------------------------------------------------------
    try:
        candidates = infer_candidate_edges(paths)
        edges = refine_edges(candidates, paths, cfg["ignored_parents"])
        assignments = classify_branches(paths, edges)
        graph = assemble_graph(records, edges, assignments)
    except (ValueError, TypeError, KeyError) as e:
        msg = f"Graph construction failed: {e}"
        logger.error(msg, exc_info=True)
        return create_error_result(msg, warnings, summary_extra=summary)

    summary["candidate_edges"] = len(candidates)
    summary["edges"] = len(graph.edges)
    branch_ids = graph.branch_ids()
    summary["branches"] = len([b for b in branch_ids if b != ORPHAN_BRANCH_ID])
    summary["orphans"] = sum(1 for n in graph.nodes if n.branch_id == ORPHAN_BRANCH_ID)

    # -------------------------------------------------------------------------
    # 3) Layout
    # -------------------------------------------------------------------------
    if do_layout:
        try:
            graph = layout_graph(graph, LayoutSettings.from_config(cfg))
        except (nx.NetworkXException, ValueError) as e:
            msg = f"Layout computation failed: {e}"
            logger.error(msg, exc_info=True)
            return create_error_result(msg, warnings, summary_extra=summary)
        summary["layout"] = True

    # -------------------------------------------------------------------------
    # 4) Review Strategy
    # -------------------------------------------------------------------------
    strategy = ReviewStrategy()
    if cfg["build_strategy"]:
        strategy = build_review_strategy(paths, graph.edges)

    logger.info(
        f"Graph pipeline completed: {summary['files']} files, {summary['edges']} edges, "
        f"{summary['branches']} branch(es), {summary['orphans']} orphan(s)."
    )
    return create_success_result(graph, strategy, warnings, summary)


# -----------------------------------------------------------------------------
# CONVENIENCE API
# -----------------------------------------------------------------------------

def build_dependency_graph(
        files: Iterable[Any],
        ignored_parents: Optional[List[str]] = None,
) -> DependencyGraphData:
    """
    Build the graph payload without layout or review strategy.

    Raises:
        ValueError: If the pipeline reports a failure.
    """
    config: Dict[str, Any] = {"compute_layout": False, "build_strategy": False}
    if ignored_parents is not None:
        config["ignored_parents"] = list(ignored_parents)

    result = run_graph_pipeline(list(files), config)
    if not result.ok:
        raise ValueError(result.error)
    return result.graph


def compute_layout(
        graph: DependencyGraphData,
        config: Optional[Dict[str, Any]] = None,
) -> DependencyGraphData:
    """Return 'graph' with positions computed from the layout settings in 'config'."""
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")
    return layout_graph(graph, LayoutSettings.from_config(cfg))
