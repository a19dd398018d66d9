from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the result object and factory functions used to communicate
execution results between the graph pipeline engine and the interface
layer (CLI or embedding applications).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from reviewgraph.domain.graph_models import DependencyGraphData
from reviewgraph.domain.strategy_models import ReviewStrategy

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PipelineResult:
    """
    Unified result object of a complete graph pipeline execution.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        graph: The assembled dependency graph (empty on failure).
        strategy: Suggested review order and flags.
        warnings: Input and configuration anomalies that were recovered.
        layout_computed: Whether positions were produced.
        summary: Execution statistics (counts of files, edges, branches).
    """
    ok: bool
    error: str

    graph: DependencyGraphData = field(default_factory=DependencyGraphData)
    strategy: ReviewStrategy = field(default_factory=ReviewStrategy)
    warnings: Tuple[str, ...] = ()
    layout_computed: bool = False

    summary: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize into the JSON payload printed by the CLI."""
        return {
            "ok": self.ok,
            "error": self.error,
            "graph": self.graph.to_dict(),
            "strategy": self.strategy.to_dict(),
            "warnings": list(self.warnings),
            "layout_computed": self.layout_computed,
            "summary": dict(self.summary),
        }

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        warnings: Optional[List[str]] = None,
        summary_extra: Optional[Dict[str, Any]] = None
) -> PipelineResult:
    """
    Create a failed pipeline result instance.

    Args:
        error: Detailed error description.
        warnings: Warnings collected before the failure.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        PipelineResult: An immutable error result object.
    """
    return PipelineResult(
        ok=False,
        error=error,
        warnings=tuple(warnings or ()),
        summary=summary_extra or {},
    )


def create_success_result(
        graph: DependencyGraphData,
        strategy: Optional[ReviewStrategy] = None,
        warnings: Optional[List[str]] = None,
        summary_extra: Optional[Dict[str, Any]] = None
) -> PipelineResult:
    """
    Create a successful pipeline result instance.

    Args:
        graph: The assembled graph, with positions if layout ran.
        strategy: Review strategy derived from the same edge set.
        warnings: Recovered input/config anomalies.
        summary_extra: Final execution metrics.

    Returns:
        PipelineResult: An immutable success result object.
    """
    return PipelineResult(
        ok=True,
        error="",
        graph=graph,
        strategy=strategy or ReviewStrategy(),
        warnings=tuple(warnings or ()),
        layout_computed=bool(graph.positions),
        summary=summary_extra or {},
    )
