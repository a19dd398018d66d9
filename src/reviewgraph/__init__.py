from __future__ import annotations

from reviewgraph.core.pipeline.engine import (
    build_dependency_graph,
    compute_layout,
    run_graph_pipeline,
)
from reviewgraph.domain.constants import CURRENT_VERSION
from reviewgraph.domain.graph_models import (
    DependencyGraphData,
    Edge,
    FileRecord,
    GraphNode,
    LayoutPosition,
)
from reviewgraph.domain.pipeline_models import PipelineResult

__version__ = CURRENT_VERSION

__all__ = [
    "DependencyGraphData",
    "Edge",
    "FileRecord",
    "GraphNode",
    "LayoutPosition",
    "PipelineResult",
    "build_dependency_graph",
    "compute_layout",
    "run_graph_pipeline",
]
