from __future__ import annotations

"""
Dependency Graph Domain Data Models.

Defines the immutable value objects exchanged between the graph pipeline
stages and handed to rendering collaborators: the input file records, the
inferred edges, per-node branch assignments, the assembled graph nodes and
the layout positions.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

# -----------------------------------------------------------------------------
# INPUT RECORDS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileRecord:
    """
    A single changed file as reported by the file-list provider.

    Attributes:
        path: Repository-relative, '/'-separated path. Unique key.
        additions: Number of added lines.
        deletions: Number of deleted lines.
    """
    path: str
    additions: int = 0
    deletions: int = 0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> FileRecord:
        """
        Build a record from a raw mapping.

        Accepts either 'path' or the hosting provider's 'filename' key.
        No coercion happens here; the validator stage owns that.
        """
        path = data.get("path")
        if path is None:
            path = data.get("filename", "")
        return cls(
            path=path,
            additions=data.get("additions", 0),
            deletions=data.get("deletions", 0),
        )


# -----------------------------------------------------------------------------
# GRAPH STRUCTURE
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Edge:
    """
    Directed "review source before target" relation between two files.

    Attributes:
        source: Path of the file to understand first (the dependency).
        target: Path of the dependent file.
    """
    source: str
    target: str

    def to_dict(self) -> Dict[str, str]:
        return {"from": self.source, "to": self.target}


@dataclass(frozen=True)
class BranchAssignment:
    """
    Classification of a single node into a branch.

    'display_parent' is the predecessor that first reached the node during
    the branch traversal. The graph is a DAG, so a node can have several
    dependencies; only one of them is kept here, purely for display. Turning
    this into a multi-parent model would break the level numbering.

    Attributes:
        branch_id: Identifier of the owning branch ('branch-N' or orphan).
        level: BFS depth from the branch root (root = 0).
        color: Hex color derived from the branch palette and level.
        display_parent: First discovering predecessor, None for roots.
    """
    branch_id: str
    level: int
    color: str
    display_parent: Optional[str] = None


@dataclass(frozen=True)
class GraphNode:
    """
    Fully assembled node, consumed read-only by layout and renderers.

    Attributes:
        id: Node identity (same as path).
        label: Basename shown on the node box.
        path: Repository-relative file path.
        additions: Added line count.
        deletions: Deleted line count.
        children_count: Number of descendants reachable via edges.
        branch_id: Owning branch identifier.
        branch_color: Hex color of the node.
        level: Depth inside the branch.
        children: Direct successor ids, in edge order.
        parent: Display parent id (see BranchAssignment) or None.
    """
    id: str
    label: str
    path: str
    additions: int
    deletions: int
    children_count: int
    branch_id: str
    branch_color: str
    level: int
    children: Tuple[str, ...] = ()
    parent: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "path": self.path,
            "additions": self.additions,
            "deletions": self.deletions,
            "childrenCount": self.children_count,
            "branchId": self.branch_id,
            "branchColor": self.branch_color,
            "level": self.level,
            "children": list(self.children),
            "parent": self.parent,
        }


@dataclass(frozen=True)
class LayoutPosition:
    """Top-left corner of a node box in layout space."""
    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class DependencyGraphData:
    """
    Output contract of the graph engine.

    Attributes:
        nodes: Assembled nodes in display order.
        edges: Unique, filtered edges in discovery order.
        positions: Layout positions keyed by node id (empty when the layout
            pass was not requested).
    """
    nodes: Tuple[GraphNode, ...] = ()
    edges: Tuple[Edge, ...] = ()
    positions: Mapping[str, LayoutPosition] = field(default_factory=dict)

    def node(self, node_id: str) -> Optional[GraphNode]:
        """Lookup a node by id (linear scan, graphs are review-sized)."""
        for n in self.nodes:
            if n.id == node_id:
                return n
        return None

    def branch_ids(self) -> Tuple[str, ...]:
        """Distinct branch identifiers in display order."""
        seen: Dict[str, None] = {}
        for n in self.nodes:
            seen.setdefault(n.branch_id, None)
        return tuple(seen)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }
        if self.positions:
            payload["positions"] = {
                node_id: pos.to_dict() for node_id, pos in self.positions.items()
            }
        return payload
