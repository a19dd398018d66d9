from __future__ import annotations

"""
Review Strategy Data Models.

Immutable DTOs describing a suggested linear review order and the review
checklist flags raised by the change set.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class ReviewItem:
    """
    One entry of the suggested review order.

    Attributes:
        path: File path.
        reason: Short human explanation for the position.
        dependencies: Files with an edge into this one.
        dependents: Files this one has an edge into.
    """
    path: str
    reason: str
    dependencies: Tuple[str, ...] = ()
    dependents: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ReviewFlag:
    """A checklist item raised by the shape of the change set."""
    flag: str
    description: str


@dataclass(frozen=True)
class ReviewStrategy:
    review_order: Tuple[ReviewItem, ...] = ()
    review_flags: Tuple[ReviewFlag, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "reviewOrder": [
                {
                    "filename": item.path,
                    "reason": item.reason,
                    "dependencies": list(item.dependencies),
                    "dependents": list(item.dependents),
                }
                for item in self.review_order
            ],
            "reviewFlags": [
                {"flag": f.flag, "description": f.description}
                for f in self.review_flags
            ],
        }
