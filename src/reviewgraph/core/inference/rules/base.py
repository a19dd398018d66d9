from __future__ import annotations

"""
Base Definitions for Edge Inference Rules.

Provides the abstract interface shared by the path/name heuristics that
stand in for real import resolution, plus the pre-computed per-file facts
they operate on.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from reviewgraph.infra.paths import file_dir, file_stem


@dataclass(frozen=True)
class FileFacts:
    """
    Pre-computed path components of a changed file.

    Attributes:
        path: Full repository-relative path.
        name: Basename without the final extension ('b.test' for 'a/b.test.ts').
        directory: Parent directory ('' for repository-root files).
    """
    path: str
    name: str
    directory: str

    @classmethod
    def of(cls, path: str) -> FileFacts:
        return cls(path=path, name=file_stem(path), directory=file_dir(path))


class InferenceRule(ABC):
    """
    Abstract base class for a single edge heuristic.

    A rule inspects an ordered pair (file, other) and decides whether
    'other' should be reviewed before 'file'. When it fires, the caller
    emits the edge other -> file.
    """

    #: Stable identifier used in logs and edge provenance.
    name: str = "rule"

    @abstractmethod
    def applies(self, file: FileFacts, other: FileFacts) -> bool:
        """
        Decide whether the rule proposes the edge other -> file.

        Args:
            file: The dependent candidate.
            other: The dependency candidate.

        Returns:
            bool: True if the edge should be proposed.
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
