from __future__ import annotations

"""
Directory Structure Inference Rules.

Heuristics derived from where files live rather than how they are named:
module entry points aggregate their siblings, and nested files build on
the files of their enclosing directories.
"""

from reviewgraph.core.inference.rules.base import FileFacts, InferenceRule
from reviewgraph.infra.paths import is_strict_subdir

INDEX_NAME: str = "index"


class IndexRule(InferenceRule):
    """
    An 'index' module re-exports its siblings: siblings come first.
    """

    name = "index"

    def applies(self, file: FileFacts, other: FileFacts) -> bool:
        return (
            file.name == INDEX_NAME
            and other.directory == file.directory
            and other.name != INDEX_NAME
        )


class SubdirectoryRule(InferenceRule):
    """
    Files in a nested directory depend on the files of any ancestor directory.
    """

    name = "subdirectory"

    def applies(self, file: FileFacts, other: FileFacts) -> bool:
        return is_strict_subdir(file.directory, other.directory)
