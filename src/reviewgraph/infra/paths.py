from __future__ import annotations

"""
Repository Path Infrastructure Layer.

Provides the path manipulation helpers shared by the inference rules, the
assembler and the review strategy. Change-set paths are repository-relative
and always '/'-separated regardless of the host OS, so everything here is
built on 'posixpath' rather than 'os.path'.
"""

import posixpath
from typing import List

# -----------------------------------------------------------------------------
# NORMALIZATION
# -----------------------------------------------------------------------------

def normalize_repo_path(path: str) -> str:
    """
    Normalize a raw change-set path into the canonical '/'-separated form.

    Converts Windows separators, strips surrounding whitespace, leading './'
    segments and trailing slashes. Does not resolve '..' segments: a path is
    an identity key and must round-trip to what the provider reported.

    Args:
        path: Raw path string as supplied by the file-list provider.

    Returns:
        str: Normalized path (empty string if nothing usable remains).
    """
    p = (path or "").strip().replace("\\", "/")
    while p.startswith("./"):
        p = p[2:]
    return p.rstrip("/")


# -----------------------------------------------------------------------------
# COMPONENT ACCESSORS
# -----------------------------------------------------------------------------

def file_basename(path: str) -> str:
    """Return the last path segment including its extension."""
    return posixpath.basename(path) or path


def file_stem(path: str) -> str:
    """
    Return the basename without its final extension.

    'src/a/b.test.ts' -> 'b.test'; dotfiles such as '.eslintrc' keep their
    full name.
    """
    stem, _ = posixpath.splitext(file_basename(path))
    return stem


def file_dir(path: str) -> str:
    """Return the parent directory ('' for repository-root files)."""
    return posixpath.dirname(path)


def dir_segments(directory: str) -> List[str]:
    """Split a directory into its non-empty segments."""
    return [seg for seg in directory.split("/") if seg]


def is_strict_subdir(child: str, parent: str) -> bool:
    """
    Check whether 'child' lies strictly below 'parent'.

    Compared on whole segments so 'src/utils' is not below 'src/util'.
    The repository root ('') is never treated as an ancestor, so root-level
    files do not become parents of every nested file.

    Args:
        child: Candidate descendant directory.
        parent: Candidate ancestor directory.

    Returns:
        bool: True when 'parent' is a non-empty, proper segment-prefix of 'child'.
    """
    child_parts = dir_segments(child)
    parent_parts = dir_segments(parent)
    if not parent_parts or len(child_parts) <= len(parent_parts):
        return False
    return child_parts[:len(parent_parts)] == parent_parts


def path_depth(path: str) -> int:
    """Number of '/'-separated segments in a path."""
    return len(path.split("/"))
