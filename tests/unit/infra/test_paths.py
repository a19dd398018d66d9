from __future__ import annotations

"""
Unit tests for the Repository Path helpers.
"""

import pytest

from reviewgraph.infra.paths import (
    dir_segments,
    file_basename,
    file_dir,
    file_stem,
    is_strict_subdir,
    normalize_repo_path,
    path_depth,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("src/a.ts", "src/a.ts"),
        ("./src/a.ts", "src/a.ts"),
        ("././a.ts", "a.ts"),
        ("src\\win\\a.ts", "src/win/a.ts"),
        ("  spaced.ts  ", "spaced.ts"),
        ("dir/", "dir"),
        ("", ""),
    ],
)
def test_normalize_repo_path(raw: str, expected: str) -> None:
    assert normalize_repo_path(raw) == expected


def test_components() -> None:
    assert file_basename("src/a/b.test.ts") == "b.test.ts"
    assert file_stem("src/a/b.test.ts") == "b.test"
    assert file_stem(".eslintrc") == ".eslintrc"
    assert file_dir("src/a/b.ts") == "src/a"
    assert file_dir("b.ts") == ""
    assert dir_segments("") == []
    assert path_depth("src/a/b.ts") == 3


def test_is_strict_subdir() -> None:
    assert is_strict_subdir("src/a", "src")
    assert not is_strict_subdir("src", "")
    assert not is_strict_subdir("src/a/b", "")
    assert not is_strict_subdir("src", "src")
    assert not is_strict_subdir("", "")
    assert not is_strict_subdir("src/utils", "src/util")
