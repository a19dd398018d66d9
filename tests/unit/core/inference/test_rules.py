from __future__ import annotations

"""
Unit tests for the Edge Inference Rules.

Verifies:
1. Index aggregation (same directory only).
2. Directory nesting on whole path segments.
3. Test/spec pairing on the first infix only.
4. Type/interface affinity.
5. Name containment and its length threshold.
"""

import pytest

from reviewgraph.core.inference.rules import (
    DEFAULT_RULES,
    FileFacts,
    IndexRule,
    NameContainmentRule,
    SubdirectoryRule,
    TestPairingRule,
    TypeAffinityRule,
)


def facts(path: str) -> FileFacts:
    return FileFacts.of(path)


# -----------------------------------------------------------------------------
# FileFacts
# -----------------------------------------------------------------------------

def test_file_facts_strip_only_final_extension() -> None:
    f = facts("src/a/b.test.ts")
    assert f.name == "b.test"
    assert f.directory == "src/a"


def test_file_facts_root_file_has_empty_directory() -> None:
    assert facts("README.md").directory == ""


# -----------------------------------------------------------------------------
# IndexRule
# -----------------------------------------------------------------------------

def test_index_rule_fires_for_sibling() -> None:
    """TC-01: A sibling is reviewed before the index that aggregates it."""
    assert IndexRule().applies(facts("src/index.ts"), facts("src/util.ts"))


def test_index_rule_ignores_other_directories() -> None:
    assert not IndexRule().applies(facts("src/index.ts"), facts("lib/util.ts"))
    assert not IndexRule().applies(facts("src/index.ts"), facts("src/nested/util.ts"))


def test_index_rule_never_links_two_index_files() -> None:
    assert not IndexRule().applies(facts("src/index.ts"), facts("src/index.js"))


def test_index_rule_requires_file_to_be_index() -> None:
    assert not IndexRule().applies(facts("src/util.ts"), facts("src/index.ts"))


# -----------------------------------------------------------------------------
# SubdirectoryRule
# -----------------------------------------------------------------------------

@pytest.mark.parametrize(
    "file_path, other_path, expected",
    [
        ("src/a/b.ts", "src/c.ts", True),
        ("src/a/b/c.ts", "src/d.ts", True),
        ("src/app.ts", "tailwind.config.js", False),
        ("src/api/client.ts", "README.md", False),
        ("web/src/app.ts", "web/tailwind.config.js", True),
        ("src/c.ts", "src/a/b.ts", False),
        ("src/a.ts", "src/b.ts", False),
        ("src/utils/a.ts", "src/util/b.ts", False),
        ("a.ts", "b.ts", False),
    ],
)
def test_subdirectory_rule(file_path: str, other_path: str, expected: bool) -> None:
    """TC-02: Nesting is decided on whole segments; root files are never parents."""
    assert SubdirectoryRule().applies(facts(file_path), facts(other_path)) is expected


# -----------------------------------------------------------------------------
# TestPairingRule
# -----------------------------------------------------------------------------

def test_test_pairing_matches_test_and_spec() -> None:
    rule = TestPairingRule()
    assert rule.applies(facts("a/b.test.ts"), facts("a/b.ts"))
    assert rule.applies(facts("a/b.spec.ts"), facts("a/b.ts"))


def test_test_pairing_works_across_directories() -> None:
    assert TestPairingRule().applies(facts("tests/b.test.ts"), facts("src/b.ts"))


def test_test_pairing_strips_only_first_infix() -> None:
    """TC-03: 'a.test.test' pairs with 'a.test', not with 'a'."""
    rule = TestPairingRule()
    assert rule.applies(facts("x/a.test.test.ts"), facts("x/a.test.ts"))
    assert not rule.applies(facts("x/a.test.test.ts"), facts("x/a.ts"))


def test_test_pairing_requires_marker_in_file() -> None:
    assert not TestPairingRule().applies(facts("a/b.ts"), facts("a/b.ts"))
    assert not TestPairingRule().applies(facts("a/b.ts"), facts("a/b.test.ts"))


def test_test_pairing_marker_without_infix_does_not_pair() -> None:
    # 'testing' contains the marker but no '.test' infix: stripped name unchanged
    assert not TestPairingRule().applies(facts("a/testing.ts"), facts("a/other.ts"))


# -----------------------------------------------------------------------------
# TypeAffinityRule
# -----------------------------------------------------------------------------

def test_type_affinity_fires_when_type_module_name_is_contained() -> None:
    """TC-04: 'user-types' is reviewed before 'user-types-form'."""
    assert TypeAffinityRule().applies(facts("f/user-types-form.tsx"), facts("f/user-types.ts"))
    assert TypeAffinityRule().applies(facts("f/user-interface-view.ts"), facts("f/user-interface.ts"))


def test_type_affinity_requires_marker_in_other() -> None:
    assert not TypeAffinityRule().applies(facts("f/user-form.ts"), facts("f/user.ts"))


def test_type_affinity_requires_containment() -> None:
    assert not TypeAffinityRule().applies(facts("f/account.ts"), facts("f/user-types.ts"))


# -----------------------------------------------------------------------------
# NameContainmentRule
# -----------------------------------------------------------------------------

def test_name_containment_fires_for_long_names() -> None:
    """TC-05: 'button' comes before 'icon-button'."""
    assert NameContainmentRule().applies(facts("c/icon-button.tsx"), facts("c/button.tsx"))


def test_name_containment_threshold() -> None:
    rule = NameContainmentRule()
    # 4 characters is enough, 3 is not
    assert rule.applies(facts("c/user-card.ts"), facts("c/user.ts"))
    assert not rule.applies(facts("c/apple.ts"), facts("c/app.ts"))


def test_name_containment_skips_identical_names() -> None:
    assert not NameContainmentRule().applies(facts("a/button.ts"), facts("b/button.tsx"))


# -----------------------------------------------------------------------------
# Rule registry
# -----------------------------------------------------------------------------

def test_default_rules_order() -> None:
    assert [r.name for r in DEFAULT_RULES] == [
        "index", "subdirectory", "test-pairing", "type-affinity", "name-containment"
    ]
