from __future__ import annotations

"""
Naming Convention Inference Rules.

Heuristics derived from file names: tests follow the code they exercise,
type/interface modules precede the files named after them, and a file
whose name embeds another file's name probably imports it.
"""

import re

from reviewgraph.core.inference.rules.base import FileFacts, InferenceRule

# Only the first '.test' / '.spec' infix is stripped ('a.test.test' -> 'a.test').
_TEST_INFIX_RX = re.compile(r"\.(test|spec)")
_TEST_MARKERS = ("test", "spec")
_TYPE_MARKERS = ("type", "interface")

# A contained name must be longer than 3 characters.
MIN_CONTAINED_NAME_LENGTH: int = 4


class TestPairingRule(InferenceRule):
    """
    'b.test.ts' / 'b.spec.ts' is reviewed after 'b.ts'.
    """

    name = "test-pairing"
    __test__ = False  # not a pytest class despite the name

    def applies(self, file: FileFacts, other: FileFacts) -> bool:
        if not any(marker in file.name for marker in _TEST_MARKERS):
            return False
        return _TEST_INFIX_RX.sub("", file.name, count=1) == other.name


class TypeAffinityRule(InferenceRule):
    """
    A 'user-types' module comes before 'user-types-form' and similar files.
    """

    name = "type-affinity"

    def applies(self, file: FileFacts, other: FileFacts) -> bool:
        if not any(marker in other.name for marker in _TYPE_MARKERS):
            return False
        return other.name in file.name


class NameContainmentRule(InferenceRule):
    """
    'button' comes before 'icon-button'. Not symmetric-safe: combined with the
    directory rules this can create short cycles, which the classifier
    tolerates.
    """

    name = "name-containment"

    def applies(self, file: FileFacts, other: FileFacts) -> bool:
        return (
            len(other.name) >= MIN_CONTAINED_NAME_LENGTH
            and file.name != other.name
            and other.name in file.name
        )
