from __future__ import annotations

from typing import Tuple

from .base import FileFacts, InferenceRule
from .naming import NameContainmentRule, TestPairingRule, TypeAffinityRule
from .structural import IndexRule, SubdirectoryRule

# Evaluation order matters only for the order of candidate edges.
DEFAULT_RULES: Tuple[InferenceRule, ...] = (
    IndexRule(),
    SubdirectoryRule(),
    TestPairingRule(),
    TypeAffinityRule(),
    NameContainmentRule(),
)

__all__ = [
    "FileFacts",
    "InferenceRule",
    "IndexRule",
    "SubdirectoryRule",
    "TestPairingRule",
    "TypeAffinityRule",
    "NameContainmentRule",
    "DEFAULT_RULES",
]
