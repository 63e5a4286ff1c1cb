"""Duplicate detection and field-level merging."""

from campaign_parser.ner.resolution.duplicates import (
    duplicate_ids,
    find_duplicate_groups,
)
from campaign_parser.ner.resolution.merge import (
    CandidateChoice,
    CustomValue,
    FieldCandidate,
    MergeResult,
    MergeSession,
    MergeState,
    apply_merge,
    apply_merge_to_entities,
    begin_merge,
)

__all__ = [
    "CandidateChoice",
    "CustomValue",
    "FieldCandidate",
    "MergeResult",
    "MergeSession",
    "MergeState",
    "apply_merge",
    "apply_merge_to_entities",
    "begin_merge",
    "duplicate_ids",
    "find_duplicate_groups",
]
