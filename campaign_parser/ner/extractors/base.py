"""Shared contract and helpers for candidate extractors."""

import re
from typing import Optional, Protocol

from campaign_parser.entities.schema import BaseEntity, EntityKind
from campaign_parser.ner.gazetteers.dictionaries import TermDictionaries
from campaign_parser.ner.models import TextAnalysis


class CandidateExtractor(Protocol):
    """Scan text and produce candidate entities of one kind."""

    kind: EntityKind

    def extract(
        self,
        text: str,
        analysis: TextAnalysis,
        dictionaries: TermDictionaries,
        session_number: Optional[int] = None,
    ) -> list[BaseEntity]:
        ...


def source_sessions(session_number: Optional[int]) -> Optional[list[int]]:
    """Session reference list for a candidate, or None without a session."""
    return [session_number] if session_number is not None else None


def keyword_pattern(keyword: str) -> re.Pattern:
    """Match a keyword at the start of a word ("inn" in "inns", not "beginning")."""
    return re.compile(rf"\b{re.escape(keyword.lower())}")
