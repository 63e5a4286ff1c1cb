"""NPC extraction from known names and detected person mentions."""

import re
from typing import Optional

from rapidfuzz import fuzz

from campaign_parser.entities.schema import NPC, EntityKind
from campaign_parser.ner.config import ExtractionConfig, default_config
from campaign_parser.ner.extractors.base import keyword_pattern, source_sessions
from campaign_parser.ner.gazetteers.dictionaries import TermDictionaries
from campaign_parser.ner.gazetteers.matcher import matcher_for
from campaign_parser.ner.models import TextAnalysis

PROPER_NAME = re.compile(r"^[A-Z][a-z]+( [A-Z][a-z]+)*$")
TRAILING_PUNCTUATION = re.compile(r"[,.):]+$")


def clean_person_name(name: str) -> str:
    """Remove trailing punctuation and surrounding whitespace."""
    return TRAILING_PUNCTUATION.sub("", name.strip()).strip()


def role_from_context(context: str, dictionaries: TermDictionaries) -> Optional[str]:
    """First role keyword (dictionary order) found in the context."""
    context_lower = context.lower()
    for role in dictionaries.roles:
        if keyword_pattern(role).search(context_lower):
            return role
    return None


class NPCExtractor:
    """Extract NPC candidates.

    Known NPC names are taken first; person mentions found by the NLP
    pipeline are added only when they pass the discovery gates.
    """

    kind = EntityKind.NPC

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or default_config

    def extract(
        self,
        text: str,
        analysis: TextAnalysis,
        dictionaries: TermDictionaries,
        session_number: Optional[int] = None,
    ) -> list[NPC]:
        npcs: list[NPC] = []
        found_names: set[str] = set()

        for name in matcher_for(dictionaries.npcs).find_in_order(text):
            if name.lower() in found_names:
                continue
            found_names.add(name.lower())

            context = analysis.sentences_mentioning(name)
            npcs.append(
                NPC(
                    title=name,
                    role=dictionaries.known_role(name) or role_from_context(context, dictionaries),
                    source_sessions=source_sessions(session_number),
                )
            )

        for mention in analysis.people:
            name = clean_person_name(mention)
            if not self.is_high_confidence(name, text, found_names, dictionaries):
                continue
            found_names.add(name.lower())

            context = analysis.sentences_mentioning(name)
            npcs.append(
                NPC(
                    title=name,
                    role=role_from_context(context, dictionaries),
                    source_sessions=source_sessions(session_number),
                )
            )

        return npcs

    def is_high_confidence(
        self,
        name: str,
        text: str,
        found_names: set[str],
        dictionaries: TermDictionaries,
    ) -> bool:
        """Check whether a discovered name is likely a real NPC."""
        if not self.config.npc_min_length <= len(name) <= self.config.npc_max_length:
            return False
        if not PROPER_NAME.match(name):
            return False
        if dictionaries.is_common_word(name) or self._is_likely_not_a_person(name, dictionaries):
            return False
        if name not in text:
            return False

        name_lower = name.lower()
        if name_lower in found_names:
            return False
        # "Volothamp Geddarn" next to a known "Volothamp Geddarm"
        return not any(
            fuzz.ratio(name_lower, found) >= self.config.discovery_similarity_threshold
            for found in found_names
        )

    def _is_likely_not_a_person(self, name: str, dictionaries: TermDictionaries) -> bool:
        return (
            name in dictionaries.non_person_words
            or "&" in name
            or ":" in name
            or "detailed" in name.lower()
        )
