"""Quest extraction from action-verb patterns."""

import re
from typing import Optional

from campaign_parser.entities.schema import EntityKind, Quest
from campaign_parser.ner.config import ExtractionConfig, default_config
from campaign_parser.ner.extractors.base import source_sessions
from campaign_parser.ner.gazetteers.dictionaries import TermDictionaries
from campaign_parser.ner.models import TextAnalysis

PROPER_NOUN = r"[A-Z][a-z]+(?: [A-Z][a-z]+)*"
MISSION_PATTERN = re.compile(rf"\b(?i:mission) to (?:[a-z]+ )?{PROPER_NOUN}")


class QuestExtractor:
    """Extract quest candidates such as "rescue Floon" or "mission to find Volo".

    Every quest starts out active. Titles are taken verbatim from the text
    and are not deduplicated.
    """

    kind = EntityKind.QUEST

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or default_config

    def extract(
        self,
        text: str,
        analysis: TextAnalysis,
        dictionaries: TermDictionaries,
        session_number: Optional[int] = None,
    ) -> list[Quest]:
        candidates: list[str] = []

        if dictionaries.quest_verbs:
            verbs = "|".join(re.escape(v) for v in dictionaries.quest_verbs)
            verb_pattern = re.compile(rf"\b(?i:{verbs}) {PROPER_NOUN}")
            candidates.extend(m.group(0) for m in verb_pattern.finditer(text))
        candidates.extend(m.group(0) for m in MISSION_PATTERN.finditer(text))

        return [
            Quest(
                title=title,
                status="active",
                source_sessions=source_sessions(session_number),
            )
            for title in candidates
            if len(title) >= self.config.quest_min_length
        ]
