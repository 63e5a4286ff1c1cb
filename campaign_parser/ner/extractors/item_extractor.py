"""Item extraction from weapon, armor and potion mentions."""

import re
from typing import Optional

from campaign_parser.entities.schema import EntityKind, Item, ItemType
from campaign_parser.ner.config import ExtractionConfig, default_config
from campaign_parser.ner.extractors.base import source_sessions
from campaign_parser.ner.gazetteers.dictionaries import TermDictionaries
from campaign_parser.ner.models import TextAnalysis

# Run of words and spaces directly before a match
PRECEDING_WORDS = re.compile(r"[A-Za-z' \t-]*$")
LOOKBEHIND_CHARS = 80


def item_type_from_name(item_name: str, dictionaries: TermDictionaries) -> Optional[ItemType]:
    """First item type whose keyword appears in the item's own name."""
    name_lower = item_name.lower()
    for mapping in dictionaries.item_types:
        if mapping.keyword in name_lower:
            return mapping.type
    return None


class ItemExtractor:
    """Extract item candidates.

    An item is an anchor noun ("sword", "shield", "potion") plus up to
    ``item_max_modifiers`` descriptive words right before it, e.g.
    "flaming sword" from "drew his flaming sword".
    """

    kind = EntityKind.ITEM

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or default_config

    def extract(
        self,
        text: str,
        analysis: TextAnalysis,
        dictionaries: TermDictionaries,
        session_number: Optional[int] = None,
    ) -> list[Item]:
        items: list[Item] = []
        found_items: set[str] = set()

        for keywords in dictionaries.item_keywords:
            for title in self._find_mentions(text, keywords, dictionaries):
                if len(title) < self.config.item_min_length or title.lower() in found_items:
                    continue
                found_items.add(title.lower())

                items.append(
                    Item(
                        title=title,
                        type=item_type_from_name(title, dictionaries),
                        source_sessions=source_sessions(session_number),
                    )
                )

        return items

    def _find_mentions(
        self,
        text: str,
        keywords: tuple[str, ...],
        dictionaries: TermDictionaries,
    ) -> list[str]:
        if not keywords:
            return []

        pattern = re.compile(
            r"\b(?:" + "|".join(re.escape(k) for k in keywords) + r")\b",
            re.IGNORECASE,
        )

        mentions = []
        for match in pattern.finditer(text):
            window = text[max(0, match.start() - LOOKBEHIND_CHARS) : match.start()]
            words = PRECEDING_WORDS.search(window).group(0).split()

            modifiers: list[str] = []
            for word in reversed(words):
                if len(modifiers) >= self.config.item_max_modifiers:
                    break
                if not word[0].isalpha():
                    break
                if word.lower() in dictionaries.item_stop_words or dictionaries.is_common_word(word):
                    break
                modifiers.insert(0, word)

            mentions.append(" ".join([*modifiers, match.group(0)]))

        return mentions
