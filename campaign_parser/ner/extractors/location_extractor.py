"""Location extraction from known places and detected place mentions."""

from typing import Optional

from campaign_parser.entities.schema import EntityKind, Location, LocationType
from campaign_parser.ner.config import ExtractionConfig, default_config
from campaign_parser.ner.extractors.base import keyword_pattern, source_sessions
from campaign_parser.ner.gazetteers.dictionaries import TermDictionaries
from campaign_parser.ner.gazetteers.matcher import matcher_for
from campaign_parser.ner.models import TextAnalysis


def location_type_from_context(
    context: str, dictionaries: TermDictionaries
) -> Optional[LocationType]:
    """First location type whose keyword appears in the context."""
    context_lower = context.lower()
    for mapping in dictionaries.location_types:
        if keyword_pattern(mapping.keyword).search(context_lower):
            return mapping.type
    return None


class LocationExtractor:
    """Extract location candidates."""

    kind = EntityKind.LOCATION

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or default_config

    def extract(
        self,
        text: str,
        analysis: TextAnalysis,
        dictionaries: TermDictionaries,
        session_number: Optional[int] = None,
    ) -> list[Location]:
        locations: list[Location] = []
        found_locations: set[str] = set()

        known = set(dictionaries.locations)
        known_present = matcher_for(dictionaries.locations).find_present(text)

        # Known locations first, then discovered places, first occurrence wins
        candidates = dict.fromkeys(
            [
                *dictionaries.locations,
                *(p for p in analysis.places if self.could_be_location(p, dictionaries)),
            ]
        )

        for name in candidates:
            present = name in known_present if name in known else name in text
            if not present or name.lower() in found_locations:
                continue
            found_locations.add(name.lower())

            context = analysis.sentences_mentioning(name)
            locations.append(
                Location(
                    title=name,
                    type=location_type_from_context(context, dictionaries),
                    source_sessions=source_sessions(session_number),
                )
            )

        return locations

    def could_be_location(self, name: str, dictionaries: TermDictionaries) -> bool:
        return (
            len(name) >= self.config.location_min_length
            and name[:1].isupper()
            and not dictionaries.is_common_word(name)
        )
