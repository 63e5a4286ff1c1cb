"""Extraction-specific configuration."""

from pydantic import BaseModel

from campaign_parser.core.config import settings


class ExtractionConfig(BaseModel):
    """Tuning knobs for the heuristic extractors.

    The discovery gates are hand-tuned for session notes; adjust them per
    campaign rather than treating them as fixed.
    """

    # SpaCy
    spacy_model: str = settings.spacy_model
    use_spacy: bool = True

    # Discovered NPC names
    npc_min_length: int = 3
    npc_max_length: int = 25
    discovery_similarity_threshold: int = 90  # rapidfuzz ratio (0-100)

    # Discovered locations, items, quests
    location_min_length: int = 3
    item_min_length: int = 3
    item_max_modifiers: int = 2  # Words kept before an item keyword
    quest_min_length: int = 6

    # Session context
    synopsis_max_chars: int = 500
    synopsis_fallback_lines: int = 10  # Lines read when no heading follows


# Default configuration
default_config = ExtractionConfig()
