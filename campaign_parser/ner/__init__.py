"""Heuristic entity extraction and resolution for campaign notes."""

from campaign_parser.ner.config import ExtractionConfig, default_config
from campaign_parser.ner.errors import (
    CampaignParserError,
    DictionaryLoadError,
    InsufficientEntitiesError,
    MergeError,
)
from campaign_parser.ner.models import (
    DocumentContent,
    ExtractionResult,
    Heading,
    TextAnalysis,
)
from campaign_parser.ner.pipeline import (
    EntityExtractionPipeline,
    assign_ids,
    extract,
    get_default_pipeline,
)
from campaign_parser.ner.resolution import (
    MergeResult,
    MergeSession,
    MergeState,
    apply_merge,
    apply_merge_to_entities,
    begin_merge,
    find_duplicate_groups,
)

__all__ = [
    # Config
    "ExtractionConfig",
    "default_config",
    # Errors
    "CampaignParserError",
    "DictionaryLoadError",
    "InsufficientEntitiesError",
    "MergeError",
    # Models
    "DocumentContent",
    "ExtractionResult",
    "Heading",
    "TextAnalysis",
    # Pipeline
    "EntityExtractionPipeline",
    "assign_ids",
    "extract",
    "get_default_pipeline",
    # Resolution
    "MergeResult",
    "MergeSession",
    "MergeState",
    "apply_merge",
    "apply_merge_to_entities",
    "begin_merge",
    "find_duplicate_groups",
]
